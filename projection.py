import math
from typing import List, Sequence, Tuple

from pydantic import BaseModel, Field, field_validator

from config import finite_or_zero
from constants import (
    DEFAULT_MAX_YEARS,
    MAX_WITHDRAWAL_PCT,
    MIN_WITHDRAWAL_PCT,
    MONTHS_PER_YEAR,
    WITHDRAWAL_RATE_FLOOR,
)


class ProjectionInput(BaseModel):
    """Sanitized inputs for a target-seeking projection."""

    principal: float = Field(0.0, ge=0, description="Starting balance.")
    contribution: float = Field(
        0.0, ge=0, description="Amount added once per month, after growth."
    )
    annual_real_return: float = Field(
        0.0, description="Inflation-adjusted annual return as a decimal (0.05 = 5%)."
    )
    target_amount: float = Field(0.0, ge=0)
    max_years: float = Field(DEFAULT_MAX_YEARS, gt=0)

    model_config = {"frozen": True}

    @field_validator(
        "principal", "contribution", "target_amount", mode="before"
    )
    @classmethod
    def non_negative_amount(cls, v):
        return max(finite_or_zero(v), 0.0)

    @field_validator("annual_real_return", mode="before")
    @classmethod
    def finite_rate(cls, v):
        return finite_or_zero(v)

    @field_validator("max_years", mode="before")
    @classmethod
    def finite_horizon(cls, v):
        return finite_or_zero(v) or DEFAULT_MAX_YEARS


class ProjectionResult(BaseModel):
    months: int
    years: int
    remainder_months: int
    final_balance: float
    target_reached: bool

    model_config = {"frozen": True}


class ContributionTrack(BaseModel):
    """One account growing at its own rate with its own contribution schedule."""

    balance: float = 0.0
    contribution_amount: float = 0.0
    contribution_periods_per_year: int = Field(MONTHS_PER_YEAR, gt=0)
    annual_rate: float = 0.0

    model_config = {"frozen": True}

    @property
    def monthly_contribution(self) -> float:
        return self.contribution_amount * (
            self.contribution_periods_per_year / MONTHS_PER_YEAR
        )


class TrackProjectionResult(ProjectionResult):
    track_balances: Tuple[float, ...]
    # Combined balance at month 0, every 12th month and the final month.
    yearly_trajectory: Tuple[float, ...] = ()


class YearlyBalance(BaseModel):
    year: int
    balance: float
    contributions: float

    model_config = {"frozen": True}


class FutureValueResult(BaseModel):
    final_balance: float
    total_contributions: float
    total_growth: float
    periods: int
    schedule: Tuple[YearlyBalance, ...]

    model_config = {"frozen": True}


def _max_months(max_years: float) -> float:
    scaled = max_years * MONTHS_PER_YEAR
    if not math.isfinite(scaled):
        # NaN compares false and stops the loop at once; callers sanitize first.
        return scaled
    # Half-up rounding; the built-in round() would send 0.5 to the even neighbour.
    return math.floor(scaled + 0.5)


def real_return(nominal_percent: float, inflation_percent: float) -> float:
    """
    Converts a nominal annual return and an inflation rate (both in percent)
    into a real annual return as a decimal, using the exact Fisher relation
    (1 + r) / (1 + i) - 1 rather than the additive r - i approximation.

    Inflation of exactly -100% is not guarded: the result is infinite (NaN
    when the nominal return is also -100%) and nothing is raised.
    """
    r = nominal_percent / 100
    i = inflation_percent / 100
    if 1 + i == 0:
        return math.nan if 1 + r == 0 else math.copysign(math.inf, 1 + r)
    return (1 + r) / (1 + i) - 1


def target_nest_egg(annual_spend: float, withdrawal_percent: float) -> float:
    """
    Balance needed to fund `annual_spend` under a fixed withdrawal-rate rule.

    At 4% this is the familiar 25x-annual-spend target.
    """
    pct = finite_or_zero(withdrawal_percent)
    pct = min(max(pct, MIN_WITHDRAWAL_PCT), MAX_WITHDRAWAL_PCT)
    return finite_or_zero(annual_spend) / max(pct / 100, WITHDRAWAL_RATE_FLOOR)


def project_tracks(
    tracks: Sequence[ContributionTrack],
    target_amount: float,
    max_years: float = DEFAULT_MAX_YEARS,
    record_trajectory: bool = False,
) -> TrackProjectionResult:
    """
    Steps every track forward one month at a time until their combined balance
    reaches `target_amount` or the horizon of `max_years` runs out.

    Each month a track first grows by annual_rate / 12 and then receives its
    monthly share of contributions, so new money earns nothing in the month it
    arrives. Balances are never clamped; a negative rate can drive them below
    zero.

    Args:
        tracks: Accounts to project; their balances are summed each month.
        target_amount: Combined balance to reach (inclusive).
        max_years: Horizon cap, converted to round(max_years * 12) months.
        record_trajectory: Also collect the combined balance at each year end.
    """
    balances: List[float] = [t.balance for t in tracks]
    monthly_rates = [t.annual_rate / MONTHS_PER_YEAR for t in tracks]
    monthly_contribs = [t.monthly_contribution for t in tracks]
    max_months = _max_months(max_years)

    months = 0
    balance = sum(balances)
    trajectory: List[float] = [balance] if record_trajectory else []
    while balance < target_amount and months < max_months:
        for idx in range(len(balances)):
            balances[idx] *= 1 + monthly_rates[idx]
            balances[idx] += monthly_contribs[idx]
        months += 1
        balance = sum(balances)
        if record_trajectory and months % MONTHS_PER_YEAR == 0:
            trajectory.append(balance)

    if record_trajectory and months % MONTHS_PER_YEAR != 0:
        trajectory.append(balance)

    return TrackProjectionResult(
        months=months,
        years=months // MONTHS_PER_YEAR,
        remainder_months=months % MONTHS_PER_YEAR,
        final_balance=balance,
        target_reached=balance >= target_amount,
        track_balances=tuple(balances),
        yearly_trajectory=tuple(trajectory),
    )


def project(
    principal: float,
    contribution: float,
    annual_real_return: float,
    target_amount: float,
    max_years: float = DEFAULT_MAX_YEARS,
) -> ProjectionResult:
    """
    Months of monthly compounding needed for `principal` plus a fixed monthly
    `contribution` to reach `target_amount`.

    Inputs are used as given. A NaN target stops the loop immediately and is
    reported as not reached.
    """
    track = ContributionTrack(
        balance=principal,
        contribution_amount=contribution,
        contribution_periods_per_year=MONTHS_PER_YEAR,
        annual_rate=annual_real_return,
    )
    result = project_tracks([track], target_amount, max_years)
    return ProjectionResult(
        months=result.months,
        years=result.years,
        remainder_months=result.remainder_months,
        final_balance=result.final_balance,
        target_reached=result.target_reached,
    )


def project_input(inputs: ProjectionInput) -> ProjectionResult:
    """
    Entry point for library callers holding raw, unsanitized values.

    The CLI and state.derive sanitize through config.Config instead; both
    paths share config.finite_or_zero.
    """
    return project(
        inputs.principal,
        inputs.contribution,
        inputs.annual_real_return,
        inputs.target_amount,
        inputs.max_years,
    )


def future_value(
    principal: float,
    contribution: float,
    annual_rate: float,
    years: int,
    compounding_per_year: int = MONTHS_PER_YEAR,
    contributions_per_year: int = MONTHS_PER_YEAR,
) -> FutureValueResult:
    """
    Fixed-horizon projection with no target.

    Runs `years * compounding_per_year` periods. Each period grows the balance
    by annual_rate / compounding_per_year and then adds that period's share of
    the yearly contributions (contribution * contributions_per_year spread
    evenly over the compounding periods).

    Returns:
        A FutureValueResult with the end-of-year schedule, year 0 being the
        starting principal.
    """
    period_rate = annual_rate / compounding_per_year
    period_contribution = contribution * (contributions_per_year / compounding_per_year)
    total_periods = years * compounding_per_year

    balance = principal
    total_contributions = 0.0
    schedule: List[YearlyBalance] = [
        YearlyBalance(year=0, balance=principal, contributions=0.0)
    ]

    for period in range(1, total_periods + 1):
        balance *= 1 + period_rate
        balance += period_contribution
        total_contributions += period_contribution
        if period % compounding_per_year == 0:
            schedule.append(
                YearlyBalance(
                    year=period // compounding_per_year,
                    balance=balance,
                    contributions=total_contributions,
                )
            )

    return FutureValueResult(
        final_balance=balance,
        total_contributions=total_contributions,
        total_growth=balance - principal - total_contributions,
        periods=total_periods,
        schedule=tuple(schedule),
    )
