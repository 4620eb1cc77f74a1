import datetime as _dt
import math
from typing import Any, List, Optional

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel

from config import Config
from projection import (
    ContributionTrack,
    FutureValueResult,
    TrackProjectionResult,
    future_value,
    project_tracks,
    real_return,
    target_nest_egg,
)


class DerivedOutputs(BaseModel):
    """Everything the calculator shows, recomputed from a Config in one pass."""

    target_nest_egg: float
    real_return: float
    savings_real_return: float
    projection: TrackProjectionResult
    eta: _dt.date
    total_invested: float

    model_config = {"frozen": True}


def with_changes(config: Config, **changes: Any) -> Config:
    """
    Returns a new, re-validated Config with `changes` applied.

    The original is left untouched, and coercion of non-finite inputs runs
    again on the changed fields.
    """
    data = config.model_dump(by_alias=False)
    data.update(changes)
    return Config.model_validate(data)


def build_tracks(config: Config) -> List[ContributionTrack]:
    periods = config.contribution_periods_per_year
    tracks = [
        ContributionTrack(
            balance=config.principal,
            contribution_amount=config.contribution,
            contribution_periods_per_year=periods,
            annual_rate=real_return(config.nominal_return_pct, config.inflation_pct),
        )
    ]
    if config.savings_balance > 0 or config.savings_contribution > 0:
        tracks.append(
            ContributionTrack(
                balance=config.savings_balance,
                contribution_amount=config.savings_contribution,
                contribution_periods_per_year=periods,
                annual_rate=real_return(
                    config.savings_return_pct, config.inflation_pct
                ),
            )
        )
    return tracks


def eta_date(months: int, today: Optional[_dt.date] = None) -> _dt.date:
    """Calendar date `months` months after `today` (default: the current date)."""
    start = today if today is not None else _dt.date.today()
    return start + relativedelta(months=months)


def derive(config: Config, today: Optional[_dt.date] = None) -> DerivedOutputs:
    tracks = build_tracks(config)
    target = target_nest_egg(config.annual_spend, config.withdrawal_pct)
    projection = project_tracks(
        tracks, target, config.max_years, record_trajectory=True
    )

    monthly_contributions = sum(t.monthly_contribution for t in tracks)
    total_invested = (
        sum(t.balance for t in tracks) + monthly_contributions * projection.months
    )

    return DerivedOutputs(
        target_nest_egg=target,
        real_return=tracks[0].annual_rate,
        savings_real_return=real_return(config.savings_return_pct, config.inflation_pct),
        projection=projection,
        eta=eta_date(projection.months, today),
        total_invested=total_invested,
    )


def derive_future_value(config: Config) -> FutureValueResult:
    """Fixed-horizon projection of the invested balance at the nominal return."""
    return future_value(
        principal=config.principal,
        contribution=config.contribution,
        annual_rate=config.nominal_return_pct / 100,
        years=config.horizon_years,
        compounding_per_year=config.compounding_periods_per_year,
        contributions_per_year=config.contribution_periods_per_year,
    )


def in_todays_money(amount: float, inflation_pct: float, years: float) -> float:
    """Deflates a future nominal amount back to today's purchasing power."""
    divisor = (1 + inflation_pct / 100) ** years
    if divisor == 0:
        # -100% inflation: unguarded, like real_return
        return math.nan if amount == 0 else math.copysign(math.inf, amount)
    return amount / divisor
