import datetime as _dt
import math

from constants import CURRENCY_SYMBOLS, DEFAULT_MAX_YEARS
from projection import ProjectionResult


def currency_format(value: float, currency: str = "AUD") -> str:
    """
    Formats an amount for display, e.g. 'A$1,234.50'.

    Unknown currency codes fall back to a plain number with up to two
    fraction digits. Non-finite values render as '-'.
    """
    if not math.isfinite(value):
        return "-"
    symbol = CURRENCY_SYMBOLS.get(currency)
    if symbol is None:
        return _plain_number(value, 2)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def _plain_number(value: float, max_digits: int) -> str:
    text = f"{value:,.{max_digits}f}"
    if max_digits > 0:
        text = text.rstrip("0").rstrip(".")
    return text


def percent(value: float, digits: int = 1) -> str:
    """Decimal fraction as a percentage string: 0.0439 -> '4.4%'."""
    if not math.isfinite(value):
        return "-"
    return _plain_number(value * 100, digits) + "%"


def month_year(date: _dt.date) -> str:
    return date.strftime("%B %Y")


def short_duration(result: ProjectionResult, max_years: float = DEFAULT_MAX_YEARS) -> str:
    if result.target_reached:
        return f"{result.years}y {result.remainder_months}m"
    return f">{max_years:g}y"


def timeline_statement(
    result: ProjectionResult,
    eta: _dt.date,
    max_years: float = DEFAULT_MAX_YEARS,
) -> str:
    """Human-readable outcome of a target projection."""
    if not result.target_reached:
        return f"more than {max_years:g} years"
    year_word = "year" if result.years == 1 else "years"
    month_word = "month" if result.remainder_months == 1 else "months"
    return (
        f"{result.years} {year_word} {result.remainder_months} {month_word}, "
        f"reaching on approximately {month_year(eta)}"
    )
