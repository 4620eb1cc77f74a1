import datetime as _dt

from formatting import (
    currency_format,
    month_year,
    percent,
    short_duration,
    timeline_statement,
)
from projection import ProjectionResult

REACHED = ProjectionResult(
    months=561, years=46, remainder_months=9, final_balance=1_000_350.0, target_reached=True
)
CAPPED = ProjectionResult(
    months=1200, years=100, remainder_months=0, final_balance=12.0, target_reached=False
)


def test_currency_format_known_codes():
    assert currency_format(1234.5, "USD") == "$1,234.50"
    assert currency_format(1234.5, "AUD") == "A$1,234.50"
    assert currency_format(1_000_000, "GBP") == "£1,000,000.00"
    assert currency_format(-5, "EUR") == "-€5.00"


def test_currency_format_unknown_code_falls_back_to_plain_number():
    assert currency_format(1234.5, "JPY") == "1,234.5"
    assert currency_format(1234.0, "XXX") == "1,234"


def test_currency_format_non_finite():
    assert currency_format(float("nan"), "USD") == "-"
    assert currency_format(float("inf"), "USD") == "-"


def test_percent():
    assert percent(1.07 / 1.025 - 1) == "4.4%"
    assert percent(0.5) == "50%"
    assert percent(0.12346, 2) == "12.35%"
    assert percent(0.1, 0) == "10%"
    assert percent(float("nan")) == "-"


def test_month_year():
    assert month_year(_dt.date(2073, 4, 1)) == "April 2073"


def test_short_duration():
    assert short_duration(REACHED) == "46y 9m"
    assert short_duration(CAPPED) == ">100y"
    assert short_duration(CAPPED, max_years=30) == ">30y"


def test_timeline_statement():
    assert (
        timeline_statement(REACHED, _dt.date(2073, 4, 1))
        == "46 years 9 months, reaching on approximately April 2073"
    )
    one = ProjectionResult(
        months=13, years=1, remainder_months=1, final_balance=1.0, target_reached=True
    )
    assert timeline_statement(one, _dt.date(2027, 2, 1)).startswith("1 year 1 month,")


def test_timeline_statement_sentinel_when_not_reached():
    assert timeline_statement(CAPPED, _dt.date(2126, 1, 1)) == "more than 100 years"
    assert timeline_statement(CAPPED, _dt.date(2126, 1, 1), max_years=40.0) == "more than 40 years"
