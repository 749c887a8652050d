# tests/unit/test_rounding.py
import math

import pytest

from fincalc.core.finance.formatting import fmt_money, fmt_pct, fmt_years, format_result
from fincalc.core.finance.rounding import (
    percent_to_decimal,
    round_for,
    round_half_away,
    round_money,
    round_rate,
    round_time,
    to_years,
)
from fincalc.schemas.models import TimeUnit, Variable


@pytest.mark.parametrize(
    "value,places,expected",
    [(1.005, 2, 1.01), (-1.005, 2, -1.01), (0.125, 2, 0.13), (-2.5, 0, -3.0), (2.5, 0, 3.0), (1.004, 2, 1.0)],
)
def test_round_half_away(value, places, expected):
    assert round_half_away(value, places) == expected


def test_precision_per_variable():
    assert round_money(10.234) == 10.23
    assert round_rate(0.12345678) == 0.123457
    assert round_time(4.99999999) == 5.0
    assert round_for(Variable.RATE, 0.0500000004) == 0.05
    assert round_for(Variable.TIME, 1.23456) == 1.2346
    assert round_for(Variable.AMOUNT, 1.23456) == 1.23


def test_non_finite_passes_through():
    assert math.isnan(round_money(math.nan))
    assert round_money(math.inf) == math.inf


def test_time_units_and_percent():
    assert to_years(18, TimeUnit.MONTHS) == 1.5
    assert to_years(730, "days") == 2.0
    assert to_years(3) == 3
    assert percent_to_decimal(5) == 0.05


def test_display_formats():
    assert fmt_money(1234.5) == "$1,234.50"
    assert fmt_money(-2000) == "-$2,000.00"
    assert fmt_pct(0.065) == "6.50%"
    assert fmt_years(4.0) == "4 years"
    assert fmt_years(2.5) == "2.5 years"
    assert format_result("i", 0.1) == "10.00%"
    assert format_result(Variable.CAPITAL, 1000) == "$1,000.00"
    assert format_result("M", None) == "-"
