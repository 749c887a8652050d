# fincalc/core/finance/rounding.py

from __future__ import annotations

import math
import sys

from fincalc.schemas.models import TimeUnit, Variable

MONEY_PLACES = 2
RATE_PLACES = 6
TIME_PLACES = 4

DAYS_PER_YEAR = 365.0
MONTHS_PER_YEAR = 12.0

_EPS = sys.float_info.epsilon


def round_half_away(value: float, places: int) -> float:
    """
    Round half away from zero after nudging the magnitude by machine epsilon.

    The nudge counters binary representation error on values such as 1.005,
    which is stored as 1.00499999... and would otherwise round down.

    Example:
        round_half_away(1.005, 2) -> 1.01
        round_half_away(-2.5, 0) -> -3.0
    """
    if not math.isfinite(value):
        return value
    factor = 10.0**places
    scaled = (abs(value) + _EPS) * factor
    return math.copysign(math.floor(scaled + 0.5) / factor, value)


def round_money(x: float) -> float:
    return round_half_away(x, MONEY_PLACES)


def round_rate(x: float) -> float:
    return round_half_away(x, RATE_PLACES)


def round_time(x: float) -> float:
    return round_half_away(x, TIME_PLACES)


def round_for(var: Variable, x: float) -> float:
    """Round a solved value with the precision that belongs to its variable."""
    if var is Variable.RATE:
        return round_rate(x)
    if var is Variable.TIME:
        return round_time(x)
    return round_money(x)


def to_years(value: float, unit: TimeUnit | str = TimeUnit.YEARS) -> float:
    """Convert a duration to years (months / 12, days / 365)."""
    u = TimeUnit(unit)
    if u is TimeUnit.MONTHS:
        return value / MONTHS_PER_YEAR
    if u is TimeUnit.DAYS:
        return value / DAYS_PER_YEAR
    return value


def percent_to_decimal(pct: float) -> float:
    """5 -> 0.05"""
    return pct / 100.0
