# fincalc/core/finance/formatting.py
"""Display formatting shared by derivation steps, reports and the history log."""

from __future__ import annotations

import math

from fincalc.schemas.models import Variable

_INT_TOL = 1e-9


def fmt_money(x: float) -> str:
    """
    Format a float as currency with thousands separators.

    Example:
        123456.789 -> $123,456.79
        -2000 -> -$2,000.00
    """
    sign = "-" if x < 0 else ""
    return f"{sign}${abs(x):,.2f}"


def fmt_pct(x: float) -> str:
    """
    Format a decimal fraction as a percentage with two decimals.

    Example:
        0.065 -> 6.50%
    """
    return f"{x * 100:.2f}%"


def fmt_number_trim(x: float, max_decimals: int = 4) -> str:
    """Fixed decimals with trailing zeros removed: 2.5000 -> 2.5, 3.0000 -> 3."""
    if not math.isfinite(x):
        return str(x)
    text = f"{x:.{max_decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def fmt_years(x: float) -> str:
    """Whole years print without decimals; fractional years keep up to 4 places."""
    nearest = round(x)
    text = str(int(nearest)) if abs(x - nearest) < _INT_TOL else fmt_number_trim(x, 4)
    return f"{text} years"


def fmt_plain(x: float) -> str:
    return fmt_number_trim(x, 6)


def format_result(var: Variable | str, value: float | None) -> str:
    """Human form of a solved value: rate as percent, time in years, everything else as money."""
    if value is None:
        return "-"
    v = Variable(var)
    if v is Variable.RATE:
        return fmt_pct(value)
    if v is Variable.TIME:
        return fmt_years(value)
    return fmt_money(value)
