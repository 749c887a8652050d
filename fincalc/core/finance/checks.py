# fincalc/core/finance/checks.py
"""
Input guards shared by the solvers and the amortization builder.

Every guard either returns a clean float/int or raises a typed error from
fincalc.core.errors. Nothing here returns NaN or Infinity.
"""

from __future__ import annotations

import math
from numbers import Real

from fincalc.core.errors import DomainError, InvalidInputError
from fincalc.schemas.models import FinancialInputSet, Variable

_INT_TOL = 1e-9


def _describe(var: Variable) -> str:
    return f"{var.label} ({var.value})"


def check_supplied(knowns: FinancialInputSet, unknown: Variable) -> None:
    """Every supplied value other than the unknown must be finite and non-negative."""
    for key, value in knowns.known().items():
        if key == unknown.value:
            continue
        if not math.isfinite(value):
            raise InvalidInputError(f"{key} must be a finite number, got {value!r}")
        if value < 0:
            raise InvalidInputError(f"{key} must not be negative, got {value!r}")


def need(knowns: FinancialInputSet, var: Variable, *, positive: bool = False) -> float:
    """Return a required known value or raise InvalidInputError."""
    value = knowns.get(var)
    if value is None:
        raise InvalidInputError(f"{_describe(var)} is required")
    if not math.isfinite(value):
        raise InvalidInputError(f"{_describe(var)} must be a finite number, got {value!r}")
    if value < 0:
        raise InvalidInputError(f"{_describe(var)} must not be negative, got {value!r}")
    if positive and value == 0:
        raise InvalidInputError(f"{_describe(var)} must be greater than zero")
    return float(value)


def need_one_of(knowns: FinancialInputSet, first: Variable, second: Variable, target: Variable) -> Variable:
    """Pick which of two alternative knowns is present, first one wins."""
    if knowns.has(first):
        return first
    if knowns.has(second):
        return second
    raise InvalidInputError(f"solving for {_describe(target)} requires {_describe(first)} or {_describe(second)}")


def need_positive_int(value: float | int | None, name: str) -> int:
    """
    Validate a count that must be a positive integer (compounding frequency, payments per year).
    Integral floats such as 12.0 are accepted; 12.5, 0, negatives, NaN and booleans are not.
    """
    if value is None:
        raise InvalidInputError(f"{name} is required")
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInputError(f"{name} must be a positive integer, got {value!r}")
    if not math.isfinite(value) or value <= 0:
        raise InvalidInputError(f"{name} must be a positive integer, got {value!r}")
    nearest = round(value)
    if abs(value - nearest) > _INT_TOL:
        raise InvalidInputError(f"{name} must be a whole number, got {value!r}")
    return int(nearest)


def divide(numerator: float, denominator: float, what: str) -> float:
    """Division that refuses a zero denominator instead of producing Infinity."""
    if denominator == 0:
        raise DomainError(f"cannot divide by zero ({what} = 0)")
    return numerator / denominator
