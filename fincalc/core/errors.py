# fincalc/core/errors.py
"""
Typed errors for the financial solvers and the amortization builder.

Exports
-------
- FinancialCalcError, InvalidInputError, DomainError
- CALC_ERRORS
- classify_calc_error(exc)
- calc_error_guard()
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

# =========================
# Exception types
# =========================


class FinancialCalcError(ValueError):
    """Base class for calculation failures surfaced to the caller."""


class InvalidInputError(FinancialCalcError):
    """A required input is missing, negative, non-finite or not an integer where one is required."""


class DomainError(FinancialCalcError):
    """The operation is mathematically undefined for otherwise valid inputs (log of 1, zero divisor)."""


# Selector tuple for grouped exception handling
CALC_ERRORS = (
    InvalidInputError,
    DomainError,
)

# =========================
# Classification helpers
# =========================


def classify_calc_error(exc: Exception) -> FinancialCalcError:
    """
    Map arithmetic exceptions escaping a formula to a typed FinancialCalcError.

    Heuristics:
      - Any FinancialCalcError subclass → passed through
      - ZeroDivisionError → DomainError
      - OverflowError → DomainError
      - ValueError("math domain error") → DomainError
      - Fallback → FinancialCalcError
    """
    if isinstance(exc, FinancialCalcError):
        return exc

    if isinstance(exc, ZeroDivisionError):
        return DomainError(f"division by zero: {exc}")

    if isinstance(exc, OverflowError):
        return DomainError(f"result out of range: {exc}")

    if isinstance(exc, ValueError) and "math domain" in str(exc).lower():
        return DomainError(f"undefined operation: {exc}")

    return FinancialCalcError(f"{type(exc).__name__}: {exc}")


@contextmanager
def calc_error_guard() -> Iterator[None]:
    """Context manager to normalize arithmetic exceptions raised inside formulas."""
    try:
        yield
    except FinancialCalcError:
        raise
    except (ArithmeticError, ValueError) as exc:
        raise classify_calc_error(exc) from exc


__all__ = [
    "FinancialCalcError",
    "InvalidInputError",
    "DomainError",
    "CALC_ERRORS",
    "classify_calc_error",
    "calc_error_guard",
]
