# fincalc/core/finance/compound_interest.py
"""
Compound interest solver.

Model
-----
    M = C · (1 + i/m)^(m·n)
    I = M − C

m is the number of capitalization events per year and must be a positive
integer. Rates are decimal fractions here; percentage entry is converted by
the input layer (fincalc.inputs) before reaching the solver.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable

from fincalc.core.errors import DomainError, calc_error_guard
from fincalc.schemas.models import FinancialInputSet, InterestModel, SolveResult, Variable

from .checks import check_supplied, divide, need, need_positive_int
from .derivation import Branch, make_result
from .formatting import fmt_money, fmt_number_trim, fmt_plain

logger = logging.getLogger(__name__)

C, RATE, TIME, INTEREST, AMOUNT = (
    Variable.CAPITAL,
    Variable.RATE,
    Variable.TIME,
    Variable.INTEREST,
    Variable.AMOUNT,
)

FORMULAS: dict[Variable, tuple[str, ...]] = {
    AMOUNT: ("M = C × (1 + i/m)^(m × n)",),
    C: ("C = M / (1 + i/m)^(m × n)",),
    RATE: ("i = m × [(M/C)^(1/(m × n)) − 1]",),
    TIME: ("n = ln(M/C) / [m × ln(1 + i/m)]",),
    INTEREST: ("I = M − C", "I = C × [(1 + i/m)^(m × n) − 1]"),
}


def frequency(k: FinancialInputSet) -> int:
    """Validated capitalization frequency m."""
    return need_positive_int(k.m, "capitalization frequency (m)")


def growth_factor(i: float, n: float, m: int) -> float:
    """(1 + i/m)^(m·n)"""
    return (1 + i / m) ** (m * n)


def _exp(i: float, n: float, m: int) -> str:
    return f"(1 + {fmt_plain(i)}/{m})^({m} × {fmt_number_trim(n)})"


def _amount(k: FinancialInputSet) -> Branch:
    capital = need(k, C)
    i = need(k, RATE)
    n = need(k, TIME)
    m = frequency(k)
    return Branch(
        capital * growth_factor(i, n, m),
        FORMULAS[AMOUNT][0],
        f"M = {fmt_money(capital)} × {_exp(i, n, m)}",
        ("C", "i", "n", "m"),
    )


def _capital(k: FinancialInputSet) -> Branch:
    amount = need(k, AMOUNT)
    i = need(k, RATE)
    n = need(k, TIME)
    m = frequency(k)
    return Branch(
        divide(amount, growth_factor(i, n, m), "(1 + i/m)^(m × n)"),
        FORMULAS[C][0],
        f"C = {fmt_money(amount)} / {_exp(i, n, m)}",
        ("M", "i", "n", "m"),
    )


def _rate(k: FinancialInputSet) -> Branch:
    amount = need(k, AMOUNT, positive=True)
    capital = need(k, C, positive=True)
    n = need(k, TIME, positive=True)
    m = frequency(k)
    base = amount / capital
    return Branch(
        m * (base ** (1 / (m * n)) - 1),
        FORMULAS[RATE][0],
        f"i = {m} × [({fmt_plain(amount)}/{fmt_plain(capital)})^(1/({m} × {fmt_number_trim(n)})) − 1]",
        ("M", "C", "n", "m"),
    )


def _time(k: FinancialInputSet) -> Branch:
    amount = need(k, AMOUNT)
    capital = need(k, C, positive=True)
    i = need(k, RATE)
    m = frequency(k)
    base = amount / capital
    if base <= 0:
        raise DomainError("ln(M/C) is undefined when M/C <= 0")
    if base == 1:
        raise DomainError("n is undefined when M equals C (ln(M/C) = 0)")
    step = 1 + i / m
    if step == 1:
        raise DomainError("n is undefined when the periodic rate is zero (ln(1 + i/m) = 0)")
    return Branch(
        math.log(base) / (m * math.log(step)),
        FORMULAS[TIME][0],
        f"n = ln({fmt_plain(amount)}/{fmt_plain(capital)}) / [{m} × ln(1 + {fmt_plain(i)}/{m})]",
        ("M", "C", "i", "m"),
    )


def _interest(k: FinancialInputSet) -> Branch:
    if k.has(AMOUNT) and k.has(C):
        amount = need(k, AMOUNT)
        capital = need(k, C)
        return Branch(
            amount - capital,
            FORMULAS[INTEREST][0],
            f"I = {fmt_money(amount)} − {fmt_money(capital)}",
            ("M", "C"),
        )
    capital = need(k, C)
    i = need(k, RATE)
    n = need(k, TIME)
    m = frequency(k)
    return Branch(
        capital * (growth_factor(i, n, m) - 1),
        FORMULAS[INTEREST][1],
        f"I = {fmt_money(capital)} × [{_exp(i, n, m)} − 1]",
        ("C", "i", "n", "m"),
    )


SOLVERS: dict[Variable, Callable[[FinancialInputSet], Branch]] = {
    AMOUNT: _amount,
    C: _capital,
    RATE: _rate,
    TIME: _time,
    INTEREST: _interest,
}


def required_knowns(unknown: Variable, knowns: FinancialInputSet) -> tuple[Variable, ...]:
    """Known set (m implied) the solver will use given which values are currently supplied."""
    if unknown is AMOUNT:
        return (C, RATE, TIME)
    if unknown is C:
        return (AMOUNT, RATE, TIME)
    if unknown is RATE:
        return (AMOUNT, C, TIME)
    if unknown is TIME:
        return (AMOUNT, C, RATE)
    if knowns.has(AMOUNT) and knowns.has(C):
        return (AMOUNT, C)
    return (C, RATE, TIME)


def solve_compound(unknown: Variable, knowns: FinancialInputSet) -> SolveResult:
    """
    Solve the compound interest model for one unknown.

    Raises:
        InvalidInputError: missing/negative/non-finite knowns, m not a positive integer,
            or C, M, n not strictly positive where the formula requires it.
        DomainError: ln(M/C) or ln(1 + i/m) undefined or zero, or the power overflows.
    """
    k = knowns.without(unknown)
    check_supplied(k, unknown)
    with calc_error_guard():
        branch = SOLVERS[unknown](k)
    logger.debug("compound: solved %s via %r", unknown.value, branch.formula)
    return make_result(InterestModel.COMPOUND, unknown, branch, k)


__all__ = [
    "FORMULAS",
    "frequency",
    "growth_factor",
    "required_knowns",
    "solve_compound",
]
