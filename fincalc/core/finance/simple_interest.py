# fincalc/core/finance/simple_interest.py
"""
Simple interest solver.

Model
-----
    I = C · i · n
    M = C + I

Any one of C, i, n, I, M can be solved from the others. When both I and M
could serve, the I-based formula is used (I is checked first), except when
solving for I itself, where M − C is preferred over C · i · n.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from fincalc.core.errors import calc_error_guard
from fincalc.schemas.models import FinancialInputSet, InterestModel, SolveResult, Variable

from .checks import check_supplied, divide, need, need_one_of
from .derivation import Branch, make_result
from .formatting import fmt_money, fmt_pct, fmt_years

logger = logging.getLogger(__name__)

C, RATE, TIME, INTEREST, AMOUNT = (
    Variable.CAPITAL,
    Variable.RATE,
    Variable.TIME,
    Variable.INTEREST,
    Variable.AMOUNT,
)

FORMULAS: dict[Variable, tuple[str, str]] = {
    C: ("C = I / (i × n)", "C = M / (1 + i × n)"),
    RATE: ("i = I / (C × n)", "i = (M − C) / (C × n)"),
    TIME: ("n = I / (C × i)", "n = (M − C) / (C × i)"),
    INTEREST: ("I = M − C", "I = C × i × n"),
    AMOUNT: ("M = C + I", "M = C × (1 + i × n)"),
}


def _capital(k: FinancialInputSet) -> Branch:
    i = need(k, RATE)
    n = need(k, TIME)
    if need_one_of(k, INTEREST, AMOUNT, C) is INTEREST:
        interest = need(k, INTEREST)
        return Branch(
            divide(interest, i * n, "i × n"),
            FORMULAS[C][0],
            f"C = {fmt_money(interest)} / ({fmt_pct(i)} × {fmt_years(n)})",
            ("i", "n", "I"),
        )
    amount = need(k, AMOUNT)
    return Branch(
        divide(amount, 1 + i * n, "1 + i × n"),
        FORMULAS[C][1],
        f"C = {fmt_money(amount)} / (1 + {fmt_pct(i)} × {fmt_years(n)})",
        ("i", "n", "M"),
    )


def _rate(k: FinancialInputSet) -> Branch:
    capital = need(k, C)
    n = need(k, TIME)
    if need_one_of(k, INTEREST, AMOUNT, RATE) is INTEREST:
        interest = need(k, INTEREST)
        return Branch(
            divide(interest, capital * n, "C × n"),
            FORMULAS[RATE][0],
            f"i = {fmt_money(interest)} / ({fmt_money(capital)} × {fmt_years(n)})",
            ("C", "n", "I"),
        )
    amount = need(k, AMOUNT)
    return Branch(
        divide(amount - capital, capital * n, "C × n"),
        FORMULAS[RATE][1],
        f"i = ({fmt_money(amount)} − {fmt_money(capital)}) / ({fmt_money(capital)} × {fmt_years(n)})",
        ("C", "n", "M"),
    )


def _time(k: FinancialInputSet) -> Branch:
    capital = need(k, C)
    i = need(k, RATE)
    if need_one_of(k, INTEREST, AMOUNT, TIME) is INTEREST:
        interest = need(k, INTEREST)
        return Branch(
            divide(interest, capital * i, "C × i"),
            FORMULAS[TIME][0],
            f"n = {fmt_money(interest)} / ({fmt_money(capital)} × {fmt_pct(i)})",
            ("C", "i", "I"),
        )
    amount = need(k, AMOUNT)
    return Branch(
        divide(amount - capital, capital * i, "C × i"),
        FORMULAS[TIME][1],
        f"n = ({fmt_money(amount)} − {fmt_money(capital)}) / ({fmt_money(capital)} × {fmt_pct(i)})",
        ("C", "i", "M"),
    )


def _interest(k: FinancialInputSet) -> Branch:
    capital = need(k, C)
    if k.has(AMOUNT):
        amount = need(k, AMOUNT)
        return Branch(
            amount - capital,
            FORMULAS[INTEREST][0],
            f"I = {fmt_money(amount)} − {fmt_money(capital)}",
            ("C", "M"),
        )
    i = need(k, RATE)
    n = need(k, TIME)
    return Branch(
        capital * i * n,
        FORMULAS[INTEREST][1],
        f"I = {fmt_money(capital)} × {fmt_pct(i)} × {fmt_years(n)}",
        ("C", "i", "n"),
    )


def _amount(k: FinancialInputSet) -> Branch:
    capital = need(k, C)
    if k.has(INTEREST):
        interest = need(k, INTEREST)
        return Branch(
            capital + interest,
            FORMULAS[AMOUNT][0],
            f"M = {fmt_money(capital)} + {fmt_money(interest)}",
            ("C", "I"),
        )
    i = need(k, RATE)
    n = need(k, TIME)
    return Branch(
        capital * (1 + i * n),
        FORMULAS[AMOUNT][1],
        f"M = {fmt_money(capital)} × (1 + {fmt_pct(i)} × {fmt_years(n)})",
        ("C", "i", "n"),
    )


SOLVERS: dict[Variable, Callable[[FinancialInputSet], Branch]] = {
    C: _capital,
    RATE: _rate,
    TIME: _time,
    INTEREST: _interest,
    AMOUNT: _amount,
}


def required_knowns(unknown: Variable, knowns: FinancialInputSet) -> tuple[Variable, ...]:
    """Known set the solver will use given which values are currently supplied."""
    if unknown is INTEREST:
        return (C, AMOUNT) if knowns.has(AMOUNT) else (C, RATE, TIME)
    if unknown is AMOUNT:
        return (C, INTEREST) if knowns.has(INTEREST) else (C, RATE, TIME)
    others = tuple(v for v in (C, RATE, TIME) if v is not unknown)
    return (*others, INTEREST) if knowns.has(INTEREST) else (*others, AMOUNT)


def solve_simple(unknown: Variable, knowns: FinancialInputSet) -> SolveResult:
    """
    Solve the simple interest model for one unknown.

    Raises:
        InvalidInputError: a required known is missing, negative or non-finite.
        DomainError: a divisor (i·n, C·n, C·i, 1+i·n) is zero.
    """
    k = knowns.without(unknown)
    check_supplied(k, unknown)
    with calc_error_guard():
        branch = SOLVERS[unknown](k)
    logger.debug("simple: solved %s via %r", unknown.value, branch.formula)
    return make_result(InterestModel.SIMPLE, unknown, branch, k)
