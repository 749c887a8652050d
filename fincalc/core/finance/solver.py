# fincalc/core/finance/solver.py
"""
Canonical entry point for the formula solvers.

Every surface (CLI, session, tests) goes through solve() so there is exactly
one implementation per model.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from fincalc.core.errors import InvalidInputError
from fincalc.schemas.models import FinancialInputSet, InterestModel, SolveResult, Variable

from . import compound_interest, simple_interest

_SOLVE: dict[InterestModel, Callable[[Variable, FinancialInputSet], SolveResult]] = {
    InterestModel.SIMPLE: simple_interest.solve_simple,
    InterestModel.COMPOUND: compound_interest.solve_compound,
}

_REQUIRED: dict[InterestModel, Callable[[Variable, FinancialInputSet], tuple[Variable, ...]]] = {
    InterestModel.SIMPLE: simple_interest.required_knowns,
    InterestModel.COMPOUND: compound_interest.required_knowns,
}

def _chain(formulas: tuple[str, ...]) -> str:
    """("I = M − C", "I = C × [...]") -> "I = M − C = C × [...]" """
    head, *rest = formulas
    return " = ".join([head, *(f.split(" = ", 1)[1] for f in rest)])


_PREVIEW: dict[InterestModel, dict[Variable, str]] = {
    InterestModel.SIMPLE: {v: " or ".join(fs) for v, fs in simple_interest.FORMULAS.items()},
    InterestModel.COMPOUND: {v: _chain(fs) for v, fs in compound_interest.FORMULAS.items()},
}


def as_variable(unknown: Variable | str) -> Variable:
    try:
        return Variable(unknown)
    except ValueError as e:
        raise InvalidInputError(f"unknown variable {unknown!r}; expected one of C, i, n, I, M") from e


def _as_model(model: InterestModel | str) -> InterestModel:
    try:
        return InterestModel(model)
    except ValueError as e:
        raise InvalidInputError(f"unknown interest model {model!r}; expected 'simple' or 'compound'") from e


def _as_inputs(knowns: FinancialInputSet | Mapping[str, Any]) -> FinancialInputSet:
    if isinstance(knowns, FinancialInputSet):
        return knowns
    return FinancialInputSet.from_mapping(dict(knowns))


def solve(
    unknown: Variable | str,
    knowns: FinancialInputSet | Mapping[str, Any],
    model: InterestModel | str = InterestModel.SIMPLE,
) -> SolveResult:
    """
    Solve for one unknown of the simple or compound interest model.

    Args:
        unknown: Variable to solve for (Variable or its symbol: "C", "i", "n", "I", "M").
        knowns: Known values; rate as a decimal fraction, time in years. A value for the
            unknown itself is ignored.
        model: "simple" or "compound".

    Returns:
        SolveResult with the rounded value, the unrounded value, the formula used and
        the derivation steps.

    Raises:
        InvalidInputError, DomainError (see fincalc.core.errors).
    """
    var = as_variable(unknown)
    mdl = _as_model(model)
    return _SOLVE[mdl](var, _as_inputs(knowns))


def required_knowns(
    unknown: Variable | str,
    knowns: FinancialInputSet | Mapping[str, Any],
    model: InterestModel | str = InterestModel.SIMPLE,
) -> tuple[Variable, ...]:
    """
    Known variables solve() will consume for the currently supplied values.

    Only the five equation variables are listed. The compound model also needs the
    capitalization frequency m for every branch except I = M − C; m is not a
    Variable, so it is implied rather than returned.
    """
    var = as_variable(unknown)
    return _REQUIRED[_as_model(model)](var, _as_inputs(knowns).without(var))


def formula_template(unknown: Variable | str, model: InterestModel | str = InterestModel.SIMPLE) -> str:
    """Preview formula for an unknown before any value is entered."""
    return _PREVIEW[_as_model(model)][as_variable(unknown)]
