# fincalc/core/finance/derivation.py

from __future__ import annotations

import math
from dataclasses import dataclass

from fincalc.core.errors import DomainError
from fincalc.schemas.models import FinancialInputSet, InterestModel, SolveResult, Variable

from .formatting import format_result
from .rounding import round_for


@dataclass(frozen=True)
class Branch:
    """
    One evaluated formula branch.

    Attributes:
        value: Unrounded result.
        formula: Symbolic template, e.g. "C = I / (i × n)".
        substituted: The template with the known values written in.
        used: Symbols that fed the formula ("m" included for compound formulas).
    """

    value: float
    formula: str
    substituted: str
    used: tuple[str, ...]


def make_result(model: InterestModel, unknown: Variable, branch: Branch, knowns: FinancialInputSet) -> SolveResult:
    """Round the branch value and assemble the three-line derivation."""
    if not math.isfinite(branch.value):
        raise DomainError(f"{unknown.value} is undefined for these inputs ({branch.formula})")

    value = round_for(unknown, branch.value)
    steps = (
        branch.formula,
        branch.substituted,
        f"{unknown.value} = {format_result(unknown, value)}",
    )
    used = {sym: float(knowns.get(sym)) for sym in branch.used if knowns.get(sym) is not None}

    return SolveResult(
        unknown=unknown,
        model=model,
        value=value,
        raw_value=branch.value,
        formula=branch.formula,
        derivation_steps=steps,
        knowns=used,
    )
