# fincalc/core/session.py
"""
Caller-owned calculator state.

The solvers are stateless; whatever a presentation surface needs to remember
between user actions (which variable is the unknown, the last result shown)
lives here and is passed around explicitly.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from fincalc.core.errors import FinancialCalcError
from fincalc.core.finance.solver import as_variable, formula_template, required_knowns, solve
from fincalc.schemas.models import FinancialInputSet, InterestModel, SolveResult, Variable

logger = logging.getLogger(__name__)


@dataclass
class CalculatorSession:
    model: InterestModel = InterestModel.SIMPLE
    current_unknown: Variable | None = None
    last_result: SolveResult | None = None
    last_error: str | None = None

    def select_unknown(self, unknown: Variable | str) -> None:
        """Switch the unknown; a result for a different unknown is no longer valid."""
        self.current_unknown = as_variable(unknown)
        self.last_result = None
        self.last_error = None

    def formula(self) -> str:
        if self.current_unknown is None:
            return ""
        return formula_template(self.current_unknown, self.model)

    def required(self, knowns: FinancialInputSet | Mapping[str, Any]) -> tuple[Variable, ...]:
        if self.current_unknown is None:
            return ()
        return required_knowns(self.current_unknown, knowns, self.model)

    def evaluate(self, knowns: FinancialInputSet | Mapping[str, Any]) -> SolveResult:
        """
        Solve for the current unknown.

        On failure the previous result is cleared (never left stale) and the error
        message is kept in last_error before the exception propagates.
        """
        if self.current_unknown is None:
            self.last_result = None
            self.last_error = "no unknown selected"
            raise FinancialCalcError(self.last_error)
        try:
            result = solve(self.current_unknown, knowns, self.model)
        except FinancialCalcError as exc:
            self.last_result = None
            self.last_error = str(exc)
            logger.warning("%s solve for %s failed: %s", self.model.value, self.current_unknown.value, exc)
            raise
        self.last_result = result
        self.last_error = None
        return result

    def reset(self) -> None:
        self.current_unknown = None
        self.last_result = None
        self.last_error = None
