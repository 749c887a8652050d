# fincalc/schemas/models.py

from __future__ import annotations

import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# =========================
# Symbols
# =========================


class Variable(str, Enum):
    """Symbolic variables of the simple and compound interest equations."""

    CAPITAL = "C"
    RATE = "i"
    TIME = "n"
    INTEREST = "I"
    AMOUNT = "M"

    @property
    def label(self) -> str:
        return _VARIABLE_LABELS[self]

    @property
    def is_money(self) -> bool:
        return self in (Variable.CAPITAL, Variable.INTEREST, Variable.AMOUNT)


_VARIABLE_LABELS = {
    Variable.CAPITAL: "Capital",
    Variable.RATE: "Rate",
    Variable.TIME: "Time",
    Variable.INTEREST: "Interest",
    Variable.AMOUNT: "Amount",
}


class InterestModel(str, Enum):
    SIMPLE = "simple"
    COMPOUND = "compound"


class ScheduleType(str, Enum):
    """Amortization systems: French (constant payment) and German (constant principal)."""

    FRENCH = "french"
    GERMAN = "german"


class TimeUnit(str, Enum):
    YEARS = "years"
    MONTHS = "months"
    DAYS = "days"


CalculatorType = Literal["simple", "compound", "credit"]


def _key(var: Variable | str) -> str:
    # str-Enum members hash by name, so normalize to the plain symbol before lookups
    return var.value if isinstance(var, Enum) else str(var)

# =========================
# Core inputs
# =========================


class FinancialInputSet(BaseModel):
    """
    Known scalar values for one solve. Any field may be missing (None).
    Rates are decimal fractions (0.05 = 5%) and time is expressed in years.
    """

    model_config = ConfigDict(frozen=True)

    C: float | None = Field(None, description="Capital / principal (currency units).")
    i: float | None = Field(None, description="Annual nominal rate as a decimal fraction (0.05 = 5%).")
    n: float | None = Field(None, description="Time in years.")
    I: float | None = Field(None, description="Interest amount (currency units).")  # noqa: E741
    M: float | None = Field(None, description="Final amount (currency units).")
    m: float | None = Field(None, description="Compounding events per year (compound model only).")

    def get(self, var: Variable | str) -> float | None:
        return getattr(self, _key(var))

    def has(self, var: Variable | str) -> bool:
        """True when the value is supplied (not None). Finiteness is checked by the solvers."""
        return self.get(var) is not None

    def known(self) -> dict[str, float]:
        """Supplied values only, keyed by symbol."""
        return {k: v for k, v in self.model_dump().items() if v is not None}

    def without(self, var: Variable) -> FinancialInputSet:
        """Copy with the given variable cleared (the unknown never feeds its own formula)."""
        return self.model_copy(update={var.value: None})

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> FinancialInputSet:
        """Build from a plain mapping; keys outside the model are ignored, NaN stays NaN for validation."""
        allowed = set(cls.model_fields)
        return cls(**{_key(k): v for k, v in values.items() if _key(k) in allowed})


# =========================
# Computed outputs
# =========================


class SolveResult(BaseModel):
    """Outcome of one solve: the value of the unknown and how it was derived."""

    model_config = ConfigDict(frozen=True)

    unknown: Variable = Field(..., description="The variable that was solved for.")
    model: InterestModel = Field(..., description="Interest model used by the solver.")
    value: float = Field(..., description="Rounded value (money 2 places, rate 6, time 4).")
    raw_value: float = Field(..., description="Unrounded value straight from the formula.")
    formula: str = Field(..., description="Formula template used, e.g. 'I = C × i × n'.")
    derivation_steps: tuple[str, ...] = Field(default_factory=tuple, description="Step-by-step derivation lines.")
    knowns: dict[str, float] = Field(default_factory=dict, description="Known values that fed the formula.")

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.value)


class AmortizationSummary(BaseModel):
    """Aggregate view of an amortization table (what the credit simulator shows above the rows)."""

    model_config = ConfigDict(frozen=True)

    schedule_type: ScheduleType
    principal: float = Field(..., description="Credit amount.")
    total_periods: int = Field(..., description="Number of payments in the table.")
    period_rate: float = Field(..., description="Rate applied per payment period (decimal).")
    payment: float = Field(..., description="First-period total payment (constant for French tables).")
    total_interest: float = Field(..., description="Sum of interest portions.")
    total_paid: float = Field(..., description="Sum of total payments.")


class HistoryEntry(BaseModel):
    """One record of the rolling calculation log."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    calculator_type: CalculatorType
    unknown: str = Field(..., description="Solved symbol, or the schedule type for credit tables.")
    formula: str = ""
    result: float | None = None
    raw_input_values: dict[str, Any] = Field(default_factory=dict, description="Values as the user entered them.")
