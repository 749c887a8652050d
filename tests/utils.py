# tests/utils.py
"""
Single source of truth for test data, factories, and canonical payloads.
Update values here to cascade across the test suite.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fincalc.inputs.inputs import CreditInputs, RawSolveInputs
from fincalc.schemas.models import FinancialInputSet, HistoryEntry, ScheduleType

# -----------------------------
# Global defaults (edit once)
# -----------------------------

DEFAULT_CAPITAL = 1000.0
DEFAULT_RATE = 0.05
DEFAULT_YEARS = 2.0

# Worked credit example: 10,000 at 12%/yr, monthly, one year → r = 1%, N = 12
CREDIT_PRINCIPAL = 10_000.0
CREDIT_RATE_PCT = 12.0
CREDIT_YEARS = 1.0
CREDIT_PPY = 12
CREDIT_FRENCH_PAYMENT = 888.49

# 1000 at 10% compounded yearly for 5 years
COMPOUND_C = 1000.0
COMPOUND_M = 1610.51
COMPOUND_I = 0.10
COMPOUND_N = 5.0


# -----------------------------
# Factories
# -----------------------------


def make_inputs(**overrides: Any) -> FinancialInputSet:
    """Simple-interest knowns C, i, n (override or clear any field with None)."""
    base: dict[str, Any] = {"C": DEFAULT_CAPITAL, "i": DEFAULT_RATE, "n": DEFAULT_YEARS}
    base.update(overrides)
    return FinancialInputSet(**base)


def make_compound_inputs(**overrides: Any) -> FinancialInputSet:
    base: dict[str, Any] = {"C": COMPOUND_C, "i": COMPOUND_I, "n": COMPOUND_N, "m": 1}
    base.update(overrides)
    return FinancialInputSet(**base)


def make_raw_inputs(**overrides: Any) -> RawSolveInputs:
    base: dict[str, Any] = {"C": 1000, "iPct": 5, "n": 24, "nUnit": "months"}
    base.update(overrides)
    return RawSolveInputs.model_validate(base)


def make_credit_inputs(**overrides: Any) -> CreditInputs:
    base: dict[str, Any] = {
        "principal": CREDIT_PRINCIPAL,
        "annual_rate_percent": CREDIT_RATE_PCT,
        "years": CREDIT_YEARS,
        "payments_per_year": CREDIT_PPY,
        "schedule": ScheduleType.FRENCH,
    }
    base.update(overrides)
    return CreditInputs(**base)


def make_history_entry(n: int = 0, **overrides: Any) -> HistoryEntry:
    base: dict[str, Any] = {
        "timestamp": datetime(2024, 1, 1, 12, 0, n % 60, tzinfo=timezone.utc),
        "calculator_type": "simple",
        "unknown": "I",
        "formula": "I = C × i × n",
        "result": 100.0 + n,
        "raw_input_values": {"C": 1000, "iPct": 5, "n": 2, "nUnit": "years"},
    }
    base.update(overrides)
    return HistoryEntry(**base)


def simple_request_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "calculator": "simple",
        "unknown": "n",
        "values": {"C": 1000, "iPct": 5, "M": 1200},
    }
    payload.update(overrides)
    return payload


def credit_request_payload(**overrides: Any) -> dict[str, Any]:
    credit = {
        "principal": CREDIT_PRINCIPAL,
        "annual_rate_percent": CREDIT_RATE_PCT,
        "years": CREDIT_YEARS,
        "payments_per_year": CREDIT_PPY,
        "schedule": "french",
    }
    credit.update(overrides)
    return {"calculator": "credit", "credit": credit}
