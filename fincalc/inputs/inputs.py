# fincalc/inputs/inputs.py
"""
Inputs loader and raw-value normalisation for fincalc.

Goals
-----
- Turn values as a user types them (rate in percent, time with a unit tag)
  into the locale-independent decimals the solvers expect.
- Deterministic, file-first calculation requests validated via Pydantic.
- Minimal environment-variable overrides for CI/CLI convenience.

Request JSON shape
------------------
    {
      "calculator": "compound",
      "unknown": "M",
      "values": {"C": 1000, "iPct": 10, "n": 5, "nUnit": "years", "m": 1},
      "run": {"out": "result.md", "history_path": "data/history.json"}
    }

    {
      "calculator": "credit",
      "credit": {"principal": 10000, "annual_rate_percent": 12, "years": 1,
                 "payments_per_year": 12, "schedule": "french"}
    }

Environment overrides (optional)
--------------------------------
- FINCALC_OUT         -> run.out
- FINCALC_HISTORY     -> run.history_path
- FINCALC_NO_HISTORY  -> run.record_history = False (when truthy)
- FINCALC_LOG_LEVEL   -> run.log_level
- FINCALC_LOG_FILE    -> run.log_file

Public API
----------
- class RawSolveInputs: to_input_set() -> FinancialInputSet
- class CreditInputs
- class InputsLoader: load(path), load_json(text), with_env(cfg), with_overrides(cfg, **kwargs)
- function load_request(path) -> CalcRequest
"""

from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, cast

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from fincalc.core.errors import InvalidInputError
from fincalc.core.finance.rounding import percent_to_decimal, to_years
from fincalc.schemas.models import FinancialInputSet, ScheduleType, TimeUnit, Variable

# ----------------------------
# Raw (as-entered) values
# ----------------------------


class RawSolveInputs(BaseModel):
    """
    Values as entered in a simple/compound calculator form.
    Field aliases match the keys the history log stores (C, iPct, n, nUnit, I, M, m).
    """

    model_config = ConfigDict(populate_by_name=True)

    capital: float | None = Field(None, alias="C", description="Capital (currency units).")
    rate_pct: float | None = Field(None, alias="iPct", description="Annual rate in percent (5 = 5%).")
    time: float | None = Field(None, alias="n", description="Duration expressed in time_unit.")
    time_unit: TimeUnit = Field(TimeUnit.YEARS, alias="nUnit", description="Unit of 'time'.")
    interest: float | None = Field(None, alias="I", description="Interest (currency units).")
    amount: float | None = Field(None, alias="M", description="Final amount (currency units).")
    m: float | None = Field(None, description="Capitalization frequency per year (compound only).")

    def raw_values(self) -> dict[str, Any]:
        """Entered values keyed the way the history log stores them."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")

    def to_input_set(self, unknown: Variable | str | None = None) -> FinancialInputSet:
        """
        Normalize to solver units: rate / 100, time converted to years.
        The field of the unknown (if given) is dropped; other negatives or non-finite
        numbers raise InvalidInputError.
        """
        skip = Variable(unknown).value if unknown is not None else None
        entered = {
            "C": self.capital,
            "i": self.rate_pct,
            "n": self.time,
            "I": self.interest,
            "M": self.amount,
            "m": self.m,
        }
        for key, value in entered.items():
            if value is None or key == skip:
                continue
            if not math.isfinite(value):
                raise InvalidInputError(f"{key} must be a finite number, got {value!r}")
            if value < 0:
                raise InvalidInputError(f"{key} must not be negative, got {value!r}")

        values: dict[str, float | None] = {k: (None if k == skip else v) for k, v in entered.items()}
        if values["i"] is not None:
            values["i"] = percent_to_decimal(values["i"])
        if values["n"] is not None:
            values["n"] = to_years(values["n"], self.time_unit)
        return FinancialInputSet(**values)


class CreditInputs(BaseModel):
    """Bank-credit simulator form."""

    principal: float = Field(..., gt=0, description="Credit amount.")
    annual_rate_percent: float = Field(..., ge=0, description="Nominal annual rate in percent (12 = 12%).")
    years: float = Field(..., gt=0, description="Term in years.")
    payments_per_year: int = Field(12, ge=1, description="Payments per year (12 = monthly).")
    schedule: ScheduleType = Field(ScheduleType.FRENCH, description="'french' (constant payment) or 'german'.")


# ----------------------------
# Requests
# ----------------------------


class RunOptions(BaseModel):
    """Runtime (non-financial) options controlling a calculation run."""

    out: str | None = Field(None, description="Path to write the Markdown report (stdout when None).")
    history_path: str = Field("data/history.json", description="Rolling history log location.")
    record_history: bool = Field(True, description="Append successful calculations to the history log.")
    log_level: str = Field("INFO", description="Logging level name.")
    log_file: str | None = Field(None, description="Optional rotating log file.")


class CalcRequest(BaseModel):
    """One calculation: which calculator, which unknown, the entered values and run options."""

    calculator: Literal["simple", "compound", "credit"]
    unknown: Variable | None = None
    values: RawSolveInputs | None = None
    credit: CreditInputs | None = None
    run: RunOptions = RunOptions()

    @model_validator(mode="after")
    def _check_shape(self) -> CalcRequest:
        if self.calculator == "credit":
            if self.credit is None:
                raise ValueError("credit requests need a 'credit' block")
        else:
            if self.unknown is None:
                raise ValueError(f"{self.calculator} requests need an 'unknown' (C, i, n, I or M)")
            if self.values is None:
                raise ValueError(f"{self.calculator} requests need a 'values' block")
        return self


# ----------------------------
# Loader
# ----------------------------


@dataclass(frozen=True)
class InputsLoader:
    """
    File-first request loader with light env overrides.

    Default search (when path=None):
        1) ./data/sample/request.json
        2) ./fincalc.json
    """

    env_prefix: str = "FINCALC_"

    # ---------- Public API ----------

    def load(self, path: str | Path | None = None) -> CalcRequest:
        p = self._resolve_path(path)
        raw = self._read_json_file(p)
        cfg = self._parse_root(raw)
        return self._apply_env_overrides(cfg)

    def load_json(self, text: str) -> CalcRequest:
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON payload: {e}") from e
        cfg = self._parse_root(raw)
        return self._apply_env_overrides(cfg)

    def with_env(self, cfg: CalcRequest) -> CalcRequest:
        """Apply environment overrides to a request built in code (e.g. from CLI flags)."""
        return self._apply_env_overrides(cfg)

    def with_overrides(
        self,
        cfg: CalcRequest,
        *,
        out: str | None = None,
        history_path: str | None = None,
        record_history: bool | None = None,
        log_level: str | None = None,
        log_file: str | None = None,
    ) -> CalcRequest:
        """
        Return a *new* CalcRequest with provided non-null overrides applied to RunOptions.
        Does not mutate the original instance.
        """
        updates: dict[str, Any] = {}
        if out is not None:
            updates["out"] = out
        if history_path is not None:
            updates["history_path"] = history_path
        if record_history is not None:
            updates["record_history"] = record_history
        if log_level is not None:
            updates["log_level"] = log_level
        if log_file is not None:
            updates["log_file"] = log_file

        if not updates:
            return cfg

        run_new = cfg.run.model_copy(update=updates)
        return cfg.model_copy(update={"run": run_new})

    # ---------- Internals ----------

    def _resolve_path(self, path: str | Path | None) -> Path:
        if path is not None:
            p = Path(path)
            if not p.exists():
                raise FileNotFoundError(f"Request file not found: {p}")
            return p

        for candidate in (Path("data/sample/request.json"), Path("fincalc.json")):
            if candidate.exists():
                return candidate
        raise FileNotFoundError(
            "No request path provided and no default found. Looked for ./data/sample/request.json and ./fincalc.json."
        )

    def _read_json_file(self, p: Path) -> dict[str, Any]:
        if p.suffix.lower() != ".json":
            raise ValueError(f"Unsupported request format for {p.name}; only .json is supported.")
        try:
            return cast(dict[str, Any], json.loads(p.read_text(encoding="utf-8")))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {p}: {e}") from e

    def _parse_root(self, data: dict[str, Any]) -> CalcRequest:
        try:
            return CalcRequest.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Request validation failed:\n{e}") from e

    def _apply_env_overrides(self, cfg: CalcRequest) -> CalcRequest:
        prefix = self.env_prefix
        updates: dict[str, Any] = {}

        out = os.getenv(f"{prefix}OUT")
        if out:
            updates["out"] = out

        history = os.getenv(f"{prefix}HISTORY")
        if history:
            updates["history_path"] = history

        no_history = os.getenv(f"{prefix}NO_HISTORY", "").strip().lower()
        if no_history in {"1", "true", "yes", "on"}:
            updates["record_history"] = False

        level = os.getenv(f"{prefix}LOG_LEVEL")
        if level:
            updates["log_level"] = level.strip().upper()

        log_file = os.getenv(f"{prefix}LOG_FILE")
        if log_file:
            updates["log_file"] = log_file

        if not updates:
            return cfg

        run_new = cfg.run.model_copy(update=updates)
        return cfg.model_copy(update={"run": run_new})


# ----------------------------
# Convenience function
# ----------------------------


def load_request(path: str | Path | None = None) -> CalcRequest:
    """Convenience wrapper for one-shot callers."""
    return InputsLoader().load(path)
