# fincalc/history/log.py
"""
Rolling calculation history.

A JSON file holding at most `max_entries` records, newest first. This is the
only shared state in fincalc: writes are last-write-wins with no locking, which
is acceptable for a single user running one process at a time. The solvers
never touch it; callers append after a successful calculation.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from fincalc.schemas.models import AmortizationSummary, CalculatorType, HistoryEntry, SolveResult

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 100
CSV_COLUMNS = ("timestamp", "type", "unknown", "formula", "result", "inputs")

_ENTRIES = TypeAdapter(list[HistoryEntry])


def entry_from_result(
    result: SolveResult,
    calculator_type: CalculatorType,
    raw_inputs: dict[str, Any] | None = None,
) -> HistoryEntry:
    return HistoryEntry(
        calculator_type=calculator_type,
        unknown=result.unknown.value,
        formula=result.formula,
        result=result.value,
        raw_input_values=dict(raw_inputs or {}),
    )


def entry_from_table(summary: AmortizationSummary, raw_inputs: dict[str, Any] | None = None) -> HistoryEntry:
    """Credit simulations are logged with the schedule type as 'unknown' and the total paid as result."""
    return HistoryEntry(
        calculator_type="credit",
        unknown=summary.schedule_type.value,
        formula=f"{summary.total_periods} payments of {summary.payment:.2f}",
        result=summary.total_paid,
        raw_input_values=dict(raw_inputs or {}),
    )


def _inputs_text(values: dict[str, Any]) -> str:
    return "; ".join(f"{k}:{v}" for k, v in values.items())


class HistoryLog:
    """File-backed, size-capped, newest-first calculation log."""

    def __init__(self, path: str | Path, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.path = Path(path)
        self.max_entries = max_entries

    def entries(self) -> list[HistoryEntry]:
        """Stored entries, newest first. A missing or unreadable file reads as empty."""
        if not self.path.exists():
            return []
        try:
            return _ENTRIES.validate_json(self.path.read_bytes())
        except (ValidationError, ValueError) as exc:
            logger.warning("history file %s is unreadable, starting fresh: %s", self.path, exc)
            return []

    def append(self, entry: HistoryEntry) -> list[HistoryEntry]:
        items = [entry, *self.entries()][: self.max_entries]
        self._write(items)
        return items

    def clear(self) -> None:
        self._write([])

    def export_csv(self, dest: str | Path) -> int:
        """Write the log as CSV; returns the number of data rows written."""
        items = self.entries()
        out = Path(dest)
        if out.parent and not out.parent.exists():
            out.parent.mkdir(parents=True, exist_ok=True)
        with out.open("w", newline="", encoding="utf-8") as fh:
            writer = csv.writer(fh)
            writer.writerow(CSV_COLUMNS)
            for e in items:
                writer.writerow(
                    [
                        e.timestamp.isoformat(),
                        e.calculator_type,
                        e.unknown,
                        e.formula,
                        "" if e.result is None else e.result,
                        _inputs_text(e.raw_input_values),
                    ]
                )
        return len(items)

    def __len__(self) -> int:
        return len(self.entries())

    def _write(self, items: list[HistoryEntry]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [e.model_dump(mode="json") for e in items]
        self.path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
