# fincalc/reports/generator.py
from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from fincalc.core.finance.amortization import AmortizationRow
from fincalc.core.finance.formatting import fmt_money, fmt_pct, format_result
from fincalc.schemas.models import AmortizationSummary, HistoryEntry, ScheduleType, SolveResult

_MODEL_TITLES = {
    "simple": "Simple Interest",
    "compound": "Compound Interest",
}

_SCHEDULE_TITLES = {
    ScheduleType.FRENCH: "French (constant payment)",
    ScheduleType.GERMAN: "German (constant principal)",
}


def _section(title: str) -> str:
    """
    Render a level-2 heading for Markdown sections.
    """
    return f"\n## {title}\n"


def _fmt_history_result(entry: HistoryEntry) -> str:
    if entry.result is None:
        return "-"
    if entry.calculator_type == "credit":
        return fmt_money(entry.result)
    try:
        return format_result(entry.unknown, entry.result)
    except ValueError:
        return f"{entry.result:.2f}"


# -----------------------
# Solver results
# -----------------------


def render_solve_report(result: SolveResult) -> str:
    """Markdown block with the formula, the derivation and the highlighted result."""
    title = _MODEL_TITLES[result.model.value]
    lines = [f"# {title}: {result.unknown.label} ({result.unknown.value})", ""]
    lines.append(f"**Formula:** `{result.formula}`")

    if result.knowns:
        lines.append(_section("Known values"))
        for sym, value in result.knowns.items():
            shown = str(int(value)) if sym == "m" else format_result(sym, value)
            lines.append(f"- {sym} = {shown}")

    lines.append(_section("Derivation"))
    lines.append("```")
    lines.extend(result.derivation_steps)
    lines.append("```")

    lines.append(_section("Result"))
    lines.append(f"**{result.unknown.value} = {format_result(result.unknown, result.value)}**")
    return "\n".join(lines) + "\n"


# -----------------------
# Amortization
# -----------------------


def render_summary(summary: AmortizationSummary) -> str:
    return "\n".join(
        [
            f"- System: {_SCHEDULE_TITLES[summary.schedule_type]}",
            f"- Credit amount: {fmt_money(summary.principal)}",
            f"- Rate per period: {fmt_pct(summary.period_rate)}",
            f"- Number of payments: {summary.total_periods}",
            f"- First payment: {fmt_money(summary.payment)}",
            f"- Total interest: {fmt_money(summary.total_interest)}",
            f"- Total paid: {fmt_money(summary.total_paid)}",
        ]
    )


def render_amortization_table(rows: Sequence[AmortizationRow]) -> str:
    out = [
        "| Period | Payment | Principal | Interest | Balance |",
        "|---:|---:|---:|---:|---:|",
    ]
    for r in rows:
        out.append(
            f"| {r.period} | {fmt_money(r.payment)} | {fmt_money(r.principal_portion)} | "
            f"{fmt_money(r.interest_portion)} | {fmt_money(r.remaining_balance)} |"
        )
    return "\n".join(out)


def render_amortization_report(rows: Sequence[AmortizationRow], summary: AmortizationSummary) -> str:
    body = [f"# Credit Simulation – {_SCHEDULE_TITLES[summary.schedule_type]}"]
    body.append(_section("Summary"))
    body.append(render_summary(summary))
    body.append(_section("Amortization Table"))
    body.append(render_amortization_table(rows))
    return "\n".join(body) + "\n"


# -----------------------
# History
# -----------------------


def render_history(entries: Sequence[HistoryEntry]) -> str:
    if not entries:
        return "_No calculations recorded._\n"
    out = [
        "| When | Type | Unknown | Formula | Result |",
        "|---|---|---|---|---:|",
    ]
    for e in entries:
        when = e.timestamp.strftime("%Y-%m-%d %H:%M:%S")
        out.append(f"| {when} | {e.calculator_type} | {e.unknown} | {e.formula} | {_fmt_history_result(e)} |")
    return "\n".join(out) + "\n"


def write_report(path: str | Path, text: str) -> Path:
    """Write a Markdown report, creating parent folders as needed."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p
