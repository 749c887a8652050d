# main.py
"""
Entry Point: fincalc

Purpose
-------
Command-line surface for the financial calculators:
  1) simple  : solve I = C·i·n / M = C + I for any one unknown.
  2) compound: solve M = C·(1 + i/m)^(m·n) for any one unknown.
  3) credit  : build a French or German amortization table.
  4) history : show, export (CSV) or clear the rolling calculation log.

Each run prints (or writes) a Markdown report and, unless disabled, appends the
calculation to the history log.

Usage
-----
    python main.py simple --unknown n --C 1000 --rate 5 --M 1200
    python main.py compound --unknown i --C 1000 --M 1610.51 --time 5 --m 1
    python main.py credit --principal 10000 --rate 12 --years 1 --payments-per-year 12 --schedule german
    python main.py history --export history.csv
    python main.py --config data/sample/request.json --out result.md
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from fincalc.core.errors import FinancialCalcError
from fincalc.core.finance import build_amortization_table, solve, summarize_table
from fincalc.core.finance.amortization import period_rate
from fincalc.history.log import HistoryLog, entry_from_result, entry_from_table
from fincalc.inputs.inputs import CalcRequest, CreditInputs, InputsLoader, RawSolveInputs, RunOptions
from fincalc.logging_config import configure_logging
from fincalc.reports.generator import (
    render_amortization_report,
    render_history,
    render_solve_report,
    write_report,
)
from fincalc.schemas.models import InterestModel, ScheduleType, TimeUnit, Variable

logger = logging.getLogger("fincalc.cli")

EXIT_CALC_ERROR = 2


def _run_options_parser(*, suppress: bool = False) -> argparse.ArgumentParser:
    """
    Run options accepted both before and after the subcommand. The subcommand copy
    uses SUPPRESS defaults so it never overwrites a value given before the subcommand.
    """
    none = argparse.SUPPRESS if suppress else None
    p = argparse.ArgumentParser(add_help=False)
    p.add_argument("--out", type=str, default=none, help="Output Markdown path (stdout when omitted).")
    p.add_argument("--history", type=str, default=none, help="History log path (default data/history.json).")
    p.add_argument(
        "--no-history",
        action="store_true",
        default=argparse.SUPPRESS if suppress else False,
        help="Do not record this calculation.",
    )
    p.add_argument("--log-level", type=str, default=none, help="Logging level (DEBUG, INFO, ...).")
    p.add_argument("--log-file", type=str, default=none, help="Also log to this rotating file.")
    return p


def _form_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(add_help=False)
    p.add_argument("--unknown", required=True, choices=[v.value for v in Variable], help="Variable to solve for.")
    p.add_argument("--C", dest="capital", type=float, default=None, help="Capital.")
    p.add_argument("--rate", type=float, default=None, help="Annual rate in percent (5 = 5%%).")
    p.add_argument("--time", type=float, default=None, help="Duration, in --time-unit.")
    p.add_argument("--time-unit", choices=[u.value for u in TimeUnit], default=TimeUnit.YEARS.value)
    p.add_argument("--I", dest="interest", type=float, default=None, help="Interest amount.")
    p.add_argument("--M", dest="amount", type=float, default=None, help="Final amount.")
    return p


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for configurable runs."""
    run_opts = _run_options_parser(suppress=True)
    form = _form_parser()

    p = argparse.ArgumentParser(
        description="fincalc: interest solvers and credit simulator", parents=[_run_options_parser()]
    )
    p.add_argument("--config", type=str, default=None, help="Path to a JSON calculation request.")
    sub = p.add_subparsers(dest="command")

    sub.add_parser("simple", parents=[form, run_opts], help="Simple interest solver.")

    comp = sub.add_parser("compound", parents=[form, run_opts], help="Compound interest solver.")
    comp.add_argument("--m", type=float, default=None, help="Capitalization frequency per year.")

    credit = sub.add_parser("credit", parents=[run_opts], help="Amortization table.")
    credit.add_argument("--principal", type=float, required=True)
    credit.add_argument("--rate", type=float, required=True, help="Annual rate in percent.")
    credit.add_argument("--years", type=float, required=True)
    credit.add_argument("--payments-per-year", type=int, default=12)
    credit.add_argument("--schedule", choices=[s.value for s in ScheduleType], default=ScheduleType.FRENCH.value)

    hist = sub.add_parser("history", parents=[run_opts], help="Show, export or clear the history log.")
    hist.add_argument("--export", type=str, default=None, help="Write the log to this CSV file.")
    hist.add_argument("--clear", action="store_true", help="Delete all entries.")

    args = p.parse_args(argv)
    if args.command is None and args.config is None:
        p.error("a command (simple, compound, credit, history) or --config is required")
    return args


def _request_from_args(args: argparse.Namespace) -> CalcRequest:
    if args.command == "credit":
        return CalcRequest(
            calculator="credit",
            credit=CreditInputs(
                principal=args.principal,
                annual_rate_percent=args.rate,
                years=args.years,
                payments_per_year=args.payments_per_year,
                schedule=ScheduleType(args.schedule),
            ),
        )
    return CalcRequest(
        calculator=args.command,
        unknown=Variable(args.unknown),
        values=RawSolveInputs(
            capital=args.capital,
            rate_pct=args.rate,
            time=args.time,
            time_unit=TimeUnit(args.time_unit),
            interest=args.interest,
            amount=args.amount,
            m=getattr(args, "m", None),
        ),
    )


def run_request(req: CalcRequest) -> str:
    """Execute one request and return its Markdown report. Records history when enabled."""
    history = HistoryLog(req.run.history_path) if req.run.record_history else None

    if req.calculator == "credit":
        c = req.credit
        assert c is not None
        rows = build_amortization_table(c.principal, c.annual_rate_percent, c.years, c.payments_per_year, c.schedule)
        summary = summarize_table(rows, c.principal, period_rate(c.annual_rate_percent, c.payments_per_year), c.schedule)
        if history is not None:
            history.append(entry_from_table(summary, c.model_dump(mode="json")))
        return render_amortization_report(rows, summary)

    assert req.values is not None and req.unknown is not None
    knowns = req.values.to_input_set(req.unknown)
    result = solve(req.unknown, knowns, InterestModel(req.calculator))
    if history is not None:
        history.append(entry_from_result(result, req.calculator, req.values.raw_values()))
    return render_solve_report(result)


def _run_history(args: argparse.Namespace, history_path: str) -> str:
    log = HistoryLog(history_path)
    if args.clear:
        log.clear()
        return "History cleared.\n"
    if args.export:
        count = log.export_csv(args.export)
        return f"Exported {count} entries to {args.export}\n"
    return render_history(log.entries())


def main(argv: list[str] | None = None) -> int:
    """Run one calculation (or history action) and emit its report."""
    args = parse_args(argv)

    if args.command == "history" and not args.config:
        run = RunOptions()
        history_path = args.history or os.getenv("FINCALC_HISTORY") or run.history_path
        try:
            configure_logging(args.log_level or os.getenv("FINCALC_LOG_LEVEL") or run.log_level, args.log_file)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_CALC_ERROR
        text = _run_history(args, history_path)
        out = args.out
    else:
        loader = InputsLoader()
        try:
            req = loader.load(args.config) if args.config else loader.with_env(_request_from_args(args))
        except (ValueError, FileNotFoundError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_CALC_ERROR

        req = loader.with_overrides(
            req,
            out=args.out,
            history_path=args.history,
            record_history=False if args.no_history else None,
            log_level=args.log_level,
            log_file=args.log_file,
        )
        try:
            configure_logging(req.run.log_level, req.run.log_file)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_CALC_ERROR

        try:
            text = run_request(req)
        except FinancialCalcError as e:
            logger.warning("calculation failed: %s", e)
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_CALC_ERROR
        out = req.run.out

    if out:
        path = write_report(out, text)
        print(f"Report written to {path}")
    else:
        print(text, end="")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
