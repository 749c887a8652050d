# fincalc/core/finance/amortization.py

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from fincalc.core.errors import InvalidInputError
from fincalc.schemas.models import AmortizationSummary, ScheduleType

from .checks import need_positive_int
from .rounding import round_money

logger = logging.getLogger(__name__)

BALANCE_FLOOR = 0.01  # balances under one cent after rounding are paid off
_PERIOD_TOL = 1e-9


@dataclass(frozen=True)
class AmortizationRow:
    """
    Immutable record of one payment period.

    Attributes:
        period (int): 1-based period index.
        payment (float): Total payment this period (principal + interest).
        principal_portion (float): Principal repaid this period.
        interest_portion (float): Interest charged on the opening balance.
        remaining_balance (float): Balance after this period's payment (>= 0).
    """

    period: int
    payment: float
    principal_portion: float
    interest_portion: float
    remaining_balance: float


def _finite(value: float, name: str) -> float:
    if value is None or isinstance(value, bool) or not math.isfinite(value):
        raise InvalidInputError(f"{name} must be a finite number, got {value!r}")
    return float(value)


def total_periods(years: float, payments_per_year: int) -> int:
    """
    Number of payments: years × payments_per_year.

    The product must land on a whole number of periods (2.5 years × 12 = 30 is fine,
    1.3 years × 12 = 15.6 is rejected).
    """
    y = _finite(years, "years")
    if y <= 0:
        raise InvalidInputError(f"years must be greater than zero, got {years!r}")
    ppy = need_positive_int(payments_per_year, "payments per year")
    raw = y * ppy
    periods = round(raw)
    if abs(raw - periods) > _PERIOD_TOL:
        raise InvalidInputError(f"years × payments per year must be a whole number of periods, got {raw:g}")
    if periods <= 0:
        raise InvalidInputError("the loan must have at least one payment period")
    return int(periods)


def period_rate(annual_rate_percent: float, payments_per_year: int) -> float:
    """Per-period decimal rate: 12 (% per year) with 12 payments → 0.01."""
    rate = _finite(annual_rate_percent, "annual rate")
    if rate < 0:
        raise InvalidInputError(f"annual rate must not be negative, got {annual_rate_percent!r}")
    return rate / 100.0 / need_positive_int(payments_per_year, "payments per year")


def french_payment(principal: float, rate: float, periods: int) -> float:
    """
    Constant payment of a fully-amortizing loan (French system).

    Formula (standard annuity):
        A = P · [ r(1 + r)^N ] / [ (1 + r)^N − 1 ]

    Where:
        P = principal, r = rate per period, N = number of periods.

    A zero or negative rate makes the denominator vanish, so it is rejected
    rather than falling back to P / N. So is a rate too small to move (1 + r)^N
    off 1.0, and one large enough to overflow it.
    """
    if rate <= 0:
        raise InvalidInputError("the French schedule needs a period rate greater than zero")
    if periods <= 0:
        raise InvalidInputError("the loan must have at least one payment period")
    try:
        growth = (1 + rate) ** periods
    except OverflowError as e:
        raise InvalidInputError(f"period rate {rate!r} over {periods} periods is out of range") from e
    if growth - 1 == 0:
        raise InvalidInputError(f"period rate {rate!r} is too small for the French payment formula")
    payment = principal * (rate * growth) / (growth - 1)
    if not math.isfinite(payment):
        raise InvalidInputError(f"French payment is out of range for period rate {rate!r}")
    return payment


def _french_rows(principal: float, rate: float, periods: int, payment: float) -> list[AmortizationRow]:
    rows: list[AmortizationRow] = []
    bal = principal
    for period in range(1, periods + 1):
        interest = round_money(bal * rate)
        if period == periods:
            # final period takes whatever rounding left on the balance
            principal_paid = bal
            pay = round_money(principal_paid + interest)
        else:
            principal_paid = min(round_money(payment - interest), bal)
            pay = round_money(payment)
        bal = round_money(bal - principal_paid)
        if bal < BALANCE_FLOOR:
            bal = 0.0
        rows.append(AmortizationRow(period, pay, round_money(principal_paid), interest, bal))
    return rows


def _german_rows(principal: float, rate: float, periods: int) -> list[AmortizationRow]:
    fixed_principal = principal / periods
    rows: list[AmortizationRow] = []
    bal = principal
    for period in range(1, periods + 1):
        interest = round_money(bal * rate)
        principal_paid = bal if period == periods else min(round_money(fixed_principal), bal)
        pay = round_money(principal_paid + interest)
        bal = round_money(bal - principal_paid)
        if bal < BALANCE_FLOOR:
            bal = 0.0
        rows.append(AmortizationRow(period, pay, round_money(principal_paid), interest, bal))
    return rows


def build_amortization_table(
    principal: float,
    annual_rate_percent: float,
    years: float,
    payments_per_year: int,
    schedule_type: ScheduleType | str = ScheduleType.FRENCH,
) -> tuple[AmortizationRow, ...]:
    """
    Build a full amortization table.

    Args:
        principal: Credit amount (> 0).
        annual_rate_percent: Nominal annual rate in percent (12 = 12%). Must be > 0 for
            French tables; 0 is allowed for German tables (interest-free).
        years: Term in years (> 0).
        payments_per_year: Payments per year (positive integer).
        schedule_type: "french" (constant payment) or "german" (constant principal).

    Returns:
        Tuple of AmortizationRow, one per period. The last row's balance is exactly 0
        and the principal portions add up to the principal.

    Raises:
        InvalidInputError: invalid amounts, a non-integer period count, or a French
            schedule whose payment formula is undefined or out of range (zero, vanishing
            or overflowing rate).
    """
    try:
        kind = ScheduleType(schedule_type)
    except ValueError as e:
        raise InvalidInputError(f"unknown schedule type {schedule_type!r}; expected 'french' or 'german'") from e

    p = _finite(principal, "principal")
    if p <= 0:
        raise InvalidInputError(f"principal must be greater than zero, got {principal!r}")
    periods = total_periods(years, payments_per_year)
    rate = period_rate(annual_rate_percent, payments_per_year)

    if kind is ScheduleType.FRENCH:
        payment = french_payment(p, rate, periods)
        logger.debug("french table: N=%d r=%.8f payment=%.6f", periods, rate, payment)
        rows = _french_rows(p, rate, periods, payment)
    else:
        logger.debug("german table: N=%d r=%.8f principal/period=%.6f", periods, rate, p / periods)
        rows = _german_rows(p, rate, periods)

    return tuple(rows)


def summarize_table(
    rows: tuple[AmortizationRow, ...] | list[AmortizationRow],
    principal: float,
    rate: float,
    schedule_type: ScheduleType | str,
) -> AmortizationSummary:
    """Totals shown above the table: number of payments, interest and total paid."""
    if not rows:
        raise InvalidInputError("cannot summarize an empty amortization table")
    return AmortizationSummary(
        schedule_type=ScheduleType(schedule_type),
        principal=principal,
        total_periods=len(rows),
        period_rate=rate,
        payment=rows[0].payment,
        total_interest=round_money(math.fsum(r.interest_portion for r in rows)),
        # sum of the rounded rows, not payment × N, so the last-period adjustment is included
        total_paid=round_money(math.fsum(r.payment for r in rows)),
    )


def french_closed_form_balances(
    principal: float,
    rate: float,
    periods: int,
    payment: float | None = None,
) -> np.ndarray:
    """
    Unrounded French-schedule balances for periods 1..N from the closed form:

        B_k = P(1 + r)^k − A[(1 + r)^k − 1] / r

    Each balance is independent of the previous one, so the whole curve is
    evaluated in one vectorised pass. Useful to cross-check the rounded,
    sequential table.
    """
    pay = french_payment(principal, rate, periods) if payment is None else payment
    k = np.arange(1, periods + 1, dtype=float)
    growth = np.power(1.0 + rate, k)
    balances = principal * growth - pay * (growth - 1.0) / rate
    return np.clip(balances, 0.0, None)
