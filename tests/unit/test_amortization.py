# tests/unit/test_amortization.py
import math

import numpy as np
import pytest

from fincalc.core.errors import InvalidInputError
from fincalc.core.finance import (
    build_amortization_table,
    french_closed_form_balances,
    french_payment,
    summarize_table,
    total_periods,
)
from fincalc.core.finance.amortization import period_rate
from fincalc.schemas.models import ScheduleType
from tests.utils import CREDIT_FRENCH_PAYMENT, CREDIT_PRINCIPAL


def test_french_first_rows(french_rows):
    assert len(french_rows) == 12
    first = french_rows[0]
    assert first.period == 1
    assert first.payment == pytest.approx(CREDIT_FRENCH_PAYMENT)
    assert first.interest_portion == pytest.approx(100.00)
    assert first.principal_portion == pytest.approx(788.49)
    assert first.remaining_balance == pytest.approx(9211.51)

    second = french_rows[1]
    assert second.interest_portion == pytest.approx(92.12)
    assert second.principal_portion == pytest.approx(796.37)
    assert second.remaining_balance == pytest.approx(8415.14)


def test_french_payment_is_constant_until_last_period(french_rows):
    assert {r.payment for r in french_rows[:-1]} == {CREDIT_FRENCH_PAYMENT}
    assert french_rows[-1].payment == pytest.approx(CREDIT_FRENCH_PAYMENT, abs=0.05)


@pytest.mark.parametrize("schedule", list(ScheduleType))
@pytest.mark.parametrize(
    "principal,rate,years,ppy",
    [(10_000.0, 12.0, 1, 12), (250_000.0, 3.75, 30, 12), (1234.56, 5.0, 5, 4), (8000.0, 9.5, 3, 1)],
)
def test_table_closes_out_the_principal(schedule, principal, rate, years, ppy):
    rows = build_amortization_table(principal, rate, years, ppy, schedule)
    assert len(rows) == years * ppy
    assert rows[-1].remaining_balance == 0.0
    assert math.fsum(r.principal_portion for r in rows) == pytest.approx(principal, abs=0.005)
    balances = [r.remaining_balance for r in rows]
    assert all(b >= 0 for b in balances)
    assert balances == sorted(balances, reverse=True)
    for r in rows:
        assert r.payment == pytest.approx(r.principal_portion + r.interest_portion, abs=0.011)


def test_german_rows(german_rows):
    assert all(r.principal_portion == pytest.approx(1000.0) for r in german_rows)
    assert german_rows[0].interest_portion == pytest.approx(120.0)
    assert german_rows[0].payment == pytest.approx(1120.0)
    assert german_rows[1].payment == pytest.approx(1110.0)
    assert german_rows[-1].payment == pytest.approx(1010.0)
    summary = summarize_table(german_rows, 12_000.0, 0.01, "german")
    assert summary.total_interest == pytest.approx(780.0)
    assert summary.total_paid == pytest.approx(12_780.0)


def test_german_zero_rate_is_interest_free():
    rows = build_amortization_table(12_000.0, 0.0, 1, 12, ScheduleType.GERMAN)
    assert all(r.interest_portion == 0.0 and r.payment == pytest.approx(1000.0) for r in rows)


def test_french_zero_rate_is_rejected():
    with pytest.raises(InvalidInputError, match="French"):
        build_amortization_table(12_000.0, 0.0, 1, 12, ScheduleType.FRENCH)


def test_fractional_years_landing_on_whole_periods():
    assert total_periods(2.5, 12) == 30
    assert len(build_amortization_table(5000.0, 6.0, 2.5, 12)) == 30


def test_non_integer_period_count_is_rejected():
    with pytest.raises(InvalidInputError, match="whole number of periods"):
        total_periods(1.3, 12)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"principal": 0.0},
        {"principal": -100.0},
        {"principal": math.nan},
        {"annual_rate_percent": -1.0},
        {"annual_rate_percent": math.inf},
        {"years": 0.0},
        {"payments_per_year": 0},
        {"payments_per_year": 1.5},
        {"schedule_type": "italian"},
    ],
)
def test_invalid_inputs(kwargs):
    args = {
        "principal": CREDIT_PRINCIPAL,
        "annual_rate_percent": 12.0,
        "years": 1.0,
        "payments_per_year": 12,
        "schedule_type": ScheduleType.FRENCH,
    }
    args.update(kwargs)
    with pytest.raises(InvalidInputError):
        build_amortization_table(**args)


def test_period_rate_and_payment_formula():
    assert period_rate(12.0, 12) == pytest.approx(0.01)
    assert french_payment(CREDIT_PRINCIPAL, 0.01, 12) == pytest.approx(888.4879, abs=1e-4)


def test_summary_of_french_table(french_rows):
    s = summarize_table(french_rows, CREDIT_PRINCIPAL, 0.01, ScheduleType.FRENCH)
    assert s.total_periods == 12
    assert s.payment == pytest.approx(CREDIT_FRENCH_PAYMENT)
    assert s.total_paid == pytest.approx(CREDIT_PRINCIPAL + s.total_interest, abs=0.011)
    assert s.total_interest == pytest.approx(661.85, abs=0.05)


def test_summary_of_empty_table_is_rejected():
    with pytest.raises(InvalidInputError):
        summarize_table((), CREDIT_PRINCIPAL, 0.01, "french")


def test_closed_form_tracks_sequential_balances(french_rows):
    closed = french_closed_form_balances(CREDIT_PRINCIPAL, 0.01, 12)
    seq = np.array([r.remaining_balance for r in french_rows])
    assert closed.shape == (12,)
    assert closed[0] == pytest.approx(9211.51, abs=0.01)
    assert np.allclose(seq, closed, atol=0.15)
    assert closed[-1] == pytest.approx(0.0, abs=1e-6)


@pytest.mark.parametrize("annual_rate_percent,years", [(1e-15, 1), (1e6, 30)])
def test_french_payment_out_of_range_is_invalid_input(annual_rate_percent, years):
    # (1 + r)^N either stays at 1.0 or overflows
    with pytest.raises(InvalidInputError, match="French payment|period rate"):
        build_amortization_table(CREDIT_PRINCIPAL, annual_rate_percent, years, 12, ScheduleType.FRENCH)


def test_french_total_paid_includes_last_period_adjustment(french_rows):
    s = summarize_table(french_rows, CREDIT_PRINCIPAL, 0.01, ScheduleType.FRENCH)
    assert s.total_paid == pytest.approx(math.fsum(r.payment for r in french_rows), abs=1e-9)
