# tests/conftest.py
from __future__ import annotations

import logging
import os

import pytest

from fincalc.core.finance import build_amortization_table
from fincalc.core.session import CalculatorSession
from fincalc.history.log import HistoryLog
from fincalc.logging_config import ROOT_LOGGER
from fincalc.schemas.models import InterestModel, ScheduleType
from tests.utils import CREDIT_PPY, CREDIT_PRINCIPAL, CREDIT_RATE_PCT, CREDIT_YEARS


# -------- Environment isolation --------
@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """FINCALC_* variables from the developer shell must not leak into tests."""
    for key in list(os.environ):
        if key.startswith("FINCALC_"):
            monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers attached by configure_logging so they never point at a closed capture stream."""
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.setLevel(logging.NOTSET)


# -------- Domain fixtures --------
@pytest.fixture
def simple_session():
    return CalculatorSession(model=InterestModel.SIMPLE)


@pytest.fixture
def compound_session():
    return CalculatorSession(model=InterestModel.COMPOUND)


@pytest.fixture
def french_rows():
    return build_amortization_table(CREDIT_PRINCIPAL, CREDIT_RATE_PCT, CREDIT_YEARS, CREDIT_PPY, ScheduleType.FRENCH)


@pytest.fixture
def german_rows():
    return build_amortization_table(12_000.0, 12.0, 1, 12, ScheduleType.GERMAN)


@pytest.fixture
def history_log(tmp_path):
    return HistoryLog(tmp_path / "history.json")
