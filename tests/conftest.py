"""Shared pytest fixtures for BreakBank tests."""

import os
import sys
from datetime import datetime

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from breakbank.storage.db import configure_engine, init_db
from breakbank.timer.engine import TimerEngine

from helpers import FakeClock


# 09:00 on a June weekday: well past the 05:00 reset, no DST edge nearby.
START = datetime(2026, 6, 10, 9, 0, 0)


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def clock():
    return FakeClock(START)


@pytest.fixture
def engine(qapp, clock):
    """Fresh TimerEngine backed by the test database."""
    return TimerEngine(parent=None, db_enabled=True, clock=clock)


@pytest.fixture
def engine_no_db(qapp, clock):
    """Fresh TimerEngine with storage disabled (pure state-machine tests)."""
    return TimerEngine(parent=None, db_enabled=False, clock=clock)
