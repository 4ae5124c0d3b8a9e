"""Pytest configuration for test isolation.

Recognition settings are read from ``BILL_RECOGNITION_*`` environment
variables and the bookkeeping database client keeps a process-wide engine.
Either can leak between tests (a developer's shell or ``.env`` enabling the
feature, or an engine still bound to a previous test's SQLite file), so an
autouse fixture clears both around every test. CLI tests configure package
logging, which is undone the same way.
"""

from __future__ import annotations

import os

import pytest
from bill_recognition.logging_setup import reset_logging
from ledger_db.client import reset_engine


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch):
    """Drop recognition and database env vars and reset the shared engine."""

    for key in list(os.environ):
        if key.startswith("BILL_RECOGNITION_") or key == "LEDGER_DATABASE_URL":
            monkeypatch.delenv(key, raising=False)
    reset_engine()
    yield
    reset_engine()


@pytest.fixture(autouse=True)
def _reset_package_logging():
    """Undo ``configure_logging()`` from CLI tests so ``caplog`` keeps working."""

    yield
    reset_logging()
