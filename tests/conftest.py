"""Shared pytest fixtures for timebill tests."""

import logging
import tempfile
import time
import os
from datetime import date
from decimal import Decimal
import pytest
import structlog

from timebill.database.factories import create_sqlite_store
from timebill.database.memory import MemoryStore
from timebill.domain.entities import TimeEntryDraft
from timebill.domain.ledger import BillingLedger
from timebill.domain.settings import SettingsService


@pytest.fixture
def temp_store():
    """Create a temporary SQLite store for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_store(database_path=db_path)
    store.connect()

    yield store

    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def memory_store():
    """Create an empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def ledger(temp_store):
    """Create a BillingLedger with a temporary store."""
    return BillingLedger(temp_store)


@pytest.fixture
def settings_service(temp_store):
    """Create a SettingsService with a temporary store."""
    return SettingsService(temp_store)


@pytest.fixture
def jane_settings(settings_service):
    """Save the sender settings used across scenarios."""
    return settings_service.save(name="Jane Doe", address="1 Main St", hourly_rate=Decimal("100"))


@pytest.fixture
def sample_entries(ledger):
    """Log two entries: 2 hours and 1.5 hours."""
    first = ledger.log_time(
        TimeEntryDraft(date=date(2024, 3, 1), description="Design review", hours=Decimal("2"))
    )
    second = ledger.log_time(
        TimeEntryDraft(date=date(2024, 3, 2), description="Implementation", hours=Decimal("1.5"))
    )
    return [first, second]


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def db_path(tmp_path):
    """Path for a CLI database file."""
    return str(tmp_path / "timebill.db")


@pytest.fixture(autouse=True)
def _restore_logging():
    """Restore root logger state after each test.

    The CLI reconfigures logging on every invocation.
    """
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    timebill_logger = logging.getLogger("timebill")
    timebill_level = timebill_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    timebill_logger.setLevel(timebill_level)
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def new_york_time(monkeypatch):
    """Run the test with the local timezone set to America/New_York."""
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
