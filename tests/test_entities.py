"""Tests for domain entities."""

import pytest
from dataclasses import replace
from datetime import datetime, date, UTC
from decimal import Decimal

from timebill.domain.entities import Invoice, TimeEntry, UserSettings


def _entry(entry_id: str = "e1", hours: str = "1.5") -> TimeEntry:
    return TimeEntry(
        id=entry_id,
        date=date(2024, 1, 15),
        description="Consulting",
        hours=Decimal(hours),
        created_at=datetime(2024, 1, 15, 9, 0, tzinfo=UTC),
    )


class TestUserSettings:
    """Tests for UserSettings entity."""

    def test_empty_settings(self):
        settings = UserSettings.empty()
        assert settings.name == ""
        assert settings.address == ""
        assert settings.hourly_rate == Decimal("0")

    def test_settings_immutability(self):
        settings = UserSettings(name="Jane", address="1 Main St", hourly_rate=Decimal("100"))
        with pytest.raises(Exception):  # dataclass frozen raises FrozenInstanceError
            settings.hourly_rate = Decimal("200")


class TestTimeEntry:
    """Tests for TimeEntry entity."""

    def test_create_time_entry(self):
        entry = _entry()
        assert entry.id == "e1"
        assert entry.date == date(2024, 1, 15)
        assert entry.hours == Decimal("1.5")
        assert isinstance(entry.created_at, datetime)

    def test_time_entry_equality(self):
        assert _entry("e1") == _entry("e1")
        assert _entry("e1") != _entry("e2")


class TestInvoice:
    """Tests for Invoice entity."""

    def test_only_paid_flag_changes(self):
        now = datetime(2024, 2, 1, tzinfo=UTC)
        invoice = Invoice(
            id="i1",
            number="INV-001",
            date=now,
            client_name="Acme Co",
            client_address="2 Oak Ave",
            items=(_entry(),),
            total_hours=Decimal("1.5"),
            total_amount=Decimal("150.00"),
            is_paid=False,
            created_at=now,
            hourly_rate=Decimal("100"),
        )
        with pytest.raises(Exception):
            invoice.total_amount = Decimal("0")

        paid = replace(invoice, is_paid=True)
        assert paid.is_paid is True
        assert invoice.is_paid is False
        assert paid.items == invoice.items
        assert paid.total_amount == invoice.total_amount
