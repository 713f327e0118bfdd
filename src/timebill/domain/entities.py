"""Domain model entities for timebill.

These are pure data classes representing business concepts, independent of
how they are persisted. Money and hour quantities are Decimals so that totals
never drift through float arithmetic.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal


@dataclass(frozen=True)
class UserSettings:
    """Sender identity and the current hourly rate."""

    name: str
    address: str
    hourly_rate: Decimal

    @classmethod
    def empty(cls) -> "UserSettings":
        """Settings used before the user has saved any."""
        return cls(name="", address="", hourly_rate=Decimal("0"))


@dataclass(frozen=True)
class TimeEntryDraft:
    """User input for a new time entry, before it is logged."""

    date: date
    description: str
    hours: Decimal


@dataclass(frozen=True)
class TimeEntry:
    """Logged unit of billable work."""

    id: str
    date: date
    description: str
    hours: Decimal
    created_at: datetime


@dataclass(frozen=True)
class Invoice:
    """Frozen snapshot of billed time entries.

    ``hourly_rate`` is the rate captured when the invoice was created; only
    ``is_paid`` changes afterwards.
    """

    id: str
    number: str
    date: datetime
    client_name: str
    client_address: str
    items: tuple[TimeEntry, ...]
    total_hours: Decimal
    total_amount: Decimal
    is_paid: bool
    created_at: datetime
    hourly_rate: Decimal = field(default=Decimal("0"))


@dataclass(frozen=True)
class InvoiceSummary:
    """Aggregate figures for a list of invoices."""

    count: int
    total_hours: Decimal
    total_amount: Decimal
    total_paid: Decimal
    total_outstanding: Decimal
