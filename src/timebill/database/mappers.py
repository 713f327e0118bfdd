"""Mapper functions to convert between domain entities and stored JSON.

Persisted shapes use camelCase keys, ISO-8601 dates and JSON numbers.
Anything that does not match is rejected with a ValidationError at load
time instead of flowing into billing arithmetic.
"""

from datetime import date, datetime, UTC
from decimal import Decimal
from typing import Any

from dateutil.parser import isoparse

from timebill.domain import entities as domain
from timebill.domain.errors import ValidationError, malformed_record
from timebill.utils.money import to_decimal


def _require(record: Any, field: str, key: str) -> Any:
    if not isinstance(record, dict):
        raise ValidationError(malformed_record(key, f"expected an object, got {type(record).__name__}"))
    if field not in record:
        raise ValidationError(malformed_record(key, f"missing field '{field}'"))
    return record[field]


def _str(record: Any, field: str, key: str) -> str:
    value = _require(record, field, key)
    if not isinstance(value, str):
        raise ValidationError(malformed_record(key, f"field '{field}' must be a string"))
    return value


def _number(record: Any, field: str, key: str) -> Decimal:
    value = _require(record, field, key)
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValidationError(malformed_record(key, f"field '{field}' must be a number"))
    try:
        return to_decimal(value)
    except ValueError as e:
        raise ValidationError(malformed_record(key, f"field '{field}': {e}")) from e


def _timestamp(record: Any, field: str, key: str) -> datetime:
    value = _str(record, field, key)
    try:
        parsed = isoparse(value)
    except ValueError as e:
        raise ValidationError(malformed_record(key, f"field '{field}' is not ISO-8601: {value!r}")) from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _calendar_date(record: Any, field: str, key: str) -> date:
    # Full timestamps are accepted; only the calendar part is kept.
    value = _str(record, field, key)
    try:
        return isoparse(value).date()
    except ValueError as e:
        raise ValidationError(malformed_record(key, f"field '{field}' is not ISO-8601: {value!r}")) from e


def _json_number(value: Decimal) -> int | float:
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def settings_to_dict(settings: domain.UserSettings) -> dict[str, Any]:
    """Convert UserSettings to its stored JSON shape."""
    return {
        "name": settings.name,
        "address": settings.address,
        "hourlyRate": _json_number(settings.hourly_rate),
    }


def settings_from_dict(record: Any, key: str = "userSettings") -> domain.UserSettings:
    """Convert stored JSON to UserSettings."""
    return domain.UserSettings(
        name=_str(record, "name", key),
        address=_str(record, "address", key),
        hourly_rate=_number(record, "hourlyRate", key),
    )


def time_entry_to_dict(entry: domain.TimeEntry) -> dict[str, Any]:
    """Convert a TimeEntry to its stored JSON shape."""
    return {
        "id": entry.id,
        "date": entry.date.isoformat(),
        "description": entry.description,
        "hours": _json_number(entry.hours),
        "createdAt": entry.created_at.isoformat(),
    }


def time_entry_from_dict(record: Any, key: str = "unbilledItems") -> domain.TimeEntry:
    """Convert stored JSON to a TimeEntry."""
    return domain.TimeEntry(
        id=_str(record, "id", key),
        date=_calendar_date(record, "date", key),
        description=_str(record, "description", key),
        hours=_number(record, "hours", key),
        created_at=_timestamp(record, "createdAt", key),
    )


def invoice_to_dict(invoice: domain.Invoice) -> dict[str, Any]:
    """Convert an Invoice to its stored JSON shape."""
    return {
        "id": invoice.id,
        "number": invoice.number,
        "date": invoice.date.isoformat(),
        "clientName": invoice.client_name,
        "clientAddress": invoice.client_address,
        "items": [time_entry_to_dict(item) for item in invoice.items],
        "totalHours": _json_number(invoice.total_hours),
        "totalAmount": _json_number(invoice.total_amount),
        "isPaid": invoice.is_paid,
        "createdAt": invoice.created_at.isoformat(),
        "hourlyRate": _json_number(invoice.hourly_rate),
    }


def invoice_from_dict(record: Any, key: str = "invoices") -> domain.Invoice:
    """Convert stored JSON to an Invoice.

    Records written before the captured rate was stored derive it from
    their totals.
    """
    items = _require(record, "items", key)
    if not isinstance(items, list):
        raise ValidationError(malformed_record(key, "field 'items' must be a list"))
    is_paid = _require(record, "isPaid", key)
    if not isinstance(is_paid, bool):
        raise ValidationError(malformed_record(key, "field 'isPaid' must be a boolean"))

    total_hours = _number(record, "totalHours", key)
    total_amount = _number(record, "totalAmount", key)
    if "hourlyRate" in record:
        hourly_rate = _number(record, "hourlyRate", key)
    elif total_hours:
        hourly_rate = total_amount / total_hours
    else:
        hourly_rate = Decimal("0")

    client_address = record.get("clientAddress") if isinstance(record, dict) else None
    if client_address is not None and not isinstance(client_address, str):
        raise ValidationError(malformed_record(key, "field 'clientAddress' must be a string"))

    return domain.Invoice(
        id=_str(record, "id", key),
        number=_str(record, "number", key),
        date=_timestamp(record, "date", key),
        client_name=_str(record, "clientName", key),
        client_address=client_address or "",
        items=tuple(time_entry_from_dict(item, key) for item in items),
        total_hours=total_hours,
        total_amount=total_amount,
        is_paid=is_paid,
        created_at=_timestamp(record, "createdAt", key),
        hourly_rate=hourly_rate,
    )


def entries_from_list(records: Any, key: str) -> list[domain.TimeEntry]:
    """Convert a stored list of time entries."""
    if not isinstance(records, list):
        raise ValidationError(malformed_record(key, "expected a list"))
    return [time_entry_from_dict(record, key) for record in records]


def invoices_from_list(records: Any, key: str) -> list[domain.Invoice]:
    """Convert a stored list of invoices."""
    if not isinstance(records, list):
        raise ValidationError(malformed_record(key, "expected a list"))
    return [invoice_from_dict(record, key) for record in records]
