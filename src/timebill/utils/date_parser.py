"""Date parsing, formatting and invoice filter periods."""

from datetime import date, datetime, timedelta
import re

from dateutil import parser as date_parser


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024", ...) and the
    relative words "today", "yesterday" and "tomorrow".

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def _local(value: date | datetime) -> date | datetime:
    # Timestamps are stored in UTC; show them on the local calendar day
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone()
    return value


def format_long_date(value: date | datetime) -> str:
    """Format a date for the invoice heading, e.g. "January 5, 2024"."""
    value = _local(value)
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def format_short_date(value: date | datetime) -> str:
    """Format a date for table rows, e.g. "01/05/2024"."""
    return _local(value).strftime("%m/%d/%Y")


_LAST_N_DAYS = re.compile(r"^(?:last-)?(\d+)(?:d|-days)$")


def invoice_filter_start(period: str, today: date | None = None) -> date | None:
    """Get the inclusive lower bound for an invoice list filter.

    Args:
        period: "ytd" (year to date), "all" (all time), or "<N>d" /
            "last-<N>-days" style strings such as "30d" and "90d"
        today: Reference date, defaults to today

    Returns:
        First date included by the filter, or None for all time

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    if today is None:
        today = date.today()

    if period in ("ytd", "year-to-date", "this-year"):
        return today.replace(month=1, day=1)

    if period in ("all", "all-time"):
        return None

    match = _LAST_N_DAYS.match(period)
    if match:
        return today - timedelta(days=int(match.group(1)))

    raise ValueError(
        f"Unknown period: '{period}'. Supported periods: ytd, all, <N>d (e.g. 30d, 90d)"
    )
