"""Utility functions for timebill."""

from timebill.utils.date_parser import parse_date, invoice_filter_start
from timebill.utils.amount_parser import parse_amount, parse_hours
from timebill.utils.money import money, format_currency, format_hours

__all__ = [
    "parse_date",
    "invoice_filter_start",
    "parse_amount",
    "parse_hours",
    "money",
    "format_currency",
    "format_hours",
]
