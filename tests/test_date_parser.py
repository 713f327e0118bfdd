"""Tests for date parsing, formatting and invoice filter periods."""

import pytest
from datetime import date, datetime, timedelta, UTC

from timebill.utils.date_parser import (
    format_long_date,
    format_short_date,
    invoice_filter_start,
    parse_date,
)


class TestParseDate:
    def test_iso_date(self):
        assert parse_date("2024-01-15") == date(2024, 1, 15)

    def test_long_date(self):
        assert parse_date("January 15, 2024") == date(2024, 1, 15)

    def test_relative_dates(self):
        today = date.today()
        assert parse_date("today") == today
        assert parse_date("Yesterday") == today - timedelta(days=1)
        assert parse_date("tomorrow") == today + timedelta(days=1)

    def test_invalid_date(self):
        with pytest.raises(ValueError, match="Could not parse date"):
            parse_date("banana")


class TestFormatting:
    def test_long_date_has_no_zero_padding(self):
        assert format_long_date(date(2024, 1, 5)) == "January 5, 2024"
        assert format_long_date(datetime(2024, 12, 25, 13, 0)) == "December 25, 2024"

    def test_short_date(self):
        assert format_short_date(date(2024, 1, 5)) == "01/05/2024"

    def test_utc_timestamps_use_local_calendar_day(self, new_york_time):
        evening = datetime(2024, 3, 2, 2, 30, tzinfo=UTC)
        assert format_long_date(evening) == "March 1, 2024"
        assert format_short_date(evening) == "03/01/2024"

    def test_naive_timestamps_are_not_shifted(self, new_york_time):
        assert format_short_date(datetime(2024, 3, 2, 2, 30)) == "03/02/2024"


class TestInvoiceFilterStart:
    TODAY = date(2024, 6, 15)

    def test_year_to_date(self):
        assert invoice_filter_start("ytd", today=self.TODAY) == date(2024, 1, 1)

    def test_last_30_days(self):
        assert invoice_filter_start("30d", today=self.TODAY) == date(2024, 5, 16)

    def test_last_90_days(self):
        assert invoice_filter_start("90d", today=self.TODAY) == self.TODAY - timedelta(days=90)

    def test_last_n_days_long_form(self):
        assert invoice_filter_start("last-7-days", today=self.TODAY) == date(2024, 6, 8)

    def test_all_time(self):
        assert invoice_filter_start("all", today=self.TODAY) is None
        assert invoice_filter_start("ALL-TIME", today=self.TODAY) is None

    def test_defaults_to_today(self):
        assert invoice_filter_start("ytd") == date.today().replace(month=1, day=1)

    def test_unknown_period(self):
        with pytest.raises(ValueError, match="Unknown period"):
            invoice_filter_start("fortnight")
