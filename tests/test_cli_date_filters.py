"""Tests for CLI invoice filter helper."""

import click
import pytest

from timebill.cli.date_filters import resolve_cli_invoice_filter
from timebill.utils.date_parser import invoice_filter_start


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_resolve_cli_invoice_filter_rejects_multiple_periods(capsys):
    period_flags = {"ytd": True, "30d": True}

    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_invoice_filter(_ctx(), period=None, period_flags=period_flags)

    assert excinfo.value.exit_code == 1
    err = capsys.readouterr().err
    assert "Only one period option" in err


def test_resolve_cli_invoice_filter_rejects_flag_with_period(capsys):
    period_flags = {"ytd": True}

    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_invoice_filter(_ctx(), period="90d", period_flags=period_flags)

    assert excinfo.value.exit_code == 1
    err = capsys.readouterr().err
    assert "cannot be combined" in err


def test_resolve_cli_invoice_filter_uses_flag():
    period_flags = {"ytd": False, "30d": True, "all": False}

    assert resolve_cli_invoice_filter(_ctx(), period=None, period_flags=period_flags) == invoice_filter_start("30d")


def test_resolve_cli_invoice_filter_defaults_to_ytd():
    period_flags = {"ytd": False, "all": False}

    assert resolve_cli_invoice_filter(_ctx(), period=None, period_flags=period_flags) == invoice_filter_start("ytd")


def test_resolve_cli_invoice_filter_all_time():
    assert resolve_cli_invoice_filter(_ctx(), period="all", period_flags={}) is None


def test_resolve_cli_invoice_filter_unknown_period(capsys):
    with pytest.raises(click.exceptions.Exit):
        resolve_cli_invoice_filter(_ctx(), period="fortnight", period_flags={})

    assert "Unknown period" in capsys.readouterr().err
