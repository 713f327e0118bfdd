"""CLI helpers for invoice list filters."""

from datetime import date

import click

from timebill.utils.date_parser import invoice_filter_start


def resolve_cli_invoice_filter(
    ctx,
    *,
    period: str | None,
    period_flags: dict[str, bool],
    default_period: str = "ytd",
) -> date | None:
    """Resolve the lower date bound from period flags or an explicit --period."""
    period_count = sum(1 for is_set in period_flags.values() if is_set)

    if period_count > 1:
        click.echo(
            "Error: Only one period option (--ytd, --last-30, --last-90, --all-time) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if period_count > 0 and period:
        click.echo(
            "Error: Period options (--ytd, --last-30, etc.) cannot be combined with --period.",
            err=True,
        )
        ctx.exit(1)

    if period_count == 1:
        for name, is_set in period_flags.items():
            if is_set:
                period = name
                break

    try:
        return invoice_filter_start(period or default_period)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
