"""Time logging commands."""

import click
from timebill.domain.entities import TimeEntryDraft
from timebill.domain.errors import DomainError
from timebill.domain.ledger import BillingLedger, preview_totals
from timebill.domain.settings import SettingsService
from timebill.cli.error_handling import handle_domain_error
from timebill.utils.amount_parser import parse_hours
from timebill.utils.date_parser import parse_date, format_short_date
from timebill.utils.money import format_currency, format_hours


@click.command("log")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Date worked (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--hours", required=True, help="Hours worked (e.g., 1.5 or 0.25)")
@click.option("--description", "-d", required=True, help="What the work was")
@click.pass_context
def log_time(ctx, date: str, hours: str, description: str):
    """Log billable time.

    Examples:
        timebill log --hours 2 -d "Kickoff meeting"
        timebill log --date yesterday --hours 1.25 -d "Bug fixes"
    """
    ledger = BillingLedger(ctx.obj["store"])

    try:
        work_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        work_hours = parse_hours(hours)
    except ValueError as e:
        click.echo(f"Error: Invalid hours: {e}", err=True)
        ctx.exit(1)

    try:
        entry = ledger.log_time(
            TimeEntryDraft(date=work_date, description=description, hours=work_hours)
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Logged time entry {entry.id}")
    click.echo(f"  Date: {format_short_date(entry.date)}")
    click.echo(f"  Hours: {format_hours(entry.hours)}")
    click.echo(f"  Description: {entry.description}")


@click.command("unbilled")
@click.pass_context
def list_unbilled(ctx):
    """List time entries that are not on an invoice yet."""
    store = ctx.obj["store"]
    try:
        entries = BillingLedger(store).list_unbilled()
        rate = SettingsService(store).get().hourly_rate
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not entries:
        click.echo("No unbilled items yet. Log time to get started.")
        return

    click.echo(f"\nFound {len(entries)} unbilled entr{'y' if len(entries) == 1 else 'ies'}:")
    click.echo("-" * 100)
    click.echo(f"{'ID':<34} {'Date':<12} {'Hours':>8}  {'Description':<40}")
    click.echo("-" * 100)
    for entry in entries:
        click.echo(
            f"{entry.id:<34} {format_short_date(entry.date):<12} {format_hours(entry.hours):>8}  "
            f"{entry.description[:40]:<40}"
        )
    click.echo("-" * 100)

    total_hours, total_amount = preview_totals(entries, rate)
    click.echo(f"Total Hours:  {format_hours(total_hours)}")
    click.echo(f"Total Amount: {format_currency(total_amount)} at {format_currency(rate)}/hour")


def register_commands(cli):
    """Register time logging commands with main CLI."""
    cli.add_command(log_time)
    cli.add_command(list_unbilled)
