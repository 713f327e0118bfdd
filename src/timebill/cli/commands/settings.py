"""Sender settings commands."""

import click
from timebill.domain.errors import DomainError
from timebill.domain.settings import SettingsService
from timebill.cli.error_handling import handle_domain_error
from timebill.utils.amount_parser import parse_amount
from timebill.utils.money import format_currency


@click.group("settings")
def settings_group():
    """Manage your name, address and hourly rate."""
    pass


@settings_group.command("show")
@click.pass_context
def show_settings(ctx):
    """Show the current settings."""
    service = SettingsService(ctx.obj["store"])
    try:
        settings = service.get()
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Name:        {settings.name or '(not set)'}")
    click.echo("Address:")
    for line in (settings.address or "(not set)").splitlines():
        click.echo(f"  {line}")
    click.echo(f"Hourly rate: {format_currency(settings.hourly_rate)}")


@settings_group.command("set")
@click.option("--name", help="Your name or business name")
@click.option("--address", help="Your address; use \\n for line breaks")
@click.option("--rate", help="Hourly rate (e.g., 100 or 87.50)")
@click.pass_context
def set_settings(ctx, name: str | None, address: str | None, rate: str | None):
    """Update settings. Options that are not given keep their value.

    Examples:
        timebill settings set --name "Jane Doe" --address "1 Main St\\nSpringfield" --rate 100
    """
    service = SettingsService(ctx.obj["store"])
    try:
        current = service.get()
        hourly_rate = parse_amount(rate) if rate is not None else current.hourly_rate
        settings = service.save(
            name=name if name is not None else current.name,
            address=address.replace("\\n", "\n") if address is not None else current.address,
            hourly_rate=hourly_rate,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Saved settings for {settings.name or '(no name)'} at {format_currency(settings.hourly_rate)}/hour")


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(settings_group)
