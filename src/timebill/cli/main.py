"""Main CLI entry point."""

import click

from timebill.config.logging import configure_logging
from timebill.database.factories import create_sqlite_store

# Import and register all commands at module level
from timebill.cli.commands import (
    settings,
    log,
    invoice,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides TIMEBILL_DB_PATH environment variable)",
    envvar="TIMEBILL_DB_PATH",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging on stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool, log_json: bool):
    """Timebill - billable hours and invoices.

    Log time as you work, bill unbilled entries into client invoices and
    render them as PDF documents.
    """
    ctx.ensure_object(dict)
    configure_logging(
        verbose=verbose,
        log_json=log_json,
        context={"command": ctx.invoked_subcommand} if ctx.invoked_subcommand else None,
    )

    # Open the store only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        store = create_sqlite_store(database_path=db_path)
        store.connect()
        ctx.obj["store"] = store
        ctx.call_on_close(store.disconnect)


# Register all commands
settings.register_commands(cli)
log.register_commands(cli)
invoice.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
