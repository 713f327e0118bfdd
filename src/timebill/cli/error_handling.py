"""CLI error handling helpers."""

import click

from timebill.domain.errors import DomainError, NotFoundError, RenderError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure.

    Render failures name the invoice and point out that its billing state is
    untouched; lookups that miss suggest where to find valid references.
    """
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, RenderError) and error.invoice_number:
        click.echo(
            f"Invoice {error.invoice_number} is unchanged; fix the problem and run "
            f"'timebill invoice render {error.invoice_number}' again.",
            err=True,
        )
    elif isinstance(error, NotFoundError):
        click.echo("Hint: 'timebill unbilled' and 'timebill invoice list --all-time' show valid IDs.", err=True)
    ctx.exit(1)
