"""Invoice commands."""

import click
from timebill.domain.errors import DomainError
from timebill.domain.ledger import BillingLedger
from timebill.domain.settings import SettingsService
from timebill.cli.date_filters import resolve_cli_invoice_filter
from timebill.cli.error_handling import handle_domain_error
from timebill.layout.engine import layout_invoice
from timebill.layout.geometry import PageGeometry
from timebill.render.pdf import PDFRenderer
from timebill.utils.date_parser import format_long_date, format_short_date
from timebill.utils.money import format_currency, format_hours
from timebill.utils.reference_resolver import resolve_entry_ids, resolve_invoice


@click.group("invoice")
def invoice_group():
    """Create, list and render invoices."""
    pass


@invoice_group.command("create")
@click.argument("number")
@click.option("--client", required=True, help="Client name")
@click.option("--address", default="", help="Client address; use \\n for line breaks")
@click.option("--item", "items", multiple=True, help="Unbilled entry ID or unique ID prefix (repeatable)")
@click.option("--all", "bill_all", is_flag=True, help="Bill every unbilled entry")
@click.pass_context
def create_invoice(ctx, number: str, client: str, address: str, items: tuple[str, ...], bill_all: bool):
    """Bill unbilled time entries into a new invoice.

    The invoice uses the hourly rate from your settings.

    Examples:
        timebill invoice create INV-001 --client "Acme Co" --all
        timebill invoice create INV-002 --client "Acme Co" --item 3f2a --item 9bc1
    """
    if bool(items) == bill_all:
        click.echo("Error: Specify either --item (one or more) or --all.", err=True)
        ctx.exit(1)

    store = ctx.obj["store"]
    ledger = BillingLedger(store)
    try:
        settings = SettingsService(store).get()
        unbilled = ledger.list_unbilled()
        if bill_all:
            ids = [entry.id for entry in unbilled]
        else:
            ids = resolve_entry_ids(unbilled, items)
        selected = ledger.select_for_billing(ids)
        invoice = ledger.create_invoice(
            number=number,
            client_name=client,
            client_address=address.replace("\\n", "\n"),
            items=selected,
            rate=settings.hourly_rate,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created invoice {invoice.number} (ID: {invoice.id})")
    click.echo(f"  Client: {invoice.client_name}")
    click.echo(f"  Items: {len(invoice.items)}")
    click.echo(f"  Total Hours: {format_hours(invoice.total_hours)}")
    click.echo(f"  Total Amount: {format_currency(invoice.total_amount)}")


@invoice_group.command("list")
@click.option("--ytd", is_flag=True, help="Invoices from this year (default)")
@click.option("--last-30", "last_30", is_flag=True, help="Invoices from the last 30 days")
@click.option("--last-90", "last_90", is_flag=True, help="Invoices from the last 90 days")
@click.option("--all-time", "all_time", is_flag=True, help="All invoices")
@click.option("--period", help="Period such as 'ytd', 'all' or '<N>d'")
@click.pass_context
def list_invoices(ctx, ytd: bool, last_30: bool, last_90: bool, all_time: bool, period: str | None):
    """List invoices with totals for the chosen period."""
    since = resolve_cli_invoice_filter(
        ctx,
        period=period,
        period_flags={"ytd": ytd, "30d": last_30, "90d": last_90, "all": all_time},
    )
    ledger = BillingLedger(ctx.obj["store"])
    try:
        invoices = ledger.filter_invoices(since)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not invoices:
        click.echo("No invoices found for this period.")
        return

    click.echo(f"\nFound {len(invoices)} invoice(s):")
    click.echo("-" * 100)
    click.echo(f"{'Number':<14} {'Date':<12} {'Client':<30} {'Hours':>8} {'Amount':>14}  {'Status':<8}")
    click.echo("-" * 100)
    for invoice in invoices:
        click.echo(
            f"{invoice.number[:14]:<14} {format_short_date(invoice.date):<12} {invoice.client_name[:30]:<30} "
            f"{format_hours(invoice.total_hours):>8} {format_currency(invoice.total_amount):>14}  "
            f"{'Paid' if invoice.is_paid else 'Unpaid':<8}"
        )
    click.echo("-" * 100)

    summary = ledger.summarize(invoices)
    click.echo(f"Total Hours:  {format_hours(summary.total_hours)}")
    click.echo(f"Total Billed: {format_currency(summary.total_amount)}")
    click.echo(f"Paid:         {format_currency(summary.total_paid)}")
    click.echo(f"Outstanding:  {format_currency(summary.total_outstanding)}")


@invoice_group.command("show")
@click.argument("invoice_ref")
@click.pass_context
def show_invoice(ctx, invoice_ref: str):
    """Show an invoice by ID, ID prefix or invoice number."""
    ledger = BillingLedger(ctx.obj["store"])
    try:
        invoice = resolve_invoice(ledger.list_invoices(), invoice_ref)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Invoice {invoice.number} (ID: {invoice.id})")
    click.echo(f"  Date: {format_long_date(invoice.date)}")
    click.echo(f"  Client: {invoice.client_name}")
    for line in invoice.client_address.splitlines():
        click.echo(f"          {line}")
    click.echo(f"  Status: {'Paid' if invoice.is_paid else 'Unpaid'}")
    click.echo(f"  Rate: {format_currency(invoice.hourly_rate)}/hour")
    click.echo("-" * 80)
    for item in invoice.items:
        click.echo(f"  {format_short_date(item.date):<12} {format_hours(item.hours):>8}  {item.description}")
    click.echo("-" * 80)
    click.echo(f"  Total Hours: {format_hours(invoice.total_hours)}")
    click.echo(f"  Total Amount: {format_currency(invoice.total_amount)}")


@invoice_group.command("paid")
@click.argument("invoice_ref")
@click.option("--unpaid", is_flag=True, help="Mark the invoice as unpaid instead")
@click.pass_context
def mark_paid(ctx, invoice_ref: str, unpaid: bool):
    """Mark an invoice as paid (or unpaid with --unpaid)."""
    ledger = BillingLedger(ctx.obj["store"])
    try:
        invoice = resolve_invoice(ledger.list_invoices(), invoice_ref)
        invoice = ledger.set_paid(invoice.id, not unpaid)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Invoice {invoice.number} marked {'paid' if invoice.is_paid else 'unpaid'}")


@invoice_group.command("render")
@click.argument("invoice_ref")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False),
    default=".",
    show_default=True,
    help="Directory to write the PDF to",
)
@click.option(
    "--page-size",
    type=click.Choice(["a4", "letter"], case_sensitive=False),
    default="a4",
    show_default=True,
)
@click.pass_context
def render_invoice(ctx, invoice_ref: str, output_dir: str, page_size: str):
    """Render an invoice to Invoice-<number>.pdf."""
    store = ctx.obj["store"]
    ledger = BillingLedger(store)
    renderer = PDFRenderer()
    try:
        invoice = resolve_invoice(ledger.list_invoices(), invoice_ref)
        settings = SettingsService(store).get()
        geometry = PageGeometry.named(page_size)
        pages = layout_invoice(invoice, settings, geometry, renderer.measurer())
        path = renderer.write(pages, geometry, invoice, output_dir)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Wrote {path} ({len(pages)} page{'s' if len(pages) != 1 else ''})")


def register_commands(cli):
    """Register invoice commands with main CLI."""
    cli.add_command(invoice_group)
