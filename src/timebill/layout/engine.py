"""Invoice document layout.

``layout_invoice`` turns an invoice and the sender's settings into pages of
draw instructions. It performs no I/O and keeps no state between calls; the
vertical cursor lives only for the duration of one call.

Rows are never split across pages: the page break check runs before a row is
placed. The only exception is a row whose description alone is taller than an
empty page, which continues line by line onto following pages.
"""

from typing import Optional

from timebill.domain.entities import Invoice, TimeEntry, UserSettings
from timebill.layout.geometry import PageGeometry, TableColumns
from timebill.layout.instructions import Color, Instruction, Line, Page, Rect, Text
from timebill.layout.text import FixedWidthMeasurer, TextMeasurer, wrap_text
from timebill.utils.date_parser import format_long_date, format_short_date
from timebill.utils.money import format_currency, format_hours, line_amount

PAID_COLOR: Color = (0, 128, 0)
COURTESY_MESSAGE = "Thank you for your business"

# Baseline offset of the first text line inside a table row
ROW_BASELINE = 5.0
HEADER_BASELINE = 6.5
TITLE_ADVANCE = 10.0
META_ADVANCE = 6.0
SECTION_GAP = 9.0
STATUS_GAP = 15.0


def address_lines(address: Optional[str]) -> list[str]:
    """Split a multi-line address into its non-empty lines."""
    if not address:
        return []
    return [line.strip() for line in address.splitlines() if line.strip()]


class _PageBuilder:
    """Accumulates pages and tracks the cursor for one layout call."""

    def __init__(self, geometry: PageGeometry):
        self.geometry = geometry
        self.pages: list[Page] = []
        self._current: list[Instruction] = []
        self.y = geometry.top

    def add(self, instruction: Instruction) -> None:
        self._current.append(instruction)

    def fits(self, height: float) -> bool:
        return self.y + height <= self.geometry.page_break_y

    def at_page_top(self) -> bool:
        return self.y <= self.geometry.top

    def new_page(self) -> None:
        self.pages.append(Page(number=len(self.pages) + 1, instructions=tuple(self._current)))
        self._current = []
        self.y = self.geometry.top

    def ensure_room(self, height: float) -> None:
        """Start a new page unless ``height`` fits below the cursor."""
        if not self.fits(height) and not self.at_page_top():
            self.new_page()

    def finish(self) -> list[Page]:
        if self._current or not self.pages:
            self.new_page()
        return self.pages


def layout_invoice(
    invoice: Invoice,
    settings: UserSettings,
    geometry: Optional[PageGeometry] = None,
    measurer: Optional[TextMeasurer] = None,
) -> list[Page]:
    """Lay out an invoice document.

    Args:
        invoice: Invoice to lay out
        settings: Sender identity shown in the From block
        geometry: Page geometry, A4 by default
        measurer: Text measurer used for wrapping descriptions

    Returns:
        Pages in order, each with its draw instructions

    Raises:
        LayoutError: If the geometry cannot hold the table
    """
    geometry = geometry or PageGeometry.a4()
    measurer = measurer or FixedWidthMeasurer()
    columns = TableColumns.from_geometry(geometry)
    builder = _PageBuilder(geometry)

    _layout_heading(builder, invoice)
    _layout_parties(builder, invoice, settings)
    _layout_table_header(builder, columns)
    for item in invoice.items:
        _layout_item(builder, columns, measurer, item, invoice)
    _layout_totals(builder, columns, invoice)
    _layout_status(builder, invoice)
    return builder.finish()


def _layout_heading(builder: _PageBuilder, invoice: Invoice) -> None:
    g = builder.geometry
    builder.y += ROW_BASELINE
    builder.add(Text(g.left, builder.y, "INVOICE", g.title_size, bold=True))
    builder.y += TITLE_ADVANCE
    builder.add(Text(g.left, builder.y, f"Invoice #: {invoice.number}", g.body_size))
    builder.y += META_ADVANCE
    builder.add(Text(g.left, builder.y, f"Date: {format_long_date(invoice.date)}", g.body_size))
    builder.y += SECTION_GAP + META_ADVANCE


def _party_lines(name: str, address: Optional[str]) -> list[str]:
    return [line for line in [name.strip()] + address_lines(address) if line]


def _break_before_text(builder: _PageBuilder) -> None:
    """Move to a new page if a baseline at the cursor would pass the threshold."""
    if builder.y > builder.geometry.page_break_y:
        builder.new_page()
        builder.y += ROW_BASELINE


def _layout_parties(builder: _PageBuilder, invoice: Invoice, settings: UserSettings) -> None:
    """Lay out the From and To columns side by side.

    Both columns advance by the same pitches, so their lines are placed row by
    row; the block breaks across pages between rows and the cursor ends below
    the longer column.
    """
    g = builder.geometry
    columns = (
        (g.left, "From:", _party_lines(settings.name, settings.address)),
        (g.left + g.content_width / 2, "To:", _party_lines(invoice.client_name, invoice.client_address)),
    )

    _break_before_text(builder)
    for x, label, _ in columns:
        builder.add(Text(x, builder.y, label, g.heading_size, bold=True))
    builder.y += g.line_pitch

    for row in range(max(len(lines) for _, _, lines in columns)):
        _break_before_text(builder)
        for x, _, lines in columns:
            if row < len(lines):
                builder.add(Text(x, builder.y, lines[row], g.body_size))
        builder.y += g.address_pitch
    builder.y += g.address_pitch


def _layout_table_header(builder: _PageBuilder, columns: TableColumns) -> None:
    g = builder.geometry
    builder.ensure_room(g.header_height + g.row_pitch)
    y = builder.y
    baseline = y + HEADER_BASELINE
    builder.add(Rect(columns.left, y, columns.right - columns.left, g.header_height))
    builder.add(Text(columns.date_x, baseline, "Date", g.table_size, bold=True))
    builder.add(Text(columns.description_x, baseline, "Description", g.table_size, bold=True))
    builder.add(Text(columns.hours_right, baseline, "Hours", g.table_size, bold=True, align="right"))
    builder.add(Text(columns.rate_right, baseline, "Rate", g.table_size, bold=True, align="right"))
    builder.add(Text(columns.amount_right, baseline, "Amount", g.table_size, bold=True, align="right"))
    builder.y += g.header_height


def _row_height(geometry: PageGeometry, line_count: int) -> float:
    return max(geometry.row_pitch, line_count * geometry.line_pitch)


def _layout_item(
    builder: _PageBuilder,
    columns: TableColumns,
    measurer: TextMeasurer,
    item: TimeEntry,
    invoice: Invoice,
) -> None:
    g = builder.geometry
    ref = f"item:{item.id}"
    lines = wrap_text(item.description, columns.description_width, measurer, g.table_size)
    height = _row_height(g, len(lines))

    builder.ensure_room(height)
    top = builder.y
    baseline = top + ROW_BASELINE

    builder.add(Text(columns.date_x, baseline, format_short_date(item.date), g.table_size, ref=ref))
    builder.add(Text(columns.hours_right, baseline, format_hours(item.hours), g.table_size, align="right", ref=ref))
    builder.add(Text(columns.rate_right, baseline, format_currency(invoice.hourly_rate), g.table_size, align="right", ref=ref))
    builder.add(
        Text(
            columns.amount_right,
            baseline,
            format_currency(line_amount(item.hours, invoice.hourly_rate)),
            g.table_size,
            align="right",
            ref=ref,
        )
    )

    if builder.fits(height):
        for index, line in enumerate(lines):
            builder.add(Text(columns.description_x, baseline + index * g.line_pitch, line, g.table_size, ref=ref))
        builder.y = top + height
        return

    # Description taller than an empty page: continue it on following pages
    y = top
    for line in lines:
        if not builder.fits(g.line_pitch):
            builder.new_page()
            y = builder.y
        builder.add(Text(columns.description_x, y + ROW_BASELINE, line, g.table_size, ref=ref))
        y += g.line_pitch
        builder.y = y


def _layout_totals(builder: _PageBuilder, columns: TableColumns, invoice: Invoice) -> None:
    g = builder.geometry
    builder.ensure_room(3 * g.line_pitch)
    builder.add(Line(columns.left, builder.y, columns.right, builder.y))
    builder.y += g.line_pitch
    builder.add(Text(columns.rate_right, builder.y, "Total Hours:", g.body_size, bold=True, align="right"))
    builder.add(Text(columns.amount_right, builder.y, format_hours(invoice.total_hours), g.body_size, bold=True, align="right"))
    builder.y += g.line_pitch
    builder.add(Text(columns.rate_right, builder.y, "Total Amount:", g.body_size, bold=True, align="right"))
    builder.add(Text(columns.amount_right, builder.y, format_currency(invoice.total_amount), g.body_size, bold=True, align="right"))


def _layout_status(builder: _PageBuilder, invoice: Invoice) -> None:
    g = builder.geometry
    builder.ensure_room(STATUS_GAP)
    builder.y += STATUS_GAP if not builder.at_page_top() else ROW_BASELINE
    center = g.left + g.content_width / 2
    if invoice.is_paid:
        builder.add(Text(center, builder.y, "PAID", g.heading_size, bold=True, align="center", color=PAID_COLOR))
    else:
        builder.add(Text(center, builder.y, COURTESY_MESSAGE, g.heading_size, align="center"))
