"""Page geometry and table column positions, in millimetres."""

from dataclasses import dataclass

from timebill.domain.errors import LayoutError

MIN_DESCRIPTION_WIDTH = 20.0


@dataclass(frozen=True)
class PageGeometry:
    """Fixed page dimensions and vertical rhythm.

    ``page_break_y`` is the page break threshold: no content may extend below
    it. ``row_pitch`` is the height of a single-line table row and
    ``line_pitch`` the advance per wrapped description line.
    """

    width: float = 210.0
    height: float = 297.0
    margin: float = 20.0
    page_break_y: float = 270.0
    line_pitch: float = 7.0
    row_pitch: float = 10.0
    address_pitch: float = 5.0
    header_height: float = 10.0
    cell_padding: float = 3.0
    date_column_width: float = 27.0
    numeric_column_width: float = 25.0
    gutter: float = 3.0
    title_size: float = 24.0
    heading_size: float = 14.0
    body_size: float = 12.0
    table_size: float = 10.0

    @classmethod
    def a4(cls) -> "PageGeometry":
        return cls()

    @classmethod
    def letter(cls) -> "PageGeometry":
        return cls(width=215.9, height=279.4, page_break_y=252.4)

    @classmethod
    def named(cls, name: str) -> "PageGeometry":
        """Look up a page size by name ("a4" or "letter")."""
        sizes = {"a4": cls.a4, "letter": cls.letter}
        try:
            return sizes[name.strip().lower()]()
        except KeyError:
            raise LayoutError(f"Unknown page size '{name}'. Supported sizes: a4, letter")

    @property
    def left(self) -> float:
        return self.margin

    @property
    def right(self) -> float:
        return self.width - self.margin

    @property
    def top(self) -> float:
        return self.margin

    @property
    def content_width(self) -> float:
        return self.right - self.left

    def minimum_width(self) -> float:
        """Smallest page width whose Description column can still hold text."""
        return (
            2 * self.margin
            + self.date_column_width
            + 3 * self.numeric_column_width
            + self.gutter
            + self.cell_padding
            + MIN_DESCRIPTION_WIDTH
        )

    def validate(self) -> None:
        """Check that the page can hold the table.

        Raises:
            LayoutError: If the page is too narrow for the columns or too short
                for a header row followed by one item row
        """
        if self.width < self.minimum_width():
            raise LayoutError(
                f"Page width {self.width}mm is below the minimum of {self.minimum_width()}mm"
            )
        if self.top + self.header_height + self.row_pitch > self.page_break_y:
            raise LayoutError(
                f"Page break threshold {self.page_break_y}mm leaves no room for a table row"
            )
        if self.page_break_y > self.height:
            raise LayoutError("Page break threshold lies below the bottom of the page")


@dataclass(frozen=True)
class TableColumns:
    """Horizontal positions of the five line-item columns.

    Date and Description are left aligned at ``date_x`` / ``description_x``.
    Hours, Rate and Amount are right aligned at their ``*_right`` edges, packed
    against the right margin one ``numeric_width`` apart.
    """

    left: float
    right: float
    date_x: float
    description_x: float
    description_width: float
    hours_right: float
    rate_right: float
    amount_right: float
    numeric_width: float

    @classmethod
    def from_geometry(cls, geometry: PageGeometry) -> "TableColumns":
        geometry.validate()
        amount_right = geometry.right - geometry.cell_padding
        rate_right = amount_right - geometry.numeric_column_width
        hours_right = rate_right - geometry.numeric_column_width
        hours_left = hours_right - geometry.numeric_column_width
        description_x = geometry.left + geometry.date_column_width
        return cls(
            left=geometry.left,
            right=geometry.right,
            date_x=geometry.left + geometry.cell_padding,
            description_x=description_x,
            description_width=hours_left - description_x - geometry.gutter,
            hours_right=hours_right,
            rate_right=rate_right,
            amount_right=amount_right,
            numeric_width=geometry.numeric_column_width,
        )

    @property
    def hours_left(self) -> float:
        return self.hours_right - self.numeric_width

    def description_extent(self) -> tuple[float, float]:
        return self.description_x, self.description_x + self.description_width

    def hours_extent(self) -> tuple[float, float]:
        return self.hours_left, self.hours_right
