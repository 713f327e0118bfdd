"""Invoice document layout engine."""

from timebill.layout.engine import layout_invoice
from timebill.layout.geometry import PageGeometry, TableColumns
from timebill.layout.instructions import Line, Page, Rect, Text
from timebill.layout.text import FixedWidthMeasurer, TextMeasurer, wrap_text

__all__ = [
    "layout_invoice",
    "PageGeometry",
    "TableColumns",
    "Line",
    "Page",
    "Rect",
    "Text",
    "FixedWidthMeasurer",
    "TextMeasurer",
    "wrap_text",
]
