"""PDF rendering with fpdf2."""

from typing import Sequence

from fpdf import FPDF

from timebill.layout.geometry import PageGeometry
from timebill.layout.instructions import Line, Page, Rect, Text
from timebill.render.base import Renderer

FONT_FAMILY = "Helvetica"


def _latin1(text: str) -> str:
    # Core PDF fonts only cover Latin-1
    return text.encode("latin-1", errors="replace").decode("latin-1")


class FPDFMeasurer:
    """Text measurer backed by fpdf2's Helvetica metrics."""

    def __init__(self):
        self._pdf = FPDF(unit="mm")

    def width(self, text: str, size: float, bold: bool = False) -> float:
        self._pdf.set_font(FONT_FAMILY, "B" if bold else "", size)
        return self._pdf.get_string_width(_latin1(text))


class PDFRenderer(Renderer):
    """Renders pages to a PDF document."""

    extension = "pdf"

    def measurer(self) -> FPDFMeasurer:
        """Measurer matching the fonts this renderer draws with."""
        return FPDFMeasurer()

    def render(self, pages: Sequence[Page], geometry: PageGeometry) -> bytes:
        pdf = FPDF(unit="mm", format=(geometry.width, geometry.height))
        pdf.set_auto_page_break(False)
        pdf.set_margins(geometry.margin, geometry.margin, geometry.margin)

        for page in pages:
            pdf.add_page()
            for instruction in page.instructions:
                if isinstance(instruction, Text):
                    self._draw_text(pdf, instruction)
                elif isinstance(instruction, Line):
                    pdf.set_draw_color(0, 0, 0)
                    pdf.set_line_width(instruction.width)
                    pdf.line(instruction.x1, instruction.y1, instruction.x2, instruction.y2)
                elif isinstance(instruction, Rect):
                    pdf.set_fill_color(*instruction.fill)
                    pdf.rect(instruction.x, instruction.y, instruction.width, instruction.height, style="F")
                else:
                    raise TypeError(f"Unsupported draw instruction: {instruction!r}")

        return bytes(pdf.output())

    @staticmethod
    def _draw_text(pdf: FPDF, instruction: Text) -> None:
        text = _latin1(instruction.text)
        pdf.set_font(FONT_FAMILY, "B" if instruction.bold else "", instruction.size)
        pdf.set_text_color(*instruction.color)
        x = instruction.x
        if instruction.align == "right":
            x -= pdf.get_string_width(text)
        elif instruction.align == "center":
            x -= pdf.get_string_width(text) / 2
        pdf.text(x, instruction.y, text)
