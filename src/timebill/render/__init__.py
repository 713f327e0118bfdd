"""Document renderers consuming layout pages."""

from timebill.render.base import Renderer, invoice_filename
from timebill.render.pdf import PDFRenderer

__all__ = ["Renderer", "invoice_filename", "PDFRenderer"]
