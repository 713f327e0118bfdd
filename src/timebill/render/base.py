"""Abstract document renderer interface."""

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

from timebill.domain.entities import Invoice
from timebill.domain.errors import RenderError, render_failed
from timebill.layout.geometry import PageGeometry
from timebill.layout.instructions import Page

logger = logging.getLogger(__name__)


def invoice_filename(invoice: Invoice, extension: str) -> str:
    """Return ``Invoice-{number}.{extension}`` with path separators replaced."""
    number = re.sub(r"[\\/:*?\"<>|\s]+", "_", invoice.number.strip()) or invoice.id
    return f"Invoice-{number}.{extension}"


class Renderer(ABC):
    """Turns laid-out pages into document bytes."""

    extension: str = ""

    @abstractmethod
    def render(self, pages: Sequence[Page], geometry: PageGeometry) -> bytes:
        """Render pages to document bytes."""
        pass

    def write(
        self,
        pages: Sequence[Page],
        geometry: PageGeometry,
        invoice: Invoice,
        directory: str | Path = ".",
    ) -> Path:
        """Render pages and write them next to other invoices in ``directory``.

        Returns:
            Path of the written file

        Raises:
            RenderError: If rendering or writing fails
        """
        path = Path(directory) / invoice_filename(invoice, self.extension)
        try:
            data = self.render(pages, geometry)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except RenderError:
            raise
        except Exception as e:
            raise RenderError(render_failed(invoice.number, e), invoice_number=invoice.number) from e
        logger.info("Wrote invoice %s to %s (%d pages)", invoice.number, path, len(pages))
        return path
