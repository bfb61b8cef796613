"""PDF exporter: cards laid out on printable pages."""

from pathlib import Path
from typing import Optional

from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.lib.units import inch
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from cardsmith.config import get_settings
from cardsmith.export.base import Exporter


class PDFExporter(Exporter):
    """Places cards at their physical size on letter pages.

    Card size in inches is the pixel size divided by the layout dpi. Cards
    fill each page left to right, top to bottom, inside the configured
    margin; a new page starts when the current one is full.
    """

    def __init__(self, pagesize: tuple[float, float] = letter, margin: Optional[float] = None) -> None:
        self.pagesize = pagesize
        if margin is None:
            margin = get_settings().pdf_margin_inches * inch
        self.margin = margin

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".pdf",)

    def grid(self, card_width: float, card_height: float) -> tuple[int, int]:
        """Number of (columns, rows) of cards that fit on a page."""
        page_width, page_height = self.pagesize
        columns = int((page_width - 2 * self.margin) // card_width)
        rows = int((page_height - 2 * self.margin) // card_height)
        return max(1, columns), max(1, rows)

    def write(self, cards: list[Image.Image], path: Path, dpi: int) -> list[Path]:
        path.parent.mkdir(parents=True, exist_ok=True)
        pdf = canvas.Canvas(str(path), pagesize=self.pagesize)
        page_width, page_height = self.pagesize

        for index, card in enumerate(cards):
            card_width = card.width / dpi * inch
            card_height = card.height / dpi * inch
            columns, rows = self.grid(card_width, card_height)
            per_page = columns * rows

            slot = index % per_page
            if index and slot == 0:
                pdf.showPage()
            column, row = slot % columns, slot // columns

            # reportlab's origin is the bottom-left corner
            x = self.margin + column * card_width
            y = page_height - self.margin - (row + 1) * card_height
            pdf.drawImage(ImageReader(card.convert("RGB")), x, y, card_width, card_height)

        pdf.save()
        return [path]
