"""Application export – PdfReportEncoder (reportlab)."""
from __future__ import annotations

import asyncio
import io
import math
from typing import AsyncIterator

from reportlab.lib.pagesizes import A3, A4, LEGAL, LETTER
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from tabex.application.export.config import ExportConfig
from tabex.application.export.table import NO_DATA_TEXT, TableData
from tabex.kernel.types import cell

__all__ = ["PAGE_SIZES", "PDF_ROW_HEIGHT", "PdfReportEncoder", "fit_text", "max_rows_per_page"]

PAGE_SIZES: dict[str, tuple[float, float]] = {
    "A4": A4,
    "A3": A3,
    "Letter": LETTER,
    "Legal": LEGAL,
}

PDF_ROW_HEIGHT = 20
TITLE_FONT_SIZE = 20
BODY_FONT_SIZE = 12
TITLE_GAP = 2 * TITLE_FONT_SIZE
BOTTOM_RESERVE = 50
CELL_INSET = 5

FONT_TITLE = "Helvetica-Bold"
FONT_HEADING = "Helvetica-Bold"
FONT_BODY = "Helvetica"

ELLIPSIS = "..."


def max_rows_per_page(page_height: float, margin: int) -> int:
    """Rows that fit below the title on one page (at least one)."""
    table_top = margin + TITLE_GAP
    return max(1, math.floor((page_height - table_top - BOTTOM_RESERVE) / PDF_ROW_HEIGHT))


def fit_text(text: str, width: float, font: str, size: int) -> str:
    """Truncate *text* with an ellipsis so it fits *width* points."""
    if width <= 0:
        return ""
    if stringWidth(text, font, size) <= width:
        return text
    budget = width - stringWidth(ELLIPSIS, font, size)
    lo, hi = 0, len(text)
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if stringWidth(text[:mid], font, size) <= budget:
            lo = mid
        else:
            hi = mid - 1
    return text[:lo] + ELLIPSIS if lo else ""


class PdfReportEncoder:
    """Lays a :class:`TableData` out as a paginated PDF document.

    Rows are 20pt high and split across pages every
    :func:`max_rows_per_page` rows.  Building the document is CPU bound and
    runs in a worker thread; the finished document is sent as one chunk.
    """

    media_type = "application/pdf"
    extension = "pdf"

    def __init__(self, page_size: str = "A4", margin: int = 50, *, compress: bool = True) -> None:
        self._page_size = PAGE_SIZES.get(page_size, A4)
        self._margin = margin
        self._compress = compress

    @classmethod
    def from_config(cls, config: ExportConfig) -> "PdfReportEncoder":
        return cls(page_size=config.page_size, margin=config.margin)

    async def render(self, table: TableData) -> bytes:
        return await asyncio.to_thread(self.render_sync, table)

    async def encode(self, table: TableData) -> AsyncIterator[bytes]:
        yield await self.render(table)

    def render_sync(self, table: TableData) -> bytes:
        buf = io.BytesIO()
        page_width, page_height = self._page_size
        margin = self._margin
        pdf = canvas.Canvas(buf, pagesize=self._page_size, pageCompression=int(self._compress))
        pdf.setTitle(table.display_title)

        # reportlab's origin is bottom-left; layout below is top-down
        def baseline(top: float, size: int) -> float:
            return page_height - top - size

        pdf.setFont(FONT_TITLE, TITLE_FONT_SIZE)
        pdf.drawCentredString(page_width / 2, baseline(margin, TITLE_FONT_SIZE), table.display_title)
        table_top = margin + TITLE_GAP

        if not table.rows:
            pdf.setFont(FONT_BODY, BODY_FONT_SIZE)
            pdf.drawString(margin, baseline(table_top, BODY_FONT_SIZE), NO_DATA_TEXT)
            pdf.showPage()
            pdf.save()
            return buf.getvalue()

        headers = table.headers
        column_width = (page_width - 2 * margin) / (len(headers) or 1)
        per_page = max_rows_per_page(page_height, margin)

        def draw_row(values: list[str], top: float, font: str) -> None:
            pdf.setFont(font, BODY_FONT_SIZE)
            for col, value in enumerate(values):
                x = margin + col * column_width
                text = fit_text(value, column_width - CELL_INSET, font, BODY_FONT_SIZE)
                pdf.drawString(x, baseline(top, BODY_FONT_SIZE), text)

        draw_row([str(h) for h in headers], table_top, FONT_HEADING)
        top = table_top + PDF_ROW_HEIGHT
        for i, record in enumerate(table.rows):
            if i > 0 and i % per_page == 0:
                pdf.showPage()
                top = margin
            draw_row([cell(record, h) for h in headers], top, FONT_BODY)
            top += PDF_ROW_HEIGHT

        pdf.showPage()
        pdf.save()
        return buf.getvalue()
