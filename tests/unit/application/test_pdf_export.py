"""Unit tests for the reportlab PDF report encoder."""

from __future__ import annotations

import asyncio
import re

from reportlab.lib.pagesizes import A4, LETTER
from reportlab.pdfbase.pdfmetrics import stringWidth

from tabex.application.export import ExportConfig, PdfReportEncoder, TableData
from tabex.application.export.pdf_export import fit_text, max_rows_per_page

_PAGE = re.compile(rb"/Type\s*/Page(?!s)")


def _table(rows: int = 3) -> TableData:
    return TableData.build([{"id": i, "name": f"row {i}"} for i in range(rows)], title="Report")


def _pages(document: bytes) -> int:
    return len(_PAGE.findall(document))


class TestLayout:
    def test_rows_per_a4_page(self) -> None:
        assert max_rows_per_page(A4[1], 50) == 35

    def test_huge_margin_still_fits_one_row(self) -> None:
        assert max_rows_per_page(200, 100) == 1

    def test_short_text_unchanged(self) -> None:
        assert fit_text("abc", 100, "Helvetica", 12) == "abc"

    def test_long_text_truncated_with_ellipsis(self) -> None:
        text = fit_text("x" * 200, 60, "Helvetica", 12)
        assert text.endswith("...")
        assert stringWidth(text, "Helvetica", 12) <= 60

    def test_no_room(self) -> None:
        assert fit_text("abc", 0, "Helvetica", 12) == ""


class TestPdfReportEncoder:
    def test_body_is_pdf(self) -> None:
        document = PdfReportEncoder().render_sync(_table())
        assert document.startswith(b"%PDF")
        assert document.rstrip().endswith(b"%%EOF")
        assert _pages(document) == 1

    def test_paginates_on_rows_per_page(self) -> None:
        per_page = max_rows_per_page(A4[1], 50)
        encoder = PdfReportEncoder()
        assert _pages(encoder.render_sync(_table(per_page))) == 1
        assert _pages(encoder.render_sync(_table(per_page + 1))) == 2
        assert _pages(encoder.render_sync(_table(per_page * 2 + 1))) == 3

    def test_smaller_margin_fits_more_rows(self) -> None:
        rows = max_rows_per_page(A4[1], 50) + 1
        assert _pages(PdfReportEncoder(margin=0).render_sync(_table(rows))) == 1

    def test_page_size_sets_media_box(self) -> None:
        document = PdfReportEncoder(page_size="Letter").render_sync(_table())
        width, height = (int(v) for v in LETTER)
        assert re.search(rb"/MediaBox\s*\[\s*0 0 %d %d\s*\]" % (width, height), document)

    def test_empty_table_says_no_data(self) -> None:
        empty = TableData.build([], headers=["id"])
        document = PdfReportEncoder(compress=False).render_sync(empty)
        assert b"(No data available)" in document
        assert _pages(document) == 1

    def test_cells_drawn_uncompressed(self) -> None:
        document = PdfReportEncoder(compress=False).render_sync(_table(1))
        assert b"(Report)" in document
        assert b"(row 0)" in document

    def test_encode_yields_single_chunk(self) -> None:
        async def run() -> list[bytes]:
            return [c async for c in PdfReportEncoder().encode(_table())]

        chunks = asyncio.run(run())
        assert len(chunks) == 1
        assert chunks[0].startswith(b"%PDF")

    def test_from_config(self) -> None:
        encoder = PdfReportEncoder.from_config(ExportConfig.from_mapping({"pageSize": "A3", "margin": 20}))
        assert encoder.media_type == "application/pdf"
        assert encoder.extension == "pdf"
        assert encoder._margin == 20
