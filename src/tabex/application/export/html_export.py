"""Application export – HtmlReportEncoder."""
from __future__ import annotations

import html
from typing import AsyncIterator, Sequence

from tabex.application.export.config import ExportConfig
from tabex.application.export.styles import report_stylesheet
from tabex.application.export.table import NO_DATA_TEXT, TableData
from tabex.application.streaming import DEFAULT_CHUNK_SIZE, DEFAULT_YIELD_EVERY, RowSource
from tabex.kernel.types import Record, cell

__all__ = ["HtmlReportEncoder", "MAX_CELL_CHARS", "MAX_HEADER_CHARS"]

MAX_CELL_CHARS = 200
MAX_HEADER_CHARS = 50


def _escape(text: str) -> str:
    """Escape ``& < > " '`` for element content and attribute values."""
    return html.escape(text, quote=True)


class HtmlReportEncoder:
    """Renders a :class:`TableData` as a self-contained HTML report.

    Output is a sequence of UTF-8 chunks: document head, table header, one
    chunk per ``chunk_size`` rows, then footer.  ``streaming=True`` drops the
    doctype/html/head/body wrapper so the fragment can be embedded or sent
    incrementally.
    """

    def __init__(
        self,
        page_size: str = "A4",
        margin: int = 50,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        yield_every: int = DEFAULT_YIELD_EVERY,
    ) -> None:
        self._page_size = page_size
        self._margin = margin
        self._chunk_size = chunk_size
        self._yield_every = yield_every

    @classmethod
    def from_config(cls, config: ExportConfig, yield_every: int = DEFAULT_YIELD_EVERY) -> "HtmlReportEncoder":
        return cls(
            page_size=config.page_size,
            margin=config.margin,
            chunk_size=config.chunk_size,
            yield_every=yield_every,
        )

    async def encode(self, table: TableData, *, streaming: bool = False) -> AsyncIterator[bytes]:
        css = report_stylesheet(self._page_size, self._margin)
        title = _escape(table.display_title)
        if streaming:
            yield f"<style>\n{css}\n</style>\n".encode("utf-8")
        else:
            yield (
                "<!DOCTYPE html>\n"
                '<html lang="en">\n'
                "<head>\n"
                '<meta charset="utf-8">\n'
                '<meta name="viewport" content="width=device-width, initial-scale=1">\n'
                f"<title>{title}</title>\n"
                f"<style>\n{css}\n</style>\n"
                "</head>\n"
                "<body>\n"
            ).encode("utf-8")

        yield (
            '<div class="container">\n'
            f"<h1>{title}</h1>\n"
            '<div class="table-wrapper">\n'
            "<table>\n"
            f"{self._header_row(table.headers)}"
            "<tbody>\n"
        ).encode("utf-8")

        if not table.rows:
            colspan = max(len(table.headers), 1)
            yield f'<tr><td class="empty" colspan="{colspan}">{NO_DATA_TEXT}</td></tr>\n'.encode("utf-8")
        else:
            source = RowSource(table.rows, self._chunk_size, self._yield_every)
            index = 0
            async for chunk in source.chunks():
                parts: list[str] = []
                for record in chunk:
                    parts.append(self._body_row(table.headers, record, index))
                    index += 1
                yield "".join(parts).encode("utf-8")

        yield (
            "</tbody>\n"
            "</table>\n"
            "</div>\n"
            f'<div class="footer">Generated: {_escape(table.generated_date)} | '
            f"Total records: {table.total_records:,}</div>\n"
            "</div>\n"
        ).encode("utf-8")

        if not streaming:
            yield b"</body>\n</html>\n"

    @staticmethod
    def _header_row(headers: Sequence[str]) -> str:
        cells = "".join(f"<th>{_escape(str(h)[:MAX_HEADER_CHARS])}</th>" for h in headers)
        return f"<thead>\n<tr>{cells}</tr>\n</thead>\n"

    @staticmethod
    def _body_row(headers: Sequence[str], record: Record, index: int) -> str:
        cells = "".join(f"<td>{_escape(cell(record, h)[:MAX_CELL_CHARS])}</td>" for h in headers)
        row_class = ' class="alt"' if index % 2 == 1 else ""
        return f"<tr{row_class}>{cells}</tr>\n"
