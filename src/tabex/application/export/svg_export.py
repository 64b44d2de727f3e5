"""Application export – SvgEncoder."""
from __future__ import annotations

import html
import math
from typing import AsyncIterator, Sequence

from tabex.application.export.config import ExportConfig
from tabex.application.export.table import NO_DATA_TEXT, TableData
from tabex.application.streaming import DEFAULT_CHUNK_SIZE, DEFAULT_YIELD_EVERY, RowSource
from tabex.kernel.types import Record, cell

__all__ = [
    "FOOTER_HEIGHT",
    "HEADER_HEIGHT",
    "MIN_HEIGHT",
    "PADDING",
    "ROW_HEIGHT",
    "START_Y",
    "SvgEncoder",
    "column_width",
    "compute_height",
]

PADDING = 30
ROW_HEIGHT = 40
HEADER_HEIGHT = 50
START_Y = 140
FOOTER_HEIGHT = 50
MIN_HEIGHT = 600
MAX_TITLE_CHARS = 100

_FONT = "'Inter','Segoe UI',Arial,sans-serif"

_DEFS = (
    "  <defs>\n"
    '    <linearGradient id="headerGradient" x1="0%" y1="0%" x2="0%" y2="100%">\n'
    '      <stop offset="0%" style="stop-color:#4f46e5;stop-opacity:1" />\n'
    '      <stop offset="100%" style="stop-color:#3730a3;stop-opacity:1" />\n'
    "    </linearGradient>\n"
    '    <linearGradient id="rowGradient" x1="0%" y1="0%" x2="0%" y2="100%">\n'
    '      <stop offset="0%" style="stop-color:#ffffff;stop-opacity:1" />\n'
    '      <stop offset="100%" style="stop-color:#f8fafc;stop-opacity:1" />\n'
    "    </linearGradient>\n"
    "  </defs>\n"
)


def _num(value: float) -> str:
    """Format a coordinate; integral values print without a fraction."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _text(value: str, limit: int) -> str:
    return html.escape(value[:limit], quote=True)


def compute_height(row_count: int, height: int | None = None, min_height: int = MIN_HEIGHT) -> int:
    """Canvas height: explicit *height* wins, else rows plus chrome, floored at *min_height*."""
    if height is not None:
        return height
    return max(min_height, START_Y + HEADER_HEIGHT + row_count * ROW_HEIGHT + FOOTER_HEIGHT)


def column_width(width: int, header_count: int) -> float:
    available = width - PADDING * 2
    if header_count == 0:
        return max(100, available)
    return max(100, available / header_count)


class SvgEncoder:
    """Renders a :class:`TableData` as an SVG document.

    Text is never measured: each cell is cut to ``floor(column_width / 8)``
    characters so output depends only on the data and the canvas width.
    """

    def __init__(
        self,
        width: int = 800,
        height: int | None = None,
        background_color: str = "#ffffff",
        *,
        min_height: int = MIN_HEIGHT,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        yield_every: int = DEFAULT_YIELD_EVERY,
    ) -> None:
        self.width = width
        self.height = height
        self.background_color = background_color
        self.min_height = min_height
        self._chunk_size = chunk_size
        self._yield_every = yield_every

    @classmethod
    def from_config(
        cls,
        config: ExportConfig,
        *,
        min_height: int = MIN_HEIGHT,
        yield_every: int = DEFAULT_YIELD_EVERY,
    ) -> "SvgEncoder":
        return cls(
            width=config.width,
            height=config.height,
            background_color=config.background_color,
            min_height=min_height,
            chunk_size=config.chunk_size,
            yield_every=yield_every,
        )

    async def encode(self, table: TableData, *, streaming: bool = False) -> AsyncIterator[bytes]:
        width = self.width
        height = compute_height(len(table.rows), self.height, self.min_height)
        col_width = column_width(width, len(table.headers))
        band_width = _num(len(table.headers) * col_width)
        max_chars = math.floor(col_width / 8)

        yield self._prologue(table, width, height, streaming).encode("utf-8")
        yield self._header_band(table.headers, col_width, band_width, max_chars).encode("utf-8")

        if not table.rows:
            yield self._empty_band(width).encode("utf-8")
        else:
            source = RowSource(table.rows, self._chunk_size, self._yield_every)
            index = 0
            async for chunk in source.chunks():
                parts: list[str] = []
                for record in chunk:
                    parts.append(self._row_band(table.headers, record, index, col_width, band_width, max_chars))
                    index += 1
                yield "".join(parts).encode("utf-8")

        yield self._footer(table, width, height).encode("utf-8")

    def _prologue(self, table: TableData, width: int, height: int, streaming: bool) -> str:
        bg = html.escape(self.background_color, quote=True)
        declaration = "" if streaming else '<?xml version="1.0" encoding="UTF-8"?>\n'
        return (
            f"{declaration}"
            f'<svg width="{width}" height="{height}" xmlns="http://www.w3.org/2000/svg" '
            f'viewBox="0 0 {width} {height}" style="background:{bg}">\n'
            f"{_DEFS}"
            f'  <rect width="100%" height="100%" fill="{bg}"/>\n'
            f'  <text x="{_num(width / 2)}" y="67" fill="#1e293b" font-family="{_FONT}" '
            f'font-size="20px" font-weight="600" text-anchor="middle" letter-spacing="0.5">'
            f"{_text(table.display_title, MAX_TITLE_CHARS)}</text>\n"
        )

    @staticmethod
    def _header_band(headers: Sequence[str], col_width: float, band_width: str, max_chars: int) -> str:
        parts = [
            f'  <rect x="{PADDING}" y="{START_Y - HEADER_HEIGHT}" width="{band_width}" '
            f'height="{HEADER_HEIGHT}" fill="url(#headerGradient)" stroke="#3730a3" stroke-width="1" rx="8"/>\n'
        ]
        for i, header in enumerate(headers):
            parts.append(
                f'  <text x="{_num(PADDING + 24 + i * col_width)}" y="{START_Y - 15}" fill="#ffffff" '
                f'font-family="{_FONT}" font-size="14px" font-weight="600" letter-spacing="0.3">'
                f"{_text(str(header), max_chars)}</text>\n"
            )
        return "".join(parts)

    @staticmethod
    def _row_band(
        headers: Sequence[str],
        record: Record,
        index: int,
        col_width: float,
        band_width: str,
        max_chars: int,
    ) -> str:
        y = START_Y + index * ROW_HEIGHT
        alt = index % 2 == 1
        fill = "#f8fafc" if alt else "#ffffff"
        stroke = "#e2e8f0" if alt else "#f1f5f9"
        parts = [
            f'  <rect x="{PADDING}" y="{y}" width="{band_width}" height="{ROW_HEIGHT}" '
            f'fill="{fill}" stroke="{stroke}" stroke-width="0.5" rx="6"/>\n'
        ]
        for col, header in enumerate(headers):
            parts.append(
                f'  <text x="{_num(PADDING + 24 + col * col_width)}" y="{y + 28}" fill="#1e293b" '
                f'font-family="{_FONT}" font-size="13px" font-weight="400">'
                f"{_text(cell(record, header), max_chars)}</text>\n"
            )
        return "".join(parts)

    @staticmethod
    def _empty_band(width: int) -> str:
        inner = width - PADDING * 2
        return (
            f'  <rect x="{PADDING}" y="{START_Y}" width="{inner}" height="{ROW_HEIGHT}" '
            f'fill="#ffffff" stroke="#f1f5f9" stroke-width="0.5" rx="6"/>\n'
            f'  <text x="{_num(width / 2)}" y="{START_Y + 25}" fill="#64748b" font-family="{_FONT}" '
            f'font-size="13px" font-style="italic" text-anchor="middle">{NO_DATA_TEXT}</text>\n'
        )

    @staticmethod
    def _footer(table: TableData, width: int, height: int) -> str:
        return (
            f'  <rect x="{PADDING}" y="{height - FOOTER_HEIGHT}" width="{width - PADDING * 2}" '
            f'height="40" fill="url(#rowGradient)" stroke="#e2e8f0" stroke-width="0.5" rx="8"/>\n'
            f'  <text x="{width - PADDING - 24}" y="{height - 25}" fill="#64748b" font-family="{_FONT}" '
            f'font-size="12px" font-weight="500" text-anchor="end">'
            f"Total records: {table.total_records:,}</text>\n"
            f'  <text x="{PADDING + 24}" y="{height - 25}" fill="#64748b" font-family="{_FONT}" '
            f'font-size="12px" font-weight="500">Generated: {html.escape(table.generated_date, quote=True)}</text>\n'
            "</svg>\n"
        )
