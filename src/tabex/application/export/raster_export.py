"""Application export – PngRenderer (Pillow)."""
from __future__ import annotations

import asyncio
import io
import math
from typing import AsyncIterator, Literal

from PIL import Image, ImageDraw, ImageFont

from tabex.application.export.config import ExportConfig
from tabex.application.export.table import TableData
from tabex.kernel.types import cell

__all__ = ["PngRenderer", "RASTER_PADDING", "RASTER_ROW_HEIGHT", "RASTER_START_Y", "max_visible_rows"]

# Raster layout is denser than the vector one (30px rows vs 40px).
RASTER_ROW_HEIGHT = 30
RASTER_START_Y = 60
RASTER_PADDING = 20
TITLE_Y = 10
MAX_HEADER_CHARS = 12
MAX_CELL_CHARS = 15
DEFAULT_HEIGHT = 600

_HEADER_FILL = "#4f46e5"
_ALT_FILL = "#f8fafc"
_TEXT = "#1e293b"
_MUTED = "#64748b"


def max_visible_rows(height: int) -> int:
    return max(0, math.floor((height - RASTER_START_Y - 30) / RASTER_ROW_HEIGHT))


class PngRenderer:
    """Rasterizes a :class:`TableData` into a PNG or JPEG bitmap.

    Only as many rows as fit the canvas are drawn; the footer reports how
    many were shown.  Drawing is CPU bound and runs in a worker thread.
    """

    def __init__(
        self,
        width: int = 800,
        height: int | None = None,
        background_color: str = "#ffffff",
        *,
        fmt: Literal["png", "jpeg"] = "png",
        quality: float = 0.8,
    ) -> None:
        self.width = width
        self.height = height or DEFAULT_HEIGHT
        self.background_color = background_color
        self.fmt = fmt
        self.quality = quality

    @classmethod
    def from_config(cls, config: ExportConfig) -> "PngRenderer":
        return cls(
            width=config.width,
            height=config.height,
            background_color=config.background_color,
            fmt=config.raster_format,
            quality=config.quality,
        )

    @property
    def media_type(self) -> str:
        return "image/jpeg" if self.fmt == "jpeg" else "image/png"

    @property
    def extension(self) -> str:
        return "jpg" if self.fmt == "jpeg" else "png"

    async def render(self, table: TableData) -> bytes:
        return await asyncio.to_thread(self.render_sync, table)

    async def encode(self, table: TableData) -> AsyncIterator[bytes]:
        yield await self.render(table)

    def render_sync(self, table: TableData) -> bytes:
        width, height = self.width, self.height
        headers = table.headers
        col_width = (width - RASTER_PADDING * 2) / (len(headers) or 1)
        visible = table.rows[: max_visible_rows(height)]

        img = Image.new("RGB", (width, height), self.background_color)
        draw = ImageDraw.Draw(img)
        font = ImageFont.load_default()

        title = table.display_title
        title_width = draw.textlength(title, font=font)
        draw.text(((width - title_width) / 2, TITLE_Y), title, fill=_TEXT, font=font)

        draw.rectangle(
            [RASTER_PADDING, RASTER_START_Y, width - RASTER_PADDING, RASTER_START_Y + RASTER_ROW_HEIGHT - 1],
            fill=_HEADER_FILL,
        )
        for i, header in enumerate(headers):
            x = RASTER_PADDING + i * col_width
            draw.text((x + 4, RASTER_START_Y + 8), str(header)[:MAX_HEADER_CHARS], fill="#ffffff", font=font)

        for row_index, record in enumerate(visible):
            y = RASTER_START_Y + (row_index + 1) * RASTER_ROW_HEIGHT
            if row_index % 2 == 1:
                draw.rectangle(
                    [RASTER_PADDING, y, width - RASTER_PADDING, y + RASTER_ROW_HEIGHT - 1],
                    fill=_ALT_FILL,
                )
            for col, header in enumerate(headers):
                x = RASTER_PADDING + col * col_width
                draw.text((x + 4, y + 8), cell(record, header)[:MAX_CELL_CHARS], fill=_TEXT, font=font)

        footer = f"Showing {len(visible)} of {table.total_records} records"
        footer_width = draw.textlength(footer, font=font)
        draw.text((width - 25 - footer_width, height - 25), footer, fill=_MUTED, font=font)

        buf = io.BytesIO()
        if self.fmt == "jpeg":
            img.save(buf, format="JPEG", quality=round(self.quality * 100))
        else:
            img.save(buf, format="PNG")
        return buf.getvalue()
