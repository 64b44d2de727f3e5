"""Application export – streaming CsvEncoder."""
from __future__ import annotations

import csv
import dataclasses
import io
from typing import Any, AsyncIterator, Sequence

from tabex.application.export.config import ExportConfig
from tabex.application.streaming import RowSource
from tabex.kernel.types import cell

__all__ = ["CRLF", "CsvEncoder", "CsvOptions"]

CRLF = "\r\n"


@dataclasses.dataclass(frozen=True)
class CsvOptions:
    delimiter: str = ","
    quote: str = '"'
    escape: str = '"'
    include_header: bool = True

    @classmethod
    def from_config(cls, config: ExportConfig) -> "CsvOptions":
        return cls(
            delimiter=config.delimiter,
            quote=config.quote,
            escape=config.escape,
            include_header=config.include_header,
        )


class CsvEncoder:
    """Encodes records as UTF-8 CSV, one ``bytes`` object per row chunk.

    Lines end with ``\\r\\n``.  A field is quoted when it contains the
    delimiter, the quote character or a line break; embedded quote
    characters are doubled when escape and quote are the same, otherwise
    prefixed with the escape character (which then escapes itself too).
    Nothing is produced until the consumer pulls, so a slow transport
    paces the encoder.
    """

    def __init__(self, options: CsvOptions | None = None) -> None:
        self._options = options or CsvOptions()

    @property
    def options(self) -> CsvOptions:
        return self._options

    def _writer(self, buf: io.StringIO) -> Any:  # noqa: ANN401
        opts = self._options
        doublequote = opts.escape == opts.quote
        return csv.writer(
            buf,
            delimiter=opts.delimiter,
            quotechar=opts.quote,
            escapechar=None if doublequote else opts.escape,
            doublequote=doublequote,
            quoting=csv.QUOTE_MINIMAL,
            lineterminator=CRLF,
        )

    @staticmethod
    def _drain(buf: io.StringIO) -> bytes:
        data = buf.getvalue()
        buf.seek(0)
        buf.truncate(0)
        return data.encode("utf-8")

    async def encode(self, source: RowSource, headers: Sequence[str]) -> AsyncIterator[bytes]:
        buf = io.StringIO()
        writer = self._writer(buf)
        if self._options.include_header:
            writer.writerow(headers)
            yield self._drain(buf)

        async for chunk in source.chunks():
            for record in chunk:
                writer.writerow([cell(record, h) for h in headers])
            yield self._drain(buf)

