"""Application imports – CsvDecoder."""
from __future__ import annotations

import asyncio
import csv
import io
import time

from tabex.application.imports.result import ImportResult
from tabex.kernel.errors import InputError, ProcessingError

__all__ = ["CsvDecoder", "FIELD_SIZE_LIMIT"]

MiB = 1024 * 1024

# Process configuration: the csv tokenizer limit is interpreter-wide.  It is
# raised once, to the largest accepted upload, so oversize rows are reported
# through max_row_bytes rather than as tokenizer errors.
FIELD_SIZE_LIMIT = 100 * MiB
if csv.field_size_limit() < FIELD_SIZE_LIMIT:
    csv.field_size_limit(FIELD_SIZE_LIMIT)


class CsvDecoder:
    """Parses an uploaded CSV buffer into records without aborting on bad rows.

    The first non-empty row is the header; names are trimmed.  Blank lines
    are skipped.  A data row that cannot be tokenised, whose field count
    differs from the header, or whose encoded size exceeds
    ``max_row_bytes`` is reported in ``errors`` as ``{"row", "error"}`` and
    parsing continues.  ``row`` numbers count non-empty data rows from 1.

    Invalid UTF-8 aborts the whole parse with :class:`ProcessingError`.
    """

    def __init__(
        self,
        max_row_bytes: int = MiB,
        chunk_size: int = 1000,
        delimiter: str = ",",
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.max_row_bytes = max_row_bytes
        self.chunk_size = chunk_size
        self.delimiter = delimiter

    @staticmethod
    def _text(data: bytes) -> str:
        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ProcessingError("Invalid UTF-8 in uploaded file", stage="parse") from exc

    async def decode(self, data: bytes) -> ImportResult:
        started = time.perf_counter()
        result = ImportResult()
        reader = csv.reader(io.StringIO(self._text(data), newline=""), delimiter=self.delimiter)

        header: list[str] | None = None
        row_number = 0
        while True:
            try:
                fields = next(reader)
            except StopIteration:
                break
            except csv.Error as exc:
                if header is None:
                    raise InputError(f"Malformed CSV header: {exc}") from exc
                row_number += 1
                result.errors.append({"row": row_number, "error": str(exc)})
                continue

            if not fields:
                continue
            if header is None:
                header = [name.strip() for name in fields]
                result.columns = header
                continue

            row_number += 1
            error = self._check(fields, len(header))
            if error is not None:
                result.errors.append({"row": row_number, "error": error})
            else:
                result.records.append(dict(zip(header, fields)))
                result.row_count += 1

            if row_number % self.chunk_size == 0:
                await asyncio.sleep(0)

        if header is None:
            raise InputError("CSV file is empty", errors=[{"field": "file", "message": "no header row"}])
        result.duration_ms = (time.perf_counter() - started) * 1000
        return result

    def _check(self, fields: list[str], expected: int) -> str | None:
        if len(fields) != expected:
            return f"Expected {expected} fields, got {len(fields)}"
        size = sum(len(f.encode("utf-8")) for f in fields) + len(fields) - 1
        if size > self.max_row_bytes:
            return f"Row exceeds {self.max_row_bytes} bytes"
        return None
