"""Application imports – ImportResult."""
from __future__ import annotations

import dataclasses
from typing import Any

from tabex.kernel.types import Record


def throughput(row_count: int, duration_ms: float) -> int:
    """Rows per second, rounded; zero when either input is zero."""
    if not row_count or not duration_ms:
        return 0
    return round(row_count / (duration_ms / 1000))


@dataclasses.dataclass
class ImportResult:
    records: list[Record] = dataclasses.field(default_factory=list)
    row_count: int = 0
    columns: list[str] = dataclasses.field(default_factory=list)
    errors: list[dict[str, Any]] = dataclasses.field(default_factory=list)
    duration_ms: float = 0.0

    def clear(self) -> None:
        self.records = []
        self.row_count = 0
        self.columns = []
        self.errors = []

    def metadata(self, filename: str | None) -> dict[str, Any]:
        return {
            "rowCount": self.row_count,
            "columns": self.columns,
            "errors": self.errors,
            "filename": filename,
            "processingTime": f"{self.duration_ms:.2f}ms",
            "throughput": f"{throughput(self.row_count, self.duration_ms)} records/sec",
        }

    def to_response(self, filename: str | None) -> dict[str, Any]:
        return {"data": self.records, "metadata": self.metadata(filename)}


__all__ = ["ImportResult", "throughput"]
