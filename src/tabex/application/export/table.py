"""Application export – TableData shared by the report and image encoders."""
from __future__ import annotations

import dataclasses
from datetime import UTC, datetime
from typing import Sequence

from tabex.kernel.types import Record, infer_headers

DEFAULT_TITLE = "Data Export"
NO_DATA_TEXT = "No data available"


def generated_timestamp(now: datetime | None = None) -> str:
    """Render the generation time shown in report footers."""
    moment = now or datetime.now(UTC)
    return moment.strftime("%Y-%m-%d %H:%M:%S UTC")


@dataclasses.dataclass(frozen=True)
class TableData:
    """Logical table: what gets drawn, independent of the output format."""

    headers: tuple[str, ...]
    rows: Sequence[Record]
    total_records: int
    generated_date: str
    title: str | None = None

    @property
    def display_title(self) -> str:
        return self.title or DEFAULT_TITLE

    @classmethod
    def build(
        cls,
        records: Sequence[Record],
        *,
        title: str | None = None,
        headers: Sequence[str] | None = None,
        generated_date: str | None = None,
    ) -> "TableData":
        return cls(
            headers=tuple(infer_headers(records, headers)),
            rows=records,
            total_records=len(records),
            generated_date=generated_date or generated_timestamp(),
            title=title,
        )


__all__ = ["DEFAULT_TITLE", "NO_DATA_TEXT", "TableData", "generated_timestamp"]
