"""Record helpers — header inference and scalar-to-text rendering."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TypeAlias

Scalar: TypeAlias = str | int | float | bool | None
Record: TypeAlias = Mapping[str, Any]


def infer_headers(
    records: Sequence[Record],
    override: Sequence[str] | None = None,
) -> list[str]:
    """Return the column order for *records*.

    An explicit *override* wins; otherwise the first record's keys are used
    in insertion order.  An empty batch without override has no columns.
    """
    if override is not None:
        return [str(h) for h in override]
    if not records:
        return []
    return [str(k) for k in records[0].keys()]


def cell_text(value: Any) -> str:  # noqa: ANN401
    """Render a scalar cell value as text.

    ``None`` becomes an empty string and booleans are lowercased so that
    output matches JSON literals.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def cell(record: Record | None, header: str) -> str:
    """Return the text of *header* in *record* (empty when absent)."""
    if record is None:
        return ""
    return cell_text(record.get(header))


__all__ = ["Record", "Scalar", "cell", "cell_text", "infer_headers"]
