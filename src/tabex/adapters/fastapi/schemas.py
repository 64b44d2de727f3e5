"""FastAPI adapter – request body schemas."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ExportPayload(BaseModel):
    """Export request body.

    Both fields accept any JSON value.  ``data`` is checked by
    :func:`~tabex.application.export.validate_records` and ``config`` by
    :class:`~tabex.application.export.ExportConfig`; both report field-level
    details.
    """

    data: Any = Field(default=None, description="Records to export (array of objects)")
    config: Any = Field(default=None, description="Per-export options")


__all__ = ["ExportPayload"]
