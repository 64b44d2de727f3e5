"""Infrastructure errors — encoder/decoder internal failures."""

from __future__ import annotations

from typing import Any

from tabex.kernel.errors.base import BaseError


class ProcessingError(BaseError):
    """An encoder, decoder or stream failed while producing a result."""

    default_code = "processing_error"

    def __init__(
        self,
        message: str,
        *,
        stage: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.stage = stage


__all__ = ["ProcessingError"]
