"""Application-layer errors — client-facing request failures."""

from __future__ import annotations

from typing import Any

from tabex.kernel.errors.base import BaseError


class InputError(BaseError):
    """Malformed, missing or empty request payload.

    ``errors`` carries field-level failures (``{"field", "message"}``).
    """

    default_code = "invalid_input"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def details(self) -> list[dict[str, Any]]:
        return self.errors


class UnsupportedTypeError(InputError):
    """Uploaded file has a disallowed content type or extension."""

    default_code = "unsupported_type"


class ResourceLimitError(BaseError):
    """Upload or payload exceeds a configured size bound."""

    default_code = "resource_limit_exceeded"

    def __init__(
        self,
        message: str = "File too large",
        *,
        limit: int | None = None,
        actual: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.limit = limit
        self.actual = actual


class OverloadError(BaseError):
    """Explicit throttling signal (rate limit or concurrency cap)."""

    default_code = "overloaded"

    def __init__(
        self,
        message: str = "Server busy. Please try again later.",
        *,
        retry_after_seconds: float | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.retry_after_seconds = retry_after_seconds


class ProcessingTimeoutError(BaseError):
    """Processing did not finish before the request deadline."""

    default_code = "timeout"


__all__ = [
    "InputError",
    "OverloadError",
    "ProcessingTimeoutError",
    "ResourceLimitError",
    "UnsupportedTypeError",
]
