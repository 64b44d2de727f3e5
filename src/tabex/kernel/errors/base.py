"""Root error class for the tabex error hierarchy."""

from __future__ import annotations

from typing import Any


class BaseError(Exception):
    """Root of the error hierarchy.

    Args:
        message: Client-facing description (hidden for 5xx responses).
        code: Machine-readable slug (defaults to ``default_code``), logged
            with every failed request.
        detail: Server-side context logged alongside the error; never sent
            to the client.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def details(self) -> list[dict[str, Any]]:
        """Field-level ``{"field", "message"}`` entries for the response body."""
        return []


__all__ = ["BaseError"]
