"""FastAPI adapter – FastAPIExceptionMapper."""
from __future__ import annotations

import traceback
import uuid
from datetime import UTC, datetime
from typing import Any, Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tabex.kernel.errors import (
    BaseError,
    InputError,
    OverloadError,
    ProcessingError,
    ProcessingTimeoutError,
    ResourceLimitError,
    UnsupportedTypeError,
)
from tabex.observability.logging import get_logger

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def new_error_id() -> str:
    return uuid.uuid4().hex[:12]


def _timestamp() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class FastAPIExceptionMapper:
    """Register error → HTTP status mappings on a FastAPI app.

    Error body schema::

        {"error": "...", "errorId": "3f2a9c0e1b7d", "timestamp": "...Z"}

    ``details`` carries :meth:`BaseError.details` (field-level input
    failures) when non-empty; ``stack`` is added in development.  Messages of 5xx errors are never exposed.

    Mappings
    --------
    ``UnsupportedTypeError``   → 400
    ``InputError``             → 400
    ``RequestValidationError`` → 400
    ``ResourceLimitError``     → 413
    ``ProcessingTimeoutError`` → 408
    ``OverloadError``          → 429 (+ ``Retry-After``)
    ``ProcessingError``        → 500
    anything else              → 500
    """

    def __init__(self, *, development: bool = False) -> None:
        self.development = development
        # ORDER MATTERS: more-specific subtypes first
        self._map: list[tuple[type[BaseException], int]] = [
            (UnsupportedTypeError, 400),
            (InputError, 400),
            (ResourceLimitError, 413),
            (ProcessingTimeoutError, 408),
            (OverloadError, 429),
            (ProcessingError, 500),
            (Exception, 500),
        ]

    def status_for(self, exc: BaseException) -> int:
        for exc_type, status in self._map:
            if isinstance(exc, exc_type):
                return status
        return 500

    def register(self, app: FastAPI) -> None:
        """Register all error handlers on *app*."""
        for exc_type, status in self._map:
            app.add_exception_handler(exc_type, self._make_handler(status))
        app.add_exception_handler(RequestValidationError, self._make_handler(400))

    def _make_handler(self, status: int) -> Callable[[Request, Exception], Any]:
        async def handler(request: Request, exc: Exception) -> JSONResponse:
            return self.render(request, exc, status)

        return handler

    def render(self, request: Request, exc: BaseException, status: int) -> JSONResponse:
        error_id = new_error_id()
        message = self._message(exc, status)
        body: dict[str, Any] = {"error": message, "errorId": error_id, "timestamp": _timestamp()}

        details = self._details(exc)
        if details:
            body["details"] = details
        if self.development:
            body["stack"] = "".join(traceback.format_exception(exc))

        log = logger.error if status >= 500 else logger.warning
        log(
            "request.failed",
            error_id=error_id,
            status=status,
            error=repr(exc),
            **self._log_context(exc),
            method=request.method,
            path=request.url.path,
            user_agent=request.headers.get("user-agent"),
            client=request.client.host if request.client else None,
        )

        headers: dict[str, str] = {}
        if isinstance(exc, OverloadError) and exc.retry_after_seconds is not None:
            headers["Retry-After"] = str(int(exc.retry_after_seconds))
        return JSONResponse(status_code=status, content=body, headers=headers)

    @staticmethod
    def _message(exc: BaseException, status: int) -> str:
        if status >= 500:
            return INTERNAL_ERROR_MESSAGE
        if isinstance(exc, RequestValidationError):
            return "Validation failed"
        if isinstance(exc, BaseError):
            return exc.message
        return str(exc)

    @staticmethod
    def _log_context(exc: BaseException) -> dict[str, Any]:
        if isinstance(exc, BaseError):
            return {"code": exc.code, "context": exc.detail or None}
        return {}

    @staticmethod
    def _details(exc: BaseException) -> list[dict[str, Any]]:
        if isinstance(exc, BaseError):
            return exc.details()
        if isinstance(exc, RequestValidationError):
            return [
                {
                    "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
                    "message": err.get("msg", ""),
                }
                for err in exc.errors()
            ]
        return []


__all__ = ["FastAPIExceptionMapper", "INTERNAL_ERROR_MESSAGE", "new_error_id"]
