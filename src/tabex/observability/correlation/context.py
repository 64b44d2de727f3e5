"""Observability – RequestContext, CorrelationContext."""
from __future__ import annotations

import dataclasses
from contextvars import ContextVar
from uuid import uuid4


@dataclasses.dataclass(frozen=True)
class RequestContext:
    """Ambient context for a single export/import request."""
    correlation_id: str
    client_id: str | None = None

    @classmethod
    def new(cls, client_id: str | None = None) -> "RequestContext":
        return cls(correlation_id=str(uuid4()), client_id=client_id)


_CTX_VAR: ContextVar[RequestContext | None] = ContextVar("_tabex_request_ctx", default=None)


class CorrelationContext:
    """Ambient correlation context stored in a ``ContextVar``.

    Each asyncio task gets a copy of the context at creation time, so
    concurrent requests never observe each other's ids.
    """

    @staticmethod
    def set(ctx: RequestContext) -> None:
        _CTX_VAR.set(ctx)

    @staticmethod
    def get() -> RequestContext | None:
        return _CTX_VAR.get()

    @staticmethod
    def get_or_new() -> RequestContext:
        ctx = _CTX_VAR.get()
        if ctx is None:
            ctx = RequestContext.new()
            _CTX_VAR.set(ctx)
        return ctx

    @staticmethod
    def clear() -> None:
        _CTX_VAR.set(None)

    @staticmethod
    def from_headers(headers: dict[str, str]) -> RequestContext:
        """Build a context from HTTP headers (case-insensitive).

        ``X-Correlation-ID`` → ``X-Request-ID`` → generated UUID.
        """
        norm = {k.lower(): v.strip() for k, v in headers.items()}
        correlation_id = (
            norm.get("x-correlation-id")
            or norm.get("x-request-id")
            or str(uuid4())
        )
        return RequestContext(correlation_id=correlation_id)


__all__ = ["CorrelationContext", "RequestContext"]
