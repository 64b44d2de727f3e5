"""FastAPI adapter – ASGI middleware implementations.

FastAPICorrelationIdMiddleware
FastAPIMetricsMiddleware
"""
from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

import structlog

from tabex.observability.correlation import CorrelationContext, RequestContext
from tabex.observability.metrics import Metrics, NoopMetrics, PerformanceAggregator, RequestMetrics

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send


# ---------------------------------------------------------------------------
# Correlation-ID middleware
# ---------------------------------------------------------------------------

class FastAPICorrelationIdMiddleware:
    """Extract correlation ID from request headers, propagate to response.

    Header resolution order:
    1. ``X-Correlation-ID``
    2. ``X-Request-ID``
    3. Generated UUID v4

    The client IP is stored as ``client_id`` on the request context.
    """

    def __init__(self, app: "ASGIApp", header_name: str = "X-Correlation-ID") -> None:
        self.app = app
        self._response_header = header_name.lower().encode()

    async def __call__(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = {k.decode("latin-1"): v.decode("latin-1") for k, v in scope.get("headers", [])}
        client = scope.get("client")
        ctx = CorrelationContext.from_headers(headers)
        ctx = RequestContext(correlation_id=ctx.correlation_id, client_id=client[0] if client else None)
        CorrelationContext.set(ctx)
        structlog.contextvars.bind_contextvars(correlation_id=ctx.correlation_id)

        response_header = self._response_header
        encoded_id = ctx.correlation_id.encode()

        async def send_with_header(message: Any) -> None:
            if message["type"] == "http.response.start":
                headers_list: list[tuple[bytes, bytes]] = list(message.get("headers", []))
                headers_list.append((response_header, encoded_id))
                message = {**message, "headers": headers_list}
            await send(message)

        try:
            await self.app(scope, receive, send_with_header)
        finally:
            structlog.contextvars.unbind_contextvars("correlation_id")
            CorrelationContext.clear()


# ---------------------------------------------------------------------------
# Metrics middleware
# ---------------------------------------------------------------------------

class FastAPIMetricsMiddleware:
    """Time every HTTP request into the aggregator and the metrics port.

    An exception escaping the app counts as a 500 even though the error
    response is written further out by Starlette's server error handler.
    """

    def __init__(
        self,
        app: "ASGIApp",
        aggregator: PerformanceAggregator,
        metrics: Metrics | None = None,
    ) -> None:
        self.app = app
        self._aggregator = aggregator
        metrics = metrics or NoopMetrics()
        self._requests = metrics.counter("http.requests", "Total HTTP requests")
        self._latency = metrics.histogram("http.latency_ms", "HTTP request latency", "ms")
        self._errors = metrics.counter("http.errors", "HTTP 5xx responses")

    async def __call__(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "GET")
        path = scope.get("path", "")
        labels: dict[str, str] = {"method": method, "path": path}
        start = time.perf_counter()
        status_code: list[int] = [200]
        self._aggregator.begin()

        async def send_capturing(message: Any) -> None:
            if message["type"] == "http.response.start":
                status_code[0] = message.get("status", 200)
            await send(message)

        try:
            await self.app(scope, receive, send_capturing)
        except Exception:
            status_code[0] = 500
            raise
        finally:
            elapsed = (time.perf_counter() - start) * 1000
            self._aggregator.record(RequestMetrics(method, path, status_code[0], elapsed))
            self._requests.add(1.0, {**labels, "status": str(status_code[0])})
            self._latency.record(elapsed, labels)
            if status_code[0] >= 500:
                self._errors.add(1.0, labels)


__all__ = ["FastAPICorrelationIdMiddleware", "FastAPIMetricsMiddleware"]
