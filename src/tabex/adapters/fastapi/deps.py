"""FastAPI adapter – reusable dependency functions."""
from __future__ import annotations

from typing import Awaitable, Callable

from fastapi import Request

from tabex.application.rate_limit import Quota, RateLimiter


def client_identifier(request: Request) -> str:
    """Rate-limit key: first ``X-Forwarded-For`` hop, else the peer address."""
    forwarded = request.headers.get("x-forwarded-for", "")
    if forwarded.strip():
        return forwarded.split(",")[0].strip()
    if request.client is not None:
        return request.client.host
    return "unknown"


def rate_limit_dep(quota: Quota) -> Callable[[Request], Awaitable[None]]:
    """Return a dependency enforcing *quota* per client.

    The limiter is read from ``app.state.rate_limiter``; exhausting the quota
    raises :class:`~tabex.kernel.errors.OverloadError` (429).
    """

    async def enforce(request: Request) -> None:
        limiter: RateLimiter = request.app.state.rate_limiter
        await limiter.enforce(quota, client_identifier(request))

    return enforce


__all__ = ["client_identifier", "rate_limit_dep"]
