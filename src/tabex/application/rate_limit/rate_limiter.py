"""Application rate limiting – Quota, RateLimitResult, RateLimiter port."""
from __future__ import annotations

import abc
import dataclasses
import math

from tabex.kernel.errors import OverloadError


@dataclasses.dataclass(frozen=True)
class Quota:
    """Fixed-window rule: at most ``limit`` requests per ``window_seconds``.

    ``message`` is the client-facing text when the quota is exhausted.
    """

    key: str
    limit: int
    window_seconds: int
    message: str = "Too many requests, please try again later"

    @property
    def window_label(self) -> str:
        return f"{self.limit} req/{self.window_seconds}s"


@dataclasses.dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    remaining: int
    retry_after_seconds: float
    quota: Quota

    def raise_if_denied(self) -> None:
        if not self.allowed:
            raise OverloadError(
                self.quota.message,
                retry_after_seconds=math.ceil(self.retry_after_seconds),
                detail={"quota": self.quota.window_label},
            )


class RateLimiter(abc.ABC):
    """Port: check whether a keyed request is within quota."""

    @abc.abstractmethod
    async def check(self, quota: Quota, identifier: str) -> RateLimitResult: ...

    @abc.abstractmethod
    async def reset(self, quota: Quota, identifier: str) -> None: ...

    async def enforce(self, quota: Quota, identifier: str) -> RateLimitResult:
        """Consume one request or raise :class:`OverloadError`."""
        result = await self.check(quota, identifier)
        result.raise_if_denied()
        return result


__all__ = ["Quota", "RateLimitResult", "RateLimiter"]
