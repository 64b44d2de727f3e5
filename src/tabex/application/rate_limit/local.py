"""Application rate limiting – in-memory fixed-window implementation."""

from __future__ import annotations

import time
from typing import Callable

from tabex.application.rate_limit.rate_limiter import Quota, RateLimitResult, RateLimiter


class LocalTokenBucketRateLimiter(RateLimiter):
    """Single-process rate limiter keyed by ``(quota.key, identifier)``.

    Each key gets ``quota.limit`` tokens per window; the window restarts
    once ``quota.window_seconds`` have elapsed since its first request.
    Expired buckets are swept from :meth:`check` at most once per window,
    so the table only holds clients seen in the current window.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        # key -> (tokens_used, window_start, window_seconds)
        self._buckets: dict[str, tuple[int, float, float]] = {}
        self._next_sweep: float | None = None

    @staticmethod
    def _key(quota: Quota, identifier: str) -> str:
        return f"{quota.key}:{identifier}"

    async def check(self, quota: Quota, identifier: str) -> RateLimitResult:
        key = self._key(quota, identifier)
        now = self._clock()
        if self._next_sweep is None or now >= self._next_sweep:
            self.purge_expired()
            self._next_sweep = now + quota.window_seconds

        used, window_start, _ = self._buckets.get(key, (0, now, quota.window_seconds))
        if now - window_start >= quota.window_seconds:
            used, window_start = 0, now

        retry_after = max(0.0, window_start + quota.window_seconds - now)
        if used < quota.limit:
            self._buckets[key] = (used + 1, window_start, quota.window_seconds)
            return RateLimitResult(
                allowed=True,
                remaining=quota.limit - used - 1,
                retry_after_seconds=0.0,
                quota=quota,
            )
        return RateLimitResult(allowed=False, remaining=0, retry_after_seconds=retry_after, quota=quota)

    async def reset(self, quota: Quota, identifier: str) -> None:
        self._buckets.pop(self._key(quota, identifier), None)

    def purge_expired(self) -> int:
        """Drop buckets whose window has elapsed; return how many were dropped."""
        now = self._clock()
        stale = [k for k, (_, start, window) in self._buckets.items() if now - start >= window]
        for key in stale:
            del self._buckets[key]
        return len(stale)


__all__ = ["LocalTokenBucketRateLimiter"]
