"""Unit tests for the in-memory rate limiter."""

from __future__ import annotations

import asyncio

import pytest

from tabex.application.rate_limit import LocalTokenBucketRateLimiter, Quota
from tabex.kernel.errors import OverloadError


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


QUOTA = Quota(key="export", limit=2, window_seconds=60, message="Too many export requests")


class TestLocalTokenBucketRateLimiter:
    def setup_method(self) -> None:
        self.clock = FakeClock()
        self.limiter = LocalTokenBucketRateLimiter(clock=self.clock)

    def check(self, identifier: str = "1.2.3.4"):  # noqa: ANN201
        return asyncio.run(self.limiter.check(QUOTA, identifier))

    def test_allows_up_to_limit(self) -> None:
        assert self.check().remaining == 1
        assert self.check().remaining == 0
        denied = self.check()
        assert not denied.allowed
        assert denied.retry_after_seconds == 60

    def test_window_resets(self) -> None:
        self.check()
        self.check()
        self.clock.now += 60
        assert self.check().allowed

    def test_identifiers_isolated(self) -> None:
        self.check("a")
        self.check("a")
        assert self.check("b").allowed

    def test_quotas_isolated(self) -> None:
        self.check()
        self.check()
        other = Quota(key="import", limit=1, window_seconds=60)
        assert asyncio.run(self.limiter.check(other, "1.2.3.4")).allowed

    def test_enforce_raises(self) -> None:
        asyncio.run(self.limiter.enforce(QUOTA, "x"))
        asyncio.run(self.limiter.enforce(QUOTA, "x"))
        self.clock.now += 10.2
        with pytest.raises(OverloadError) as exc_info:
            asyncio.run(self.limiter.enforce(QUOTA, "x"))
        assert exc_info.value.message == "Too many export requests"
        assert exc_info.value.retry_after_seconds == 50
        assert exc_info.value.detail == {"quota": "2 req/60s"}

    def test_reset(self) -> None:
        self.check()
        self.check()
        asyncio.run(self.limiter.reset(QUOTA, "1.2.3.4"))
        assert self.check().allowed

    def test_purge_expired(self) -> None:
        self.check("a")
        self.clock.now += 30
        self.check("b")
        self.clock.now += 30
        assert self.limiter.purge_expired() == 1

    def test_check_sweeps_expired_clients(self) -> None:
        async def flood() -> None:
            for i in range(5000):
                await self.limiter.check(QUOTA, f"client-{i}")

        asyncio.run(flood())
        assert len(self.limiter._buckets) == 5000
        self.clock.now += QUOTA.window_seconds + 1
        assert self.check("10.9.9.9").allowed
        assert len(self.limiter._buckets) <= 1

    def test_sweep_keeps_live_windows(self) -> None:
        self.check("a")
        self.clock.now += 61
        self.check("b")
        self.clock.now += 30
        self.check("c")
        assert set(self.limiter._buckets) == {"export:b", "export:c"}
