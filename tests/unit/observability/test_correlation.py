"""Unit tests for CorrelationContext."""

from __future__ import annotations

import asyncio

from tabex.observability.correlation import CorrelationContext, RequestContext


class TestCorrelationContext:
    def setup_method(self) -> None:
        CorrelationContext.clear()

    def test_set_and_get(self) -> None:
        ctx = RequestContext.new()
        CorrelationContext.set(ctx)
        assert CorrelationContext.get() is ctx

    def test_get_returns_none_when_unset(self) -> None:
        assert CorrelationContext.get() is None

    def test_get_or_new_creates_when_unset(self) -> None:
        ctx = CorrelationContext.get_or_new()
        assert ctx.correlation_id
        assert CorrelationContext.get() is ctx

    def test_get_or_new_returns_existing(self) -> None:
        ctx = RequestContext.new()
        CorrelationContext.set(ctx)
        assert CorrelationContext.get_or_new() is ctx

    def test_clear(self) -> None:
        CorrelationContext.set(RequestContext.new())
        CorrelationContext.clear()
        assert CorrelationContext.get() is None

    def test_new_carries_client(self) -> None:
        assert RequestContext.new(client_id="10.0.0.1").client_id == "10.0.0.1"

    def test_tasks_are_isolated(self) -> None:
        async def handle(cid: str) -> str:
            CorrelationContext.set(RequestContext(correlation_id=cid))
            await asyncio.sleep(0)
            ctx = CorrelationContext.get()
            assert ctx is not None
            return ctx.correlation_id

        async def run() -> list[str]:
            return await asyncio.gather(handle("a"), handle("b"))

        assert asyncio.run(run()) == ["a", "b"]


class TestFromHeaders:
    def test_correlation_header(self) -> None:
        assert CorrelationContext.from_headers({"X-Correlation-ID": "abc"}).correlation_id == "abc"

    def test_request_id_fallback(self) -> None:
        assert CorrelationContext.from_headers({"x-request-id": " r1 "}).correlation_id == "r1"

    def test_correlation_header_wins(self) -> None:
        ctx = CorrelationContext.from_headers({"x-request-id": "r1", "x-correlation-id": "c1"})
        assert ctx.correlation_id == "c1"

    def test_generated_when_absent(self) -> None:
        a = CorrelationContext.from_headers({})
        b = CorrelationContext.from_headers({})
        assert a.correlation_id != b.correlation_id
        assert len(a.correlation_id) == 36
