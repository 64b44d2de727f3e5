"""Unit tests for the QueueLimiter bulkhead."""

from __future__ import annotations

import asyncio

import pytest

from tabex.kernel.errors import OverloadError
from tabex.resilience.bulkhead import QueueLimiter


class TestQueueLimiter:
    def test_normal_entry_exits_cleanly(self) -> None:
        async def run() -> None:
            lim = QueueLimiter(max_concurrent=2)
            async with lim:
                assert lim.in_flight == 1
            assert lim.in_flight == 0
            assert lim.available == 2

        asyncio.run(run())

    def test_overflow_raises_overload(self) -> None:
        async def run() -> None:
            lim = QueueLimiter(max_concurrent=1)
            async with lim:
                with pytest.raises(OverloadError, match="Too many concurrent requests"):
                    async with lim:
                        pass

        asyncio.run(run())

    def test_queued_caller_waits_for_slot(self) -> None:
        async def run() -> list[str]:
            lim = QueueLimiter(max_concurrent=1, max_queue=1)
            order: list[str] = []
            release = asyncio.Event()

            async def first() -> None:
                async with lim:
                    order.append("first-in")
                    await release.wait()
                    order.append("first-out")

            async def second() -> None:
                async with lim:
                    order.append("second-in")

            t1 = asyncio.create_task(first())
            await asyncio.sleep(0)
            t2 = asyncio.create_task(second())
            await asyncio.sleep(0)
            assert lim.available == 0
            with pytest.raises(OverloadError):
                async with lim:
                    pass
            release.set()
            await asyncio.gather(t1, t2)
            return order

        assert asyncio.run(run()) == ["first-in", "first-out", "second-in"]

    def test_slot_released_on_error(self) -> None:
        async def run() -> None:
            lim = QueueLimiter(max_concurrent=1)
            with pytest.raises(ValueError):
                async with lim:
                    raise ValueError("boom")
            async with lim:
                pass

        asyncio.run(run())

    @pytest.mark.parametrize("kwargs", [{"max_concurrent": 0}, {"max_concurrent": 1, "max_queue": -1}])
    def test_invalid_arguments(self, kwargs: dict[str, int]) -> None:
        with pytest.raises(ValueError):
            QueueLimiter(**kwargs)
