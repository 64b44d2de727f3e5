"""Resilience – QueueLimiter (concurrent job cap + bounded wait queue)."""
from __future__ import annotations

import asyncio

from tabex.kernel.errors import OverloadError


class QueueLimiter:
    """Admits at most ``max_concurrent`` jobs, with ``max_queue`` more waiting.

    A caller arriving when every running and waiting slot is taken is
    rejected immediately with :class:`~tabex.kernel.errors.OverloadError`
    instead of queueing without bound.
    """

    def __init__(self, max_concurrent: int, max_queue: int = 0) -> None:
        if max_concurrent <= 0:
            raise ValueError("max_concurrent must be positive")
        if max_queue < 0:
            raise ValueError("max_queue must not be negative")
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._queue = asyncio.Semaphore(max_concurrent + max_queue)
        self.max_concurrent = max_concurrent
        self.max_queue = max_queue

    @property
    def available(self) -> int:
        """Admission slots left (running plus waiting)."""
        return self._queue._value  # noqa: SLF001

    @property
    def in_flight(self) -> int:
        return self.max_concurrent + self.max_queue - self.available

    async def __aenter__(self) -> "QueueLimiter":
        if not self._queue._value:  # noqa: SLF001
            raise OverloadError("Too many concurrent requests")
        await self._queue.acquire()
        try:
            await self._semaphore.acquire()
        except BaseException:
            self._queue.release()
            raise
        return self

    async def __aexit__(self, *_: object) -> None:
        self._semaphore.release()
        self._queue.release()


__all__ = ["QueueLimiter"]
