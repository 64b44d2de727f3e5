"""Application streaming – response transports.

A transport is the producer-facing half of a response: the export saga
calls :meth:`start` once (status + headers), :meth:`send` per encoded chunk
and :meth:`finish` at the end.

:class:`StreamingTransport` bounds memory with a fixed-size queue.  When the
HTTP consumer falls behind, :meth:`send` suspends until a chunk is drained,
so at most ``high_water`` chunks are buffered regardless of row count.
"""
from __future__ import annotations

import abc
import asyncio
import dataclasses
from typing import AsyncIterator, Mapping

from tabex.kernel.errors import ProcessingError

DEFAULT_HIGH_WATER = 16


@dataclasses.dataclass(frozen=True)
class ResponseHead:
    """Status line and headers of a response."""

    media_type: str
    headers: Mapping[str, str] = dataclasses.field(default_factory=dict)
    status_code: int = 200


class ResponseTransport(abc.ABC):
    """Port: where a saga's respond step writes its bytes."""

    @property
    @abc.abstractmethod
    def headers_sent(self) -> bool: ...

    @abc.abstractmethod
    async def start(self, head: ResponseHead) -> None: ...

    @abc.abstractmethod
    async def send(self, chunk: bytes) -> None: ...

    @abc.abstractmethod
    async def finish(self) -> None: ...


class BufferTransport(ResponseTransport):
    """Collects the whole response in memory (tests and small JSON bodies)."""

    def __init__(self) -> None:
        self.head: ResponseHead | None = None
        self.chunks: list[bytes] = []
        self.finished = False

    @property
    def headers_sent(self) -> bool:
        return self.head is not None

    async def start(self, head: ResponseHead) -> None:
        if self.head is not None:
            raise ProcessingError("Response already started", stage="respond")
        self.head = head

    async def send(self, chunk: bytes) -> None:
        if self.head is None:
            raise ProcessingError("Response not started", stage="respond")
        self.chunks.append(chunk)

    async def finish(self) -> None:
        self.finished = True

    @property
    def body(self) -> bytes:
        return b"".join(self.chunks)


class _Failure:
    __slots__ = ("error",)

    def __init__(self, error: BaseException) -> None:
        self.error = error


_EOF = object()


class StreamingTransport(ResponseTransport):
    """Bounded producer/consumer channel between a saga task and the HTTP body.

    The consumer pulls with :meth:`body`; the producer task is attached via
    :meth:`attach` so that closing the body (client disconnect) cancels it,
    and a producer failure after headers were sent aborts the body.
    """

    def __init__(self, high_water: int = DEFAULT_HIGH_WATER) -> None:
        if high_water <= 0:
            raise ValueError("high_water must be positive")
        self.high_water = high_water
        self._queue: asyncio.Queue[object] = asyncio.Queue(maxsize=high_water)
        self._started = asyncio.Event()
        self._head: ResponseHead | None = None
        self._producer: asyncio.Task[None] | None = None
        self._closed = False
        self.bytes_sent = 0

    # ------------------------------------------------------------------
    # Producer side
    # ------------------------------------------------------------------

    @property
    def headers_sent(self) -> bool:
        return self._head is not None

    @property
    def head(self) -> ResponseHead | None:
        return self._head

    @property
    def buffered(self) -> int:
        return self._queue.qsize()

    async def start(self, head: ResponseHead) -> None:
        if self._head is not None:
            raise ProcessingError("Response already started", stage="respond")
        self._head = head
        self._started.set()

    async def send(self, chunk: bytes) -> None:
        if self._head is None:
            raise ProcessingError("Response not started", stage="respond")
        if self._closed:
            raise ProcessingError("Client disconnected", stage="respond")
        await self._queue.put(chunk)
        self.bytes_sent += len(chunk)

    async def finish(self) -> None:
        await self._queue.put(_EOF)

    def fail(self, error: BaseException) -> None:
        """Abort the body: pending chunks are dropped and the consumer raises."""
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(_Failure(error))

    # ------------------------------------------------------------------
    # Consumer side
    # ------------------------------------------------------------------

    def attach(self, producer: asyncio.Task[None]) -> None:
        self._producer = producer
        producer.add_done_callback(self._on_producer_done)

    def _on_producer_done(self, task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None and self.headers_sent and not self._closed:
            self.fail(exc)

    async def wait_started(self) -> ResponseHead:
        """Wait until the producer sent headers, or re-raise its early failure."""
        if self._producer is None:
            await self._started.wait()
        else:
            started = asyncio.ensure_future(self._started.wait())
            try:
                await asyncio.wait({started, self._producer}, return_when=asyncio.FIRST_COMPLETED)
            finally:
                started.cancel()
            if self._head is None:
                # producer ended before responding; surface its own error first
                self._producer.result()
        if self._head is None:
            raise ProcessingError("Producer finished without a response", stage="respond")
        return self._head

    async def body(self) -> AsyncIterator[bytes]:
        try:
            while True:
                item = await self._queue.get()
                if item is _EOF:
                    return
                if isinstance(item, _Failure):
                    raise item.error
                yield item  # type: ignore[misc]
        finally:
            self.close()

    def close(self) -> None:
        """Consumer is gone: stop the producer and release its resources."""
        self._closed = True
        if self._producer is not None and not self._producer.done():
            self._producer.cancel()


__all__ = [
    "BufferTransport",
    "DEFAULT_HIGH_WATER",
    "ResponseHead",
    "ResponseTransport",
    "StreamingTransport",
]
