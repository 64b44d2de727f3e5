"""Application streaming – RowSource."""
from __future__ import annotations

import asyncio
from typing import AsyncIterator, Sequence

from tabex.kernel.errors import ProcessingError
from tabex.kernel.types import Record

DEFAULT_CHUNK_SIZE = 1000
DEFAULT_YIELD_EVERY = 5


class RowSource:
    """Lazy, finite, single-pass view over an in-memory batch of records.

    Records are handed out in chunks of ``chunk_size``; after every
    ``yield_every`` chunks the source awaits ``asyncio.sleep(0)`` so other
    requests on the event loop make progress during very large exports.
    Input order is preserved exactly.  A second iteration raises
    :class:`~tabex.kernel.errors.ProcessingError`.
    """

    def __init__(
        self,
        records: Sequence[Record],
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        yield_every: int = DEFAULT_YIELD_EVERY,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if yield_every <= 0:
            raise ValueError("yield_every must be positive")
        self._records = records
        self.chunk_size = chunk_size
        self.yield_every = yield_every
        self._consumed = False
        self.chunks_emitted = 0
        self.cooperative_yields = 0

    def __len__(self) -> int:
        return len(self._records)

    @property
    def consumed(self) -> bool:
        return self._consumed

    def _claim(self) -> None:
        if self._consumed:
            raise ProcessingError("Row source already consumed", stage="stream")
        self._consumed = True

    async def chunks(self) -> AsyncIterator[list[Record]]:
        self._claim()
        for start in range(0, len(self._records), self.chunk_size):
            yield list(self._records[start : start + self.chunk_size])
            self.chunks_emitted += 1
            if self.chunks_emitted % self.yield_every == 0:
                self.cooperative_yields += 1
                await asyncio.sleep(0)

    async def _records_iter(self) -> AsyncIterator[Record]:
        async for chunk in self.chunks():
            for record in chunk:
                yield record

    def __aiter__(self) -> AsyncIterator[Record]:
        return self._records_iter()


__all__ = ["DEFAULT_CHUNK_SIZE", "DEFAULT_YIELD_EVERY", "RowSource"]
