"""Resilience – TimeoutPolicy."""
from __future__ import annotations

import asyncio
import dataclasses
from typing import Awaitable, Callable, TypeVar

from tabex.kernel.errors import ProcessingTimeoutError

T = TypeVar("T")


@dataclasses.dataclass
class TimeoutPolicy:
    """Bounds an awaitable; expiry raises :class:`ProcessingTimeoutError` (408)."""

    timeout_seconds: float

    async def execute(self, func: Callable[[], Awaitable[T]]) -> T:
        try:
            return await asyncio.wait_for(func(), timeout=self.timeout_seconds)
        except TimeoutError as exc:
            raise ProcessingTimeoutError(
                "Request timeout",
                detail={"timeout_seconds": self.timeout_seconds},
            ) from exc


__all__ = ["TimeoutPolicy"]
