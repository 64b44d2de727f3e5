"""Application saga – SagaStep."""

from __future__ import annotations

import dataclasses
from typing import Awaitable, Callable

Action = Callable[[], Awaitable[None]]
Compensation = Callable[[], Awaitable[None]]


@dataclasses.dataclass(frozen=True)
class SagaStep:
    """A forward action paired with the compensation that undoes it."""

    index: int
    name: str
    action: Action
    compensation: Compensation

    def __repr__(self) -> str:
        return f"SagaStep(index={self.index}, name={self.name!r})"


__all__ = ["Action", "Compensation", "SagaStep"]
