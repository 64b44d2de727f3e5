"""Observability – Counter, Histogram, Metrics ports."""
from __future__ import annotations

import abc


class Counter(abc.ABC):
    """Monotonically increasing counter."""

    @abc.abstractmethod
    def add(self, value: float = 1.0, labels: dict[str, str] | None = None) -> None: ...


class Histogram(abc.ABC):
    """Distribution / latency histogram."""

    @abc.abstractmethod
    def record(self, value: float, labels: dict[str, str] | None = None) -> None: ...


class Metrics(abc.ABC):
    """Port: factory for metric instruments (OpenTelemetry, Prometheus, ...)."""

    @abc.abstractmethod
    def counter(self, name: str, description: str = "", unit: str = "") -> Counter: ...

    @abc.abstractmethod
    def histogram(self, name: str, description: str = "", unit: str = "ms") -> Histogram: ...


__all__ = ["Counter", "Histogram", "Metrics"]
