"""Observability – request-scoped metrics and the process-wide aggregator.

Every request produces exactly one :class:`RequestMetrics` record.  The
record is merged into a :class:`PerformanceAggregator` through
:meth:`PerformanceAggregator.record`, the only mutating entry point, so no
call site touches the counters directly.
"""
from __future__ import annotations

import dataclasses
import math
import time
from typing import Any


@dataclasses.dataclass(frozen=True)
class RequestMetrics:
    """Timing and outcome of one HTTP request."""

    method: str
    path: str
    status_code: int
    duration_ms: float

    @property
    def is_server_error(self) -> bool:
        return self.status_code >= 500


class PerformanceAggregator:
    """Process-wide totals exposed on the health endpoint.

    Only 5xx responses count as errors; 4xx are client mistakes.
    """

    def __init__(self, clock: Any = time.monotonic) -> None:  # noqa: ANN401
        self._clock = clock
        self._started_at = clock()
        self._requests = 0
        self._total_ms = 0.0
        self._min_ms = math.inf
        self._max_ms = 0.0
        self._errors = 0
        self._active = 0

    def begin(self) -> None:
        """Mark a request as in flight until its :meth:`record` call."""
        self._active += 1

    def record(self, metrics: RequestMetrics) -> None:
        self._active = max(0, self._active - 1)
        self._requests += 1
        self._total_ms += metrics.duration_ms
        self._min_ms = min(self._min_ms, metrics.duration_ms)
        self._max_ms = max(self._max_ms, metrics.duration_ms)
        if metrics.is_server_error:
            self._errors += 1

    def snapshot(self) -> dict[str, float | int | None]:
        uptime = max(self._clock() - self._started_at, 1e-9)
        requests = self._requests
        return {
            "requests": requests,
            "totalTime": round(self._total_ms, 3),
            "averageTime": round(self._total_ms / requests, 3) if requests else 0.0,
            "minTime": round(self._min_ms, 3) if requests else None,
            "maxTime": round(self._max_ms, 3),
            "errors": self._errors,
            "activeConnections": self._active,
            "requestsPerSecond": round(requests / uptime, 3),
            "errorRate": round(self._errors / max(requests, 1) * 100, 3),
        }

    def uptime_seconds(self) -> float:
        return self._clock() - self._started_at

    def reset(self) -> None:
        self._started_at = self._clock()
        self._requests = 0
        self._total_ms = 0.0
        self._min_ms = math.inf
        self._max_ms = 0.0
        self._errors = 0
        self._active = 0


__all__ = ["PerformanceAggregator", "RequestMetrics"]
