"""Observability – metrics ports and the performance aggregator."""
from tabex.observability.metrics.noop import NoopMetrics
from tabex.observability.metrics.performance import PerformanceAggregator, RequestMetrics
from tabex.observability.metrics.ports import Counter, Histogram, Metrics

__all__ = [
    "Counter",
    "Histogram",
    "Metrics",
    "NoopMetrics",
    "PerformanceAggregator",
    "RequestMetrics",
]
