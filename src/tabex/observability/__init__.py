"""Observability – correlation, logging, metrics."""

from tabex.observability.correlation import CorrelationContext, RequestContext
from tabex.observability.logging import JsonLoggerFactory, get_logger
from tabex.observability.metrics import Metrics, NoopMetrics, PerformanceAggregator, RequestMetrics

__all__ = [
    "CorrelationContext",
    "JsonLoggerFactory",
    "Metrics",
    "NoopMetrics",
    "PerformanceAggregator",
    "RequestContext",
    "RequestMetrics",
    "get_logger",
]
