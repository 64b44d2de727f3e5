"""Observability – structured logging helpers."""
from tabex.observability.logging.factory import JsonLoggerFactory
from tabex.observability.logging.processors import CorrelationProcessor, get_logger

__all__ = [
    "CorrelationProcessor",
    "JsonLoggerFactory",
    "get_logger",
]
