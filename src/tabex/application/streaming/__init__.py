"""Application streaming – lazy row sources and backpressured transports."""
from tabex.application.streaming.row_source import DEFAULT_CHUNK_SIZE, DEFAULT_YIELD_EVERY, RowSource
from tabex.application.streaming.transport import (
    DEFAULT_HIGH_WATER,
    BufferTransport,
    ResponseHead,
    ResponseTransport,
    StreamingTransport,
)

__all__ = [
    "BufferTransport",
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_HIGH_WATER",
    "DEFAULT_YIELD_EVERY",
    "ResponseHead",
    "ResponseTransport",
    "RowSource",
    "StreamingTransport",
]
