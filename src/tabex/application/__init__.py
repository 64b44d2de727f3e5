"""Application – export/import use cases, saga executor and streaming primitives."""

from tabex.application.export import ExportConfig, ExportKind, ExportService
from tabex.application.files import FileValidator, UploadedFile
from tabex.application.imports import CsvDecoder, ImportResult, ImportService
from tabex.application.rate_limit import LocalTokenBucketRateLimiter, Quota, RateLimiter
from tabex.application.saga import Saga, SagaState
from tabex.application.streaming import BufferTransport, ResponseHead, RowSource, StreamingTransport

__all__ = [
    "BufferTransport",
    "CsvDecoder",
    "ExportConfig",
    "ExportKind",
    "ExportService",
    "FileValidator",
    "ImportResult",
    "ImportService",
    "LocalTokenBucketRateLimiter",
    "Quota",
    "RateLimiter",
    "ResponseHead",
    "RowSource",
    "Saga",
    "SagaState",
    "StreamingTransport",
    "UploadedFile",
]
