"""Kernel – 100% framework-agnostic building blocks."""

from tabex.kernel.errors import (
    BaseError,
    InputError,
    OverloadError,
    ProcessingError,
    ProcessingTimeoutError,
    ResourceLimitError,
    UnsupportedTypeError,
)

__all__ = [
    "BaseError",
    "InputError",
    "OverloadError",
    "ProcessingError",
    "ProcessingTimeoutError",
    "ResourceLimitError",
    "UnsupportedTypeError",
]
