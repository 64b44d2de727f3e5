"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── InputError               (application.py)  → 400
    │   └── UnsupportedTypeError                    → 400
    ├── ResourceLimitError                          → 413
    ├── OverloadError                               → 429
    ├── ProcessingTimeoutError                      → 408
    └── ProcessingError          (infrastructure.py) → 500
"""

from tabex.kernel.errors.application import (
    InputError,
    OverloadError,
    ProcessingTimeoutError,
    ResourceLimitError,
    UnsupportedTypeError,
)
from tabex.kernel.errors.base import BaseError
from tabex.kernel.errors.infrastructure import ProcessingError

__all__ = [
    "BaseError",
    "InputError",
    "OverloadError",
    "ProcessingError",
    "ProcessingTimeoutError",
    "ResourceLimitError",
    "UnsupportedTypeError",
]
