"""Kernel value-object types — public re-export surface.

Modules:
  records.py  — Record, Scalar, infer_headers, cell_text
  filename.py — SafeFilename
"""

from tabex.kernel.types.filename import DEFAULT_FILENAME, SafeFilename
from tabex.kernel.types.records import Record, Scalar, cell, cell_text, infer_headers

__all__ = [
    "DEFAULT_FILENAME",
    "Record",
    "SafeFilename",
    "Scalar",
    "cell",
    "cell_text",
    "infer_headers",
]
