"""Application files – UploadedFile value object."""
from __future__ import annotations

import hashlib
from dataclasses import dataclass

__all__ = ["UploadedFile"]


@dataclass(frozen=True)
class UploadedFile:
    """A fully buffered multipart upload."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    @property
    def extension(self) -> str:
        _, dot, ext = self.filename.rpartition(".")
        return ext.lower() if dot else ""

    @property
    def checksum_sha256(self) -> str:
        return hashlib.sha256(self.data).hexdigest()

    @classmethod
    def from_bytes(cls, filename: str | None, content_type: str | None, data: bytes) -> "UploadedFile":
        return cls(filename=filename or "", content_type=(content_type or "").lower(), data=data)
