"""Application files – FileValidator for CSV uploads."""
from __future__ import annotations

from tabex.application.files.upload import UploadedFile
from tabex.kernel.errors import InputError, ResourceLimitError, UnsupportedTypeError

__all__ = ["CSV_CONTENT_TYPES", "FileValidator"]

CSV_CONTENT_TYPES = frozenset({"text/csv", "application/vnd.ms-excel"})


class FileValidator:
    """Checks presence, size and type of an upload before it is parsed.

    A file is accepted when its content type is allowed *or* its name ends
    with one of ``allowed_extensions``; browsers disagree on the MIME type
    they send for ``.csv``.
    """

    def __init__(
        self,
        max_size_bytes: int,
        allowed_content_types: frozenset[str] = CSV_CONTENT_TYPES,
        allowed_extensions: frozenset[str] = frozenset({"csv"}),
    ) -> None:
        self.max_size_bytes = max_size_bytes
        self.allowed_content_types = allowed_content_types
        self.allowed_extensions = allowed_extensions

    def validate(self, file: UploadedFile | None) -> UploadedFile:
        if file is None:
            raise InputError("No file uploaded", errors=[{"field": "file", "message": "is required"}])
        if file.size_bytes > self.max_size_bytes:
            raise ResourceLimitError(
                "File too large",
                limit=self.max_size_bytes,
                actual=file.size_bytes,
            )
        if (
            file.content_type not in self.allowed_content_types
            and file.extension not in self.allowed_extensions
        ):
            raise UnsupportedTypeError(
                "Invalid file type. Only CSV files are allowed.",
                detail={"content_type": file.content_type, "filename": file.filename},
            )
        return file
