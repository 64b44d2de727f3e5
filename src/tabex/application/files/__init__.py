"""Application files – upload value object and validation."""
from tabex.application.files.upload import UploadedFile
from tabex.application.files.validator import CSV_CONTENT_TYPES, FileValidator

__all__ = ["CSV_CONTENT_TYPES", "FileValidator", "UploadedFile"]
