"""Config settings – AppSettings for the export/import service."""
from __future__ import annotations

import dataclasses
import re

from tabex.config.settings.base import Settings
from tabex.config.settings.errors import InvalidSettingValueError

_HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")
_PAGE_SIZES = frozenset({"A4", "A3", "Letter", "Legal"})

MiB = 1024 * 1024


@dataclasses.dataclass
class AppSettings(Settings):
    """Process-wide service configuration.

    Every field maps to an upper-cased environment variable of the same
    name (``PORT``, ``MAX_FILE_SIZE_BYTES``, ``CSV_DELIMITER`` ...).
    Per-request options live in :class:`~tabex.application.export.ExportConfig`;
    the CSV/image/report fields here are its defaults.
    """

    port: int = 3000
    environment: str = "development"
    log_level: str = "INFO"

    max_file_size_bytes: int = 100 * MiB
    max_row_bytes: int = MiB
    chunk_size: int = 1000
    yield_every_chunks: int = 5
    stream_high_water_chunks: int = 16

    max_concurrent_jobs: int = 10
    max_queued_jobs: int = 0
    request_timeout_seconds: float = 30.0
    export_rate_limit: int = 100
    import_rate_limit: int = 50
    rate_limit_window_seconds: int = 60

    csv_delimiter: str = ","
    csv_quote: str = '"'
    csv_escape: str = '"'

    image_width: int = 800
    image_min_height: int = 600
    image_background: str = "#ffffff"
    image_quality: float = 0.8

    report_page_size: str = "A4"
    report_margin: int = 50

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    def _validate(self) -> None:
        positive = (
            "port",
            "max_file_size_bytes",
            "max_row_bytes",
            "chunk_size",
            "yield_every_chunks",
            "stream_high_water_chunks",
            "max_concurrent_jobs",
            "export_rate_limit",
            "import_rate_limit",
            "rate_limit_window_seconds",
        )
        for name in positive:
            value = getattr(self, name)
            if value <= 0:
                raise InvalidSettingValueError(name, value, "must be positive")
        if self.max_queued_jobs < 0:
            raise InvalidSettingValueError("max_queued_jobs", self.max_queued_jobs, "must be >= 0")
        if self.request_timeout_seconds <= 0:
            raise InvalidSettingValueError(
                "request_timeout_seconds", self.request_timeout_seconds, "must be positive"
            )
        for name in ("csv_delimiter", "csv_quote", "csv_escape"):
            value = getattr(self, name)
            if len(value) != 1:
                raise InvalidSettingValueError(name, value, "must be a single character")
        if not _HEX_COLOR.match(self.image_background):
            raise InvalidSettingValueError("image_background", self.image_background, "must be #RRGGBB")
        if not 0.1 <= self.image_quality <= 1.0:
            raise InvalidSettingValueError("image_quality", self.image_quality, "must be within 0.1–1.0")
        if not 100 <= self.image_width <= 5000:
            raise InvalidSettingValueError("image_width", self.image_width, "must be within 100–5000")
        if not 100 <= self.image_min_height <= 5000:
            raise InvalidSettingValueError(
                "image_min_height", self.image_min_height, "must be within 100–5000"
            )
        if self.report_page_size not in _PAGE_SIZES:
            raise InvalidSettingValueError(
                "report_page_size", self.report_page_size, f"must be one of {sorted(_PAGE_SIZES)}"
            )
        if not 0 <= self.report_margin <= 100:
            raise InvalidSettingValueError("report_margin", self.report_margin, "must be within 0–100")


__all__ = ["AppSettings"]
