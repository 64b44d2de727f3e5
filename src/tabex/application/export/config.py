"""Application export – ExportConfig."""
from __future__ import annotations

import dataclasses
import re
from typing import Any, Literal, Mapping

from tabex.config.settings import AppSettings
from tabex.kernel.errors import InputError
from tabex.kernel.types import SafeFilename

__all__ = ["ExportConfig", "ImageFormat", "PageSize", "RasterFormat"]

ImageFormat = Literal["svg", "png"]
RasterFormat = Literal["png", "jpg", "jpeg"]
PageSize = Literal["A4", "A3", "Letter", "Legal"]

_HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")
_PAGE_SIZES = ("A4", "A3", "Letter", "Legal")
_IMAGE_FORMATS = ("svg", "png")
_RASTER_FORMATS = ("png", "jpg", "jpeg")
_MAX_TITLE = 255
_DIMENSION_RANGE = (100, 5000)
_CHUNK_RANGE = (1, 100_000)

# request key -> dataclass field
_FIELDS: dict[str, str] = {
    "filename": "filename",
    "includeHeader": "include_header",
    "delimiter": "delimiter",
    "quote": "quote",
    "escape": "escape",
    "title": "title",
    "headers": "headers",
    "width": "width",
    "height": "height",
    "backgroundColor": "background_color",
    "imageFormat": "image_format",
    "format": "format",
    "quality": "quality",
    "pageSize": "page_size",
    "margin": "margin",
    "chunkSize": "chunk_size",
}


@dataclasses.dataclass(frozen=True)
class ExportConfig:
    """Validated, immutable per-request export options.

    Build with :meth:`from_mapping`; unknown request keys are dropped and
    invalid values raise :class:`~tabex.kernel.errors.InputError` listing
    every offending field.
    """

    filename: SafeFilename = SafeFilename("export")
    include_header: bool = True
    delimiter: str = ","
    quote: str = '"'
    escape: str = '"'
    title: str | None = None
    headers: tuple[str, ...] | None = None
    width: int = 800
    height: int | None = None
    background_color: str = "#ffffff"
    image_format: ImageFormat = "svg"
    format: RasterFormat = "png"
    quality: float = 0.8
    page_size: PageSize = "A4"
    margin: int = 50
    chunk_size: int = 1000

    @property
    def raster_format(self) -> Literal["png", "jpeg"]:
        return "jpeg" if self.format in ("jpg", "jpeg") else "png"

    @classmethod
    def defaults(cls, settings: AppSettings | None = None) -> "ExportConfig":
        if settings is None:
            return cls()
        return cls(
            delimiter=settings.csv_delimiter,
            quote=settings.csv_quote,
            escape=settings.csv_escape,
            width=settings.image_width,
            background_color=settings.image_background,
            quality=settings.image_quality,
            page_size=settings.report_page_size,  # type: ignore[arg-type]
            margin=settings.report_margin,
            chunk_size=settings.chunk_size,
        )

    @classmethod
    def from_mapping(
        cls,
        raw: Mapping[str, Any] | None,
        settings: AppSettings | None = None,
    ) -> "ExportConfig":
        base = cls.defaults(settings)
        if raw is None:
            return base
        if not isinstance(raw, Mapping):
            raise InputError("config must be an object", errors=[{"field": "config", "message": "must be an object"}])

        errors: list[dict[str, Any]] = []
        values: dict[str, Any] = {}
        for key, field_name in _FIELDS.items():
            if key not in raw or raw[key] is None:
                continue
            try:
                values[field_name] = _PARSERS[field_name](raw[key])
            except ValueError as exc:
                errors.append({"field": f"config.{key}", "message": str(exc)})

        if errors:
            raise InputError("Validation failed", errors=errors)
        config = dataclasses.replace(base, **values)
        conflicts = _csv_conflicts(config)
        if conflicts:
            raise InputError("Validation failed", errors=conflicts)
        return config


def _csv_conflicts(config: ExportConfig) -> list[dict[str, Any]]:
    """CSV characters that would make the output ambiguous to a reader."""
    errors: list[dict[str, Any]] = []
    if config.quote == config.delimiter:
        errors.append({"field": "config.quote", "message": "must differ from delimiter"})
    if config.escape == config.delimiter:
        errors.append({"field": "config.escape", "message": "must differ from delimiter"})
    return errors


# ---------------------------------------------------------------------------
# field parsers: raise ValueError with a user-facing message
# ---------------------------------------------------------------------------


def _bool(value: Any) -> bool:  # noqa: ANN401
    if not isinstance(value, bool):
        raise ValueError("must be a boolean")
    return value


def _char(value: Any) -> str:  # noqa: ANN401
    if not isinstance(value, str) or len(value) != 1:
        raise ValueError("must be a single character")
    if value in ("\r", "\n"):
        raise ValueError("must not be a line break")
    return value


def _number(value: Any, low: float, high: float) -> float:  # noqa: ANN401
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a number")
    if not low <= value <= high:
        raise ValueError(f"must be between {low:g} and {high:g}")
    return value


def _dimension(value: Any) -> int:  # noqa: ANN401
    return int(_number(value, *_DIMENSION_RANGE))


def _choice(options: tuple[str, ...]) -> Any:  # noqa: ANN401
    def parse(value: Any) -> str:  # noqa: ANN401
        if not isinstance(value, str):
            raise ValueError(f"must be one of {', '.join(options)}")
        normalized = value.lower() if options is not _PAGE_SIZES else value
        if normalized not in options:
            raise ValueError(f"must be one of {', '.join(options)}")
        return normalized
    return parse


def _filename(value: Any) -> SafeFilename:  # noqa: ANN401
    if not isinstance(value, str):
        raise ValueError("must be a string")
    return SafeFilename.sanitize(value)


def _title(value: Any) -> str:  # noqa: ANN401
    if not isinstance(value, str):
        raise ValueError("must be a string")
    if len(value) > _MAX_TITLE:
        raise ValueError(f"must be at most {_MAX_TITLE} characters")
    return value


def _headers(value: Any) -> tuple[str, ...]:  # noqa: ANN401
    if not isinstance(value, (list, tuple)) or not all(isinstance(h, str) for h in value):
        raise ValueError("must be an array of strings")
    return tuple(value)


def _color(value: Any) -> str:  # noqa: ANN401
    if not isinstance(value, str) or not _HEX_COLOR.match(value):
        raise ValueError("must be a hex color like #ffffff")
    return value


_PARSERS: dict[str, Any] = {
    "filename": _filename,
    "include_header": _bool,
    "delimiter": _char,
    "quote": _char,
    "escape": _char,
    "title": _title,
    "headers": _headers,
    "width": _dimension,
    "height": _dimension,
    "background_color": _color,
    "image_format": _choice(_IMAGE_FORMATS),
    "format": _choice(_RASTER_FORMATS),
    "quality": lambda v: float(_number(v, 0.1, 1.0)),
    "page_size": _choice(_PAGE_SIZES),
    "margin": lambda v: int(_number(v, 0, 100)),
    "chunk_size": lambda v: int(_number(v, *_CHUNK_RANGE)),
}
