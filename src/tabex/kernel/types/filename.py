"""Download filename value object."""

from __future__ import annotations

import dataclasses
import re
from typing import Final

_UNSAFE_CHARS: Final = re.compile(r"[^A-Za-z0-9_-]")
_SAFE_PATTERN: Final = re.compile(r"^[A-Za-z0-9_-]{1,255}$")
MAX_LENGTH: Final = 255
DEFAULT_FILENAME: Final = "export"


@dataclasses.dataclass(frozen=True, slots=True)
class SafeFilename:
    """Attachment basename restricted to ``[A-Za-z0-9_-]``, max 255 chars."""

    value: str

    def __post_init__(self) -> None:
        if not _SAFE_PATTERN.match(self.value):
            raise ValueError(f"Unsafe filename: {self.value!r}")

    def __str__(self) -> str:
        return self.value

    def with_extension(self, extension: str) -> str:
        return f"{self.value}.{extension}"

    @classmethod
    def sanitize(cls, text: str | None) -> "SafeFilename":
        """Normalise arbitrary text into a safe filename.

        Every disallowed character becomes ``_``; the result is truncated to
        255 characters.  Blank input falls back to ``export``.
        """
        if text is None or not text.strip():
            return cls(DEFAULT_FILENAME)
        value = _UNSAFE_CHARS.sub("_", text.strip())[:MAX_LENGTH]
        return cls(value)


__all__ = ["DEFAULT_FILENAME", "SafeFilename"]
