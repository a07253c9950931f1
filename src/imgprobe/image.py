"""Immutable image value object built on the classifier and dimension readers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .constants import ImageFormat
from .dimensions import Dimensions, extract_dimensions
from .errors import UnsupportedFormatError
from .format_detect import classify

if TYPE_CHECKING:
    from pathlib import Path

    from .byteread import Buffer


@dataclass(frozen=True, slots=True)
class Image:
    """Raw image bytes together with their detected format and header size.

    Construct through :meth:`from_bytes` or :meth:`from_path`; both refuse
    data whose format cannot be recognised.
    """

    data: bytes = field(repr=False)
    format: ImageFormat
    size: Dimensions | None
    path: Path | None = None

    @classmethod
    def from_bytes(cls, data: Buffer, *, path: Path | None = None) -> Image:
        raw = bytes(data)
        fmt = classify(raw)
        if fmt is ImageFormat.UNKNOWN:
            raise UnsupportedFormatError(path)
        return cls(data=raw, format=fmt, size=extract_dimensions(raw, fmt), path=path)

    @classmethod
    def from_path(cls, path: Path) -> Image:
        """Read ``path`` fully and build an image; ``OSError`` propagates."""
        return cls.from_bytes(path.read_bytes(), path=path)

    @property
    def width(self) -> int | None:
        return None if self.size is None else self.size.width

    @property
    def height(self) -> int | None:
        return None if self.size is None else self.size.height

    @property
    def suffix(self) -> str:
        return self.format.suffix

    def describe(self) -> dict[str, object]:
        """Machine-readable summary used by the CLI's JSON output."""
        return {
            "path": None if self.path is None else str(self.path),
            "format": self.format.value,
            "width": self.width,
            "height": self.height,
            "size_bytes": len(self.data),
        }


__all__ = ["Image"]
