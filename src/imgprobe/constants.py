"""Project-wide constants, enums, and small helpers."""

from __future__ import annotations

from enum import StrEnum


class ImageFormat(StrEnum):
    """Image container formats recognised by the classifier."""

    UNKNOWN = "unknown"
    PNG = "png"
    JPEG = "jpeg"
    GIF = "gif"
    TIFF = "tiff"
    BMP = "bmp"
    WEBP = "webp"
    HEIC = "heic"
    PDF = "pdf"
    SVG = "svg"

    @property
    def minimum_sample(self) -> int | None:
        """Buffer length a sample must exceed before dimensions are read.

        JPEG has no fixed minimum; its scanner bounds-checks as it goes.
        """
        return MINIMUM_SAMPLE.get(self)

    @property
    def suffix(self) -> str:
        """Conventional file extension, including the leading dot."""
        return FORMAT_SUFFIXES.get(self, "")


MINIMUM_SAMPLE: dict[ImageFormat, int] = {
    ImageFormat.PNG: 25,
    ImageFormat.GIF: 11,
    ImageFormat.BMP: 29,
}

FORMAT_SUFFIXES: dict[ImageFormat, str] = {
    ImageFormat.PNG: ".png",
    ImageFormat.JPEG: ".jpg",
    ImageFormat.GIF: ".gif",
    ImageFormat.TIFF: ".tiff",
    ImageFormat.BMP: ".bmp",
    ImageFormat.WEBP: ".webp",
    ImageFormat.HEIC: ".heic",
    ImageFormat.PDF: ".pdf",
    ImageFormat.SVG: ".svg",
}


class SummaryFormat(StrEnum):
    """Valid output formats for ``imgprobe probe``."""

    HUMAN = "human"
    JSON = "json"


# Process exit codes used by the CLI
EXIT_USAGE = 2
EXIT_CONFIG = 3
EXIT_PATH = 4
EXIT_UNSUPPORTED = 5
EXIT_RESIZE = 6

# Config keys
CONFIG_RESIZE_TIMEOUT = "resize_timeout"
CONFIG_CONVERT_PATH = "convert_path"
CONFIG_CONVERT_CANDIDATES = "convert_candidates"
CONFIG_SUMMARY = "summary"

DEFAULT_RESIZE_TIMEOUT = 5.0

# Well-known ImageMagick locations, container paths first, then Homebrew.
DEFAULT_CONVERT_CANDIDATES: tuple[str, ...] = (
    "/usr/bin/convert",
    "/bin/convert",
    "/usr/local/bin/convert",
    "/opt/homebrew/bin/convert",
)
