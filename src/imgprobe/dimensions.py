"""Header dimension readers for PNG, GIF, BMP and JPEG.

Readers look only at fixed header fields (or, for JPEG, scan for the first
Start-Of-Frame marker). Truncated or unexpected headers yield ``None``; nothing
here raises for malformed input.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from .byteread import has_bytes, u16_be, u16_le, u32_be, u32_le
from .constants import ImageFormat
from .format_detect import classify
from .logging_utils import StructuredLogEvent, get_logger, log_event

if TYPE_CHECKING:
    from .byteread import Buffer

logger = get_logger(__name__)

# ---- Header layout constants ----
PNG_MIN_LEN = 24  # signature(8) + IHDR length/type(8) + width(4) + height(4)
PNG_WIDTH_OFFSET = 16
PNG_HEIGHT_OFFSET = 20

GIF_MIN_LEN = 10  # "GIF89a"(6) + logical screen width(2) + height(2)
GIF_WIDTH_OFFSET = 6
GIF_HEIGHT_OFFSET = 8

BMP_MIN_LEN = 26
BMP_DIB_SIZE_OFFSET = 14
BMP_WIDTH_OFFSET = 18
BMP_HEIGHT_OFFSET = 22
BITMAPINFOHEADER_SIZE = 40

JPEG_MIN_LEN = 4
JPEG_SOI_PREFIX = b"\xff\xd8\xff"
JPEG_MARKER_PREFIX = 0xFF
JPEG_APP_RANGE = range(0xE0, 0xF0)
JPEG_SOF_RANGE = range(0xC0, 0xD0)
JPEG_SCAN_START = 4
JPEG_SOF_SPAN = 9  # FF, marker, length(2), precision(1), height(2), width(2)
JPEG_SOF_HEIGHT_OFFSET = 5
JPEG_SOF_WIDTH_OFFSET = 7


@dataclass(frozen=True, slots=True)
class Dimensions:
    """Pixel width and height read from an image header."""

    width: int
    height: int

    def as_dict(self) -> dict[str, int]:
        return {"width": self.width, "height": self.height}

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


class DimensionReader(Protocol):
    """Reads width/height from a buffer already classified as one format."""

    def __call__(self, data: Buffer) -> Dimensions | None: ...


def _pair(width: int | None, height: int | None) -> Dimensions | None:
    if width is None or height is None:
        return None
    return Dimensions(width=width, height=height)


def read_png_dimensions(data: Buffer) -> Dimensions | None:
    """Width and height from the IHDR chunk (big-endian u32 at 16 and 20)."""
    if len(data) < PNG_MIN_LEN:
        return None
    return _pair(u32_be(data, PNG_WIDTH_OFFSET), u32_be(data, PNG_HEIGHT_OFFSET))


def read_gif_dimensions(data: Buffer) -> Dimensions | None:
    """Logical screen width and height (little-endian u16 at 6 and 8)."""
    if len(data) < GIF_MIN_LEN:
        return None
    return _pair(u16_le(data, GIF_WIDTH_OFFSET), u16_le(data, GIF_HEIGHT_OFFSET))


def read_bmp_dimensions(data: Buffer) -> Dimensions | None:
    """Width and height from a BITMAPINFOHEADER; other DIB variants are unsupported."""
    if len(data) < BMP_MIN_LEN:
        return None
    dib_size = u32_le(data, BMP_DIB_SIZE_OFFSET)
    if dib_size != BITMAPINFOHEADER_SIZE:
        log_event(
            logger,
            StructuredLogEvent(
                name="dimensions.bmp.unsupported_dib",
                message="unsupported BMP DIB header size",
                level=logging.DEBUG,
                context={"dib_size": dib_size},
            ),
        )
        return None
    return _pair(u32_le(data, BMP_WIDTH_OFFSET), u32_le(data, BMP_HEIGHT_OFFSET))


def _has_jpeg_preamble(data: Buffer) -> bool:
    return (
        len(data) >= JPEG_MIN_LEN
        and bytes(data[: len(JPEG_SOI_PREFIX)]) == JPEG_SOI_PREFIX
        and data[len(JPEG_SOI_PREFIX)] in JPEG_APP_RANGE
    )


def read_jpeg_dimensions(data: Buffer) -> Dimensions | None:
    """Scan for the first Start-Of-Frame marker and read its height and width.

    The scan advances one byte at a time and does not honour segment lengths,
    so it may look inside segment payloads. The first ``FF Cx`` pair with a
    complete frame header behind it wins.
    """
    if not _has_jpeg_preamble(data):
        log_event(
            logger,
            StructuredLogEvent(
                name="dimensions.jpeg.bad_soi",
                message="JPEG buffer lacks SOI/APPn preamble",
                level=logging.DEBUG,
                context={"size_bytes": len(data)},
            ),
        )
        return None
    data_len = len(data)
    i = JPEG_SCAN_START
    while i + 1 < data_len:
        if data[i] != JPEG_MARKER_PREFIX or data[i + 1] not in JPEG_SOF_RANGE:
            i += 1
            continue
        if not has_bytes(data, i, JPEG_SOF_SPAN):
            # later candidates would have even fewer bytes behind them
            return None
        height = u16_be(data, i + JPEG_SOF_HEIGHT_OFFSET)
        width = u16_be(data, i + JPEG_SOF_WIDTH_OFFSET)
        return _pair(width, height)
    return None


READERS: dict[ImageFormat, DimensionReader] = {
    ImageFormat.PNG: read_png_dimensions,
    ImageFormat.GIF: read_gif_dimensions,
    ImageFormat.BMP: read_bmp_dimensions,
    ImageFormat.JPEG: read_jpeg_dimensions,
}


def extract_dimensions(data: Buffer, fmt: ImageFormat) -> Dimensions | None:
    """Return header dimensions for ``data`` classified as ``fmt``, if available.

    - Formats without a reader always yield ``None``
    - A buffer not strictly longer than the format's minimum sample is skipped
    - Malformed or truncated headers yield ``None``
    """
    reader = READERS.get(fmt)
    if reader is None:
        return None
    minimum = fmt.minimum_sample
    if minimum is not None and len(data) <= minimum:
        log_event(
            logger,
            StructuredLogEvent(
                name="dimensions.skipped_short_sample",
                message="sample too short to read dimensions",
                level=logging.DEBUG,
                context={"format": fmt.value, "size_bytes": len(data), "minimum": minimum},
            ),
        )
        return None
    return reader(data)


def probe(data: Buffer) -> tuple[ImageFormat, Dimensions | None]:
    """Classify ``data`` and extract its dimensions in one step."""
    fmt = classify(data)
    return fmt, extract_dimensions(data, fmt)


__all__ = [
    "READERS",
    "DimensionReader",
    "Dimensions",
    "extract_dimensions",
    "probe",
    "read_bmp_dimensions",
    "read_gif_dimensions",
    "read_jpeg_dimensions",
    "read_png_dimensions",
]
