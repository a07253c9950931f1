"""Magic-number classification of image byte buffers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import ImageFormat

if TYPE_CHECKING:
    from .byteread import Buffer

# ---- Leading-byte signatures ----
PNG_LEAD = 0x89
JPEG_LEAD = 0xFF
GIF_LEAD = 0x47
TIFF_LEADS = frozenset({0x49, 0x4D})  # "II" / "MM"
BMP_LEAD = 0x42
RIFF_LEAD = 0x52
ISOBMFF_LEAD = 0x00
PDF_LEAD = 0x25
SVG_LEAD = 0x3C

RIFF_HEADER_LEN = 12
RIFF_MAGIC = b"RIFF"
WEBP_FORM = b"WEBP"
# ISO-BMFF "ftyp" box: size(4) "ftyp"(4) major brand(4)
FTYP_BRAND = slice(8, 12)
HEIC_BRANDS = frozenset({b"heic", b"heix", b"hevc", b"hevx"})
PDF_HEADER_LEN = 4
PDF_MAGIC = b"PDF"

_UNCONDITIONAL: dict[int, ImageFormat] = {
    PNG_LEAD: ImageFormat.PNG,
    JPEG_LEAD: ImageFormat.JPEG,
    GIF_LEAD: ImageFormat.GIF,
    **dict.fromkeys(TIFF_LEADS, ImageFormat.TIFF),
    BMP_LEAD: ImageFormat.BMP,
    SVG_LEAD: ImageFormat.SVG,
}


def _is_webp(data: Buffer) -> bool:
    if len(data) < RIFF_HEADER_LEN:
        return False
    header = bytes(data[:RIFF_HEADER_LEN])
    return header.startswith(RIFF_MAGIC) and header.endswith(WEBP_FORM)


def _is_heic(data: Buffer) -> bool:
    return len(data) >= FTYP_BRAND.stop and bytes(data[FTYP_BRAND]) in HEIC_BRANDS


def _is_pdf(data: Buffer) -> bool:
    return len(data) >= PDF_HEADER_LEN and bytes(data[1:PDF_HEADER_LEN]) == PDF_MAGIC


def classify(data: Buffer) -> ImageFormat:
    """Return the image format implied by the leading bytes of ``data``.

    Only the first byte selects a branch. WEBP, HEIC and PDF need a short
    confirmation; when it fails the result is ``UNKNOWN`` rather than a
    different format. Empty input is ``UNKNOWN``.
    """
    if not data:
        return ImageFormat.UNKNOWN
    lead = data[0]
    if (fmt := _UNCONDITIONAL.get(lead)) is not None:
        return fmt
    if lead == RIFF_LEAD:
        return ImageFormat.WEBP if _is_webp(data) else ImageFormat.UNKNOWN
    if lead == ISOBMFF_LEAD:
        return ImageFormat.HEIC if _is_heic(data) else ImageFormat.UNKNOWN
    if lead == PDF_LEAD:
        return ImageFormat.PDF if _is_pdf(data) else ImageFormat.UNKNOWN
    return ImageFormat.UNKNOWN


__all__ = ["classify"]
