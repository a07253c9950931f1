"""Image byte fixtures shared across the test suite."""

from __future__ import annotations

import base64

# 1x1 transparent PNG
PNG_1X1 = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)
# 1x1 baseline JPEG (JFIF, SOF0)
JPEG_1X1 = base64.b64decode(
    "/9j/4AAQSkZJRgABAQEASABIAAD/2wBDAP//////////////////////////////////////////////////////////////////////////////////////"
    "wAALCAABAAEBAREA/8QAAF3/2gAIAQEAAD8A/wD/2Q=="
)
# 1x1 transparent GIF89a
GIF_1X1 = base64.b64decode("R0lGODlhAQABAIAAAAAAAP///yH5BAEAAAAALAAAAAABAAEAAAIBRAA7")
# 1x1 24-bit BMP with a BITMAPINFOHEADER
BMP_1X1 = base64.b64decode(
    "Qk06AAAAAAAAADYAAAAoAAAAAQAAAAEAAAABABgAAAAAAAQAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA=="
)
HELLO_WORLD = b"Hello World"


def fake_png(width: int, height: int) -> bytes:
    # signature + length(13) + "IHDR" + width + height + bit_depth + color_type + misc + crc
    sig = b"\x89PNG\r\n\x1a\n"
    ihdr = (13).to_bytes(4, "big") + b"IHDR" + width.to_bytes(4, "big") + height.to_bytes(4, "big")
    return sig + ihdr + b"\x08\x06\x00\x00\x00" + b"\x00\x00\x00\x00"


def fake_gif(width: int, height: int) -> bytes:
    # header + logical screen descriptor + a trailer so the sample clears the minimum
    return b"GIF89a" + width.to_bytes(2, "little") + height.to_bytes(2, "little") + b"\x00\x00\x00;"


def fake_bmp(width: int, height: int, *, dib_size: int = 40) -> bytes:
    b = bytearray(54)
    b[0:2] = b"BM"
    b[2:6] = len(b).to_bytes(4, "little")
    b[10:14] = (54).to_bytes(4, "little")
    b[14:18] = dib_size.to_bytes(4, "little")
    b[18:22] = width.to_bytes(4, "little")
    b[22:26] = height.to_bytes(4, "little")
    return bytes(b)


def fake_jpeg(width: int, height: int, *, sof_marker: int = 0xC0) -> bytes:
    # SOI + APP0 stub + SOFn segment with height/width
    soi_app0 = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"
    sof = (
        bytes([0xFF, sof_marker])
        + b"\x00\x11\x08"
        + height.to_bytes(2, "big")
        + width.to_bytes(2, "big")
        + b"\x03\x01\x11\x00\x02\x11\x00\x03\x11\x00"
    )
    return soi_app0 + sof + b"\xff\xd9"
