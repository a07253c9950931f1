"""Bounds-checked fixed-width integer reads from byte buffers.

Every header reader goes through these helpers so that byte order is always
explicit and no read can run past the end of the buffer.
"""

from __future__ import annotations

from typing import Literal

type Buffer = bytes | bytearray | memoryview
type ByteOrder = Literal["big", "little"]

U16 = 2
U32 = 4


def has_bytes(data: Buffer, offset: int, size: int) -> bool:
    """Return ``True`` if ``data[offset:offset + size]`` lies entirely inside ``data``."""
    return offset >= 0 and size >= 0 and offset + size <= len(data)


def read_uint(data: Buffer, offset: int, size: int, byteorder: ByteOrder) -> int | None:
    """Read an unsigned ``size``-byte integer at ``offset``, or ``None`` if out of bounds."""
    if not has_bytes(data, offset, size):
        return None
    return int.from_bytes(data[offset : offset + size], byteorder, signed=False)


def u16_be(data: Buffer, offset: int) -> int | None:
    return read_uint(data, offset, U16, "big")


def u16_le(data: Buffer, offset: int) -> int | None:
    return read_uint(data, offset, U16, "little")


def u32_be(data: Buffer, offset: int) -> int | None:
    return read_uint(data, offset, U32, "big")


def u32_le(data: Buffer, offset: int) -> int | None:
    return read_uint(data, offset, U32, "little")


__all__ = [
    "Buffer",
    "ByteOrder",
    "has_bytes",
    "read_uint",
    "u16_be",
    "u16_le",
    "u32_be",
    "u32_le",
]
