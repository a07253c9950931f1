from __future__ import annotations

from pathlib import Path

import pytest

from imgprobe.constants import ImageFormat
from imgprobe.dimensions import Dimensions
from imgprobe.errors import UnsupportedFormatError
from imgprobe.image import Image
from tests.support import BMP_1X1, GIF_1X1, HELLO_WORLD, JPEG_1X1, PNG_1X1

pytestmark = pytest.mark.small


@pytest.mark.parametrize(
    ("data", "fmt", "suffix"),
    [
        (PNG_1X1, ImageFormat.PNG, ".png"),
        (JPEG_1X1, ImageFormat.JPEG, ".jpg"),
        (GIF_1X1, ImageFormat.GIF, ".gif"),
        (BMP_1X1, ImageFormat.BMP, ".bmp"),
    ],
)
def test_from_bytes_exposes_format_and_size(data: bytes, fmt: ImageFormat, suffix: str) -> None:
    image = Image.from_bytes(data)
    assert image.format is fmt
    assert image.size == Dimensions(1, 1)
    assert (image.width, image.height) == (1, 1)
    assert image.suffix == suffix
    assert image.data == data
    assert image.path is None


@pytest.mark.parametrize("data", [HELLO_WORLD, b""])
def test_unknown_bytes_are_rejected(data: bytes) -> None:
    with pytest.raises(UnsupportedFormatError):
        Image.from_bytes(data)


def test_partial_png_keeps_format_without_size() -> None:
    image = Image.from_bytes(bytes([0x89, 0x50, 0x4E, 0x47]))
    assert image.format is ImageFormat.PNG
    assert image.size is None
    assert image.width is None


def test_classified_format_without_reader() -> None:
    image = Image.from_bytes(b"<svg/>")
    assert image.format is ImageFormat.SVG
    assert image.size is None


def test_from_path_records_origin(tmp_path: Path) -> None:
    p = tmp_path / "pixel.gif"
    p.write_bytes(GIF_1X1)
    image = Image.from_path(p)
    assert image.path == p
    assert image.describe() == {
        "path": str(p),
        "format": "gif",
        "width": 1,
        "height": 1,
        "size_bytes": len(GIF_1X1),
    }


def test_from_path_unknown_names_the_file(tmp_path: Path) -> None:
    p = tmp_path / "notes.txt"
    p.write_bytes(HELLO_WORLD)
    with pytest.raises(UnsupportedFormatError) as excinfo:
        Image.from_path(p)
    assert excinfo.value.path == p
    assert "notes.txt" in str(excinfo.value)


def test_from_path_missing_file_propagates_os_error() -> None:
    with pytest.raises(FileNotFoundError):
        Image.from_path(Path("/path/to/nowhere/ghost.png"))


def test_images_compare_by_value() -> None:
    assert Image.from_bytes(PNG_1X1) == Image.from_bytes(bytearray(PNG_1X1))
