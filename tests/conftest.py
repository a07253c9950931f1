from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from imgprobe.resize import _CONVERT_CACHE

from tests.support import BMP_1X1, GIF_1X1, JPEG_1X1, PNG_1X1

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def _isolate_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep user-level config out of every test."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path_factory.mktemp("xdg")))
    monkeypatch.delenv("IMGPROBE_CONFIG_PATH", raising=False)


@pytest.fixture(autouse=True)
def _clear_convert_cache() -> Iterator[None]:
    _CONVERT_CACHE.clear()
    yield
    _CONVERT_CACHE.clear()


@pytest.fixture
def image_dir(tmp_path: Path) -> Path:
    """A directory holding the 1x1 fixtures plus one unrecognised file."""
    (tmp_path / "pixel.png").write_bytes(PNG_1X1)
    (tmp_path / "pixel.jpg").write_bytes(JPEG_1X1)
    (tmp_path / "pixel.gif").write_bytes(GIF_1X1)
    (tmp_path / "pixel.bmp").write_bytes(BMP_1X1)
    (tmp_path / "notes.txt").write_bytes(b"Hello World")
    return tmp_path
