from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

from imgprobe.cli import cli
from imgprobe.constants import EXIT_CONFIG, EXIT_PATH, EXIT_UNSUPPORTED, EXIT_USAGE

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.medium


def _by_name(payload: list[dict[str, object]]) -> dict[str, dict[str, object]]:
    return {str(entry["path"]).rsplit("/", 1)[-1]: entry for entry in payload}


def test_probe_json_reports_every_file(image_dir: Path) -> None:
    names = ["pixel.png", "pixel.jpg", "pixel.gif", "pixel.bmp", "notes.txt"]
    res = CliRunner().invoke(cli, ["probe", "--summary", "json", *(str(image_dir / n) for n in names)])
    assert res.exit_code == 0, res.output
    entries = _by_name(json.loads(res.output))
    assert entries["pixel.png"]["format"] == "png"
    assert entries["pixel.jpg"]["format"] == "jpeg"
    assert entries["pixel.gif"]["format"] == "gif"
    assert entries["pixel.bmp"]["format"] == "bmp"
    for name in ("pixel.png", "pixel.jpg", "pixel.gif", "pixel.bmp"):
        assert (entries[name]["width"], entries[name]["height"]) == (1, 1)
    assert entries["notes.txt"] == {
        "path": (image_dir / "notes.txt").as_posix(),
        "format": "unknown",
        "width": None,
        "height": None,
        "size_bytes": 11,
    }


def test_probe_human_table(image_dir: Path) -> None:
    res = CliRunner().invoke(cli, ["probe", str(image_dir / "pixel.gif"), str(image_dir / "notes.txt")])
    assert res.exit_code == 0, res.output
    assert "Image Probe" in res.output
    assert "gif" in res.output
    assert "unknown" in res.output


def test_probe_summary_default_comes_from_config(image_dir: Path, tmp_path: Path) -> None:
    cfg = tmp_path / "cfg.toml"
    cfg.write_text("summary = 'json'\n", encoding="utf-8")
    res = CliRunner().invoke(cli, ["probe", "--config", str(cfg), str(image_dir / "pixel.png")])
    assert res.exit_code == 0, res.output
    assert json.loads(res.output)[0]["format"] == "png"


def test_probe_fail_on_unknown(image_dir: Path) -> None:
    res = CliRunner().invoke(cli, ["probe", "--fail-on-unknown", "--summary", "json", str(image_dir / "notes.txt")])
    assert res.exit_code == EXIT_UNSUPPORTED
    res = CliRunner().invoke(cli, ["probe", "--fail-on-unknown", "--summary", "json", str(image_dir / "pixel.png")])
    assert res.exit_code == 0


def test_probe_missing_file_is_path_error(tmp_path: Path) -> None:
    res = CliRunner().invoke(cli, ["probe", str(tmp_path / "ghost.png")])
    assert res.exit_code == EXIT_PATH
    assert "ghost.png" in res.output


def test_probe_requires_paths() -> None:
    res = CliRunner().invoke(cli, ["probe"])
    assert res.exit_code == EXIT_USAGE


def test_probe_invalid_summary_choice(image_dir: Path) -> None:
    res = CliRunner().invoke(cli, ["probe", "--summary", "xml", str(image_dir / "pixel.png")])
    assert res.exit_code == EXIT_USAGE


def test_probe_bad_config_is_config_error(image_dir: Path, tmp_path: Path) -> None:
    bad = tmp_path / "bad.toml"
    bad.write_text("= broken =\n", encoding="utf-8")
    res = CliRunner().invoke(cli, ["probe", "--config", str(bad), str(image_dir / "pixel.png")])
    assert res.exit_code == EXIT_CONFIG
