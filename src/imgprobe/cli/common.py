"""Shared CLI helpers used by multiple subcommands."""

from __future__ import annotations

import contextlib
import re
import sys
from pathlib import Path
from typing import Any

import click

from imgprobe.config import read_config
from imgprobe.constants import EXIT_CONFIG
from imgprobe.errors import ConfigLoadError

_SIZE_RE = re.compile(r"^\s*(\d+)\s*[xX]\s*(\d+)\s*$")


def exit_on_broken_pipe() -> None:
    """Close stdout quietly and exit 0 when the reader went away."""
    with contextlib.suppress(Exception):
        sys.stdout.close()
    raise SystemExit(0)


def load_cli_config(config_path: Path | None) -> dict[str, Any]:
    """Read layered config for the current directory or exit with ``EXIT_CONFIG``."""
    try:
        return read_config(base_path=Path(), explicit_config=config_path)
    except ConfigLoadError as err:
        print(err, file=sys.stderr)
        raise SystemExit(EXIT_CONFIG) from err


class SizeParamType(click.ParamType):
    """Click parameter for ``WIDTHxHEIGHT`` geometry strings."""

    name = "WIDTHxHEIGHT"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> tuple[int, int]:
        if isinstance(value, tuple):
            return value
        m = _SIZE_RE.match(str(value))
        if m is None:
            self.fail(f"{value!r} is not of the form WIDTHxHEIGHT", param, ctx)
        width, height = int(m[1]), int(m[2])
        if width == 0 or height == 0:
            self.fail(f"{value!r} must have a width and height greater than zero", param, ctx)
        return width, height


SIZE = SizeParamType()
