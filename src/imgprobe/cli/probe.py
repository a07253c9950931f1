"""CLI command implementation for the ``imgprobe probe`` workflow."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from imgprobe.constants import (
    CONFIG_SUMMARY,
    EXIT_PATH,
    EXIT_UNSUPPORTED,
    ImageFormat,
    SummaryFormat,
)
from imgprobe.dimensions import Dimensions, probe as probe_bytes
from imgprobe.logging_utils import StructuredLogEvent, get_logger, log_event

from .common import exit_on_broken_pipe, load_cli_config

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ProbeResult:
    path: Path
    format: ImageFormat
    size: Dimensions | None
    size_bytes: int

    def as_dict(self) -> dict[str, Any]:
        return {
            "path": self.path.as_posix(),
            "format": self.format.value,
            "width": None if self.size is None else self.size.width,
            "height": None if self.size is None else self.size.height,
            "size_bytes": self.size_bytes,
        }


def probe_file(path: Path) -> ProbeResult:
    """Read ``path`` and classify it; ``OSError`` propagates."""
    data = path.read_bytes()
    fmt, size = probe_bytes(data)
    log_event(
        logger,
        StructuredLogEvent(
            name="probe.file",
            message="probed file",
            context={"path": path, "format": fmt.value, "size": str(size) if size else None},
        ),
    )
    return ProbeResult(path=path, format=fmt, size=size, size_bytes=len(data))


def render_table(results: list[ProbeResult]) -> Table:
    table = Table(title="Image Probe", show_edge=False)
    table.add_column("Path", style="cyan", overflow="fold")
    table.add_column("Format")
    table.add_column("Width", justify="right")
    table.add_column("Height", justify="right")
    table.add_column("Bytes", justify="right")
    for r in results:
        table.add_row(
            r.path.as_posix(),
            r.format.value,
            "-" if r.size is None else str(r.size.width),
            "-" if r.size is None else str(r.size.height),
            str(r.size_bytes),
        )
    return table


@click.command()
@click.option(
    "--summary",
    type=click.Choice([s.value for s in SummaryFormat], case_sensitive=False),
    default=None,
    help="Output format (defaults to the 'summary' config key)",
)
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="Explicit config file path")
@click.option("--fail-on-unknown", is_flag=True, help="Exit non-zero if any file has an unknown format")
@click.argument("paths", nargs=-1, required=True, type=click.Path(path_type=Path))
def probe(
    *,
    summary: str | None,
    config_path: Path | None,
    fail_on_unknown: bool,
    paths: tuple[Path, ...],
) -> None:
    """Detect the image format and header dimensions of each file."""
    cfg = load_cli_config(config_path)
    fmt_value = summary or str(cfg.get(CONFIG_SUMMARY, SummaryFormat.HUMAN.value))
    try:
        out_fmt = SummaryFormat(fmt_value.lower())
    except ValueError as err:
        msg = f"invalid summary format {fmt_value!r}"
        raise click.UsageError(msg) from err

    results: list[ProbeResult] = []
    for path in paths:
        try:
            results.append(probe_file(path))
        except OSError as err:
            print(f"Cannot read {path}: {err}", file=sys.stderr)
            raise SystemExit(EXIT_PATH) from err

    try:
        if out_fmt is SummaryFormat.JSON:
            print(json.dumps([r.as_dict() for r in results], sort_keys=True, indent=2))
        else:
            Console().print(render_table(results))
    except BrokenPipeError:
        exit_on_broken_pipe()

    if fail_on_unknown and any(r.format is ImageFormat.UNKNOWN for r in results):
        raise SystemExit(EXIT_UNSUPPORTED)
