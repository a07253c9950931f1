"""CLI command reporting the installed imgprobe version."""

from __future__ import annotations

import click

from imgprobe import __version__
from imgprobe.constants import ImageFormat
from imgprobe.dimensions import READERS


@click.command()
@click.option("--formats", "show_formats", is_flag=True, help="Also list recognised formats")
def version(*, show_formats: bool) -> None:
    """Print the imgprobe version, optionally with the formats it recognises."""
    print(__version__)
    if not show_formats:
        return
    for fmt in ImageFormat:
        if fmt is ImageFormat.UNKNOWN:
            continue
        reads = "dimensions" if fmt in READERS else "format only"
        print(f"{fmt.value}\t{reads}")
