"""CLI command that resizes an image through ImageMagick."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from imgprobe.config import resolve_resize_settings
from imgprobe.constants import EXIT_CONFIG, EXIT_PATH, EXIT_RESIZE, EXIT_UNSUPPORTED
from imgprobe.errors import ConfigLoadError, ResizeError, UnsupportedFormatError
from imgprobe.image import Image
from imgprobe.resize import resize_image

from .common import SIZE, load_cli_config


@click.command()
@click.argument("source", type=click.Path(path_type=Path))
@click.option("--size", "target_size", type=SIZE, required=True, help="Target size as WIDTHxHEIGHT")
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path, dir_okay=False),
    required=True,
    help="File to write the resized image to",
)
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), help="Seconds before giving up")
@click.option("--convert", "convert_path", type=click.Path(path_type=Path), help="Path to ImageMagick convert")
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="Explicit config file path")
def resize(
    *,
    source: Path,
    target_size: tuple[int, int],
    output: Path,
    timeout: float | None,
    convert_path: Path | None,
    config_path: Path | None,
) -> None:
    """Resize SOURCE to fit WIDTHxHEIGHT and write it to --output."""
    cfg = load_cli_config(config_path)
    try:
        settings = resolve_resize_settings(cfg)
    except ConfigLoadError as err:
        print(err, file=sys.stderr)
        raise SystemExit(EXIT_CONFIG) from err

    try:
        image = Image.from_path(source)
    except UnsupportedFormatError as err:
        print(err, file=sys.stderr)
        raise SystemExit(EXIT_UNSUPPORTED) from err
    except OSError as err:
        print(f"Cannot read {source}: {err}", file=sys.stderr)
        raise SystemExit(EXIT_PATH) from err

    width, height = target_size
    try:
        resized = resize_image(
            image,
            width,
            height,
            timeout=timeout if timeout is not None else settings.timeout,
            convert_path=convert_path or settings.convert_path,
            candidates=settings.candidates,
        )
    except ResizeError as err:
        print(err, file=sys.stderr)
        raise SystemExit(EXIT_RESIZE) from err

    try:
        output.write_bytes(resized.data)
    except OSError as err:
        print(f"Cannot write {output}: {err}", file=sys.stderr)
        raise SystemExit(EXIT_PATH) from err
    print(f"{output}: {resized.format.value} {resized.size or 'unknown size'}")
