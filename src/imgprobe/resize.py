"""Resizing through an external ImageMagick ``convert`` process.

The converter must be installed on the host (``apt-get install imagemagick``
or ``brew install imagemagick``). The resized output is re-probed with the
same classifier and dimension readers used for the input.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
import subprocess  # noqa: S404 - fixed argv, no shell
import tempfile
import uuid
from pathlib import Path
from typing import TYPE_CHECKING

from .constants import DEFAULT_CONVERT_CANDIDATES, DEFAULT_RESIZE_TIMEOUT
from .errors import (
    ConversionFailedError,
    ConverterNotFoundError,
    InvalidResizeTargetError,
    ResizeOutputError,
    ResizeTimeoutError,
    UnsupportedFormatError,
)
from .image import Image
from .logging_utils import StructuredLogEvent, get_logger, log_event

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = get_logger(__name__)


def _is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


# failed lookups are not cached; a later install must still be found
_CONVERT_CACHE: dict[tuple[str, ...], Path] = {}


def _discover_convert(candidates: tuple[str, ...]) -> Path | None:
    if (cached := _CONVERT_CACHE.get(candidates)) is not None:
        return cached
    found = _search_convert(candidates)
    if found is not None:
        _CONVERT_CACHE[candidates] = found
    return found


def _search_convert(candidates: tuple[str, ...]) -> Path | None:
    for candidate in candidates:
        p = Path(candidate)
        if _is_executable(p):
            return p
    found = shutil.which("convert")
    return Path(found) if found else None


def find_convert(
    convert_path: Path | None = None,
    candidates: Sequence[str] = DEFAULT_CONVERT_CANDIDATES,
) -> Path:
    """Locate the ``convert`` executable or raise :class:`ConverterNotFoundError`.

    An explicit ``convert_path`` is used only if it is executable. Otherwise the
    ``candidates`` are probed in order before falling back to ``$PATH``. The
    first successful search is memoised per candidate list.
    """
    if convert_path is not None:
        if _is_executable(convert_path):
            return convert_path
        raise ConverterNotFoundError
    found = _discover_convert(tuple(candidates))
    if found is None:
        raise ConverterNotFoundError
    log_event(
        logger,
        StructuredLogEvent(
            name="convert.discovered",
            message="using ImageMagick convert",
            level=logging.DEBUG,
            context={"path": found},
        ),
    )
    return found


def _validate_target(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        msg = f"Resize dimensions must be greater than zero. Provided: {width}x{height}"
        raise InvalidResizeTargetError(msg)


def resize_image(
    image: Image,
    width: int,
    height: int,
    *,
    timeout: float = DEFAULT_RESIZE_TIMEOUT,
    convert_path: Path | None = None,
    candidates: Sequence[str] = DEFAULT_CONVERT_CANDIDATES,
) -> Image:
    """Resize ``image`` to fit ``width`` x ``height`` and return the new image.

    Raises ``InvalidResizeTargetError`` before doing any work when either side
    is not positive, ``ConverterNotFoundError`` when ImageMagick is missing,
    ``ResizeTimeoutError`` when the process outlives ``timeout`` seconds,
    ``ConversionFailedError`` on a non-zero exit and ``ResizeOutputError`` when
    a successful run leaves no readable image behind.
    """
    _validate_target(width, height)
    convert = find_convert(convert_path, candidates)
    geometry = f"{width}x{height}"

    with tempfile.TemporaryDirectory(prefix="imgprobe-") as tmp:
        tmp_dir = Path(tmp)
        input_path = tmp_dir / f"{uuid.uuid4().hex}{image.suffix}"
        output_path = tmp_dir / f"{uuid.uuid4().hex}{image.suffix}"
        input_path.write_bytes(image.data)

        log_event(
            logger,
            StructuredLogEvent(
                name="resize.start",
                message="resizing image",
                context={"format": image.format.value, "target": geometry, "timeout": timeout},
            ),
        )
        try:
            proc = subprocess.run(  # noqa: S603 - argv built from validated values
                [str(convert), str(input_path), "-resize", geometry, str(output_path)],
                capture_output=True,
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as err:
            log_event(
                logger,
                StructuredLogEvent(
                    name="resize.timeout",
                    message="convert timed out",
                    level=logging.ERROR,
                    context={"timeout": timeout, "target": geometry},
                ),
            )
            raise ResizeTimeoutError(timeout) from err

        if proc.returncode != 0:
            stderr = proc.stderr.decode("utf-8", errors="replace")
            log_event(
                logger,
                StructuredLogEvent(
                    name="resize.failed",
                    message="convert exited with an error",
                    level=logging.ERROR,
                    context={"returncode": proc.returncode, "stderr": stderr},
                ),
            )
            raise ConversionFailedError(proc.returncode, stderr)

        # read before the temp dir goes away; the result has no lasting path
        try:
            resized = Image.from_bytes(output_path.read_bytes())
        except (OSError, UnsupportedFormatError) as err:
            log_event(
                logger,
                StructuredLogEvent(
                    name="resize.bad_output",
                    message="convert output could not be read back",
                    level=logging.ERROR,
                    context={"target": geometry, "error": str(err)},
                ),
            )
            raise ResizeOutputError(str(err)) from err

    log_event(
        logger,
        StructuredLogEvent(
            name="resize.done",
            message="resize finished",
            context={"format": resized.format.value, "size": str(resized.size)},
        ),
    )
    return resized


async def aresize_image(
    image: Image,
    width: int,
    height: int,
    *,
    timeout: float = DEFAULT_RESIZE_TIMEOUT,
    convert_path: Path | None = None,
    candidates: Sequence[str] = DEFAULT_CONVERT_CANDIDATES,
) -> Image:
    """Run :func:`resize_image` in a worker thread."""
    return await asyncio.to_thread(
        resize_image,
        image,
        width,
        height,
        timeout=timeout,
        convert_path=convert_path,
        candidates=candidates,
    )


__all__ = ["aresize_image", "find_convert", "resize_image"]
