"""Package initialization for imgprobe."""

import contextlib
from importlib.metadata import PackageNotFoundError, version

from .constants import ImageFormat
from .dimensions import Dimensions, extract_dimensions, probe
from .errors import (
    ConfigLoadError,
    ConversionFailedError,
    ConverterNotFoundError,
    InvalidResizeTargetError,
    ResizeError,
    ResizeOutputError,
    ResizeTimeoutError,
    UnsupportedFormatError,
)
from .format_detect import classify
from .image import Image
from .resize import aresize_image, resize_image

__version__ = "0.0.0"
with contextlib.suppress(PackageNotFoundError):
    if __package__ is not None:
        __version__ = version(__package__)

__all__ = [
    "ConfigLoadError",
    "ConversionFailedError",
    "ConverterNotFoundError",
    "Dimensions",
    "Image",
    "ImageFormat",
    "InvalidResizeTargetError",
    "ResizeError",
    "ResizeOutputError",
    "ResizeTimeoutError",
    "UnsupportedFormatError",
    "__version__",
    "aresize_image",
    "classify",
    "extract_dimensions",
    "probe",
    "resize_image",
]
