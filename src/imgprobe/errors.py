"""Custom exception classes and error messages."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

ERROR_MSG_UNSUPPORTED_FORMAT = "Unsupported image format"
ERROR_MSG_CONVERT_NOT_FOUND = "Cannot find convert command. Please ensure ImageMagick is installed."


class UnsupportedFormatError(ValueError):
    """Raised when bytes do not classify as any known image format."""

    def __init__(self, path: Path | None = None) -> None:
        msg = ERROR_MSG_UNSUPPORTED_FORMAT if path is None else f"{ERROR_MSG_UNSUPPORTED_FORMAT}: {path}"
        super().__init__(msg)
        self.path = path


class ConfigLoadError(Exception):
    """Raised when a configuration file cannot be loaded."""


class ResizeError(Exception):
    """Base class for failures while resizing through the external converter."""


class InvalidResizeTargetError(ResizeError, ValueError):
    """Raised when the requested size is not strictly positive."""


class ConverterNotFoundError(ResizeError):
    """Raised when no ImageMagick ``convert`` executable can be located."""

    def __init__(self) -> None:
        super().__init__(ERROR_MSG_CONVERT_NOT_FOUND)


class ConversionFailedError(ResizeError):
    """Raised when the converter exits with a non-zero status."""

    def __init__(self, returncode: int, stderr: str) -> None:
        detail = stderr.strip() or "Unknown error"
        super().__init__(f"Convert failed with status {returncode}. Detail: {detail}")
        self.returncode = returncode
        self.stderr = stderr


class ResizeOutputError(ResizeError):
    """Raised when the converter succeeds but its output cannot be read back as an image."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Convert produced no usable output: {reason}")
        self.reason = reason


class ResizeTimeoutError(ResizeError, TimeoutError):
    """Raised when the converter does not finish within the timeout."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"Resize operation timed out after {timeout:g}s")
        self.timeout = timeout


__all__ = [
    "ERROR_MSG_CONVERT_NOT_FOUND",
    "ERROR_MSG_UNSUPPORTED_FORMAT",
    "ConfigLoadError",
    "ConversionFailedError",
    "ConverterNotFoundError",
    "InvalidResizeTargetError",
    "ResizeError",
    "ResizeOutputError",
    "ResizeTimeoutError",
    "UnsupportedFormatError",
]
