"""Custom exceptions for the batch resizer."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class ResizerError(Exception):
    """Base exception for all batch resizer errors."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.message = message
        self.path = Path(path) if path is not None else None

    @property
    def kind(self) -> str:
        """Short name of the error category, e.g. ``DecodeError``."""
        return type(self).__name__

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.message} ({self.path})"
        return self.message


class ImageProcessingError(ResizerError):
    """Error raised when processing a single image fails."""


class DegenerateImageError(ImageProcessingError):
    """Source image has zero width or height."""


class DecodeError(ImageProcessingError):
    """Source file is missing, unreadable or not a decodable image."""


class UnsupportedFormatError(ImageProcessingError):
    """Extension or format choice maps to no known codec."""


class WriteError(ImageProcessingError):
    """Destination file cannot be created or written."""


class InvalidFileNameError(ImageProcessingError):
    """Input path has no usable file name component."""


class ConfigurationError(ResizerError):
    """Error raised for invalid configuration options."""


class InvalidPresetError(ConfigurationError):
    """Preset target width or height is not a positive integer."""


class BatchSetupError(ConfigurationError):
    """The batch could not be started at all."""
