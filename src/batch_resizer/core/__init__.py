"""Core utilities and shared components for the batch resizer."""

from .dimensions import resolve_dimensions
from .formats import (
    codec_for_extension,
    encoder_options,
    extension_for,
    resolve_codec,
    supported_extensions,
)
from .image_utils import build_output_path, find_images, prepare_for_codec
from .logging_config import (
    configure_worker_logging,
    get_logger,
    setup_logger,
)
from .exceptions import (
    ResizerError,
    ImageProcessingError,
    DegenerateImageError,
    DecodeError,
    UnsupportedFormatError,
    WriteError,
    InvalidFileNameError,
    ConfigurationError,
    InvalidPresetError,
    BatchSetupError,
)
from .models import (
    Codec,
    Completed,
    Error,
    OutputFormat,
    Processing,
    ProcessingConfig,
    ProcessingEvent,
    ResizePreset,
    ResizeResult,
)
from .presets import PRESETS, custom_preset, default_preset, get_preset

__all__ = [
    "Codec",
    "OutputFormat",
    "ResizePreset",
    "ResizeResult",
    "ProcessingConfig",
    "ProcessingEvent",
    "Processing",
    "Completed",
    "Error",
    "PRESETS",
    "default_preset",
    "get_preset",
    "custom_preset",
    "resolve_dimensions",
    "resolve_codec",
    "extension_for",
    "codec_for_extension",
    "encoder_options",
    "supported_extensions",
    "build_output_path",
    "find_images",
    "prepare_for_codec",
    "setup_logger",
    "get_logger",
    "configure_worker_logging",
    "ResizerError",
    "ImageProcessingError",
    "DegenerateImageError",
    "DecodeError",
    "UnsupportedFormatError",
    "WriteError",
    "InvalidFileNameError",
    "ConfigurationError",
    "InvalidPresetError",
    "BatchSetupError",
]
