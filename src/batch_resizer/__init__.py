"""Batch image resizing with presets and background progress reporting."""

__version__ = "0.1.0"

from .core import (  # noqa: E402
    PRESETS,
    OutputFormat,
    ResizePreset,
    ResizeResult,
    custom_preset,
    default_preset,
    get_preset,
)
from .processors import BatchWorker, StatusChannel, start_batch  # noqa: E402
from .session import ResizeSession  # noqa: E402

__all__ = [
    "__version__",
    "PRESETS",
    "OutputFormat",
    "ResizePreset",
    "ResizeResult",
    "custom_preset",
    "default_preset",
    "get_preset",
    "BatchWorker",
    "StatusChannel",
    "start_batch",
    "ResizeSession",
]
