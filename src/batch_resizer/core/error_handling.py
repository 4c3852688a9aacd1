# src/batch_resizer/core/error_handling.py

import functools
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from PIL import Image

from .exceptions import ResizerError

# Errors Pillow and the OS raise while reading or writing image files.
# UnidentifiedImageError and FileNotFoundError are both OSError subclasses;
# SyntaxError and ValueError surface from some malformed headers.
IMAGE_IO_ERRORS: Tuple[Type[BaseException], ...] = (
    OSError,
    SyntaxError,
    ValueError,
    Image.DecompressionBombError,
)


def _find_path(args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Optional[Path]:
    if isinstance(kwargs.get("path"), Path):
        return kwargs["path"]
    for arg in args:
        if isinstance(arg, Path):
            return arg
    return None


def with_error_handling(error_cls: Type[ResizerError], action: str):
    """
    Decorator translating image I/O failures into ``error_cls``.

    Errors already in the resizer hierarchy pass through untouched. The first
    ``Path`` argument of the wrapped call is attached to the raised error.

    Args:
        error_cls: ResizerError subclass to raise (e.g. DecodeError).
        action: Human readable verb phrase used in the message ("decode image").
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = logging.getLogger(func.__module__ + "." + func.__name__)
            try:
                return func(*args, **kwargs)
            except ResizerError:
                raise
            except IMAGE_IO_ERRORS as e:
                logger.error(f"Error in '{func.__name__}': {e}", exc_info=True)
                raise error_cls(
                    f"Failed to {action}: {e}", _find_path(args, kwargs)
                ) from e

        return wrapper

    return decorator


class BatchOperationContextManager:
    """
    Context manager for batch operations to collect and summarize errors.
    """

    def __init__(self, operation_name: str = "Batch Operation"):
        self.operation_name = operation_name
        self.errors: List[Dict[str, str]] = []
        self.logger = logging.getLogger(
            self.__class__.__module__ + "." + self.__class__.__name__
        )

    def __enter__(self):
        self.logger.info(f"Starting {self.operation_name}.")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.logger.error(
                f"{self.operation_name} failed due to an unhandled exception: {exc_val}",
                exc_info=(exc_type, exc_val, exc_tb),
            )
        elif self.errors:
            self.logger.warning(
                f"{self.operation_name} completed with {len(self.errors)} error(s)."
            )
            for i, error_detail in enumerate(self.errors):
                self.logger.error(
                    f"  Error {i + 1}/{len(self.errors)} for item "
                    f"'{error_detail['item']}': {error_detail['error']}"
                )
        else:
            self.logger.info(f"{self.operation_name} completed successfully.")

        # Never suppress: exceptions raised inside the block propagate.
        return False

    def add_error(self, error_message: str, item_identifier: str = "Unknown item"):
        """
        Report an error for a specific item from within the ``with`` block.

        Args:
            error_message: The error message or exception string.
            item_identifier: A string identifying the item that failed (e.g. a path).
        """
        self.errors.append({"item": item_identifier, "error": str(error_message)})
        self.logger.debug(
            f"Error added for item '{item_identifier}' in {self.operation_name}: {error_message}"
        )
