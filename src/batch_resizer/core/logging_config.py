"""Centralized logging configuration for the batch resizer.

Environment Variables:
    LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL (default INFO)
    LOG_FORMAT: "structured" or "simple" (default "structured")
"""

import os
import sys
import logging
import threading
from typing import Optional

DEFAULT_LOGGER_NAME = "batch-resizer"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
HANDLER_NAME = "batch-resizer-stdout"

LOG_FORMATS = {
    "structured": (
        "%(asctime)s | %(name)s | %(levelname)-8s | %(threadName)s | "
        "%(filename)s:%(lineno)d | %(funcName)s() | %(message)s"
    ),
    "simple": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def _build_handler(format_type: str) -> logging.Handler:
    format_name = os.getenv("LOG_FORMAT", format_type).lower()
    fmt = LOG_FORMATS.get(format_name, LOG_FORMATS["structured"])

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(fmt, datefmt=DATE_FORMAT))
    return handler


def setup_logger(
    name: str = DEFAULT_LOGGER_NAME,
    level: Optional[str] = None,
    format_type: str = "structured",
) -> logging.Logger:
    """
    Return the logger ``name`` writing to stdout.

    The level is applied on every call; the stdout handler is attached
    only once, whatever other handlers the logger already has.

    Args:
        name: Logger name (defaults to "batch-resizer")
        level: Log level override (defaults to LOG_LEVEL or INFO)
        format_type: Format used when LOG_FORMAT is unset

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level(level))

    if not any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        logger.addHandler(_build_handler(format_type))

    logger.propagate = False
    return logger


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    return setup_logger(name)


def configure_worker_logging() -> logging.Logger:
    """
    Logger for the calling worker thread, named ``batch-resizer.<thread name>``.

    Call this at the top of the worker's run loop.
    """
    return setup_logger(f"{DEFAULT_LOGGER_NAME}.{threading.current_thread().name}")


logger = setup_logger()
