"""Batch execution off the caller's thread."""

from .background import BatchWorker, StatusChannel, start_batch

__all__ = [
    "BatchWorker",
    "StatusChannel",
    "start_batch",
]
