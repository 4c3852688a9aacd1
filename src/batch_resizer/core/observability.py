"""Context-aware logging and per-file resize metrics."""

import logging
import threading
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from .logging_config import DEFAULT_LOGGER_NAME, setup_logger


@dataclass(frozen=True)
class LogContext:
    """Correlation data attached to the log lines of one file."""

    correlation_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    operation: str = ""
    component: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)

    def with_operation(self, operation: str) -> "LogContext":
        return replace(self, operation=operation, metadata=dict(self.metadata))

    def with_metadata(self, **kwargs: Any) -> "LogContext":
        return replace(self, metadata={**self.metadata, **kwargs})


def render_message(
    message: str, context: Optional[LogContext] = None, **kwargs: Any
) -> str:
    """Render ``message`` as ``[operation] [id] message (key=value, ...)``."""
    if context is None:
        return message

    parts = []
    if context.operation:
        parts.append(f"[{context.operation}]")
    parts.append(f"[{context.correlation_id}]")
    parts.append(message)
    rendered = " ".join(parts)

    fields = {**context.metadata, **kwargs}
    if fields:
        rendered += " (" + ", ".join(f"{k}={v}" for k, v in fields.items()) + ")"
    return rendered


class StructuredLogger:
    """Logger accepting a ``LogContext`` on every call."""

    def __init__(self, name: str = DEFAULT_LOGGER_NAME, level: Optional[str] = None):
        self.logger = setup_logger(name, level=level)

    def _log(self, level: int, message: str, context: Optional[LogContext], **kwargs):
        if self.logger.isEnabledFor(level):
            self.logger.log(level, render_message(message, context, **kwargs))

    def debug(self, message: str, context: Optional[LogContext] = None, **kwargs):
        self._log(logging.DEBUG, message, context, **kwargs)

    def info(self, message: str, context: Optional[LogContext] = None, **kwargs):
        self._log(logging.INFO, message, context, **kwargs)

    def warning(self, message: str, context: Optional[LogContext] = None, **kwargs):
        self._log(logging.WARNING, message, context, **kwargs)

    def error(self, message: str, context: Optional[LogContext] = None, **kwargs):
        self._log(logging.ERROR, message, context, **kwargs)


@dataclass
class ResizeMetric:
    """Timing and outcome of resizing one file."""

    source: str
    start_time: float
    end_time: float
    success: bool
    error_kind: Optional[str] = None
    output_size: Optional[Tuple[int, int]] = None

    @property
    def duration_ms(self) -> float:
        return (self.end_time - self.start_time) * 1000


class MetricsCollector:
    """
    Accumulates ``ResizeMetric`` records.

    Records are written from the worker thread and may be read from the
    caller's thread, so access goes through a lock.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._metrics: List[ResizeMetric] = []

    def record(self, metric: ResizeMetric) -> None:
        with self._lock:
            self._metrics.append(metric)

    def metrics(self) -> List[ResizeMetric]:
        with self._lock:
            return list(self._metrics)

    def clear(self) -> None:
        with self._lock:
            self._metrics.clear()

    def summary(self) -> Dict[str, Any]:
        """
        Aggregate the recorded files.

        Returns:
            Counts, timing in milliseconds and failures per error kind, or
            an empty dict when nothing has been recorded
        """
        metrics = self.metrics()
        if not metrics:
            return {}

        durations = [m.duration_ms for m in metrics]
        failures: Dict[str, int] = {}
        for m in metrics:
            if not m.success:
                kind = m.error_kind or "Unknown"
                failures[kind] = failures.get(kind, 0) + 1

        successful = sum(1 for m in metrics if m.success)
        return {
            "files": len(metrics),
            "successful": successful,
            "failed": len(metrics) - successful,
            "avg_ms": sum(durations) / len(durations),
            "min_ms": min(durations),
            "max_ms": max(durations),
            "failures_by_kind": failures,
        }
