"""Factory classes for creating configured service instances."""

from typing import Optional

from .logging_config import DEFAULT_LOGGER_NAME
from .observability import MetricsCollector, StructuredLogger
from .protocols import ImageBackendProtocol, LoggerProtocol
from .services import BatchResizeOrchestrator, ImageResizeService, PillowImageBackend


class LoggerFactory:
    """Factory for creating logger instances."""

    @staticmethod
    def create_logger(
        name: str = DEFAULT_LOGGER_NAME, level: Optional[str] = None
    ) -> LoggerProtocol:
        """Create a context-aware logger sharing the central handler setup."""
        return StructuredLogger(name, level=level)


class ResizePipelineFactory:
    """Factory for creating the complete resize pipeline."""

    @staticmethod
    def create_pipeline(
        backend: Optional[ImageBackendProtocol] = None,
        logger: Optional[LoggerProtocol] = None,
        metrics_collector: Optional[MetricsCollector] = None,
    ) -> BatchResizeOrchestrator:
        """Create a fully configured batch orchestrator."""
        if backend is None:
            backend = PillowImageBackend()

        if logger is None:
            logger = LoggerFactory.create_logger()

        resize_service = ImageResizeService(backend, logger, metrics_collector)
        return BatchResizeOrchestrator(resize_service=resize_service, logger=logger)
