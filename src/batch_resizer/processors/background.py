"""Background batch execution with a one-way status channel.

One worker thread is spawned per batch. It runs the batch processor
sequentially and reports lifecycle events through a ``StatusChannel`` that
the initiating thread drains without blocking.
"""

import queue
import threading
import time
from pathlib import Path
from typing import Any, Iterable, List, Optional

from ..core.exceptions import BatchSetupError, ConfigurationError
from ..core.factories import LoggerFactory, ResizePipelineFactory
from ..core.logging_config import configure_worker_logging
from ..core.models import (
    Completed,
    Error,
    Processing,
    ProcessingConfig,
    ProcessingEvent,
    ResizePreset,
    ResizeResult,
)
from ..core.protocols import BatchProcessor

TERMINAL_EVENTS = (Completed, Error)


class StatusChannel:
    """Single-producer, single-consumer conduit for processing events."""

    def __init__(self):
        self._queue: "queue.Queue[ProcessingEvent]" = queue.Queue()
        self._finished = False

    @property
    def finished(self) -> bool:
        """True once the consumer has received the terminal event."""
        return self._finished

    def send(self, event: ProcessingEvent) -> None:
        """Producer side: enqueue ``event``."""
        self._queue.put(event)

    def _receive(self, event: ProcessingEvent, events: List[ProcessingEvent]) -> None:
        events.append(event)
        if isinstance(event, TERMINAL_EVENTS):
            self._finished = True

    def poll(self) -> List[ProcessingEvent]:
        """
        Consumer side: return every event queued so far without blocking.

        May return an empty list. Events come back in the order they were sent.
        """
        events: List[ProcessingEvent] = []
        while True:
            try:
                event = self._queue.get_nowait()
            except queue.Empty:
                return events
            self._receive(event, events)

    def wait(self, timeout: Optional[float] = None) -> List[ProcessingEvent]:
        """
        Block until the terminal event arrives or ``timeout`` expires.

        Returns:
            The events received while waiting, in order
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        events: List[ProcessingEvent] = []

        while not self._finished:
            remaining = None
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
            try:
                event = self._queue.get(timeout=remaining)
            except queue.Empty:
                break
            self._receive(event, events)

        return events


class BatchWorker:
    """Runs one batch on a background thread."""

    def __init__(
        self,
        processor: BatchProcessor,
        input_paths: Iterable[Any],
        output_dir: Path,
        preset: ResizePreset,
        create_output_dir: bool = False,
        channel: Optional[StatusChannel] = None,
    ):
        self._processor = processor
        try:
            self._input_paths: Iterable[Any] = list(input_paths)
        except TypeError:
            # Left as-is; the processor reports it as a setup failure.
            self._input_paths = input_paths
        self._output_dir = output_dir
        self._preset = preset
        self._create_output_dir = create_output_dir
        self.channel = channel or StatusChannel()
        self._thread: Optional[threading.Thread] = None
        self._results: Optional[List[ResizeResult]] = None

    @property
    def results(self) -> Optional[List[ResizeResult]]:
        """Per-file outcomes once the batch has completed, else None."""
        return self._results

    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> StatusChannel:
        """Spawn the worker thread and return the channel to poll."""
        if self._thread is not None:
            raise ConfigurationError("Batch worker has already been started")

        self._thread = threading.Thread(
            target=self._run, name="batch-resizer-worker", daemon=True
        )
        self._thread.start()
        return self.channel

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def _on_progress(self, current: int, total: int) -> None:
        self.channel.send(Processing(current=current, total=total))

    def _prepare_output_dir(self) -> None:
        try:
            Path(self._output_dir).mkdir(parents=True, exist_ok=True)
        except (OSError, TypeError) as e:
            raise BatchSetupError(
                f"Cannot create output directory: {e}"
            ) from e

    def _run(self) -> None:
        logger = configure_worker_logging()
        try:
            if self._create_output_dir:
                self._prepare_output_dir()
            results = self._processor.run(
                self._input_paths,
                self._output_dir,
                self._preset,
                on_progress=self._on_progress,
            )
        except Exception as e:  # noqa: BLE001
            logger.error(f"Batch could not be run: {e}", exc_info=True)
            self.channel.send(Error(message=str(e)))
            return

        self._results = results
        successful = sum(1 for r in results if r.success)
        logger.debug(f"Worker done: {successful}/{len(results)} succeeded")
        self.channel.send(Completed(successful=successful, failed=len(results) - successful))


def start_batch(
    config: ProcessingConfig, processor: Optional[BatchProcessor] = None
) -> BatchWorker:
    """
    Start a batch described by ``config`` on a background thread.

    Args:
        config: Job configuration
        processor: Batch processor to use (defaults to the Pillow pipeline)

    Returns:
        The started worker; poll ``worker.channel`` for events
    """
    if processor is None:
        logger = LoggerFactory.create_logger(level="DEBUG" if config.debug else None)
        processor = ResizePipelineFactory.create_pipeline(logger=logger)

    worker = BatchWorker(
        processor,
        config.input_paths,
        config.output_dir,
        config.preset,
        create_output_dir=config.create_output_dir,
    )
    worker.start()
    return worker
