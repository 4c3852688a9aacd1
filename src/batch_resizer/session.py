"""Headless front-end state for driving one batch at a time.

``ResizeSession`` holds what a window would hold (selected files, output
directory, preset or custom size, status line, a bounded log) and talks to
the background worker only through its status channel.
"""

from collections import deque
from pathlib import Path
from typing import Deque, Iterable, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

from .core.exceptions import InvalidPresetError
from .core.image_utils import find_images
from .core.logging_config import get_logger
from .core.models import (
    Completed,
    Error,
    OutputFormat,
    Processing,
    ProcessingConfig,
    ProcessingEvent,
    ResizePreset,
    ResizeResult,
)
from .core.presets import custom_preset, default_preset, get_preset
from .core.protocols import BatchProcessor
from .processors.background import BatchWorker, start_batch

MAX_LOG_MESSAGES = 100
DEFAULT_CUSTOM_WIDTH = 800
DEFAULT_CUSTOM_HEIGHT = 600


class Idle(BaseModel):
    """No batch has run yet."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["idle"] = "idle"


SessionStatus = Union[Idle, Processing, Completed, Error]


def parse_dimension(text: str, fallback: int) -> int:
    """Parse a size field, falling back when it is not an integer."""
    try:
        return int(text.strip())
    except ValueError:
        return fallback


class ResizeSession:
    """State and actions behind a resize front end."""

    def __init__(
        self,
        processor: Optional[BatchProcessor] = None,
        max_log_messages: int = MAX_LOG_MESSAGES,
        debug: bool = False,
    ):
        self.selected_files: List[Path] = []
        self.output_directory: Optional[Path] = None
        self.create_output_dir = False
        self.selected_preset: ResizePreset = default_preset()
        self.use_custom_size = False
        self.custom_width = str(DEFAULT_CUSTOM_WIDTH)
        self.custom_height = str(DEFAULT_CUSTOM_HEIGHT)
        self.maintain_aspect_ratio = True
        self.custom_output_format = OutputFormat.KEEP_ORIGINAL
        self.status: SessionStatus = Idle()
        self.log_messages: Deque[str] = deque(maxlen=max_log_messages)
        self.last_results: List[ResizeResult] = []

        self._processor = processor
        self._debug = debug
        self._worker: Optional[BatchWorker] = None
        self._logger = get_logger("batch-resizer.session")

    def add_log_message(self, message: str) -> None:
        self.log_messages.append(message)
        self._logger.info(message)

    def select_files(self, paths: Iterable[Union[str, Path]]) -> None:
        """Replace the selection; directories expand to the images they contain."""
        self.selected_files = find_images(paths)
        self.add_log_message(f"Selected {len(self.selected_files)} files")

    def set_output_directory(self, directory: Union[str, Path], create: bool = False) -> None:
        self.output_directory = Path(directory)
        self.create_output_dir = create
        self.add_log_message("Output directory selected")

    def use_preset(self, name: str) -> None:
        """
        Switch to a catalog preset.

        Raises:
            ConfigurationError: If no preset has that name
        """
        self.selected_preset = get_preset(name)
        self.use_custom_size = False

    def use_custom(
        self,
        width: str,
        height: str,
        maintain_aspect_ratio: bool = True,
        output_format: OutputFormat = OutputFormat.KEEP_ORIGINAL,
    ) -> None:
        self.custom_width = width
        self.custom_height = height
        self.maintain_aspect_ratio = maintain_aspect_ratio
        self.custom_output_format = output_format
        self.use_custom_size = True

    def effective_preset(self) -> ResizePreset:
        """
        The preset the next batch will use.

        Unparsable custom sizes fall back to 800x600.

        Raises:
            InvalidPresetError: If a custom size parses to zero or less
        """
        if not self.use_custom_size:
            return self.selected_preset

        return custom_preset(
            parse_dimension(self.custom_width, DEFAULT_CUSTOM_WIDTH),
            parse_dimension(self.custom_height, DEFAULT_CUSTOM_HEIGHT),
            maintain_aspect_ratio=self.maintain_aspect_ratio,
            output_format=self.custom_output_format,
        )

    @property
    def is_processing(self) -> bool:
        return self._worker is not None

    @property
    def can_process(self) -> bool:
        return (
            bool(self.selected_files)
            and self.output_directory is not None
            and not self.is_processing
        )

    @property
    def progress_fraction(self) -> float:
        if isinstance(self.status, Processing):
            return self.status.current / self.status.total if self.status.total else 0.0
        if isinstance(self.status, Completed):
            return 1.0
        return 0.0

    @property
    def status_text(self) -> str:
        status = self.status
        if isinstance(status, Processing):
            return f"Processing {min(status.current + 1, status.total)} of {status.total}"
        if isinstance(status, Completed):
            return f"Completed: {status.successful} successful, {status.failed} failed"
        if isinstance(status, Error):
            return f"Error: {status.message}"
        return "Ready"

    def start_processing(self) -> bool:
        """
        Start a batch for the current selection.

        Returns:
            True if a worker was started; otherwise the reason is logged
        """
        if not self.selected_files:
            self.add_log_message("No files selected")
            return False

        if self.output_directory is None:
            self.add_log_message("No output directory selected")
            return False

        if self.is_processing:
            self.add_log_message("Processing already in progress")
            return False

        try:
            preset = self.effective_preset()
        except InvalidPresetError as e:
            self.add_log_message(f"Error: {e}")
            return False

        config = ProcessingConfig(
            input_paths=list(self.selected_files),
            output_dir=self.output_directory,
            preset=preset,
            create_output_dir=self.create_output_dir,
            debug=self._debug,
        )
        self.last_results = []
        self._worker = start_batch(config, self._processor)
        self.add_log_message(
            f"Started processing {len(config.input_paths)} files with {preset.label}"
        )
        return True

    def update_processing_status(self) -> List[ProcessingEvent]:
        """
        Drain the worker's channel without blocking and apply the events.

        Returns:
            The events received by this call (possibly none)
        """
        if self._worker is None:
            return []

        channel = self._worker.channel
        events = channel.poll()

        for event in events:
            if isinstance(event, Processing):
                if event.current < event.total:
                    self.add_log_message(
                        f"Processing {event.current + 1} of {event.total}"
                    )
            elif isinstance(event, Completed):
                self.add_log_message(
                    f"Processing completed: {event.successful} successful, "
                    f"{event.failed} failed"
                )
            elif isinstance(event, Error):
                self.add_log_message(f"Error: {event.message}")
            self.status = event

        if channel.finished:
            self._worker.join()
            self.last_results = self._worker.results or []
            self._worker = None

        return events
