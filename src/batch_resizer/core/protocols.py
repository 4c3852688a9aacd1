"""Protocol definitions for dependency injection and testability."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Protocol, Tuple

from PIL import Image

from .models import Codec, ResizePreset, ResizeResult

ProgressCallback = Callable[[int, int], None]


class ImageBackendProtocol(Protocol):
    """Protocol for the decode/resample/encode library."""

    def open(self, path: Path) -> Image.Image:
        """Decode the image at ``path`` fully into memory."""
        ...

    def resize(self, img: Image.Image, size: Tuple[int, int]) -> Image.Image:
        """Resample ``img`` to exactly ``size``."""
        ...

    def save(self, img: Image.Image, path: Path, codec: Codec) -> None:
        """Encode ``img`` with ``codec`` and write it to ``path``."""
        ...


class LoggerProtocol(Protocol):
    """Protocol for logging operations."""

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        ...

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        ...

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        ...

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        ...


class ResizeService(ABC):
    """Abstract service resizing one image."""

    @abstractmethod
    def process(
        self, input_path: Path, output_path: Path, preset: ResizePreset
    ) -> Tuple[int, int]:
        """Resize ``input_path`` into ``output_path`` and return the written size."""
        ...


class BatchProcessor(ABC):
    """Abstract batch processor."""

    @abstractmethod
    def run(
        self,
        input_paths: Iterable[Path],
        output_dir: Path,
        preset: ResizePreset,
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[ResizeResult]:
        """Resize every input and return one outcome per input, in order."""
        ...
