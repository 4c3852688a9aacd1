"""Shared data models for the batch resizer."""

from enum import Enum
from pathlib import Path
from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import ResizerError


class OutputFormat(str, Enum):
    """Output format requested by a preset."""

    KEEP_ORIGINAL = "keep"
    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"
    BMP = "bmp"
    TIFF = "tiff"


class Codec(str, Enum):
    """Concrete codec; values are Pillow format names."""

    JPEG = "JPEG"
    PNG = "PNG"
    GIF = "GIF"
    BMP = "BMP"
    TIFF = "TIFF"
    WEBP = "WEBP"


class ResizePreset(BaseModel):
    """Named bundle of target size, aspect policy and output format."""

    model_config = ConfigDict(frozen=True)

    name: str
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    maintain_aspect_ratio: bool = True
    output_format: OutputFormat = OutputFormat.KEEP_ORIGINAL

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def label(self) -> str:
        return f"{self.name} ({self.width}x{self.height})"


class ResizeResult(BaseModel):
    """Outcome of resizing a single file within a batch."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    source_path: Path
    output_path: Optional[Path] = None
    error: Optional[ResizerError] = None
    output_size: Optional[Tuple[int, int]] = None
    processing_time: float = 0.0

    @property
    def success(self) -> bool:
        return self.error is None


class ProcessingConfig(BaseModel):
    """Configuration for one batch job."""

    input_paths: List[Path]
    output_dir: Path
    preset: ResizePreset
    create_output_dir: bool = False
    debug: bool = False


class Processing(BaseModel):
    """The worker is about to process file ``current`` of ``total``.

    ``current == total`` is sent once after the last file.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["processing"] = "processing"
    current: int
    total: int


class Completed(BaseModel):
    """Terminal event: the batch ran to completion."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["completed"] = "completed"
    successful: int
    failed: int


class Error(BaseModel):
    """Terminal event: the batch could not be run at all."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["error"] = "error"
    message: str


ProcessingEvent = Annotated[
    Union[Processing, Completed, Error], Field(discriminator="kind")
]
