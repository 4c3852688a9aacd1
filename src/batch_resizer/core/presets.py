"""Built-in preset catalog."""

from typing import Tuple

from pydantic import ValidationError

from .exceptions import ConfigurationError, InvalidPresetError
from .models import OutputFormat, ResizePreset

CUSTOM_PRESET_NAME = "Custom"

PRESETS: Tuple[ResizePreset, ...] = (
    ResizePreset(
        name="340×570",
        width=340,
        height=570,
        maintain_aspect_ratio=True,
        output_format=OutputFormat.PNG,
    ),
    ResizePreset(
        name="1040×570",
        width=1040,
        height=570,
        maintain_aspect_ratio=True,
        output_format=OutputFormat.PNG,
    ),
    ResizePreset(name="Instagram Square", width=1080, height=1080, maintain_aspect_ratio=False),
    ResizePreset(name="Instagram Story", width=1080, height=1920, maintain_aspect_ratio=False),
    ResizePreset(name="Facebook Cover", width=820, height=312, maintain_aspect_ratio=False),
    ResizePreset(name="Twitter Header", width=1500, height=500, maintain_aspect_ratio=False),
    ResizePreset(name="YouTube Thumbnail", width=1280, height=720, maintain_aspect_ratio=False),
    ResizePreset(name="HD 1080p", width=1920, height=1080),
    ResizePreset(name="HD 720p", width=1280, height=720),
    ResizePreset(name="Small Web", width=800, height=600),
    ResizePreset(name="Thumbnail", width=150, height=150),
)


def default_preset() -> ResizePreset:
    """Return the preset selected when nothing else has been chosen."""
    return PRESETS[0]


def get_preset(name: str) -> ResizePreset:
    """
    Look up a catalog preset by its display name.

    Raises:
        ConfigurationError: If no preset has that name
    """
    for preset in PRESETS:
        if preset.name == name:
            return preset
    raise ConfigurationError(f"Unknown preset: {name}")


def custom_preset(
    width: int,
    height: int,
    maintain_aspect_ratio: bool = True,
    output_format: OutputFormat = OutputFormat.KEEP_ORIGINAL,
) -> ResizePreset:
    """
    Build a caller-defined preset. The catalog itself is never modified.

    Raises:
        InvalidPresetError: If width or height is not a positive integer
    """
    try:
        return ResizePreset(
            name=CUSTOM_PRESET_NAME,
            width=width,
            height=height,
            maintain_aspect_ratio=maintain_aspect_ratio,
            output_format=output_format,
        )
    except ValidationError as e:
        raise InvalidPresetError(
            f"Invalid custom size {width}x{height}: width and height must be positive"
        ) from e
