"""Testing utilities and fakes for the batch resizer."""

from .fakes import (
    FakeImage,
    FakeImageBackend,
    FakeLogger,
    SavedImage,
    create_corrupt_image,
    create_test_image,
    setup_test_image_dir,
)

__all__ = [
    "FakeImage",
    "FakeImageBackend",
    "FakeLogger",
    "SavedImage",
    "create_corrupt_image",
    "create_test_image",
    "setup_test_image_dir",
]
