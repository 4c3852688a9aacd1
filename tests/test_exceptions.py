"""Tests for the exception hierarchy."""

import pytest
from pathlib import Path

from batch_resizer.core.exceptions import (
    BatchSetupError,
    ConfigurationError,
    DecodeError,
    DegenerateImageError,
    ImageProcessingError,
    InvalidFileNameError,
    InvalidPresetError,
    ResizerError,
    UnsupportedFormatError,
    WriteError,
)

PER_FILE_ERRORS = [
    DegenerateImageError,
    DecodeError,
    UnsupportedFormatError,
    WriteError,
    InvalidFileNameError,
]


class TestHierarchy:
    """Tests for exception inheritance."""

    @pytest.mark.parametrize("error_cls", PER_FILE_ERRORS)
    def test_per_file_errors_are_image_processing_errors(self, error_cls):
        assert issubclass(error_cls, ImageProcessingError)
        assert issubclass(error_cls, ResizerError)

    @pytest.mark.parametrize("error_cls", [InvalidPresetError, BatchSetupError])
    def test_configuration_errors(self, error_cls):
        assert issubclass(error_cls, ConfigurationError)
        assert not issubclass(error_cls, ImageProcessingError)

    def test_base_is_exception(self):
        assert issubclass(ResizerError, Exception)


class TestResizerError:
    """Tests for ResizerError attributes and rendering."""

    def test_message_without_path(self):
        """Test an error without a path renders its message only."""
        error = ConfigurationError("Unknown preset: x")
        assert error.message == "Unknown preset: x"
        assert error.path is None
        assert str(error) == "Unknown preset: x"

    def test_message_with_path(self):
        """Test the offending path is attached and rendered."""
        error = DecodeError("Failed to decode image", "photos/a.jpg")
        assert error.path == Path("photos/a.jpg")
        assert str(error) == f"Failed to decode image ({Path('photos/a.jpg')})"

    def test_kind_is_class_name(self):
        """Test kind distinguishes error categories."""
        assert WriteError("x").kind == "WriteError"
        assert DecodeError("x").kind == "DecodeError"

    def test_can_be_caught_as_base(self):
        with pytest.raises(ResizerError):
            raise UnsupportedFormatError("Unsupported image format: txt")
