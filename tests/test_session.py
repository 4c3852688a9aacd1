"""Tests for ResizeSession."""

import time

import pytest
from pathlib import Path
from unittest.mock import Mock

from batch_resizer.core.exceptions import ConfigurationError
from batch_resizer.core.factories import ResizePipelineFactory
from batch_resizer.core.models import Completed, Error, OutputFormat, Processing
from batch_resizer.core.presets import PRESETS, get_preset
from batch_resizer.session import MAX_LOG_MESSAGES, Idle, ResizeSession, parse_dimension
from batch_resizer.testing.fakes import FakeImageBackend, FakeLogger


def make_session(backend=None):
    processor = ResizePipelineFactory.create_pipeline(
        backend=backend or FakeImageBackend(), logger=FakeLogger()
    )
    return ResizeSession(processor=processor)


def run_to_completion(session, timeout=5.0):
    deadline = time.monotonic() + timeout
    while session.is_processing:
        assert time.monotonic() < deadline, "batch did not finish"
        session.update_processing_status()
        time.sleep(0.01)


class TestParseDimension:
    @pytest.mark.parametrize(
        "text,expected",
        [("640", 640), (" 480 ", 480), ("abc", 800), ("", 800), ("12.5", 800), ("-5", -5)],
    )
    def test_parse_dimension(self, text, expected):
        assert parse_dimension(text, 800) == expected


class TestSessionState:
    """Tests for selection and preset state."""

    def test_initial_state(self):
        session = ResizeSession()
        assert session.selected_files == []
        assert session.output_directory is None
        assert session.selected_preset == PRESETS[0]
        assert session.status == Idle()
        assert session.status_text == "Ready"
        assert session.can_process is False
        assert session.progress_fraction == 0.0

    def test_select_files_and_output_directory(self, tmp_path):
        session = ResizeSession()
        session.select_files(["a.jpg", "b.png"])
        session.set_output_directory(tmp_path)

        assert session.selected_files == [Path("a.jpg"), Path("b.png")]
        assert session.output_directory == tmp_path
        assert session.can_process is True
        assert list(session.log_messages) == [
            "Selected 2 files",
            "Output directory selected",
        ]

    def test_log_is_bounded(self):
        """Test only the most recent messages are kept."""
        session = ResizeSession()
        for i in range(MAX_LOG_MESSAGES + 50):
            session.add_log_message(f"message {i}")

        assert len(session.log_messages) == MAX_LOG_MESSAGES
        assert session.log_messages[0] == "message 50"
        assert session.log_messages[-1] == f"message {MAX_LOG_MESSAGES + 49}"

    def test_use_preset(self):
        session = ResizeSession()
        session.use_custom("10", "10")
        session.use_preset("HD 720p")
        assert session.use_custom_size is False
        assert session.effective_preset() == get_preset("HD 720p")

    def test_use_unknown_preset(self):
        with pytest.raises(ConfigurationError):
            ResizeSession().use_preset("Poster")

    def test_custom_preset(self):
        session = ResizeSession()
        session.use_custom("640", "480", maintain_aspect_ratio=False,
                           output_format=OutputFormat.PNG)
        preset = session.effective_preset()
        assert preset.size == (640, 480)
        assert preset.maintain_aspect_ratio is False
        assert preset.output_format is OutputFormat.PNG

    def test_custom_preset_falls_back_on_bad_text(self):
        session = ResizeSession()
        session.use_custom("wide", "tall")
        assert session.effective_preset().size == (800, 600)

    def test_status_text_and_progress(self):
        session = ResizeSession()
        session.status = Processing(current=1, total=4)
        assert session.status_text == "Processing 2 of 4"
        assert session.progress_fraction == 0.25

        session.status = Completed(successful=3, failed=1)
        assert session.status_text == "Completed: 3 successful, 1 failed"
        assert session.progress_fraction == 1.0

        session.status = Error(message="boom")
        assert session.status_text == "Error: boom"


class TestStartProcessing:
    """Tests for starting batches and applying their events."""

    def test_refuses_without_files(self, tmp_path):
        session = make_session()
        session.set_output_directory(tmp_path)
        assert session.start_processing() is False
        assert session.log_messages[-1] == "No files selected"

    def test_refuses_without_output_directory(self):
        session = make_session()
        session.select_files(["a.png"])
        assert session.start_processing() is False
        assert session.log_messages[-1] == "No output directory selected"

    def test_refuses_zero_custom_size(self, tmp_path):
        session = make_session()
        session.select_files(["a.png"])
        session.set_output_directory(tmp_path)
        session.use_custom("0", "600")

        assert session.start_processing() is False
        assert session.log_messages[-1].startswith("Error: Invalid custom size 0x600")
        assert session.is_processing is False

    def test_refuses_while_running(self, tmp_path):
        backend = FakeImageBackend()
        backend.set_delay(0.1)
        session = make_session(backend)
        session.select_files(["a.png", "b.png"])
        session.set_output_directory(tmp_path)

        assert session.start_processing() is True
        assert session.can_process is False
        assert session.start_processing() is False
        assert session.log_messages[-1] == "Processing already in progress"

        run_to_completion(session)

    def test_full_batch_updates_status_and_log(self, tmp_path):
        backend = FakeImageBackend()
        backend.set_unreadable("b.png")
        session = make_session(backend)
        session.select_files(["a.jpg", "b.png", "c.jpg"])
        session.set_output_directory(tmp_path)
        session.use_preset("Thumbnail")

        assert session.start_processing() is True
        run_to_completion(session)

        assert session.status == Completed(successful=2, failed=1)
        assert session.status_text == "Completed: 2 successful, 1 failed"
        assert list(session.log_messages)[-5:] == [
            "Started processing 3 files with Thumbnail (150x150)",
            "Processing 1 of 3",
            "Processing 2 of 3",
            "Processing 3 of 3",
            "Processing completed: 2 successful, 1 failed",
        ]
        assert [r.success for r in session.last_results] == [True, False, True]
        assert session.can_process is True

    def test_update_without_worker_is_noop(self):
        assert ResizeSession().update_processing_status() == []

    def test_error_event_and_restart(self, tmp_path):
        """Test a failed batch reports the error and allows a new start."""
        processor = Mock()
        processor.run.side_effect = RuntimeError("boom")
        session = ResizeSession(processor=processor)
        session.select_files(["a.png"])
        session.set_output_directory(tmp_path)

        assert session.start_processing() is True
        run_to_completion(session)

        assert session.status == Error(message="boom")
        assert session.log_messages[-1] == "Error: boom"
        assert session.last_results == []
        assert session.start_processing() is True
        run_to_completion(session)
