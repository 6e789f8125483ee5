"""Tests for the upload session state machine."""

from unittest.mock import MagicMock

import pytest

from rumble.core.session import (
    AppState,
    DEFAULT_ERROR_MESSAGE,
    RumbleSession,
    can_transition,
    transition,
)
from rumble.utils.errors import AudioLoadError, InvalidTransitionError, UnsupportedFormatError


class TestTransitions:
    @pytest.mark.parametrize(
        "current, target",
        [
            (AppState.UPLOAD, AppState.PROCESSING),
            (AppState.PROCESSING, AppState.RESULT),
            (AppState.PROCESSING, AppState.ERROR),
            (AppState.RESULT, AppState.UPLOAD),
            (AppState.ERROR, AppState.UPLOAD),
        ],
    )
    def test_allowed(self, current, target):
        assert can_transition(current, target)
        assert transition(current, target) is target

    @pytest.mark.parametrize(
        "current, target",
        [
            (AppState.UPLOAD, AppState.RESULT),
            (AppState.UPLOAD, AppState.ERROR),
            (AppState.PROCESSING, AppState.UPLOAD),
            (AppState.RESULT, AppState.PROCESSING),
            (AppState.ERROR, AppState.RESULT),
        ],
    )
    def test_rejected(self, current, target):
        assert not can_transition(current, target)
        with pytest.raises(InvalidTransitionError) as exc_info:
            transition(current, target)
        assert exc_info.value.current == current.value
        assert exc_info.value.target == target.value


class TestRumbleSession:
    def test_starts_in_upload(self):
        session = RumbleSession(MagicMock())
        assert session.state is AppState.UPLOAD
        assert session.result is None
        assert session.error is None

    def test_successful_submit(self, rumble_result):
        engine = MagicMock()
        engine.analyze.return_value = rumble_result
        session = RumbleSession(engine)

        assert session.submit("silent.wav", media_type="audio/wav") is AppState.RESULT
        assert session.result is rumble_result
        engine.analyze.assert_called_once_with("silent.wav", media_type="audio/wav")

    def test_failed_submit_records_message(self):
        engine = MagicMock()
        engine.analyze.side_effect = UnsupportedFormatError(
            "Please upload an audio file", media_type="text/plain"
        )
        session = RumbleSession(engine)

        assert session.submit("notes.txt") is AppState.ERROR
        assert session.result is None
        assert session.error == "Please upload an audio file"

    def test_missing_file_is_an_error_state(self):
        engine = MagicMock()
        engine.analyze.side_effect = FileNotFoundError("Audio file not found: x.wav")
        session = RumbleSession(engine)

        assert session.submit("x.wav") is AppState.ERROR
        assert "x.wav" in session.error

    def test_empty_message_falls_back_to_default(self):
        engine = MagicMock()
        engine.analyze.side_effect = AudioLoadError("")
        session = RumbleSession(engine)

        session.submit("clip.wav")
        assert session.error == DEFAULT_ERROR_MESSAGE

    def test_unexpected_errors_propagate(self):
        engine = MagicMock()
        engine.analyze.side_effect = ZeroDivisionError()
        session = RumbleSession(engine)

        with pytest.raises(ZeroDivisionError):
            session.submit("clip.wav")

    def test_reset_clears_state(self, rumble_result):
        engine = MagicMock()
        engine.analyze.return_value = rumble_result
        session = RumbleSession(engine)
        session.submit("clip.wav")

        session.reset()

        assert session.state is AppState.UPLOAD
        assert session.result is None
        assert session.error is None

    def test_submit_twice_without_reset(self, rumble_result):
        engine = MagicMock()
        engine.analyze.return_value = rumble_result
        session = RumbleSession(engine)
        session.submit("clip.wav")

        with pytest.raises(InvalidTransitionError):
            session.submit("clip.wav")

    def test_reset_from_upload_rejected(self):
        with pytest.raises(InvalidTransitionError):
            RumbleSession(MagicMock()).reset()
