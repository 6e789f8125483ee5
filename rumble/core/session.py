"""
Upload session state machine.

upload -> processing -> result | error, and back to upload on reset.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Dict, FrozenSet, Optional

from rumble.core.models import RumbleResult
from rumble.utils.errors import InvalidTransitionError, RumbleError


class AppState(Enum):
    UPLOAD = "upload"
    PROCESSING = "processing"
    RESULT = "result"
    ERROR = "error"


TRANSITIONS: Dict[AppState, FrozenSet[AppState]] = {
    AppState.UPLOAD: frozenset({AppState.PROCESSING}),
    AppState.PROCESSING: frozenset({AppState.RESULT, AppState.ERROR}),
    AppState.RESULT: frozenset({AppState.UPLOAD}),
    AppState.ERROR: frozenset({AppState.UPLOAD}),
}

DEFAULT_ERROR_MESSAGE = (
    "We couldn't analyze your audio file. Please try again with a different file."
)


def can_transition(current: AppState, target: AppState) -> bool:
    return target in TRANSITIONS[current]


def transition(current: AppState, target: AppState) -> AppState:
    """
    Validate a state change.

    Returns:
        AppState: The target state

    Raises:
        InvalidTransitionError: If target is not reachable from current
    """
    if not can_transition(current, target):
        raise InvalidTransitionError(current.value, target.value)
    return target


class RumbleSession:
    """
    One user's pass through the upload flow.

    Analysis failures are recorded on the session (state ERROR plus a
    message) rather than raised, so the caller can render them.
    """

    def __init__(self, engine):
        """
        Args:
            engine: Anything with analyze(file_path, media_type=...)
        """
        self.engine = engine
        self.state = AppState.UPLOAD
        self.result: Optional[RumbleResult] = None
        self.error: Optional[str] = None
        self.logger = logging.getLogger('session')

    def _move(self, target: AppState) -> None:
        self.state = transition(self.state, target)
        self.logger.debug(f"Session state -> {self.state.value}")

    def submit(self, file_path: Path, media_type: Optional[str] = None) -> AppState:
        """
        Analyze an upload and land in RESULT or ERROR.

        Raises:
            InvalidTransitionError: If called outside the UPLOAD state
        """
        self._move(AppState.PROCESSING)
        self.error = None

        try:
            self.result = self.engine.analyze(file_path, media_type=media_type)
        except (RumbleError, OSError) as e:
            self.logger.error(f"Audio analysis failed: {e}")
            self.result = None
            message = e.message if isinstance(e, RumbleError) else str(e)
            self.error = message or DEFAULT_ERROR_MESSAGE
            self._move(AppState.ERROR)
        else:
            self._move(AppState.RESULT)

        return self.state

    def reset(self) -> None:
        """Return to UPLOAD, clearing any result or error."""
        self._move(AppState.UPLOAD)
        self.result = None
        self.error = None
