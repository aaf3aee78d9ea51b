"""Session controller package."""

from .controller import (
    SCREEN_TRANSITIONS,
    FormDraft,
    RatingSession,
    Screen,
    SessionStateError,
    build_session,
)

__all__ = [
    "FormDraft",
    "RatingSession",
    "SCREEN_TRANSITIONS",
    "Screen",
    "SessionStateError",
    "build_session",
]
