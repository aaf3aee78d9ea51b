"""Headless controller for the Home/Ratings rating flow.

A front-end (the bundled CLI, or any other view layer) keeps one
:class:`RatingSession` per user session. The session owns the explicitly
constructed :class:`EntryStore`, tracks which screen is visible and holds the
Home form draft between keystrokes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple
from uuid import uuid4

from ..config.loader import Settings
from ..domain.category_view import CategoryGroup, build_groups
from ..domain.entrystore import AdmissionResult, Category, EntryStore, RatingCandidate
from ..domain.entrystore.types import MAX_RATING, MIN_RATING, UNSET_RATING
from ..infra.events import LoggingEventEmitter
from ..infra.logging import get_logger
from ..infra.metrics import InMemoryMetricsClient

__all__ = [
    "FormDraft",
    "RatingSession",
    "Screen",
    "SCREEN_TRANSITIONS",
    "SessionStateError",
    "build_session",
]

logger = get_logger(__name__)


class Screen(str, Enum):
    HOME = "home"
    RATINGS = "ratings"


# action -> (required screen, next screen)
SCREEN_TRANSITIONS: Dict[str, Tuple[Screen, Screen]] = {
    "view_ratings": (Screen.HOME, Screen.RATINGS),
    "go_back": (Screen.RATINGS, Screen.HOME),
}


class SessionStateError(RuntimeError):
    """Raised when an action is invoked from the wrong screen."""

    def __init__(self, action: str, screen: Screen) -> None:
        super().__init__(f"Action '{action}' is not available on the {screen.value} screen")
        self.action = action
        self.screen = screen


@dataclass
class FormDraft:
    """Transient Home form values; cleared after a successful add."""

    name: str = ""
    rating: int = UNSET_RATING
    comment: str = ""
    category: Category = Category.ANIME

    def to_candidate(self) -> RatingCandidate:
        return RatingCandidate(
            name=self.name,
            rating=self.rating,
            comment=self.comment,
            category=self.category,
        )

    def clear(self) -> None:
        self.name = ""
        self.rating = UNSET_RATING
        self.comment = ""


class RatingSession:
    """Drives one user's Home/Ratings flow over a single EntryStore."""

    def __init__(
        self,
        store: EntryStore,
        *,
        scroll_threshold: int | None = None,
        session_id: str | None = None,
    ) -> None:
        self._store = store
        self.session_id = session_id or uuid4().hex
        self._scroll_threshold = scroll_threshold
        self._screen = Screen.HOME
        self.draft = FormDraft()

    @property
    def store(self) -> EntryStore:
        return self._store

    @property
    def screen(self) -> Screen:
        return self._screen

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def view_ratings(self) -> Screen:
        return self._transition("view_ratings")

    def go_back(self) -> Screen:
        return self._transition("go_back")

    def _transition(self, action: str) -> Screen:
        required, target = SCREEN_TRANSITIONS[action]
        if self._screen is not required:
            raise SessionStateError(action, self._screen)
        self._screen = target
        logger.debug("session_screen_changed", extra={"screen": target.value})
        return target

    # ------------------------------------------------------------------
    # Home form
    # ------------------------------------------------------------------
    def select_category(self, category: Category | str) -> None:
        self.draft.category = Category(category)

    def set_name(self, text: str) -> None:
        self.draft.name = text

    def set_rating(self, rating: int) -> None:
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValueError(f"rating must be between {MIN_RATING} and {MAX_RATING}")
        self.draft.rating = rating

    def set_comment(self, text: str) -> bool:
        """Apply a comment edit unless it would exceed the length limit."""

        if len(text) > self._store.comment_max_length:
            return False
        self.draft.comment = text
        return True

    @property
    def name_placeholder(self) -> str:
        return f"Enter {self.draft.category.value} name..."

    @property
    def char_count_label(self) -> str:
        return f"{len(self.draft.comment)}/{self._store.comment_max_length}"

    @property
    def add_button_label(self) -> str:
        return f"+ Add {self.draft.category.value}"

    def submit(self) -> AdmissionResult:
        if self._screen is not Screen.HOME:
            raise SessionStateError("submit", self._screen)
        result = self._store.try_add(self.draft.to_candidate())
        if result.accepted:
            self.draft.clear()
        return result

    # ------------------------------------------------------------------
    # Ratings screen
    # ------------------------------------------------------------------
    def groups(self) -> Dict[Category, CategoryGroup]:
        if self._screen is not Screen.RATINGS:
            raise SessionStateError("groups", self._screen)
        if self._scroll_threshold is None:
            return build_groups(self._store.entries)
        return build_groups(
            self._store.entries, scroll_threshold=self._scroll_threshold
        )


def build_session(settings: Settings) -> RatingSession:
    """Construct a fresh session with its own store, metrics and emitter."""

    session_id = uuid4().hex
    store = EntryStore(
        comment_max_length=settings.rules.comment_max_length,
        event_emitter=LoggingEventEmitter(session_id=session_id),
        metrics=InMemoryMetricsClient(session_id=session_id),
    )
    return RatingSession(
        store,
        scroll_threshold=settings.presentation.scroll_threshold,
        session_id=session_id,
    )
