"""Shared EntryStore domain types."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "AdmissionResult",
    "Alert",
    "Category",
    "Entry",
    "MAX_RATING",
    "MIN_RATING",
    "RatingCandidate",
    "Rejection",
    "RejectionReason",
    "UNSET_RATING",
    "normalize_name",
    "utcnow",
]

UNSET_RATING = 0
MIN_RATING = 1
MAX_RATING = 10


class Category(str, Enum):
    """Closed set of rating categories, in display order."""

    ANIME = "Anime"
    MOVIE = "Movie"
    SHOW = "Show"


class RejectionReason(str, Enum):
    INCOMPLETE = "incomplete"
    DUPLICATE = "duplicate"
    COMMENT_TOO_LONG = "comment_too_long"


class RatingCandidate(BaseModel):
    """Raw field values collected by a front-end for one "add" action.

    ``rating`` of 0 means the user has not picked a rating yet.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    rating: int = Field(default=UNSET_RATING, ge=UNSET_RATING, le=MAX_RATING)
    comment: str = ""
    category: Category


@dataclass(frozen=True)
class Entry:
    """A validated rating stored in an :class:`EntryStore`."""

    id: str
    name: str
    rating: int
    comment: str
    category: Category
    created_at: datetime


@dataclass(frozen=True)
class Alert:
    """Blocking message a front-end should show the user."""

    title: str
    message: str


@dataclass(frozen=True)
class Rejection:
    """Why a candidate was refused; the store is left unchanged."""

    reason: RejectionReason
    category: Category | None = None
    comment_max_length: int | None = None

    @property
    def alert(self) -> Alert | None:
        if self.reason is RejectionReason.DUPLICATE and self.category is not None:
            return Alert(
                title="Duplicate Entry",
                message=f"This {self.category.value.lower()} has already been rated.",
            )
        if self.reason is RejectionReason.COMMENT_TOO_LONG:
            return Alert(
                title="Too Long",
                message=(
                    f"Comment must be {self.comment_max_length} characters or less."
                ),
            )
        return None


@dataclass(frozen=True)
class AdmissionResult:
    """Outcome of :meth:`EntryStore.try_add`: an entry or a rejection."""

    entry: Entry | None = None
    rejection: Rejection | None = None

    def __post_init__(self) -> None:
        if (self.entry is None) == (self.rejection is None):
            raise ValueError("AdmissionResult needs exactly one of entry or rejection")

    @classmethod
    def accepted_with(cls, entry: Entry) -> "AdmissionResult":
        return cls(entry=entry)

    @classmethod
    def rejected_with(cls, rejection: Rejection) -> "AdmissionResult":
        return cls(rejection=rejection)

    @property
    def accepted(self) -> bool:
        return self.entry is not None

    @property
    def reason(self) -> RejectionReason | None:
        return self.rejection.reason if self.rejection else None

    @property
    def alert(self) -> Alert | None:
        return self.rejection.alert if self.rejection else None


def normalize_name(name: str) -> str:
    """Key used for duplicate detection within a category."""

    return name.strip().lower()


def utcnow() -> datetime:
    """Return timezone-aware UTC timestamp."""

    return datetime.now(timezone.utc)
