"""EntryStore domain package."""

from .store import EntryStore
from .types import (
    AdmissionResult,
    Alert,
    Category,
    Entry,
    RatingCandidate,
    Rejection,
    RejectionReason,
)

__all__ = [
    "AdmissionResult",
    "Alert",
    "Category",
    "Entry",
    "EntryStore",
    "RatingCandidate",
    "Rejection",
    "RejectionReason",
]
