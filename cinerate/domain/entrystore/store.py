"""In-memory EntryStore: validated, append-only admission of ratings."""

from __future__ import annotations

from typing import Callable, Dict, Iterator, Tuple
from uuid import uuid4

from ...config.loader import DEFAULT_COMMENT_MAX_LENGTH
from ...infra.events import (
    ENTRY_CREATED,
    ENTRY_REJECTED,
    EventEmitter,
    LoggingEventEmitter,
)
from ...infra.logging import get_logger
from ...infra.metrics import (
    ENTRIES_CREATED,
    InMemoryMetricsClient,
    MetricsClient,
    category_gauge,
    rejected_metric,
)
from .types import (
    UNSET_RATING,
    AdmissionResult,
    Category,
    Entry,
    RatingCandidate,
    Rejection,
    RejectionReason,
    normalize_name,
    utcnow,
)

__all__ = ["EntryStore"]

logger = get_logger(__name__)


def _new_entry_id() -> str:
    return uuid4().hex


class EntryStore:
    """Sole owner and mutator of a session's rating entries."""

    def __init__(
        self,
        *,
        comment_max_length: int = DEFAULT_COMMENT_MAX_LENGTH,
        id_factory: Callable[[], str] | None = None,
        event_emitter: EventEmitter | None = None,
        metrics: MetricsClient | None = None,
    ) -> None:
        self._comment_max_length = comment_max_length
        self._id_factory = id_factory or _new_entry_id
        self._event_emitter = event_emitter or LoggingEventEmitter()
        self._metrics = metrics or InMemoryMetricsClient()
        self._entries: list[Entry] = []
        self._name_index: Dict[Tuple[Category, str], str] = {}
        self._issued_ids: set[str] = set()

    @property
    def comment_max_length(self) -> int:
        return self._comment_max_length

    @property
    def metrics(self) -> MetricsClient:
        return self._metrics

    @property
    def entries(self) -> Tuple[Entry, ...]:
        """Insertion-ordered snapshot of every stored entry."""

        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def count_by_category(self) -> Dict[Category, int]:
        counts = {category: 0 for category in Category}
        for entry in self._entries:
            counts[entry.category] += 1
        return counts

    def try_add(self, candidate: RatingCandidate) -> AdmissionResult:
        """Validate ``candidate`` and append it as a new :class:`Entry`.

        Checks run in a fixed order and the first failure wins: incomplete
        input, then a same-category duplicate name, then comment length. A
        rejection leaves the store untouched.
        """

        name = candidate.name.strip()
        if not name or candidate.rating == UNSET_RATING:
            logger.debug(
                "entry_incomplete",
                extra={"category": candidate.category.value},
            )
            return AdmissionResult.rejected_with(
                Rejection(reason=RejectionReason.INCOMPLETE)
            )

        key = (candidate.category, normalize_name(name))
        existing_id = self._name_index.get(key)
        if existing_id is not None:
            return self._reject(
                Rejection(
                    reason=RejectionReason.DUPLICATE,
                    category=candidate.category,
                ),
                existing_entry_id=existing_id,
            )

        if len(candidate.comment) > self._comment_max_length:
            return self._reject(
                Rejection(
                    reason=RejectionReason.COMMENT_TOO_LONG,
                    category=candidate.category,
                    comment_max_length=self._comment_max_length,
                ),
                comment_length=len(candidate.comment),
            )

        entry = Entry(
            id=self._issue_id(),
            name=name,
            rating=candidate.rating,
            comment=candidate.comment,
            category=candidate.category,
            created_at=utcnow(),
        )
        self._entries.append(entry)
        self._name_index[key] = entry.id
        logger.info(
            "entry_created",
            extra={
                "entry_id": entry.id,
                "category": entry.category.value,
                "rating": entry.rating,
                "comment_length": len(entry.comment),
            },
        )
        self._emit(
            ENTRY_CREATED,
            {
                "entry_id": entry.id,
                "category": entry.category.value,
                "rating": entry.rating,
                "occurred_at": entry.created_at.isoformat(),
            },
        )
        self._safe_metrics_increment(ENTRIES_CREATED)
        self._safe_metrics_gauge(
            category_gauge(entry.category.value),
            self.count_by_category()[entry.category],
        )
        return AdmissionResult.accepted_with(entry)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _issue_id(self) -> str:
        entry_id = self._id_factory()
        if entry_id in self._issued_ids:
            raise RuntimeError(f"Entry id '{entry_id}' was already issued")
        self._issued_ids.add(entry_id)
        return entry_id

    def _reject(self, rejection: Rejection, **details: object) -> AdmissionResult:
        category = rejection.category.value if rejection.category else None
        logger.info(
            "entry_rejected",
            extra={"reason": rejection.reason.value, "category": category, **details},
        )
        self._emit(
            ENTRY_REJECTED,
            {
                "reason": rejection.reason.value,
                "category": category,
                "occurred_at": utcnow().isoformat(),
            },
        )
        self._safe_metrics_increment(rejected_metric(rejection.reason.value))
        return AdmissionResult.rejected_with(rejection)

    def _emit(self, topic: str, payload: Dict[str, object]) -> None:
        try:
            self._event_emitter.emit(topic, payload)
        except Exception:  # pragma: no cover - defensive
            logger.exception("entry_event_emit_failed", extra={"topic": topic})

    def _safe_metrics_increment(self, metric: str, value: int = 1) -> None:
        try:
            self._metrics.increment(metric, value)
        except Exception:  # pragma: no cover - defensive
            logger.exception(
                "metrics_increment_failed",
                extra={"metric": metric, "value": value},
            )

    def _safe_metrics_gauge(self, metric: str, value: int) -> None:
        try:
            self._metrics.gauge(metric, value)
        except Exception:  # pragma: no cover - defensive
            logger.exception(
                "metrics_gauge_failed",
                extra={"metric": metric, "value": value},
            )
