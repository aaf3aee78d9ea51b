"""Admission counters and per-category gauges, one sink per session."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Protocol

from .logging import get_logger

logger = get_logger(__name__)

ENTRIES_CREATED = "entries_created_total"


def rejected_metric(reason: str) -> str:
    return f"entries_rejected_{reason}_total"


def category_gauge(category: str) -> str:
    return f"entries_{category.lower()}_total"


class MetricsClient(Protocol):  # pragma: no cover - interface only
    """What an :class:`EntryStore` reports into."""

    def increment(self, metric: str, value: int = 1) -> None: ...

    def gauge(self, metric: str, value: int) -> None: ...


@dataclass
class InMemoryMetricsClient:
    """Counters and gauges owned by a single session's store.

    Nothing is shared between instances; each store built without an explicit
    client gets its own.
    """

    session_id: str | None = None
    counters: Dict[str, int] = field(default_factory=dict)
    gauges: Dict[str, int] = field(default_factory=dict)

    def increment(self, metric: str, value: int = 1) -> None:
        self.counters[metric] = self.counters.get(metric, 0) + value
        logger.debug(
            "metrics_increment",
            extra={"metric": metric, "value": value, "session_id": self.session_id},
        )

    def gauge(self, metric: str, value: int) -> None:
        self.gauges[metric] = value
        logger.debug(
            "metrics_gauge",
            extra={"metric": metric, "value": value, "session_id": self.session_id},
        )

    def snapshot(self) -> Dict[str, Dict[str, int]]:
        return {"counters": dict(self.counters), "gauges": dict(self.gauges)}
