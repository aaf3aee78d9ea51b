"""Entry lifecycle events published by an EntryStore."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Protocol

from .logging import get_logger

logger = get_logger(__name__)

ENTRY_CREATED = "entry.created"
ENTRY_REJECTED = "entry.rejected"


class EventEmitter(Protocol):  # pragma: no cover - interface only
    def emit(self, topic: str, payload: Dict[str, Any]) -> None: ...


@dataclass
class LoggingEventEmitter:
    """Writes each entry event to the log, tagged with its session."""

    session_id: str | None = None

    def emit(self, topic: str, payload: Dict[str, Any]) -> None:
        logger.debug(
            "entry_event",
            extra={
                "topic": topic,
                "session_id": self.session_id,
                "payload": payload,
            },
        )
