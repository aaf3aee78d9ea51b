"""Logger helpers shared across CineRate components."""

from __future__ import annotations

import logging
import os
from typing import Any, Mapping

__all__ = ["configure_logging", "get_logger", "StructuredFormatter"]

ROOT_LOGGER_NAME = "cinerate"
LOG_LEVEL_ENV = "CINERATE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    """Appends ``extra`` fields as ``key=value`` pairs after the message."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        if not extras:
            return base
        rendered = " ".join(f"{key}={value!r}" for key, value in sorted(extras.items()))
        return f"{base} {rendered}"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger parented under the ``cinerate`` namespace."""

    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    config: Mapping[str, Any] | None = None,
    *,
    level: str | None = None,
) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    ``config`` is the ``logging`` section of the loaded settings. An explicit
    ``level`` wins, then ``CINERATE_LOG_LEVEL``, then the profile value.
    """

    config = config or {}
    level_name = str(
        level or os.getenv(LOG_LEVEL_ENV) or config.get("level") or DEFAULT_LOG_LEVEL
    ).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level '{level_name}'")

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(numeric_level)
    for handler in list(root.handlers):
        if getattr(handler, "_cinerate_handler", False):
            root.removeHandler(handler)
    handler = logging.StreamHandler()
    handler._cinerate_handler = True  # type: ignore[attr-defined]
    handler.setFormatter(
        StructuredFormatter(str(config.get("format") or DEFAULT_LOG_FORMAT))
    )
    root.addHandler(handler)
    return root
