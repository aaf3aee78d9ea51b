"""Category projection package."""

from .service import (
    NO_COMMENT_LABEL,
    build_groups,
    empty_message,
    resolve_mode,
    to_display_item,
)
from .types import CategoryGroup, DisplayItem, PresentationMode

__all__ = [
    "CategoryGroup",
    "DisplayItem",
    "NO_COMMENT_LABEL",
    "PresentationMode",
    "build_groups",
    "empty_message",
    "resolve_mode",
    "to_display_item",
]
