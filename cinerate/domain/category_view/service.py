"""Projection of stored entries into per-category display groups."""

from __future__ import annotations

from typing import Dict, Iterable

from ...config.loader import DEFAULT_SCROLL_THRESHOLD
from ..entrystore.types import MAX_RATING, Category, Entry
from .types import CategoryGroup, DisplayItem, PresentationMode

__all__ = [
    "NO_COMMENT_LABEL",
    "build_groups",
    "empty_message",
    "resolve_mode",
    "to_display_item",
]

NO_COMMENT_LABEL = "No comment"


def resolve_mode(
    count: int, scroll_threshold: int = DEFAULT_SCROLL_THRESHOLD
) -> PresentationMode:
    """Pick the layout for a group holding ``count`` entries.

    Groups at or above ``scroll_threshold`` go into a fixed-height scrolling
    viewport so the card does not overflow.
    """

    if count <= 0:
        return PresentationMode.EMPTY
    if count >= scroll_threshold:
        return PresentationMode.SCROLLABLE
    return PresentationMode.STATIC


def empty_message(category: Category) -> str:
    return f"No {category.value.lower()} rated yet."


def to_display_item(entry: Entry) -> DisplayItem:
    return DisplayItem(
        id=entry.id,
        name=entry.name,
        rating_label=f"{entry.rating} / {MAX_RATING}",
        comment_label=entry.comment or NO_COMMENT_LABEL,
    )


def build_groups(
    entries: Iterable[Entry],
    *,
    scroll_threshold: int = DEFAULT_SCROLL_THRESHOLD,
) -> Dict[Category, CategoryGroup]:
    """Split ``entries`` into one group per category, keeping input order.

    Every category is present in the result, in ``Category`` declaration
    order. The input is only read.
    """

    snapshot = tuple(entries)
    groups: Dict[Category, CategoryGroup] = {}
    for category in Category:
        members = tuple(entry for entry in snapshot if entry.category is category)
        mode = resolve_mode(len(members), scroll_threshold)
        groups[category] = CategoryGroup(
            category=category,
            entries=members,
            mode=mode,
            items=tuple(to_display_item(entry) for entry in members),
            empty_message=(
                empty_message(category) if mode is PresentationMode.EMPTY else None
            ),
        )
    return groups
