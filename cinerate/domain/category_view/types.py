"""Read-side types produced by the category projection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..entrystore.types import Category, Entry


class PresentationMode(str, Enum):
    """How a front-end should lay out one category group."""

    EMPTY = "empty"
    STATIC = "static"
    SCROLLABLE = "scrollable"


@dataclass(frozen=True)
class DisplayItem:
    id: str
    name: str
    rating_label: str
    comment_label: str


@dataclass(frozen=True)
class CategoryGroup:
    """Entries of one category in insertion order plus their layout mode."""

    category: Category
    entries: tuple[Entry, ...]
    mode: PresentationMode
    items: tuple[DisplayItem, ...]
    empty_message: str | None = None

    @property
    def title(self) -> str:
        return self.category.value

    @property
    def count(self) -> int:
        return len(self.entries)

    @property
    def is_scrollable(self) -> bool:
        return self.mode is PresentationMode.SCROLLABLE
