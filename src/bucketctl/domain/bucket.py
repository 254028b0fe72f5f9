"""Bucket aggregate: a bucket owning an ordered collection of items.

Identity is assigned by storage: an entity built in memory has
``id=None`` until a repository persists it. Items are only reachable
through their owning bucket, and their ids are unique per bucket.

``size`` is declared capacity metadata. It is never reconciled against
the number of items; the only invariant is ``size >= 0``.

A bucket remembers which items were added, changed, or removed since it
was loaded, so a repository can write just those rows instead of the
whole item list.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, ClassVar

from bucketctl.domain.errors import InvalidSizeError


@dataclass
class Item:
    """A record owned by exactly one bucket."""

    FIELDS: ClassVar[dict[str, type]] = {"id": int, "name": str, "description": str}

    id: int | None = None
    name: str | None = None
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "description": self.description}


class Bucket:
    """Root aggregate: declared size plus owned items in insertion order."""

    FIELDS: ClassVar[dict[str, type]] = {
        "id": int,
        "name": str,
        "description": str,
        "size": int,
    }

    def __init__(
        self,
        *,
        id: int | None = None,
        name: str | None = None,
        description: str | None = None,
        size: int = 0,
        items: Iterable[Item] | None = None,
    ) -> None:
        self.id = id
        self.name = name
        self.description = description
        self._size = 0
        self.size = size
        self._items: list[Item] = list(items or [])
        # Changes since the last load or save; items passed in are the stored state.
        self._added: list[Item] = []
        self._changed: list[Item] = []
        self._removed: list[Item] = []

    def __repr__(self) -> str:
        return (
            f"Bucket(id={self.id!r}, name={self.name!r}, size={self._size!r}, "
            f"items={len(self._items)})"
        )

    @property
    def size(self) -> int:
        return self._size

    @size.setter
    def size(self, value: int) -> None:
        if value < 0:
            raise InvalidSizeError(value)
        self._size = value

    @property
    def items(self) -> list[Item]:
        """Owned items, in insertion order (a copy)."""
        return list(self._items)

    def add_item(self, item: Item) -> Item:
        """Append *item*. Identity is assigned when the bucket is persisted."""
        self._items.append(item)
        self._added.append(item)
        return item

    def update_item(
        self, item: Item, *, name: str | None = None, description: str | None = None
    ) -> Item:
        """Overwrite the mutable fields of an owned item."""
        item.name = name
        item.description = description
        if not _contains(self._added, item) and not _contains(self._changed, item):
            self._changed.append(item)
        return item

    def remove_item(self, item: Item) -> None:
        self._items = [existing for existing in self._items if existing is not item]
        self._changed = [existing for existing in self._changed if existing is not item]
        if _contains(self._added, item):
            self._added = [existing for existing in self._added if existing is not item]
        elif item.id is not None:
            self._removed.append(item)

    def find_item(self, item_id: int) -> Item | None:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "size": self._size,
            "items": [item.to_dict() for item in self._items],
        }

    @property
    def added_items(self) -> list[Item]:
        """Items appended since the last save, in insertion order."""
        return list(self._added)

    @property
    def changed_items(self) -> list[Item]:
        return list(self._changed)

    @property
    def removed_items(self) -> list[Item]:
        return list(self._removed)

    def mark_saved(self) -> None:
        """Forget pending item changes once storage holds them."""
        self._added.clear()
        self._changed.clear()
        self._removed.clear()


def _contains(items: list[Item], item: Item) -> bool:
    return any(existing is item for existing in items)
