"""In-memory lookup-by-id stores for loaded data.

Loaded once at startup and read by every session afterwards.
"""

from __future__ import annotations

import logging
from typing import Generic, Iterable, Protocol, TypeVar

from ..core.area_map import AreaMap
from ..core.tiles import TileSet

logger = logging.getLogger(__name__)


class _HasId(Protocol):
    @property
    def id(self) -> str: ...


T = TypeVar("T", bound=_HasId)


class Registry(Generic[T]):
    """A keyed collection of loaded items, preserving registration order."""

    kind = "item"

    def __init__(self, items: Iterable[T] = ()):
        self._items: dict[str, T] = {}
        self.register_all(items)

    def register(self, item: T) -> None:
        """Add an item, replacing any existing item with the same id."""
        if item.id in self._items:
            logger.warning(f"{self.kind} '{item.id}' is already registered. Overwriting.")
        self._items[item.id] = item

    def register_all(self, items: Iterable[T]) -> None:
        for item in items:
            self.register(item)

    def get_by_id(self, item_id: str) -> T | None:
        """Look up an item, or None if unknown."""
        return self._items.get(item_id)

    def get_all(self) -> list[T]:
        return list(self._items.values())

    def get_all_ids(self) -> list[str]:
        return list(self._items.keys())

    def has(self, item_id: str) -> bool:
        return item_id in self._items

    def unregister(self, item_id: str) -> bool:
        """Remove an item. Returns False if it was not registered."""
        return self._items.pop(item_id, None) is not None

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items


class AreaMapRegistry(Registry[AreaMap]):
    """Loaded area maps by map id."""

    kind = "AreaMap"


class TileSetRegistry(Registry[TileSet]):
    """Loaded tilesets by tileset id.

    get_by_id satisfies TileSetLookup, so a registry can be handed straight
    to AreaMap.open_door.
    """

    kind = "TileSet"
