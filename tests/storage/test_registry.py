"""Tests for the id-keyed registries."""

import logging

import pytest

from delve.core import TileBehavior, TileDefinition, TileSet
from delve.storage import AreaMapRegistry, TileSetRegistry


def make_tileset(tileset_id: str, name: str = "Test") -> TileSet:
    return TileSet(
        id=tileset_id,
        name=name,
        tile_types=(TileDefinition(char="#", behavior=TileBehavior.WALL),),
    )


class TestRegistry:
    """Tests for register, lookup and removal."""

    def test_register_and_get(self):
        """Registered items are found by id."""
        registry = TileSetRegistry()
        registry.register(make_tileset("a"))

        assert registry.get_by_id("a").id == "a"
        assert registry.get_by_id("missing") is None
        assert registry.has("a")
        assert "a" in registry
        assert len(registry) == 1

    def test_register_all_keeps_order(self):
        """Items are listed in registration order."""
        registry = TileSetRegistry([make_tileset("b"), make_tileset("a")])
        assert registry.get_all_ids() == ["b", "a"]
        assert [t.id for t in registry.get_all()] == ["b", "a"]

    def test_overwrite_warns(self, caplog):
        """Re-registering an id replaces it and logs a warning."""
        registry = TileSetRegistry([make_tileset("a", name="Old")])
        with caplog.at_level(logging.WARNING):
            registry.register(make_tileset("a", name="New"))

        assert registry.get_by_id("a").name == "New"
        assert len(registry) == 1
        assert any("already registered" in r.getMessage() for r in caplog.records)

    def test_unregister(self):
        """Unregistering reports whether anything was removed."""
        registry = TileSetRegistry([make_tileset("a")])
        assert registry.unregister("a")
        assert not registry.unregister("a")
        assert len(registry) == 0

    def test_clear(self):
        """Clear empties the registry."""
        registry = TileSetRegistry([make_tileset("a"), make_tileset("b")])
        registry.clear()
        assert registry.get_all() == []

    def test_get_by_id_is_a_tileset_lookup(self, make_map):
        """A registry's get_by_id can resolve tilesets for open_door."""
        area_map = make_map(
            ["#####", "#.+.#", "#####"],
            objects=[{"id": "door", "type": "closed_door", "x": 2, "y": 1}],
        )
        registry = TileSetRegistry()
        assert area_map.open_door(2, 1, registry.get_by_id) is None

    def test_area_map_registry(self, room):
        """Area maps register by map id."""
        registry = AreaMapRegistry([room])
        assert registry.get_by_id("test-map") is room
