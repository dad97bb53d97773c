"""Shared test fixtures for Delve."""

import tempfile
from pathlib import Path
from typing import Any, Callable

import pytest

from delve.core import (
    AreaMap,
    GameState,
    TileBehavior,
    TileDefinition,
    TileSet,
)
from delve.storage import AreaMapLoader, TileSetRegistry, parse_area_map


@pytest.fixture
def temp_data_dir() -> Path:
    """Create a temporary data directory for tests."""
    with tempfile.TemporaryDirectory(prefix="delve_test_") as tmpdir:
        yield Path(tmpdir)


# =============================================================================
# Tilesets
# =============================================================================

@pytest.fixture
def dungeon_tileset() -> TileSet:
    """Walls, floor, an open door and a closed door tile."""
    return TileSet(
        id="dungeon",
        name="Dungeon",
        tile_types=(
            TileDefinition(char="#", behavior=TileBehavior.WALL),
            TileDefinition(char=".", behavior=TileBehavior.FLOOR, walkable=True, passable=True),
            TileDefinition(char="D", behavior=TileBehavior.DOOR, passable=True),
            TileDefinition(char="+", behavior=TileBehavior.WALL),
            TileDefinition(char=" ", behavior=TileBehavior.WALL),
        ),
    )


@pytest.fixture
def tileset_registry(dungeon_tileset: TileSet) -> TileSetRegistry:
    """A registry holding the dungeon tileset."""
    return TileSetRegistry([dungeon_tileset])


# =============================================================================
# Maps
# =============================================================================

@pytest.fixture
def make_map(dungeon_tileset: TileSet) -> Callable[..., AreaMap]:
    """Build an AreaMap from an ASCII grid.

    Usage:
        area_map = make_map(["#####", "#...#", "#####"], spawn=(1, 1))
    """

    def _make(
        rows: list[str],
        spawn: tuple[int, int] = (1, 1),
        map_id: str = "test-map",
        objects: list[dict[str, Any]] | None = None,
        event_areas: list[dict[str, Any]] | None = None,
    ) -> AreaMap:
        return parse_area_map(
            {
                "id": map_id,
                "name": "Test Map",
                "tileset_id": dungeon_tileset.id,
                "grid": "\n".join(rows),
                "player_spawn": {"x": spawn[0], "y": spawn[1]},
                "interactive_objects": objects or [],
                "event_areas": event_areas or [],
            },
            dungeon_tileset,
        )

    return _make


@pytest.fixture
def room(make_map) -> AreaMap:
    """A 5x5 room with a 3x3 floor."""
    return make_map(
        [
            "#####",
            "#...#",
            "#...#",
            "#...#",
            "#####",
        ]
    )


@pytest.fixture
def state() -> GameState:
    """An empty game state."""
    return GameState()


@pytest.fixture
def bundled_loader() -> AreaMapLoader:
    """A loader with the bundled demo data loaded."""
    loader = AreaMapLoader()
    loader.load_bundled().raise_for_errors()
    return loader


@pytest.fixture
def demo_map(bundled_loader: AreaMapLoader) -> AreaMap:
    """The bundled event demo map."""
    return bundled_loader.area_maps.get_by_id("event-demo-map")
