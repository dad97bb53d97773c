"""Area maps for Delve.

An AreaMap is an immutable snapshot of one explorable map: a row-major tile
grid, the interactive objects placed on it, spawn points and event areas.
Every operation that changes the map returns a new AreaMap; the receiver is
never modified, so one loaded map can be shared by any number of sessions.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .events import EventArea
from .objects import (
    EncounterZone,
    InteractiveObject,
    InteractiveObjectType,
    ObjectState,
    SpawnPoint,
)
from .tiles import Tile, TileBehavior, TileSetLookup
from .types import MapId, ObjectId, Position, TileSetId

logger = logging.getLogger(__name__)


class AreaMap(BaseModel):
    """A navigable map for first-person exploration.

    grid[y][x] is the tile at column x, row y.
    """

    model_config = ConfigDict(frozen=True)

    id: MapId
    name: str = ""
    description: str = ""
    width: int = Field(ge=1)
    height: int = Field(ge=1)
    grid: tuple[tuple[Tile, ...], ...]
    tileset_id: TileSetId
    player_spawn: SpawnPoint
    interactive_objects: dict[ObjectId, InteractiveObject] = Field(default_factory=dict)
    npc_spawns: tuple[SpawnPoint, ...] = ()
    encounter_zones: tuple[EncounterZone, ...] = ()
    event_areas: tuple[EventArea, ...] = ()

    @model_validator(mode="after")
    def _grid_matches_dimensions(self) -> AreaMap:
        if len(self.grid) != self.height:
            raise ValueError(f"grid has {len(self.grid)} rows, expected {self.height}")
        for y, row in enumerate(self.grid):
            if len(row) != self.width:
                raise ValueError(f"grid row {y} has {len(row)} tiles, expected {self.width}")
        return self

    # -------------------------------------------------------------------------
    # Tile queries
    # -------------------------------------------------------------------------

    def is_in_bounds(self, x: int, y: int) -> bool:
        """Check if a position is within the map bounds."""
        return Position(x, y).in_bounds(self.width, self.height)

    def get_tile(self, x: int, y: int) -> Tile | None:
        """Get the tile at a position, or None if out of bounds."""
        if not self.is_in_bounds(x, y):
            return None
        return self.grid[y][x]

    def is_walkable(self, x: int, y: int) -> bool:
        """Check if a move may end on this tile."""
        tile = self.get_tile(x, y)
        return tile is not None and tile.walkable

    def is_passable(self, x: int, y: int) -> bool:
        """Check if a move may cross this tile."""
        tile = self.get_tile(x, y)
        return tile is not None and tile.passable

    def is_door_tile(self, x: int, y: int) -> bool:
        """Check if this is a pass-through door tile."""
        tile = self.get_tile(x, y)
        return tile is not None and tile.behavior == TileBehavior.DOOR

    # -------------------------------------------------------------------------
    # Object queries
    # -------------------------------------------------------------------------

    def get_object(self, object_id: str) -> InteractiveObject | None:
        """Get an interactive object by id."""
        return self.interactive_objects.get(ObjectId(object_id))

    def get_interactive_object_at(self, x: int, y: int) -> InteractiveObject | None:
        """Get the interactive object at a position.

        Maps are expected to hold at most one object per tile. If data places
        several, the first declared wins.
        """
        for obj in self.interactive_objects.values():
            if obj.x == x and obj.y == y:
                return obj
        return None

    def event_areas_at(self, x: int, y: int) -> list[EventArea]:
        """All event areas containing a position, in declared order."""
        return [area for area in self.event_areas if area.contains(x, y)]

    # -------------------------------------------------------------------------
    # Copy-on-write updates
    # -------------------------------------------------------------------------

    def with_tile(self, x: int, y: int, tile: Tile) -> AreaMap | None:
        """Return a new map with one tile replaced, or None if out of bounds."""
        if not self.is_in_bounds(x, y):
            return None
        row = self.grid[y]
        new_row = row[:x] + (tile,) + row[x + 1:]
        new_grid = self.grid[:y] + (new_row,) + self.grid[y + 1:]
        return self.model_copy(update={"grid": new_grid})

    def update_object_state(self, object_id: str, new_state: ObjectState) -> AreaMap | None:
        """Return a new map with one object's state replaced.

        Returns None if no object has that id.
        """
        obj = self.get_object(object_id)
        if obj is None:
            return None
        new_objects = dict(self.interactive_objects)
        new_objects[obj.id] = obj.with_state(new_state)
        return self.model_copy(update={"interactive_objects": new_objects})

    def open_door(self, x: int, y: int, tilesets: TileSetLookup) -> AreaMap | None:
        """Open the closed door at a position.

        Replaces the tile with the tileset's "opens to" definition and marks
        the door object open. Returns None, leaving this map untouched, if
        there is no closed door here, it is locked, or the open tile cannot
        be resolved.

        Args:
            x: Door column
            y: Door row
            tilesets: Resolves a tileset id to its TileSet
        """
        obj = self.get_interactive_object_at(x, y)
        if obj is None or obj.type != InteractiveObjectType.CLOSED_DOOR:
            return None
        if obj.state == ObjectState.LOCKED:
            return None

        tileset = tilesets(self.tileset_id)
        if tileset is None:
            logger.warning(f"Tileset '{self.tileset_id}' not found opening door {obj.id} on {self.id}")
            return None

        open_char = obj.data.opens_to
        definition = tileset.get_definition(open_char)
        if definition is None:
            logger.warning(
                f"Open door tile '{open_char}' not found in tileset '{self.tileset_id}'"
            )
            return None

        with_tile = self.with_tile(x, y, definition.to_tile())
        if with_tile is None:
            return None
        return with_tile.update_object_state(obj.id, ObjectState.OPEN)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-compatible data."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AreaMap:
        """Rebuild a map from to_dict() output."""
        return cls.model_validate(data)


# Resolves a map id to its AreaMap, for callers that follow teleports
AreaMapLookup = Callable[[str], AreaMap | None]
