"""Tile types for Delve.

A tile is one grid cell's static terrain descriptor. Tilesets map ASCII
characters to tile definitions so area maps can be authored as text.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .types import TileSetId


class TileBehavior(Enum):
    """How a tile responds to movement."""

    FLOOR = "floor"  # Can stop here
    WALL = "wall"  # Blocks movement completely
    DOOR = "door"  # Can pass through, never stop on


class Tile(BaseModel):
    """A single cell of an area map.

    walkable: a move may end on this tile.
    passable: a move may cross this tile on the way somewhere else.
    Every walkable tile is passable; door tiles are passable but not walkable.
    """

    model_config = ConfigDict(frozen=True)

    behavior: TileBehavior
    walkable: bool
    passable: bool
    sprite_id: str = ""  # Owned by rendering
    terrain_type: str | None = None

    @model_validator(mode="after")
    def _walkable_implies_passable(self) -> Tile:
        if self.walkable and not self.passable:
            raise ValueError("a walkable tile must also be passable")
        return self

    @classmethod
    def floor(cls, sprite_id: str = "floor") -> Tile:
        """Create a plain floor tile."""
        return cls(behavior=TileBehavior.FLOOR, walkable=True, passable=True, sprite_id=sprite_id)

    @classmethod
    def wall(cls, sprite_id: str = "wall") -> Tile:
        """Create a plain wall tile."""
        return cls(behavior=TileBehavior.WALL, walkable=False, passable=False, sprite_id=sprite_id)

    @classmethod
    def door(cls, sprite_id: str = "door") -> Tile:
        """Create an open door tile (pass-through only)."""
        return cls(behavior=TileBehavior.DOOR, walkable=False, passable=True, sprite_id=sprite_id)


class TileDefinition(BaseModel):
    """Maps a single ASCII character to a tile configuration."""

    model_config = ConfigDict(frozen=True)

    char: str = Field(min_length=1, max_length=1)
    behavior: TileBehavior
    walkable: bool = False
    passable: bool = False
    sprite_id: str = ""
    terrain_type: str | None = None
    name: str | None = None
    description: str | None = None

    def to_tile(self) -> Tile:
        """Build the tile this definition describes."""
        return Tile(
            behavior=self.behavior,
            walkable=self.walkable,
            passable=self.passable,
            sprite_id=self.sprite_id,
            terrain_type=self.terrain_type,
        )


class TileSet(BaseModel):
    """A reusable collection of tile definitions shared by many maps."""

    model_config = ConfigDict(frozen=True)

    id: TileSetId
    name: str
    description: str | None = None
    tile_types: tuple[TileDefinition, ...]
    sprite_sheet: str | None = None
    tags: tuple[str, ...] = ()

    @field_validator("tile_types")
    @classmethod
    def _unique_chars(cls, value: tuple[TileDefinition, ...]) -> tuple[TileDefinition, ...]:
        seen: set[str] = set()
        for definition in value:
            if definition.char in seen:
                raise ValueError(f"duplicate tile character '{definition.char}'")
            seen.add(definition.char)
        return value

    @property
    def chars(self) -> list[str]:
        """All characters this tileset defines, in declaration order."""
        return [d.char for d in self.tile_types]

    def get_definition(self, char: str) -> TileDefinition | None:
        """Find the definition for a character, or None if undefined."""
        for definition in self.tile_types:
            if definition.char == char:
                return definition
        return None


# Injected wherever a map needs to resolve tile definitions by tileset id
TileSetLookup = Callable[[str], TileSet | None]
