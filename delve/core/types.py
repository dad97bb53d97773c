"""Foundational types for Delve.

This module defines the core types used throughout the system:
- Position: Grid coordinates (x, y)
- Direction: Cardinal directions with offsets
- Rect: Rectangular regions (top-left corner plus size)
- Type aliases for domain identifiers
"""

from __future__ import annotations

from enum import Enum
from typing import NewType, NamedTuple

# Type aliases for domain identifiers
MapId = NewType("MapId", str)
TileSetId = NewType("TileSetId", str)
ObjectId = NewType("ObjectId", str)
EventId = NewType("EventId", str)
EventAreaId = NewType("EventAreaId", str)


class Direction(Enum):
    """Cardinal directions for movement and facing."""

    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

    @property
    def offset(self) -> tuple[int, int]:
        """Get the (dx, dy) offset for this direction.

        Maps are row-major: x increases east, y increases south.
        """
        return _DIRECTION_OFFSETS[self]

    @property
    def opposite(self) -> Direction:
        """Get the opposite direction."""
        return _DIRECTION_OPPOSITES[self]

    def rotate_left(self) -> Direction:
        """Turn 90 degrees counter-clockwise."""
        return _ROTATE_LEFT[self]

    def rotate_right(self) -> Direction:
        """Turn 90 degrees clockwise."""
        return _ROTATE_RIGHT[self]


# Lookup tables for Direction properties
_DIRECTION_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (0, -1),
    Direction.SOUTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.WEST: (-1, 0),
}

_DIRECTION_OPPOSITES: dict[Direction, Direction] = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}

_ROTATE_LEFT: dict[Direction, Direction] = {
    Direction.NORTH: Direction.WEST,
    Direction.WEST: Direction.SOUTH,
    Direction.SOUTH: Direction.EAST,
    Direction.EAST: Direction.NORTH,
}

_ROTATE_RIGHT: dict[Direction, Direction] = {
    Direction.NORTH: Direction.EAST,
    Direction.EAST: Direction.SOUTH,
    Direction.SOUTH: Direction.WEST,
    Direction.WEST: Direction.NORTH,
}


class Position(NamedTuple):
    """A position in an area map.

    Coordinates follow the grid's row-major layout:
    - x increases to the east (right)
    - y increases to the south (down)
    - (0, 0) is the northwest corner of the map
    """

    x: int
    y: int

    def __add__(self, other: object) -> Position:
        """Add a direction offset or tuple to this position."""
        if isinstance(other, Direction):
            dx, dy = other.offset
            return Position(self.x + dx, self.y + dy)
        if isinstance(other, tuple) and len(other) == 2:
            return Position(self.x + other[0], self.y + other[1])
        return NotImplemented

    def in_bounds(self, width: int, height: int) -> bool:
        """Check if position is within grid bounds (0 to width-1, 0 to height-1)."""
        return 0 <= self.x < width and 0 <= self.y < height


class Rect(NamedTuple):
    """A rectangular region anchored at its top-left corner.

    Containment is half-open: a rect at (1, 1) with width 3 covers x = 1..3.
    """

    x: int
    y: int
    width: int
    height: int

    def contains(self, pos: Position) -> bool:
        """Check if a position is within this rectangle."""
        return (
            self.x <= pos.x < self.x + self.width
            and self.y <= pos.y < self.y + self.height
        )

    def positions(self) -> list[Position]:
        """Get all positions within this rectangle, row by row."""
        return [
            Position(x, y)
            for y in range(self.y, self.y + self.height)
            for x in range(self.x, self.x + self.width)
        ]

    def fits_within(self, width: int, height: int) -> bool:
        """Check if the whole rectangle lies inside a width x height grid."""
        return (
            self.x >= 0
            and self.y >= 0
            and self.x + self.width <= width
            and self.y + self.height <= height
        )
