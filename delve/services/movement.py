"""Movement validation for Delve.

Resolves a single directional move attempt against an AreaMap. A move onto
an open door tile carries through the door to the tile beyond it; the door
itself is never a resting position. Nothing is committed unless the whole
move, door and landing tile alike, validates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ..core.area_map import AreaMap
from ..core.objects import InteractiveObject, InteractiveObjectType
from ..core.types import Direction, Position
from ..logging_config import log_movement

logger = logging.getLogger(__name__)


class RejectionReason(Enum):
    """Why a move was refused."""

    OUT_OF_BOUNDS = "out_of_bounds"
    DOOR_CLOSED = "door_closed"
    NOT_PASSABLE = "not_passable"
    BLOCKED_AFTER_DOOR = "blocked_after_door"
    NOT_WALKABLE = "not_walkable"


@dataclass(frozen=True)
class MoveAccepted:
    """The move is legal; the player ends at (final_x, final_y).

    Attributes:
        final_x: Landing column
        final_y: Landing row
        passed_through_door: Whether the move crossed a door tile
        door_position: The crossed door tile, if any
    """

    final_x: int
    final_y: int
    passed_through_door: bool = False
    door_position: Position | None = None

    @property
    def accepted(self) -> bool:
        return True

    @property
    def final_position(self) -> Position:
        return Position(self.final_x, self.final_y)


@dataclass(frozen=True)
class MoveRejected:
    """The move is refused and nothing changes.

    Attributes:
        reason: Machine-readable cause
        message: Human-readable hint for the UI
        interactive_object: The closed door in the way, for DOOR_CLOSED
    """

    reason: RejectionReason
    message: str
    interactive_object: InteractiveObject | None = None

    @property
    def accepted(self) -> bool:
        return False


MovementResult = MoveAccepted | MoveRejected


class MovementValidator:
    """Validates player movement on an AreaMap.

    Stateless; validating the same move twice gives the same result.
    """

    @staticmethod
    def validate(
        area_map: AreaMap,
        x: int,
        y: int,
        direction: Direction,
    ) -> MovementResult:
        """Validate a one-step move from (x, y) in a direction.

        Args:
            area_map: Map to move on
            x: Current column
            y: Current row
            direction: Direction of travel

        Returns:
            MoveAccepted with the landing tile, or MoveRejected
        """
        result = MovementValidator._resolve(area_map, x, y, direction)
        details = (
            f"-> ({result.final_x}, {result.final_y})"
            if isinstance(result, MoveAccepted)
            else result.reason.value
        )
        log_movement(logger, area_map.id, (x, y), direction.value, result.accepted, details)
        return result

    @staticmethod
    def _resolve(
        area_map: AreaMap,
        x: int,
        y: int,
        direction: Direction,
    ) -> MovementResult:
        """Decide one step without logging.

        A passable target that is neither a door nor walkable is rejected as
        NOT_WALKABLE rather than accepted: a move never ends on a tile the
        player cannot stand on.
        """
        dx, dy = direction.offset
        target_x, target_y = x + dx, y + dy

        if not area_map.is_in_bounds(target_x, target_y):
            return MoveRejected(RejectionReason.OUT_OF_BOUNDS, "Out of bounds.")

        if not area_map.is_passable(target_x, target_y):
            obj = area_map.get_interactive_object_at(target_x, target_y)
            if obj is not None and obj.type == InteractiveObjectType.CLOSED_DOOR:
                return MoveRejected(
                    RejectionReason.DOOR_CLOSED,
                    "The door is closed.",
                    interactive_object=obj,
                )
            return MoveRejected(RejectionReason.NOT_PASSABLE, "The way is blocked.")

        if area_map.is_door_tile(target_x, target_y):
            landing_x, landing_y = target_x + dx, target_y + dy
            if not area_map.is_walkable(landing_x, landing_y):
                return MoveRejected(
                    RejectionReason.BLOCKED_AFTER_DOOR,
                    "Something blocks the way beyond the door.",
                )
            return MoveAccepted(
                final_x=landing_x,
                final_y=landing_y,
                passed_through_door=True,
                door_position=Position(target_x, target_y),
            )

        if not area_map.is_walkable(target_x, target_y):
            return MoveRejected(RejectionReason.NOT_WALKABLE, "You cannot stop there.")

        return MoveAccepted(final_x=target_x, final_y=target_y)


def validate_movement(
    area_map: AreaMap,
    x: int,
    y: int,
    direction: Direction,
) -> MovementResult:
    """Validate a one-step move. See MovementValidator.validate."""
    return MovementValidator.validate(area_map, x, y, direction)
