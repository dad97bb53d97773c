"""Interactive objects and spawn data for Delve.

Objects are placed on area map tiles: doors, chests, NPCs, signs and so on.
Only closed doors take part in movement; the rest are carried for callers.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .constants import DEFAULT_OPEN_DOOR_CHAR
from .types import Direction, ObjectId, Position


class InteractiveObjectType(Enum):
    """Kinds of interactive object."""

    CLOSED_DOOR = "closed_door"
    CHEST = "chest"
    NPC = "npc"
    ITEM = "item"
    STAIRS = "stairs"
    SWITCH = "switch"
    SIGN = "sign"


class ObjectState(Enum):
    """Current state of an interactive object."""

    CLOSED = "closed"
    OPEN = "open"
    LOCKED = "locked"
    ACTIVE = "active"
    INACTIVE = "inactive"


class InteractiveObjectData(BaseModel):
    """Type-specific payload. Each object type reads only its own fields."""

    model_config = ConfigDict(frozen=True)

    # Closed door
    key_required: str | None = None
    opens_to: str = DEFAULT_OPEN_DOOR_CHAR

    # Chest
    loot_table: str | None = None
    items: tuple[str, ...] = ()
    gold: int | None = None
    trapped: bool = False

    # NPC
    npc_id: str | None = None
    dialogue_tree: str | None = None
    shop_inventory: tuple[str, ...] = ()
    quest_id: str | None = None

    # Item
    item_id: str | None = None
    quantity: int | None = None

    # Stairs
    destination_area_id: str | None = None
    destination_x: int | None = None
    destination_y: int | None = None
    destination_direction: Direction | None = None

    # Switch
    trigger_id: str | None = None
    toggleable: bool = False

    # Sign
    text: str | None = None


class InteractiveObject(BaseModel):
    """An object placed on the map."""

    model_config = ConfigDict(frozen=True)

    id: ObjectId
    type: InteractiveObjectType
    x: int
    y: int
    state: ObjectState = ObjectState.CLOSED
    sprite_id: str = ""
    data: InteractiveObjectData = Field(default_factory=InteractiveObjectData)

    @property
    def position(self) -> Position:
        return Position(self.x, self.y)

    @property
    def is_closed_door(self) -> bool:
        return self.type == InteractiveObjectType.CLOSED_DOOR

    def with_state(self, state: ObjectState) -> InteractiveObject:
        """Return a new object with a different state."""
        return self.model_copy(update={"state": state})


class SpawnPoint(BaseModel):
    """Where the player or an NPC starts, and which way they face."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    direction: Direction = Direction.NORTH
    id: str | None = None

    @property
    def position(self) -> Position:
        return Position(self.x, self.y)


class EncounterZone(BaseModel):
    """A tile that can start a combat encounter.

    Carried as data; resolving encounters belongs to the combat subsystem.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    x: int
    y: int
    encounter_id: str
    trigger_type: Literal["enter", "interact", "random"] = "enter"
    trigger_chance: float | None = None
    one_time: bool = False
