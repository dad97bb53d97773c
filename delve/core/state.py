"""Session game state for Delve.

GameState is created once per play session and threaded through every
movement. It is never mutated: each helper returns a new state.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field

from .objects import ObjectState
from .types import Direction, EventId, MapId, ObjectId, Position

# Values a global variable may hold
GlobalValue = bool | int | float | str


class Message(BaseModel):
    """A line in the player's message log."""

    model_config = ConfigDict(frozen=True)

    text: str


class EncounterRequest(BaseModel):
    """A combat encounter an event asked the caller to start."""

    model_config = ConfigDict(frozen=True)

    encounter_id: str
    active: bool = True


# --- Map change requests ---
# Events never touch the map directly; they queue requests the caller applies.


class ObjectStateChange(BaseModel):
    """Set an interactive object's state."""

    model_config = ConfigDict(frozen=True)
    type: Literal["object_state"] = "object_state"

    object_id: ObjectId
    state: ObjectState


class DoorOpenChange(BaseModel):
    """Open the closed door at a position."""

    model_config = ConfigDict(frozen=True)
    type: Literal["open_door"] = "open_door"

    x: int
    y: int


MapChangeRequest = Annotated[
    Union[
        ObjectStateChange,
        DoorOpenChange,
    ],
    Discriminator("type"),
]


class GameState(BaseModel):
    """Immutable per-session state.

    triggered_event_ids is the only record of which one-time events have
    fired, so area maps stay shareable between sessions.
    """

    model_config = ConfigDict(frozen=True)

    global_variables: dict[str, GlobalValue] = Field(default_factory=dict)
    message_log: tuple[Message, ...] = ()
    triggered_event_ids: frozenset[EventId] = frozenset()

    current_map_id: MapId | None = None
    player_position: Position | None = None
    player_direction: Direction | None = None
    combat: EncounterRequest | None = None
    map_changes: tuple[MapChangeRequest, ...] = ()

    @property
    def messages(self) -> list[str]:
        """Text of every logged message, oldest first."""
        return [m.text for m in self.message_log]

    def get_variable(self, name: str) -> GlobalValue | None:
        """Get a global variable, or None if unset."""
        return self.global_variables.get(name)

    def with_variable(self, name: str, value: GlobalValue) -> GameState:
        """Return a new state with a global variable set."""
        new_vars = dict(self.global_variables)
        new_vars[name] = value
        return self.model_copy(update={"global_variables": new_vars})

    def with_message(self, text: str) -> GameState:
        """Return a new state with a message appended to the log."""
        return self.model_copy(
            update={"message_log": self.message_log + (Message(text=text),)}
        )

    def has_triggered(self, event_id: str) -> bool:
        """Check if a one-time event has already fired this session."""
        return event_id in self.triggered_event_ids

    def with_triggered(self, event_id: str) -> GameState:
        """Return a new state recording that an event fired."""
        if event_id in self.triggered_event_ids:
            return self
        return self.model_copy(
            update={"triggered_event_ids": self.triggered_event_ids | {EventId(event_id)}}
        )

    def with_map_change(self, change: ObjectStateChange | DoorOpenChange) -> GameState:
        """Return a new state with a map change queued."""
        return self.model_copy(update={"map_changes": self.map_changes + (change,)})

    def clear_map_changes(self) -> GameState:
        """Return a new state with the map change queue emptied."""
        if not self.map_changes:
            return self
        return self.model_copy(update={"map_changes": ()})
