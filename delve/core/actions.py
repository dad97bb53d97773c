"""Event actions for Delve.

Actions are pure GameState transformers run when an area event fires.
Each action type is a frozen Pydantic model with a type discriminator;
an event's actions are applied as a left fold over the state.

Actions that affect the map (object state, doors) only queue a request
on the state. The caller applies queued requests to its AreaMap.
"""

from __future__ import annotations

from typing import Annotated, Any, Iterable, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, TypeAdapter, ValidationError

from .errors import DataIntegrityError
from .objects import ObjectState
from .state import (
    DoorOpenChange,
    EncounterRequest,
    GameState,
    GlobalValue,
    ObjectStateChange,
)
from .types import Direction, MapId, ObjectId, Position


# --- State actions ---


class ShowMessage(BaseModel):
    """Append a message to the player's log."""

    model_config = ConfigDict(frozen=True)
    type: Literal["show_message"] = "show_message"

    message: str


class SetGlobalVariable(BaseModel):
    """Set a session-wide variable."""

    model_config = ConfigDict(frozen=True)
    type: Literal["set_global_variable"] = "set_global_variable"

    variable_name: str
    value: GlobalValue


# --- Player actions ---


class Teleport(BaseModel):
    """Move the player to another map position."""

    model_config = ConfigDict(frozen=True)
    type: Literal["teleport"] = "teleport"

    target_map_id: MapId
    target_x: int
    target_y: int
    target_direction: Direction


class Rotate(BaseModel):
    """Turn the player to face a direction."""

    model_config = ConfigDict(frozen=True)
    type: Literal["rotate"] = "rotate"

    new_direction: Direction


class StartEncounter(BaseModel):
    """Ask the caller to start a combat encounter."""

    model_config = ConfigDict(frozen=True)
    type: Literal["start_encounter"] = "start_encounter"

    encounter_id: str


# --- Map actions (queued) ---


class SetObjectState(BaseModel):
    """Request an interactive object's state change."""

    model_config = ConfigDict(frozen=True)
    type: Literal["set_object_state"] = "set_object_state"

    object_id: ObjectId
    state: ObjectState


class OpenDoor(BaseModel):
    """Request that the closed door at (x, y) be opened."""

    model_config = ConfigDict(frozen=True)
    type: Literal["open_door"] = "open_door"

    x: int
    y: int


Action = Annotated[
    Union[
        ShowMessage,
        SetGlobalVariable,
        Teleport,
        Rotate,
        StartEncounter,
        SetObjectState,
        OpenDoor,
    ],
    Discriminator("type"),
]

_ActionAdapter: TypeAdapter[Action] = TypeAdapter(Action)


def apply_action(action: Action, state: GameState) -> GameState:
    """Apply one action, returning a new state."""
    match action:
        case ShowMessage():
            return state.with_message(action.message)
        case SetGlobalVariable():
            return state.with_variable(action.variable_name, action.value)
        case Teleport():
            return state.model_copy(
                update={
                    "current_map_id": action.target_map_id,
                    "player_position": Position(action.target_x, action.target_y),
                    "player_direction": action.target_direction,
                }
            )
        case Rotate():
            return state.model_copy(update={"player_direction": action.new_direction})
        case StartEncounter():
            return state.model_copy(
                update={"combat": EncounterRequest(encounter_id=action.encounter_id)}
            )
        case SetObjectState():
            return state.with_map_change(
                ObjectStateChange(object_id=action.object_id, state=action.state)
            )
        case OpenDoor():
            return state.with_map_change(DoorOpenChange(x=action.x, y=action.y))
        case _:
            return state


def apply_all(actions: Iterable[Action], state: GameState) -> GameState:
    """Apply actions in order, each seeing the previous one's result."""
    for action in actions:
        state = apply_action(action, state)
    return state


def action_from_dict(data: dict[str, Any]) -> Action:
    """Build an action from its tagged form.

    Raises:
        DataIntegrityError: Unknown type tag or invalid fields
    """
    try:
        return _ActionAdapter.validate_python(data)
    except ValidationError as e:
        tag = data.get("type") if isinstance(data, dict) else None
        raise DataIntegrityError(
            f"Invalid action (type={tag!r})",
            errors=[str(err["msg"]) for err in e.errors()],
        ) from e


def action_to_dict(action: Action) -> dict[str, Any]:
    """Serialize an action to its tagged form."""
    return action.model_dump(mode="json")
