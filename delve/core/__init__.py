"""Core domain models for Delve.

This module contains pure domain models with no I/O. All models are immutable
(frozen Pydantic models) and use transformation methods for updates.

Usage:
    from delve.core import AreaMap, Direction, GameState, EventArea
"""

# Types
from .types import (
    MapId,
    TileSetId,
    ObjectId,
    EventId,
    EventAreaId,
    Direction,
    Position,
    Rect,
)

# Errors
from .errors import DelveError, DataIntegrityError, UnknownMapError

# Tiles
from .tiles import (
    TileBehavior,
    Tile,
    TileDefinition,
    TileSet,
    TileSetLookup,
)

# Objects
from .objects import (
    InteractiveObjectType,
    ObjectState,
    InteractiveObjectData,
    InteractiveObject,
    SpawnPoint,
    EncounterZone,
)

# State
from .state import (
    GlobalValue,
    Message,
    EncounterRequest,
    ObjectStateChange,
    DoorOpenChange,
    MapChangeRequest,
    GameState,
)

# Preconditions
from .preconditions import (
    GlobalVariableIs,
    GlobalVariableIsGreaterThan,
    GlobalVariableIsLessThan,
    Precondition,
    evaluate_precondition,
    evaluate_all,
    precondition_from_dict,
    precondition_to_dict,
)

# Actions
from .actions import (
    ShowMessage,
    SetGlobalVariable,
    Teleport,
    Rotate,
    StartEncounter,
    SetObjectState,
    OpenDoor,
    Action,
    apply_action,
    apply_all,
    action_from_dict,
    action_to_dict,
)

# Events
from .events import EventTrigger, AreaEvent, EventArea

# Map
from .area_map import AreaMap, AreaMapLookup

# Constants
from .constants import DEFAULT_OPEN_DOOR_CHAR

__all__ = [
    # Types
    "MapId",
    "TileSetId",
    "ObjectId",
    "EventId",
    "EventAreaId",
    "Direction",
    "Position",
    "Rect",
    # Errors
    "DelveError",
    "DataIntegrityError",
    "UnknownMapError",
    # Tiles
    "TileBehavior",
    "Tile",
    "TileDefinition",
    "TileSet",
    "TileSetLookup",
    # Objects
    "InteractiveObjectType",
    "ObjectState",
    "InteractiveObjectData",
    "InteractiveObject",
    "SpawnPoint",
    "EncounterZone",
    # State
    "GlobalValue",
    "Message",
    "EncounterRequest",
    "ObjectStateChange",
    "DoorOpenChange",
    "MapChangeRequest",
    "GameState",
    # Preconditions
    "GlobalVariableIs",
    "GlobalVariableIsGreaterThan",
    "GlobalVariableIsLessThan",
    "Precondition",
    "evaluate_precondition",
    "evaluate_all",
    "precondition_from_dict",
    "precondition_to_dict",
    # Actions
    "ShowMessage",
    "SetGlobalVariable",
    "Teleport",
    "Rotate",
    "StartEncounter",
    "SetObjectState",
    "OpenDoor",
    "Action",
    "apply_action",
    "apply_all",
    "action_from_dict",
    "action_to_dict",
    # Events
    "EventTrigger",
    "AreaEvent",
    "EventArea",
    # Map
    "AreaMap",
    "AreaMapLookup",
    # Constants
    "DEFAULT_OPEN_DOOR_CHAR",
]
