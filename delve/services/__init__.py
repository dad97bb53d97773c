"""Movement and event services for Delve."""

from .movement import (
    MovementValidator,
    MovementResult,
    MoveAccepted,
    MoveRejected,
    RejectionReason,
    validate_movement,
)
from .event_processor import (
    EventProcessor,
    ProcessingResult,
)
from .map_changes import apply_map_changes

__all__ = [
    # Movement
    "MovementValidator",
    "MovementResult",
    "MoveAccepted",
    "MoveRejected",
    "RejectionReason",
    "validate_movement",
    # Events
    "EventProcessor",
    "ProcessingResult",
    # Map changes
    "apply_map_changes",
]
