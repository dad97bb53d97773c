"""Event areas for Delve.

An EventArea is a named rectangle on a map that owns an ordered list of
AreaEvents. Each event fires on one trigger (enter, exit or step), is gated
by preconditions and applies its actions in order.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .actions import Action
from .preconditions import Precondition
from .state import GameState
from .types import EventAreaId, EventId, Position, Rect


class EventTrigger(Enum):
    """The movement relationship that makes an event eligible."""

    ON_ENTER = "on_enter"  # Was outside the area, now inside
    ON_EXIT = "on_exit"  # Was inside the area, now outside
    ON_STEP = "on_step"  # Landed anywhere inside the area


class AreaEvent(BaseModel):
    """A single trigger-gated rule in an event area.

    Whether a one-time event has fired is session state and lives in
    GameState.triggered_event_ids, not here.
    """

    model_config = ConfigDict(frozen=True)

    id: EventId
    trigger: EventTrigger
    preconditions: tuple[Precondition, ...] = ()
    actions: tuple[Action, ...] = ()
    one_time: bool = False
    description: str | None = None


class EventArea(BaseModel):
    """A rectangular region owning trigger-gated events."""

    model_config = ConfigDict(frozen=True)

    id: EventAreaId
    x: int
    y: int
    width: int = Field(ge=1)
    height: int = Field(ge=1)
    events: tuple[AreaEvent, ...] = ()
    description: str | None = None

    @property
    def bounds(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    def contains(self, x: int, y: int) -> bool:
        """Check if a grid position is inside this area."""
        return self.bounds.contains(Position(x, y))

    def events_for(self, trigger: EventTrigger) -> list[AreaEvent]:
        """Events with the given trigger, in declared order."""
        return [e for e in self.events if e.trigger == trigger]

    def pending_one_time_events(self, state: GameState) -> list[AreaEvent]:
        """One-time events that have not fired yet in this session."""
        return [e for e in self.events if e.one_time and not state.has_triggered(e.id)]
