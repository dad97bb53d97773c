"""Area event processing for Delve.

Runs after every accepted move. Compares which event areas contained the old
and new positions, then fires matching events in a fixed order:

1. OnExit for areas left
2. OnEnter for areas entered
3. OnStep for every area containing the new position

Areas are visited in the map's declared order and events within an area in
their declared order. Processing is a pure function of its inputs and never
raises; unmatched triggers and false preconditions are no-ops.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..core.actions import apply_all
from ..core.area_map import AreaMap
from ..core.events import AreaEvent, EventArea, EventTrigger
from ..core.preconditions import evaluate_all
from ..core.state import GameState
from ..core.types import EventId
from ..logging_config import log_trigger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessingResult:
    """Outcome of processing one movement.

    Attributes:
        state: The new game state
        fired: Ids of events that fired, in firing order
    """

    state: GameState
    fired: tuple[EventId, ...] = ()


class EventProcessor:
    """Dispatches area events for player movement.

    Holds no state of its own; one instance can serve every session.
    """

    def process_movement(
        self,
        state: GameState,
        area_map: AreaMap,
        old_x: int,
        old_y: int,
        new_x: int,
        new_y: int,
    ) -> GameState:
        """Process a movement and return the resulting game state.

        Args:
            state: Game state before the move
            area_map: Map the move happened on
            old_x: Previous column
            old_y: Previous row
            new_x: Current column
            new_y: Current row

        Returns:
            New game state after all fired events
        """
        return self.process_movement_detailed(
            state, area_map, old_x, old_y, new_x, new_y
        ).state

    def process_movement_detailed(
        self,
        state: GameState,
        area_map: AreaMap,
        old_x: int,
        old_y: int,
        new_x: int,
        new_y: int,
    ) -> ProcessingResult:
        """Process a movement, also reporting which events fired."""
        previous_ids = {a.id for a in area_map.event_areas_at(old_x, old_y)}
        current_ids = {a.id for a in area_map.event_areas_at(new_x, new_y)}

        exited = [a for a in area_map.event_areas if a.id in previous_ids - current_ids]
        entered = [a for a in area_map.event_areas if a.id in current_ids - previous_ids]
        present = [a for a in area_map.event_areas if a.id in current_ids]

        fired: list[EventId] = []
        for areas, trigger in (
            (exited, EventTrigger.ON_EXIT),
            (entered, EventTrigger.ON_ENTER),
            (present, EventTrigger.ON_STEP),
        ):
            for area in areas:
                state = self._process_area_events(state, area, trigger, fired)

        if fired:
            logger.debug(
                f"Movement ({old_x}, {old_y}) -> ({new_x}, {new_y}) on {area_map.id} "
                f"fired {len(fired)} events: {', '.join(fired)}"
            )
        return ProcessingResult(state=state, fired=tuple(fired))

    def _process_area_events(
        self,
        state: GameState,
        area: EventArea,
        trigger: EventTrigger,
        fired: list[EventId],
    ) -> GameState:
        """Fire every eligible event in one area for one trigger."""
        for event in area.events_for(trigger):
            state = self._process_event(state, area, event, fired)
        return state

    def _process_event(
        self,
        state: GameState,
        area: EventArea,
        event: AreaEvent,
        fired: list[EventId],
    ) -> GameState:
        if event.one_time and state.has_triggered(event.id):
            log_trigger(logger, area.id, event.id, event.trigger.value, "SKIPPED", "already fired")
            return state

        if not evaluate_all(event.preconditions, state):
            log_trigger(logger, area.id, event.id, event.trigger.value, "SKIPPED", "preconditions")
            return state

        state = apply_all(event.actions, state)
        if event.one_time:
            state = state.with_triggered(event.id)

        fired.append(event.id)
        log_trigger(
            logger, area.id, event.id, event.trigger.value, "FIRED",
            f"{len(event.actions)} actions",
        )
        return state
