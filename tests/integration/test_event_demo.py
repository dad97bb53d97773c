"""End-to-end tests on the bundled event demo map."""

import pytest

from delve.core import Direction, GameState, ObjectState, Position
from delve.services import (
    EventProcessor,
    MoveAccepted,
    MovementValidator,
    RejectionReason,
    apply_map_changes,
)


@pytest.fixture
def processor() -> EventProcessor:
    return EventProcessor()


class Explorer:
    """Drives the validate / process / apply loop one step at a time."""

    def __init__(self, area_map, tilesets, state: GameState):
        self.area_map = area_map
        self.tilesets = tilesets
        self.state = state
        self.processor = EventProcessor()
        self.last_result = None

    @property
    def position(self) -> Position:
        return self.state.player_position

    def step(self, direction: Direction) -> None:
        x, y = self.position
        result = MovementValidator.validate(self.area_map, x, y, direction)
        self.last_result = result
        if not isinstance(result, MoveAccepted):
            return
        self.state = self.state.model_copy(update={"player_position": result.final_position})
        self.state = self.processor.process_movement(
            self.state, self.area_map, x, y, result.final_x, result.final_y
        )
        self.area_map, self.state = apply_map_changes(self.area_map, self.state, self.tilesets)

    def walk(self, letters: str) -> None:
        lookup = {"N": Direction.NORTH, "S": Direction.SOUTH, "E": Direction.EAST, "W": Direction.WEST}
        for letter in letters:
            self.step(lookup[letter])


@pytest.fixture
def explorer(demo_map, bundled_loader) -> Explorer:
    return Explorer(
        demo_map,
        bundled_loader.tilesets.get_by_id,
        GameState(player_position=demo_map.player_spawn.position),
    )


class TestDemoEvents:
    """Event behavior on the demo map, driven through the processor."""

    def test_welcome_fires_once(self, processor, demo_map):
        """The entrance welcome is one-time across re-entries."""
        state = processor.process_movement(GameState(), demo_map, 2, 3, 2, 1)
        assert any("Welcome" in m for m in state.messages)
        assert state.get_variable("visited-demo") is True

        state = processor.process_movement(state, demo_map, 2, 1, 2, 3)
        state = processor.process_movement(state, demo_map, 2, 3, 2, 1)
        assert sum("Welcome" in m for m in state.messages) == 1

    def test_door_unlock_sequence(self, processor, demo_map):
        """Locked message without the key, unlock message with it."""
        state = GameState().with_variable("has-demo-key", False)

        state = processor.process_movement(state, demo_map, 4, 2, 4, 3)
        assert any("locked" in m for m in state.messages)

        state = processor.process_movement(state, demo_map, 7, 2, 7, 1)
        assert state.get_variable("has-demo-key") is True

        state = processor.process_movement(state, demo_map, 4, 2, 4, 3)
        assert any("unlock" in m for m in state.messages)
        assert state.get_variable("door-unlocked") is True

    def test_locked_message_needs_explicit_false(self, processor, demo_map):
        """With has-demo-key unset, neither door event fires."""
        state = processor.process_movement(GameState(), demo_map, 4, 2, 4, 3)
        assert state.messages == []

    def test_exit_event(self, processor, demo_map):
        """Leaving the counter after entering it thanks the player."""
        state = processor.process_movement(GameState(), demo_map, 5, 3, 5, 4)
        assert state.get_variable("entered-counter-area") is True

        state = processor.process_movement(state, demo_map, 5, 4, 5, 3)
        assert any("Thanks for visiting" in m for m in state.messages)

    def test_exit_fires_once_per_departure(self, processor, demo_map):
        """Moving along the counter does not fire exit; leaving does, once."""
        state = processor.process_movement(GameState(), demo_map, 5, 3, 5, 4)
        state = processor.process_movement(state, demo_map, 5, 4, 6, 4)
        state = processor.process_movement(state, demo_map, 6, 4, 7, 4)
        assert not any("Thanks" in m for m in state.messages)

        state = processor.process_movement(state, demo_map, 7, 4, 7, 5)
        assert sum("Thanks" in m for m in state.messages) == 1


class TestDemoWalkthrough:
    """Full walkthrough with movement, events and map changes."""

    def test_locked_door_blocks(self, explorer):
        """Walking into the locked door is rejected with the door object."""
        explorer.walk("EE")
        assert explorer.position == Position(4, 3)

        explorer.step(Direction.SOUTH)
        assert explorer.last_result.reason == RejectionReason.DOOR_CLOSED
        assert explorer.last_result.interactive_object.id == "demo-door"
        assert explorer.position == Position(4, 3)

    def test_key_opens_door(self, explorer):
        """Fetching the key unlocks and opens the door, which can then be crossed."""
        explorer.walk("NEEEEEN")
        assert explorer.position == Position(7, 1)
        assert "You found a key!" in explorer.state.messages

        explorer.walk("SSWWW")
        assert explorer.position == Position(4, 3)
        assert "You unlock the door with the key." in explorer.state.messages
        assert explorer.area_map.is_door_tile(4, 4)
        assert explorer.area_map.get_object("demo-door").state == ObjectState.OPEN

        explorer.step(Direction.SOUTH)
        assert explorer.last_result.passed_through_door
        assert explorer.position == Position(4, 5)

    def test_full_tour(self, explorer, demo_map):
        """The whole demo in one walk, without touching the shared map."""
        explorer.walk("NEEEEENSSWWWSENS")

        assert explorer.position == Position(5, 5)
        assert explorer.state.messages == [
            "Welcome to the event demo!",
            "You found a key!",
            "You unlock the door with the key.",
            "Thanks for visiting the counter!",
        ]
        assert explorer.state.map_changes == ()
        # The loaded map is shared and never modified
        assert demo_map.get_object("demo-door").state == ObjectState.LOCKED
        assert not demo_map.is_passable(4, 4)
