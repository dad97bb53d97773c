"""Tests for EventProcessor."""

import pytest

from delve.core import AreaMap, GameState
from delve.services import EventProcessor, ProcessingResult


def message_event(event_id: str, trigger: str, text: str, **extra) -> dict:
    """An event that logs one message."""
    return {
        "id": event_id,
        "trigger": trigger,
        "actions": [{"type": "show_message", "message": text}],
        **extra,
    }


@pytest.fixture
def processor() -> EventProcessor:
    return EventProcessor()


@pytest.fixture
def hall_map(make_map) -> AreaMap:
    """A 7x3 corridor; the hall area covers x 2..4 on row 1."""
    return make_map(
        [
            "#######",
            "#.....#",
            "#######",
        ],
        event_areas=[
            {
                "id": "hall",
                "x": 2,
                "y": 1,
                "width": 3,
                "height": 1,
                "events": [
                    message_event("hall-exit", "on_exit", "exit"),
                    message_event("hall-enter", "on_enter", "enter"),
                    message_event("hall-step", "on_step", "step"),
                ],
            }
        ],
    )


class TestTriggers:
    """Tests for enter, exit and step triggering."""

    def test_entering_fires_enter_then_step(self, processor, hall_map, state):
        """Entering fires OnEnter and OnStep, in that order."""
        result = processor.process_movement(state, hall_map, 1, 1, 2, 1)
        assert result.messages == ["enter", "step"]

    def test_moving_inside_fires_step_only(self, processor, hall_map, state):
        """Moving within an area refires OnStep but not OnEnter."""
        result = processor.process_movement(state, hall_map, 2, 1, 3, 1)
        assert result.messages == ["step"]

    def test_leaving_fires_exit_only(self, processor, hall_map, state):
        """Leaving fires OnExit; OnStep does not fire outside the area."""
        result = processor.process_movement(state, hall_map, 4, 1, 5, 1)
        assert result.messages == ["exit"]

    def test_outside_to_outside(self, processor, hall_map, state):
        """Moves that never touch an area fire nothing."""
        result = processor.process_movement(state, hall_map, 5, 1, 5, 1)
        assert result == state

    def test_stay_in_place_fires_step(self, processor, hall_map, state):
        """A zero-distance call inside an area fires OnStep."""
        result = processor.process_movement(state, hall_map, 3, 1, 3, 1)
        assert result.messages == ["step"]

    def test_step_refires_on_later_moves(self, processor, hall_map, state):
        """Landing on the same tile on two later moves fires OnStep twice."""
        state = processor.process_movement(state, hall_map, 1, 1, 2, 1)
        state = processor.process_movement(state, hall_map, 2, 1, 1, 1)
        state = processor.process_movement(state, hall_map, 1, 1, 2, 1)
        assert state.messages.count("step") == 2

    def test_exit_fires_before_enter(self, processor, make_map, state):
        """Crossing from one area into an adjacent one exits first."""
        area_map = make_map(
            ["######", "#....#", "######"],
            event_areas=[
                {
                    "id": "west",
                    "x": 1, "y": 1, "width": 2, "height": 1,
                    "events": [message_event("west-exit", "on_exit", "left west")],
                },
                {
                    "id": "east",
                    "x": 3, "y": 1, "width": 2, "height": 1,
                    "events": [message_event("east-enter", "on_enter", "entered east")],
                },
            ],
        )
        result = processor.process_movement(state, area_map, 2, 1, 3, 1)
        assert result.messages == ["left west", "entered east"]


class TestOneTime:
    """Tests for one-time events."""

    @pytest.fixture
    def once_map(self, make_map) -> AreaMap:
        return make_map(
            ["#####", "#...#", "#####"],
            event_areas=[
                {
                    "id": "spot",
                    "x": 2, "y": 1, "width": 1, "height": 1,
                    "events": [message_event("hello", "on_enter", "hello", one_time=True)],
                }
            ],
        )

    def test_fires_once(self, processor, once_map, state):
        """A one-time event never fires again in the same session."""
        state = processor.process_movement(state, once_map, 1, 1, 2, 1)
        state = processor.process_movement(state, once_map, 2, 1, 3, 1)
        state = processor.process_movement(state, once_map, 3, 1, 2, 1)

        assert state.messages == ["hello"]
        assert state.has_triggered("hello")

    def test_new_session_fires_again(self, processor, once_map):
        """One-time tracking belongs to the session, not the map."""
        first = processor.process_movement(GameState(), once_map, 1, 1, 2, 1)
        second = processor.process_movement(GameState(), once_map, 1, 1, 2, 1)
        assert first.messages == second.messages == ["hello"]

    def test_failed_precondition_does_not_consume(self, processor, make_map, state):
        """A one-time event blocked by a precondition can fire later."""
        area_map = make_map(
            ["#####", "#...#", "#####"],
            event_areas=[
                {
                    "id": "spot",
                    "x": 2, "y": 1, "width": 1, "height": 1,
                    "events": [
                        message_event(
                            "gate",
                            "on_step",
                            "open",
                            one_time=True,
                            preconditions=[
                                {"type": "global_variable_is", "variable_name": "key", "expected_value": True}
                            ],
                        )
                    ],
                }
            ],
        )
        state = processor.process_movement(state, area_map, 1, 1, 2, 1)
        assert state.messages == []
        assert not state.has_triggered("gate")

        state = processor.process_movement(state.with_variable("key", True), area_map, 2, 1, 2, 1)
        assert state.messages == ["open"]


class TestPreconditions:
    """Tests for precondition gating."""

    def test_all_preconditions_must_hold(self, processor, make_map):
        """Preconditions combine with AND."""
        area_map = make_map(
            ["####", "#..#", "####"],
            event_areas=[
                {
                    "id": "spot",
                    "x": 2, "y": 1, "width": 1, "height": 1,
                    "events": [
                        message_event(
                            "both",
                            "on_enter",
                            "both set",
                            preconditions=[
                                {"type": "global_variable_is", "variable_name": "a", "expected_value": True},
                                {"type": "global_variable_is_greater_than", "variable_name": "b", "threshold": 1},
                            ],
                        )
                    ],
                }
            ],
        )
        only_a = GameState().with_variable("a", True)
        both = only_a.with_variable("b", 2)

        assert processor.process_movement(only_a, area_map, 1, 1, 2, 1).messages == []
        assert processor.process_movement(both, area_map, 1, 1, 2, 1).messages == ["both set"]

    def test_earlier_event_feeds_later_precondition(self, processor, make_map, state):
        """Events in one area see the state left by the events before them."""
        area_map = make_map(
            ["####", "#..#", "####"],
            event_areas=[
                {
                    "id": "spot",
                    "x": 2, "y": 1, "width": 1, "height": 1,
                    "events": [
                        {
                            "id": "set",
                            "trigger": "on_enter",
                            "actions": [{"type": "set_global_variable", "variable_name": "flag", "value": True}],
                        },
                        message_event(
                            "check",
                            "on_enter",
                            "flag seen",
                            preconditions=[
                                {"type": "global_variable_is", "variable_name": "flag", "expected_value": True}
                            ],
                        ),
                    ],
                }
            ],
        )
        result = processor.process_movement(state, area_map, 1, 1, 2, 1)
        assert result.messages == ["flag seen"]


class TestOverlap:
    """Tests for overlapping areas."""

    def test_overlapping_areas_fire_in_declared_order(self, processor, make_map, state):
        """Each containing area fires independently, in map order."""
        area_map = make_map(
            ["#####", "#...#", "#####"],
            event_areas=[
                {
                    "id": "big",
                    "x": 1, "y": 1, "width": 3, "height": 1,
                    "events": [message_event("big-step", "on_step", "big")],
                },
                {
                    "id": "small",
                    "x": 2, "y": 1, "width": 1, "height": 1,
                    "events": [
                        message_event("small-enter", "on_enter", "small enter"),
                        message_event("small-step", "on_step", "small"),
                    ],
                },
            ],
        )
        result = processor.process_movement(state, area_map, 1, 1, 2, 1)
        assert result.messages == ["small enter", "big", "small"]


class TestDetailed:
    """Tests for process_movement_detailed."""

    def test_reports_fired_events(self, processor, hall_map, state):
        """Fired event ids are reported in firing order."""
        result = processor.process_movement_detailed(state, hall_map, 1, 1, 2, 1)
        assert isinstance(result, ProcessingResult)
        assert result.fired == ("hall-enter", "hall-step")
        assert result.state.messages == ["enter", "step"]

    def test_purity(self, processor, hall_map, state):
        """Processing is deterministic and mutates nothing."""
        map_before = hall_map.model_copy(deep=True)
        first = processor.process_movement_detailed(state, hall_map, 1, 1, 2, 1)
        second = processor.process_movement_detailed(state, hall_map, 1, 1, 2, 1)

        assert first == second
        assert state == GameState()
        assert hall_map == map_before
