"""
Tests for the reducer (session transitions).

Tests:
- Setup validation
- Sessions are never mutated in place
- Status guards
"""

import random

import pytest

from sadari.engine_core.action import Action, ActionType, INVALID_TRANSITION
from sadari.engine_core.generator import LadderGenerator
from sadari.engine_core.reducer import Reducer, apply_action, validate_setup
from sadari.engine_core.state import Session, SessionStatus


@pytest.fixture
def reducer():
    return Reducer(generator=LadderGenerator(rng=random.Random(7)))


@pytest.fixture
def ready_state(reducer) -> Session:
    result = reducer.apply(Session(), Action.confirm_setup(["A", "B", "C", "D"], "dishes"))
    assert result.success
    return result.new_state


class TestValidateSetup:
    """Tests for validate_setup()."""

    def test_valid(self):
        result = validate_setup(["A", "B"], "dishes")
        assert result.valid
        assert result.errors == []

    @pytest.mark.parametrize("count", [2, 5, 8])
    def test_player_count_bounds(self, count):
        assert validate_setup([f"P{i}" for i in range(count)], "x").valid

    def test_none_entries_are_blank(self):
        result = validate_setup(["A", None], "dishes")
        assert not result.valid
        assert "Player 2 has a blank name" in result.errors

    def test_duplicate_names_allowed(self):
        assert validate_setup(["Kim", "Kim"], "dishes").valid


class TestTransitions:
    """Tests for reducer transitions."""

    def test_setup_moves_to_ready(self, ready_state):
        assert ready_state.status == SessionStatus.READY
        assert ready_state.graph.column_count == 4
        assert ready_state.penalty_column == 3

    def test_old_state_untouched(self, reducer, ready_state):
        result = reducer.apply(ready_state, Action.select_player(1))

        assert result.success
        assert result.new_state.reveal_in_flight
        assert not ready_state.reveal_in_flight

    def test_commit_records_outcome(self, reducer, ready_state):
        state = reducer.apply(ready_state, Action.select_player(0)).new_state
        result = reducer.apply(state, Action.commit_reveal())

        assert result.success
        if result.finished:
            assert result.new_state.winner_column == 0
            assert result.new_state.status == SessionStatus.FINISHED
        else:
            assert result.new_state.resolved_columns == {0}
            assert result.new_state.status == SessionStatus.IN_PROGRESS

    def test_exactly_one_player_finishes(self, reducer, ready_state):
        state = ready_state
        finished = []
        for column in range(4):
            state = reducer.apply(state, Action.select_player(column)).new_state
            result = reducer.apply(state, Action.commit_reveal())
            state = result.new_state
            if result.finished:
                finished.append(column)
                break
        assert len(finished) == 1
        assert state.status == SessionStatus.FINISHED
        assert state.unresolved_columns() == []

    def test_none_column_rejected(self, ready_state):
        result = apply_action(ready_state, Action(action_type=ActionType.SELECT_PLAYER))
        assert not result.success
        assert result.error_code == INVALID_TRANSITION

    def test_reset_from_ready(self, reducer, ready_state):
        result = reducer.apply(ready_state, Action.reset())
        assert result.success
        assert result.new_state.status == SessionStatus.READY
        assert result.new_state.players == ready_state.players
