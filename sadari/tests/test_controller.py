"""
Tests for the session controller.

Tests:
- Setup validation
- The full reveal sequence through to FINISHED
- Reveal-in-flight guard
- Reset
- Result reporting, including reporter failures
"""

import pytest

from sadari.engine_core.action import INVALID_TRANSITION, VALIDATION_ERROR
from sadari.engine_core.graph import LadderGraph, Rung
from sadari.engine_core.state import SessionStatus
from sadari.reporting import (
    CallbackResultReporter,
    GameResultRecord,
    ResultScope,
)
from sadari.session import GameSessionController

from conftest import FixedGenerator


class TestSetup:
    """Tests for confirm()."""

    def test_confirm_builds_ladder(self):
        controller = GameSessionController()
        result = controller.confirm(["Kim", "Lee"], "take out trash")

        assert result.success
        assert controller.status == SessionStatus.READY
        assert controller.session.graph.column_count == 2
        assert controller.session.players == ("Kim", "Lee")

    def test_names_and_penalty_are_stripped(self):
        controller = GameSessionController()
        controller.confirm(["  Kim ", "Lee  "], "  dishes ")

        assert controller.session.players == ("Kim", "Lee")
        assert controller.session.penalty_text == "dishes"

    @pytest.mark.parametrize("players,penalty,fragment", [
        (["A"], "dishes", "players"),
        ([f"P{i}" for i in range(9)], "dishes", "players"),
        (["A", "  "], "dishes", "blank"),
        (["A", "B"], "   ", "penalty"),
    ])
    def test_invalid_setup_rejected(self, players, penalty, fragment):
        controller = GameSessionController()
        result = controller.confirm(players, penalty)

        assert not result.success
        assert result.error_code == VALIDATION_ERROR
        assert any(fragment in e.lower() for e in result.errors)
        assert controller.status == SessionStatus.SETUP
        assert controller.session.graph is None

    def test_all_errors_reported_together(self):
        result = GameSessionController().confirm([""], "")
        assert len(result.errors) == 3

    def test_confirm_twice_rejected(self, scenario_controller):
        result = scenario_controller.confirm(["X", "Y"], "laundry")

        assert not result.success
        assert result.error_code == INVALID_TRANSITION
        assert scenario_controller.session.players == ("A", "B", "C")

    def test_select_before_setup_rejected(self):
        result = GameSessionController().select_player(0)
        assert not result.success
        assert result.error_code == INVALID_TRANSITION

    def test_reset_before_setup_rejected(self):
        controller = GameSessionController()
        result = controller.reset()
        assert not result.success
        assert controller.status == SessionStatus.SETUP


class TestLadderScenario:
    """A, B, C with penalty 'dishes' on a ladder mapping [0,1,2] -> [1,0,2]."""

    def test_full_game(self, scenario_controller, result_store):
        controller = scenario_controller

        # A goes to column 1 and passes
        result = controller.play(0)
        assert result.success and not result.finished
        assert controller.status == SessionStatus.IN_PROGRESS
        assert controller.session.resolved_columns == {0}

        # B goes to column 0 and passes
        result = controller.play(1)
        assert result.success and not result.finished
        assert controller.session.resolved_columns == {0, 1}

        # C stays in column 2 and gets the penalty
        result = controller.play(2)
        assert result.success and result.finished
        assert controller.status == SessionStatus.FINISHED
        assert controller.session.winner_column == 2
        assert controller.session.winner == "C"

        stored = result_store.results_for_me()
        assert len(stored) == 1
        assert stored[0].record.to_dict() == {
            "gameType": "LADDER",
            "participants": ["A", "B", "C"],
            "result": "C",
            "penalty": "dishes",
        }

        # Nothing more can be selected
        result = controller.select_player(0)
        assert not result.success
        assert result.error_code == INVALID_TRANSITION

    def test_reset_after_finish(self, scenario_controller):
        controller = scenario_controller
        for column in range(3):
            controller.play(column)
        old_graph = controller.session.graph

        result = controller.reset()

        assert result.success
        assert controller.status == SessionStatus.READY
        assert controller.session.resolved_columns == frozenset()
        assert controller.session.winner_column is None
        assert controller.session.players == ("A", "B", "C")
        assert controller.session.penalty_text == "dishes"
        assert controller.session.graph is not old_graph
        assert controller.session.graph.column_count == 3

    def test_penalty_first_ends_game(self, scenario_controller, result_store):
        result = scenario_controller.play(2)

        assert result.finished
        assert scenario_controller.session.resolved_columns == frozenset()
        assert result_store.results_for_me()[0].record.result == "C"

    def test_resolved_player_cannot_go_again(self, scenario_controller):
        scenario_controller.play(0)
        result = scenario_controller.select_player(0)

        assert not result.success
        assert "already" in result.error

    def test_column_off_ladder_rejected(self, scenario_controller):
        result = scenario_controller.select_player(3)
        assert not result.success
        assert result.error_code == INVALID_TRANSITION


class TestRevealInFlight:
    """Only one reveal at a time, and it always commits."""

    def test_select_holds_state_until_commit(self, scenario_controller):
        result = scenario_controller.select_player(0)

        assert result.success
        assert result.reveal.player == "A"
        assert result.reveal.trace.final_column == 1
        assert not result.reveal.is_penalty
        assert scenario_controller.session.reveal_in_flight
        assert scenario_controller.status == SessionStatus.READY
        assert scenario_controller.session.resolved_columns == frozenset()

        commit = scenario_controller.commit_reveal()
        assert commit.success
        assert commit.reveal.column == 0
        assert not scenario_controller.session.reveal_in_flight
        assert scenario_controller.session.resolved_columns == {0}

    def test_second_select_rejected(self, scenario_controller):
        scenario_controller.select_player(0)
        result = scenario_controller.select_player(1)

        assert not result.success
        assert result.error_code == INVALID_TRANSITION
        assert scenario_controller.session.pending_reveal.column == 0

    def test_reset_rejected_during_reveal(self, scenario_controller):
        graph = scenario_controller.session.graph
        scenario_controller.select_player(2)

        result = scenario_controller.reset()

        assert not result.success
        assert scenario_controller.session.graph is graph
        assert scenario_controller.commit_reveal().finished

    def test_commit_without_reveal_rejected(self, scenario_controller):
        result = scenario_controller.commit_reveal()
        assert not result.success
        assert result.error_code == INVALID_TRANSITION

    def test_penalty_reveal_is_flagged_before_commit(self, scenario_controller, result_store):
        result = scenario_controller.select_player(2)

        assert result.reveal.is_penalty
        assert scenario_controller.status != SessionStatus.FINISHED
        assert result_store.results_for_me() == []


class TestReporting:
    """Tests for result hand-off."""

    def _controller(self, reporter, **kwargs):
        graph = LadderGraph(column_count=2, level_count=3)
        controller = GameSessionController(
            reporter=reporter,
            generator=FixedGenerator([graph]),
            **kwargs,
        )
        controller.confirm(["Park", "Choi"], "vacuum")
        return controller

    def test_reported_once(self):
        records: list[GameResultRecord] = []
        controller = self._controller(CallbackResultReporter(records.append))

        controller.play(0)
        controller.play(1)
        controller.select_player(0)

        assert len(records) == 1
        assert records[0].result == "Choi"
        assert records[0].participants == ("Park", "Choi")

    def test_reporter_failure_keeps_game_finished(self):
        def broken(record):
            raise ConnectionError("server unavailable")

        controller = self._controller(CallbackResultReporter(broken))
        controller.play(0)
        result = controller.play(1)

        assert result.success
        assert result.finished
        assert controller.status == SessionStatus.FINISHED
        assert controller.session.winner == "Choi"
        assert any("server unavailable" in w for w in result.warnings)

    def test_group_scope_carried(self):
        records: list[GameResultRecord] = []
        controller = self._controller(
            CallbackResultReporter(records.append),
            scope=ResultScope.GROUP,
            group_id="house-42",
        )
        controller.play(1)

        assert records[0].scope == ResultScope.GROUP
        assert records[0].group_id == "house-42"

    def test_no_reporter(self):
        controller = self._controller(None)
        assert controller.play(1).finished
        assert controller.result_record().result == "Choi"

    def test_no_record_before_finish(self, scenario_controller):
        assert scenario_controller.result_record() is None


class TestResetRegeneration:
    """Reset asks the generator for a new ladder."""

    def test_reset_uses_next_graph(self):
        first = LadderGraph(column_count=2, level_count=3)
        second = LadderGraph(
            column_count=2,
            level_count=3,
            rungs=frozenset({Rung.between(0, level=1)}),
        )
        generator = FixedGenerator([first, second])
        controller = GameSessionController(generator=generator)
        controller.confirm(["A", "B"], "dishes")
        controller.play(0)

        controller.reset()

        assert generator.calls == 2
        assert controller.session.graph == second
        assert controller.play(0).finished
