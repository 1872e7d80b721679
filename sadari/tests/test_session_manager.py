"""
Tests for session management and the CLI.
"""

import time

import pytest

from sadari.cli import main
from sadari.reporting import InMemoryResultStore, ResultScope
from sadari.session import SessionManager


class TestSessionManager:
    """Tests for SessionManager."""

    def test_create_and_get(self):
        manager = SessionManager()
        controller = manager.create_session()

        assert manager.get_session(controller.session_id) is controller
        assert manager.list_sessions() == [controller.session_id]

    def test_shared_reporter(self):
        store = InMemoryResultStore()
        manager = SessionManager(reporter=store)
        controller = manager.create_session()
        controller.confirm(["A", "B"], "dishes")

        for column in range(2):
            if controller.play(column).finished:
                break

        assert len(store.results_for_me()) == 1

    def test_group_requires_id(self):
        with pytest.raises(ValueError):
            SessionManager().create_session(scope=ResultScope.GROUP)

    def test_seeded_sessions_reproducible(self):
        a = SessionManager(seed=10).create_session()
        b = SessionManager(seed=10).create_session()
        a.confirm(["A", "B", "C"], "x")
        b.confirm(["A", "B", "C"], "x")

        assert a.session.graph == b.session.graph

    def test_end_session(self):
        manager = SessionManager()
        controller = manager.create_session()

        assert manager.end_session(controller.session_id)
        assert manager.get_session(controller.session_id) is None
        assert not manager.end_session(controller.session_id)

    def test_cleanup_skips_reveal_in_flight(self):
        manager = SessionManager()
        idle = manager.create_session()
        busy = manager.create_session()
        busy.confirm(["A", "B"], "x")
        busy.select_player(0)
        idle.created_at = busy.created_at = time.time() - 7200

        removed = manager.cleanup_stale_sessions(max_age_seconds=3600)

        assert removed == 1
        assert manager.list_sessions() == [busy.session_id]

    def test_cleanup_finished_after_grace(self):
        manager = SessionManager(seed=2)
        done = manager.create_session()
        playing = manager.create_session()
        done.confirm(["A", "B"], "x")
        playing.confirm(["A", "B"], "x")
        for column in range(2):
            if done.play(column).finished:
                break

        assert manager.cleanup_stale_sessions(finished_grace_seconds=60) == 0

        done.finished_at = time.time() - 120
        removed = manager.cleanup_stale_sessions(finished_grace_seconds=60)

        assert removed == 1
        assert manager.list_sessions() == [playing.session_id]

    def test_reset_clears_finished_time(self):
        manager = SessionManager(seed=2)
        controller = manager.create_session()
        controller.confirm(["A", "B"], "x")
        for column in range(2):
            if controller.play(column).finished:
                break
        assert controller.finished_at is not None

        controller.reset()

        assert controller.finished_at is None
        assert manager.cleanup_stale_sessions(finished_grace_seconds=0) == 0


class TestCLI:
    """Tests for the command-line interface."""

    def test_play(self, capsys):
        code = main(["play", "Kim", "Lee", "Park", "--penalty", "dishes", "--seed", "4"])
        out = capsys.readouterr().out

        assert code == 0
        assert "PENALTY" in out
        assert "has to: dishes" in out

    def test_play_invalid_setup(self, capsys):
        code = main(["play", "Kim", "--penalty", "dishes"])
        assert code == 1
        assert "Error" in capsys.readouterr().out

    def test_outcomes(self, capsys):
        code = main(["outcomes", "4", "--seed", "1"])
        lines = capsys.readouterr().out.strip().splitlines()

        assert code == 0
        assert len(lines) == 4
        assert sum("penalty" in line for line in lines) == 1

    def test_outcomes_too_few(self, capsys):
        assert main(["outcomes", "1"]) == 1

    def test_no_command(self, capsys):
        assert main([]) == 1
