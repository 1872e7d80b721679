"""
Game Session Controller - Drives one ladder game.

The flow:
1. confirm(players, penalty) builds the ladder        SETUP -> READY
2. select_player(column) traces a descent and holds it as a reveal
3. The caller animates the reveal, then calls commit_reveal()
4. Pass -> player joins the resolved set              -> IN_PROGRESS
   Penalty -> winner recorded, result reported        -> FINISHED
5. reset() builds a new ladder for the same players   -> READY

While a reveal is in flight, selections and resets are rejected. A
reveal cannot be cancelled; it always commits.
"""

from __future__ import annotations
import logging
import time
import uuid

from ..engine_core.action import Action, ActionResult
from ..engine_core.generator import LadderGenerator
from ..engine_core.reducer import Reducer
from ..engine_core.state import Session, SessionStatus
from ..reporting import GameResultRecord, ResultReporter, ResultScope

logger = logging.getLogger(__name__)


class GameSessionController:
    """
    Owns a single Session and the transitions applied to it.

    Usage:
        controller = GameSessionController(reporter=store)
        controller.confirm(["A", "B", "C"], "dishes")

        result = controller.select_player(0)
        animate(result.reveal.trace.waypoints)
        result = controller.commit_reveal()
        if result.finished:
            show_loser(controller.session.winner)
    """

    def __init__(
        self,
        reporter: ResultReporter | None = None,
        generator: LadderGenerator | None = None,
        scope: ResultScope = ResultScope.ME,
        group_id: str | None = None,
        session_id: str | None = None,
    ):
        self.session_id = session_id or str(uuid.uuid4())
        self.created_at = time.time()
        self.finished_at: float | None = None
        self.reporter = reporter
        self.scope = scope
        self.group_id = group_id
        self.reducer = Reducer(generator=generator) if generator else Reducer()
        self.session = Session()

    @property
    def status(self) -> SessionStatus:
        return self.session.status

    def column_of(self, player: str) -> int | None:
        """Column of a player by name (first match)."""
        try:
            return self.session.players.index(player)
        except ValueError:
            return None

    def confirm(self, players: list[str], penalty_text: str) -> ActionResult:
        """Finish setup and build the ladder."""
        return self._dispatch(Action.confirm_setup(players, penalty_text))

    def select_player(self, column: int) -> ActionResult:
        """
        Start revealing a player's descent.

        The returned result carries the Reveal (trace and outcome). The
        session does not change status until commit_reveal().
        """
        return self._dispatch(Action.select_player(column))

    def commit_reveal(self) -> ActionResult:
        """Apply the outcome of the reveal in flight."""
        result = self._dispatch(Action.commit_reveal())
        if result.success and result.finished:
            self.finished_at = time.time()
            self._report(result)
        return result

    def play(self, column: int) -> ActionResult:
        """Select and commit in one step, for callers that do not animate."""
        result = self.select_player(column)
        if not result.success:
            return result
        return self.commit_reveal()

    def reset(self) -> ActionResult:
        """Build a new ladder for the same players and penalty."""
        result = self._dispatch(Action.reset())
        if result.success:
            self.finished_at = None
        return result

    def result_record(self) -> GameResultRecord | None:
        """The record for a finished game, None before that."""
        if not self.session.is_finished:
            return None
        return GameResultRecord(
            participants=self.session.players,
            result=self.session.winner,
            penalty=self.session.penalty_text,
            scope=self.scope,
            group_id=self.group_id,
        )

    def _dispatch(self, action: Action) -> ActionResult:
        result = self.reducer.apply(self.session, action)
        if not result.success:
            logger.debug(
                "Session %s rejected %s: %s",
                self.session_id, action.action_type.value, result.error,
            )
            return result

        self.session = result.new_state
        for change in result.state_changes:
            logger.info("Session %s: %s", self.session_id, change)
        return result

    def _report(self, result: ActionResult) -> None:
        if self.reporter is None:
            return

        record = self.result_record()
        try:
            self.reporter.report(record)
        except Exception as e:
            # The game stays finished; retrying is the reporter's business
            logger.exception("Session %s: failed to report result", self.session_id)
            result.warnings.append(f"Result could not be recorded: {e}")
