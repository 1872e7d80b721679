"""
API Service - Business logic layer between the HTTP API and the engine.

The service:
1. Translates API requests to controller calls
2. Manages sessions
3. Formats responses for the app

This layer is framework-agnostic. Failures come back as ErrorResponse
values; the app decides the HTTP status.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone

from ..engine_core.action import ActionResult, VALIDATION_ERROR
from ..engine_core.graph import column_x, level_y
from ..reporting import InMemoryResultStore, ResultScope, StoredGameResult
from ..session import GameSessionController, SessionManager
from .schemas import (
    CreateSessionRequest,
    SelectPlayerRequest,
    SessionResponse,
    LadderResponse,
    RevealResponse,
    CommitResponse,
    GameResultInfo,
    GameResultListResponse,
    ErrorResponse,
    ErrorCode,
    PlayerInfo,
    PlayerStatus,
    RungInfo,
    SessionStatus,
    Waypoint,
)
from .schemas import ResultScope as APIResultScope

# Animation pacing used by the app: per waypoint plus a fixed pause
REVEAL_MS_PER_WAYPOINT = 300
REVEAL_PAUSE_MS = 1500


def suggested_delay_ms(waypoint_count: int) -> int:
    return waypoint_count * REVEAL_MS_PER_WAYPOINT + REVEAL_PAUSE_MS


def _not_found(session_id: str) -> ErrorResponse:
    return ErrorResponse(
        error="Session not found",
        error_code=ErrorCode.SESSION_NOT_FOUND,
        details={"session_id": session_id},
    )


def _rejected(result: ActionResult) -> ErrorResponse:
    if result.error_code == VALIDATION_ERROR:
        return ErrorResponse(
            error=result.error,
            error_code=ErrorCode.VALIDATION_ERROR,
            details={"errors": result.errors},
        )
    return ErrorResponse(error=result.error, error_code=ErrorCode.INVALID_TRANSITION)


@dataclass
class APIService:
    """
    Main API service for the ladder game.

    Usage:
        service = APIService()
        session = service.create_session(request)
        reveal = service.select_player(session.session_id, SelectPlayerRequest(column=0))
        outcome = service.commit_reveal(session.session_id)
    """
    result_store: InMemoryResultStore = field(default_factory=InMemoryResultStore)
    session_manager: SessionManager | None = None
    seed: int | None = None
    session_max_age_seconds: int = 3600
    finished_grace_seconds: float = 300
    max_finished_sessions: int = 32

    def __post_init__(self):
        if self.session_manager is None:
            self.session_manager = SessionManager(reporter=self.result_store, seed=self.seed)

    def create_session(self, request: CreateSessionRequest) -> SessionResponse | ErrorResponse:
        """
        Create a session and confirm its setup.

        Stale and long-finished sessions are evicted first.
        A rejected setup leaves no session behind.
        """
        self.session_manager.cleanup_stale_sessions(
            max_age_seconds=self.session_max_age_seconds,
            finished_grace_seconds=self.finished_grace_seconds,
            max_finished_sessions=self.max_finished_sessions,
        )
        scope = ResultScope(request.scope.value)
        try:
            controller = self.session_manager.create_session(scope=scope, group_id=request.group_id)
        except ValueError as e:
            return ErrorResponse(
                error=str(e),
                error_code=ErrorCode.VALIDATION_ERROR,
                details={"errors": [str(e)]},
            )

        result = controller.confirm(request.players, request.penalty)
        if not result.success:
            self.session_manager.end_session(controller.session_id)
            return _rejected(result)

        return self._session_to_response(controller)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        controller = self.session_manager.get_session(session_id)
        if not controller:
            return _not_found(session_id)
        return self._session_to_response(controller)

    def get_ladder(self, session_id: str) -> LadderResponse | ErrorResponse:
        """Ladder layout for rendering."""
        controller = self.session_manager.get_session(session_id)
        if not controller:
            return _not_found(session_id)

        graph = controller.session.graph
        return LadderResponse(
            session_id=session_id,
            column_count=graph.column_count,
            level_count=graph.level_count,
            column_x=[column_x(c, graph.column_count) for c in range(graph.column_count)],
            rungs=[
                RungInfo(
                    level=rung.level,
                    from_column=rung.from_column,
                    to_column=rung.to_column,
                    y=level_y(rung.level, graph.level_count),
                )
                for rung in graph.sorted_rungs()
            ],
        )

    def select_player(
        self,
        session_id: str,
        request: SelectPlayerRequest,
    ) -> RevealResponse | ErrorResponse:
        """Start a reveal for one player."""
        controller = self.session_manager.get_session(session_id)
        if not controller:
            return _not_found(session_id)

        if request.column is not None and request.player is not None:
            return ErrorResponse(
                error="Send either column or player, not both",
                error_code=ErrorCode.VALIDATION_ERROR,
                details={"errors": ["Send either column or player, not both"]},
            )

        column = request.column
        if column is None and request.player is not None:
            column = controller.column_of(request.player.strip())
            if column is None:
                return ErrorResponse(
                    error=f"No player named {request.player!r}",
                    error_code=ErrorCode.INVALID_TRANSITION,
                )
        if column is None:
            return ErrorResponse(
                error="Either column or player is required",
                error_code=ErrorCode.VALIDATION_ERROR,
                details={"errors": ["Either column or player is required"]},
            )

        result = controller.select_player(column)
        if not result.success:
            return _rejected(result)

        reveal = result.reveal
        return RevealResponse(
            session_id=session_id,
            column=reveal.column,
            player=reveal.player,
            waypoints=[Waypoint(x=x, y=y) for x, y in reveal.trace.waypoints],
            final_column=reveal.trace.final_column,
            is_penalty=reveal.is_penalty,
            suggested_delay_ms=suggested_delay_ms(len(reveal.trace.waypoints)),
            status=SessionStatus(controller.status.value),
        )

    def commit_reveal(self, session_id: str) -> CommitResponse | ErrorResponse:
        """Commit the reveal in flight."""
        controller = self.session_manager.get_session(session_id)
        if not controller:
            return _not_found(session_id)

        result = controller.commit_reveal()
        if not result.success:
            return _rejected(result)

        reveal = result.reveal
        session = controller.session
        return CommitResponse(
            session_id=session_id,
            column=reveal.column,
            player=reveal.player,
            outcome=PlayerStatus.PENALTY if result.finished else PlayerStatus.PASSED,
            status=SessionStatus(session.status.value),
            finished=result.finished,
            winner=session.winner,
            penalty=session.penalty_text if result.finished else None,
            warnings=result.warnings,
        )

    def reset(self, session_id: str) -> SessionResponse | ErrorResponse:
        controller = self.session_manager.get_session(session_id)
        if not controller:
            return _not_found(session_id)

        result = controller.reset()
        if not result.success:
            return _rejected(result)
        return self._session_to_response(controller)

    def end_session(self, session_id: str) -> bool:
        return self.session_manager.end_session(session_id)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_sessions()

    def get_my_results(self) -> GameResultListResponse:
        return GameResultListResponse(
            scope=APIResultScope.ME,
            results=[self._result_to_info(r) for r in self.result_store.results_for_me()],
        )

    def get_group_results(self, group_id: str) -> GameResultListResponse:
        return GameResultListResponse(
            scope=APIResultScope.GROUP,
            group_id=group_id,
            results=[
                self._result_to_info(r)
                for r in self.result_store.results_for_group(group_id)
            ],
        )

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _session_to_response(self, controller: GameSessionController) -> SessionResponse:
        session = controller.session
        players = [
            PlayerInfo(column=column, name=name, status=self._player_status(controller, column))
            for column, name in enumerate(session.players)
        ]
        return SessionResponse(
            session_id=controller.session_id,
            status=SessionStatus(session.status.value),
            players=players,
            penalty=session.penalty_text,
            penalty_column=session.penalty_column,
            resolved_columns=sorted(session.resolved_columns),
            winner=session.winner,
            winner_column=session.winner_column,
            reveal_in_flight=session.reveal_in_flight,
            scope=APIResultScope(controller.scope.value),
            group_id=controller.group_id,
            created_at=controller.created_at,
        )

    def _player_status(self, controller: GameSessionController, column: int) -> PlayerStatus:
        session = controller.session
        if session.winner_column == column:
            return PlayerStatus.PENALTY
        if column in session.resolved_columns:
            return PlayerStatus.PASSED
        if session.pending_reveal and session.pending_reveal.column == column:
            return PlayerStatus.REVEALING
        return PlayerStatus.WAITING

    def _result_to_info(self, stored: StoredGameResult) -> GameResultInfo:
        record = stored.record
        return GameResultInfo(
            game_type=record.game_type,
            participants=list(record.participants),
            result=record.result,
            penalty=record.penalty,
            created_at=datetime.fromtimestamp(stored.created_at, tz=timezone.utc).isoformat(),
        )
