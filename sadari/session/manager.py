"""
Session Manager - Creates and tracks ladder sessions.

Sessions are EPHEMERAL:
- In-memory only, never persisted
- A new ladder per session (and per reset)
- Removed when the user leaves or the session goes stale

The only thing that outlives a session is the result record handed to
the reporter.
"""

from __future__ import annotations
import logging
import random
import time

from ..engine_core.generator import LadderGenerator, LadderOptions
from ..reporting import ResultReporter, ResultScope
from .controller import GameSessionController

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Manages ladder sessions.

    Responsibilities:
    - Create controllers wired to the shared reporter
    - Look sessions up by ID
    - Clean up finished or stale sessions
    """

    def __init__(
        self,
        reporter: ResultReporter | None = None,
        options: LadderOptions | None = None,
        seed: int | None = None,
    ):
        self._sessions: dict[str, GameSessionController] = {}
        self.reporter = reporter
        self.options = options
        self.seed = seed
        self._created = 0

    def _new_generator(self) -> LadderGenerator:
        if self.seed is None:
            return LadderGenerator(options=self.options)
        # Seeded managers give each session its own reproducible stream
        return LadderGenerator(
            options=self.options,
            rng=random.Random(self.seed + self._created),
        )

    def create_session(
        self,
        scope: ResultScope = ResultScope.ME,
        group_id: str | None = None,
    ) -> GameSessionController:
        """
        Create a new session in SETUP.

        Args:
            scope: Whether results go to personal or group history
            group_id: Group to record results for (scope GROUP only)

        Returns:
            Controller waiting for confirm()
        """
        if scope == ResultScope.GROUP and not group_id:
            raise ValueError("group_id is required for group sessions")

        controller = GameSessionController(
            reporter=self.reporter,
            generator=self._new_generator(),
            scope=scope,
            group_id=group_id,
        )
        self._created += 1
        self._sessions[controller.session_id] = controller
        logger.info("Created session %s (%s)", controller.session_id, scope.value)
        return controller

    def get_session(self, session_id: str) -> GameSessionController | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """Remove a session. Returns False if it did not exist."""
        controller = self._sessions.pop(session_id, None)
        if controller is None:
            return False
        logger.info("Ended session %s", session_id)
        return True

    def list_sessions(self) -> list[str]:
        """List IDs of all tracked sessions."""
        return list(self._sessions)

    def cleanup_stale_sessions(
        self,
        max_age_seconds: int = 3600,
        finished_grace_seconds: float = 300,
        max_finished_sessions: int | None = None,
    ) -> int:
        """
        Remove stale sessions.

        A session is stale when it is older than max_age and not
        mid-reveal, or when it finished at least finished_grace_seconds
        ago. The grace period leaves time to read the result or reset.
        With max_finished_sessions set, only that many finished sessions
        are kept within the grace period, most recently finished first.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, controller in self._sessions.items()
            if self._is_stale(controller, current_time, max_age_seconds, finished_grace_seconds)
        ]
        if max_finished_sessions is not None:
            finished = sorted(
                (c for sid, c in self._sessions.items()
                 if c.finished_at is not None and sid not in to_remove),
                key=lambda c: c.finished_at,
                reverse=True,
            )
            to_remove.extend(c.session_id for c in finished[max_finished_sessions:])
        for session_id in to_remove:
            self.end_session(session_id)
        return len(to_remove)

    def _is_stale(
        self,
        controller: GameSessionController,
        current_time: float,
        max_age_seconds: float,
        finished_grace_seconds: float,
    ) -> bool:
        if controller.session.reveal_in_flight:
            return False
        if controller.finished_at is not None:
            if current_time - controller.finished_at >= finished_grace_seconds:
                return True
        return current_time - controller.created_at > max_age_seconds
