"""
Session State - The value the ladder state machine operates on.

Design principles:
- Immutable: every transition returns a new Session
- Owned by exactly one controller
- Only the reducer produces new sessions
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum

from .graph import LadderGraph
from .tracer import Trace

MIN_PLAYERS = 2
MAX_PLAYERS = 8


class SessionStatus(Enum):
    """Lifecycle of a ladder session."""
    SETUP = "setup"  # Waiting for players and penalty
    READY = "ready"  # Ladder built, nobody revealed yet
    IN_PROGRESS = "in_progress"  # At least one player passed
    FINISHED = "finished"  # Someone landed on the penalty


@dataclass(frozen=True)
class Reveal:
    """
    A player's descent that has been computed but not yet committed.

    The caller animates `trace`, then commits. Until then the session
    refuses other selections and resets.
    """
    column: int
    player: str
    trace: Trace
    is_penalty: bool


@dataclass(frozen=True)
class Session:
    """
    Complete ladder game state at a point in time.

    Columns are player indices: players[i] starts at column i.
    """
    players: tuple[str, ...] = ()
    penalty_text: str = ""
    graph: LadderGraph | None = None
    status: SessionStatus = SessionStatus.SETUP
    resolved_columns: frozenset[int] = field(default_factory=frozenset)
    winner_column: int | None = None
    pending_reveal: Reveal | None = None

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def penalty_column(self) -> int | None:
        if not self.players:
            return None
        return self.num_players - 1

    @property
    def reveal_in_flight(self) -> bool:
        return self.pending_reveal is not None

    @property
    def is_finished(self) -> bool:
        return self.status == SessionStatus.FINISHED

    @property
    def winner(self) -> str | None:
        """Name of the player who got the penalty."""
        if self.winner_column is None:
            return None
        return self.players[self.winner_column]

    @property
    def passed_players(self) -> list[str]:
        return [self.players[c] for c in sorted(self.resolved_columns)]

    def unresolved_columns(self) -> list[int]:
        """Columns that can still be selected."""
        if self.is_finished:
            return []
        return [
            c for c in range(self.num_players)
            if c not in self.resolved_columns
        ]

    def _copy_with(self, **kwargs) -> Session:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
