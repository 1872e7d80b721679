"""
Result Reporter - Interface between a finished ladder and its recorder.

Reports are fire-and-forget. A reporter that raises does not undo the
finished game; the controller logs the failure and moves on.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable
import time

LADDER_GAME_TYPE = "LADDER"


class ResultScope(Enum):
    """Who a result is recorded for."""
    ME = "me"  # Personal history of the current user
    GROUP = "group"  # Shared history of a household group


@dataclass(frozen=True)
class GameResultRecord:
    """
    The record submitted once per finished game.

    `result` is the name of the player who got the penalty.
    """
    participants: tuple[str, ...]
    result: str
    penalty: str
    game_type: str = LADDER_GAME_TYPE
    scope: ResultScope = ResultScope.ME
    group_id: str | None = None

    def to_dict(self) -> dict:
        """Wire shape expected by the result recording API."""
        return {
            "gameType": self.game_type,
            "participants": list(self.participants),
            "result": self.result,
            "penalty": self.penalty,
        }


class ResultReporter(ABC):
    """
    Receives finished game results.

    Implementations may raise; callers treat that as a non-fatal failure.
    """

    @abstractmethod
    def report(self, record: GameResultRecord) -> None:
        """Submit a finished game result."""
        pass


class CallbackResultReporter(ResultReporter):
    """Adapts a plain callable into a ResultReporter."""

    def __init__(self, callback: Callable[[GameResultRecord], None]):
        self.callback = callback

    def report(self, record: GameResultRecord) -> None:
        self.callback(record)


@dataclass(frozen=True)
class StoredGameResult:
    """A reported result with the time it was recorded."""
    record: GameResultRecord
    created_at: float


@dataclass
class InMemoryResultStore(ResultReporter):
    """
    Keeps reported results in memory, split by scope.

    Backs the result history endpoints. Nothing is written to disk.
    """
    _personal: list[StoredGameResult] = field(default_factory=list)
    _groups: dict[str, list[StoredGameResult]] = field(default_factory=dict)

    def report(self, record: GameResultRecord) -> None:
        stored = StoredGameResult(record=record, created_at=time.time())
        if record.scope == ResultScope.GROUP:
            if not record.group_id:
                raise ValueError("Group results need a group_id")
            self._groups.setdefault(record.group_id, []).append(stored)
        else:
            self._personal.append(stored)

    def results_for_me(self) -> list[StoredGameResult]:
        """Personal results, newest first."""
        return list(reversed(self._personal))

    def results_for_group(self, group_id: str) -> list[StoredGameResult]:
        """Results recorded for a group, newest first."""
        return list(reversed(self._groups.get(group_id, [])))
