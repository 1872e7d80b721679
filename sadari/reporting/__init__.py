"""
Reporting Module - Hands finished games to a result recorder.

The engine never stores results itself. When a ladder finishes, the
controller builds a GameResultRecord and passes it to a ResultReporter.
What happens next (HTTP call, database row, toast) belongs to the
reporter implementation.
"""

from .reporter import (
    GameResultRecord,
    ResultScope,
    ResultReporter,
    CallbackResultReporter,
    InMemoryResultStore,
    StoredGameResult,
    LADDER_GAME_TYPE,
)

__all__ = [
    "GameResultRecord",
    "ResultScope",
    "ResultReporter",
    "CallbackResultReporter",
    "InMemoryResultStore",
    "StoredGameResult",
    "LADDER_GAME_TYPE",
]
