"""
Session Module - Manages ephemeral ladder sessions.

A session represents one ladder game:
- Created when the setup screen is confirmed
- Holds the ladder and who has already gone down it
- Reports the result when someone hits the penalty
- Reset builds a new ladder for the same players

Sessions are in-memory only.
"""

from .controller import GameSessionController
from .manager import SessionManager

__all__ = [
    "GameSessionController",
    "SessionManager",
]
