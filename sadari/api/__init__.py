"""
API Module - HTTP interface for the household app.

The app:
1. Creates a session from the setup screen
2. Fetches the ladder layout and draws it
3. Selects a player, animates the returned path, then commits
4. Resets for a new ladder or ends the session
5. Reads result history

All state is session-scoped and in memory.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    SelectPlayerRequest,
    # Responses
    SessionResponse,
    LadderResponse,
    RevealResponse,
    CommitResponse,
    GameResultListResponse,
    ErrorResponse,
    # Shared
    PlayerInfo,
    RungInfo,
    Waypoint,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    "CreateSessionRequest",
    "SelectPlayerRequest",
    "SessionResponse",
    "LadderResponse",
    "RevealResponse",
    "CommitResponse",
    "GameResultListResponse",
    "ErrorResponse",
    "PlayerInfo",
    "RungInfo",
    "Waypoint",
    "ErrorCode",
    "APIService",
    "create_app",
]
