"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between the household app and the
ladder engine.

Error Codes:
- VALIDATION_ERROR: Setup was rejected (player count, blank names, blank penalty)
- INVALID_TRANSITION: The action is not allowed in the session's current state
- SESSION_NOT_FOUND: Session does not exist or has been ended
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    SETUP = "setup"
    READY = "ready"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class PlayerStatus(str, Enum):
    """Where a player stands in the current ladder."""
    WAITING = "waiting"
    REVEALING = "revealing"
    PASSED = "passed"
    PENALTY = "penalty"


class ResultScope(str, Enum):
    """Which history a finished game is recorded in."""
    ME = "me"
    GROUP = "group"


class ErrorCode(str, Enum):
    """Structured error codes."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class PlayerInfo(BaseModel):
    """A participant and their column."""
    column: int
    name: str
    status: PlayerStatus = PlayerStatus.WAITING


class Waypoint(BaseModel):
    """A point on a descent path, both axes on a 0..100 scale."""
    x: float
    y: float


class RungInfo(BaseModel):
    """A rung for rendering."""
    level: int
    from_column: int
    to_column: int
    y: float = Field(description="Vertical position, 0 (top) to 100 (bottom)")


# =============================================================================
# Requests
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Players and penalty from the setup screen."""
    players: list[str] = Field(description="Participant names, 2 to 8")
    penalty: str = Field(description="What the loser has to do")
    scope: ResultScope = ResultScope.ME
    group_id: Optional[str] = Field(None, description="Required when scope is 'group'")


class SelectPlayerRequest(BaseModel):
    """
    Pick a player by column or by name. Send exactly one of the two.

    Names may repeat; a name resolves to the first player with that
    name, so use column to pick a later duplicate.
    """
    column: Optional[int] = Field(None, ge=0)
    player: Optional[str] = None


# =============================================================================
# Responses
# =============================================================================

class SessionResponse(BaseModel):
    """Current state of a ladder session."""
    session_id: str
    status: SessionStatus
    players: list[PlayerInfo] = Field(default_factory=list)
    penalty: str = ""
    penalty_column: Optional[int] = None
    resolved_columns: list[int] = Field(default_factory=list)
    winner: Optional[str] = None
    winner_column: Optional[int] = None
    reveal_in_flight: bool = False
    scope: ResultScope = ResultScope.ME
    group_id: Optional[str] = None
    created_at: float
    api_version: str = "v1"


class LadderResponse(BaseModel):
    """The ladder layout needed to draw it."""
    session_id: str
    column_count: int
    level_count: int
    column_x: list[float]
    rungs: list[RungInfo] = Field(default_factory=list)


class RevealResponse(BaseModel):
    """A started reveal: the path to animate before committing."""
    session_id: str
    column: int
    player: str
    waypoints: list[Waypoint]
    final_column: int
    is_penalty: bool
    suggested_delay_ms: int = Field(description="How long to animate before calling /commit")
    status: SessionStatus


class CommitResponse(BaseModel):
    """Outcome of a committed reveal."""
    session_id: str
    column: int
    player: str
    outcome: PlayerStatus
    status: SessionStatus
    finished: bool = False
    winner: Optional[str] = None
    penalty: Optional[str] = None
    warnings: list[str] = Field(default_factory=list)


class GameResultInfo(BaseModel):
    """A recorded game result."""
    game_type: str
    participants: list[str]
    result: str
    penalty: str
    created_at: str = Field(description="ISO 8601 timestamp")


class GameResultListResponse(BaseModel):
    """Result history for a user or group."""
    scope: ResultScope
    group_id: Optional[str] = None
    results: list[GameResultInfo] = Field(default_factory=list)


class SessionListResponse(BaseModel):
    session_ids: list[str]
    count: int


class EndSessionResponse(BaseModel):
    success: bool
    session_id: str


class ErrorResponse(BaseModel):
    """Standard error body."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
