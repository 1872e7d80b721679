"""
Action System - Actions, payloads, and results.

Every session change is an Action applied by the reducer:
1. CONFIRM_SETUP - players and penalty entered, build the ladder
2. SELECT_PLAYER - start revealing one player's descent
3. COMMIT_REVEAL - the reveal finished animating, apply its outcome
4. RESET - new ladder, same players
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Error codes carried by failed results
INVALID_TRANSITION = "INVALID_TRANSITION"
VALIDATION_ERROR = "VALIDATION_ERROR"


class ActionType(Enum):
    """Types of actions in the ladder state machine."""
    CONFIRM_SETUP = "confirm_setup"
    SELECT_PLAYER = "select_player"
    COMMIT_REVEAL = "commit_reveal"
    RESET = "reset"


@dataclass
class ActionPayload:
    """Parameters for an action. Unused fields stay None."""
    players: list[str] | None = None
    penalty_text: str | None = None
    column: int | None = None


@dataclass
class Action:
    """A complete action to be applied to a session."""
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def confirm_setup(cls, players: list[str], penalty_text: str) -> Action:
        return cls(
            action_type=ActionType.CONFIRM_SETUP,
            payload=ActionPayload(players=list(players), penalty_text=penalty_text),
        )

    @classmethod
    def select_player(cls, column: int) -> Action:
        return cls(
            action_type=ActionType.SELECT_PLAYER,
            payload=ActionPayload(column=column),
        )

    @classmethod
    def commit_reveal(cls) -> Action:
        return cls(action_type=ActionType.COMMIT_REVEAL)

    @classmethod
    def reset(cls) -> Action:
        return cls(action_type=ActionType.RESET)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the action succeeded
    - New session (if succeeded)
    - Error message, code and details (if failed)
    - The reveal started or committed by this action, if any
    """
    success: bool
    new_state: Any | None = None  # Session
    error: str | None = None
    error_code: str | None = None
    errors: list[str] = field(default_factory=list)

    reveal: Any | None = None  # Reveal
    finished: bool = False

    # Human-readable changes, for logs and UI
    state_changes: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        errors: list[str] | None = None,
    ) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code, errors=errors or [])

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        reveal: Any | None = None,
        finished: bool = False,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            reveal=reveal,
            finished=finished,
        )
