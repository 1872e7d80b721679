"""
Engine Core - Ladder generation, path tracing and session state.

The engine:
1. Generates a LadderGraph with the matching invariant
2. Traces descents (pure, deterministic)
3. Manages the Session value
4. Applies actions via the reducer
"""

from .graph import LadderGraph, Rung, column_x, level_y
from .generator import LadderGenerator, LadderOptions, generate
from .tracer import Trace, trace, outcome_map, penalty_start_column
from .state import Session, SessionStatus, Reveal, MIN_PLAYERS, MAX_PLAYERS
from .action import Action, ActionType, ActionPayload, ActionResult
from .reducer import Reducer, apply_action, validate_setup

__all__ = [
    "LadderGraph",
    "Rung",
    "column_x",
    "level_y",
    "LadderGenerator",
    "LadderOptions",
    "generate",
    "Trace",
    "trace",
    "outcome_map",
    "penalty_start_column",
    "Session",
    "SessionStatus",
    "Reveal",
    "MIN_PLAYERS",
    "MAX_PLAYERS",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Reducer",
    "apply_action",
    "validate_setup",
]
