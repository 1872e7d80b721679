"""
Reducer - Applies actions to a ladder session.

The reducer is the single point of state mutation.
All session changes must go through apply_action().

Design principles:
- (session, action) -> ActionResult with the new session
- Validates before applying; rejections are results, not exceptions
- The only impurity is the generator's random source
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .action import Action, ActionType, ActionResult, INVALID_TRANSITION, VALIDATION_ERROR
from .generator import LadderGenerator
from .state import Session, SessionStatus, Reveal, MIN_PLAYERS, MAX_PLAYERS
from .tracer import trace


@dataclass
class ValidationResult:
    """Result of setup validation."""
    valid: bool
    errors: list[str]
    players: list[str]
    penalty_text: str


def validate_setup(players: list[str], penalty_text: str) -> ValidationResult:
    """
    Validate players and penalty text for a new ladder.

    Names and penalty are stripped before checking.
    """
    errors: list[str] = []
    cleaned = [(name or "").strip() for name in players]
    penalty = (penalty_text or "").strip()

    if not MIN_PLAYERS <= len(cleaned) <= MAX_PLAYERS:
        errors.append(
            f"Need {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(cleaned)}"
        )
    for i, name in enumerate(cleaned):
        if not name:
            errors.append(f"Player {i + 1} has a blank name")
    if not penalty:
        errors.append("Penalty text is required")

    return ValidationResult(
        valid=not errors,
        errors=errors,
        players=cleaned,
        penalty_text=penalty,
    )


@dataclass
class Reducer:
    """
    Reducer applies actions to ladder sessions.

    Stateless - all state is in Session.
    The generator supplies fresh ladders on setup and reset.
    """
    generator: LadderGenerator = field(default_factory=LadderGenerator)

    def apply(self, state: Session, action: Action) -> ActionResult:
        """
        Apply an action to the session.

        Returns ActionResult with new session or error.
        """
        validation_error = self._validate_action(state, action)
        if validation_error:
            return ActionResult.failure(validation_error, error_code=INVALID_TRANSITION)

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code=INVALID_TRANSITION,
            )
        return handler(state, action)

    def _validate_action(self, state: Session, action: Action) -> str | None:
        """
        Check the action is allowed in the current status.

        Returns error message if invalid, None if valid.
        """
        kind = action.action_type

        if state.status == SessionStatus.SETUP:
            if kind != ActionType.CONFIRM_SETUP:
                return "Ladder not set up - only setup is allowed"
            return None

        if kind == ActionType.CONFIRM_SETUP:
            return "Ladder is already set up"

        if kind == ActionType.COMMIT_REVEAL:
            if not state.reveal_in_flight:
                return "No reveal in progress"
            return None

        if state.reveal_in_flight:
            return "A reveal is already in progress"

        if kind == ActionType.SELECT_PLAYER:
            if state.status == SessionStatus.FINISHED:
                return "Game is over - no more selections"
            column = action.payload.column
            if column is None or not 0 <= column < state.num_players:
                return f"Column {column} is not a player on this ladder"
            if column in state.resolved_columns:
                return f"{state.players[column]} has already gone down the ladder"

        return None

    def _get_handler(self, action_type: ActionType):
        handlers = {
            ActionType.CONFIRM_SETUP: self._handle_confirm_setup,
            ActionType.SELECT_PLAYER: self._handle_select_player,
            ActionType.COMMIT_REVEAL: self._handle_commit_reveal,
            ActionType.RESET: self._handle_reset,
        }
        return handlers.get(action_type)

    def _handle_confirm_setup(self, state: Session, action: Action) -> ActionResult:
        result = validate_setup(action.payload.players or [], action.payload.penalty_text or "")
        if not result.valid:
            return ActionResult.failure(
                f"Setup rejected with {len(result.errors)} error(s)",
                error_code=VALIDATION_ERROR,
                errors=result.errors,
            )

        graph = self.generator.generate(len(result.players))
        new_state = Session(
            players=tuple(result.players),
            penalty_text=result.penalty_text,
            graph=graph,
            status=SessionStatus.READY,
        )
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Ladder built for {len(result.players)} players"],
        )

    def _handle_select_player(self, state: Session, action: Action) -> ActionResult:
        column = action.payload.column
        path = trace(column, state.graph)
        reveal = Reveal(
            column=column,
            player=state.players[column],
            trace=path,
            is_penalty=path.final_column == state.penalty_column,
        )
        new_state = state._copy_with(pending_reveal=reveal)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"{reveal.player} starts down the ladder"],
            reveal=reveal,
        )

    def _handle_commit_reveal(self, state: Session, action: Action) -> ActionResult:
        reveal = state.pending_reveal

        if reveal.is_penalty:
            new_state = state._copy_with(
                status=SessionStatus.FINISHED,
                winner_column=reveal.column,
                pending_reveal=None,
            )
            return ActionResult.success_with_state(
                new_state,
                changes=[f"{reveal.player} gets the penalty: {state.penalty_text}"],
                reveal=reveal,
                finished=True,
            )

        new_state = state._copy_with(
            status=SessionStatus.IN_PROGRESS,
            resolved_columns=state.resolved_columns | {reveal.column},
            pending_reveal=None,
        )
        return ActionResult.success_with_state(
            new_state,
            changes=[f"{reveal.player} passes"],
            reveal=reveal,
        )

    def _handle_reset(self, state: Session, action: Action) -> ActionResult:
        new_state = state._copy_with(
            graph=self.generator.generate(state.num_players),
            status=SessionStatus.READY,
            resolved_columns=frozenset(),
            winner_column=None,
            pending_reveal=None,
        )
        return ActionResult.success_with_state(new_state, changes=["New ladder built"])


def apply_action(state: Session, action: Action, generator: LadderGenerator | None = None) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and calls apply().
    """
    reducer = Reducer(generator=generator) if generator else Reducer()
    return reducer.apply(state, action)
