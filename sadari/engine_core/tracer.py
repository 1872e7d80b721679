"""
Path Tracer - Follows one player down the ladder.

Tracing is a pure function of (start column, graph): no randomness and
no hidden state. The returned waypoints are what a UI animates; the
final column decides the outcome.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from ..errors import LadderPreconditionError
from .generator import MIN_COLUMNS
from .graph import LadderGraph, Rung, column_x, level_y

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Trace:
    """
    The descent of a single player.

    waypoints always has at least two points: the top of the start
    column and the bottom of the final column.
    """
    start_column: int
    waypoints: tuple[tuple[float, float], ...]
    final_column: int

    @property
    def crossings(self) -> int:
        """Number of rungs crossed on the way down."""
        return sum(
            1 for a, b in zip(self.waypoints, self.waypoints[1:])
            if a[1] == b[1]
        )


def _rung_index(graph: LadderGraph) -> dict[tuple[int, int], Rung]:
    """Map (level, column) to the rung touching that column on that level."""
    graph.ensure_valid()
    index: dict[tuple[int, int], Rung] = {}
    for rung in graph.rungs:
        index[(rung.level, rung.from_column)] = rung
        index[(rung.level, rung.to_column)] = rung
    return index


def _check_columns(graph: LadderGraph) -> None:
    if graph.column_count < MIN_COLUMNS:
        raise LadderPreconditionError(
            f"a ladder needs at least {MIN_COLUMNS} columns, got {graph.column_count}"
        )


def _check_start(start_column: int, graph: LadderGraph) -> None:
    if not 0 <= start_column < graph.column_count:
        raise LadderPreconditionError(
            f"start column {start_column} is outside 0..{graph.column_count - 1}"
        )


def _descend(
    start_column: int,
    graph: LadderGraph,
    index: dict[tuple[int, int], Rung],
) -> Trace:
    n = graph.column_count
    current = start_column
    waypoints = [(column_x(current, n), 0.0)]

    for level in range(graph.level_count):
        y = level_y(level, graph.level_count)
        rung = index.get((level, current))
        waypoints.append((column_x(current, n), y))
        if rung is not None:
            current = rung.other_end(current)
            waypoints.append((column_x(current, n), y))

    waypoints.append((column_x(current, n), 100.0))
    return Trace(
        start_column=start_column,
        waypoints=tuple(waypoints),
        final_column=current,
    )


def trace(start_column: int, graph: LadderGraph) -> Trace:
    """
    Trace a descent from start_column.

    Raises:
        LadderPreconditionError: fewer than two columns, or start column
            is not on the ladder
        LadderInvariantError: the graph is malformed
    """
    _check_columns(graph)
    _check_start(start_column, graph)
    result = _descend(start_column, graph, _rung_index(graph))
    logger.debug(
        "Traced column %d -> %d (%d crossings)",
        start_column, result.final_column, result.crossings,
    )
    return result


def outcome_map(graph: LadderGraph) -> tuple[int, ...]:
    """Final column for every start column, in start column order."""
    _check_columns(graph)
    index = _rung_index(graph)
    return tuple(
        _descend(column, graph, index).final_column
        for column in range(graph.column_count)
    )


def penalty_start_column(graph: LadderGraph) -> int:
    """The start column whose descent ends on the penalty column."""
    return outcome_map(graph).index(graph.penalty_column)
