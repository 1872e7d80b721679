"""
Ladder Graph - The structure a player descends through.

A ladder is N vertical columns crossed by horizontal rungs. Rungs only
join adjacent columns, and each sits on an integer level. Levels are
shared by rung storage and path tracing, so "the rung at this level" is
an exact lookup, never a coordinate comparison.

Geometry (for rendering only):
- column x runs 0..100 left to right
- level y runs strictly between 0 (top) and 100 (bottom)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..errors import LadderInvariantError


@dataclass(frozen=True, order=True)
class Rung:
    """
    A horizontal connector between two adjacent columns.

    Ordered by (level, from_column, to_column) so a sorted list of rungs
    reads top to bottom, left to right.
    """
    level: int
    from_column: int
    to_column: int

    @classmethod
    def between(cls, column: int, level: int) -> Rung:
        """Rung joining `column` and `column + 1` at `level`."""
        return cls(level=level, from_column=column, to_column=column + 1)

    def touches(self, column: int) -> bool:
        return column == self.from_column or column == self.to_column

    def other_end(self, column: int) -> int:
        """The column reached by crossing this rung from `column`."""
        if column == self.from_column:
            return self.to_column
        if column == self.to_column:
            return self.from_column
        raise LadderInvariantError([f"column {column} is not an endpoint of {self}"])


@dataclass(frozen=True)
class LadderGraph:
    """
    An immutable ladder.

    Invariant: on any one level, no column appears in more than one rung.
    Each level is therefore a swap of disjoint adjacent pairs, and the
    whole ladder is a permutation of the columns.
    """
    column_count: int
    level_count: int
    rungs: frozenset[Rung] = field(default_factory=frozenset)

    @property
    def penalty_column(self) -> int:
        """The rightmost column, which is the penalty outcome."""
        return self.column_count - 1

    def rungs_at(self, level: int) -> list[Rung]:
        """Rungs on a single level, left to right."""
        return sorted(r for r in self.rungs if r.level == level)

    def sorted_rungs(self) -> list[Rung]:
        return sorted(self.rungs)

    def validate(self) -> list[str]:
        """
        Check structural invariants.

        Returns a list of error messages (empty if the graph is valid).
        """
        errors: list[str] = []

        if self.column_count < 1:
            errors.append(f"column_count must be >= 1, got {self.column_count}")
        if self.level_count < 1:
            errors.append(f"level_count must be >= 1, got {self.level_count}")

        used: set[tuple[int, int]] = set()
        for rung in self.sorted_rungs():
            if rung.to_column != rung.from_column + 1:
                errors.append(f"{rung} does not join adjacent columns")
            if rung.from_column < 0 or rung.to_column >= self.column_count:
                errors.append(f"{rung} is outside columns 0..{self.column_count - 1}")
            if not 0 <= rung.level < self.level_count:
                errors.append(f"{rung} is outside levels 0..{self.level_count - 1}")

            for column in (rung.from_column, rung.to_column):
                if (rung.level, column) in used:
                    errors.append(
                        f"column {column} has more than one rung at level {rung.level}"
                    )
                used.add((rung.level, column))

        return errors

    def ensure_valid(self) -> None:
        """Raise LadderInvariantError if the graph is malformed."""
        errors = self.validate()
        if errors:
            raise LadderInvariantError(errors)


def column_x(column: int, column_count: int) -> float:
    """Horizontal position of a column on a 0..100 scale."""
    if column_count == 1:
        return 50.0
    return column / (column_count - 1) * 100


def level_y(level: int, level_count: int) -> float:
    """Vertical position of a level; always strictly between 0 and 100."""
    return (level + 1) / (level_count + 1) * 100
