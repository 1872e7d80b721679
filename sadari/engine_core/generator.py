"""
Ladder Generator - Builds a random ladder over N columns.

For every eligible level:
1. List the adjacent column pairs (0,1), (1,2), ..., (N-2, N-1)
2. Shuffle them
3. Scan once; a pair whose columns are both still free on this level
   gets a rung with probability p, and both columns become used

No rung that would break the matching invariant is ever added, so there
is no filtering pass afterwards.

Randomness comes from an injectable random.Random. Pass a seeded one
for reproducible ladders.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import random

from ..errors import LadderPreconditionError
from .graph import LadderGraph, Rung, level_y

logger = logging.getLogger(__name__)

MIN_COLUMNS = 2
DEFAULT_CONNECTION_PROBABILITY = 0.4
DEFAULT_BAND = (0.1, 0.9)  # Skip the top and bottom decile


def default_level_count(column_count: int) -> int:
    return max(12, 3 * column_count)


@dataclass(frozen=True)
class LadderOptions:
    """
    Tuning knobs for ladder generation.

    Attributes:
        level_count: Number of levels (default max(12, 3*N))
        band: (low, high) fraction of the ladder height that may carry rungs
        connection_probability: Chance a free adjacent pair gets a rung
    """
    level_count: int | None = None
    band: tuple[float, float] = DEFAULT_BAND
    connection_probability: float = DEFAULT_CONNECTION_PROBABILITY

    def validate(self) -> list[str]:
        errors: list[str] = []
        if self.level_count is not None and self.level_count < 1:
            errors.append(f"level_count must be >= 1, got {self.level_count}")
        low, high = self.band
        if not 0.0 <= low <= high <= 1.0:
            errors.append(f"band must satisfy 0 <= low <= high <= 1, got {self.band}")
        if not 0.0 <= self.connection_probability <= 1.0:
            errors.append(
                "connection_probability must be within [0, 1], "
                f"got {self.connection_probability}"
            )
        return errors

    def resolve_level_count(self, column_count: int) -> int:
        if self.level_count is None:
            return default_level_count(column_count)
        return self.level_count


class LadderGenerator:
    """
    Generates ladders.

    Usage:
        generator = LadderGenerator(rng=random.Random(7))
        graph = generator.generate(4)
    """

    def __init__(
        self,
        options: LadderOptions | None = None,
        rng: random.Random | None = None,
    ):
        self.options = options or LadderOptions()
        errors = self.options.validate()
        if errors:
            raise LadderPreconditionError("; ".join(errors))
        self.rng = rng or random.Random()

    def eligible_levels(self, level_count: int) -> list[int]:
        """Levels whose height falls inside the rung band."""
        low, high = self.options.band
        return [
            level for level in range(level_count)
            if low * 100 <= level_y(level, level_count) <= high * 100
        ]

    def generate(self, column_count: int) -> LadderGraph:
        """
        Build a new ladder.

        Raises:
            LadderPreconditionError: if column_count < 2
        """
        if column_count < MIN_COLUMNS:
            raise LadderPreconditionError(
                f"A ladder needs at least {MIN_COLUMNS} columns, got {column_count}"
            )

        level_count = self.options.resolve_level_count(column_count)
        p = self.options.connection_probability
        rungs: set[Rung] = set()

        for level in self.eligible_levels(level_count):
            pairs = list(range(column_count - 1))
            self.rng.shuffle(pairs)

            used: set[int] = set()
            for left in pairs:
                right = left + 1
                if left in used or right in used:
                    continue
                if self.rng.random() < p:
                    rungs.add(Rung.between(left, level))
                    used.add(left)
                    used.add(right)

        logger.debug(
            "Generated ladder: %d columns, %d levels, %d rungs",
            column_count, level_count, len(rungs),
        )
        return LadderGraph(
            column_count=column_count,
            level_count=level_count,
            rungs=frozenset(rungs),
        )


def generate(
    column_count: int,
    options: LadderOptions | None = None,
    rng: random.Random | None = None,
) -> LadderGraph:
    """
    Convenience function to generate a ladder.

    Creates a LadderGenerator and calls generate().
    """
    return LadderGenerator(options=options, rng=rng).generate(column_count)
