"""
Pytest fixtures for Sadari tests.
"""

import random

import pytest

from sadari.engine_core.generator import LadderGenerator
from sadari.engine_core.graph import LadderGraph, Rung
from sadari.reporting import InMemoryResultStore
from sadari.session import GameSessionController


class FixedGenerator(LadderGenerator):
    """Hands out prepared ladders in order, then falls back to random ones."""

    def __init__(self, graphs: list[LadderGraph], seed: int = 0):
        super().__init__(rng=random.Random(seed))
        self.graphs = list(graphs)
        self.calls = 0

    def generate(self, column_count: int) -> LadderGraph:
        self.calls += 1
        if self.graphs:
            return self.graphs.pop(0)
        return super().generate(column_count)


@pytest.fixture
def swap_first_two() -> LadderGraph:
    """3 columns mapping [0, 1, 2] -> [1, 0, 2]."""
    return LadderGraph(
        column_count=3,
        level_count=12,
        rungs=frozenset({Rung.between(0, level=4)}),
    )


@pytest.fixture
def result_store() -> InMemoryResultStore:
    return InMemoryResultStore()


@pytest.fixture
def scenario_controller(swap_first_two, result_store) -> GameSessionController:
    """Controller set up with A, B, C and 'dishes' on the swap_first_two ladder."""
    controller = GameSessionController(
        reporter=result_store,
        generator=FixedGenerator([swap_first_two], seed=99),
    )
    result = controller.confirm(["A", "B", "C"], "dishes")
    assert result.success
    return controller


@pytest.fixture
def seeded_generator() -> LadderGenerator:
    return LadderGenerator(rng=random.Random(1234))
