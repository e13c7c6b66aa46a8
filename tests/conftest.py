import pytest

from slidesolver.domains.puzzlen import NPuzzle
from slidesolver.domains.state import StateArena
from slidesolver.heuristics.linear_conflict import ManhattanDistanceWithLinearConflict


@pytest.fixture
def puzzle3():
    return NPuzzle(3)


@pytest.fixture
def arena3(puzzle3):
    return StateArena(puzzle3)


@pytest.fixture
def heuristic():
    return ManhattanDistanceWithLinearConflict()


@pytest.fixture
def scenario_rows():
    """3×3 board used throughout: Manhattan 6, no linear conflicts."""
    return [[1, 2, -1],
            [3, 4, 0],
            [6, 7, 5]]
