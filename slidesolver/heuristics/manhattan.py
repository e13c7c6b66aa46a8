from __future__ import annotations

from slidesolver.domains.puzzlen import EMPTY
from slidesolver.heuristics.base import PuzzleStateView


def manhattan_distance(state: PuzzleStateView) -> int:
    """Sum of Manhattan distances to goal positions (blank ignored)."""
    n = state.dimension
    dist = 0
    for x in range(n):
        for y in range(n):
            piece = state.tile_at(x, y)
            if piece == EMPTY:
                continue
            dist += abs(x - piece % n) + abs(y - piece // n)
    return dist
