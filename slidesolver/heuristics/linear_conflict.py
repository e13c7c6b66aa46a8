from __future__ import annotations
import logging

from slidesolver.domains.puzzlen import EMPTY
from slidesolver.heuristics.base import Heuristic, MissingMemoError, PuzzleStateView
from slidesolver.heuristics.manhattan import manhattan_distance
from slidesolver.heuristics.score import PackedScore

logger = logging.getLogger(__name__)

# Extra moves forced by one pair of tiles in linear conflict
PAIR_PENALTY = 2


def column_conflicts(state: PuzzleStateView) -> int:
    """Pairs sharing their goal column whose goal rows are in reverse order."""
    n = state.dimension
    pairs = 0
    for x in range(n):
        for y1 in range(n - 1):
            piece1 = state.tile_at(x, y1)
            if piece1 == EMPTY or piece1 % n != x:
                continue
            goal1_y = piece1 // n
            for y2 in range(y1 + 1, n):
                piece2 = state.tile_at(x, y2)
                if piece2 == EMPTY or piece2 % n != x:
                    continue
                # y2 comes after y1 but belongs above it
                if piece2 // n < goal1_y:
                    pairs += 1
    return pairs


def row_conflicts(state: PuzzleStateView) -> int:
    """Pairs sharing their goal row whose goal columns are in reverse order."""
    n = state.dimension
    pairs = 0
    for y in range(n):
        for x1 in range(n - 1):
            piece1 = state.tile_at(x1, y)
            if piece1 == EMPTY or piece1 // n != y:
                continue
            goal1_x = piece1 % n
            for x2 in range(x1 + 1, n):
                piece2 = state.tile_at(x2, y)
                if piece2 == EMPTY or piece2 // n != y:
                    continue
                if piece2 % n < goal1_x:
                    pairs += 1
    return pairs


def linear_conflict_penalty(state: PuzzleStateView) -> int:
    return PAIR_PENALTY * (column_conflicts(state) + row_conflicts(state))


class ManhattanDistanceWithLinearConflict(Heuristic):
    """
    Manhattan distance plus 2 per linear-conflict pair, returned as a
    PackedScore so both parts stay recoverable.

    The Manhattan part of a non-root state is derived from the base value its
    parent stored for this heuristic: a single slide changes exactly one
    tile's distance by one. The state's caller must store ``score.base`` on the
    state (``PuzzleState.heuristic_value`` does) before its children are scored.
    """
    name = "linear_conflict"

    def evaluate(self, state: PuzzleStateView) -> PackedScore:
        return PackedScore(self.base_value(state), linear_conflict_penalty(state))

    def base_value(self, state: PuzzleStateView) -> int:
        parent = state.parent()
        if parent is None:
            return manhattan_distance(state)

        value = parent.cached_base_value(self)
        if value is None:
            raise MissingMemoError(
                f"Parent of {state!r} has no stored base value for {self!r}; "
                "score parents before generating their children"
            )

        x, y = parent.empty_position()
        x2, y2 = state.empty_position()
        if abs(x2 - x) + abs(y2 - y) != 1:
            # Not a single slide, so the one-tile update does not apply.
            logger.debug("Blank moved (%d,%d)->(%d,%d); recomputing Manhattan distance", x, y, x2, y2)
            return manhattan_distance(state)

        n = state.dimension
        # The tile now on the parent's blank slid there from (x2, y2).
        piece = state.tile_at(x, y)

        if x2 > x:
            # right
            return value + 1 if piece % n > x else value - 1
        if x2 < x:
            # left
            return value + 1 if piece % n < x else value - 1
        if y2 > y:
            # down
            return value + 1 if piece // n > y else value - 1
        # up
        return value + 1 if piece // n < y else value - 1
