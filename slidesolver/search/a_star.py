from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple
import heapq
import itertools
import logging
import math
from time import perf_counter

from slidesolver.domains.puzzlen import Board, NPuzzle
from slidesolver.domains.state import PuzzleState, StateArena
from slidesolver.heuristics.base import Heuristic

logger = logging.getLogger(__name__)


@dataclass
class PQItem:
    f: int
    h: int
    g: int
    state: PuzzleState


def a_star(
    start: Board,
    heuristic: Heuristic,
    puzzle: Optional[NPuzzle] = None,
    tie_break: str = "h",
    return_path: bool = True,
    timeout_sec: float | None = None,
):
    """
    A* with instrumentation over arena states.
    Each generated state is scored through ``PuzzleState.heuristic_value`` so the
    heuristic can build on the base value its parent stored; h is ``score.total``.
    """
    puzzle = puzzle or NPuzzle(math.isqrt(len(start)))
    arena = StateArena(puzzle)
    t0 = perf_counter()

    open_heap: List[Tuple[Tuple[int, int, int], int, PQItem]] = []
    counter = itertools.count()

    def priority_tuple(f: int, g: int, h: int, ctr: int) -> Tuple[int, int, int]:
        if tie_break == "h":   return (f, h, ctr)
        if tie_break == "g":   return (f, -g, ctr)
        if tie_break == "fifo":return (f, 0,  ctr)
        if tie_break == "lifo":return (f, 0, -ctr)
        return (f, h, ctr)

    root = arena.add_root(start)
    h0 = root.heuristic_value(heuristic).total
    heapq.heappush(open_heap, (priority_tuple(h0, 0, h0, next(counter)), next(counter), PQItem(h0, h0, 0, root)))

    best_g: Dict[Board, int] = {root.board: 0}
    # Expanded boards, for peak_closed only; best_g decides what gets expanded.
    closed: Set[Board] = set()

    expanded = 0
    generated = 0
    duplicates = 0
    seen_ever: Set[Board] = {root.board}

    peak_open = 1
    peak_closed = 0

    def result(node: Optional[PQItem], termination: str):
        return {
            "path": node.state.path() if node is not None and return_path else None,
            "g": node.g if node is not None else None,
            "expanded": expanded,
            "generated": generated,
            "duplicates": duplicates,
            "peak_open": peak_open,
            "peak_closed": peak_closed,
            "time": perf_counter() - t0,
            "algorithm": "A*",
            "tie_break": tie_break,
            "termination": termination,
        }

    while open_heap:
        if timeout_sec is not None and (perf_counter() - t0) > timeout_sec:
            logger.debug("A* timed out after %d expansions", expanded)
            return result(None, "timeout")

        peak_open = max(peak_open, len(open_heap))
        _, _, node = heapq.heappop(open_heap)
        board = node.state.board
        # Linear-conflict scores are not consistent, so a board may be reached
        # again more cheaply after expansion; only the cheapest entry is expanded.
        if node.g > best_g[board]:
            continue

        if node.state.is_goal():
            logger.debug("A* solved in %d moves (%d expanded)", node.g, expanded)
            return result(node, "ok")

        closed.add(board)
        expanded += 1
        peak_closed = max(peak_closed, len(closed))

        for child in node.state.successors():
            s2 = child.board
            g2 = node.g + 1
            generated += 1
            if s2 in seen_ever:
                duplicates += 1
            else:
                seen_ever.add(s2)

            if g2 < best_g.get(s2, math.inf):
                best_g[s2] = g2
                h2 = child.heuristic_value(heuristic).total
                f2 = g2 + h2
                pr = priority_tuple(f2, g2, h2, next(counter))
                heapq.heappush(open_heap, (pr, next(counter), PQItem(f2, h2, g2, child)))

    # Open exhausted without finding goal
    return result(None, "exhausted")
