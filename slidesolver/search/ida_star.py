from __future__ import annotations
from typing import List, Optional, Set
import logging
import math
from time import perf_counter

from slidesolver.domains.puzzlen import Board, NPuzzle
from slidesolver.domains.state import PuzzleState, StateArena
from slidesolver.heuristics.base import Heuristic

logger = logging.getLogger(__name__)


def ida_star(
    start: Board,
    heuristic: Heuristic,
    puzzle: Optional[NPuzzle] = None,
    return_path: bool = True,
    timeout_sec: float | None = None,
):
    """
    IDA* with instrumentation and duplicate counting.
    States below a node are dropped from the arena once the node is fully explored.
    """
    puzzle = puzzle or NPuzzle(math.isqrt(len(start)))
    arena = StateArena(puzzle)
    t0 = perf_counter()
    TIMEOUT = object()

    expanded = 0
    generated = 0
    duplicates = 0
    ever_seen: Set[Board] = set()
    max_depth = 0
    solution: Optional[List[Board]] = None
    solution_g: Optional[int] = None

    def dfs(node: PuzzleState, g: int, bound: int, depth: int, pathset: Set[Board]):
        """
        Depth-first step for IDA*.
        Returns TIMEOUT, -1 when the goal is found, or the smallest f that
        exceeded ``bound`` in this subtree.
        """
        nonlocal expanded, generated, duplicates, max_depth, solution, solution_g
        if timeout_sec is not None and (perf_counter() - t0) > timeout_sec:
            return TIMEOUT

        max_depth = max(max_depth, depth)
        f_here = g + node.heuristic_value(heuristic).total
        if f_here > bound:
            return f_here
        if node.is_goal():
            solution_g = g
            solution = node.path() if return_path else None
            return -1

        expanded += 1
        min_next = math.inf
        mark = arena.mark()

        for child in node.successors():
            s2 = child.board
            if s2 in pathset:
                continue

            generated += 1
            if s2 in ever_seen:
                duplicates += 1
            else:
                ever_seen.add(s2)

            pathset.add(s2)
            t = dfs(child, g + 1, bound, depth + 1, pathset)
            pathset.remove(s2)

            if t is TIMEOUT:
                return TIMEOUT
            if t == -1:
                return -1
            if t < min_next:
                min_next = t

        arena.rollback(mark)
        return min_next

    root = arena.add_root(start)
    bound = root.heuristic_value(heuristic).total
    ever_seen.add(root.board)

    def result(termination: str):
        return {
            "path": solution,
            "g": solution_g,
            "expanded": expanded,
            "generated": generated,
            "duplicates": duplicates,
            "peak_recursion": max_depth,
            "bound_final": bound,
            "time": perf_counter() - t0,
            "algorithm": "IDA*",
            "termination": termination,
        }

    while True:
        t = dfs(root, 0, bound, 0, {root.board})
        if t is TIMEOUT:
            return result("timeout")
        if t == -1:
            return result("ok")
        if t == math.inf:
            return result("exhausted")
        logger.debug("IDA* raising bound %d -> %d", bound, t)
        bound = int(t)
