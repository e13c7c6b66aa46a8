from __future__ import annotations
from collections import deque
from time import perf_counter
from typing import Callable, Dict, List, Optional, Set, Tuple

from slidesolver.domains.puzzlen import Board

NeighborsFn = Callable[[Board], List[Tuple[Board, int]]]


def bfs(start: Board, goal: Board, neighbors_fn: NeighborsFn,
        timeout_sec: float | None = None):
    t0 = perf_counter()
    q = deque([start])
    parent: Dict[Board, Optional[Board]] = {start: None}
    expanded = generated = 0
    seen: Set[Board] = {start}
    while q:
        if timeout_sec is not None and (perf_counter() - t0) > timeout_sec:
            return {"path": None, "g": None, "expanded": expanded, "generated": generated,
                    "time": perf_counter()-t0, "algorithm": "BFS", "termination": "timeout"}
        s = q.popleft()
        if s == goal:
            path = []
            while s is not None:
                path.append(s); s = parent[s]
            return {"path": list(reversed(path)), "g": len(path) - 1, "expanded": expanded, "generated": generated,
                    "time": perf_counter()-t0, "algorithm": "BFS", "termination": "ok"}
        expanded += 1
        for s2, _ in neighbors_fn(s):
            generated += 1
            if s2 in seen: continue
            seen.add(s2); parent[s2] = s; q.append(s2)
    return {"path": None, "g": None, "expanded": expanded, "generated": generated,
            "time": perf_counter()-t0, "algorithm": "BFS", "termination": "exhausted"}


def bfs_tree(root: Board, neighbors_fn: NeighborsFn, max_depth: Optional[int] = None
             ) -> Tuple[Dict[Board, int], Dict[Board, Optional[Board]]]:
    """Exact move distances from ``root`` (up to ``max_depth``) and each board's BFS parent."""
    dist: Dict[Board, int] = {root: 0}
    parent: Dict[Board, Optional[Board]] = {root: None}
    q = deque([root])
    while q:
        s = q.popleft()
        d = dist[s]
        if max_depth is not None and d >= max_depth:
            continue
        for s2, c in neighbors_fn(s):
            if s2 in dist: continue
            dist[s2] = d + c; parent[s2] = s; q.append(s2)
    return dist, parent
