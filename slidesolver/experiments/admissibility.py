#!/usr/bin/env python3
"""
Brute-force check of the Manhattan + linear-conflict heuristic.

Every board within ``max_depth`` moves of the goal gets its exact distance from
BFS, and is scored twice: as a search root (full scan) and as the child of its
BFS parent (incremental Manhattan update). Disagreeing Manhattan values always
fail the check. Overestimates are listed, and fail it only with ``--strict``:
counting 2 per reversed pair overshoots on a handful of far 3×3 boards.
"""
from __future__ import annotations
import argparse, logging, sys
from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd

from slidesolver.domains.puzzlen import EMPTY, NPuzzle
from slidesolver.domains.state import StateArena
from slidesolver.heuristics.base import Heuristic
from slidesolver.heuristics.linear_conflict import ManhattanDistanceWithLinearConflict
from slidesolver.search.bfs import bfs_tree

logger = logging.getLogger(__name__)


def score_boards(n: int = 3, max_depth: Optional[int] = None, heuristic: Optional[Heuristic] = None) -> pd.DataFrame:
    dom = NPuzzle(n)
    heuristic = heuristic or ManhattanDistanceWithLinearConflict()
    dist, parent = bfs_tree(dom.GOAL, dom.neighbors, max_depth)
    logger.debug("BFS reached %d boards (max_depth=%s)", len(dist), max_depth)

    arena = StateArena(dom)
    rows = []
    for board, true_dist in dist.items():
        mark = arena.mark()
        root_score = arena.add_root(board).heuristic_value(heuristic)
        p = parent[board]
        if p is None:
            incremental_base = root_score.base
        else:
            p_state = arena.add_root(p)
            p_state.heuristic_value(heuristic)
            child = arena.add_child(p_state.id, board, board.index(EMPTY))
            incremental_base = heuristic.evaluate(child).base
        arena.rollback(mark)
        rows.append({
            "board": " ".join(map(str, board)),
            "true": true_dist,
            "base": root_score.base,
            "penalty": root_score.penalty,
            "total": root_score.total,
            "incremental_base": incremental_base,
        })
    return pd.DataFrame(rows)


def summarize(df: pd.DataFrame) -> dict:
    true = df["true"].to_numpy()
    total = df["total"].to_numpy()
    base = df["base"].to_numpy()
    nonzero = true > 0
    return {
        "boards": int(len(df)),
        "overestimates": int(np.count_nonzero(total > true)),
        "max_overshoot": int(np.max(total - true, initial=0)),
        "incremental_mismatches": int(np.count_nonzero(base != df["incremental_base"].to_numpy())),
        "mean_slack": float(np.mean(true - total)) if len(df) else 0.0,
        "mean_ratio": float(np.mean(total[nonzero] / true[nonzero])) if nonzero.any() else 1.0,
        "mean_conflict_gain": float(np.mean(total - base)) if len(df) else 0.0,
    }


def main(argv=None):
    ap = argparse.ArgumentParser(description="Check admissibility and incremental consistency against BFS distances.")
    ap.add_argument("--n", type=int, default=3, help="Board side (3×3 covers the full space in reasonable time)")
    ap.add_argument("--max_depth", type=int, default=None, help="Stop BFS at this distance from the goal")
    ap.add_argument("--out", type=Path, default=Path("results/admissibility.csv"))
    ap.add_argument("--strict", action="store_true",
                    help="Also fail when any board is overestimated (pairwise counting can overshoot on far boards)")
    ap.add_argument("--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    df = score_boards(args.n, args.max_depth)
    args.out.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(args.out, index=False)

    stats = summarize(df)
    for k, v in stats.items():
        print(f"{k:>24}: {v:.4f}" if isinstance(v, float) else f"{k:>24}: {v}")
    print(f"Wrote {args.out}")

    if stats["overestimates"]:
        worst = df.loc[df["total"] > df["true"]].sort_values("true")
        print(f"Overestimated boards ({len(worst)}):")
        print(worst.to_string(index=False))
    if stats["incremental_mismatches"] or (args.strict and stats["overestimates"]):
        print("Heuristic check FAILED")
        sys.exit(1)


if __name__ == "__main__":
    main()
