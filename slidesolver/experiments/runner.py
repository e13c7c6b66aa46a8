from __future__ import annotations
import argparse, csv, logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

from slidesolver.domains.puzzlen import Board, NPuzzle
from slidesolver.domains.state import StateArena
from slidesolver.heuristics.linear_conflict import ManhattanDistanceWithLinearConflict
from slidesolver.search.a_star import a_star
from slidesolver.search.ida_star import ida_star

HEADER = [
    "algorithm", "heuristic", "n", "depth", "seed",
    "h0", "h0_base", "h0_penalty",
    "expanded", "generated", "duplicates", "g", "time_sec",
    "peak_open", "peak_closed", "peak_recursion", "bound_final", "tie_break",
    "termination",
]


@dataclass
class Instance:
    seed: int
    depth: int
    state: Board


def generate_instances(dom: NPuzzle, depths: List[int], per_depth: int, start_seed: int = 0) -> List[Instance]:
    out: List[Instance] = []
    seed = start_seed
    for d in depths:
        made = 0
        attempts = 0
        while made < per_depth:
            s = dom.scramble(d, seed)
            attempts += 1
            if dom.is_solvable(s):
                out.append(Instance(seed=seed, depth=d, state=s))
                made += 1
            seed += 1
            if attempts > per_depth * 2000:
                raise RuntimeError(f"Instance generation took too long at depth={d}. Check solvability logic.")
    return out


def run_instances(dom: NPuzzle, insts: List[Instance], algo: str = "both", tie_break: str = "h",
                  timeout_sec: float | None = None) -> List[dict]:
    """Solve every instance with the requested algorithms; one row dict per run."""
    heuristic = ManhattanDistanceWithLinearConflict()
    rows: List[dict] = []
    for inst in insts:
        h0 = StateArena(dom).add_root(inst.state).heuristic_value(heuristic)
        runs = []
        if algo in ("a", "both"):
            runs.append(a_star(inst.state, heuristic, dom, tie_break=tie_break,
                               return_path=False, timeout_sec=timeout_sec))
        if algo in ("ida", "both"):
            runs.append(ida_star(inst.state, heuristic, dom, return_path=False, timeout_sec=timeout_sec))
        for res in runs:
            rows.append({
                "algorithm": res.get("algorithm", ""), "heuristic": heuristic.name,
                "n": dom.N, "depth": inst.depth, "seed": inst.seed,
                "h0": h0.total, "h0_base": h0.base, "h0_penalty": h0.penalty,
                "expanded": res.get("expanded", ""), "generated": res.get("generated", ""),
                "duplicates": res.get("duplicates", ""), "g": res.get("g", ""),
                "time_sec": f"{res.get('time', 0.0):.6f}",
                "peak_open": res.get("peak_open", ""), "peak_closed": res.get("peak_closed", ""),
                "peak_recursion": res.get("peak_recursion", ""), "bound_final": res.get("bound_final", ""),
                "tie_break": res.get("tie_break", ""), "termination": res.get("termination", "ok"),
            })
    return rows


def main(argv=None):
    ap = argparse.ArgumentParser(description="A*/IDA* N-puzzle runner with the Manhattan + linear-conflict heuristic")
    ap.add_argument("--algo", choices=["a", "ida", "both"], default="both")
    ap.add_argument("--n", type=int, default=3, help="Board side (N×N)")
    ap.add_argument("--depths", type=int, nargs="+", default=[6, 10, 14, 18, 22, 26])
    ap.add_argument("--per_depth", type=int, default=30)
    ap.add_argument("--seed", type=int, default=0, help="First scramble seed")
    ap.add_argument("--tie_break", choices=["h", "g", "fifo", "lifo"], default="h")
    ap.add_argument("--timeout_sec", type=float, default=None, help="Per-instance wall time")
    ap.add_argument("--out", type=Path, default=Path("results/last_run.csv"))
    ap.add_argument("--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    dom = NPuzzle(args.n)
    insts = generate_instances(dom, args.depths, args.per_depth, start_seed=args.seed)
    rows = run_instances(dom, insts, algo=args.algo, tie_break=args.tie_break, timeout_sec=args.timeout_sec)

    args.out.parent.mkdir(parents=True, exist_ok=True)
    with args.out.open("w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=HEADER)
        w.writeheader()
        w.writerows(rows)

    print(f"Wrote {args.out} ({len(insts)} instances, {len(rows)} runs)")


if __name__ == "__main__":
    main()
