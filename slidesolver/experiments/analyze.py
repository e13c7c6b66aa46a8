#!/usr/bin/env python3
from __future__ import annotations
import argparse
from pathlib import Path
from typing import Iterable, Optional

import numpy as np
import pandas as pd

METRICS = ("expanded", "generated", "time_sec", "h0")


def sem(x):
    x = np.asarray(x, float)
    n = np.sum(~np.isnan(x))
    return 0.0 if n <= 1 else np.nanstd(x, ddof=1) / np.sqrt(n)


def load_ok(p: Path) -> Optional[pd.DataFrame]:
    """Read one runner CSV, keeping only runs that terminated with a solution."""
    df = pd.read_csv(p)
    if not {"algorithm", "depth", "time_sec"}.issubset(df.columns):
        return None
    if "termination" in df.columns:
        df = df[df["termination"].fillna("ok") == "ok"].copy()
    for c in METRICS:
        if c not in df.columns:
            df[c] = np.nan
    if "n" not in df.columns:
        df["n"] = np.nan
    df["file"] = p.name
    return df


def load_results(paths: Iterable[Path]) -> pd.DataFrame:
    dfs = [d for d in (load_ok(Path(p)) for p in paths) if d is not None and not d.empty]
    if not dfs:
        return pd.DataFrame()
    return pd.concat(dfs, ignore_index=True)


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """Mean, SEM and count per (algorithm, n, depth)."""
    if df.empty:
        return df
    g = (df.groupby(["algorithm", "n", "depth"], as_index=False, dropna=False)
           .agg(expanded_mean=("expanded", "mean"),
                expanded_sem=("expanded", sem),
                generated_mean=("generated", "mean"),
                generated_sem=("generated", sem),
                time_sec_mean=("time_sec", "mean"),
                time_sec_sem=("time_sec", sem),
                h0_mean=("h0", "mean"),
                g_mean=("g", "mean"),
                runs=("time_sec", "count")))
    # Heuristic informedness: how much of the optimal cost h0 already accounts for
    g["h0_over_g"] = g["h0_mean"] / g["g_mean"].replace(0, np.nan)
    return g.sort_values(["n", "depth", "algorithm"]).reset_index(drop=True)


def main(argv=None):
    ap = argparse.ArgumentParser(description="Summarize runner CSVs per algorithm and depth.")
    ap.add_argument("csv", nargs="+", type=Path, help="One or more CSV result files")
    ap.add_argument("--out", type=Path, default=None, help="Optional CSV path for the summary table")
    args = ap.parse_args(argv)

    table = summarize(load_results(args.csv))
    if table.empty:
        print("No solved runs found. Are your CSVs empty?")
        return

    with pd.option_context("display.max_rows", None, "display.width", 160):
        print(table.to_string(index=False, float_format=lambda v: f"{v:.4g}"))

    if args.out:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        table.to_csv(args.out, index=False)
        print(f"Saved: {args.out}")


if __name__ == "__main__":
    main()
