#!/usr/bin/env python3
import argparse, os
from pathlib import Path

import matplotlib
# Default to a non-interactive backend; we'll only show() if --show
if "MPLBACKEND" not in os.environ:
    matplotlib.use("Agg")
import matplotlib.pyplot as plt

from slidesolver.experiments.analyze import load_results, summarize

PANELS = ["expanded", "generated", "time_sec"]


def plot_metric(ax, table, metric):
    for (algo, n), block in table.groupby(["algorithm", "n"]):
        # offset IDA* a tiny bit so curves don’t overlap
        offset = -0.12 if algo == "A*" else 0.12
        ax.errorbar(block["depth"] + offset, block[f"{metric}_mean"], yerr=block[f"{metric}_sem"],
                    marker="o", capsize=3, label=f"{algo} | {int(n)}×{int(n)}")
    ax.set_xlabel("Depth")
    ax.set_ylabel(metric)
    ax.set_title(f"{metric} vs Depth (mean ± SEM)")
    ax.grid(True, alpha=0.3)
    ax.legend()


def save_fig(fig, outdir: Path, name: str) -> Path:
    outdir.mkdir(parents=True, exist_ok=True)
    path = outdir / f"{name}.png"
    fig.savefig(path, dpi=200, bbox_inches="tight")
    print(f"Saved: {path}")
    return path


def main(argv=None):
    ap = argparse.ArgumentParser(description="Plot runner CSVs and save PNGs.")
    ap.add_argument("csv", nargs="+", help="One or more CSV result files")
    ap.add_argument("--save", default="results/plots", help="Directory to save plots")
    ap.add_argument("--show", action="store_true", help="Also open interactive windows (if GUI available)")
    args = ap.parse_args(argv)

    table = summarize(load_results([Path(p) for p in args.csv]))
    if table.empty:
        print("No rows to plot. Are your CSVs empty?")
        return

    outdir = Path(args.save)
    base = "combo" if len(args.csv) > 1 else Path(args.csv[0]).stem

    fig, axes = plt.subplots(1, len(PANELS), figsize=(15, 5))
    for ax, metric in zip(axes, PANELS):
        plot_metric(ax, table, metric)
    plt.tight_layout()
    save_fig(fig, outdir, f"{base}_combined")

    if args.show:
        plt.show()
    plt.close(fig)


if __name__ == "__main__":
    main()
