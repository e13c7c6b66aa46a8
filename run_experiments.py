#!/usr/bin/env python3
import subprocess, sys
from pathlib import Path

def run(cmd):
    print("Running:", cmd)
    r = subprocess.run(cmd, shell=True)
    if r.returncode != 0:
        sys.exit(r.returncode)

def main():
    Path("results").mkdir(exist_ok=True)
    run("python -m slidesolver.experiments.admissibility --n 3 --out results/admissibility_p8.csv")
    run("python -m slidesolver.experiments.runner --n 3 --depths 6 10 14 18 22 --per_depth 10 --algo both --out results/p8.csv")
    run("python -m slidesolver.experiments.runner --n 4 --depths 6 10 14 18 --per_depth 10 --algo both --timeout_sec 60 --out results/p15.csv")
    run("python -m slidesolver.experiments.analyze results/p8.csv results/p15.csv --out results/summary.csv")
    run("python -m slidesolver.experiments.plot results/p8.csv results/p15.csv --save results/plots")

if __name__ == "__main__":
    main()
