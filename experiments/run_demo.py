"""Run a small end-to-end demo (synthetic grid drawings).

Produces under outputs/<case>/:
- metrics_<method>.csv, totals.csv, summary_stats.csv
- <method>/<instance>_tour.csv  (vertex sequence for the plotter)
- tour plots (if --plot)

Usage (from repo root):
  python -m experiments.run_demo

Optional:
  python -m experiments.run_demo --n_seeds 5 --method auto --rows 5 --cols 6 --plot
  python -m experiments.run_demo --instances data/instances
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from sketchroute.cfg import CFG
from sketchroute.runner import run_case


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--case", type=str, default="demo_case")
    ap.add_argument("--instances", type=str, default=None, help="Folder of instance *.json. If relative, resolved from repo root.")
    ap.add_argument("--method", type=str, default="greedy", choices=["greedy", "exact", "auto"])
    ap.add_argument("--exact_max_odd", type=int, default=12)
    ap.add_argument("--dist", type=str, default="euclid", choices=["euclid", "chebyshev"])
    ap.add_argument("--seed0", type=int, default=1000)
    ap.add_argument("--n_seeds", type=int, default=10)
    ap.add_argument("--rows", type=int, default=4)
    ap.add_argument("--cols", type=int, default=5)
    ap.add_argument("--drop", type=float, default=0.3)
    ap.add_argument("--n_jobs", type=int, default=1)
    ap.add_argument("--plot", action="store_true", help="enable tour plots")
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s")

    repo = Path(__file__).resolve().parents[1]

    cfg = CFG()
    cfg.CASE_NAME = args.case
    cfg.MATCH_METHOD = args.method
    cfg.EXACT_MAX_ODD = args.exact_max_odd
    cfg.DIST_MODE = args.dist
    cfg.SEED0 = args.seed0
    cfg.N_SEEDS = args.n_seeds
    cfg.GRID_ROWS = args.rows
    cfg.GRID_COLS = args.cols
    cfg.GRID_DROP = args.drop
    cfg.N_JOBS = args.n_jobs
    cfg.PLOT = bool(args.plot)

    if args.instances:
        cfg.INSTANCE_DIR = args.instances

    # resolve relative paths so the demo can run from any cwd
    p = Path(cfg.INSTANCE_DIR)
    if not p.is_absolute():
        p = repo / p
    cfg.INSTANCE_DIR = str(p.resolve())
    cfg.OUT_ROOT = str((repo / cfg.OUT_ROOT).resolve())

    run_case(cfg)


if __name__ == "__main__":
    main()
