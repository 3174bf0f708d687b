"""Generate synthetic drawing instances (connected jittered grids).

Produces JSON files compatible with `sketchroute.dataio.read_instance()`,
plus the small house sketch.

Usage:
  python instances/generate_dummy_instances.py --out data/instances --n 10 --rows 4 --cols 5 --seed 1
"""

from __future__ import annotations

import argparse
from pathlib import Path

from sketchroute.dataio import write_instance
from sketchroute.synth import grid_instance, sketch_example


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--out", type=str, required=True, help="output folder")
    ap.add_argument("--n", type=int, default=10, help="number of grid instances")
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--rows", type=int, default=4)
    ap.add_argument("--cols", type=int, default=5)
    ap.add_argument("--spacing", type=float, default=10.0)
    ap.add_argument("--jitter", type=float, default=2.0)
    ap.add_argument("--drop", type=float, default=0.3, help="probability of dropping a non-tree grid segment")
    args = ap.parse_args()

    out = Path(args.out)
    out.mkdir(parents=True, exist_ok=True)

    write_instance(sketch_example(), out / "sketch.json")
    for i in range(args.n):
        seed = args.seed + i
        inst = grid_instance(
            args.rows, args.cols,
            spacing=args.spacing, jitter=args.jitter, drop=args.drop,
            seed=seed, name=f"grid_{i:03d}",
        )
        write_instance(inst, out / f"{inst.name}.json")

    print(f"[OK] wrote {args.n + 1} instances -> {out}")


if __name__ == "__main__":
    main()
