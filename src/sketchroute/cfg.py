# cfg.py
from dataclasses import dataclass


@dataclass
class CFG:
    # Case
    CASE_NAME: str = "demo_case"
    INSTANCE_DIR: str = "data/instances"

    # Output
    OUT_ROOT: str = "outputs"

    # Matching strategy for the T-join
    # - "greedy": O(k^2) heuristic (default)
    # - "exact" : branch and bound, exponential in the odd-vertex count
    # - "auto"  : exact while k <= EXACT_MAX_ODD, greedy above
    MATCH_METHOD: str = "greedy"
    EXACT_MAX_ODD: int = 12

    # Tour root vertex (closed tour starts and ends here)
    ROOT: int = 0

    # Distance between payload points
    # - "euclid"   : straight-line length
    # - "chebyshev": max(|dx|, |dy|), time for two axes moving together
    DIST_MODE: str = "euclid"

    # Check every tour against the graph before writing it
    VALIDATE: bool = True

    # Motion handoff: plotter starts here, coordinates in drawing units
    ORIGIN_X: float = 0.0
    ORIGIN_Y: float = 0.0

    # Synthetic instances (used when INSTANCE_DIR holds no *.json)
    SEED0: int = 1000
    N_SEEDS: int = 20
    GRID_ROWS: int = 4
    GRID_COLS: int = 5
    GRID_SPACING: float = 10.0
    GRID_JITTER: float = 2.0
    GRID_DROP: float = 0.3

    # Parallel
    # - 1 : serial (default)
    # - >1: parallel across instances using ProcessPoolExecutor
    N_JOBS: int = 1

    # Reproducibility
    DUMP_CONFIG: bool = True

    # Plot
    PLOT: bool = True
    PLOT_MAX_INSTANCES: int = 6
    PLOT_SHOW_ORDER: bool = True
