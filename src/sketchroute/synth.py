# synth.py
"""Synthetic drawings (connected line-segment graphs) for experiments and tests."""
from __future__ import annotations

from typing import List, Optional, Set, Tuple

import numpy as np

from .dataio import Instance

Point = Tuple[float, float]


def sketch_example() -> Instance:
    """Small house-like sketch: 7 points, 9 segments, 4 odd vertices."""
    points: List[Point] = [
        (0.0, 0.0),
        (12.0, 0.0),
        (4.732 * 4, 4.0),
        (0.0, 12.0),
        (12.0, 12.0),
        (4.732 * 4, 16.0),
        (1.732 * 4, 16.0),
    ]
    edges = [(0, 1), (0, 3), (1, 2), (1, 4), (2, 5), (3, 4), (3, 6), (4, 5), (5, 6)]
    return Instance(name="sketch", points=points, edges=edges)


def _spanning_tree(n: int, edges: List[Tuple[int, int]], rng: np.random.Generator) -> Set[int]:
    """Random spanning tree (Kruskal on shuffled edges); returns edge positions."""
    parent = list(range(n))

    def find(a: int) -> int:
        while parent[a] != a:
            parent[a] = parent[parent[a]]
            a = parent[a]
        return a

    keep: Set[int] = set()
    for k in rng.permutation(len(edges)):
        a, b = edges[int(k)]
        ra, rb = find(a), find(b)
        if ra != rb:
            parent[ra] = rb
            keep.add(int(k))
    return keep


def grid_instance(
        rows: int,
        cols: int,
        *,
        spacing: float = 10.0,
        jitter: float = 0.0,
        drop: float = 0.3,
        seed: Optional[int] = None,
        name: Optional[str] = None,
) -> Instance:
    """
    Jittered grid drawing. Each grid segment is dropped with probability
    `drop`, except those on a random spanning tree, so the result stays
    connected.
    """
    if rows < 1 or cols < 1:
        raise ValueError(f"grid must be at least 1x1, got {rows}x{cols}")
    rng = np.random.default_rng(seed)

    points: List[Point] = []
    for r in range(rows):
        for c in range(cols):
            dx, dy = rng.uniform(-jitter, jitter, size=2) if jitter > 0 else (0.0, 0.0)
            points.append((round(c * spacing + float(dx), 6), round(r * spacing + float(dy), 6)))

    grid: List[Tuple[int, int]] = []
    for r in range(rows):
        for c in range(cols):
            u = r * cols + c
            if c + 1 < cols:
                grid.append((u, u + 1))
            if r + 1 < rows:
                grid.append((u, u + cols))

    tree = _spanning_tree(len(points), grid, rng)
    coin = rng.random(len(grid))
    edges = [e for k, e in enumerate(grid) if k in tree or coin[k] >= drop]

    return Instance(
        name=name or f"grid_{rows}x{cols}_s{seed}",
        points=points,
        edges=edges,
        meta=dict(rows=rows, cols=cols, spacing=spacing, jitter=jitter, drop=drop, seed=seed),
    )


def random_points_matching(k: int, *, scale: float = 100.0, seed: Optional[int] = None) -> np.ndarray:
    """k random points; their pairwise distances feed matching benchmarks."""
    rng = np.random.default_rng(seed)
    return rng.uniform(0.0, scale, size=(k, 2))
