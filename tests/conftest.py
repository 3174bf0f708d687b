from __future__ import annotations

import math
from typing import List, Tuple

import numpy as np
import pytest

from sketchroute.graph import CPPGraph
from sketchroute.motion import euclid


def unit(a, b) -> float:
    return 1.0


def make_graph(n: int, edges: List[Tuple[int, int]], dist=unit) -> CPPGraph:
    return CPPGraph(list(range(n)), edges, dist)


@pytest.fixture
def triangle() -> CPPGraph:
    return make_graph(3, [(0, 1), (1, 2), (2, 0)])


@pytest.fixture
def path4() -> CPPGraph:
    return make_graph(4, [(0, 1), (1, 2), (2, 3)])


@pytest.fixture
def house() -> CPPGraph:
    from sketchroute.synth import sketch_example
    inst = sketch_example()
    return CPPGraph(inst.points, inst.edges, euclid)


def tour_length(graph: CPPGraph, tour) -> float:
    total = 0.0
    for a, b in zip(tour, tour[1:]):
        e = graph.find_edge(a, b)
        assert e is not None
        total += e.weight
    return total


def isclose(a: float, b: float) -> bool:
    return math.isclose(a, b, rel_tol=1e-9, abs_tol=1e-9)


def weighted_graph(n: int, edges: List[Tuple[int, int, float]]) -> CPPGraph:
    """Graph on payloads 0..n-1 with one weight per vertex pair (parallel edges share it)."""
    table = {}
    for a, b, w in edges:
        table[(min(a, b), max(a, b))] = float(w)
    return CPPGraph(list(range(n)), [(a, b) for a, b, _ in edges], lambda a, b: table[(min(a, b), max(a, b))])


def random_multigraph(seed: int) -> CPPGraph:
    """Small connected multigraph: random tree plus random extra (possibly parallel) edges."""
    rng = np.random.default_rng(seed)
    n = int(rng.integers(3, 9))
    edges = [(v, int(rng.integers(0, v))) for v in range(1, n)]
    for _ in range(int(rng.integers(0, n + 1))):
        a, b = (int(x) for x in rng.choice(n, size=2, replace=False))
        edges.append((a, b))
    weights = {}
    for a, b in edges:
        weights.setdefault((min(a, b), max(a, b)), int(rng.integers(1, 7)))
    return weighted_graph(n, [(a, b, weights[(min(a, b), max(a, b))]) for a, b in edges])
