# validate.py
from __future__ import annotations

from collections import Counter
from typing import Dict, List, Sequence, Tuple

import logging

from .euler import odd_mult_vertices
from .graph import CPPGraph

logger = logging.getLogger(__name__)


def _key(a: int, b: int) -> Tuple[int, int]:
    return (a, b) if a <= b else (b, a)


def check_even_degrees(graph: CPPGraph) -> None:
    """Every multiplicity-weighted degree must be even after augmentation."""
    odd = odd_mult_vertices(graph)
    if odd:
        logger.warning("[CHECK] odd degree after augmentation: %s%s", odd[:20], "..." if len(odd) > 20 else "")
        raise RuntimeError(f"graph is not Eulerian: {len(odd)} vertices with odd degree")


def validate_tour(graph: CPPGraph, tour: Sequence[int]) -> None:
    """Validate:
    1) the tour is closed
    2) consecutive vertices are joined by an edge
    3) every vertex pair is traversed exactly as often as its edges' total multiplicity
       (so every edge at least once, doubled edges twice)

    Parallel edges between the same two vertices are pooled.
    """
    if not tour:
        raise RuntimeError("empty tour")
    if tour[0] != tour[-1]:
        raise RuntimeError(f"tour is not closed: starts at {tour[0]}, ends at {tour[-1]}")

    expected: Dict[Tuple[int, int], int] = {}
    for e in graph.edges:
        k = _key(e.u, e.v)
        expected[k] = expected.get(k, 0) + e.mult

    walked: Counter = Counter()
    for step, (a, b) in enumerate(zip(tour, tour[1:])):
        k = _key(a, b)
        if k not in expected:
            raise RuntimeError(f"step {step}: no edge between {a} and {b}")
        walked[k] += 1

    missing: List[Tuple[int, int]] = [k for k in expected if walked[k] == 0]
    wrong = [(k, walked[k], n) for k, n in expected.items() if walked[k] not in (0, n)]
    if missing or wrong:
        logger.warning("[CHECK] missing: %s%s", missing[:20], "..." if len(missing) > 20 else "")
        logger.warning("[CHECK] count (edge, walked, expected): %s%s", wrong[:20], "..." if len(wrong) > 20 else "")
        raise RuntimeError(
            f"tour coverage check failed: {len(missing)} edges never walked, {len(wrong)} walked the wrong number of times"
        )
