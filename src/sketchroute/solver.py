# src/sketchroute/solver.py
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Tuple

import logging
logger = logging.getLogger(__name__)

from .cfg import CFG
from .errors import DisconnectedGraph, TrivialGraph
from .euler import augment, euler_tour
from .graph import CPPGraph
from .tjoin import get_tjoin, resolve_method
from .validate import check_even_degrees


@dataclass
class RouteResult:
    tour: List[int]                   # vertex ids, closed (tour[0] == tour[-1])
    path: List[Any]                   # payloads along the tour
    length: float                     # total travelled weight
    base_length: float                # every edge once
    extra_length: float               # doubled edges
    n_odd: int
    method: str
    matching_weight: float
    doubled_edges: int
    runtime_s: float = 0.0
    tjoin: List[List[int]] = field(default_factory=list)


def build(
        vertices: Sequence[Any],
        edges: Sequence[Tuple[int, int]],
        distance: Callable[[Any, Any], float],
) -> CPPGraph:
    """Build a graph; fails with InvalidIndex on an out-of-range edge."""
    return CPPGraph(vertices, edges, distance)


def _check_connected(graph: CPPGraph, root: int) -> None:
    comps = graph.connected_components()
    if len(comps) > 1:
        sizes = sorted((len(c) for c in comps), reverse=True)
        logger.warning("[CHECK] %d components, sizes: %s%s", len(comps), sizes[:10], "..." if len(sizes) > 10 else "")
        raise DisconnectedGraph(f"graph has {len(comps)} connected components; vertex {root} cannot reach them all")


def solve_route(graph: CPPGraph, cfg: Optional[CFG] = None, *, method: Optional[str] = None) -> RouteResult:
    """
    Full pipeline: T-join -> Eulerian augmentation -> closed tour.

    The graph is augmented in place; call graph.reset() before solving the
    same graph again.
    """
    cfg = cfg or CFG()
    method = method or cfg.MATCH_METHOD
    t0 = time.perf_counter()

    if graph.n_vertices == 0:
        raise TrivialGraph("graph has no vertices")
    root = int(cfg.ROOT)
    if not (0 <= root < graph.n_vertices):
        raise ValueError(f"root vertex {root} outside 0..{graph.n_vertices - 1}")
    if graph.is_augmented():
        raise RuntimeError("graph is already augmented; call reset() before solving again")

    base = graph.total_weight()
    if graph.n_edges == 0:
        used = resolve_method(method, 0, cfg.EXACT_MAX_ODD)
        logger.info("[SOLVE] no edges: single-vertex tour at %d", root)
        return RouteResult(
            tour=[root], path=[graph.data(root)], length=0.0, base_length=0.0, extra_length=0.0,
            n_odd=0, method=used, matching_weight=0.0, doubled_edges=0,
            runtime_s=time.perf_counter() - t0,
        )

    _check_connected(graph, root)

    paths, mweight, used = get_tjoin(graph, method, exact_max_odd=cfg.EXACT_MAX_ODD)
    n_doubled = augment(graph, paths)
    check_even_degrees(graph)

    tour, remaining = euler_tour(graph, root)
    if any(remaining):
        raise DisconnectedGraph(f"{sum(1 for r in remaining if r)} edges not reached from vertex {root}")
    if tour[0] != tour[-1]:
        raise RuntimeError(f"tour from {root} is not closed: ends at {tour[-1]}")

    total = graph.total_weight(with_mult=True)
    res = RouteResult(
        tour=tour,
        path=[graph.data(v) for v in tour],
        length=total,
        base_length=base,
        extra_length=total - base,
        n_odd=len(graph.odd_vertices()),
        method=used,
        matching_weight=mweight,
        doubled_edges=n_doubled,
        runtime_s=time.perf_counter() - t0,
        tjoin=paths,
    )
    logger.info(
        "[SOLVE] V=%d E=%d odd=%d doubled=%d L=%.6g (base=%.6g) steps=%d",
        graph.n_vertices, graph.n_edges, res.n_odd, n_doubled, res.length, base, len(tour) - 1,
    )
    return res


def solve(graph: CPPGraph, method: str = "greedy") -> List[Any]:
    """Closed tour as a payload sequence (first element == last)."""
    return solve_route(graph, method=method).path
