# src/sketchroute/tjoin.py
from __future__ import annotations

import math
from typing import List, Optional, Tuple

import logging
logger = logging.getLogger(__name__)

from .errors import DisconnectedGraph
from .graph import CPPGraph
from .matching import MatchGraph
from .shortest import dijkstra

MATCH_METHODS = ("greedy", "exact", "auto")


def build_match_graph(graph: CPPGraph, odds: Optional[List[int]] = None) -> MatchGraph:
    """
    Complete graph over the odd-degree vertices. Edge (i, j) weighs the
    shortest-path distance odd[i] -> odd[j] and carries that path.
    """
    if odds is None:
        odds = graph.odd_vertices()
    mg: MatchGraph[List[int]] = MatchGraph(len(odds))

    for i, src in enumerate(odds):
        sp = dijkstra(graph, src)
        for j in range(i + 1, len(odds)):
            dst = odds[j]
            d = sp.dist[dst]
            if math.isinf(d):
                raise DisconnectedGraph(f"odd vertices {src} and {dst} are not connected")
            mg.add_edge(i, j, d, sp.path_to(dst))
    return mg


def resolve_method(method: str, k: int, exact_max_odd: int) -> str:
    if method not in MATCH_METHODS:
        raise ValueError(f"unknown match method: {method}")
    if method == "auto":
        return "exact" if k <= exact_max_odd else "greedy"
    if method == "exact" and k > exact_max_odd:
        logger.warning("[MATCH] exact matching on %d odd vertices (guard=%d) may not finish", k, exact_max_odd)
    return method


def get_tjoin(
        graph: CPPGraph,
        method: str = "greedy",
        *,
        exact_max_odd: int = 12,
) -> Tuple[List[List[int]], float, str]:
    """
    Minimum (exact) or near-minimum (greedy) T-join of the odd vertices.

    Returns (paths, matching weight, method actually used). Doubling the
    edges of every path makes the graph Eulerian.
    """
    odds = graph.odd_vertices()
    used = resolve_method(method, len(odds), exact_max_odd)
    if not odds:
        return [], 0.0, used

    mg = build_match_graph(graph, odds)
    if used == "exact":
        paths = mg.match_exact()
    else:
        paths = mg.match_greedy()
    weight = mg.matching_weight()
    logger.info("[TJOIN] odd=%d method=%s weight=%.6g", len(odds), used, weight)
    return paths, weight, used
