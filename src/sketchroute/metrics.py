# metrics.py
from __future__ import annotations

from typing import Any, Dict, List
import statistics

from .graph import CPPGraph
from .motion import relative_moves, travel_length
from .solver import RouteResult


def compute_tour_metrics(
        graph: CPPGraph,
        res: RouteResult,
        *,
        origin=(0.0, 0.0),
        with_moves: bool = True,
) -> Dict[str, Any]:
    """Compute per-instance metrics.

    L_base : every edge once (lower bound of any covering tour)
    L_extra: length of the doubled T-join edges
    L_tour : L_base + L_extra
    L_move : Euclidean length of the relative moves handed to the plotter,
             including the approach from `origin` (only if with_moves)
    """
    n_odd = res.n_odd
    row: Dict[str, Any] = dict(
        n_vertices=graph.n_vertices,
        n_edges=graph.n_edges,
        n_odd=n_odd,
        method=res.method,
        n_doubled=res.doubled_edges,
        n_steps=max(len(res.tour) - 1, 0),
        L_base=res.base_length,
        L_extra=res.extra_length,
        L_tour=res.length,
        W_match=res.matching_weight,
        tour_over_base=(res.length / res.base_length if res.base_length > 0 else 0.0),
        runtime_s=res.runtime_s,
    )
    if with_moves:
        row["L_move"] = travel_length(relative_moves(res.path, origin=origin))
    return row


def aggregate_totals(rows: List[Dict[str, Any]]) -> Dict[str, Any]:
    if not rows:
        return dict(
            N_instance=0,
            n_odd_sum=0,
            n_doubled_sum=0,
            L_base_sum=0.0,
            L_extra_sum=0.0,
            L_tour_sum=0.0,
            ratio_avg=0.0,
            runtime_sum=0.0,
        )

    return dict(
        N_instance=len(rows),
        n_odd_sum=int(sum(r.get("n_odd", 0) for r in rows)),
        n_doubled_sum=int(sum(r.get("n_doubled", 0) for r in rows)),
        L_base_sum=sum(r.get("L_base", 0.0) for r in rows),
        L_extra_sum=sum(r.get("L_extra", 0.0) for r in rows),
        L_tour_sum=sum(r.get("L_tour", 0.0) for r in rows),
        ratio_avg=statistics.mean([r.get("tour_over_base", 0.0) for r in rows]),
        runtime_sum=sum(r.get("runtime_s", 0.0) for r in rows),
    )
