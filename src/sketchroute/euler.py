# src/sketchroute/euler.py
from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from .errors import InvalidIndex
from .graph import CPPGraph


# =========================
# Eulerization
# =========================

def augment(graph: CPPGraph, paths: Sequence[Sequence[int]]) -> int:
    """
    Double the T-join: the symmetric difference of the given paths.

    An edge covered by an odd number of paths gets mult 2, one covered an
    even number of times keeps mult 1 (greedy pairings can share edges).
    Setting mult := 2 is idempotent; returns how many edges changed.
    """
    cover: Dict[int, int] = {}
    for path in paths:
        for a, b in zip(path, path[1:]):
            e = graph.find_edge(a, b)
            if e is None:
                raise InvalidIndex(f"no edge between {a} and {b} on T-join path")
            cover[e.eid] = cover.get(e.eid, 0) + 1

    doubled = 0
    for eid, n in cover.items():
        e = graph.edges[eid]
        if n % 2 == 1 and e.mult != 2:
            e.mult = 2
            doubled += 1
    return doubled


def odd_mult_vertices(graph: CPPGraph) -> List[int]:
    return [v.vid for v in graph.vertices if graph.mult_degree(v.vid) % 2 == 1]


# =========================
# Tour extraction
# =========================

def _next_edge(graph: CPPGraph, vid: int, remaining: List[int], cursor: List[int]) -> int:
    # skip exhausted edges at the front of the adjacency list
    adj = graph.vertices[vid].adjacent
    c = cursor[vid]
    while c < len(adj) and remaining[adj[c]] == 0:
        c += 1
    cursor[vid] = c
    return adj[c] if c < len(adj) else -1


def cycle_walk(
        graph: CPPGraph,
        start: int,
        remaining: List[int],
        cursor: Optional[List[int]] = None,
) -> List[int]:
    """
    Wander from `start` consuming edge multiplicity until stuck.
    On an Eulerian graph that only happens back at `start`.
    """
    if cursor is None:
        cursor = [0] * graph.n_vertices
    cycle = [start]
    cur = start
    while True:
        eid = _next_edge(graph, cur, remaining, cursor)
        if eid < 0:
            break
        remaining[eid] -= 1
        cur = graph.edges[eid].other(cur)
        cycle.append(cur)
    return cycle


def euler_tour(graph: CPPGraph, start: int = 0) -> Tuple[List[int], List[int]]:
    """
    Closed walk from `start` using every unit of multiplicity once.

    Walks a cycle from `start`, then revisits each vertex of that cycle in
    order, splicing in any cycle still hanging off it. The work stack holds
    the vertices left to revisit, so depth does not grow with the input.

    Returns (tour vertex ids, leftover multiplicity per edge). Leftovers are
    all zero when the edges form one connected Eulerian graph.
    """
    remaining = [e.mult for e in graph.edges]
    cursor = [0] * graph.n_vertices

    tour: List[int] = []
    stack = [start]
    while stack:
        v = stack.pop()
        cycle = cycle_walk(graph, v, remaining, cursor)
        if len(cycle) == 1:
            tour.append(v)
        else:
            stack.extend(reversed(cycle))
    return tour, remaining
