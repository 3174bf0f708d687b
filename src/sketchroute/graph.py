# src/sketchroute/graph.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Generic, List, Optional, Sequence, Set, Tuple, TypeVar

import logging
logger = logging.getLogger(__name__)

from .errors import InvalidIndex, InvalidWeight

D = TypeVar("D")


# =========================
# Data structures
# =========================

@dataclass
class Vertex(Generic[D]):
    vid: int
    data: D
    adjacent: List[int] = field(default_factory=list)  # edge ids, insertion order


@dataclass
class Edge:
    eid: int
    u: int
    v: int
    weight: float
    mult: int = 1  # 1 = traverse once, 2 = doubled by the T-join

    def other(self, vid: int) -> int:
        return self.v if vid == self.u else self.u


# =========================
# Graph
# =========================

class CPPGraph(Generic[D]):
    """
    Undirected weighted graph for the Chinese Postman Problem.

    Vertices and edges live in two arenas addressed by dense integer ids;
    adjacency lists hold edge ids.  Topology is fixed after construction,
    only the per-edge multiplicity changes (T-join doubling, reset).
    """

    def __init__(
            self,
            data: Sequence[D],
            edges: Sequence[Tuple[int, int]],
            dist: Callable[[D, D], float],
    ) -> None:
        n = len(data)
        pairs: List[Tuple[int, int]] = []
        for k, e in enumerate(edges):
            a, b = int(e[0]), int(e[1])
            if not (0 <= a < n) or not (0 <= b < n):
                raise InvalidIndex(f"edge #{k} ({e[0]}, {e[1]}) references a vertex outside 0..{n - 1}")
            pairs.append((a, b))

        self.vertices: List[Vertex[D]] = [Vertex(vid=i, data=d) for i, d in enumerate(data)]
        self.edges: List[Edge] = []
        for a, b in pairs:
            w = float(dist(self.vertices[a].data, self.vertices[b].data))
            if math.isnan(w) or math.isinf(w) or w < 0.0:
                raise InvalidWeight(f"distance({a}, {b}) = {w}; weights must be finite and non-negative")
            e = Edge(eid=len(self.edges), u=a, v=b, weight=w)
            self.edges.append(e)
            self.vertices[a].adjacent.append(e.eid)
            self.vertices[b].adjacent.append(e.eid)

        logger.debug("graph built: V=%d E=%d", len(self.vertices), len(self.edges))

    # ---- basic accessors ----

    @property
    def n_vertices(self) -> int:
        return len(self.vertices)

    @property
    def n_edges(self) -> int:
        return len(self.edges)

    def data(self, vid: int) -> D:
        return self.vertices[vid].data

    def other(self, eid: int, vid: int) -> int:
        return self.edges[eid].other(vid)

    def degree(self, vid: int) -> int:
        return len(self.vertices[vid].adjacent)

    def mult_degree(self, vid: int) -> int:
        """Degree counting each incident edge `mult` times."""
        return sum(self.edges[eid].mult for eid in self.vertices[vid].adjacent)

    def odd_vertices(self) -> List[int]:
        return [v.vid for v in self.vertices if len(v.adjacent) % 2 == 1]

    def total_weight(self, *, with_mult: bool = False) -> float:
        if with_mult:
            return float(sum(e.weight * e.mult for e in self.edges))
        return float(sum(e.weight for e in self.edges))

    def find_edge(self, a: int, b: int) -> Optional[Edge]:
        """Edge joining `a` and `b` (scan of the smaller adjacency), or None."""
        if len(self.vertices[b].adjacent) < len(self.vertices[a].adjacent):
            a, b = b, a
        for eid in self.vertices[a].adjacent:
            e = self.edges[eid]
            if e.other(a) == b:
                return e
        return None

    # ---- connectivity ----

    def connected_components(self) -> List[Set[int]]:
        seen: Set[int] = set()
        comps: List[Set[int]] = []
        for v in self.vertices:
            if v.vid in seen:
                continue
            stack = [v.vid]
            seen.add(v.vid)
            comp = {v.vid}
            while stack:
                x = stack.pop()
                for eid in self.vertices[x].adjacent:
                    y = self.edges[eid].other(x)
                    if y not in seen:
                        seen.add(y)
                        stack.append(y)
                        comp.add(y)
            comps.append(comp)
        return comps

    def is_connected(self) -> bool:
        return len(self.connected_components()) <= 1

    # ---- lifecycle ----

    def is_augmented(self) -> bool:
        return any(e.mult != 1 for e in self.edges)

    def reset(self) -> None:
        """Restore every multiplicity to 1 so the graph can be solved again."""
        for e in self.edges:
            e.mult = 1

    def __repr__(self) -> str:
        return f"CPPGraph(V={self.n_vertices}, E={self.n_edges})"
