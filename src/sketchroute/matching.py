# src/sketchroute/matching.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, List, Optional, Tuple, TypeVar

import logging
logger = logging.getLogger(__name__)

from .errors import InvalidIndex, MatchingError

E = TypeVar("E")


@dataclass
class MatchEdge(Generic[E]):
    i: int
    j: int
    weight: float
    data: E
    matched: bool = False

    def other(self, v: int) -> int:
        return self.j if v == self.i else self.i


class MatchGraph(Generic[E]):
    """
    Graph for finding minimum weight (or near minimum weight) perfect
    matchings.  Each edge carries an opaque payload which is what the
    matching methods hand back.
    """

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"size must be >= 0, got {size}")
        self.size = int(size)
        self.edges: List[MatchEdge[E]] = []
        self.adjacent: List[List[int]] = [[] for _ in range(self.size)]
        # sum of incident edge weights, the greedy preference signal
        self.weighted_degree: List[float] = [0.0] * self.size

    def add_edge(self, i: int, j: int, weight: float, data: E) -> None:
        if not (0 <= i < self.size) or not (0 <= j < self.size):
            raise InvalidIndex(f"match edge ({i}, {j}) outside 0..{self.size - 1}")
        if i == j:
            raise InvalidIndex(f"match edge ({i}, {j}) is a self-loop")
        e = MatchEdge(i=int(i), j=int(j), weight=float(weight), data=data)
        eid = len(self.edges)
        self.edges.append(e)
        self.adjacent[e.i].append(eid)
        self.adjacent[e.j].append(eid)
        self.weighted_degree[e.i] += e.weight
        self.weighted_degree[e.j] += e.weight

    def reset(self) -> None:
        """Forget the result of the last matching run."""
        for e in self.edges:
            e.matched = False

    def matched_edges(self) -> List[MatchEdge[E]]:
        return [e for e in self.edges if e.matched]

    def matching_weight(self) -> float:
        return float(sum(e.weight for e in self.edges if e.matched))

    # =========================
    # Exact: branch and bound
    # =========================

    def match_exact(self) -> List[E]:
        """
        Minimum weight perfect matching by branch and bound. Exponential,
        at most (k-1)!! leaves for k vertices; keep k small.
        """
        self.reset()
        full = (1 << self.size) - 1
        best = math.inf
        best_pick: Optional[Tuple[int, ...]] = None
        n_nodes = 0
        # cheapest first, so good leaves are found early and prune more
        by_weight = [sorted(adj, key=lambda k: (self.edges[k].weight, k)) for adj in self.adjacent]

        def search(covered: int, picked: Tuple[int, ...], weight: float) -> None:
            nonlocal best, best_pick, n_nodes
            n_nodes += 1
            if covered == full:
                if weight < best:
                    best = weight
                    best_pick = picked
                return

            # branch on the lowest uncovered vertex; every matching is visited once
            free = full & ~covered
            i = (free & -free).bit_length() - 1
            for eid in by_weight[i]:
                e = self.edges[eid]
                j = e.other(i)
                if (covered >> j) & 1:
                    continue
                new_weight = weight + e.weight
                if new_weight >= best:
                    continue
                search(covered | (1 << i) | (1 << j), picked + (eid,), new_weight)

        search(0, (), 0.0)

        if best_pick is None:
            raise MatchingError(f"no perfect matching over {self.size} vertices")
        for eid in best_pick:
            self.edges[eid].matched = True
        logger.debug("exact matching: k=%d weight=%.6g nodes=%d", self.size, best, n_nodes)
        return [self.edges[eid].data for eid in best_pick]

    match = match_exact

    # =========================
    # Greedy heuristic
    # =========================

    def match_greedy(self) -> List[E]:
        """
        Fast near-minimum perfect matching.

        Repeatedly takes the edge maximising wdeg(i) + wdeg(j) - 2*w, i.e. the
        edge that is cheap compared to the other options of its endpoints,
        then drops every edge touching i or j. Ties go to the lowest (i, j).
        """
        self.reset()
        wdeg = list(self.weighted_degree)
        alive = [True] * len(self.edges)
        n_alive = len(self.edges)
        order = sorted(
            range(len(self.edges)),
            key=lambda k: (min(self.edges[k].i, self.edges[k].j), max(self.edges[k].i, self.edges[k].j), k),
        )

        result: List[E] = []
        n_matched = 0
        while n_alive:
            pick = -1
            best_score = -math.inf
            for eid in order:
                if not alive[eid]:
                    continue
                e = self.edges[eid]
                score = wdeg[e.i] + wdeg[e.j] - 2.0 * e.weight
                if pick < 0 or score > best_score:
                    pick = eid
                    best_score = score

            m = self.edges[pick]
            m.matched = True
            result.append(m.data)
            n_matched += 1

            for v in (m.i, m.j):
                for eid in self.adjacent[v]:
                    if not alive[eid]:
                        continue
                    alive[eid] = False
                    n_alive -= 1
                    f = self.edges[eid]
                    wdeg[f.other(v)] -= f.weight

        if 2 * n_matched != self.size:
            self.reset()
            raise MatchingError(
                f"greedy matching covered {2 * n_matched} of {self.size} vertices; graph must be complete"
            )
        logger.debug("greedy matching: k=%d weight=%.6g", self.size, self.matching_weight())
        return result

    def __repr__(self) -> str:
        return f"MatchGraph(size={self.size}, edges={len(self.edges)})"
