# src/sketchroute/shortest.py
from __future__ import annotations

import heapq
import math
from dataclasses import dataclass
from typing import List

from .errors import DisconnectedGraph
from .graph import CPPGraph


@dataclass
class ShortestPaths:
    """Result table of one Dijkstra run: dist[v], prev[v] (-1 = none)."""
    src: int
    dist: List[float]
    prev: List[int]

    def reachable(self, dst: int) -> bool:
        return not math.isinf(self.dist[dst])

    def path_to(self, dst: int) -> List[int]:
        """Vertex ids from src to dst along the shortest-path tree."""
        if not self.reachable(dst):
            raise DisconnectedGraph(f"vertex {dst} is unreachable from {self.src}")
        path = [dst]
        cur = dst
        while cur != self.src:
            cur = self.prev[cur]
            path.append(cur)
        path.reverse()
        return path


def dijkstra(graph: CPPGraph, src: int) -> ShortestPaths:
    """
    Single-source shortest paths with a binary heap.
    Stale heap entries are skipped on pop instead of being removed.
    """
    n = graph.n_vertices
    dist = [math.inf] * n
    prev = [-1] * n
    visited = [False] * n

    dist[src] = 0.0
    pq = [(0.0, src)]
    while pq:
        d, u = heapq.heappop(pq)
        if visited[u]:
            continue
        visited[u] = True
        for eid in graph.vertices[u].adjacent:
            e = graph.edges[eid]
            w = e.other(u)
            ndv = d + e.weight
            if ndv < dist[w]:
                dist[w] = ndv
                prev[w] = u
                heapq.heappush(pq, (ndv, w))
    return ShortestPaths(src=src, dist=dist, prev=prev)
