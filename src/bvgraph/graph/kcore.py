"""K-core decomposition and degeneracy on the undirected simple view."""

from __future__ import annotations

import heapq

from bvgraph.graph.articulation import undirected_neighbors
from bvgraph.graph.model import DiGraph


def kcore(graph: DiGraph) -> list[int]:
    """Return the core number of every node.

    Repeatedly peels the vertex with the smallest remaining degree; its
    core number is the largest degree threshold survived so far.  Stale
    heap entries are skipped instead of decreased in place.
    """
    neighbors = undirected_neighbors(graph)
    n = len(neighbors)
    degree = [len(nbrs) for nbrs in neighbors]
    removed = [False] * n
    core = [0] * n

    heap = [(d, v) for v, d in enumerate(degree)]
    heapq.heapify(heap)
    k = 0
    while heap:
        d, v = heapq.heappop(heap)
        if removed[v] or d != degree[v]:
            continue
        removed[v] = True
        k = max(k, d)
        core[v] = k
        for u in neighbors[v]:
            if not removed[u]:
                degree[u] -= 1
                heapq.heappush(heap, (degree[u], u))

    return core


def degeneracy(graph: DiGraph) -> int:
    """Largest k for which a non-empty k-core exists."""
    return max(kcore(graph), default=0)
