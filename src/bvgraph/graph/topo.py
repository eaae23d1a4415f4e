"""Topological ordering (Kahn's algorithm) and DAG detection."""

from __future__ import annotations

import heapq

from bvgraph.graph.model import DiGraph


def topological_sort(graph: DiGraph) -> list[int] | None:
    """Return node indices in topological order, or ``None`` if *graph* is cyclic.

    Zero in-degree nodes are released smallest index first, so the order
    is fully determined by insertion order.  No partial order is returned
    for cyclic graphs.
    """
    adj = graph.adjacency()
    in_deg = graph.in_degrees()

    ready = [v for v, d in enumerate(in_deg) if d == 0]
    heapq.heapify(ready)

    order: list[int] = []
    while ready:
        v = heapq.heappop(ready)
        order.append(v)
        for w in adj[v]:
            in_deg[w] -= 1
            if in_deg[w] == 0:
                heapq.heappush(ready, w)

    if len(order) != len(adj):
        return None
    return order


def is_dag(graph: DiGraph) -> bool:
    return topological_sort(graph) is not None
