"""Subgraph extraction and reachability.

Filtered views (e.g. PageRank over just the issues carrying one label)
are produced by extracting an independent subgraph, never by mutating the
source graph.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable, Sequence

from bvgraph.graph.model import DiGraph


def extract_subgraph(graph: DiGraph, node_indices: Iterable[int]) -> DiGraph:
    """Return the subgraph induced by *node_indices*.

    Nodes are renumbered densely in the order given and keep their keys.
    Duplicate and out-of-range indices are dropped; only edges with both
    endpoints retained survive.
    """
    sub = DiGraph()
    mapping: dict[int, int] = {}
    for old in node_indices:
        key = graph.node_id(old)
        if key is not None and old not in mapping:
            mapping[old] = sub.add_node(key)

    for old_from, new_from in mapping.items():
        for old_to in graph.successors(old_from):
            new_to = mapping.get(old_to)
            if new_to is not None:
                sub.add_edge(new_from, new_to)
    return sub


def extract_subgraph_by_keys(graph: DiGraph, keys: Iterable[str]) -> DiGraph:
    """Like :func:`extract_subgraph`, resolving keys first; unknown keys are skipped."""
    indices = [idx for idx in (graph.node_idx(key) for key in keys) if idx is not None]
    return extract_subgraph(graph, indices)


def _bfs(adjacency: Sequence[Sequence[int]], start: int) -> list[int]:
    if not 0 <= start < len(adjacency):
        return []
    seen = {start}
    order = [start]
    queue = deque([start])
    while queue:
        v = queue.popleft()
        for w in adjacency[v]:
            if w not in seen:
                seen.add(w)
                order.append(w)
                queue.append(w)
    return order


def reachable_from(graph: DiGraph, source: int) -> list[int]:
    """Nodes reachable from *source* along outgoing edges, *source* first."""
    return _bfs(graph.adjacency(), source)


def reachable_to(graph: DiGraph, target: int) -> list[int]:
    """Nodes that can reach *target*, found by BFS over incoming edges."""
    return _bfs(graph.reverse_adjacency(), target)


def dependency_cone(graph: DiGraph, node: int) -> list[int]:
    """Ancestors, the node itself and descendants, without duplicates."""
    cone = reachable_to(graph, node)
    seen = set(cone)
    cone.extend(v for v in reachable_from(graph, node) if v not in seen)
    return cone


def reachable_subgraph_from(graph: DiGraph, source: int) -> DiGraph:
    """Induced subgraph on *source* and everything it reaches."""
    return extract_subgraph(graph, reachable_from(graph, source))
