"""Critical-path scheduling metrics over a DAG.

Heights are counted in nodes: a node with no blockers has height 1 and
every other node sits one above its highest predecessor, the same
longest-path layering used for layer detection.  All functions return
zeros (or empty lists) for cyclic graphs instead of raising, since callers
usually probe ``is_dag`` first and pick an analysis from there.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from bvgraph.graph.model import DiGraph
from bvgraph.graph.topo import topological_sort

log = logging.getLogger(__name__)


@dataclass
class CriticalPath:
    nodes: list[int]
    length: int


@dataclass
class KPathsResult:
    paths: list[CriticalPath] = field(default_factory=list)
    total_nodes: int = 0
    max_length: int = 0


def _heights_and_tails(graph: DiGraph) -> tuple[list[int], list[int]] | None:
    """Longest path ending at each node (in nodes) and starting at it (in edges)."""
    order = topological_sort(graph)
    if order is None:
        log.warning("Critical path requested on a cyclic graph; returning zeros")
        return None

    adj = graph.adjacency()
    rev = graph.reverse_adjacency()
    heights = [0] * len(order)
    for v in order:
        heights[v] = max((heights[p] for p in rev[v]), default=0) + 1

    tails = [0] * len(order)
    for v in reversed(order):
        tails[v] = max((tails[s] + 1 for s in adj[v]), default=0)

    return heights, tails


def critical_path_heights(graph: DiGraph) -> list[int]:
    """Height of every node, or all zeros for a cyclic graph."""
    result = _heights_and_tails(graph)
    if result is None:
        return [0] * len(graph)
    return result[0]


def critical_path_length(graph: DiGraph) -> int:
    """Maximum height; 0 for empty or cyclic graphs."""
    return max(critical_path_heights(graph), default=0)


def critical_path_nodes(graph: DiGraph) -> list[int]:
    """Every node lying on some longest path, ascending.

    This includes every node whose height equals the critical path length
    (the path ends) and every node with zero slack.
    """
    result = _heights_and_tails(graph)
    if result is None:
        return []
    heights, tails = result
    length = max(heights, default=0)
    return [v for v in range(len(heights)) if heights[v] + tails[v] == length]


def slack(graph: DiGraph) -> list[int]:
    """Per-node slack: critical path length minus the longest path through the node.

    Zero slack marks critical-path membership.
    """
    result = _heights_and_tails(graph)
    if result is None:
        return [0] * len(graph)
    heights, tails = result
    length = max(heights, default=0)
    return [length - (h + t) for h, t in zip(heights, tails)]


def total_float(graph: DiGraph) -> int:
    """Maximum slack over all nodes."""
    return max(slack(graph), default=0)


def k_longest_paths(graph: DiGraph, k: int = 5) -> KPathsResult:
    """Reconstruct the longest paths ending at the *k* highest nodes.

    End nodes are ranked by height (descending) then index.  Each path is
    walked backwards through the highest predecessor, lowest index first
    on ties, and returned in execution order.
    """
    n = len(graph)
    result = _heights_and_tails(graph)
    if result is None or k <= 0:
        return KPathsResult(total_nodes=n)
    heights, _ = result
    rev = graph.reverse_adjacency()

    ends = sorted(range(n), key=lambda v: (-heights[v], v))[:k]
    paths = []
    for end in ends:
        path = [end]
        v = end
        while rev[v]:
            v = min(rev[v], key=lambda p: (-heights[p], p))
            path.append(v)
        path.reverse()
        paths.append(CriticalPath(nodes=path, length=len(path)))

    return KPathsResult(
        paths=paths,
        total_nodes=n,
        max_length=max(heights, default=0),
    )
