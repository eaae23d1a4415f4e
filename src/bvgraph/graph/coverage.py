"""Coverage set: greedy vertex cover over the dependency edges.

Finds a small set of issues that together touch as many dependency
relationships as possible.  The greedy max-degree heuristic is the usual
2-approximation for vertex cover.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bvgraph.graph.model import DiGraph


@dataclass
class CoverageItem:
    node: int
    edges_added: int


@dataclass
class CoverageResult:
    items: list[CoverageItem] = field(default_factory=list)
    edges_covered: int = 0
    total_edges: int = 0
    coverage_ratio: float = 1.0


def coverage_set(graph: DiGraph, limit: int = 10) -> CoverageResult:
    """Greedily select up to *limit* nodes covering the most uncovered edges.

    Each round scans nodes in index order and counts uncovered outgoing
    plus incoming edges; the first node with the strictly highest count
    wins.  Stops early when every edge is covered.  ``coverage_ratio`` is
    1.0 for a graph without edges.
    """
    n = len(graph)
    total_edges = graph.edge_count()
    if n == 0 or total_edges == 0:
        return CoverageResult(total_edges=total_edges, coverage_ratio=1.0)

    adj = graph.adjacency()
    rev = graph.reverse_adjacency()
    covered: set[tuple[int, int]] = set()
    items: list[CoverageItem] = []
    edges_covered = 0

    for _ in range(max(limit, 0)):
        best_node = -1
        best_count = 0
        for v in range(n):
            count = sum(1 for w in adj[v] if (v, w) not in covered)
            # A self-loop was already counted as outgoing
            count += sum(1 for u in rev[v] if u != v and (u, v) not in covered)
            if count > best_count:
                best_node, best_count = v, count

        if best_count == 0:
            break

        covered.update((best_node, w) for w in adj[best_node])
        covered.update((u, best_node) for u in rev[best_node])
        items.append(CoverageItem(node=best_node, edges_added=best_count))
        edges_covered += best_count

    return CoverageResult(
        items=items,
        edges_covered=edges_covered,
        total_edges=total_edges,
        coverage_ratio=edges_covered / total_edges,
    )


def coverage_nodes(graph: DiGraph, limit: int = 10) -> list[int]:
    """Just the selected node indices of :func:`coverage_set`, in selection order."""
    return [item.node for item in coverage_set(graph, limit).items]
