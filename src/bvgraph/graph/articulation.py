"""Articulation points (cut vertices) and bridges (cut edges).

Both use Tarjan's low-link DFS on the undirected simple view of the
graph: ``u -> v`` and ``v -> u`` collapse into one edge and self-loops are
dropped.

In issue tracking, articulation points are coordination points: if such
an issue stalls, it can split otherwise related work into disconnected
groups.
"""

from __future__ import annotations

from typing import Iterator

from bvgraph.graph.model import DiGraph


def undirected_neighbors(graph: DiGraph) -> list[list[int]]:
    """Sorted neighbor lists of the undirected simple view (no self-loops)."""
    neighbors: list[set[int]] = [set() for _ in range(len(graph))]
    for u, v in graph.edges():
        if u != v:
            neighbors[u].add(v)
            neighbors[v].add(u)
    return [sorted(nbrs) for nbrs in neighbors]


def _lowlink_dfs(graph: DiGraph) -> tuple[list[bool], list[tuple[int, int]]]:
    """Run one DFS per connected component, returning (is_cut_vertex, bridges).

    Frames carry ``(node, parent, neighbor_iterator)``; when a child frame
    finishes, its low value is folded into the parent and both the
    articulation and bridge conditions are checked on that tree edge.
    """
    neighbors = undirected_neighbors(graph)
    n = len(neighbors)
    disc = [0] * n  # 0 = unvisited; discovery times start at 1
    low = [0] * n
    is_cut = [False] * n
    bridge_list: list[tuple[int, int]] = []
    time = 0

    for root in range(n):
        if disc[root]:
            continue
        time += 1
        disc[root] = low[root] = time
        root_children = 0
        frames: list[tuple[int, int, Iterator[int]]] = [(root, -1, iter(neighbors[root]))]

        while frames:
            v, parent, it = frames[-1]
            descended = False
            for u in it:
                if not disc[u]:
                    time += 1
                    disc[u] = low[u] = time
                    frames.append((u, v, iter(neighbors[u])))
                    descended = True
                    break
                if u != parent:
                    # Back edge
                    low[v] = min(low[v], disc[u])
            if descended:
                continue

            frames.pop()
            if parent < 0:
                continue
            low[parent] = min(low[parent], low[v])
            if parent == root:
                root_children += 1
            elif low[v] >= disc[parent]:
                is_cut[parent] = True
            if low[v] > disc[parent]:
                bridge_list.append((min(parent, v), max(parent, v)))

        if root_children > 1:
            is_cut[root] = True

    return is_cut, bridge_list


def articulation_points(graph: DiGraph) -> list[int]:
    """Return the indices of all articulation points, ascending.

    A vertex is an articulation point iff it is a DFS root with more than
    one child, or a non-root with a child ``u`` where ``low[u] >= disc[v]``.
    """
    is_cut, _ = _lowlink_dfs(graph)
    return [v for v, cut in enumerate(is_cut) if cut]


def bridges(graph: DiGraph) -> list[tuple[int, int]]:
    """Return all bridges as sorted ``(min, max)`` index pairs.

    A tree edge ``(v, u)`` is a bridge iff ``low[u] > disc[v]``.
    """
    _, bridge_list = _lowlink_dfs(graph)
    return sorted(bridge_list)
