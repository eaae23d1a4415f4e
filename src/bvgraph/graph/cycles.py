"""Tarjan SCC, Johnson elementary-cycle enumeration and cycle-break ranking.

Every depth-first search here runs on an explicit frame stack
``(node, neighbor_iterator)`` instead of recursion, so deep dependency
chains cannot hit Python's recursion limit.
"""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator

from bvgraph.graph.model import DiGraph

log = logging.getLogger(__name__)


@dataclass
class SCCResult:
    """Strongly connected components of a directed graph."""

    components: list[list[int]]
    has_cycles: bool
    cycle_count: int


@dataclass
class CycleEnumeration:
    """Elementary cycles found by Johnson's algorithm.

    ``truncated`` is true when more cycles exist than were returned.
    """

    cycles: list[list[int]] = field(default_factory=list)
    truncated: bool = False
    count: int = 0


@dataclass
class CycleBreakSuggestion:
    from_idx: int
    to_idx: int
    cycles_broken: int
    collateral: int


@dataclass
class CycleBreakResult:
    suggestions: list[CycleBreakSuggestion]
    total_cycles: int
    truncated: bool


# ---------------------------------------------------------------------------
# Tarjan
# ---------------------------------------------------------------------------


def _tarjan(nodes: Iterable[int], neighbors: Callable[[int], Iterable[int]]) -> list[list[int]]:
    """Iterative Tarjan over the subgraph induced by *nodes*.

    *neighbors* must only yield members of *nodes*.  Components come out
    in completion order (reverse topological order of the condensation),
    each sorted ascending.
    """
    index_of: dict[int, int] = {}
    low: dict[int, int] = {}
    on_stack: set[int] = set()
    stack: list[int] = []
    components: list[list[int]] = []
    counter = 0

    for root in nodes:
        if root in index_of:
            continue
        index_of[root] = low[root] = counter
        counter += 1
        stack.append(root)
        on_stack.add(root)
        frames: list[tuple[int, Iterator[int]]] = [(root, iter(neighbors(root)))]

        while frames:
            v, it = frames[-1]
            descended = False
            for w in it:
                if w not in index_of:
                    index_of[w] = low[w] = counter
                    counter += 1
                    stack.append(w)
                    on_stack.add(w)
                    frames.append((w, iter(neighbors(w))))
                    descended = True
                    break
                if w in on_stack:
                    low[v] = min(low[v], index_of[w])
            if descended:
                continue

            frames.pop()
            if frames:
                parent = frames[-1][0]
                low[parent] = min(low[parent], low[v])

            if low[v] == index_of[v]:
                component = []
                while True:
                    w = stack.pop()
                    on_stack.discard(w)
                    component.append(w)
                    if w == v:
                        break
                component.sort()
                components.append(component)

    return components


def _is_cyclic(component: list[int], neighbors: Callable[[int], Iterable[int]]) -> bool:
    if len(component) > 1:
        return True
    v = component[0]
    return v in neighbors(v)


def tarjan_scc(graph: DiGraph) -> SCCResult:
    """Partition *graph* into strongly connected components.

    ``has_cycles`` is true iff some component has more than one node or
    a node has a self-loop; ``cycle_count`` counts those components.
    """
    adj = graph.adjacency()
    components = _tarjan(range(len(adj)), adj.__getitem__)
    cycle_count = sum(1 for comp in components if _is_cyclic(comp, adj.__getitem__))
    return SCCResult(components=components, has_cycles=cycle_count > 0, cycle_count=cycle_count)


def has_cycles(graph: DiGraph) -> bool:
    return tarjan_scc(graph).has_cycles


# ---------------------------------------------------------------------------
# Johnson
# ---------------------------------------------------------------------------


def _unblock(node: int, blocked: set[int], blocking: dict[int, set[int]]) -> None:
    pending = [node]
    while pending:
        u = pending.pop()
        if u in blocked:
            blocked.discard(u)
            pending.extend(blocking[u])
            blocking[u].clear()


def _circuits(start: int, sub: dict[int, list[int]]) -> Iterator[list[int]]:
    """Yield every elementary cycle through *start* inside one SCC.

    A node stays blocked after being explored until backtracking proves a
    cycle through it (``_unblock``) or one of the nodes in its blocking set
    is unblocked.
    """
    path = [start]
    blocked = {start}
    blocking: dict[int, set[int]] = defaultdict(set)
    found = [False]
    frames: list[tuple[int, Iterator[int]]] = [(start, iter(sub[start]))]

    while frames:
        v, it = frames[-1]
        descended = False
        for w in it:
            if w == start:
                yield list(path)
                found[-1] = True
            elif w not in blocked:
                path.append(w)
                blocked.add(w)
                found.append(False)
                frames.append((w, iter(sub[w])))
                descended = True
                break
        if descended:
            continue

        frames.pop()
        path.pop()
        closed = found.pop()
        if closed:
            _unblock(v, blocked, blocking)
            if found:
                found[-1] = True
        else:
            for w in sub[v]:
                blocking[w].add(v)


def enumerate_cycles(graph: DiGraph, max_cycles: int = 100) -> CycleEnumeration:
    """Enumerate elementary cycles with Johnson's algorithm.

    The search runs one strongly connected component at a time, starting
    from the component's smallest index; that node is then removed and the
    remainder re-decomposed.  Each cycle starts at its smallest index.
    Self-loops are reported as one-node cycles.

    Stops once a cycle beyond *max_cycles* is found: ``truncated`` is then
    true and exactly *max_cycles* cycles are returned.
    """
    adj = graph.adjacency()
    cycles: list[list[int]] = []
    truncated = False

    pending = [
        comp for comp in _tarjan(range(len(adj)), adj.__getitem__)
        if _is_cyclic(comp, adj.__getitem__)
    ]
    # Pop smallest components-by-first-index first
    pending.sort(key=lambda comp: comp[0], reverse=True)

    while pending and not truncated:
        comp = pending.pop()
        members = set(comp)
        sub = {v: [w for w in adj[v] if w in members] for v in comp}
        start = comp[0]

        for cycle in _circuits(start, sub):
            if len(cycles) >= max_cycles:
                truncated = True
                break
            cycles.append(cycle)
        if truncated:
            break

        rest = comp[1:]
        if not rest:
            continue
        rest_sub = {v: [w for w in sub[v] if w != start] for v in rest}
        new = [c for c in _tarjan(rest, rest_sub.__getitem__) if _is_cyclic(c, rest_sub.__getitem__)]
        pending.extend(sorted(new, key=lambda c: c[0], reverse=True))

    if truncated:
        log.warning("Cycle enumeration truncated at %d cycles", max_cycles)
    else:
        log.debug("Enumerated %d elementary cycles", len(cycles))
    return CycleEnumeration(cycles=cycles, truncated=truncated, count=len(cycles))


# ---------------------------------------------------------------------------
# Cycle breaking
# ---------------------------------------------------------------------------


def cycle_break_suggestions(
    graph: DiGraph,
    limit: int = 5,
    max_cycles: int = 100,
    enumeration: CycleEnumeration | None = None,
) -> CycleBreakResult:
    """Rank edges by how many enumerated cycles removing them would break.

    ``collateral`` is the number of dependents of the edge target, so among
    equally effective edges the one touching the least downstream work
    comes first.  Pass an *enumeration* already computed for *graph* to
    reuse it; *max_cycles* is then ignored.
    """
    if enumeration is None:
        enumeration = enumerate_cycles(graph, max_cycles=max_cycles)

    freq: Counter[tuple[int, int]] = Counter()
    for cycle in enumeration.cycles:
        for i, u in enumerate(cycle):
            freq[(u, cycle[(i + 1) % len(cycle)])] += 1

    ranked = sorted(
        freq.items(),
        key=lambda item: (-item[1], graph.out_degree(item[0][1]), item[0]),
    )
    suggestions = [
        CycleBreakSuggestion(
            from_idx=u,
            to_idx=v,
            cycles_broken=count,
            collateral=graph.out_degree(v),
        )
        for (u, v), count in ranked[:max(limit, 0)]
    ]
    return CycleBreakResult(
        suggestions=suggestions,
        total_cycles=enumeration.count,
        truncated=enumeration.truncated,
    )
