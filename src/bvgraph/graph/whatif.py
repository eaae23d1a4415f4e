"""What-if analysis: which work becomes actionable when issues close.

Edges point from blocker to dependent, so a node's predecessors are its
blockers.  ``closed`` is any iterable of indices treated as finished;
out-of-range entries are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from bvgraph.graph.model import DiGraph


@dataclass
class WhatIfResult:
    nodes: list[int]
    direct_unblocks: int = 0
    transitive_unblocks: int = 0
    unblocked_ids: list[int] = field(default_factory=list)
    cascade_ids: list[int] = field(default_factory=list)
    parallel_gain: int = 0


@dataclass
class TopKItem:
    node: int
    marginal_gain: int
    unblocked_ids: list[int]


@dataclass
class TopKResult:
    items: list[TopKItem] = field(default_factory=list)
    total_gain: int = 0


def _closed_set(graph: DiGraph, closed: Iterable[int]) -> set[int]:
    n = len(graph)
    return {v for v in closed if 0 <= v < n}


def open_blockers(graph: DiGraph, node: int, closed: Iterable[int]) -> list[int]:
    """Predecessors of *node* that are not closed (self-loops ignored)."""
    done = closed if isinstance(closed, set) else set(closed)
    return [p for p in graph.predecessors(node) if p != node and p not in done]


def actionable_nodes(graph: DiGraph, closed: Iterable[int]) -> list[int]:
    """Open nodes whose blockers are all closed, ascending."""
    done = _closed_set(graph, closed)
    return [
        v for v in range(len(graph))
        if v not in done and not open_blockers(graph, v, done)
    ]


def _newly_actionable(graph: DiGraph, closing: set[int], closed: set[int]) -> list[int]:
    """Dependents of *closing* that become actionable once it is closed too."""
    after = closed | closing
    result = []
    seen: set[int] = set()
    for v in sorted(closing):
        for s in graph.successors(v):
            if s in after or s in seen:
                continue
            seen.add(s)
            if open_blockers(graph, s, closed) and not open_blockers(graph, s, after):
                result.append(s)
    return result


def what_if_close_batch(graph: DiGraph, nodes: Iterable[int], closed: Iterable[int]) -> WhatIfResult:
    """Impact of closing all of *nodes* together.

    ``unblocked_ids`` are the dependents that become actionable right away.
    ``cascade_ids`` extends that by assuming each unblocked issue is closed
    in turn, breadth first.  ``parallel_gain`` is the change in the number
    of actionable issues.
    """
    done = _closed_set(graph, closed)
    closing = _closed_set(graph, nodes)
    if not closing:
        return WhatIfResult(nodes=[])

    direct = _newly_actionable(graph, closing, done)
    cascade = list(direct)
    frontier = set(direct)
    sim_closed = done | closing
    while frontier:
        newly = _newly_actionable(graph, frontier, sim_closed)
        sim_closed |= frontier
        cascade.extend(newly)
        frontier = set(newly)

    gain = len(actionable_nodes(graph, done | closing)) - len(actionable_nodes(graph, done))
    return WhatIfResult(
        nodes=sorted(closing),
        direct_unblocks=len(direct),
        transitive_unblocks=len(cascade),
        unblocked_ids=direct,
        cascade_ids=cascade,
        parallel_gain=gain,
    )


def what_if_close(graph: DiGraph, node: int, closed: Iterable[int]) -> WhatIfResult:
    """Impact of closing a single *node*; see :func:`what_if_close_batch`."""
    return what_if_close_batch(graph, [node], closed)


def top_what_if(graph: DiGraph, closed: Iterable[int], limit: int = 10) -> list[WhatIfResult]:
    """Open nodes with any cascade impact, ranked by transitive unblocks."""
    done = _closed_set(graph, closed)
    results = [
        what_if_close(graph, v, done)
        for v in range(len(graph))
        if v not in done
    ]
    results = [r for r in results if r.transitive_unblocks > 0]
    results.sort(key=lambda r: (-r.transitive_unblocks, -r.direct_unblocks, r.nodes[0]))
    return results[:max(limit, 0)]


def topk_set(graph: DiGraph, closed: Iterable[int], k: int = 5) -> TopKResult:
    """Greedy set of up to *k* open issues maximizing newly actionable work.

    Each round picks the candidate with the largest marginal gain given the
    issues already picked (lowest index wins ties) and stops early once no
    candidate unblocks anything.
    """
    completed = _closed_set(graph, closed)
    result = TopKResult()

    for _ in range(max(k, 0)):
        best_node = -1
        best_unblocks: list[int] = []
        for cand in range(len(graph)):
            if cand in completed:
                continue
            unblocks = _newly_actionable(graph, {cand}, completed)
            if len(unblocks) > len(best_unblocks):
                best_node, best_unblocks = cand, unblocks
        if best_node < 0:
            break

        completed.add(best_node)
        result.items.append(TopKItem(node=best_node, marginal_gain=len(best_unblocks), unblocked_ids=best_unblocks))
        result.total_gain += len(best_unblocks)

    return result
