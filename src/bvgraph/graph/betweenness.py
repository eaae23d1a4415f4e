"""Betweenness centrality: exact Brandes and source-sampled approximation.

Scores are unnormalized and directed: for every ordered pair ``(s, t)``
a node ``v`` earns the fraction of shortest ``s -> t`` paths that pass
through it.
"""

from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Sequence

from bvgraph.graph.model import DiGraph

log = logging.getLogger(__name__)

MODE_EXACT = "exact"
MODE_APPROXIMATE = "approximate"


@dataclass
class BetweennessResult:
    """Betweenness scores plus how they were obtained.

    ``mode`` is ``"approximate"`` whenever fewer sources than nodes were
    sampled; callers must not treat those scores as exact.
    """

    scores: list[float]
    mode: str
    sample_size: int
    total_nodes: int


def _accumulate_from(source: int, adj: Sequence[Sequence[int]], bc: list[float]) -> None:
    """Add the dependency of *source* on every other node into *bc*.

    BFS counts shortest paths (``sigma``) and records predecessors; nodes
    are then popped in reverse BFS order to back-propagate dependencies.
    """
    n = len(adj)
    sigma = [0.0] * n
    dist = [-1] * n
    delta = [0.0] * n
    preds: list[list[int]] = [[] for _ in range(n)]
    order: list[int] = []

    sigma[source] = 1.0
    dist[source] = 0
    queue = deque([source])
    while queue:
        v = queue.popleft()
        order.append(v)
        for w in adj[v]:
            if dist[w] < 0:
                dist[w] = dist[v] + 1
                queue.append(w)
            if dist[w] == dist[v] + 1:
                sigma[w] += sigma[v]
                preds[w].append(v)

    for w in reversed(order):
        coeff = (1.0 + delta[w]) / sigma[w]
        for v in preds[w]:
            delta[v] += sigma[v] * coeff
        if w != source:
            bc[w] += delta[w]


def betweenness(graph: DiGraph) -> list[float]:
    """Exact betweenness centrality via Brandes' algorithm, O(V*E)."""
    adj = graph.adjacency()
    bc = [0.0] * len(adj)
    for source in range(len(adj)):
        _accumulate_from(source, adj, bc)
    return bc


def betweenness_approx(graph: DiGraph, sample_size: int, seed: int | None = None) -> BetweennessResult:
    """Approximate betweenness from *sample_size* uniformly sampled sources.

    The partial sums are scaled by ``n / k``.  Expected error shrinks as
    O(1/sqrt(k)): roughly 14% at k=50, 10% at k=100, 7% at k=200, which is
    usually enough to rank nodes but not to compare absolute values.

    ``sample_size`` is clamped to at least 1.  When it reaches the node
    count, the exact algorithm runs and ``mode`` is ``"exact"``.  Passing
    a *seed* makes the sample reproducible.
    """
    n = len(graph)
    k = max(sample_size, 1)
    if k >= n:
        return BetweennessResult(scores=betweenness(graph), mode=MODE_EXACT, sample_size=n, total_nodes=n)

    adj = graph.adjacency()
    pivots = random.Random(seed).sample(range(n), k)
    bc = [0.0] * n
    for source in pivots:
        _accumulate_from(source, adj, bc)

    scale = n / k
    log.debug("Sampled betweenness from %d of %d sources", k, n)
    return BetweennessResult(
        scores=[value * scale for value in bc],
        mode=MODE_APPROXIMATE,
        sample_size=k,
        total_nodes=n,
    )


def recommend_sample_size(node_count: int, edge_count: int = 0) -> int:
    """Pick a sample size balancing accuracy and speed.

    Small graphs get the exact algorithm (sample = node count).
    *edge_count* is accepted for density-aware tuning but not used yet.
    """
    if node_count < 100:
        return node_count
    if node_count < 500:
        return max(50, node_count // 5)
    if node_count < 2000:
        return 100
    return 200
