"""PageRank, eigenvector centrality and HITS via power iteration.

All three return plain lists indexed by node.  Iteration caps are hard
stops: a result is always returned, converged or not, and the number of
iterations used is logged at debug level.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from bvgraph.graph.model import DiGraph

log = logging.getLogger(__name__)


def _check_iteration_params(max_iterations: int, tolerance: float) -> None:
    if max_iterations < 0:
        raise ValueError(f"iteration count must be >= 0, got {max_iterations}")
    if tolerance < 0:
        raise ValueError(f"tolerance must be >= 0, got {tolerance}")


@dataclass(frozen=True)
class PageRankConfig:
    damping: float = 0.85
    tolerance: float = 1e-6
    max_iterations: int = 100

    def __post_init__(self):
        if not 0.0 <= self.damping <= 1.0:
            raise ValueError(f"damping must be in [0, 1], got {self.damping}")
        _check_iteration_params(self.max_iterations, self.tolerance)


@dataclass(frozen=True)
class EigenvectorConfig:
    iterations: int = 50
    tolerance: float = 1e-6

    def __post_init__(self):
        _check_iteration_params(self.iterations, self.tolerance)


@dataclass(frozen=True)
class HITSConfig:
    tolerance: float = 1e-6
    max_iterations: int = 100

    def __post_init__(self):
        _check_iteration_params(self.max_iterations, self.tolerance)


@dataclass
class HITSResult:
    hubs: list[float]
    authorities: list[float]
    iterations: int


def _normalize(vec: list[float]) -> list[float]:
    """Scale *vec* to unit Euclidean length; an all-zero vector stays zero."""
    norm = math.sqrt(sum(x * x for x in vec))
    if norm == 0.0:
        return vec
    return [x / norm for x in vec]


def _l1_delta(a: list[float], b: list[float]) -> float:
    return sum(abs(x - y) for x, y in zip(a, b))


def pagerank(graph: DiGraph, config: PageRankConfig | None = None) -> list[float]:
    """Compute PageRank scores in node index order.

    Rank held by dangling nodes (no outgoing edges) is spread uniformly
    over all nodes each iteration, so scores always sum to 1.  Iteration
    stops when the L1 change drops below ``config.tolerance`` or after
    ``config.max_iterations`` rounds.  Returns ``[]`` for an empty graph.
    """
    config = config or PageRankConfig()
    n = len(graph)
    if n == 0:
        return []

    rev = graph.reverse_adjacency()
    out_deg = graph.out_degrees()
    dangling = [v for v in range(n) if out_deg[v] == 0]
    d = config.damping
    base = (1.0 - d) / n

    rank = [1.0 / n] * n
    iterations = 0
    for iterations in range(1, config.max_iterations + 1):
        dangling_share = d * sum(rank[v] for v in dangling) / n
        new = [
            base + dangling_share + d * sum(rank[u] / out_deg[u] for u in rev[v])
            for v in range(n)
        ]
        delta = _l1_delta(new, rank)
        rank = new
        if delta < config.tolerance:
            break

    log.debug("PageRank finished after %d iterations (n=%d)", iterations, n)
    return rank


def eigenvector_centrality(graph: DiGraph, config: EigenvectorConfig | None = None) -> list[float]:
    """Eigenvector centrality over incoming links, unit length.

    Each round computes ``x' = (A^T + I) x`` where ``A`` is the successor
    adjacency, then renormalizes.  The identity shift keeps acyclic and
    bipartite graphs from oscillating or collapsing to zero.  Stops early
    once the L1 change is below ``n * config.tolerance``.
    """
    config = config or EigenvectorConfig()
    n = len(graph)
    if n == 0:
        return []

    rev = graph.reverse_adjacency()
    x = _normalize([1.0 / n] * n)
    iterations = 0
    for iterations in range(1, config.iterations + 1):
        new = _normalize([x[v] + sum(x[u] for u in rev[v]) for v in range(n)])
        delta = _l1_delta(new, x)
        x = new
        if delta < n * config.tolerance:
            break

    log.debug("Eigenvector centrality finished after %d iterations (n=%d)", iterations, n)
    return x


def hits(graph: DiGraph, config: HITSConfig | None = None) -> HITSResult:
    """Compute HITS hub and authority scores.

    Authority of ``v`` is the sum of hub scores of nodes pointing to ``v``;
    hub of ``u`` is the sum of authority scores of nodes ``u`` points to.
    Both vectors are renormalized to unit length every iteration.  Stops
    when both L1 changes are below ``config.tolerance`` or at
    ``config.max_iterations``.
    """
    config = config or HITSConfig()
    n = len(graph)
    if n == 0:
        return HITSResult(hubs=[], authorities=[], iterations=0)

    adj = graph.adjacency()
    rev = graph.reverse_adjacency()
    hubs = _normalize([1.0] * n)
    auths = _normalize([1.0] * n)

    iterations = 0
    while iterations < config.max_iterations:
        iterations += 1
        new_auths = _normalize([sum(hubs[u] for u in rev[v]) for v in range(n)])
        new_hubs = _normalize([sum(new_auths[w] for w in adj[u]) for u in range(n)])
        converged = (
            _l1_delta(new_hubs, hubs) < config.tolerance
            and _l1_delta(new_auths, auths) < config.tolerance
        )
        hubs, auths = new_hubs, new_auths
        if converged:
            break

    log.debug("HITS finished after %d iterations (n=%d)", iterations, n)
    return HITSResult(hubs=hubs, authorities=auths, iterations=iterations)
