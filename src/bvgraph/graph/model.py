"""Directed graph with dense integer indices and string keys.

Nodes are identified by string keys (issue IDs like ``"bv-123"``) and get
a dense, zero-based index at first insertion.  Indices are never reused or
renumbered, so every algorithm in :mod:`bvgraph.graph` can work on plain
lists indexed by node.

Both forward (successors) and reverse (predecessors) adjacency are kept in
sync on every edge insertion.  Accessors hand out tuples or fresh lists;
the internal lists never leave this module.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field

import networkx as nx

from bvgraph.exit_codes import SnapshotError


@dataclass
class GraphSnapshot:
    """Serializable graph: ordered node keys plus ``(from, to)`` index pairs."""

    nodes: list[str] = field(default_factory=list)
    edges: list[tuple[int, int]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"nodes": list(self.nodes), "edges": [[f, t] for f, t in self.edges]}

    @classmethod
    def from_dict(cls, data) -> GraphSnapshot:
        """Validate *data* and build a snapshot.

        Raises :class:`SnapshotError` when the structure is malformed.
        Positive out-of-range edge indices are accepted here; they are
        dropped when the snapshot is replayed into a graph.
        """
        if not isinstance(data, dict):
            raise SnapshotError("snapshot must be a JSON object")
        if "nodes" not in data or "edges" not in data:
            raise SnapshotError("snapshot requires 'nodes' and 'edges' keys")

        nodes = data["nodes"]
        if not isinstance(nodes, list):
            raise SnapshotError("'nodes' must be a list")
        for pos, key in enumerate(nodes):
            if not isinstance(key, str):
                raise SnapshotError(f"node {pos} is not a string: {key!r}")

        raw_edges = data["edges"]
        if not isinstance(raw_edges, list):
            raise SnapshotError("'edges' must be a list")
        edges: list[tuple[int, int]] = []
        for pos, pair in enumerate(raw_edges):
            if not isinstance(pair, (list, tuple)) or len(pair) != 2:
                raise SnapshotError(f"edge {pos} must be a [from, to] pair")
            for end in pair:
                # bool is an int subclass; reject it explicitly
                if isinstance(end, bool) or not isinstance(end, int) or end < 0:
                    raise SnapshotError(f"edge {pos} has an invalid index: {end!r}")
            edges.append((pair[0], pair[1]))

        return cls(nodes=list(nodes), edges=edges)


class DiGraph:
    """Directed, unweighted, deduplicated graph over string-keyed nodes."""

    def __init__(self) -> None:
        self._nodes: list[str] = []
        self._index: dict[str, int] = {}
        self._adj: list[list[int]] = []
        self._rev: list[list[int]] = []
        self._edge_set: set[tuple[int, int]] = set()
        self._edge_count = 0

    @classmethod
    def with_capacity(cls, node_capacity: int, edge_capacity: int = 0) -> DiGraph:
        """Create an empty graph.

        The hints exist for API parity with pre-sized builders; Python lists
        grow on demand so nothing is reserved.
        """
        return cls()

    # ---- mutation --------------------------------------------------------

    def add_node(self, key: str) -> int:
        """Add a node and return its index.  Idempotent."""
        if not isinstance(key, str):
            raise TypeError(f"node key must be str, got {type(key).__name__}")
        idx = self._index.get(key)
        if idx is not None:
            return idx
        idx = len(self._nodes)
        self._nodes.append(key)
        self._index[key] = idx
        self._adj.append([])
        self._rev.append([])
        return idx

    def add_edge(self, from_idx: int, to_idx: int) -> bool:
        """Add the directed edge ``from_idx -> to_idx``.

        Returns ``True`` if the edge was inserted.  Duplicates and
        out-of-range endpoints are silently ignored (returns ``False``).
        """
        n = len(self._nodes)
        if not (0 <= from_idx < n and 0 <= to_idx < n):
            return False
        edge = (from_idx, to_idx)
        if edge in self._edge_set:
            return False
        self._edge_set.add(edge)
        self._adj[from_idx].append(to_idx)
        self._rev[to_idx].append(from_idx)
        self._edge_count += 1
        return True

    def add_edge_by_key(self, from_key: str, to_key: str) -> bool:
        """Insert both nodes (if needed) and the edge between them."""
        return self.add_edge(self.add_node(from_key), self.add_node(to_key))

    # ---- queries ---------------------------------------------------------

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, key) -> bool:
        return key in self._index

    def __repr__(self) -> str:
        return f"DiGraph(nodes={self.node_count()}, edges={self.edge_count()})"

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return self._edge_count

    def density(self) -> float:
        """Edges / (n * (n - 1)); 0.0 for graphs with fewer than two nodes."""
        n = len(self._nodes)
        if n <= 1:
            return 0.0
        return self._edge_count / (n * (n - 1))

    def node_id(self, idx: int) -> str | None:
        if 0 <= idx < len(self._nodes):
            return self._nodes[idx]
        return None

    def node_idx(self, key: str) -> int | None:
        return self._index.get(key)

    def node_ids(self) -> list[str]:
        return list(self._nodes)

    def out_degree(self, idx: int) -> int:
        if 0 <= idx < len(self._adj):
            return len(self._adj[idx])
        return 0

    def in_degree(self, idx: int) -> int:
        if 0 <= idx < len(self._rev):
            return len(self._rev[idx])
        return 0

    def out_degrees(self) -> list[int]:
        return [len(succ) for succ in self._adj]

    def in_degrees(self) -> list[int]:
        return [len(pred) for pred in self._rev]

    def successors(self, idx: int) -> tuple[int, ...]:
        if 0 <= idx < len(self._adj):
            return tuple(self._adj[idx])
        return ()

    def predecessors(self, idx: int) -> tuple[int, ...]:
        if 0 <= idx < len(self._rev):
            return tuple(self._rev[idx])
        return ()

    def adjacency(self) -> list[tuple[int, ...]]:
        """Successor tuples for every node, in index order."""
        return [tuple(succ) for succ in self._adj]

    def reverse_adjacency(self) -> list[tuple[int, ...]]:
        """Predecessor tuples for every node, in index order."""
        return [tuple(pred) for pred in self._rev]

    def has_edge(self, from_idx: int, to_idx: int) -> bool:
        return (from_idx, to_idx) in self._edge_set

    def edges(self) -> list[tuple[int, int]]:
        """All edges, grouped by source index in insertion order."""
        return [(u, v) for u, succ in enumerate(self._adj) for v in succ]

    # ---- snapshot import/export -----------------------------------------

    def to_snapshot(self) -> GraphSnapshot:
        return GraphSnapshot(nodes=list(self._nodes), edges=self.edges())

    @classmethod
    def from_snapshot(cls, snapshot: GraphSnapshot | dict) -> DiGraph:
        """Rebuild a graph by replaying node then edge insertion in order."""
        if not isinstance(snapshot, GraphSnapshot):
            snapshot = GraphSnapshot.from_dict(snapshot)
        graph = cls.with_capacity(len(snapshot.nodes), len(snapshot.edges))
        for key in snapshot.nodes:
            graph.add_node(key)
        for from_idx, to_idx in snapshot.edges:
            graph.add_edge(from_idx, to_idx)
        return graph

    def to_json(self) -> str:
        return json.dumps(self.to_snapshot().to_dict())

    @classmethod
    def from_json(cls, text: str) -> DiGraph:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SnapshotError(f"invalid snapshot JSON: {exc}") from exc
        return cls.from_snapshot(GraphSnapshot.from_dict(data))

    # ---- networkx interop ------------------------------------------------

    def to_networkx(self) -> nx.DiGraph:
        """Export as a NetworkX DiGraph keyed by index, with a ``key`` attribute."""
        G = nx.DiGraph()
        G.add_nodes_from((idx, {"key": key}) for idx, key in enumerate(self._nodes))
        G.add_edges_from(self.edges())
        return G

    @classmethod
    def from_networkx(cls, G: nx.DiGraph) -> DiGraph:
        """Import a NetworkX graph; node order follows ``G.nodes``, keys are ``str(node)``."""
        graph = cls.with_capacity(G.number_of_nodes(), G.number_of_edges())
        lookup = {node: graph.add_node(str(node)) for node in G.nodes}
        for u, v in G.edges():
            graph.add_edge(lookup[u], lookup[v])
        return graph
