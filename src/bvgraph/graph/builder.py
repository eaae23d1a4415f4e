"""Build dependency graphs from issue records, key pairs and files on disk."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from bvgraph.exit_codes import SnapshotError
from bvgraph.graph.model import DiGraph, GraphSnapshot

log = logging.getLogger(__name__)

# Dependency types that block work.  Legacy records without a type block too.
BLOCKING_TYPES = frozenset({"", "blocks"})
CLOSED_STATUS = "closed"


def build_graph_from_pairs(pairs: Iterable[tuple[str, str]], nodes: Iterable[str] = ()) -> DiGraph:
    """Build a graph from ``(from_key, to_key)`` pairs.

    *nodes* are inserted first, so isolated items keep their position.
    """
    graph = DiGraph()
    for key in nodes:
        graph.add_node(key)
    for from_key, to_key in pairs:
        graph.add_edge_by_key(from_key, to_key)
    return graph


def build_issue_graph(issues: Iterable[dict]) -> DiGraph:
    """Build a blocker -> dependent graph from issue records.

    Each record needs an ``id``; its ``dependencies`` list holds
    ``{"depends_on_id": ..., "type": ...}`` entries.  Only blocking
    dependencies produce an edge ``depends_on_id -> id``.  Every issue is
    added as a node in input order (ordered for deterministic indices),
    then edges in the same order.  Dependencies on issues missing from the
    input are skipped.
    """
    issues = list(issues)
    graph = DiGraph()
    for pos, issue in enumerate(issues):
        if not isinstance(issue, dict) or not isinstance(issue.get("id"), str):
            raise SnapshotError(f"issue {pos} has no string 'id'")
        graph.add_node(issue["id"])

    for issue in issues:
        for dep in issue.get("dependencies") or []:
            if not isinstance(dep, dict):
                raise SnapshotError(f"issue {issue['id']} has a malformed dependency: {dep!r}")
            if (dep.get("type") or "") not in BLOCKING_TYPES:
                continue
            blocker = dep.get("depends_on_id")
            if not isinstance(blocker, str):
                raise SnapshotError(f"issue {issue['id']} has a dependency without 'depends_on_id'")
            blocker_idx = graph.node_idx(blocker)
            if blocker_idx is None:
                log.debug("Skipping dependency of %s on unknown issue %s", issue["id"], blocker)
                continue
            graph.add_edge(blocker_idx, graph.node_idx(issue["id"]))
    return graph


def closed_keys(issues: Iterable[dict]) -> list[str]:
    """Ids of issues whose ``status`` is ``"closed"``, in input order."""
    return [
        issue["id"] for issue in issues
        if isinstance(issue, dict) and issue.get("status") == CLOSED_STATUS and isinstance(issue.get("id"), str)
    ]


def _parse_jsonl(text: str) -> list:
    records = []
    for lineno, line in enumerate(text.splitlines(), 1):
        line = line.strip()
        if not line:
            continue
        try:
            records.append(json.loads(line))
        except json.JSONDecodeError as exc:
            raise SnapshotError(f"line {lineno}: invalid JSON ({exc.msg})") from exc
    return records


@dataclass
class GraphInput:
    """A loaded graph plus the keys of issues already marked closed.

    Snapshots carry no status, so ``closed`` is empty for them.
    """

    graph: DiGraph
    closed: list[str] = field(default_factory=list)


def load_input(path: str | Path) -> GraphInput:
    """Load a snapshot file, a JSON issue list, or JSONL issues.

    ``-`` is not handled here; the CLI reads stdin itself and calls
    :func:`parse_input`.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SnapshotError(f"cannot read {path}: {exc.strerror}") from exc
    loaded = parse_input(text, jsonl=path.suffix == ".jsonl")
    log.info(
        "Loaded %s: %d nodes, %d edges, %d closed",
        path, loaded.graph.node_count(), loaded.graph.edge_count(), len(loaded.closed),
    )
    return loaded


def parse_input(text: str, jsonl: bool = False) -> GraphInput:
    """Parse graph input text; see :func:`load_input` for accepted formats."""
    if jsonl:
        issues = _parse_jsonl(text)
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SnapshotError(f"invalid JSON: {exc.msg}") from exc
        if not isinstance(data, list):
            return GraphInput(graph=DiGraph.from_snapshot(GraphSnapshot.from_dict(data)))
        issues = data
    return GraphInput(graph=build_issue_graph(issues), closed=closed_keys(issues))


def load_graph(path: str | Path) -> DiGraph:
    """Just the graph of :func:`load_input`."""
    return load_input(path).graph


def parse_graph(text: str, jsonl: bool = False) -> DiGraph:
    return parse_input(text, jsonl=jsonl).graph


def save_graph(graph: DiGraph, path: str | Path) -> Path:
    """Write *graph* as a snapshot JSON file and return the path."""
    path = Path(path)
    path.write_text(
        json.dumps(graph.to_snapshot().to_dict(), indent=2) + "\n",
        encoding="utf-8",
    )
    return path
