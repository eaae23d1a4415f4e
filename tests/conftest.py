"""Shared test fixtures and helpers for bvgraph tests.

Provides:
- Graph factories: make_graph(), path_graph(), star_graph(), cycle_graph(), random_graph()
- Snapshot file fixtures: snapshot_file, issues_file, cyclic_snapshot_file
- CliRunner fixtures: cli_runner, invoke_cli()
- JSON validation helpers: parse_json_output(), assert_json_envelope()
"""

from __future__ import annotations

import json
import os
import random

import pytest
from click.testing import CliRunner

from bvgraph.graph.model import DiGraph

# ===========================================================================
# Graph factories
# ===========================================================================


def make_graph(edges, nodes=()):
    """Build a DiGraph from ``(from_key, to_key)`` pairs.

    *nodes* are added first so isolated nodes and index order can be pinned.
    """
    g = DiGraph()
    for key in nodes:
        g.add_node(key)
    for u, v in edges:
        g.add_edge_by_key(u, v)
    return g


def path_graph(n):
    """n0 -> n1 -> ... -> n(n-1)."""
    return make_graph([(f"n{i}", f"n{i + 1}") for i in range(n - 1)], nodes=[f"n{i}" for i in range(n)])


def star_graph(leaves):
    """hub -> leaf0 .. leaf(leaves-1); the hub is index 0."""
    return make_graph([("hub", f"leaf{i}") for i in range(leaves)], nodes=["hub"])


def cycle_graph(n):
    """c0 -> c1 -> ... -> c(n-1) -> c0."""
    return make_graph([(f"c{i}", f"c{(i + 1) % n}") for i in range(n)], nodes=[f"c{i}" for i in range(n)])


def random_graph(n, p, seed, allow_self_loops=False):
    """Erdos-Renyi style directed graph with a fixed seed."""
    rng = random.Random(seed)
    g = DiGraph()
    for i in range(n):
        g.add_node(f"v{i}")
    for u in range(n):
        for v in range(n):
            if u == v and not allow_self_loops:
                continue
            if rng.random() < p:
                g.add_edge(u, v)
    return g


def random_dag(n, p, seed):
    """Random DAG: edges only go from lower to higher index."""
    rng = random.Random(seed)
    g = DiGraph()
    for i in range(n):
        g.add_node(f"t{i}")
    for u in range(n):
        for v in range(u + 1, n):
            if rng.random() < p:
                g.add_edge(u, v)
    return g


# ===========================================================================
# Snapshot file fixtures
# ===========================================================================

# design -> build -> test -> release, docs -> release, plus an isolated item
PROJECT_SNAPSHOT = {
    "nodes": ["design", "build", "test", "release", "docs", "spike"],
    "edges": [[0, 1], [1, 2], [2, 3], [4, 3]],
}

CYCLIC_SNAPSHOT = {
    "nodes": ["a", "b", "c", "d"],
    "edges": [[0, 1], [1, 2], [2, 0], [2, 3], [3, 2]],
}

ISSUES = [
    {"id": "bv-1", "dependencies": []},
    {"id": "bv-2", "dependencies": [{"depends_on_id": "bv-1", "type": "blocks"}]},
    {"id": "bv-3", "dependencies": [{"depends_on_id": "bv-1", "type": "blocks"}]},
    {
        "id": "bv-4",
        "dependencies": [
            {"depends_on_id": "bv-2", "type": "blocks"},
            {"depends_on_id": "bv-3", "type": "related"},
        ],
    },
]


@pytest.fixture
def snapshot_file(tmp_path):
    path = tmp_path / "project.json"
    path.write_text(json.dumps(PROJECT_SNAPSHOT))
    return path


@pytest.fixture
def cyclic_snapshot_file(tmp_path):
    path = tmp_path / "cyclic.json"
    path.write_text(json.dumps(CYCLIC_SNAPSHOT))
    return path


@pytest.fixture
def issues_file(tmp_path):
    path = tmp_path / "issues.jsonl"
    path.write_text("\n".join(json.dumps(issue) for issue in ISSUES) + "\n")
    return path


# ===========================================================================
# CliRunner helpers
# ===========================================================================


@pytest.fixture
def cli_runner():
    """Provide a Click CliRunner for in-process CLI testing."""
    return CliRunner()


def invoke_cli(runner, args, cwd=None, json_mode=False, input=None):
    """Invoke the bvgraph CLI via CliRunner.

    Args:
        runner: CliRunner instance
        args: list of CLI arguments (e.g. ["info", "graph.json"])
        cwd: directory to run in (config discovery starts here)
        json_mode: if True, prepend --json flag
        input: text fed to stdin (for the '-' snapshot argument)
    Returns:
        click.testing.Result
    """
    from bvgraph.cli import cli

    full_args = []
    if json_mode:
        full_args.append("--json")
    full_args.extend(str(a) for a in args)

    old_cwd = os.getcwd()
    try:
        if cwd:
            os.chdir(str(cwd))
        result = runner.invoke(cli, full_args, input=input)
    finally:
        os.chdir(old_cwd)

    return result


# ===========================================================================
# JSON validation helpers
# ===========================================================================


def parse_json_output(result, command=None):
    """Parse JSON from a CliRunner result, failing with context."""
    assert result.exit_code == 0, f"Command {command or '?'} failed (exit {result.exit_code}):\n{result.output}"
    try:
        return json.loads(result.output)
    except json.JSONDecodeError as e:
        pytest.fail(f"Invalid JSON from {command or '?'}: {e}\nOutput was:\n{result.output[:500]}")


def assert_json_envelope(data, command=None):
    """Validate that a parsed JSON dict follows the bvgraph envelope contract.

    Checks required top-level keys: schema, command, version, summary.
    Checks _meta contains timestamp and summary contains a verdict string.
    """
    assert isinstance(data, dict), f"Expected dict, got {type(data)}"
    assert data.get("schema") == "bvgraph-envelope-v1"
    assert "command" in data, "Missing 'command' key in envelope"
    assert "version" in data, "Missing 'version' key in envelope"
    assert "summary" in data, "Missing 'summary' key in envelope"
    assert "timestamp" in data.get("_meta", {}), "Missing 'timestamp' in _meta"
    if command:
        assert data["command"] == command, f"Expected command={command}, got {data['command']}"
    summary = data["summary"]
    assert isinstance(summary, dict), f"summary should be dict, got {type(summary)}"
    assert isinstance(summary.get("verdict"), str)


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch, tmp_path):
    """Keep config discovery away from any .bvgraph.json on the host."""
    monkeypatch.delenv("BVGRAPH_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
