"""Shared graph loading and key resolution helpers for all bvgraph commands."""

from __future__ import annotations

import click

from bvgraph.exit_codes import NodeNotFoundError
from bvgraph.graph.builder import GraphInput, load_input, parse_input
from bvgraph.graph.model import DiGraph


def open_input(source: str) -> GraphInput:
    """Load the graph named by a SNAPSHOT argument, with its closed issues.

    ``-`` reads the JSON document from stdin.  Raises SnapshotError on
    anything unreadable.
    """
    if source == "-":
        return parse_input(click.get_text_stream("stdin").read())
    return load_input(source)


def open_graph(source: str) -> DiGraph:
    return open_input(source).graph


def resolve_node(graph: DiGraph, key: str) -> int:
    """Return the index of *key* or raise NodeNotFoundError."""
    idx = graph.node_idx(key)
    if idx is None:
        raise NodeNotFoundError(key)
    return idx


def resolve_nodes(graph: DiGraph, keys) -> list[int]:
    return [resolve_node(graph, key) for key in keys]


def analysis_config(ctx):
    """The AnalysisConfig loaded by the root command."""
    from bvgraph.config import AnalysisConfig

    obj = ctx.find_root().obj or {}
    return obj.get("config") or AnalysisConfig()


def is_json(ctx) -> bool:
    return bool(ctx.obj.get("json")) if ctx.obj else False


def keys_of(graph: DiGraph, indices) -> list[str]:
    return [graph.node_id(i) for i in indices]
