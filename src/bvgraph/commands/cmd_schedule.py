"""Critical path, slack and the longest dependency chains."""

from __future__ import annotations

import click

from bvgraph.commands.resolve import is_json, keys_of, open_graph
from bvgraph.output.formatter import format_path, format_table, json_envelope, section, to_json


@click.command("schedule")
@click.argument("snapshot")
@click.option("--paths", "k", default=5, type=int, help="Number of longest chains to show")
@click.option("--slack", "show_slack", is_flag=True, help="List slack for every node")
@click.pass_context
def schedule(ctx, snapshot, k, show_slack):
    """Critical path length, critical nodes and per-node slack.

    Height counts nodes: a task nothing blocks has height 1.  Slack is how
    far a node's longest chain falls short of the critical path.  Cyclic
    graphs have no schedule; every figure is reported as zero.
    """
    from bvgraph.graph.critical_path import (
        critical_path_heights,
        critical_path_nodes,
        k_longest_paths,
        slack,
    )
    from bvgraph.graph.topo import is_dag

    graph = open_graph(snapshot)
    dag = is_dag(graph)
    heights = critical_path_heights(graph)
    length = max(heights, default=0)
    critical = critical_path_nodes(graph)
    slacks = slack(graph)
    chains = k_longest_paths(graph, k=k)

    if not dag:
        verdict = "graph contains cycles, no schedule (run `bvgraph cycles`)"
    else:
        verdict = f"critical path length {length}, {len(critical)} critical node(s)"

    if is_json(ctx):
        click.echo(
            to_json(
                json_envelope(
                    "schedule",
                    summary={
                        "verdict": verdict,
                        "is_dag": dag,
                        "critical_path_length": length,
                        "total_float": max(slacks, default=0),
                    },
                    critical_nodes=keys_of(graph, critical),
                    paths=[
                        {"length": p.length, "nodes": keys_of(graph, p.nodes)} for p in chains.paths
                    ],
                    nodes=[
                        {"node": graph.node_id(v), "height": heights[v], "slack": slacks[v]}
                        for v in range(len(graph))
                    ],
                )
            )
        )
        return

    click.echo(f"VERDICT: {verdict}")
    if not dag:
        return
    if chains.paths:
        click.echo("")
        lines = [f"  [{p.length}] {format_path(keys_of(graph, p.nodes))}" for p in chains.paths]
        click.echo(section("Longest chains:", lines))
    if show_slack and len(graph):
        click.echo("")
        order = sorted(range(len(graph)), key=lambda v: (slacks[v], -heights[v], v))
        rows = [[graph.node_id(v), heights[v], slacks[v]] for v in order]
        click.echo(format_table(["node", "height", "slack"], rows))
