"""One-screen summary of every graph metric."""

from __future__ import annotations

import click

from bvgraph.commands.resolve import analysis_config, is_json, open_graph
from bvgraph.output.formatter import format_table, json_envelope, to_json

# Display order and labels for the text table
_LABELS = [
    ("nodes", "Nodes"),
    ("edges", "Edges"),
    ("density", "Density"),
    ("is_dag", "Acyclic"),
    ("cycles", "Cyclic components"),
    ("tangle_ratio", "Tangle ratio (%)"),
    ("articulation_points", "Articulation points"),
    ("bridges", "Bridges"),
    ("degeneracy", "Degeneracy"),
    ("critical_path_length", "Critical path length"),
    ("total_float", "Total float"),
    ("top_pagerank", "Top PageRank"),
    ("top_betweenness", "Top betweenness"),
    ("betweenness_mode", "Betweenness mode"),
]


@click.command("metrics")
@click.argument("snapshot")
@click.pass_context
def metrics(ctx, snapshot):
    """Summarize size, structure, scheduling and centrality in one report."""
    from bvgraph.graph.metrics import compute_graph_metrics

    graph = open_graph(snapshot)
    data = compute_graph_metrics(graph, analysis_config(ctx))
    verdict = (
        f"{data['nodes']} nodes, {data['edges']} edges, "
        + ("acyclic" if data["is_dag"] else f"{data['cycles']} cyclic component(s)")
    )

    if is_json(ctx):
        click.echo(to_json(json_envelope("metrics", summary={"verdict": verdict}, metrics=data)))
        return

    click.echo(f"VERDICT: {verdict}")
    click.echo("")
    rows = [[label, "-" if data[key] is None else data[key]] for key, label in _LABELS]
    click.echo(format_table(["metric", "value"], rows))
