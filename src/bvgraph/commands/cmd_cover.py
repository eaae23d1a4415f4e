"""Greedy vertex cover: the few nodes that touch the most edges."""

from __future__ import annotations

import click

from bvgraph.commands.resolve import analysis_config, is_json, open_graph
from bvgraph.output.formatter import format_table, json_envelope, to_json


@click.command("cover")
@click.argument("snapshot")
@click.option("--limit", default=None, type=int, help="Maximum nodes to select (default from config, 10)")
@click.pass_context
def cover(ctx, snapshot, limit):
    """Pick nodes greedily so that together they touch the most edges.

    Useful for choosing a handful of items to review that covers as many
    dependency links as possible.
    """
    from bvgraph.graph.coverage import coverage_set

    graph = open_graph(snapshot)
    config = analysis_config(ctx)
    result = coverage_set(graph, limit=config.coverage_limit if limit is None else limit)
    verdict = (
        f"{len(result.items)} node(s) cover {result.edges_covered}/{result.total_edges} edges "
        f"({result.coverage_ratio:.0%})"
    )

    if is_json(ctx):
        click.echo(
            to_json(
                json_envelope(
                    "cover",
                    summary={
                        "verdict": verdict,
                        "edges_covered": result.edges_covered,
                        "total_edges": result.total_edges,
                        "coverage_ratio": round(result.coverage_ratio, 6),
                    },
                    items=[
                        {"node": graph.node_id(item.node), "edges_added": item.edges_added}
                        for item in result.items
                    ],
                )
            )
        )
        return

    click.echo(f"VERDICT: {verdict}")
    if result.items:
        click.echo("")
        rows = [[pos, graph.node_id(item.node), item.edges_added] for pos, item in enumerate(result.items, 1)]
        click.echo(format_table(["#", "node", "new edges"], rows))
