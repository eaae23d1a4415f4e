"""Dependency cone of one node: what blocks it and what it blocks."""

from __future__ import annotations

import click

from bvgraph.commands.resolve import is_json, keys_of, open_graph, resolve_node
from bvgraph.output.formatter import json_envelope, section, to_json


@click.command("cone")
@click.argument("snapshot")
@click.argument("key")
@click.option("--direction", type=click.Choice(["up", "down", "both"]), default="both", show_default=True,
              help="up = blockers, down = dependents, both = full cone")
@click.option("--subgraph-out", "subgraph_out", type=click.Path(dir_okay=False), default=None,
              help="Write the cone as a snapshot file")
@click.pass_context
def cone(ctx, snapshot, key, direction, subgraph_out):
    """Everything KEY transitively depends on and everything waiting on it.

    With --subgraph-out the induced subgraph is saved as a snapshot that
    every other command accepts.
    """
    from bvgraph.graph.builder import save_graph
    from bvgraph.graph.subgraph import dependency_cone, extract_subgraph, reachable_from, reachable_to

    graph = open_graph(snapshot)
    node = resolve_node(graph, key)

    upstream = [v for v in reachable_to(graph, node) if v != node]
    downstream = [v for v in reachable_from(graph, node) if v != node]
    if direction == "up":
        members = [node] + upstream
    elif direction == "down":
        members = [node] + downstream
    else:
        members = dependency_cone(graph, node)

    written = None
    if subgraph_out:
        written = str(save_graph(extract_subgraph(graph, members), subgraph_out))

    verdict = f"{key}: {len(upstream)} upstream, {len(downstream)} downstream"

    if is_json(ctx):
        click.echo(
            to_json(
                json_envelope(
                    "cone",
                    summary={
                        "verdict": verdict,
                        "node": key,
                        "upstream": len(upstream),
                        "downstream": len(downstream),
                        "size": len(members),
                    },
                    upstream=keys_of(graph, upstream) if direction != "down" else [],
                    downstream=keys_of(graph, downstream) if direction != "up" else [],
                    subgraph_out=written,
                )
            )
        )
        return

    click.echo(f"VERDICT: {verdict}")
    if direction != "down" and upstream:
        click.echo("")
        click.echo(section("Blocked by (transitively):", [f"  {k}" for k in keys_of(graph, upstream)], budget=40))
    if direction != "up" and downstream:
        click.echo("")
        click.echo(section("Blocks (transitively):", [f"  {k}" for k in keys_of(graph, downstream)], budget=40))
    if written:
        click.echo("")
        click.echo(f"Wrote {len(members)}-node subgraph to {written}")
