"""Show graph size, density and a topological work order."""

from __future__ import annotations

import click

from bvgraph.commands.resolve import is_json, keys_of, open_graph
from bvgraph.output.formatter import format_table, json_envelope, to_json, truncate_lines


@click.command("info")
@click.argument("snapshot", metavar="SNAPSHOT")
@click.option("--order", "show_order", is_flag=True, help="Print the topological work order")
@click.option("--top", "top_n", default=10, type=int, help="Show the top N nodes by degree")
@click.pass_context
def info(ctx, snapshot, show_order, top_n):
    """Show graph size, density and the most connected nodes.

    SNAPSHOT is a snapshot JSON file, a JSON issue list or issues JSONL;
    '-' reads stdin.
    """
    from bvgraph.graph.topo import topological_sort

    graph = open_graph(snapshot)
    order = topological_sort(graph)
    in_deg = graph.in_degrees()
    out_deg = graph.out_degrees()
    by_degree = sorted(range(len(graph)), key=lambda v: (-(in_deg[v] + out_deg[v]), v))[:top_n]
    verdict = (
        f"{graph.node_count()} nodes, {graph.edge_count()} edges, "
        + ("acyclic" if order is not None else "contains cycles")
    )

    if is_json(ctx):
        click.echo(
            to_json(
                json_envelope(
                    "info",
                    summary={
                        "verdict": verdict,
                        "nodes": graph.node_count(),
                        "edges": graph.edge_count(),
                        "density": round(graph.density(), 6),
                        "is_dag": order is not None,
                    },
                    order=keys_of(graph, order) if order is not None else None,
                    top_degree=[
                        {"node": graph.node_id(v), "in_degree": in_deg[v], "out_degree": out_deg[v]}
                        for v in by_degree
                    ],
                )
            )
        )
        return

    click.echo(f"VERDICT: {verdict}")
    click.echo(f"Density: {graph.density():.4f}")
    if by_degree:
        click.echo("")
        rows = [[graph.node_id(v), in_deg[v], out_deg[v]] for v in by_degree]
        click.echo(format_table(["node", "in", "out"], rows))
    if show_order:
        click.echo("")
        if order is None:
            click.echo("No work order: the graph contains cycles (see `bvgraph cycles`).")
        else:
            lines = [f"{pos:>4}. {key}" for pos, key in enumerate(keys_of(graph, order), 1)]
            click.echo("Work order:")
            click.echo("\n".join(truncate_lines(lines, 50)))
