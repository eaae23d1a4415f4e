"""Structural weak points: SCCs, articulation points, bridges and k-cores."""

from __future__ import annotations

import click

from bvgraph.commands.resolve import is_json, keys_of, open_graph
from bvgraph.output.formatter import format_table, json_envelope, section, to_json


@click.command("structure")
@click.argument("snapshot")
@click.option("--top", "top_n", default=10, type=int, help="Show top N nodes by core number")
@click.pass_context
def structure(ctx, snapshot, top_n):
    """Show strongly connected components and single points of failure.

    Articulation points and bridges are computed on the undirected view of
    the graph: removing one splits a connected group of work into pieces.
    """
    from bvgraph.graph.articulation import articulation_points, bridges
    from bvgraph.graph.cycles import tarjan_scc
    from bvgraph.graph.kcore import kcore

    graph = open_graph(snapshot)
    scc = tarjan_scc(graph)
    aps = articulation_points(graph)
    bridge_list = bridges(graph)
    cores = kcore(graph)
    degeneracy = max(cores, default=0)
    tangled = [c for c in scc.components if len(c) > 1]

    verdict = (
        f"{scc.cycle_count} cyclic component(s), {len(aps)} articulation point(s), "
        f"{len(bridge_list)} bridge(s)"
    )
    by_core = sorted(range(len(cores)), key=lambda v: (-cores[v], v))[:top_n]

    if is_json(ctx):
        click.echo(
            to_json(
                json_envelope(
                    "structure",
                    summary={
                        "verdict": verdict,
                        "components": len(scc.components),
                        "cycle_count": scc.cycle_count,
                        "has_cycles": scc.has_cycles,
                        "articulation_points": len(aps),
                        "bridges": len(bridge_list),
                        "degeneracy": degeneracy,
                    },
                    tangles=[keys_of(graph, c) for c in tangled],
                    articulation_points=keys_of(graph, aps),
                    bridges=[[graph.node_id(u), graph.node_id(v)] for u, v in bridge_list],
                    core_numbers=[{"node": graph.node_id(v), "core": cores[v]} for v in by_core],
                )
            )
        )
        return

    click.echo(f"VERDICT: {verdict}")
    if tangled:
        click.echo("")
        lines = [f"  {', '.join(keys_of(graph, c))}" for c in tangled]
        click.echo(section(f"Tangles ({len(tangled)}):", lines, budget=20))
    if aps:
        click.echo("")
        click.echo(section("Articulation points:", [f"  {k}" for k in keys_of(graph, aps)], budget=30))
    if bridge_list:
        click.echo("")
        lines = [f"  {graph.node_id(u)} -- {graph.node_id(v)}" for u, v in bridge_list]
        click.echo(section("Bridges:", lines, budget=30))
    if by_core:
        click.echo("")
        click.echo(f"Degeneracy: {degeneracy}")
        click.echo(format_table(["node", "core"], [[graph.node_id(v), cores[v]] for v in by_core]))
