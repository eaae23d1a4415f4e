"""Enumerate dependency cycles and suggest edges to break them."""

from __future__ import annotations

import click

from bvgraph.commands.resolve import analysis_config, is_json, keys_of, open_graph
from bvgraph.exit_codes import EXIT_PARTIAL
from bvgraph.output.formatter import format_path, format_table, json_envelope, section, to_json


@click.command("cycles")
@click.argument("snapshot")
@click.option("--max", "max_cycles", default=None, type=int,
              help="Stop after this many cycles (default from config, 100)")
@click.option("--suggest", "suggest_n", default=None, type=int,
              help="Number of edge-removal suggestions to show")
@click.pass_context
def cycles(ctx, snapshot, max_cycles, suggest_n):
    """List elementary cycles and the edges whose removal breaks the most.

    Exits with code 6 when the cycle cap was reached and the listing is
    incomplete.
    """
    from bvgraph.graph.cycles import cycle_break_suggestions, enumerate_cycles

    graph = open_graph(snapshot)
    config = analysis_config(ctx)
    max_cycles = config.max_cycles if max_cycles is None else max_cycles
    suggest_n = config.cycle_break_limit if suggest_n is None else suggest_n

    enumeration = enumerate_cycles(graph, max_cycles=max_cycles)
    breaks = cycle_break_suggestions(graph, limit=suggest_n, enumeration=enumeration)

    if enumeration.count == 0:
        verdict = "no cycles"
    elif enumeration.truncated:
        verdict = f"at least {enumeration.count} cycles (enumeration stopped at --max)"
    else:
        verdict = f"{enumeration.count} cycle(s)"

    if is_json(ctx):
        click.echo(
            to_json(
                json_envelope(
                    "cycles",
                    summary={
                        "verdict": verdict,
                        "count": enumeration.count,
                        "truncated": enumeration.truncated,
                    },
                    cycles=[keys_of(graph, c) for c in enumeration.cycles],
                    suggestions=[
                        {
                            "from": graph.node_id(s.from_idx),
                            "to": graph.node_id(s.to_idx),
                            "cycles_broken": s.cycles_broken,
                            "collateral": s.collateral,
                        }
                        for s in breaks.suggestions
                    ],
                )
            )
        )
    else:
        click.echo(f"VERDICT: {verdict}")
        if enumeration.cycles:
            click.echo("")
            lines = [
                f"  {format_path(keys_of(graph, c + c[:1]))}" for c in enumeration.cycles
            ]
            click.echo(section("Cycles:", lines, budget=25))
        if breaks.suggestions:
            click.echo("")
            click.echo("Suggested edges to remove:")
            rows = [
                [graph.node_id(s.from_idx), graph.node_id(s.to_idx), s.cycles_broken, s.collateral]
                for s in breaks.suggestions
            ]
            click.echo(format_table(["from", "to", "breaks", "collateral"], rows))

    if enumeration.truncated:
        ctx.exit(EXIT_PARTIAL)
