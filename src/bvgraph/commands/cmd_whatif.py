"""What-if analysis: which work gets unblocked by closing which issues."""

from __future__ import annotations

import click

from bvgraph.commands.resolve import analysis_config, is_json, keys_of, open_input, resolve_nodes
from bvgraph.output.formatter import format_table, json_envelope, to_json


def _result_dict(graph, result) -> dict:
    return {
        "nodes": keys_of(graph, result.nodes),
        "direct_unblocks": result.direct_unblocks,
        "transitive_unblocks": result.transitive_unblocks,
        "unblocked": keys_of(graph, result.unblocked_ids),
        "cascade": keys_of(graph, result.cascade_ids),
        "parallel_gain": result.parallel_gain,
    }


@click.command("whatif")
@click.argument("snapshot")
@click.argument("keys", nargs=-1)
@click.option("--closed", "closed_keys", multiple=True, help="Key of an issue already done (repeatable)")
@click.option("--top", "top_n", default=None, type=int,
              help="Rank the top N issues when no KEYS are given (default from config, 5)")
@click.option("--set", "set_k", default=None, type=int,
              help="Greedily pick a set of K issues that unblocks the most work")
@click.pass_context
def whatif(ctx, snapshot, keys, closed_keys, top_n, set_k):
    """Simulate closing KEYS and report the work that becomes actionable.

    Issues with status "closed" in an issue file count as done, as do
    --closed keys.  Without KEYS, ranks every open issue by how much work
    closing it would unblock.  With --set K, picks K issues to work on
    together.
    """
    from bvgraph.graph.whatif import actionable_nodes, top_what_if, topk_set, what_if_close_batch

    loaded = open_input(snapshot)
    graph = loaded.graph
    closed = set(resolve_nodes(graph, loaded.closed)) | set(resolve_nodes(graph, closed_keys))
    actionable = actionable_nodes(graph, closed)
    json_mode = is_json(ctx)

    if keys:
        result = what_if_close_batch(graph, resolve_nodes(graph, keys), closed)
        verdict = (
            f"closing {', '.join(keys)} unblocks {result.direct_unblocks} "
            f"({result.transitive_unblocks} with cascade)"
        )
        if json_mode:
            click.echo(
                to_json(
                    json_envelope(
                        "whatif",
                        summary={"verdict": verdict, "actionable": len(actionable)},
                        result=_result_dict(graph, result),
                    )
                )
            )
            return
        click.echo(f"VERDICT: {verdict}")
        if result.unblocked_ids:
            click.echo(f"Unblocked now: {', '.join(keys_of(graph, result.unblocked_ids))}")
        direct = set(result.unblocked_ids)
        extra = [v for v in result.cascade_ids if v not in direct]
        if extra:
            click.echo(f"Then:          {', '.join(keys_of(graph, extra))}")
        click.echo(f"Parallel gain: {result.parallel_gain:+d}")
        return

    if set_k is not None:
        picked = topk_set(graph, closed, k=set_k)
        verdict = f"{len(picked.items)} issue(s) unblock {picked.total_gain} in total"
        if json_mode:
            click.echo(
                to_json(
                    json_envelope(
                        "whatif",
                        summary={"verdict": verdict, "actionable": len(actionable), "total_gain": picked.total_gain},
                        picks=[
                            {
                                "node": graph.node_id(item.node),
                                "marginal_gain": item.marginal_gain,
                                "unblocked": keys_of(graph, item.unblocked_ids),
                            }
                            for item in picked.items
                        ],
                    )
                )
            )
            return
        click.echo(f"VERDICT: {verdict}")
        if picked.items:
            click.echo("")
            rows = [
                [graph.node_id(item.node), item.marginal_gain, ", ".join(keys_of(graph, item.unblocked_ids))]
                for item in picked.items
            ]
            click.echo(format_table(["node", "gain", "unblocks"], rows))
        return

    config = analysis_config(ctx)
    ranked = top_what_if(graph, closed, limit=config.topk if top_n is None else top_n)
    verdict = f"{len(actionable)} actionable, {len(ranked)} issue(s) would unblock more work"
    if json_mode:
        click.echo(
            to_json(
                json_envelope(
                    "whatif",
                    summary={"verdict": verdict, "actionable": len(actionable)},
                    actionable=keys_of(graph, actionable),
                    ranking=[_result_dict(graph, r) for r in ranked],
                )
            )
        )
        return
    click.echo(f"VERDICT: {verdict}")
    if ranked:
        click.echo("")
        rows = [
            [graph.node_id(r.nodes[0]), r.direct_unblocks, r.transitive_unblocks, f"{r.parallel_gain:+d}"]
            for r in ranked
        ]
        click.echo(format_table(["node", "direct", "cascade", "gain"], rows))
