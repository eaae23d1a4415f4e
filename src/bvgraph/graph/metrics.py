"""One-shot summary of every graph metric, for reports and the CLI."""

from __future__ import annotations

from bvgraph.graph.model import DiGraph


def compute_graph_metrics(graph: DiGraph, config=None) -> dict:
    """Compute all graph-derivable summary metrics.

    *config* is an :class:`bvgraph.config.AnalysisConfig`; defaults are
    used when omitted.  Betweenness uses ``recommend_sample_size`` unless
    the config pins a sample size.
    """
    from bvgraph.config import AnalysisConfig
    from bvgraph.graph.articulation import articulation_points, bridges
    from bvgraph.graph.betweenness import betweenness_approx, recommend_sample_size
    from bvgraph.graph.critical_path import critical_path_length, total_float
    from bvgraph.graph.cycles import tarjan_scc
    from bvgraph.graph.kcore import degeneracy
    from bvgraph.graph.pagerank import pagerank
    from bvgraph.graph.topo import is_dag

    config = config or AnalysisConfig()
    n = len(graph)
    e = graph.edge_count()

    scc = tarjan_scc(graph)
    scc_nodes = sum(len(c) for c in scc.components if len(c) > 1)
    tangle = round(100 * scc_nodes / n, 2) if n > 0 else 0.0

    pr = pagerank(graph, config.pagerank_config())
    top_pr = max(range(n), key=lambda v: (pr[v], -v)) if n else None

    k = config.betweenness_sample_size or recommend_sample_size(n, e)
    bc = betweenness_approx(graph, k, seed=config.betweenness_seed)
    top_bc = max(range(n), key=lambda v: (bc.scores[v], -v)) if n else None

    dag = is_dag(graph)
    return {
        "nodes": n,
        "edges": e,
        "density": round(graph.density(), 6),
        "is_dag": dag,
        "cycles": scc.cycle_count,
        "tangle_ratio": tangle,
        "articulation_points": len(articulation_points(graph)),
        "bridges": len(bridges(graph)),
        "degeneracy": degeneracy(graph),
        "critical_path_length": critical_path_length(graph) if dag else 0,
        "total_float": total_float(graph) if dag else 0,
        "top_pagerank": graph.node_id(top_pr) if top_pr is not None else None,
        "top_betweenness": graph.node_id(top_bc) if top_bc is not None else None,
        "betweenness_mode": bc.mode,
        "betweenness_sample_size": bc.sample_size,
    }
