"""Graph model and algorithms for dependency analysis."""

from bvgraph.graph.articulation import articulation_points, bridges
from bvgraph.graph.betweenness import (
    BetweennessResult,
    betweenness,
    betweenness_approx,
    recommend_sample_size,
)
from bvgraph.graph.builder import (
    GraphInput,
    build_graph_from_pairs,
    build_issue_graph,
    closed_keys,
    load_graph,
    load_input,
    parse_graph,
    parse_input,
    save_graph,
)
from bvgraph.graph.coverage import CoverageItem, CoverageResult, coverage_nodes, coverage_set
from bvgraph.graph.critical_path import (
    KPathsResult,
    critical_path_heights,
    critical_path_length,
    critical_path_nodes,
    k_longest_paths,
    slack,
    total_float,
)
from bvgraph.graph.cycles import (
    CycleBreakResult,
    CycleEnumeration,
    SCCResult,
    cycle_break_suggestions,
    enumerate_cycles,
    has_cycles,
    tarjan_scc,
)
from bvgraph.graph.kcore import degeneracy, kcore
from bvgraph.graph.metrics import compute_graph_metrics
from bvgraph.graph.model import DiGraph, GraphSnapshot
from bvgraph.graph.pagerank import (
    EigenvectorConfig,
    HITSConfig,
    HITSResult,
    PageRankConfig,
    eigenvector_centrality,
    hits,
    pagerank,
)
from bvgraph.graph.subgraph import (
    dependency_cone,
    extract_subgraph,
    extract_subgraph_by_keys,
    reachable_from,
    reachable_subgraph_from,
    reachable_to,
)
from bvgraph.graph.topo import is_dag, topological_sort
from bvgraph.graph.whatif import (
    TopKResult,
    WhatIfResult,
    actionable_nodes,
    open_blockers,
    top_what_if,
    topk_set,
    what_if_close,
    what_if_close_batch,
)

__all__ = [
    # model
    "DiGraph",
    "GraphSnapshot",
    "GraphInput",
    "build_graph_from_pairs",
    "build_issue_graph",
    "closed_keys",
    "load_graph",
    "load_input",
    "parse_graph",
    "parse_input",
    "save_graph",
    # traversal & decomposition
    "topological_sort",
    "is_dag",
    "tarjan_scc",
    "has_cycles",
    "enumerate_cycles",
    "cycle_break_suggestions",
    "articulation_points",
    "bridges",
    "SCCResult",
    "CycleEnumeration",
    "CycleBreakResult",
    # ranking
    "pagerank",
    "eigenvector_centrality",
    "hits",
    "betweenness",
    "betweenness_approx",
    "recommend_sample_size",
    "PageRankConfig",
    "EigenvectorConfig",
    "HITSConfig",
    "HITSResult",
    "BetweennessResult",
    # scheduling
    "critical_path_heights",
    "critical_path_length",
    "critical_path_nodes",
    "slack",
    "total_float",
    "k_longest_paths",
    "KPathsResult",
    # approximation
    "coverage_set",
    "coverage_nodes",
    "kcore",
    "degeneracy",
    "CoverageItem",
    "CoverageResult",
    # subgraph & reachability
    "extract_subgraph",
    "extract_subgraph_by_keys",
    "reachable_from",
    "reachable_to",
    "dependency_cone",
    "reachable_subgraph_from",
    # what-if
    "open_blockers",
    "actionable_nodes",
    "what_if_close",
    "what_if_close_batch",
    "top_what_if",
    "topk_set",
    "WhatIfResult",
    "TopKResult",
    # summary
    "compute_graph_metrics",
]
