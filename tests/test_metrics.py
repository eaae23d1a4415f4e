"""Tests for the one-shot metrics summary."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))
from conftest import cycle_graph, make_graph, path_graph, random_graph

from bvgraph.config import AnalysisConfig
from bvgraph.graph.metrics import compute_graph_metrics
from bvgraph.graph.model import DiGraph

_KEYS = {
    "nodes",
    "edges",
    "density",
    "is_dag",
    "cycles",
    "tangle_ratio",
    "articulation_points",
    "bridges",
    "degeneracy",
    "critical_path_length",
    "total_float",
    "top_pagerank",
    "top_betweenness",
    "betweenness_mode",
    "betweenness_sample_size",
}


class TestComputeGraphMetrics:
    def test_all_keys_present(self):
        assert set(compute_graph_metrics(path_graph(3))) == _KEYS

    def test_path(self):
        m = compute_graph_metrics(path_graph(4))
        assert m["nodes"] == 4
        assert m["edges"] == 3
        assert m["is_dag"] is True
        assert m["cycles"] == 0
        assert m["tangle_ratio"] == 0.0
        assert m["articulation_points"] == 2
        assert m["bridges"] == 3
        assert m["degeneracy"] == 1
        assert m["critical_path_length"] == 4
        assert m["total_float"] == 0
        assert m["top_pagerank"] == "n3"
        assert m["top_betweenness"] == "n1"
        assert m["betweenness_mode"] == "exact"

    def test_cyclic_graph(self):
        g = make_graph([("a", "b"), ("b", "a"), ("b", "c")])
        m = compute_graph_metrics(g)
        assert m["is_dag"] is False
        assert m["cycles"] == 1
        assert m["tangle_ratio"] == round(100 * 2 / 3, 2)
        assert m["critical_path_length"] == 0
        assert m["total_float"] == 0

    def test_empty_graph(self):
        m = compute_graph_metrics(DiGraph())
        assert m["nodes"] == 0
        assert m["top_pagerank"] is None
        assert m["top_betweenness"] is None
        assert m["degeneracy"] == 0

    def test_large_graph_samples_betweenness(self):
        g = random_graph(150, 0.02, seed=1)
        m = compute_graph_metrics(g, AnalysisConfig(betweenness_seed=7))
        assert m["betweenness_mode"] == "approximate"
        assert m["betweenness_sample_size"] == 50

    def test_config_pins_sample_size(self):
        m = compute_graph_metrics(cycle_graph(10), AnalysisConfig(betweenness_sample_size=3, betweenness_seed=1))
        assert m["betweenness_mode"] == "approximate"
        assert m["betweenness_sample_size"] == 3
