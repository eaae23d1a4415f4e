"""Tests for the greedy vertex cover."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))
from conftest import make_graph, path_graph, random_graph, star_graph

from bvgraph.graph.coverage import coverage_nodes, coverage_set
from bvgraph.graph.model import DiGraph


class TestCoverageSet:
    def test_empty_graph(self):
        result = coverage_set(DiGraph())
        assert result.items == []
        assert result.coverage_ratio == 1.0

    def test_edgeless_graph(self):
        result = coverage_set(make_graph([], nodes=["a", "b"]))
        assert result.items == []
        assert result.total_edges == 0
        assert result.coverage_ratio == 1.0

    def test_star_hub_first(self):
        result = coverage_set(star_graph(5))
        assert result.items[0].node == 0
        assert result.items[0].edges_added == 5
        assert result.coverage_ratio == 1.0
        assert len(result.items) == 1

    def test_in_and_out_edges_both_count(self):
        g = make_graph([("a", "m"), ("b", "m"), ("m", "c")])
        result = coverage_set(g)
        assert result.items[0].node == g.node_idx("m")
        assert result.items[0].edges_added == 3

    def test_first_index_wins_ties(self):
        result = coverage_set(path_graph(2))
        assert result.items[0].node == 0

    def test_path(self):
        result = coverage_set(path_graph(5))
        # n1 and n3 each cover two edges
        assert [item.node for item in result.items] == [1, 3]
        assert result.edges_covered == 4

    def test_respects_limit(self):
        g = random_graph(30, 0.1, seed=1)
        result = coverage_set(g, limit=3)
        assert len(result.items) <= 3
        assert result.edges_covered <= result.total_edges

    def test_zero_limit(self):
        result = coverage_set(star_graph(3), limit=0)
        assert result.items == []
        assert result.edges_covered == 0
        assert result.coverage_ratio == 0.0

    def test_self_loop_counted_once(self):
        g = make_graph([("a", "a")])
        result = coverage_set(g)
        assert result.edges_covered == 1
        assert result.coverage_ratio == 1.0

    def test_gains_never_increase(self):
        g = random_graph(40, 0.08, seed=6)
        gains = [item.edges_added for item in coverage_set(g, limit=20).items]
        assert gains == sorted(gains, reverse=True)
        assert sum(gains) == coverage_set(g, limit=20).edges_covered

    def test_unlimited_cover_is_complete(self):
        g = random_graph(25, 0.1, seed=2)
        result = coverage_set(g, limit=25)
        assert result.edges_covered == result.total_edges
        covered = set(coverage_nodes(g, limit=25))
        assert all(u in covered or v in covered for u, v in g.edges())

    def test_coverage_nodes_matches_items(self):
        g = random_graph(20, 0.1, seed=3)
        assert coverage_nodes(g, 4) == [item.node for item in coverage_set(g, 4).items]
