"""Tests for k-core numbers and degeneracy."""

from __future__ import annotations

import sys
from pathlib import Path

import networkx as nx

sys.path.insert(0, str(Path(__file__).parent))
from conftest import cycle_graph, make_graph, path_graph, random_graph, star_graph

from bvgraph.graph.kcore import degeneracy, kcore
from bvgraph.graph.model import DiGraph


class TestKCore:
    def test_empty(self):
        assert kcore(DiGraph()) == []
        assert degeneracy(DiGraph()) == 0

    def test_isolated_nodes(self):
        assert kcore(make_graph([], nodes=["a", "b"])) == [0, 0]

    def test_path_and_star_are_one_cores(self):
        assert kcore(path_graph(4)) == [1, 1, 1, 1]
        assert kcore(star_graph(4)) == [1] * 5

    def test_cycle_is_two_core(self):
        assert kcore(cycle_graph(5)) == [2] * 5

    def test_clique_with_tail(self):
        edges = [(a, b) for a in "abcd" for b in "abcd" if a < b] + [("d", "e")]
        g = make_graph(edges)
        assert kcore(g) == [3, 3, 3, 3, 1]
        assert degeneracy(g) == 3

    def test_antiparallel_edges_count_once(self):
        g = make_graph([("a", "b"), ("b", "a")])
        assert kcore(g) == [1, 1]

    def test_self_loops_ignored(self):
        g = make_graph([("a", "a"), ("a", "b")])
        assert kcore(g) == [1, 1]

    def test_matches_networkx(self):
        for seed in range(6):
            g = random_graph(40, 0.1, seed=seed)
            ref = nx.core_number(g.to_networkx().to_undirected())
            assert kcore(g) == [ref[v] for v in range(40)]
