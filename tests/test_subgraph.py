"""Tests for subgraph extraction and reachability."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))
from conftest import make_graph, path_graph, random_graph

from bvgraph.graph.subgraph import (
    dependency_cone,
    extract_subgraph,
    extract_subgraph_by_keys,
    reachable_from,
    reachable_subgraph_from,
    reachable_to,
)


class TestExtractSubgraph:
    def test_renumbers_in_given_order(self):
        g = path_graph(4)
        sub = extract_subgraph(g, [2, 1])
        assert sub.node_ids() == ["n2", "n1"]
        assert sub.edges() == [(1, 0)]

    def test_keeps_only_internal_edges(self):
        g = make_graph([("a", "b"), ("b", "c"), ("c", "a"), ("a", "d")])
        sub = extract_subgraph(g, [0, 1, 3])
        assert sorted((sub.node_id(u), sub.node_id(v)) for u, v in sub.edges()) == [("a", "b"), ("a", "d")]

    def test_duplicates_and_bad_indices_dropped(self):
        g = path_graph(3)
        sub = extract_subgraph(g, [0, 0, 7, -1, 1])
        assert sub.node_ids() == ["n0", "n1"]
        assert sub.edge_count() == 1

    def test_empty_selection(self):
        sub = extract_subgraph(path_graph(3), [])
        assert len(sub) == 0

    def test_source_graph_untouched(self):
        g = path_graph(4)
        extract_subgraph(g, [0, 1])
        assert g.node_count() == 4 and g.edge_count() == 3

    def test_edge_preservation(self):
        g = random_graph(30, 0.1, seed=8)
        picked = list(range(0, 30, 2))
        sub = extract_subgraph(g, picked)
        for u in picked:
            for v in picked:
                su, sv = sub.node_idx(g.node_id(u)), sub.node_idx(g.node_id(v))
                assert g.has_edge(u, v) == sub.has_edge(su, sv)

    def test_by_keys_skips_unknown(self):
        g = path_graph(3)
        sub = extract_subgraph_by_keys(g, ["n1", "ghost", "n2"])
        assert sub.node_ids() == ["n1", "n2"]
        assert sub.edges() == [(0, 1)]


class TestReachability:
    def test_reachable_from_includes_source_first(self):
        assert reachable_from(path_graph(4), 1) == [1, 2, 3]

    def test_reachable_to(self):
        assert reachable_to(path_graph(4), 2) == [2, 1, 0]

    def test_out_of_range(self):
        assert reachable_from(path_graph(2), 9) == []
        assert reachable_to(path_graph(2), -1) == []

    def test_cycle_terminates(self):
        g = make_graph([("a", "b"), ("b", "a"), ("b", "c")])
        assert sorted(reachable_from(g, 0)) == [0, 1, 2]

    def test_dependency_cone(self):
        g = make_graph([("a", "b"), ("b", "c"), ("x", "b"), ("c", "d"), ("y", "z")])
        cone = dependency_cone(g, g.node_idx("b"))
        assert sorted(g.node_id(v) for v in cone) == ["a", "b", "c", "d", "x"]
        assert len(cone) == len(set(cone))

    def test_reachable_subgraph(self):
        g = make_graph([("a", "b"), ("b", "c"), ("x", "b")])
        sub = reachable_subgraph_from(g, g.node_idx("b"))
        assert sub.node_ids() == ["b", "c"]
        assert sub.edges() == [(0, 1)]
