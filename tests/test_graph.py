"""Tests for graph.py module."""

import networkx as nx

from egomap.layout.graph import CENTER_NODE, build_map_graph, categories_in_graph
from egomap.layout.radial import compute_layout

from conftest import make_record


class TestBuildMapGraph:
    """Tests for build_map_graph function."""

    def test_graph_is_star(self, mixed_categories):
        """One stalk per record, all from the centre."""
        G = build_map_graph(compute_layout(mixed_categories, 800, 600))

        assert G.number_of_edges() == G.number_of_nodes() - 1 == len(mixed_categories)
        assert nx.is_tree(G)
        assert all(CENTER_NODE in edge for edge in G.edges())

    def test_node_attributes_match_layout(self, mixed_categories):
        layout = compute_layout(mixed_categories, 800, 600)
        G = build_map_graph(layout)

        for pos in layout.positions:
            data = G.nodes[pos.record_id]
            assert (data["x"], data["y"]) == (pos.x, pos.y)
            assert data["size"] == pos.size
            assert G.edges[CENTER_NODE, pos.record_id]["width"] == pos.link_width

        assert (G.nodes[CENTER_NODE]["x"], G.nodes[CENTER_NODE]["y"]) == (400, 300)

    def test_empty_layout(self):
        G = build_map_graph(compute_layout([], 800, 600))
        assert list(G.nodes()) == [CENTER_NODE]

    def test_categories_in_graph(self, mixed_categories):
        G = build_map_graph(compute_layout(mixed_categories, 800, 600))
        assert categories_in_graph(G) == ["Work", "Family", "Community"]

    def test_shared_id_keeps_first_record(self):
        records = [make_record("1", "Ann"), make_record("1", "Bo")]
        G = build_map_graph(compute_layout(records, 800, 600))

        assert G.number_of_nodes() == 2
        assert G.nodes["1"]["record"].name == "Ann"
