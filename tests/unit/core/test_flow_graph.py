"""Unit tests for the rustworkx-backed topology index."""

from flowlens.core.types import NodeType

from conftest import build_data, build_graph


class TestFlowGraph:
    def test_counts(self, chain_graph):
        assert chain_graph.node_count == 3
        assert chain_graph.link_count == 2

    def test_incoming_outgoing(self, chain_graph):
        assert [l.source for l in chain_graph.incoming("C")] == ["B"]
        assert [l.target for l in chain_graph.outgoing("A")] == ["B"]
        assert chain_graph.incoming("A") == []
        assert chain_graph.incoming("missing") == []

    def test_parallel_links_ordered(self):
        graph = build_graph(build_data([("A", "input"), ("B", "sink")], [("A", "B"), ("A", "B")]))
        assert [l.index for l in graph.incoming("B")] == [0, 1]

    def test_neighbors_both_directions(self, chain_graph):
        assert chain_graph.neighbors("B") == {"A", "C"}
        assert chain_graph.neighbors("missing") == set()

    def test_self_loop_neighbor(self):
        graph = build_graph(build_data([("A", "function")], [("A", "A")]))
        assert graph.neighbors("A") == {"A"}

    def test_get_node(self, chain_graph):
        assert chain_graph.get_node("B").node.type == NodeType.FUNCTION
        assert chain_graph.get_node("missing") is None

    def test_nodes_by_type(self, chain_graph):
        assert [n.id for n in chain_graph.get_nodes_by_type(NodeType.SINK)] == ["C"]
        assert chain_graph.get_nodes_by_type(NodeType.DOM) == []

    def test_find_nodes(self):
        data = build_data([("sink_innerHTML", "sink"), ("fn_render", "function")])
        graph = build_graph(data)
        assert graph.find_nodes("inner") == ["sink_innerHTML"]
        assert graph.find_nodes("RENDER") == ["fn_render"]
        assert graph.find_nodes("zzz") == []

    def test_stats(self):
        graph = build_graph(build_data(
            [("A", "input"), ("B", "sink"), ("lonely", "variable")],
            [("A", "B"), ("A", "ghost")],
        ))
        stats = graph.get_stats()
        assert stats["total_nodes"] == 3
        assert stats["total_links"] == 1
        assert stats["dropped_links"] == 1
        assert stats["orphans"] == 1
        assert stats["nodes_by_type"] == {"input": 1, "sink": 1, "variable": 1}
