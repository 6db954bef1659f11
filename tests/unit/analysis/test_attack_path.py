"""Unit tests for attack path extraction."""

from flowlens.analysis.attack_path import find_attack_path, should_trace, upstream_layers
from flowlens.analysis.findings import FindingIndex
from flowlens.core.types import GraphNode

from conftest import build_data, build_graph


class TestFindAttackPath:
    def test_chain(self, chain_graph):
        """A -> B -> C: path into C covers every node and both links."""
        path = find_attack_path(chain_graph, "C")
        assert path.nodes == {"A", "B", "C"}
        assert path.links == {0, 1}
        assert path.target == "C"

    def test_only_upstream(self, chain_graph):
        path = find_attack_path(chain_graph, "B")
        assert path.nodes == {"A", "B"}
        assert path.links == {0}

    def test_root_has_trivial_path(self, chain_graph):
        path = find_attack_path(chain_graph, "A")
        assert path.nodes == {"A"}
        assert path.links == frozenset()

    def test_cycle_terminates(self):
        graph = build_graph(build_data(
            [("A", "function"), ("B", "function"), ("C", "sink")],
            [("A", "B"), ("B", "A"), ("B", "C")],
        ))
        path = find_attack_path(graph, "C")
        assert path.nodes == {"A", "B", "C"}
        # B -> A is never needed to discover a new node.
        assert path.links == {0, 2}

    def test_self_loop(self):
        graph = build_graph(build_data([("A", "sink")], [("A", "A")]))
        path = find_attack_path(graph, "A")
        assert path.nodes == {"A"}
        assert path.links == frozenset()

    def test_parallel_links_first_wins(self):
        graph = build_graph(build_data([("A", "input"), ("B", "sink")], [("A", "B"), ("A", "B")]))
        path = find_attack_path(graph, "B")
        assert path.links == {0}

    def test_idempotent(self, chain_graph):
        assert find_attack_path(chain_graph, "C") == find_attack_path(chain_graph, "C")

    def test_unknown_target(self, chain_graph):
        path = find_attack_path(chain_graph, "missing")
        assert path.nodes == {"missing"}
        assert path.links == frozenset()

    def test_to_dict(self, chain_graph):
        assert find_attack_path(chain_graph, "C").to_dict() == {
            "target": "C", "nodes": ["A", "B", "C"], "links": [0, 1],
        }

    def test_upstream_layers(self):
        graph = build_graph(build_data(
            [("A", "input"), ("B", "input"), ("F", "function"), ("S", "sink")],
            [("A", "F"), ("B", "F"), ("F", "S")],
        ))
        layers = upstream_layers(graph, find_attack_path(graph, "S"))
        assert layers == [["S"], ["F"], ["A", "B"]]


class TestShouldTrace:
    def test_vulnerable_node(self, chain_findings):
        assert should_trace("C", chain_findings)

    def test_regular_node(self, chain_findings):
        assert not should_trace("B", chain_findings)

    def test_nothing_active(self, chain_findings):
        assert not should_trace(None, chain_findings)

    def test_hovered_sink_type_not_listed(self):
        data = build_data([("S", "sink")])
        findings = FindingIndex(data)
        hovered = GraphNode(id="S", label="S", type="sink")
        assert not should_trace("S", findings)
        assert should_trace("S", findings, hovered)

    def test_hovered_must_be_active(self):
        findings = FindingIndex(build_data([("S", "sink"), ("F", "function")]))
        hovered = GraphNode(id="S", label="S", type="sink")
        assert not should_trace("F", findings, hovered)
