"""Unit tests for the force simulation."""

import math
from unittest.mock import MagicMock

import pytest

from flowlens.config import LayoutSettings
from flowlens.core.sanitize import sanitize
from flowlens.layout.forces import CenterForce
from flowlens.layout.simulation import Simulation

from conftest import build_data


def make_sim(nodes, links=(), width=800, height=600, **settings):
    data = build_data(nodes, links)
    working = sanitize(data.nodes, data.links)
    sim = Simulation.for_graph(working.nodes, working.links, width, height, LayoutSettings(**settings))
    return sim, working


class TestSimulationSetup:
    def test_phyllotaxis_placement(self):
        sim, working = make_sim([("A", "input"), ("B", "function"), ("C", "sink")])
        positions = {(round(n.x, 6), round(n.y, 6)) for n in working.nodes}
        assert len(positions) == 3
        assert all(math.isfinite(n.x) and math.isfinite(n.y) for n in working.nodes)

    def test_standard_forces(self):
        sim, _ = make_sim([("A", "input")])
        assert isinstance(sim.force("center"), CenterForce)
        assert sim.force("link") is not None
        assert sim.force("charge") is not None
        assert sim.force("collision") is not None
        assert sim.force("gravity") is None

    def test_empty_graph_never_runs(self):
        sim, _ = make_sim([])
        assert not sim.is_running
        assert not sim.step()
        assert sim.run() == 0
        sim.restart()
        assert not sim.is_running


class TestSimulationClock:
    def test_settles(self):
        sim, working = make_sim([("A", "input"), ("B", "function"), ("C", "sink")], [("A", "B"), ("B", "C")])
        on_end = MagicMock()
        sim.on("end", on_end)

        frames = sim.run()

        assert not sim.is_running
        assert sim.alpha < sim.settings.alpha_min
        # 1 - 0.001 ** (1/300) decay reaches alpha_min in about 300 ticks.
        assert 290 <= frames <= 310
        on_end.assert_called_once_with(sim)
        assert all(math.isfinite(n.x) and math.isfinite(n.y) for n in working.nodes)

    def test_tick_listener(self):
        sim, _ = make_sim([("A", "input")])
        on_tick = MagicMock()
        sim.on("tick", on_tick)
        sim.run(max_ticks=5)
        assert on_tick.call_count == 5
        assert sim.ticks == 5

    def test_centered(self):
        sim, working = make_sim([("A", "input"), ("B", "sink")], [("A", "B")], width=800, height=600)
        sim.run()
        mean_x = sum(n.x for n in working.nodes) / 2
        mean_y = sum(n.y for n in working.nodes) / 2
        assert mean_x == pytest.approx(400, abs=1)
        assert mean_y == pytest.approx(300, abs=1)

    def test_self_loop_stays_finite(self):
        sim, working = make_sim([("A", "function")], [("A", "A")])
        sim.run()
        node = working.nodes[0]
        assert math.isfinite(node.x) and math.isfinite(node.y)

    def test_coincident_nodes_separate(self):
        sim, working = make_sim([("A", "function"), ("B", "function")])
        for node in working.nodes:
            node.x = node.y = 0.0
        sim = Simulation.for_graph(working.nodes, working.links, 100, 100)
        sim.run()
        a, b = working.nodes
        assert math.hypot(a.x - b.x, a.y - b.y) > 1

    def test_resize_reheat(self):
        sim, _ = make_sim([("A", "input"), ("B", "sink")], [("A", "B")])
        sim.run()
        assert not sim.is_running

        sim.reheat(0.3)
        assert sim.is_running
        assert sim.alpha == pytest.approx(0.3)

    def test_dispose(self):
        sim, working = make_sim([("A", "input"), ("B", "sink")])
        sim.dispose()
        before = [(n.x, n.y) for n in working.nodes]
        sim.restart()
        sim.tick(10)
        assert sim.is_disposed
        assert not sim.is_running
        assert [(n.x, n.y) for n in working.nodes] == before

    def test_stop_then_resume(self):
        sim, working = make_sim([("A", "input"), ("B", "sink")], [("A", "B")])
        sim.step()
        sim.stop()
        assert not sim.is_running
        assert not sim.step()
        assert sim.run() == 0

        sim.restart()
        assert sim.is_running
        assert sim.step()
        assert not sim.is_disposed

    def test_seeded_layout_is_reproducible(self):
        nodes = [("A", "input"), ("B", "function"), ("C", "sink")]
        links = [("A", "B"), ("B", "C")]
        sim1, working1 = make_sim(nodes, links, seed=3)
        sim2, working2 = make_sim(nodes, links, seed=3)
        sim1.run()
        sim2.run()
        assert [(n.x, n.y) for n in working1.nodes] == [(n.x, n.y) for n in working2.nodes]


class TestSimulationPins:
    def test_pinned_node_holds_position(self):
        sim, working = make_sim([("A", "input"), ("B", "sink")], [("A", "B")])
        sim.pin("A", 50.0, 60.0)
        sim.tick(20)
        node = working.get("A")
        assert (node.x, node.y) == (50.0, 60.0)
        assert (node.vx, node.vy) == (0.0, 0.0)

    def test_unpin_releases(self):
        sim, working = make_sim([("A", "input"), ("B", "sink")], [("A", "B")])
        sim.pin("A", 50.0, 60.0)
        sim.tick()
        sim.unpin("A")
        assert not working.get("A").is_pinned
        sim.tick(20)
        assert (working.get("A").x, working.get("A").y) != (50.0, 60.0)
