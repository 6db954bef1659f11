"""Unit tests for the individual forces."""

import numpy as np
import pytest

from flowlens.core.sanitize import sanitize
from flowlens.layout.forces import CenterForce, CollideForce, LinkForce, ManyBodyForce
from flowlens.layout.simulation import Simulation

from conftest import build_data


def bare_sim(positions, links=()):
    data = build_data([(f"N{i}", "function") for i in range(len(positions))], links)
    working = sanitize(data.nodes, data.links)
    for node, (x, y) in zip(working.nodes, positions):
        node.x, node.y = x, y
    return Simulation(working.nodes), working


class TestLinkForce:
    def test_pulls_distant_endpoints_together(self):
        sim, working = bare_sim([(0, 0), (500, 0)], [("N0", "N1")])
        sim.add_force("link", LinkForce(working.links, 100))
        sim.force("link").apply(1.0)
        assert sim.vx[0] > 0
        assert sim.vx[1] < 0

    def test_pushes_close_endpoints_apart(self):
        sim, working = bare_sim([(0, 0), (10, 0)], [("N0", "N1")])
        sim.add_force("link", LinkForce(working.links, 100))
        sim.force("link").apply(1.0)
        assert sim.vx[0] < 0
        assert sim.vx[1] > 0

    def test_self_loop_no_effect(self):
        sim, working = bare_sim([(0, 0)], [("N0", "N0")])
        sim.add_force("link", LinkForce(working.links, 100))
        sim.force("link").apply(1.0)
        assert sim.vx[0] == 0 and sim.vy[0] == 0


class TestManyBodyForce:
    def test_repels(self):
        sim, _ = bare_sim([(0, 0), (10, 0)])
        sim.add_force("charge", ManyBodyForce(-500))
        sim.force("charge").apply(1.0)
        assert sim.vx[0] < 0
        assert sim.vx[1] > 0
        assert np.isfinite(sim.vx).all()

    def test_coincident_finite(self):
        sim, _ = bare_sim([(5, 5), (5, 5)])
        sim.add_force("charge", ManyBodyForce(-500))
        sim.force("charge").apply(1.0)
        assert np.isfinite(sim.vx).all() and np.isfinite(sim.vy).all()

    def test_single_node_noop(self):
        sim, _ = bare_sim([(0, 0)])
        sim.add_force("charge", ManyBodyForce(-500))
        sim.force("charge").apply(1.0)
        assert sim.vx[0] == 0


class TestCenterForce:
    def test_shifts_mean(self):
        sim, _ = bare_sim([(0, 0), (10, 20)])
        sim.add_force("center", CenterForce(100, 100))
        sim.force("center").apply(1.0)
        assert sim.x.mean() == pytest.approx(100)
        assert sim.y.mean() == pytest.approx(100)
        assert sim.x[1] - sim.x[0] == pytest.approx(10)

    def test_set_center(self):
        force = CenterForce(0, 0)
        force.set_center(30, 40)
        assert (force.cx, force.cy) == (30, 40)


class TestCollideForce:
    def test_separates_overlap(self):
        sim, _ = bare_sim([(0, 0), (10, 0)])
        sim.add_force("collision", CollideForce(80))
        sim.force("collision").apply(1.0)
        assert sim.vx[0] < 0
        assert sim.vx[1] > 0
        assert sim.vx[0] == pytest.approx(-sim.vx[1])

    def test_ignores_distant(self):
        sim, _ = bare_sim([(0, 0), (500, 0)])
        sim.add_force("collision", CollideForce(80))
        sim.force("collision").apply(1.0)
        assert (sim.vx == 0).all()
