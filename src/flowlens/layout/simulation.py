"""
Force Simulation.

An iterative, bounded-energy layout process. Every tick moves the global
temperature (alpha) toward its target, applies the registered forces in
order, and integrates velocities into positions. Once alpha falls below
``alpha_min`` the simulation rests; a restart (drag, resize) wakes it up
without resetting positions.

The simulation owns the coordinate arrays. After each tick positions are
written back to the SimNode instances, which the renderer reads.
"""

import logging
import math
from collections import defaultdict
from typing import Callable, Dict, List

import numpy as np

from ..config import LayoutSettings
from ..core.sanitize import SimLink, SimNode
from .forces import CenterForce, CollideForce, Force, LinkForce, ManyBodyForce

logger = logging.getLogger(__name__)

INITIAL_RADIUS = 10.0
INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))

Listener = Callable[["Simulation"], None]


class Simulation:
    """
    Force-directed layout over a fixed node set.

    Events:
        tick: fired after every step that advanced the layout.
        end: fired once when the simulation comes to rest.
    """

    def __init__(self, nodes: List[SimNode], settings: LayoutSettings | None = None):
        self.nodes = nodes
        self.settings = settings or LayoutSettings()
        self._index: Dict[str, int] = {n.id: i for i, n in enumerate(nodes)}
        self._rng = np.random.default_rng(self.settings.seed)
        self._forces: Dict[str, Force] = {}
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)

        self.alpha = 1.0
        self.alpha_target = 0.0
        self.ticks = 0
        self._running = bool(nodes)
        self._disposed = False

        self.x = np.zeros(len(nodes))
        self.y = np.zeros(len(nodes))
        self.vx = np.zeros(len(nodes))
        self.vy = np.zeros(len(nodes))
        self._initialize_nodes()

    @classmethod
    def for_graph(
        cls,
        nodes: List[SimNode],
        links: List[SimLink],
        width: float,
        height: float,
        settings: LayoutSettings | None = None,
    ) -> "Simulation":
        """Build a simulation with the standard link/charge/center/collision forces."""
        sim = cls(nodes, settings)
        s = sim.settings
        sim.add_force("link", LinkForce(links, s.link_distance))
        sim.add_force("charge", ManyBodyForce(s.charge_strength))
        sim.add_force("center", CenterForce(width / 2, height / 2))
        sim.add_force("collision", CollideForce(s.collision_radius))
        return sim

    # =========================================================================
    # Setup
    # =========================================================================

    def _initialize_nodes(self) -> None:
        for i, node in enumerate(self.nodes):
            if node.fx is not None:
                node.x = node.fx
            if node.fy is not None:
                node.y = node.fy
            if math.isnan(node.x) or math.isnan(node.y):
                radius = INITIAL_RADIUS * math.sqrt(0.5 + i)
                angle = i * INITIAL_ANGLE
                node.x = radius * math.cos(angle)
                node.y = radius * math.sin(angle)
            self.x[i] = node.x
            self.y[i] = node.y
            self.vx[i] = node.vx
            self.vy[i] = node.vy

    def add_force(self, name: str, force: Force) -> "Simulation":
        """Register (or replace) a force; forces apply in registration order."""
        self._forces[name] = force
        force.initialize(self)
        return self

    def force(self, name: str) -> Force | None:
        return self._forces.get(name)

    def index_of(self, node_id: str) -> int:
        return self._index[node_id]

    def jiggle(self, count: int | None = None):
        """Tiny random offset used to separate coincident points."""
        if count is None:
            return float((self._rng.random() - 0.5) * 1e-6)
        return (self._rng.random(count) - 0.5) * 1e-6

    def on(self, event: str, listener: Listener) -> "Simulation":
        self._listeners[event].append(listener)
        return self

    def _emit(self, event: str) -> None:
        for listener in self._listeners[event]:
            listener(self)

    # =========================================================================
    # Clock
    # =========================================================================

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def restart(self) -> "Simulation":
        """Resume stepping (no-op for an empty or disposed simulation)."""
        if self.nodes and not self._disposed:
            self._running = True
        return self

    def stop(self) -> "Simulation":
        """Halt stepping; ``restart`` or ``reheat`` resumes."""
        self._running = False
        return self

    def dispose(self) -> None:
        """Stop for good; the working copy is being discarded."""
        self.stop()
        self._disposed = True
        self._listeners.clear()

    def reheat(self, alpha: float) -> "Simulation":
        self.alpha = min(max(alpha, 0.0), 1.0)
        return self.restart()

    def set_alpha_target(self, target: float) -> "Simulation":
        self.alpha_target = min(max(target, 0.0), 1.0)
        return self

    def tick(self, iterations: int = 1) -> None:
        """
        Advance the layout ``iterations`` times.

        Ticking does not consult the running flag; use ``step`` to drive an
        animation loop.
        """
        if self._disposed or not self.nodes:
            return

        s = self.settings
        for _ in range(iterations):
            self.alpha += (self.alpha_target - self.alpha) * s.alpha_decay

            for force in self._forces.values():
                force.apply(self.alpha)

            self._integrate(1 - s.velocity_decay)
            self.ticks += 1

        self._write_back()

    def _integrate(self, keep: float) -> None:
        for i, node in enumerate(self.nodes):
            if node.fx is None:
                self.vx[i] *= keep
                self.x[i] += self.vx[i]
            else:
                self.x[i] = node.fx
                self.vx[i] = 0.0
            if node.fy is None:
                self.vy[i] *= keep
                self.y[i] += self.vy[i]
            else:
                self.y[i] = node.fy
                self.vy[i] = 0.0

    def _write_back(self) -> None:
        for i, node in enumerate(self.nodes):
            node.x = float(self.x[i])
            node.y = float(self.y[i])
            node.vx = float(self.vx[i])
            node.vy = float(self.vy[i])

    def step(self) -> bool:
        """
        One animation frame.

        Returns:
            True if the layout advanced, False if the simulation is at rest.
        """
        if not self._running:
            return False

        self.tick()
        self._emit("tick")

        if self.alpha < self.settings.alpha_min:
            self.stop()
            logger.debug(f"Simulation settled after {self.ticks} ticks")
            self._emit("end")
        return True

    def run(self, max_ticks: int | None = None) -> int:
        """
        Step until the simulation rests or ``max_ticks`` frames elapse.

        A non-zero alpha target (an active drag) keeps the simulation warm
        forever, so callers driving a drag should pass ``max_ticks``.

        Returns:
            Number of frames stepped.
        """
        frames = 0
        while self._running and (max_ticks is None or frames < max_ticks):
            self.step()
            frames += 1
        return frames

    # =========================================================================
    # Pins
    # =========================================================================

    def pin(self, node_id: str, x: float, y: float) -> None:
        self.nodes[self._index[node_id]].pin(x, y)

    def unpin(self, node_id: str) -> None:
        self.nodes[self._index[node_id]].unpin()
