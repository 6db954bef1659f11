"""
Force implementations for the layout simulation.

Each force follows the d3-force conventions so layouts look like the
browser version: forces adjust velocities (the centering force shifts
positions directly) and scale their effect by the current alpha.

Pairwise forces are exact O(n^2) numpy computations; graphs produced by a
single analysis stay in the hundreds of nodes.
"""

from typing import TYPE_CHECKING, List

import numpy as np

from ..core.sanitize import SimLink

if TYPE_CHECKING:
    from .simulation import Simulation


class Force:
    """Base class; ``initialize`` runs whenever the node set changes."""

    def initialize(self, sim: "Simulation") -> None:
        self.sim = sim

    def apply(self, alpha: float) -> None:
        raise NotImplementedError


class LinkForce(Force):
    """
    Spring pulling each link's endpoints toward ``distance``.

    Strength defaults to ``1 / min(degree(source), degree(target))`` and the
    correction is split by degree, so hubs move less than leaves.
    """

    def __init__(self, links: List[SimLink], distance: float):
        self.links = links
        self.distance = distance

    def initialize(self, sim: "Simulation") -> None:
        super().initialize(sim)
        count = np.zeros(len(sim.nodes))
        self._pairs = []
        for link in self.links:
            s = sim.index_of(link.source)
            t = sim.index_of(link.target)
            count[s] += 1
            count[t] += 1
            self._pairs.append((s, t))

        self._strengths = []
        self._biases = []
        for s, t in self._pairs:
            self._strengths.append(1.0 / min(count[s], count[t]))
            self._biases.append(count[s] / (count[s] + count[t]))

    def apply(self, alpha: float) -> None:
        sim = self.sim
        x, y, vx, vy = sim.x, sim.y, sim.vx, sim.vy
        for (s, t), strength, bias in zip(self._pairs, self._strengths, self._biases):
            # A self loop pulls a node against itself: no net effect.
            if s == t:
                continue
            dx = x[t] + vx[t] - x[s] - vx[s] or sim.jiggle()
            dy = y[t] + vy[t] - y[s] - vy[s] or sim.jiggle()
            length = np.sqrt(dx * dx + dy * dy)
            length = (length - self.distance) / length * alpha * strength
            dx *= length
            dy *= length
            vx[t] -= dx * bias
            vy[t] -= dy * bias
            vx[s] += dx * (1 - bias)
            vy[s] += dy * (1 - bias)


class ManyBodyForce(Force):
    """
    Inverse-distance interaction between every pair of nodes.

    A negative strength repels. Squared distances below 1 are softened to
    avoid explosive forces between nearly coincident nodes.
    """

    DISTANCE_MIN2 = 1.0

    def __init__(self, strength: float):
        self.strength = strength

    def apply(self, alpha: float) -> None:
        sim = self.sim
        n = len(sim.nodes)
        if n < 2:
            return

        dx = sim.x[np.newaxis, :] - sim.x[:, np.newaxis]
        dy = sim.y[np.newaxis, :] - sim.y[:, np.newaxis]
        off_diagonal = ~np.eye(n, dtype=bool)

        coincident = (dx == 0) & (dy == 0) & off_diagonal
        if coincident.any():
            count = int(coincident.sum())
            dx[coincident] = sim.jiggle(count)
            dy[coincident] = sim.jiggle(count)

        l2 = dx * dx + dy * dy
        l2 = np.where(l2 < self.DISTANCE_MIN2, np.sqrt(self.DISTANCE_MIN2 * l2), l2)
        np.fill_diagonal(l2, 1.0)

        weight = np.where(off_diagonal, self.strength * alpha / l2, 0.0)
        sim.vx += (dx * weight).sum(axis=1)
        sim.vy += (dy * weight).sum(axis=1)


class CenterForce(Force):
    """
    Translates the whole layout so its mean position sits on the center.

    Acts on positions, not velocities, and never distorts relative layout.
    """

    def __init__(self, cx: float, cy: float, strength: float = 1.0):
        self.cx = cx
        self.cy = cy
        self.strength = strength

    def set_center(self, cx: float, cy: float) -> None:
        self.cx = cx
        self.cy = cy

    def apply(self, alpha: float) -> None:
        sim = self.sim
        if not len(sim.nodes):
            return
        sim.x -= (sim.x.mean() - self.cx) * self.strength
        sim.y -= (sim.y.mean() - self.cy) * self.strength


class CollideForce(Force):
    """
    Keeps node centers at least ``2 * radius`` apart.

    Overlaps are measured on predicted positions (position + velocity) and
    resolved by splitting the correction between both nodes.
    """

    def __init__(self, radius: float, strength: float = 1.0):
        self.radius = radius
        self.strength = strength

    def apply(self, alpha: float) -> None:
        sim = self.sim
        n = len(sim.nodes)
        if n < 2 or self.radius <= 0:
            return

        px = sim.x + sim.vx
        py = sim.y + sim.vy
        dx = px[:, np.newaxis] - px[np.newaxis, :]
        dy = py[:, np.newaxis] - py[np.newaxis, :]
        upper = np.triu(np.ones((n, n), dtype=bool), k=1)

        coincident = (dx == 0) & (dy == 0) & upper
        if coincident.any():
            count = int(coincident.sum())
            dx[coincident] = sim.jiggle(count)
            dy[coincident] = sim.jiggle(count)

        reach = 2 * self.radius
        l2 = dx * dx + dy * dy
        overlapping = upper & (l2 < reach * reach)
        if not overlapping.any():
            return

        length = np.sqrt(np.where(overlapping, l2, 1.0))
        push = np.where(overlapping, (reach - length) / length * self.strength, 0.0)
        # Equal radii: each node absorbs half of the correction.
        ox = dx * push * 0.5
        oy = dy * push * 0.5
        sim.vx += ox.sum(axis=1) - ox.sum(axis=0)
        sim.vy += oy.sum(axis=1) - oy.sum(axis=0)
