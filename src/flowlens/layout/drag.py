"""
Drag gestures.

Dragging pins a node to the pointer while the rest of the layout keeps
simulating. The first active gesture warms the simulation by raising its
alpha target; the last one to finish lets it cool down again.
"""

import logging
from typing import Set

from .simulation import Simulation

logger = logging.getLogger(__name__)


class DragController:
    """Tracks in-flight drag gestures, at most one per node."""

    def __init__(self, simulation: Simulation):
        self.simulation = simulation
        self._dragging: Set[str] = set()

    @property
    def active(self) -> int:
        return len(self._dragging)

    def is_dragging(self, node_id: str) -> bool:
        return node_id in self._dragging

    def start(self, node_id: str) -> bool:
        """
        Begin dragging ``node_id`` at its current position.

        Returns:
            False if the node is unknown or already being dragged.
        """
        sim = self.simulation
        node = self._lookup(node_id)
        if node is None or node_id in self._dragging:
            return False

        if not self._dragging:
            sim.set_alpha_target(sim.settings.drag_alpha_target).restart()
        self._dragging.add(node_id)
        node.pin(node.x, node.y)
        logger.debug(f"Drag start: {node_id}")
        return True

    def move(self, node_id: str, x: float, y: float) -> bool:
        """Move the pin of a node being dragged (simulation coordinates)."""
        if node_id not in self._dragging:
            return False
        self._lookup(node_id).pin(x, y)
        return True

    def end(self, node_id: str) -> bool:
        """Release the node so it resumes free motion."""
        if node_id not in self._dragging:
            return False

        self._dragging.discard(node_id)
        if not self._dragging:
            self.simulation.set_alpha_target(0.0)
        self._lookup(node_id).unpin()
        logger.debug(f"Drag end: {node_id}")
        return True

    def _lookup(self, node_id: str):
        sim = self.simulation
        try:
            return sim.nodes[sim.index_of(node_id)]
        except KeyError:
            return None
