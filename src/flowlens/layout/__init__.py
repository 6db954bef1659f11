"""Force layout: simulation, forces, drag gestures and link geometry."""

from .curves import arc_radius, link_arc
from .drag import DragController
from .simulation import Simulation

__all__ = ["DragController", "Simulation", "arc_radius", "link_arc"]
