"""
Pan/zoom viewport.

A view-level transform (translate, then uniform scale) between simulation
coordinates and screen coordinates. Zooming never moves nodes; it only
changes how they are projected.
"""

from dataclasses import dataclass
from typing import Tuple

from ..config import MAX_SCALE, MIN_SCALE, ViewportSettings


@dataclass
class Viewport:
    width: float
    height: float
    x: float = 0.0
    y: float = 0.0
    k: float = 1.0
    min_scale: float = MIN_SCALE
    max_scale: float = MAX_SCALE

    @classmethod
    def from_settings(cls, width: float, height: float, settings: ViewportSettings) -> "Viewport":
        return cls(width=width, height=height, min_scale=settings.min_scale, max_scale=settings.max_scale)

    def clamp(self, k: float) -> float:
        return min(max(k, self.min_scale), self.max_scale)

    def apply(self, px: float, py: float) -> Tuple[float, float]:
        """Simulation → screen."""
        return px * self.k + self.x, py * self.k + self.y

    def invert(self, sx: float, sy: float) -> Tuple[float, float]:
        """Screen → simulation."""
        return (sx - self.x) / self.k, (sy - self.y) / self.k

    def pan(self, dx: float, dy: float) -> None:
        self.x += dx
        self.y += dy

    def zoom(self, factor: float, cx: float | None = None, cy: float | None = None) -> float:
        """
        Scale by ``factor`` around a screen point (default: view center),
        keeping that point fixed. Returns the resulting scale.
        """
        if cx is None:
            cx = self.width / 2
        if cy is None:
            cy = self.height / 2
        anchor_x, anchor_y = self.invert(cx, cy)
        self.k = self.clamp(self.k * factor)
        self.x = cx - anchor_x * self.k
        self.y = cy - anchor_y * self.k
        return self.k

    def zoom_to(self, k: float) -> float:
        return self.zoom(k / self.k)

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height

    def reset(self) -> None:
        self.x = 0.0
        self.y = 0.0
        self.k = 1.0

    @property
    def transform(self) -> str:
        """SVG transform attribute value."""
        return f"translate({self.x:g},{self.y:g}) scale({self.k:g})"
