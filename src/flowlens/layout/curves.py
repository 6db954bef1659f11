"""
Curved link geometry.

Links are drawn as circular arcs whose radius grows with the distance
between endpoints, which separates parallel edges and keeps dense areas
readable.
"""

import math

from ..config import CURVE_EPSILON

CURVATURE = 1.5


def arc_radius(sx: float, sy: float, tx: float, ty: float, epsilon: float = CURVE_EPSILON) -> float:
    """Arc radius for a link; never zero, even for coincident endpoints."""
    distance = math.hypot(tx - sx, ty - sy)
    return max(distance, epsilon) * CURVATURE


def link_arc(sx: float, sy: float, tx: float, ty: float) -> str:
    """SVG path data for the arc from source to target."""
    r = arc_radius(sx, sy, tx, ty)
    return f"M{_fmt(sx)},{_fmt(sy)}A{_fmt(r)},{_fmt(r)} 0 0,1 {_fmt(tx)},{_fmt(ty)}"


def _fmt(value: float) -> str:
    if not math.isfinite(value):
        return "0"
    return f"{value:.2f}".rstrip("0").rstrip(".") if value != 0 else "0"
