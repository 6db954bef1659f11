"""
Static presentation tables.

Process-wide, read-only lookups: node type → color/icon, plus the handful
of highlight colors shared by the SVG and HTML renderers.
"""

from types import MappingProxyType
from typing import Mapping

from ..core.types import NodeType

NODE_COLORS: Mapping[str, str] = MappingProxyType({
    NodeType.FUNCTION: "#60a5fa",   # blue
    NodeType.VARIABLE: "#4ade80",   # light green
    NodeType.DOM: "#fb923c",        # orange
    NodeType.EVENT: "#f472b6",      # pink
    NodeType.API: "#a855f7",        # purple
    NodeType.INPUT: "#eab308",      # yellow
    NodeType.SINK: "#ef4444",       # red
    NodeType.SANITIZER: "#10b981",  # emerald
})

# Font Awesome class names
NODE_ICONS: Mapping[str, str] = MappingProxyType({
    NodeType.FUNCTION: "fa-code",
    NodeType.VARIABLE: "fa-cube",
    NodeType.DOM: "fa-desktop",
    NodeType.EVENT: "fa-bolt",
    NodeType.API: "fa-server",
    NodeType.INPUT: "fa-keyboard",
    NodeType.SINK: "fa-skull-crossbones",
    NodeType.SANITIZER: "fa-broom",
})

# Single-glyph fallbacks for SVG/terminal output
NODE_GLYPHS: Mapping[str, str] = MappingProxyType({
    NodeType.FUNCTION: "ƒ",
    NodeType.VARIABLE: "▣",
    NodeType.DOM: "▭",
    NodeType.EVENT: "⚡",
    NodeType.API: "☁",
    NodeType.INPUT: "⌨",
    NodeType.SINK: "☠",
    NodeType.SANITIZER: "✧",
})

DEFAULT_NODE_COLOR = "#ffffff"
DANGER = "#ef4444"
ACTIVE_STROKE = "#ffffff"
NODE_STROKE = "#0f172a"
LINK_STROKE = "#334155"
LINK_ACTIVE_STROKE = "#94a3b8"
ARROW_FILL = "#64748b"
BACKGROUND = "#020617"
LABEL_FILL = "#f1f5f9"

NODE_RADIUS = 18

MARKER_DEFAULT = "arrowhead"
MARKER_DANGER = "arrowhead-attack"


def color_for(node_type: str) -> str:
    return NODE_COLORS.get(node_type, DEFAULT_NODE_COLOR)
