"""
SVG scene renderer.

Draws the working copy at its current simulated positions with the
styling of a Highlight: curved links with arrow markers, colored nodes
with a type glyph, and formatted labels. Every element carries a data
attribute so the HTML page can restyle it in place.
"""

from html import escape
from typing import List

from ..core.graph import FlowGraph
from ..interaction.highlight import Highlight, LinkStyle, NodeStyle
from ..layout.curves import link_arc
from .labels import format_label
from .theme import (
    ARROW_FILL, BACKGROUND, DANGER, LABEL_FILL, MARKER_DANGER,
    MARKER_DEFAULT, NODE_GLYPHS, NODE_RADIUS, NODE_STROKE, color_for,
)
from .viewport import Viewport

MARKER_DEFS = f"""<defs>
<marker id="{MARKER_DEFAULT}" viewBox="0 -5 10 10" refX="28" refY="0" orient="auto" markerWidth="5" markerHeight="5"><path d="M 0,-5 L 10,0 L 0,5" fill="{ARROW_FILL}"/></marker>
<marker id="{MARKER_DANGER}" viewBox="0 -5 10 10" refX="28" refY="0" orient="auto" markerWidth="6" markerHeight="6"><path d="M 0,-5 L 10,0 L 0,5" fill="{DANGER}"/></marker>
</defs>"""


def glow_filter(style: NodeStyle) -> str:
    if not style.glow:
        return "none"
    radius = 10 if style.glow == DANGER else 15
    return f"drop-shadow(0 0 {radius}px {style.glow})"


def _link_element(index: int, d: str, style: LinkStyle) -> str:
    return (
        f'<path class="link" data-index="{index}" d="{d}" fill="none" '
        f'stroke="{style.stroke}" stroke-width="1.8" opacity="{style.opacity:g}" '
        f'marker-end="url(#{style.marker})"/>'
    )


def _node_element(node_id: str, node_type: str, label: str, x: float, y: float, style: NodeStyle) -> str:
    return (
        f'<g class="node" data-id="{escape(node_id)}" transform="translate({x:.2f},{y:.2f})" '
        f'opacity="{style.opacity:g}">'
        f'<circle r="{NODE_RADIUS}" fill="{color_for(node_type)}" stroke="{style.stroke}" '
        f'stroke-width="{style.stroke_width:g}" style="filter: {glow_filter(style)}"/>'
        f'<text class="glyph" text-anchor="middle" dy=".35em" font-size="12" fill="{NODE_STROKE}">'
        f'{escape(NODE_GLYPHS.get(node_type, ""))}</text>'
        f'<text class="label" dx="24" dy=".35em" fill="{LABEL_FILL}" font-size="13" '
        f'font-weight="500" font-family="Inter, sans-serif">{escape(label)}</text>'
        f"</g>"
    )


def render_svg(graph: FlowGraph, highlight: Highlight, viewport: Viewport) -> str:
    """
    Render the current scene.

    An empty graph yields an empty canvas.
    """
    parts: List[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{viewport.width:g}" '
        f'height="{viewport.height:g}" viewBox="0 0 {viewport.width:g} {viewport.height:g}">',
        f'<rect class="background" width="100%" height="100%" fill="{BACKGROUND}"/>',
        MARKER_DEFS,
        f'<g class="viewport" transform="{viewport.transform}">',
        '<g class="links">',
    ]

    for link in graph.iter_links():
        source = graph.get_node(link.source)
        target = graph.get_node(link.target)
        d = link_arc(source.x, source.y, target.x, target.y)
        parts.append(_link_element(link.index, d, highlight.links[link.index]))

    parts.append("</g>")
    parts.append('<g class="nodes">')

    for sim_node in graph.iter_nodes():
        parts.append(_node_element(
            sim_node.id,
            sim_node.node.type,
            format_label(sim_node.node),
            sim_node.x,
            sim_node.y,
            highlight.nodes[sim_node.id],
        ))

    parts.append("</g>")
    parts.append("</g>")
    parts.append("</svg>")
    return "\n".join(parts)
