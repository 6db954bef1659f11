"""
Highlight derivation.

A pure function from (active node, attack path, topology) to per-node and
per-link styling. It never touches positions or topology, so it can be
recomputed on every hover without disturbing the layout.
"""

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import FrozenSet, Mapping

from ..analysis.attack_path import AttackPath
from ..core.graph import FlowGraph
from ..render.theme import (
    ACTIVE_STROKE, DANGER, LINK_ACTIVE_STROKE, LINK_STROKE,
    MARKER_DANGER, MARKER_DEFAULT, NODE_STROKE, color_for,
)

NODE_DIM_OPACITY = 0.1
LINK_DIM_OPACITY = 0.05


class HighlightMode(StrEnum):
    IDLE = "idle"
    NEIGHBORHOOD = "neighborhood"
    ATTACK_PATH = "attack_path"


@dataclass(frozen=True)
class NodeStyle:
    opacity: float
    stroke: str
    stroke_width: float
    glow: str | None = None

    @property
    def dimmed(self) -> bool:
        return self.opacity < 1


@dataclass(frozen=True)
class LinkStyle:
    opacity: float
    stroke: str
    marker: str

    @property
    def dimmed(self) -> bool:
        return self.opacity < 1


@dataclass(frozen=True)
class Highlight:
    mode: HighlightMode
    active_id: str | None
    nodes: Mapping[str, NodeStyle]
    links: Mapping[int, LinkStyle]
    attack_path: AttackPath | None = None

    @property
    def highlighted_nodes(self) -> FrozenSet[str]:
        return frozenset(node_id for node_id, style in self.nodes.items() if not style.dimmed)

    @property
    def highlighted_links(self) -> FrozenSet[int]:
        return frozenset(index for index, style in self.links.items() if not style.dimmed)


IDLE_NODE = NodeStyle(opacity=1.0, stroke=NODE_STROKE, stroke_width=2)
IDLE_LINK = LinkStyle(opacity=1.0, stroke=LINK_STROKE, marker=MARKER_DEFAULT)


def derive_highlight(
    graph: FlowGraph,
    active_id: str | None,
    attack_path: AttackPath | None = None,
) -> Highlight:
    """
    Compute styling for the current interaction state.

    Args:
        graph: Topology of the working copy.
        active_id: Hovered node if any, else the selected node.
        attack_path: Upstream path of the active node, when it qualifies.
    """
    if active_id is not None and not graph.has_node(active_id):
        active_id = None
        attack_path = None

    if active_id is None:
        return Highlight(
            mode=HighlightMode.IDLE,
            active_id=None,
            nodes=MappingProxyType({n.id: IDLE_NODE for n in graph.iter_nodes()}),
            links=MappingProxyType({l.index: IDLE_LINK for l in graph.iter_links()}),
        )

    if attack_path is not None:
        return _attack_path_highlight(graph, active_id, attack_path)
    return _neighborhood_highlight(graph, active_id)


def _active_style(node_id: str, node_type: str, active_id: str, opacity: float) -> NodeStyle:
    if node_id == active_id:
        return NodeStyle(opacity=opacity, stroke=ACTIVE_STROKE, stroke_width=4, glow=color_for(node_type))
    return NodeStyle(opacity=opacity, stroke=NODE_STROKE, stroke_width=2)


def _attack_path_highlight(graph: FlowGraph, active_id: str, path: AttackPath) -> Highlight:
    nodes = {}
    for sim_node in graph.iter_nodes():
        if path.has_node(sim_node.id):
            nodes[sim_node.id] = NodeStyle(opacity=1.0, stroke=DANGER, stroke_width=4, glow=DANGER)
        else:
            nodes[sim_node.id] = _active_style(sim_node.id, sim_node.node.type, active_id, NODE_DIM_OPACITY)

    links = {}
    for link in graph.iter_links():
        if path.has_link(link.index):
            links[link.index] = LinkStyle(opacity=1.0, stroke=DANGER, marker=MARKER_DANGER)
        else:
            stroke = LINK_ACTIVE_STROKE if link.touches(active_id) else LINK_STROKE
            links[link.index] = LinkStyle(opacity=LINK_DIM_OPACITY, stroke=stroke, marker=MARKER_DEFAULT)

    return Highlight(
        mode=HighlightMode.ATTACK_PATH,
        active_id=active_id,
        nodes=MappingProxyType(nodes),
        links=MappingProxyType(links),
        attack_path=path,
    )


def _neighborhood_highlight(graph: FlowGraph, active_id: str) -> Highlight:
    visible = graph.neighbors(active_id) | {active_id}

    nodes = {}
    for sim_node in graph.iter_nodes():
        opacity = 1.0 if sim_node.id in visible else NODE_DIM_OPACITY
        nodes[sim_node.id] = _active_style(sim_node.id, sim_node.node.type, active_id, opacity)

    links = {}
    for link in graph.iter_links():
        if link.touches(active_id):
            links[link.index] = LinkStyle(opacity=1.0, stroke=LINK_ACTIVE_STROKE, marker=MARKER_DEFAULT)
        else:
            links[link.index] = LinkStyle(opacity=LINK_DIM_OPACITY, stroke=LINK_STROKE, marker=MARKER_DEFAULT)

    return Highlight(
        mode=HighlightMode.NEIGHBORHOOD,
        active_id=active_id,
        nodes=MappingProxyType(nodes),
        links=MappingProxyType(links),
    )
