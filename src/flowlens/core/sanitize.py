"""
Graph Sanitizer.

Builds the mutable working copy the layout engine simulates. Links whose
endpoints are not both present among the nodes are dropped here, so every
downstream component can assume a closed topology.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from .types import GraphLink, GraphNode, endpoint_id

logger = logging.getLogger(__name__)


@dataclass
class SimNode:
    """
    A node in the working copy.

    Positions are owned by the layout engine. ``fx``/``fy`` pin the node
    to a fixed coordinate while set.
    """
    node: GraphNode
    index: int
    x: float = float("nan")
    y: float = float("nan")
    vx: float = 0.0
    vy: float = 0.0
    fx: float | None = None
    fy: float | None = None

    @property
    def id(self) -> str:
        return self.node.id

    @property
    def is_pinned(self) -> bool:
        return self.fx is not None or self.fy is not None

    def pin(self, x: float, y: float) -> None:
        self.fx = x
        self.fy = y

    def unpin(self) -> None:
        self.fx = None
        self.fy = None


@dataclass(frozen=True)
class SimLink:
    """
    A surviving link. ``index`` is its identity within the working copy,
    which keeps duplicate (source, target, type) links distinct.
    """
    index: int
    source: str
    target: str
    link: GraphLink

    def touches(self, node_id: str) -> bool:
        return self.source == node_id or self.target == node_id


@dataclass
class WorkingGraph:
    nodes: List[SimNode] = field(default_factory=list)
    links: List[SimLink] = field(default_factory=list)
    dropped_links: int = 0

    def __post_init__(self):
        self._by_id: Dict[str, SimNode] = {n.id: n for n in self.nodes}

    def get(self, node_id: str) -> SimNode | None:
        return self._by_id.get(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self._by_id

    def __len__(self) -> int:
        return len(self.nodes)


def _as_link(raw: Any) -> GraphLink:
    if isinstance(raw, GraphLink):
        return raw
    if isinstance(raw, dict):
        return GraphLink(
            source=endpoint_id(raw.get("source")),
            target=endpoint_id(raw.get("target")),
            type=raw.get("type"),
            relationship=raw.get("relationship"),
        )
    return GraphLink(
        source=endpoint_id(getattr(raw, "source", None)),
        target=endpoint_id(getattr(raw, "target", None)),
        type=getattr(raw, "type", None),
        relationship=getattr(raw, "relationship", None),
    )


def sanitize(nodes: Iterable[GraphNode], links: Iterable[Any]) -> WorkingGraph:
    """
    Produce a clean working copy of a node/link set.

    Duplicate node ids collapse to the last occurrence (keeping the slot of
    the first). Links may reference endpoints as ids or as resolved node
    objects; a link survives only if both endpoint ids are known.

    Args:
        nodes: Graph nodes from the payload.
        links: Graph links (models, dicts, or link-like objects).

    Returns:
        WorkingGraph with fresh SimNode/SimLink instances.
    """
    latest: Dict[str, GraphNode] = {}
    for node in nodes:
        latest[node.id] = node

    sim_nodes = [
        SimNode(node=node.model_copy(), index=i)
        for i, node in enumerate(latest.values())
    ]
    node_ids = set(latest)

    sim_links: List[SimLink] = []
    dropped = 0
    for raw in links:
        link = _as_link(raw)
        if link.source in node_ids and link.target in node_ids:
            sim_links.append(SimLink(
                index=len(sim_links),
                source=link.source,
                target=link.target,
                link=link.model_copy(),
            ))
        else:
            dropped += 1
            logger.debug(f"Dropping link with unknown endpoint: {link.source!r} -> {link.target!r}")

    if dropped:
        logger.debug(f"Sanitizer dropped {dropped} of {dropped + len(sim_links)} links")

    return WorkingGraph(nodes=sim_nodes, links=sim_links, dropped_links=dropped)
