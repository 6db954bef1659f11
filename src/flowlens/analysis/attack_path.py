"""
Attack Path Extraction.

Explains why a node is dangerous by collecting every upstream contributor:
all nodes (and the links used to reach them) from which data can flow,
possibly over several hops, into the target.
"""

from collections import deque
from dataclasses import dataclass
from typing import Deque, FrozenSet, List

from ..core.graph import FlowGraph
from ..core.types import GraphNode
from .findings import FindingIndex


@dataclass(frozen=True)
class AttackPath:
    """
    Result of a backward traversal.

    ``links`` holds SimLink indices, so parallel links stay distinct.
    """
    target: str
    nodes: FrozenSet[str]
    links: FrozenSet[int]

    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    def has_link(self, link_index: int) -> bool:
        return link_index in self.links

    def to_dict(self) -> dict:
        return {
            "target": self.target,
            "nodes": sorted(self.nodes),
            "links": sorted(self.links),
        }


def find_attack_path(graph: FlowGraph, target_id: str) -> AttackPath:
    """
    Walk links backward (target → source) from ``target_id``.

    Each node is enqueued at most once, so cycles terminate. Only the link
    that first discovers a node is recorded; links between already-visited
    nodes are not part of the path.
    """
    path_nodes = {target_id}
    path_links = set()
    queue: Deque[str] = deque([target_id])

    while queue:
        current = queue.popleft()
        for link in graph.incoming(current):
            if link.source not in path_nodes:
                path_nodes.add(link.source)
                path_links.add(link.index)
                queue.append(link.source)

    return AttackPath(target=target_id, nodes=frozenset(path_nodes), links=frozenset(path_links))


def should_trace(
    active_id: str | None,
    findings: FindingIndex,
    hovered: GraphNode | None = None,
) -> bool:
    """
    Decide whether the active node gets attack-path treatment.

    Vulnerable nodes always qualify. A hovered node typed as a sink
    qualifies too, even when the payload forgot to list it in ``sinks``.
    """
    if not active_id:
        return False
    if findings.is_vulnerable(active_id):
        return True
    return hovered is not None and hovered.id == active_id and hovered.is_sink


def upstream_layers(graph: FlowGraph, path: AttackPath) -> List[List[str]]:
    """
    Group the path's nodes by BFS distance from the target.

    Layer 0 is the target itself; useful for printing the path as a tree.
    """
    layers: List[List[str]] = [[path.target]]
    seen = {path.target}
    frontier = [path.target]
    while frontier:
        next_layer: List[str] = []
        for node_id in frontier:
            for link in graph.incoming(node_id):
                if link.index in path.links and link.source not in seen:
                    seen.add(link.source)
                    next_layer.append(link.source)
        if next_layer:
            layers.append(next_layer)
        frontier = next_layer
    return layers
