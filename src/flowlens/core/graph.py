"""
Topology index backed by rustworkx.

Maps the sanitized working copy onto a rustworkx multigraph so the
traversal code can ask for incoming/outgoing links by node id.

It manages:
- The bimap between string node ids and rustworkx integer indices.
- Edge payloads that point back at SimLink instances (duplicates kept).
- Per-type node lookups.
"""

from collections import defaultdict
from typing import Any, Dict, Iterator, List, Set

import rustworkx as rx

from .sanitize import SimLink, SimNode, WorkingGraph
from .types import NodeType


class FlowGraph:
    """
    Read-only topology view over a WorkingGraph.

    Built once per data load; positions stay on the SimNode instances and
    are never touched here.
    """

    def __init__(self, working: WorkingGraph):
        self.working = working
        self._graph = rx.PyDiGraph(multigraph=True)
        self._id_to_idx: Dict[str, int] = {}
        self._idx_to_id: Dict[int, str] = {}
        self._nodes_by_type: Dict[NodeType, Set[str]] = defaultdict(set)

        for sim_node in working.nodes:
            idx = self._graph.add_node(sim_node)
            self._id_to_idx[sim_node.id] = idx
            self._idx_to_id[idx] = sim_node.id
            self._nodes_by_type[sim_node.node.type].add(sim_node.id)

        for link in working.links:
            self._graph.add_edge(self._id_to_idx[link.source], self._id_to_idx[link.target], link)

    def has_node(self, node_id: str) -> bool:
        return node_id in self._id_to_idx

    def get_node(self, node_id: str) -> SimNode | None:
        idx = self._id_to_idx.get(node_id)
        if idx is None:
            return None
        return self._graph[idx]

    def incoming(self, node_id: str) -> List[SimLink]:
        """Links whose target is ``node_id``, in working-copy order."""
        idx = self._id_to_idx.get(node_id)
        if idx is None:
            return []
        return sorted((data for _, _, data in self._graph.in_edges(idx)), key=lambda l: l.index)

    def outgoing(self, node_id: str) -> List[SimLink]:
        """Links whose source is ``node_id``, in working-copy order."""
        idx = self._id_to_idx.get(node_id)
        if idx is None:
            return []
        return sorted((data for _, _, data in self._graph.out_edges(idx)), key=lambda l: l.index)

    def neighbors(self, node_id: str) -> Set[str]:
        """Ids one hop away in either direction (self loops included)."""
        idx = self._id_to_idx.get(node_id)
        if idx is None:
            return set()
        ids = {self._idx_to_id[i] for i in self._graph.successor_indices(idx)}
        ids.update(self._idx_to_id[i] for i in self._graph.predecessor_indices(idx))
        return ids

    def get_nodes_by_type(self, node_type: NodeType) -> List[SimNode]:
        return [self.get_node(node_id) for node_id in sorted(self._nodes_by_type.get(node_type, set()))]

    def find_nodes(self, pattern: str) -> List[str]:
        """
        Find nodes matching a substring pattern.

        Searches ids and labels.
        """
        pattern_lower = pattern.lower()
        return [
            n.id for n in self.iter_nodes()
            if pattern_lower in n.id.lower() or pattern_lower in n.node.label.lower()
        ]

    def iter_nodes(self) -> Iterator[SimNode]:
        return iter(self.working.nodes)

    def iter_links(self) -> Iterator[SimLink]:
        return iter(self.working.links)

    @property
    def node_count(self) -> int:
        return self._graph.num_nodes()

    @property
    def link_count(self) -> int:
        return self._graph.num_edges()

    def get_stats(self) -> Dict[str, Any]:
        orphans = len([
            n for n in self._graph.node_indices()
            if self._graph.in_degree(n) == 0 and self._graph.out_degree(n) == 0
        ])
        return {
            "total_nodes": self.node_count,
            "total_links": self.link_count,
            "dropped_links": self.working.dropped_links,
            "nodes_by_type": {t.value: len(ids) for t, ids in sorted(self._nodes_by_type.items())},
            "orphans": orphans,
        }
