"""
Finding Index.

Derived, read-only lookups computed once per data load: which nodes are
considered vulnerable, and which findings mention each node.
"""

from collections import defaultdict
from typing import Dict, FrozenSet, List, Tuple

from ..core.types import GraphData, SecurityFinding


class FindingIndex:
    """
    Vulnerable set and node → findings mapping.

    The vulnerable set is the union of every node id referenced by a
    finding and every declared sink.
    """

    def __init__(self, data: GraphData):
        by_node: Dict[str, List[SecurityFinding]] = defaultdict(list)
        for finding in data.security_findings:
            for node_id in finding.nodes:
                by_node[node_id].append(finding)

        self._by_node: Dict[str, Tuple[SecurityFinding, ...]] = {
            node_id: tuple(findings) for node_id, findings in by_node.items()
        }
        self.vulnerable_ids: FrozenSet[str] = frozenset(by_node) | frozenset(data.sinks)
        self.input_sources: FrozenSet[str] = frozenset(data.input_sources)

    def is_vulnerable(self, node_id: str) -> bool:
        return node_id in self.vulnerable_ids

    def findings_for(self, node_id: str) -> Tuple[SecurityFinding, ...]:
        return self._by_node.get(node_id, ())

    def __len__(self) -> int:
        return len(self._by_node)
