"""
Interaction Controller.

Small state machine over hover and selection. The active node is the
hovered node when there is one, otherwise the selected node. Highlights
and attack paths are cached per active node and invalidated whenever the
active node changes.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

from ..analysis.attack_path import AttackPath, find_attack_path, should_trace
from ..analysis.findings import FindingIndex
from ..core.graph import FlowGraph
from ..core.types import GraphNode
from .highlight import Highlight, derive_highlight

logger = logging.getLogger(__name__)


def resolve_highlight(
    graph: FlowGraph,
    findings: FindingIndex,
    active_id: str | None,
    hovered: GraphNode | None = None,
) -> Tuple[AttackPath | None, Highlight]:
    """Attack path (when the active node qualifies) and the resulting highlight."""
    path = find_attack_path(graph, active_id) if should_trace(active_id, findings, hovered) else None
    return path, derive_highlight(graph, active_id, path)


@dataclass(frozen=True)
class InteractionState:
    hovered_id: str | None = None
    selected_id: str | None = None

    @property
    def active_id(self) -> str | None:
        return self.hovered_id or self.selected_id


class InteractionController:
    """
    Translates pointer events into highlight instructions.

    Every event method returns True when it changed the state.
    """

    def __init__(self, graph: FlowGraph, findings: FindingIndex):
        self.graph = graph
        self.findings = findings
        self.state = InteractionState()
        self._cache_key: tuple | None = None
        self._attack_path: AttackPath | None = None
        self._highlight: Highlight | None = None

    # =========================================================================
    # Events
    # =========================================================================

    def pointer_enter(self, node_id: str) -> bool:
        if not self.graph.has_node(node_id):
            return False
        return self._set(InteractionState(node_id, self.state.selected_id))

    def pointer_leave(self) -> bool:
        return self._set(InteractionState(None, self.state.selected_id))

    def click(self, node_id: str) -> bool:
        """Toggle selection of a node."""
        if not self.graph.has_node(node_id):
            return False
        selected = None if self.state.selected_id == node_id else node_id
        return self._set(InteractionState(self.state.hovered_id, selected))

    def click_background(self) -> bool:
        return self._set(InteractionState(self.state.hovered_id, None))

    def reset(self) -> None:
        self._set(InteractionState())

    def _set(self, state: InteractionState) -> bool:
        if state == self.state:
            return False
        logger.debug(f"Interaction state: {self.state} -> {state}")
        self.state = state
        return True

    # =========================================================================
    # Derived state
    # =========================================================================

    @property
    def active_id(self) -> str | None:
        return self.state.active_id

    @property
    def hovered_node(self) -> GraphNode | None:
        sim_node = self.graph.get_node(self.state.hovered_id) if self.state.hovered_id else None
        return sim_node.node if sim_node else None

    @property
    def active_node(self) -> GraphNode | None:
        sim_node = self.graph.get_node(self.active_id) if self.active_id else None
        return sim_node.node if sim_node else None

    @property
    def attack_path(self) -> AttackPath | None:
        self._refresh()
        return self._attack_path

    def highlight(self) -> Highlight:
        self._refresh()
        return self._highlight

    def _refresh(self) -> None:
        active_id = self.active_id
        hovered = self.hovered_node
        key = (active_id, hovered.id if hovered else None)
        if key == self._cache_key and self._highlight is not None:
            return

        self._attack_path, self._highlight = resolve_highlight(self.graph, self.findings, active_id, hovered)
        self._cache_key = key
