"""
Graph View.

The single entry point tying the pipeline together:

    GraphData → sanitize → FlowGraph ─┬→ Simulation (positions)
                                      └→ InteractionController (highlight)

Loading new data discards the previous working copy and stops its
simulation. Pointer, drag and viewport events are forwarded to the
component that owns the affected state.
"""

import logging
from typing import Any, Dict, List

from .analysis.attack_path import AttackPath
from .analysis.findings import FindingIndex
from .config import Settings
from .core.graph import FlowGraph
from .core.sanitize import sanitize
from .core.types import GraphData, GraphNode
from .interaction.controller import InteractionController, resolve_highlight
from .interaction.highlight import Highlight
from .layout.drag import DragController
from .layout.forces import CenterForce
from .layout.simulation import Simulation
from .render.html import build_html
from .render.panel import DetailPanel, LegendEntry, build_detail_panel, build_legend
from .render.svg import glow_filter, render_svg
from .render.viewport import Viewport

logger = logging.getLogger(__name__)


class GraphView:
    """
    Interactive view over one analysis payload at a time.

    Usage:
        view = GraphView(1200, 800)
        view.load(data)
        view.settle()
        view.click("sink_innerHTML")
        html = view.render_html()
    """

    def __init__(self, width: float = 960, height: float = 640, settings: Settings | None = None):
        self.settings = settings or Settings()
        self.viewport = Viewport.from_settings(width, height, self.settings.viewport)
        self.data = GraphData()
        self.simulation: Simulation | None = None
        self._closed = False
        self.load(self.data)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def load(self, data: GraphData) -> None:
        """Replace the displayed payload, rebuilding all derived state."""
        self._dispose_simulation()

        self.data = data
        working = sanitize(data.nodes, data.links)
        self.graph = FlowGraph(working)
        self.findings = FindingIndex(data)
        self.controller = InteractionController(self.graph, self.findings)
        self.simulation = Simulation.for_graph(
            working.nodes,
            working.links,
            self.viewport.width,
            self.viewport.height,
            self.settings.layout,
        )
        self.drag = DragController(self.simulation)
        self._closed = False

        if working.nodes:
            logger.info(
                f"Loaded graph: {len(working.nodes)} nodes, {len(working.links)} links "
                f"({working.dropped_links} dropped), {len(self.findings.vulnerable_ids)} vulnerable"
            )
        else:
            logger.debug("Loaded empty graph; layout not started")

    def close(self) -> None:
        """Tear down: stop the tick loop so the working copy is never updated again."""
        self._dispose_simulation()
        self._closed = True

    def _dispose_simulation(self) -> None:
        if self.simulation is not None:
            self.simulation.dispose()

    @property
    def is_empty(self) -> bool:
        return self.graph.node_count == 0

    @property
    def is_closed(self) -> bool:
        return self._closed

    # =========================================================================
    # Simulation clock
    # =========================================================================

    def advance(self, frames: int = 1) -> int:
        """Step up to ``frames`` animation frames; returns frames actually stepped."""
        stepped = 0
        for _ in range(frames):
            if not self.simulation.step():
                break
            stepped += 1
        return stepped

    def settle(self, max_ticks: int | None = None) -> int:
        return self.simulation.run(max_ticks)

    # =========================================================================
    # Pointer events
    # =========================================================================

    def pointer_enter(self, node_id: str) -> bool:
        return self.controller.pointer_enter(node_id)

    def pointer_leave(self) -> bool:
        return self.controller.pointer_leave()

    def click(self, node_id: str) -> bool:
        return self.controller.click(node_id)

    def click_background(self) -> bool:
        return self.controller.click_background()

    # =========================================================================
    # Drag gestures (screen coordinates)
    # =========================================================================

    def drag_start(self, node_id: str) -> bool:
        return self.drag.start(node_id)

    def drag_move(self, node_id: str, screen_x: float, screen_y: float) -> bool:
        x, y = self.viewport.invert(screen_x, screen_y)
        return self.drag.move(node_id, x, y)

    def drag_end(self, node_id: str) -> bool:
        return self.drag.end(node_id)

    # =========================================================================
    # Viewport
    # =========================================================================

    def resize(self, width: float, height: float) -> None:
        """Re-center the layout on the new size with a partial reheat."""
        self.viewport.resize(width, height)
        center = self.simulation.force("center")
        if isinstance(center, CenterForce):
            center.set_center(width / 2, height / 2)
        self.simulation.reheat(self.settings.layout.resize_alpha)

    def zoom(self, factor: float, cx: float | None = None, cy: float | None = None) -> float:
        return self.viewport.zoom(factor, cx, cy)

    def pan(self, dx: float, dy: float) -> None:
        self.viewport.pan(dx, dy)

    # =========================================================================
    # Derived output
    # =========================================================================

    @property
    def active_node(self) -> GraphNode | None:
        return self.controller.active_node

    @property
    def attack_path(self) -> AttackPath | None:
        return self.controller.attack_path

    def highlight(self) -> Highlight:
        return self.controller.highlight()

    def detail_panel(self) -> DetailPanel | None:
        node = self.controller.active_node
        if node is None:
            return None
        return build_detail_panel(node, self.findings, self.controller.attack_path)

    def legend(self) -> List[LegendEntry]:
        return build_legend()

    def render_svg(self) -> str:
        return render_svg(self.graph, self.highlight(), self.viewport)

    def render_html(self) -> str:
        state = self.controller.state
        return build_html(
            svg=self.render_svg(),
            states=self.interaction_states(),
            legend=self.legend(),
            summary=self.data.summary,
            zoom=(self.viewport.min_scale, self.viewport.max_scale),
            hovered=state.hovered_id,
            selected=state.selected_id,
        )

    def interaction_states(self) -> Dict[str, Any]:
        """
        Every reachable highlight outcome, keyed for the HTML page.

        Hover and selection are computed separately because only a hovered
        sink-typed node forces attack-path mode. Idle carries every style;
        hover and select states carry only the entries that differ from it.
        """
        idle = self._state_payload(None, None)
        states: Dict[str, Any] = {"idle": idle, "hover": {}, "select": {}}
        for sim_node in self.graph.iter_nodes():
            hovered = self._state_payload(sim_node.id, sim_node.node)
            selected = self._state_payload(sim_node.id, None)
            states["hover"][sim_node.id] = _changed_from(idle, hovered)
            states["select"][sim_node.id] = _changed_from(idle, selected)
        return states

    def _state_payload(self, active_id: str | None, hovered: GraphNode | None) -> Dict[str, Any]:
        path, highlight = resolve_highlight(self.graph, self.findings, active_id, hovered)
        panel = None
        if active_id is not None:
            panel = build_detail_panel(self.graph.get_node(active_id).node, self.findings, path).to_dict()
        return {
            "nodes": {
                node_id: [style.opacity, style.stroke, style.stroke_width, glow_filter(style)]
                for node_id, style in highlight.nodes.items()
            },
            "links": {
                str(index): [style.opacity, style.stroke, style.marker]
                for index, style in highlight.links.items()
            },
            "panel": panel,
        }


def _changed_from(idle: Dict[str, Any], state: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "nodes": {k: v for k, v in state["nodes"].items() if idle["nodes"].get(k) != v},
        "links": {k: v for k, v in state["links"].items() if idle["links"].get(k) != v},
        "panel": state["panel"],
    }
