"""
flowlens - Attack Path Explorer for Security Data-Flow Graphs.

flowlens lays out a pre-computed security data-flow graph (nodes, links,
findings) with a force simulation and explains why a node is dangerous by
tracing every upstream contributor that can reach it.

Key Components:
- core: Data types, payload loading, sanitizing and the topology index
- layout: Force simulation and curved link geometry
- analysis: Vulnerable set, finding index and attack path extraction
- interaction: Hover/selection state and highlight derivation
- render: SVG/HTML output, labels, viewport and detail panel

Usage:
    from flowlens import GraphView, load_graph_data

    view = GraphView(width=1200, height=800)
    view.load(load_graph_data("analysis.json"))
    view.settle()
    view.pointer_enter("sink_innerHTML")
    svg = view.render_svg()
"""

__version__ = "0.1.0"

from .core.loader import load_graph_data, parse_graph_payload
from .core.types import (
    GraphData, GraphLink, GraphNode, NodeType,
    SecurityFinding, TrustBoundary,
)
from .view import GraphView

__all__ = [
    "__version__",
    "GraphData",
    "GraphLink",
    "GraphNode",
    "GraphView",
    "NodeType",
    "SecurityFinding",
    "TrustBoundary",
    "load_graph_data",
    "parse_graph_payload",
]
