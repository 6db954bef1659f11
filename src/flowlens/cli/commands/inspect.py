"""
Inspect Command - Show the detail panel for a node.
"""

import click
from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text

from ..utils import fail, load_data, resolve_node
from ...analysis.attack_path import find_attack_path, should_trace
from ...analysis.findings import FindingIndex
from ...core.exceptions import NodeNotFoundError
from ...core.graph import FlowGraph
from ...core.sanitize import sanitize
from ...render.panel import DetailPanel, build_detail_panel
from ...render.theme import color_for

console = Console()


@click.command()
@click.argument("graph_file", metavar="GRAPH")
@click.argument("node")
def inspect(graph_file: str, node: str):
    """
    Show what the explorer displays when NODE is selected.

    \b
    Examples:
        flowlens inspect analysis.json sink_innerHTML
    """
    data = load_data(graph_file)
    graph = FlowGraph(sanitize(data.nodes, data.links))
    findings = FindingIndex(data)

    try:
        node_id = resolve_node(graph, node)
    except NodeNotFoundError as e:
        fail(str(e))

    attack_path = find_attack_path(graph, node_id) if should_trace(node_id, findings) else None
    panel = build_detail_panel(graph.get_node(node_id).node, findings, attack_path)

    console.print(_render_panel(panel))
    for finding in panel.findings:
        console.print(_render_finding(finding))


def _render_panel(panel: DetailPanel) -> Panel:
    parts = [Text(panel.description)]
    if panel.snippet:
        parts.append(Syntax(panel.snippet, "javascript", theme="monokai", word_wrap=True))
    if panel.banner:
        parts.append(Text(panel.banner.upper(), style="bold red"))

    subtitle = panel.file or None
    return Panel(
        Group(*parts),
        title=f"[{color_for(panel.type)}]{escape(panel.title)}[/] [dim]{panel.type}[/]",
        subtitle=subtitle,
        border_style="red" if panel.banner else "blue",
        expand=False,
    )


def _render_finding(finding) -> Panel:
    parts = []
    if finding.description:
        parts.append(Text(finding.description))
    if finding.payload_suggestion:
        parts.append(Text(finding.payload_suggestion, style="red"))
    if finding.test_strategy:
        parts.append(Text(finding.test_strategy, style="italic dim"))
    return Panel(
        Group(*parts),
        title=escape(finding.title or "Security Finding"),
        border_style="red",
        expand=False,
    )
