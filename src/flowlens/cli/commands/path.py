"""
Path Command - Show the attack path into a node.

Prints every upstream contributor of the target as a tree, following
the links that first reached each contributor.
"""

import json

import click
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from ..utils import fail, load_data, resolve_node
from ...analysis.attack_path import AttackPath, find_attack_path, upstream_layers
from ...analysis.findings import FindingIndex
from ...core.exceptions import NodeNotFoundError
from ...core.graph import FlowGraph
from ...core.sanitize import sanitize
from ...render.labels import format_label
from ...render.theme import color_for

console = Console()


@click.command()
@click.argument("graph_file", metavar="GRAPH")
@click.argument("node")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def path(graph_file: str, node: str, as_json: bool):
    """
    Trace every upstream contributor of NODE.

    \b
    Examples:
        flowlens path analysis.json sink_innerHTML
        flowlens path analysis.json innerHTML --json
    """
    data = load_data(graph_file)
    graph = FlowGraph(sanitize(data.nodes, data.links))
    findings = FindingIndex(data)

    try:
        target_id = resolve_node(graph, node)
    except NodeNotFoundError as e:
        fail(str(e))

    attack_path = find_attack_path(graph, target_id)

    if as_json:
        result = attack_path.to_dict()
        result["vulnerable"] = findings.is_vulnerable(target_id)
        click.echo(json.dumps(result, indent=2))
        return

    _print_tree(graph, findings, attack_path)


def _node_markup(graph: FlowGraph, findings: FindingIndex, node_id: str) -> str:
    node = graph.get_node(node_id).node
    text = f"[{color_for(node.type)}]{escape(format_label(node))}[/] [dim]({node.type.value})[/]"
    if findings.is_vulnerable(node_id):
        text += " [bold red]⚠ vulnerable[/]"
    if node_id in findings.input_sources:
        text += " [cyan]input[/]"
    return text


def _print_tree(graph: FlowGraph, findings: FindingIndex, attack_path: AttackPath) -> None:
    layers = upstream_layers(graph, attack_path)
    tree = Tree(_node_markup(graph, findings, attack_path.target))
    branches = {attack_path.target: tree}

    for parents, layer in zip(layers, layers[1:]):
        for node_id in layer:
            link = next(
                link for parent in parents for link in graph.incoming(parent)
                if link.source == node_id and link.index in attack_path.links
            )
            label = link.link.relationship or link.link.type or ""
            markup = _node_markup(graph, findings, node_id)
            if label:
                markup += f" [dim]─ {escape(label)}[/]"
            branches[node_id] = branches[link.target].add(markup)

    console.print()
    console.print(tree)
    console.print()
    console.print(
        f"[bold]{len(attack_path.nodes)}[/] node(s), "
        f"[bold]{len(attack_path.links)}[/] link(s) on the attack path"
    )
