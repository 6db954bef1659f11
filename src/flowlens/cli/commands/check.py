"""
Check Command - Sanity report for an analysis payload.

Shows what the sanitizer kept and dropped and which nodes are
considered vulnerable, before anything is rendered.
"""

import json
from typing import Any, Dict

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..utils import echo_success, echo_warning, load_data
from ...analysis.findings import FindingIndex
from ...core.graph import FlowGraph
from ...core.sanitize import sanitize
from ...core.types import GraphData

console = Console()


def build_report(data: GraphData) -> Dict[str, Any]:
    """Summarize a payload after sanitizing."""
    graph = FlowGraph(sanitize(data.nodes, data.links))
    findings = FindingIndex(data)
    stats = graph.get_stats()

    known_ids = {n.id for n in graph.iter_nodes()}
    return {
        **stats,
        "duplicate_nodes": len(data.nodes) - graph.node_count,
        "findings": len(data.security_findings),
        "vulnerable": sorted(findings.vulnerable_ids & known_ids),
        "unknown_vulnerable": sorted(findings.vulnerable_ids - known_ids),
        "input_sources": sorted(findings.input_sources),
        "critical_functions": list(data.critical_functions),
        "trust_boundaries": len(data.trust_boundaries),
        "summary": data.summary,
    }


@click.command()
@click.argument("graph_file", metavar="GRAPH")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def check(graph_file: str, as_json: bool):
    """
    Validate GRAPH and report what will be displayed.

    \b
    Examples:
        flowlens check analysis.json
        flowlens check analysis.json --json
    """
    report = build_report(load_data(graph_file))

    if as_json:
        click.echo(json.dumps(report, indent=2))
        return

    table = Table(title="Payload Report", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Nodes", str(report["total_nodes"]))
    table.add_row("Links", str(report["total_links"]))
    table.add_row("Dropped links", str(report["dropped_links"]))
    table.add_row("Duplicate nodes", str(report["duplicate_nodes"]))
    table.add_row("Orphans", str(report["orphans"]))
    table.add_row("Findings", str(report["findings"]))
    table.add_row("Vulnerable nodes", str(len(report["vulnerable"])))
    for node_type, count in report["nodes_by_type"].items():
        table.add_row(f"  {node_type}", str(count))

    console.print(table)
    console.print(f"[dim]{escape(report['summary'])}[/]")

    if report["dropped_links"] or report["unknown_vulnerable"]:
        if report["dropped_links"]:
            echo_warning(f"{report['dropped_links']} link(s) reference unknown nodes and will not be drawn")
        if report["unknown_vulnerable"]:
            echo_warning(f"Vulnerable ids with no matching node: {', '.join(report['unknown_vulnerable'])}")
    else:
        echo_success("Payload is consistent")
