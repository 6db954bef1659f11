"""
Render Command - Lay out a payload and write the explorer page.

Runs the force simulation headless, applies the requested hover or
selection, then writes either a standalone HTML explorer or a static SVG.
"""

import logging
from pathlib import Path

import click

from ..utils import echo_info, echo_success, echo_warning, fail, load_data, load_settings, resolve_node
from ...core.exceptions import NodeNotFoundError
from ...view import GraphView

logger = logging.getLogger(__name__)


@click.command()
@click.argument("graph_file", metavar="GRAPH")
@click.option("-o", "--output", default="flowlens.html",
              help="Output file (.html or .svg)")
@click.option("--ticks", type=int, default=None,
              help="Simulation ticks to run (default: until settled)")
@click.option("--width", type=float, default=960, help="Canvas width")
@click.option("--height", type=float, default=640, help="Canvas height")
@click.option("--select", "select_node", default=None, help="Node to select")
@click.option("--hover", "hover_node", default=None, help="Node to hover")
@click.option("--seed", type=int, default=None, help="Layout random seed")
@click.option("-c", "--config", "config_file", default=None,
              help="Settings file (default: ./flowlens.toml if present)")
def render(graph_file: str, output: str, ticks: int | None, width: float, height: float,
           select_node: str | None, hover_node: str | None, seed: int | None,
           config_file: str | None):
    """
    Render GRAPH as an interactive HTML explorer or a static SVG.

    \b
    Examples:
        flowlens render analysis.json -o explorer.html
        flowlens render analysis.json -o sink.svg --hover sink_innerHTML
    """
    if width <= 0 or height <= 0:
        fail("Width and height must be positive")

    settings = load_settings(config_file)
    if seed is not None:
        settings = settings.model_copy(
            update={"layout": settings.layout.model_copy(update={"seed": seed})}
        )

    data = load_data(graph_file)
    view = GraphView(width, height, settings)
    view.load(data)

    if view.is_empty:
        echo_warning("Graph has no nodes; writing an empty canvas")

    frames = view.settle(ticks)
    logger.debug(f"Layout ran for {frames} tick(s)")

    try:
        if select_node:
            view.click(resolve_node(view.graph, select_node))
        if hover_node:
            view.pointer_enter(resolve_node(view.graph, hover_node))
    except NodeNotFoundError as e:
        view.close()
        fail(str(e))

    out_path = Path(output)
    content = view.render_svg() if out_path.suffix.lower() == ".svg" else view.render_html()
    view.close()

    try:
        out_path.write_text(content, encoding="utf-8")
    except OSError as e:
        fail(f"Cannot write {out_path}: {e.strerror}")

    echo_success(f"Wrote {out_path}")
    echo_info(f"{view.graph.node_count} nodes, {view.graph.link_count} links, {frames} ticks")
