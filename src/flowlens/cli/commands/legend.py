"""
Legend Command - Node type colors and icons.
"""

import click
from rich.console import Console
from rich.table import Table

from ...render.panel import build_legend
from ...render.theme import NODE_GLYPHS

console = Console()


@click.command()
def legend():
    """Show the node type legend."""
    table = Table(title="Legend")
    table.add_column("Type")
    table.add_column("Glyph", justify="center")
    table.add_column("Color")
    table.add_column("Icon", style="dim")

    for entry in build_legend():
        table.add_row(
            f"[{entry.color}]{entry.type}[/]",
            NODE_GLYPHS.get(entry.type, ""),
            entry.color,
            entry.icon,
        )

    console.print(table)
