"""
CLI Utilities - Shared helper functions for command line operations.

This module provides common functionality used across the CLI commands,
including formatted printing, payload loading and node name resolution.
"""

import sys
from pathlib import Path
from typing import NoReturn

import click

from ..config import Settings, find_settings
from ..core.exceptions import FlowlensError, NodeNotFoundError
from ..core.graph import FlowGraph
from ..core.loader import load_graph_data
from ..core.types import GraphData


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    """
    Print a warning message with a yellow alert symbol.

    Args:
        message (str): The warning message to display.
    """
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def echo_info(message: str) -> None:
    """
    Print an informational message, dimmed.

    Args:
        message (str): The info message to display.
    """
    click.echo(click.style(f"   {message}", dim=True))


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    echo_error(message)
    sys.exit(1)


def load_data(graph_file: str) -> GraphData:
    """
    Load an analysis payload, exiting with an error message on failure.

    Args:
        graph_file (str): Path to the JSON payload (prose around it is tolerated).

    Returns:
        GraphData: The validated payload.
    """
    try:
        return load_graph_data(graph_file)
    except FlowlensError as e:
        fail(str(e))


def load_settings(config_file: str | None) -> Settings:
    """Load an explicit settings file, or ``flowlens.toml`` from the cwd."""
    try:
        if config_file:
            return Settings.load(Path(config_file))
        return find_settings()
    except FlowlensError as e:
        fail(str(e))


def resolve_node(graph: FlowGraph, name: str) -> str:
    """
    Resolve a partial name to a full node ID.

    Exact ids win; otherwise the first id or label containing ``name``.

    Raises:
        NodeNotFoundError: If nothing matches.
    """
    if graph.has_node(name):
        return name

    matches = graph.find_nodes(name)
    if not matches:
        raise NodeNotFoundError(name)

    if len(matches) > 1:
        click.echo(f"Ambiguous node '{name}'. Using first match: {matches[0]}", err=True)

    return matches[0]
