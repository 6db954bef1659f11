"""Node label formatting."""

import re

from ..core.types import GraphNode, NodeType

_VARIABLE_SUFFIX = re.compile(r"\s*variable\s*$", re.IGNORECASE)
_DOM_SUFFIX = re.compile(r"\s*(DOM\s*element|element)\s*$", re.IGNORECASE)


def format_label(node: GraphNode) -> str:
    """
    Display label for a node.

    Functions read as calls (``submit()``), variables as declarations
    (``var userInput``) and DOM nodes as elements (``<search-box>``).
    """
    label = node.label
    if node.type == NodeType.FUNCTION:
        return f"{label}()"
    if node.type == NodeType.VARIABLE:
        return f"var {_VARIABLE_SUFFIX.sub('', label)}"
    if node.type == NodeType.DOM:
        return f"<{_DOM_SUFFIX.sub('', label)}>"
    return label
