"""Hover/selection state and the highlight it produces."""

from .controller import InteractionController, InteractionState
from .highlight import Highlight, HighlightMode, LinkStyle, NodeStyle, derive_highlight

__all__ = [
    "Highlight",
    "HighlightMode",
    "InteractionController",
    "InteractionState",
    "LinkStyle",
    "NodeStyle",
    "derive_highlight",
]
