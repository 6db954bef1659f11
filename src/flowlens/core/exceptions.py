"""
Exception hierarchy for flowlens.

The layout/traversal core never raises for bad topology or geometry; these
errors belong to the boundaries (payload decoding and CLI lookups).
"""


class FlowlensError(Exception):
    """Base class for all flowlens errors."""


class GraphDataError(FlowlensError):
    """
    Raised when an analysis payload cannot be decoded or validated.

    Attributes:
        message: Human-readable error message.
        source: Where the payload came from (file path or "<string>").
    """

    def __init__(self, message: str, source: str = ""):
        self.message = message
        self.source = source
        super().__init__(f"{message} ({source})" if source else message)


class NodeNotFoundError(FlowlensError):
    """Raised when a requested node id is not part of the graph."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Node not found: {node_id}")
