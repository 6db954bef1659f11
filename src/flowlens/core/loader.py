"""
Payload Loader.

Turns the raw text returned by the analysis service into a validated
GraphData. Language models like to wrap JSON in prose or markdown fences,
so the outermost ``{...}`` block is extracted before decoding.
"""

import json
import logging
import re
from pathlib import Path

from pydantic import ValidationError

from .exceptions import GraphDataError
from .types import GraphData

logger = logging.getLogger(__name__)

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def parse_graph_payload(text: str, source: str = "<string>") -> GraphData:
    """
    Decode an analysis payload.

    Args:
        text: Raw response text, possibly surrounded by non-JSON content.
        source: Label used in error messages.

    Returns:
        GraphData with missing optional fields defaulted.

    Raises:
        GraphDataError: If no JSON object can be decoded or it fails validation.
    """
    match = _JSON_OBJECT.search(text)
    json_string = match.group(0) if match else text

    try:
        raw = json.loads(json_string)
    except json.JSONDecodeError as e:
        raise GraphDataError(f"Payload is not valid JSON: {e.msg}", source) from e

    if not isinstance(raw, dict):
        raise GraphDataError("Payload must be a JSON object", source)

    try:
        data = GraphData.model_validate(raw)
    except ValidationError as e:
        raise GraphDataError(f"Payload failed validation: {e.error_count()} error(s)", source) from e

    logger.debug(
        f"Loaded payload from {source}: {len(data.nodes)} nodes, "
        f"{len(data.links)} links, {len(data.security_findings)} findings"
    )
    return data


def load_graph_data(path: str | Path) -> GraphData:
    """Read and decode an analysis payload from disk."""
    graph_path = Path(path)
    try:
        text = graph_path.read_text(encoding="utf-8")
    except OSError as e:
        raise GraphDataError(f"Cannot read payload: {e.strerror}", str(graph_path)) from e
    return parse_graph_payload(text, source=str(graph_path))
