"""
Core type definitions for flowlens.

These models describe the payload handed over by the acquisition layer
(the service that asks a language model to analyze source files). Every
optional collection defaults to empty so partial payloads stay usable.
"""

from enum import StrEnum
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class NodeType(StrEnum):
    """Categories of entities in a security data-flow graph."""
    FUNCTION = "function"
    VARIABLE = "variable"
    DOM = "dom"
    EVENT = "event"
    API = "api"
    INPUT = "input"
    SINK = "sink"
    SANITIZER = "sanitizer"
    UNKNOWN = "unknown"


def endpoint_id(value: Any) -> str:
    """
    Reduce a link endpoint to its node id.

    Endpoints arrive either as raw ids or as already-resolved node
    references (a dict or an object carrying an ``id``).
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        return endpoint_id(value.get("id"))
    if hasattr(value, "id"):
        return endpoint_id(getattr(value, "id"))
    return str(value)


class GraphNode(BaseModel):
    """
    An entity extracted from the analyzed code.
    """
    id: str
    label: str
    type: NodeType = NodeType.UNKNOWN
    category: str | None = None
    description: str | None = None
    file: str | None = None
    snippet: str | None = None

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _default_label(cls, values: Any) -> Any:
        if isinstance(values, dict) and not values.get("label"):
            values = {**values, "label": str(values.get("id", ""))}
        return values

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> Any:
        # Models invent categories ("class", "module"); keep the node anyway.
        if isinstance(value, NodeType):
            return value
        try:
            return NodeType(str(value).strip().lower())
        except ValueError:
            return NodeType.UNKNOWN

    @property
    def is_sink(self) -> bool:
        return self.type == NodeType.SINK


class GraphLink(BaseModel):
    """
    Directed data-flow relationship between two nodes.

    Links carry no identity of their own; duplicates are legal and are
    drawn as separate edges.
    """
    source: str
    target: str
    type: str | None = None
    relationship: str | None = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("source", "target", mode="before")
    @classmethod
    def _normalize_endpoint(cls, value: Any) -> str:
        return endpoint_id(value)


class TrustBoundary(BaseModel):
    source: str
    target: str
    reason: str = ""

    model_config = ConfigDict(extra="ignore")


class SecurityFinding(BaseModel):
    """
    A suspected weakness, tied to zero or more graph nodes.
    """
    title: str | None = None
    description: str = ""
    nodes: List[str] = Field(default_factory=list)
    payload_suggestion: str | None = None
    test_strategy: str | None = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("nodes", mode="before")
    @classmethod
    def _default_nodes(cls, value: Any) -> Any:
        return value or []


class GraphData(BaseModel):
    """
    The complete analysis payload.
    """
    nodes: List[GraphNode] = Field(default_factory=list)
    links: List[GraphLink] = Field(default_factory=list)
    security_findings: List[SecurityFinding] = Field(default_factory=list)
    critical_functions: List[str] = Field(default_factory=list)
    input_sources: List[str] = Field(default_factory=list)
    sinks: List[str] = Field(default_factory=list)
    trust_boundaries: List[TrustBoundary] = Field(default_factory=list)
    summary: str = "No summary available."

    model_config = ConfigDict(extra="ignore")

    @field_validator(
        "nodes", "links", "critical_functions", "input_sources",
        "sinks", "trust_boundaries", mode="before",
    )
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return value or []

    @field_validator("security_findings", mode="before")
    @classmethod
    def _coerce_findings(cls, value: Any) -> Any:
        # Models occasionally emit findings as bare sentences.
        return [
            {"description": item} if isinstance(item, str) else item
            for item in (value or [])
        ]

    @field_validator("summary", mode="before")
    @classmethod
    def _default_summary(cls, value: Any) -> Any:
        return value or "No summary available."
