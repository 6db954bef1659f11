"""Shared fixtures for flowlens tests."""

import json

import pytest

from flowlens.analysis.findings import FindingIndex
from flowlens.core.graph import FlowGraph
from flowlens.core.sanitize import sanitize
from flowlens.core.types import GraphData


def build_data(nodes, links=(), **extra) -> GraphData:
    """GraphData from (id, type) tuples and (source, target) tuples."""
    return GraphData.model_validate({
        "nodes": [{"id": node_id, "label": node_id, "type": node_type} for node_id, node_type in nodes],
        "links": [{"source": s, "target": t, "type": "data_flow"} for s, t in links],
        **extra,
    })


def build_graph(data: GraphData) -> FlowGraph:
    return FlowGraph(sanitize(data.nodes, data.links))


@pytest.fixture
def chain_data():
    """A -> B -> C where C is a declared sink."""
    return build_data(
        [("A", "input"), ("B", "function"), ("C", "sink")],
        [("A", "B"), ("B", "C")],
        sinks=["C"],
    )


@pytest.fixture
def chain_graph(chain_data):
    return build_graph(chain_data)


@pytest.fixture
def chain_findings(chain_data):
    return FindingIndex(chain_data)


@pytest.fixture
def xss_payload():
    """A realistic payload as returned by the analysis service."""
    return {
        "nodes": [
            {"id": "input_search", "label": "search-box", "type": "input",
             "description": "Free text search field", "file": "index.html"},
            {"id": "var_query", "label": "query variable", "type": "variable"},
            {"id": "fn_render", "label": "renderResults", "type": "function",
             "file": "app.js", "snippet": "el.innerHTML = query;"},
            {"id": "sink_innerHTML", "label": "innerHTML", "type": "sink"},
            {"id": "dom_results", "label": "results DOM element", "type": "dom"},
            {"id": "fn_escape", "label": "escapeHtml", "type": "sanitizer"},
        ],
        "links": [
            {"source": "input_search", "target": "var_query", "type": "data_flow"},
            {"source": "var_query", "target": "fn_render", "type": "input_to_function"},
            {"source": "fn_render", "target": "sink_innerHTML", "type": "dom_write"},
            {"source": "sink_innerHTML", "target": "dom_results", "type": "function_to_dom"},
            {"source": "fn_escape", "target": "ghost", "type": "sanitization"},
        ],
        "security_findings": [
            {
                "title": "Reflected XSS",
                "description": "User input reaches innerHTML unescaped.",
                "nodes": ["sink_innerHTML", "fn_render"],
                "payload_suggestion": "<img src=x onerror=alert(1)>",
                "test_strategy": "Type the payload into the search box.",
            },
            "Search results are not encoded.",
        ],
        "input_sources": ["input_search"],
        "sinks": ["sink_innerHTML"],
        "summary": "One reflected XSS path from the search box.",
    }


@pytest.fixture
def payload_file(tmp_path, xss_payload):
    f = tmp_path / "analysis.json"
    f.write_text(json.dumps(xss_payload))
    return f
