"""Unit tests for the finding index."""

from flowlens.analysis.findings import FindingIndex
from flowlens.core.types import GraphData


class TestFindingIndex:
    def test_vulnerable_union(self, xss_payload):
        index = FindingIndex(GraphData.model_validate(xss_payload))
        assert index.vulnerable_ids == {"sink_innerHTML", "fn_render"}
        assert index.is_vulnerable("fn_render")
        assert not index.is_vulnerable("var_query")

    def test_sinks_without_findings(self):
        index = FindingIndex(GraphData(sinks=["S"]))
        assert index.is_vulnerable("S")
        assert index.findings_for("S") == ()

    def test_findings_for(self, xss_payload):
        index = FindingIndex(GraphData.model_validate(xss_payload))
        findings = index.findings_for("fn_render")
        assert len(findings) == 1
        assert findings[0].title == "Reflected XSS"
        assert len(index) == 2

    def test_bare_finding_marks_nothing(self):
        index = FindingIndex(GraphData.model_validate({"security_findings": ["loose text"]}))
        assert index.vulnerable_ids == frozenset()

    def test_input_sources(self, xss_payload):
        index = FindingIndex(GraphData.model_validate(xss_payload))
        assert index.input_sources == {"input_search"}
