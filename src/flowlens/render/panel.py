"""
Detail panel and legend models.

Plain data handed to whichever surface draws them (HTML page, terminal).
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from ..analysis.attack_path import AttackPath
from ..analysis.findings import FindingIndex
from ..core.types import GraphNode, NodeType, SecurityFinding
from .labels import format_label
from .theme import NODE_COLORS, NODE_ICONS

DEFAULT_DESCRIPTION = "Logic component identified within the execution flow."
BANNER_ATTACK_PATH = "Displaying Full Attack Path"
BANNER_VULNERABLE = "Vulnerable Sink Detected"


@dataclass(frozen=True)
class LegendEntry:
    type: str
    color: str
    icon: str


@dataclass(frozen=True)
class DetailPanel:
    node_id: str
    type: str
    icon: str
    title: str
    description: str
    file: str | None = None
    snippet: str | None = None
    findings: Tuple[SecurityFinding, ...] = field(default_factory=tuple)
    banner: str | None = None

    @property
    def has_findings(self) -> bool:
        return bool(self.findings)

    def to_dict(self) -> dict:
        return {
            "node_id": self.node_id,
            "type": self.type,
            "icon": self.icon,
            "title": self.title,
            "description": self.description,
            "file": self.file,
            "snippet": self.snippet,
            "findings": [f.model_dump() for f in self.findings],
            "banner": self.banner,
        }


def build_detail_panel(
    node: GraphNode,
    findings: FindingIndex,
    attack_path: AttackPath | None = None,
) -> DetailPanel:
    """Assemble the panel content for the active node."""
    banner = None
    if attack_path is not None:
        banner = BANNER_ATTACK_PATH
    elif findings.is_vulnerable(node.id):
        banner = BANNER_VULNERABLE

    return DetailPanel(
        node_id=node.id,
        type=node.type.value,
        icon=NODE_ICONS.get(node.type, ""),
        title=format_label(node),
        description=node.description or DEFAULT_DESCRIPTION,
        file=node.file,
        snippet=node.snippet,
        findings=findings.findings_for(node.id),
        banner=banner,
    )


def build_legend() -> List[LegendEntry]:
    """Legend entries for every known node type, independent of the graph."""
    return [
        LegendEntry(type=t.value, color=NODE_COLORS[t], icon=NODE_ICONS[t])
        for t in NodeType
        if t != NodeType.UNKNOWN
    ]
