"""Backlink model - annotated non-hierarchical edge between two nodes."""

from dataclasses import dataclass
from typing import Literal

BacklinkStyle = Literal["solid", "dotted", "dashed"]

DASH_PATTERNS: dict[str, str] = {
    "solid": "none",
    "dotted": "1 6",
    "dashed": "6 6",
}


@dataclass
class Backlink:
    """A directed, annotated curve from one node to another."""

    id: str
    source: str  # "from" in documents
    target: str  # "to" in documents
    style: BacklinkStyle = "dashed"
    color: str = "#7cb8ff"
    bend: float = 40.0  # Signed offset of the control point
    pad: float = 10.0  # Clearance from the node boundary
    title: str = ""
    note: str = ""

    @property
    def dasharray(self) -> str:
        return DASH_PATTERNS.get(self.style, DASH_PATTERNS["dashed"])

    @property
    def tooltip_text(self) -> str:
        """Title and note joined for the pointer-following tooltip."""
        parts = [s.strip() for s in (self.title, self.note) if s and s.strip()]
        return " — ".join(parts)

    def to_dict(self) -> dict:
        """Convert to dictionary using document field names."""
        return {
            "id": self.id,
            "from": self.source,
            "to": self.target,
            "style": self.style,
            "color": self.color,
            "bend": self.bend,
            "pad": self.pad,
            "title": self.title,
            "note": self.note,
        }
