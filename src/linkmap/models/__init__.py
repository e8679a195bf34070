"""linkmap data models."""

from linkmap.models.backlink import Backlink, BacklinkStyle
from linkmap.models.node import (
    Node,
    NodeShape,
    NodeType,
    color_for,
    fill_for,
    radius_for,
    size_for,
)

__all__ = [
    "Node",
    "NodeType",
    "NodeShape",
    "Backlink",
    "BacklinkStyle",
    "radius_for",
    "color_for",
    "fill_for",
    "size_for",
]
