"""Backlink routing and hover.

Provides:
- BacklinkRouter: quadratic curve geometry between visible nodes
- linkmap.backlinks.hover.HoverController: hover effects for backlinks and
  tree edges (imported from its module, it depends on the scene)
"""

from linkmap.backlinks.router import (
    BacklinkGeometry,
    BacklinkRouter,
    LabelBubble,
    offset_point,
    quadratic_point,
    segment_distance,
)

__all__ = [
    "BacklinkRouter",
    "BacklinkGeometry",
    "LabelBubble",
    "offset_point",
    "quadratic_point",
    "segment_distance",
]
