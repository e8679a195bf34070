"""Scene geometry and panel view models for a renderer."""

from linkmap.presentation.details import BacklinkPanel, NodeDetails
from linkmap.presentation.scene import (
    NodeGeometry,
    Scene,
    TreeEdge,
    build_scene,
    canvas_size_for,
    node_label,
    visible_bounds,
)

__all__ = [
    "Scene",
    "NodeGeometry",
    "TreeEdge",
    "build_scene",
    "canvas_size_for",
    "node_label",
    "visible_bounds",
    "NodeDetails",
    "BacklinkPanel",
]
