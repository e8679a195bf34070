"""Drawable scene - everything a renderer needs for one frame.

Layer order, bottom to top: backlinks, tree edges, nodes.
"""

import math
from dataclasses import dataclass, field

from linkmap.backlinks.router import BacklinkGeometry, BacklinkRouter, Point, segment_distance
from linkmap.config import settings
from linkmap.graph.store import GraphStore
from linkmap.models import Node, color_for, fill_for, radius_for, size_for
from linkmap.models.node import MAX_DEPTH_CLASS
from linkmap.viewport.transform import ViewportTransform

COLLAPSED_MARKER = "▸ "
EXPANDED_MARKER = "▾ "
LABEL_OFFSET = (14.0, -12.0)

EMPTY_BOUNDS = (0.0, 0.0, 600.0, 400.0)
MOBILE_MIN_SIZE = (600, 420)


@dataclass
class NodeGeometry:
    """One visible node, ready to draw."""

    node: Node
    radius: float
    width: float
    height: float
    fill: str
    label: str
    selected: bool = False

    @property
    def id(self) -> str:
        return self.node.id

    @property
    def depth_class(self) -> int:
        return min(self.node.depth, MAX_DEPTH_CLASS)

    @property
    def label_anchor(self) -> Point:
        return (self.node.x + LABEL_OFFSET[0], self.node.y + LABEL_OFFSET[1])

    def contains(self, point: Point) -> bool:
        return math.hypot(point[0] - self.node.x, point[1] - self.node.y) <= self.radius

    def to_dict(self) -> dict:
        return {
            "id": self.node.id,
            "type": self.node.type,
            "x": self.node.x,
            "y": self.node.y,
            "depth": self.node.depth,
            "depthClass": self.depth_class,
            "shape": self.node.shape,
            "radius": self.radius,
            "width": self.width,
            "height": self.height,
            "fill": self.fill,
            "stroke": self.node.stroke,
            "label": self.label,
            "labelAnchor": list(self.label_anchor),
            "collapsed": self.node.collapsed,
            "selected": self.selected,
        }


@dataclass
class TreeEdge:
    """Parent -> child line, with the child's colour and label for hover."""

    parent_id: str
    child_id: str
    start: Point
    end: Point
    hover_color: str
    tooltip: str
    hit_width: float

    @property
    def id(self) -> str:
        return f"{self.parent_id}->{self.child_id}"

    def hit_test(self, point: Point) -> bool:
        return segment_distance(point, self.start, self.end) <= self.hit_width / 2

    def to_dict(self) -> dict:
        return {
            "from": self.parent_id,
            "to": self.child_id,
            "x1": self.start[0],
            "y1": self.start[1],
            "x2": self.end[0],
            "y2": self.end[1],
            "hoverColor": self.hover_color,
            "tooltip": self.tooltip,
        }


@dataclass
class Scene:
    """Geometry for one frame."""

    nodes: list[NodeGeometry] = field(default_factory=list)
    tree_edges: list[TreeEdge] = field(default_factory=list)
    backlinks: list[BacklinkGeometry] = field(default_factory=list)
    transform: str = "translate(0,0) scale(1)"
    canvas_size: tuple[float, float] | None = None  # None = fill container

    def node_at(self, point: Point) -> NodeGeometry | None:
        for geometry in reversed(self.nodes):
            if geometry.contains(point):
                return geometry
        return None

    def to_dict(self) -> dict:
        return {
            "transform": self.transform,
            "canvasSize": list(self.canvas_size) if self.canvas_size else None,
            "backlinks": [b.to_dict() for b in self.backlinks],
            "treeEdges": [e.to_dict() for e in self.tree_edges],
            "nodes": [n.to_dict() for n in self.nodes],
        }


def node_label(node: Node) -> str:
    if not node.children:
        return node.label
    marker = COLLAPSED_MARKER if node.collapsed else EXPANDED_MARKER
    return f"{marker}{node.label}"


def visible_bounds(nodes: list[Node], pad: float = 40.0) -> tuple[float, float, float, float]:
    """(min_x, min_y, max_x, max_y) of the given node centers, padded."""
    if not nodes:
        return EMPTY_BOUNDS
    xs = [n.x for n in nodes]
    ys = [n.y for n in nodes]
    return (min(xs) - pad, min(ys) - pad, max(xs) + pad, max(ys) + pad)


def canvas_size_for(
    nodes: list[Node],
    viewport_width: float,
    breakpoint: float | None = None,
) -> tuple[float, float] | None:
    """Explicit canvas size on narrow viewports, None to fill the container."""
    limit = breakpoint if breakpoint is not None else settings.mobile_breakpoint
    if viewport_width > limit:
        return None
    min_x, min_y, max_x, max_y = visible_bounds(nodes, pad=120.0)
    return (
        max(math.ceil(max_x - min_x), MOBILE_MIN_SIZE[0]),
        max(math.ceil(max_y - min_y), MOBILE_MIN_SIZE[1]),
    )


def build_scene(
    store: GraphStore,
    transform: ViewportTransform,
    router: BacklinkRouter,
) -> Scene:
    """Assemble drawable geometry for the visible part of the graph."""
    visible = store.visible_nodes()
    visible_ids = {n.id for n in visible}

    nodes = []
    for node in visible:
        width, height = size_for(node)
        nodes.append(NodeGeometry(
            node=node,
            radius=radius_for(node),
            width=width,
            height=height,
            fill=fill_for(node),
            label=node_label(node),
            selected=node.id == store.selected_id,
        ))

    edges = []
    for node in visible:
        if not node.parent_id or node.parent_id not in visible_ids:
            continue
        parent = store.nodes[node.parent_id]
        edges.append(TreeEdge(
            parent_id=parent.id,
            child_id=node.id,
            start=(parent.x, parent.y),
            end=(node.x, node.y),
            hover_color=color_for(node),
            tooltip=node.label or "",
            hit_width=router.hit_width,
        ))

    return Scene(
        nodes=nodes,
        tree_edges=edges,
        backlinks=router.route_all(store, visible_ids),
        transform=transform.to_svg(),
        canvas_size=canvas_size_for(visible, transform.width),
    )
