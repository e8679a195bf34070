"""Node model - one entry of the hierarchical data set."""

from dataclasses import dataclass, field
from typing import Literal

NodeType = Literal["root", "hub", "child"]
NodeShape = Literal["circle", "rect", "triangle"]

ROOT_RADIUS = 10.0
HUB_RADIUS = 9.0
CHILD_RADIUS = 7.5

# Default sizes for non-circle shapes when w/h are absent
RECT_SIZE = (24.0, 18.0)
TRIANGLE_SIZE = (22.0, 22.0)

MAX_DEPTH_CLASS = 8


@dataclass
class Node:
    """
    A node of the collapsible tree.

    `children` holds ids only; the graph store is the arena that resolves them.
    `depth`, `x` and `y` are written by the layout engine and are only
    meaningful for nodes in the current visible set.
    """

    id: str
    label: str = "node"
    content: str = ""
    type: NodeType = "child"
    parent_id: str | None = None
    children: list[str] = field(default_factory=list)
    collapsed: bool = False

    # Layout output
    depth: int = 0
    x: float = 0.0
    y: float = 0.0

    # Style passthrough
    shape: NodeShape = "circle"
    w: float | None = None
    h: float | None = None
    fill: str | None = None
    stroke: str = "#0b122d"

    @property
    def has_children(self) -> bool:
        return len(self.children) > 0

    @property
    def state_label(self) -> str:
        """Collapse state as shown to the user."""
        if not self.children:
            return "leaf"
        return "collapsed" if self.collapsed else "expanded"

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "label": self.label,
            "content": self.content,
            "type": self.type,
            "parentId": self.parent_id,
            "children": list(self.children),
            "collapsed": self.collapsed,
            "depth": self.depth,
            "x": self.x,
            "y": self.y,
            "shape": self.shape,
            "w": self.w,
            "h": self.h,
            "fill": self.fill,
            "stroke": self.stroke,
        }


def radius_for(node: Node) -> float:
    """Bounding radius used to keep curves clear of the node shape."""
    if node.shape == "circle" and node.w is not None and node.h is not None:
        return max(CHILD_RADIUS, min(node.w, node.h) / 2)
    if node.type == "root":
        return ROOT_RADIUS
    if node.type == "hub":
        return HUB_RADIUS
    return CHILD_RADIUS


def color_for(node: Node | None) -> str:
    """Colour token for a node, used when its incoming tree edge is hovered."""
    if node is None:
        return "var(--lvl2)"
    if node.fill:
        return node.fill
    if node.type == "root":
        return "var(--node-root)"
    depth = max(1, min(MAX_DEPTH_CLASS, node.depth or 1))
    return f"var(--lvl{depth})"


def fill_for(node: Node) -> str:
    """Fill colour with the per-shape fallback applied."""
    if node.fill:
        return node.fill
    if node.shape == "rect":
        return "var(--lvl2)"
    if node.shape == "triangle":
        return "var(--lvl3)"
    return "var(--node-root)" if node.type == "root" else "var(--node)"


def size_for(node: Node) -> tuple[float, float]:
    """Width and height of the drawn shape."""
    if node.shape == "rect":
        default = RECT_SIZE
    elif node.shape == "triangle":
        default = TRIANGLE_SIZE
    else:
        diameter = 2 * radius_for(node)
        default = (diameter, diameter)
    return (
        node.w if node.w is not None else default[0],
        node.h if node.h is not None else default[1],
    )
