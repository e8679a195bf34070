"""Tidy horizontal tree layout driven by visible leaf weight.

Algorithm:
1. Assign depths depth-first from the root, not descending past collapsed nodes
2. Measure leaf weight: 1 for a node without visible children, otherwise the
   sum of its children's weights
3. Place root at the left margin, vertically centered; place the hub one step
   right of it; then give every visible child a vertical span of
   (weight - 1) * DY, stacked with DY between siblings and centered on the
   parent, recursing one DX step per level

Collapsing a node caps its weight at 1, so collapsed branches reserve no space.
Everything is recomputed on each pass.
"""

import logging
from dataclasses import dataclass, field

from linkmap.config import settings
from linkmap.graph.store import GraphStore
from linkmap.models import Node

logger = logging.getLogger(__name__)


@dataclass
class LayoutResult:
    """Output of one layout pass."""

    positions: dict[str, tuple[float, float]] = field(default_factory=dict)
    spans: dict[str, tuple[float, float]] = field(default_factory=dict)  # node_id -> (top, bottom)
    weights: dict[str, int] = field(default_factory=dict)
    depths: dict[str, int] = field(default_factory=dict)

    def position(self, node_id: str) -> tuple[float, float] | None:
        return self.positions.get(node_id)


class LayoutEngine:
    """Computes depth and position for every visible node of a GraphStore."""

    def __init__(
        self,
        dx: float | None = None,
        dy: float | None = None,
        margin_left: float | None = None,
    ) -> None:
        self.dx = dx if dx is not None else settings.layout_dx
        self.dy = dy if dy is not None else settings.layout_dy
        self.margin_left = margin_left if margin_left is not None else settings.layout_margin_left

    def layout(self, store: GraphStore, viewport_height: float) -> LayoutResult:
        """Run a full layout pass, writing depth/x/y onto the placed nodes."""
        result = LayoutResult()
        root = store.root
        if root is None:
            return result

        visible = store.visible_nodes()
        visible_ids = {n.id for n in visible}

        self.assign_depths(store, result)
        result.weights = self.measure_leaves(store, visible)

        center_y = viewport_height / 2
        self._place(root, self.margin_left, center_y, result)
        result.spans[root.id] = (center_y, center_y)

        hub = store.hub
        if hub is not None and hub.id in visible_ids:
            self._place(hub, root.x + self.dx, center_y, result)
            result.spans[hub.id] = (center_y, center_y)
            self._distribute(store, hub, result)

        logger.debug(
            f"Layout pass: {len(visible)} visible, {len(result.positions)} placed, "
            f"height={viewport_height}"
        )
        return result

    def assign_depths(self, store: GraphStore, result: LayoutResult) -> None:
        """Depth-first depth assignment; collapsed subtrees keep stale depths."""
        seen: set[str] = set()
        stack: list[tuple[str, int]] = [(store.root_id, 0)]
        while stack:
            node_id, depth = stack.pop()
            node = store.get(node_id)
            if node is None or node_id in seen:
                continue
            seen.add(node_id)
            node.depth = depth
            result.depths[node_id] = depth
            if not node.collapsed:
                stack.extend((cid, depth + 1) for cid in reversed(node.children))

    def measure_leaves(self, store: GraphStore, visible: list[Node]) -> dict[str, int]:
        """Leaf weight of every visible node.

        `visible` is in pre-order, so walking it backwards sees every child
        before its parent.
        """
        weights: dict[str, int] = {}
        for node in reversed(visible):
            kids = [c for c in store.visible_children(node) if c.id in weights]
            weights[node.id] = sum(weights[c.id] for c in kids) if kids else 1
        return weights

    def _place(self, node: Node, x: float, y: float, result: LayoutResult) -> None:
        node.x = x
        node.y = y
        result.positions[node.id] = (x, y)

    def _distribute(self, store: GraphStore, parent: Node, result: LayoutResult) -> None:
        """Stack weighted spans for each level below `parent`."""
        queue = [parent]
        while queue:
            current = queue.pop()
            kids = [
                c for c in store.visible_children(current)
                if c.id not in result.positions
            ]
            if not kids:
                continue

            sizes = [result.weights.get(c.id, 1) for c in kids]
            total_height = max(0.0, (sum(sizes) - 1) * self.dy)
            cursor = current.y - total_height / 2
            x = current.x + self.dx

            for child, size in zip(kids, sizes):
                span = max(0.0, (size - 1) * self.dy)
                self._place(child, x, cursor + span / 2, result)
                result.spans[child.id] = (cursor, cursor + span)
                cursor += span + self.dy
                queue.append(child)
