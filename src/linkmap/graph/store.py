"""Graph store - arena of nodes and backlinks for one loaded document.

The store is replaced wholesale on every load. Between loads only the
`collapsed` flags and the selection change.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from linkmap.models import Backlink, Node

logger = logging.getLogger(__name__)


@dataclass
class GraphStore:
    """Id-keyed node arena plus the backlink list.

    Children are stored as id lists on each node. Every traversal carries a
    visited set, so a store that was built without normalization cannot loop.
    """

    nodes: dict[str, Node] = field(default_factory=dict)
    root_id: str | None = None
    hub_id: str | None = None
    selected_id: str | None = None
    backlinks: list[Backlink] = field(default_factory=list)

    @classmethod
    def empty(cls) -> GraphStore:
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.root_id is None or self.root_id not in self.nodes

    @property
    def root(self) -> Node | None:
        return self.nodes.get(self.root_id) if self.root_id else None

    @property
    def hub(self) -> Node | None:
        return self.nodes.get(self.hub_id) if self.hub_id else None

    @property
    def selected(self) -> Node | None:
        return self.nodes.get(self.selected_id) if self.selected_id else None

    def get(self, node_id: str) -> Node | None:
        return self.nodes.get(node_id)

    def visible_children(self, node: Node) -> list[Node]:
        """Children that are drawn: none when the node is collapsed."""
        if node.collapsed:
            return []
        return [self.nodes[cid] for cid in node.children if cid in self.nodes]

    def iter_visible(self) -> Iterator[Node]:
        """Yield root and every descendant not hidden by a collapsed ancestor.

        Pre-order, children in display order.
        """
        if self.is_empty:
            return
        seen: set[str] = set()
        stack = [self.root_id]
        while stack:
            node_id = stack.pop()
            if node_id in seen:
                continue
            node = self.nodes.get(node_id)
            if node is None:
                continue
            seen.add(node_id)
            yield node
            if not node.collapsed:
                stack.extend(reversed(node.children))

    def visible_nodes(self) -> list[Node]:
        return list(self.iter_visible())

    def visible_ids(self) -> set[str]:
        return {node.id for node in self.iter_visible()}

    # =========================================================================
    # Collapse state
    # =========================================================================

    def toggle_collapse(self, node_id: str) -> bool:
        """Flip the collapsed flag of a node that has children.

        Returns True when the flag changed.
        """
        node = self.nodes.get(node_id)
        if node is None:
            logger.debug(f"toggle_collapse: unknown node {node_id!r}")
            return False
        if not node.has_children:
            return False
        node.collapsed = not node.collapsed
        return True

    def expand_all(self) -> None:
        for node in self.nodes.values():
            node.collapsed = False

    def collapse_all(self) -> None:
        """Collapse every node with children, keeping root and hub open."""
        for node in self.nodes.values():
            if node.children:
                node.collapsed = True
        for node in (self.root, self.hub):
            if node is not None:
                node.collapsed = False

    def is_all_collapsed(self) -> bool:
        """True when every node other than root and hub is a leaf or collapsed."""
        for node in self.nodes.values():
            if node.id == self.root_id or (self.hub_id and node.id == self.hub_id):
                continue
            if node.children and not node.collapsed:
                return False
        return True

    def select(self, node_id: str) -> bool:
        if node_id not in self.nodes:
            logger.debug(f"select: unknown node {node_id!r}")
            return False
        self.selected_id = node_id
        return True
