"""Hover handling for backlinks and tree edges.

Entering a backlink's hit path or label bubble highlights its stroke, pushes
(title, note) to the details sink, and shows a tooltip that follows the
pointer. Leaving reverses all three. Tree edges get a highlight in the
child's colour and a tooltip with the child's label.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from linkmap.backlinks.router import BacklinkGeometry, Point
from linkmap.presentation.scene import Scene, TreeEdge

logger = logging.getLogger(__name__)

TOOLTIP_OFFSET = 12.0


class DetailsSink(Protocol):
    """Receives the hovered backlink's title and note ("" when cleared)."""

    def __call__(self, title: str, note: str) -> None: ...


@dataclass(frozen=True)
class Tooltip:
    text: str = ""
    x: float = 0.0
    y: float = 0.0

    @property
    def visible(self) -> bool:
        return bool(self.text)


@dataclass(frozen=True)
class Highlight:
    """A highlighted stroke; `color` overrides the stroke for tree edges."""

    kind: str  # "backlink" or "tree"
    id: str
    color: str | None = None


class HoverController:
    """Tracks which edge is under the pointer and the resulting UI effects."""

    def __init__(self, details_sink: DetailsSink | None = None) -> None:
        self.details_sink = details_sink
        self.highlight: Highlight | None = None
        self.tooltip = Tooltip()

    def update(self, scene: Scene, world_point: Point, screen_point: Point) -> Highlight | None:
        """Hit-test `world_point` and apply enter/move/exit effects."""
        target = self.hit_test(scene, world_point)
        current = self.highlight

        if target is None:
            if current is not None:
                self.exit()
            return None

        key = self._highlight_for(target)
        if current is None or (current.kind, current.id) != (key.kind, key.id):
            if current is not None:
                self.exit()
            self._enter(target, key)
        self._show_tooltip(self._tooltip_text(target), screen_point)
        return self.highlight

    def exit(self) -> None:
        """Pointer left the hovered edge (or the canvas)."""
        previous = self.highlight
        self.highlight = None
        self.tooltip = Tooltip()
        if previous is not None and previous.kind == "backlink" and self.details_sink:
            self.details_sink("", "")

    def hit_test(self, scene: Scene, point: Point) -> BacklinkGeometry | TreeEdge | None:
        """Topmost hoverable edge at `point`; nodes occlude edges beneath them."""
        if scene.node_at(point) is not None:
            return None
        for edge in reversed(scene.tree_edges):
            if edge.hit_test(point):
                return edge
        for geometry in reversed(scene.backlinks):
            if geometry.hit_test(point):
                return geometry
        return None

    def _enter(self, target: BacklinkGeometry | TreeEdge, key: Highlight) -> None:
        self.highlight = key
        if isinstance(target, BacklinkGeometry):
            logger.debug(f"Hover enter backlink {target.id}")
            if self.details_sink:
                self.details_sink(target.backlink.title or "", target.backlink.note or "")

    def _highlight_for(self, target: BacklinkGeometry | TreeEdge) -> Highlight:
        if isinstance(target, BacklinkGeometry):
            return Highlight(kind="backlink", id=target.id)
        return Highlight(kind="tree", id=target.id, color=target.hover_color)

    def _tooltip_text(self, target: BacklinkGeometry | TreeEdge) -> str:
        if isinstance(target, BacklinkGeometry):
            return target.backlink.tooltip_text
        return target.tooltip

    def _show_tooltip(self, text: str, screen_point: Point) -> None:
        text = text.strip() if text else ""
        if not text:
            self.tooltip = Tooltip()
            return
        self.tooltip = Tooltip(
            text=text,
            x=screen_point[0] + TOOLTIP_OFFSET,
            y=screen_point[1] + TOOLTIP_OFFSET,
        )
