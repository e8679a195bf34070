"""Backlink curve routing.

Each visible backlink becomes a quadratic Bezier:
- start/end are pulled back from the node centers by radius + pad (and the
  arrowhead length at the target end), so the stroke never touches a shape
- the single control point sits on the perpendicular through the midpoint of
  start/end, `bend` units away, bowing the curve off the parent-child edges
- a wider invisible hit path shares the same geometry for hover detection
"""

import logging
import math
from dataclasses import dataclass, field

from linkmap.config import settings
from linkmap.graph.store import GraphStore
from linkmap.models import Backlink, Node, radius_for

logger = logging.getLogger(__name__)

Point = tuple[float, float]

LABEL_HEIGHT = 18.0
LABEL_MIN_WIDTH = 30.0
LABEL_CHAR_WIDTH = 7.5
LABEL_PADDING = 12.0


def offset_point(origin: Point, toward: Point, dist: float) -> Point:
    """Point `dist` units from `origin` in the direction of `toward`."""
    dx = toward[0] - origin[0]
    dy = toward[1] - origin[1]
    length = math.hypot(dx, dy) or 1.0
    return (origin[0] + dx / length * dist, origin[1] + dy / length * dist)


def quadratic_point(start: Point, control: Point, end: Point, t: float) -> Point:
    u = 1 - t
    return (
        u * u * start[0] + 2 * u * t * control[0] + t * t * end[0],
        u * u * start[1] + 2 * u * t * control[1] + t * t * end[1],
    )


def segment_distance(point: Point, a: Point, b: Point) -> float:
    """Shortest distance from `point` to the segment a-b."""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return math.hypot(point[0] - a[0], point[1] - a[1])
    t = ((point[0] - a[0]) * dx + (point[1] - a[1]) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    px = a[0] + t * dx
    py = a[1] + t * dy
    return math.hypot(point[0] - px, point[1] - py)


@dataclass
class LabelBubble:
    """Title bubble centered on the control point."""

    text: str
    x: float  # center
    y: float
    width: float
    height: float = LABEL_HEIGHT

    @classmethod
    def for_title(cls, title: str, center: Point) -> "LabelBubble | None":
        text = title.strip() if title else ""
        if not text:
            return None
        width = max(LABEL_MIN_WIDTH, LABEL_CHAR_WIDTH * len(text) + LABEL_PADDING)
        return cls(text=text, x=center[0], y=center[1], width=width)

    def contains(self, point: Point) -> bool:
        return (
            abs(point[0] - self.x) <= self.width / 2
            and abs(point[1] - self.y) <= self.height / 2
        )

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "x": self.x - self.width / 2,
            "y": self.y - self.height / 2,
            "width": self.width,
            "height": self.height,
        }


@dataclass
class BacklinkGeometry:
    """Drawable geometry and hover region of one backlink."""

    backlink: Backlink
    start: Point
    control: Point
    end: Point
    hit_width: float
    label: LabelBubble | None = None
    polyline: list[Point] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.backlink.id

    @property
    def path(self) -> str:
        """SVG path data shared by the stroke and the hit path."""
        return (
            f"M {self.start[0]} {self.start[1]} "
            f"Q {self.control[0]} {self.control[1]} {self.end[0]} {self.end[1]}"
        )

    def hit_test(self, point: Point) -> bool:
        """True when `point` (world space) is on the hit path or the label."""
        if self.label is not None and self.label.contains(point):
            return True
        half = self.hit_width / 2
        pts = self.polyline
        return any(segment_distance(point, a, b) <= half for a, b in zip(pts, pts[1:]))

    def to_dict(self) -> dict:
        return {
            "id": self.backlink.id,
            "from": self.backlink.source,
            "to": self.backlink.target,
            "path": self.path,
            "start": list(self.start),
            "control": list(self.control),
            "end": list(self.end),
            "color": self.backlink.color,
            "dasharray": self.backlink.dasharray,
            "hitWidth": self.hit_width,
            "title": self.backlink.title,
            "note": self.backlink.note,
            "label": self.label.to_dict() if self.label else None,
        }


class BacklinkRouter:
    """Computes curve geometry for backlinks between visible nodes."""

    def __init__(
        self,
        arrow_length: float | None = None,
        hit_width: float | None = None,
        samples: int | None = None,
    ) -> None:
        self.arrow_length = arrow_length if arrow_length is not None else settings.backlink_arrow_length
        self.hit_width = hit_width if hit_width is not None else settings.backlink_hit_width
        self.samples = max(1, samples if samples is not None else settings.hover_samples)

    def route(self, backlink: Backlink, source: Node, target: Node) -> BacklinkGeometry:
        """Route one backlink between two placed nodes."""
        src = (source.x, source.y)
        tgt = (target.x, target.y)

        start = offset_point(src, tgt, radius_for(source) + backlink.pad)
        end = offset_point(tgt, src, radius_for(target) + backlink.pad + self.arrow_length)

        mid = ((start[0] + end[0]) / 2, (start[1] + end[1]) / 2)
        dx = end[0] - start[0]
        dy = end[1] - start[1]
        length = math.hypot(dx, dy) or 1.0
        normal = (-dy / length, dx / length)
        control = (mid[0] + normal[0] * backlink.bend, mid[1] + normal[1] * backlink.bend)

        polyline = [
            quadratic_point(start, control, end, i / self.samples)
            for i in range(self.samples + 1)
        ]
        return BacklinkGeometry(
            backlink=backlink,
            start=start,
            control=control,
            end=end,
            hit_width=self.hit_width,
            label=LabelBubble.for_title(backlink.title, control),
            polyline=polyline,
        )

    def route_all(self, store: GraphStore, visible_ids: set[str]) -> list[BacklinkGeometry]:
        """Route every backlink whose endpoints are both visible, in document order."""
        routed: list[BacklinkGeometry] = []
        for backlink in store.backlinks:
            if backlink.source not in visible_ids or backlink.target not in visible_ids:
                continue
            source = store.get(backlink.source)
            target = store.get(backlink.target)
            if source is None or target is None:
                continue
            routed.append(self.route(backlink, source, target))
        logger.debug(f"Routed {len(routed)}/{len(store.backlinks)} backlinks")
        return routed
