"""Viewport transform - scale and translate between world and screen space.

Screen coordinates are relative to the canvas origin (top-left corner).
"""

from dataclasses import dataclass

from linkmap.config import settings

Point = tuple[float, float]


def clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


@dataclass
class ViewportTransform:
    """Affine world -> screen mapping `screen = world * k + t`.

    Scale is kept inside [min_scale, max_scale] by every operation.
    """

    width: float = 0.0
    height: float = 0.0
    k: float = 1.0
    tx: float = 0.0
    ty: float = 0.0
    min_scale: float = 0.4
    max_scale: float = 3.0

    @classmethod
    def from_settings(cls, width: float | None = None, height: float | None = None) -> "ViewportTransform":
        return cls(
            width=width if width is not None else settings.viewport_width,
            height=height if height is not None else settings.viewport_height,
            min_scale=settings.zoom_min,
            max_scale=settings.zoom_max,
        )

    @property
    def center(self) -> Point:
        return (self.width / 2, self.height / 2)

    @property
    def translate(self) -> Point:
        return (self.tx, self.ty)

    def world_to_screen(self, point: Point) -> Point:
        x, y = point
        return (x * self.k + self.tx, y * self.k + self.ty)

    def screen_to_world(self, point: Point) -> Point:
        x, y = point
        return ((x - self.tx) / self.k, (y - self.ty) / self.k)

    def zoom_at(self, point: Point, factor: float) -> None:
        """Scale by `factor` keeping the world point under `point` fixed on screen."""
        world_x, world_y = self.screen_to_world(point)
        self.k = clamp(self.k * factor, self.min_scale, self.max_scale)
        self.tx = point[0] - world_x * self.k
        self.ty = point[1] - world_y * self.k

    def zoom_by(self, factor: float) -> None:
        """Zoom anchored at the viewport center."""
        self.zoom_at(self.center, factor)

    def reset(self) -> None:
        self.k = 1.0
        self.tx = 0.0
        self.ty = 0.0

    def pan(self, dx: float, dy: float) -> None:
        """Pure translate, independent of scale."""
        self.tx += dx
        self.ty += dy

    def translate_to(self, tx: float, ty: float) -> None:
        self.tx = tx
        self.ty = ty

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height

    def to_svg(self) -> str:
        """Transform attribute for the viewport group."""
        return f"translate({self.tx},{self.ty}) scale({self.k})"

    def to_dict(self) -> dict:
        return {"k": self.k, "tx": self.tx, "ty": self.ty}
