"""Zoom and pan."""

from linkmap.viewport.transform import Point, ViewportTransform, clamp

__all__ = ["ViewportTransform", "Point", "clamp"]
