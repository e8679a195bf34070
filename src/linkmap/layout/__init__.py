"""Tree layout."""

from linkmap.layout.engine import LayoutEngine, LayoutResult

__all__ = ["LayoutEngine", "LayoutResult"]
