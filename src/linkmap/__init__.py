"""linkmap - layout and interaction core for a read-only tree viewer with backlinks."""

from linkmap.errors import LoadError
from linkmap.viewer import GraphViewer

__version__ = "0.1.0"

__all__ = ["GraphViewer", "LoadError", "__version__"]
