"""Graph store and document normalization.

Provides:
- GraphStore: node arena, visible set, collapse state
- normalize_document: raw document -> GraphStore with repaired hierarchy
"""

from linkmap.graph.normalizer import (
    GraphDocument,
    normalize_backlink,
    normalize_document,
    normalize_nodes,
    repair_hierarchy,
)
from linkmap.graph.store import GraphStore

__all__ = [
    "GraphStore",
    "GraphDocument",
    "normalize_document",
    "normalize_nodes",
    "normalize_backlink",
    "repair_hierarchy",
]
