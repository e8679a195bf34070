"""Pytest configuration and fixtures."""

import random
from pathlib import Path

import pytest

from linkmap.config import Settings
from linkmap.graph import GraphStore, normalize_document
from linkmap.models import Node
from linkmap.viewer import GraphViewer

# Test data directory
TEST_FIXTURES_DIR = Path(__file__).parent / "fixtures"
GRAPH_FIXTURE = TEST_FIXTURES_DIR / "graph.json"


def simple_document() -> dict:
    """root r -> hub h -> children a, b (no grandchildren)."""
    return {
        "rootId": "r",
        "hubId": "h",
        "nodes": [
            {"id": "r", "label": "Root", "type": "root", "children": ["h"]},
            {"id": "h", "label": "Hub", "type": "hub", "children": ["a", "b"]},
            {"id": "a", "label": "A"},
            {"id": "b", "label": "B"},
        ],
        "backlinks": [
            {"id": "bl-ab", "from": "a", "to": "b", "bend": 40, "title": "Link", "note": "A to B"},
        ],
    }


def random_store(seed: int, size: int = 30, max_children: int = 4) -> GraphStore:
    """Random tree r -> h -> ... with a random subset of collapsed nodes."""
    rng = random.Random(seed)
    nodes = {
        "r": Node(id="r", type="root", children=["h"]),
        "h": Node(id="h", type="hub", parent_id="r"),
    }
    open_parents = ["h"]
    for i in range(size):
        parent = nodes[rng.choice(open_parents)]
        child = Node(id=f"n{i}", parent_id=parent.id)
        parent.children.append(child.id)
        nodes[child.id] = child
        if len(parent.children) >= max_children:
            open_parents.remove(parent.id)
        open_parents.append(child.id)
    for node in nodes.values():
        if node.children and node.id not in ("r", "h") and rng.random() < 0.3:
            node.collapsed = True
    return GraphStore(nodes=nodes, root_id="r", hub_id="h", selected_id="r")


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with defaults."""
    return Settings(viewport_width=1000.0, viewport_height=600.0)


@pytest.fixture
def simple_doc() -> dict:
    return simple_document()


@pytest.fixture
def simple_store() -> GraphStore:
    """Normalized store for the simple r/h/a/b document."""
    return normalize_document(simple_document())


@pytest.fixture
def viewer() -> GraphViewer:
    """Viewer with a 1000x600 canvas and the simple document loaded."""
    v = GraphViewer(width=1000.0, height=600.0)
    v.load_document(simple_document())
    return v


@pytest.fixture
def graph_fixture_path() -> Path:
    """Path to the sample document on disk."""
    return GRAPH_FIXTURE


@pytest.fixture
def make_random_store():
    """Factory for seeded random trees."""
    return random_store
