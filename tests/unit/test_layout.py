"""Unit tests for the tree layout engine."""

import pytest

from linkmap.graph import GraphStore, normalize_document
from linkmap.layout import LayoutEngine, LayoutResult

DX = 160.0
DY = 70.0
HEIGHT = 600.0


@pytest.fixture
def engine() -> LayoutEngine:
    return LayoutEngine(dx=DX, dy=DY, margin_left=60.0)


class TestLayoutScenarios:
    """Concrete placements."""

    def test_root_and_hub_positions(self, engine: LayoutEngine, simple_store: GraphStore) -> None:
        result = engine.layout(simple_store, HEIGHT)
        assert result.position("r") == (60.0, 300.0)
        assert result.position("h") == (220.0, 300.0)

    def test_two_leaves_centered_on_hub(self, engine: LayoutEngine, simple_store: GraphStore) -> None:
        result = engine.layout(simple_store, HEIGHT)
        a = simple_store.nodes["a"]
        b = simple_store.nodes["b"]
        assert (a.x, a.y) == (380.0, 265.0)
        assert (b.x, b.y) == (380.0, 335.0)
        assert result.spans["a"] == (265.0, 265.0)
        assert result.spans["b"] == (335.0, 335.0)
        assert (a.y + b.y) / 2 == simple_store.nodes["h"].y

    def test_depths(self, engine: LayoutEngine, simple_store: GraphStore) -> None:
        result = engine.layout(simple_store, HEIGHT)
        assert result.depths == {"r": 0, "h": 1, "a": 2, "b": 2}
        assert simple_store.nodes["b"].depth == 2

    def test_collapsed_hub_hides_children(self, engine: LayoutEngine, simple_store: GraphStore) -> None:
        simple_store.toggle_collapse("h")
        result = engine.layout(simple_store, HEIGHT)
        assert set(result.positions) == {"r", "h"}
        assert result.weights["h"] == 1

    def test_weighted_spans(self, engine: LayoutEngine) -> None:
        store = normalize_document({
            "rootId": "r",
            "hubId": "h",
            "nodes": [
                {"id": "r", "children": ["h"]},
                {"id": "h", "children": ["a", "b"]},
                {"id": "a", "children": ["a1", "a2", "a3"]},
                {"id": "a1"}, {"id": "a2"}, {"id": "a3"},
                {"id": "b"},
            ],
        })
        result = engine.layout(store, HEIGHT)
        assert result.weights["a"] == 3
        assert result.weights["h"] == 4
        # Block of 4 rows centered on 300: a covers rows 0-2, b row 3
        assert result.spans["a"] == (195.0, 335.0)
        assert result.spans["b"] == (405.0, 405.0)
        assert store.nodes["a"].y == 265.0
        assert [store.nodes[c].y for c in ("a1", "a2", "a3")] == [195.0, 265.0, 335.0]

    def test_collapse_caps_weight(self, engine: LayoutEngine) -> None:
        store = normalize_document({
            "rootId": "r",
            "hubId": "h",
            "nodes": [
                {"id": "r", "children": ["h"]},
                {"id": "h", "children": ["a", "b"]},
                {"id": "a", "children": ["a1", "a2", "a3"], "collapsed": True},
                {"id": "a1"}, {"id": "a2"}, {"id": "a3"},
                {"id": "b"},
            ],
        })
        result = engine.layout(store, HEIGHT)
        assert result.weights["a"] == 1
        assert "a1" not in result.positions
        assert store.nodes["a"].y == 265.0
        assert store.nodes["b"].y == 335.0

    def test_without_hub_only_root_is_placed(self, engine: LayoutEngine) -> None:
        store = normalize_document({
            "rootId": "r",
            "nodes": [{"id": "r", "children": ["a"]}, {"id": "a"}],
        })
        result = engine.layout(store, HEIGHT)
        assert set(result.positions) == {"r"}
        assert result.depths["a"] == 1

    def test_empty_store(self, engine: LayoutEngine) -> None:
        result = engine.layout(GraphStore.empty(), HEIGHT)
        assert result == LayoutResult()

    def test_relayout_is_deterministic(self, engine: LayoutEngine, simple_store: GraphStore) -> None:
        first = engine.layout(simple_store, HEIGHT)
        second = engine.layout(simple_store, HEIGHT)
        assert first.positions == second.positions

    def test_zero_steps_kept(self, simple_store: GraphStore) -> None:
        engine = LayoutEngine(dx=0.0, dy=0.0, margin_left=60.0)
        engine.layout(simple_store, HEIGHT)
        assert {(n.x, n.y) for n in simple_store.nodes.values()} == {(60.0, 300.0)}


class TestLayoutProperties:
    """Span properties over random trees."""

    @pytest.mark.parametrize("seed", range(12))
    def test_spans_stack_without_overlap(
        self, engine: LayoutEngine, make_random_store, seed: int
    ) -> None:
        store = make_random_store(seed)
        result = engine.layout(store, HEIGHT)

        for parent in store.visible_nodes():
            kids = store.visible_children(parent)
            if parent.id == store.root_id or not kids:
                continue
            spans = [result.spans[c.id] for c in kids]

            # extent of the stacked block
            extent = spans[-1][1] - spans[0][0]
            assert extent == pytest.approx((result.weights[parent.id] - 1) * DY)
            # block centered on the parent
            assert (spans[0][0] + spans[-1][1]) / 2 == pytest.approx(parent.y)
            # siblings separated by exactly one row
            for upper, lower in zip(spans, spans[1:]):
                assert lower[0] - upper[1] == pytest.approx(DY)

            for child, (top, bottom) in zip(kids, spans):
                assert bottom - top == pytest.approx((result.weights[child.id] - 1) * DY)
                assert child.y == pytest.approx((top + bottom) / 2)
                assert child.x == pytest.approx(parent.x + DX)

    @pytest.mark.parametrize("seed", range(6))
    def test_every_visible_node_is_placed(
        self, engine: LayoutEngine, make_random_store, seed: int
    ) -> None:
        store = make_random_store(seed)
        result = engine.layout(store, HEIGHT)
        assert set(result.positions) == store.visible_ids()

    @pytest.mark.parametrize("seed", range(6))
    def test_leaf_weights(self, engine: LayoutEngine, make_random_store, seed: int) -> None:
        store = make_random_store(seed)
        result = engine.layout(store, HEIGHT)
        for node in store.visible_nodes():
            kids = store.visible_children(node)
            if kids:
                assert result.weights[node.id] == sum(result.weights[c.id] for c in kids)
            else:
                assert result.weights[node.id] == 1
