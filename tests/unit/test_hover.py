"""Unit tests for backlink and tree-edge hover."""

import pytest

from linkmap.backlinks.hover import HoverController
from linkmap.viewer import GraphViewer

# Simple document at 1000x600: r (60,300), h (220,300), a (380,265), b (380,335).
# The a -> b backlink bows left, its apex sits at (360, 297).
ON_BACKLINK = (360.0, 297.0)
ON_TREE_EDGE = (300.0, 282.5)  # midpoint of h -> a
ON_NODE_A = (380.0, 265.0)
EMPTY = (900.0, 50.0)


@pytest.fixture
def calls() -> list[tuple[str, str]]:
    return []


@pytest.fixture
def controller(calls) -> HoverController:
    return HoverController(details_sink=lambda title, note: calls.append((title, note)))


class TestHoverController:
    """Tests for enter/exit effects."""

    def test_enter_backlink(self, viewer: GraphViewer, controller: HoverController, calls) -> None:
        highlight = controller.update(viewer.scene, ON_BACKLINK, ON_BACKLINK)
        assert highlight is not None
        assert highlight.kind == "backlink"
        assert highlight.id == "bl-ab"
        assert calls == [("Link", "A to B")]
        assert controller.tooltip.text == "Link — A to B"
        assert (controller.tooltip.x, controller.tooltip.y) == (372.0, 309.0)

    def test_moving_within_backlink_only_moves_tooltip(
        self, viewer: GraphViewer, controller: HoverController, calls
    ) -> None:
        controller.update(viewer.scene, ON_BACKLINK, ON_BACKLINK)
        controller.update(viewer.scene, ON_BACKLINK, (10.0, 10.0))
        assert calls == [("Link", "A to B")]
        assert (controller.tooltip.x, controller.tooltip.y) == (22.0, 22.0)

    def test_leave_backlink_clears_everything(
        self, viewer: GraphViewer, controller: HoverController, calls
    ) -> None:
        controller.update(viewer.scene, ON_BACKLINK, ON_BACKLINK)
        assert controller.update(viewer.scene, EMPTY, EMPTY) is None
        assert controller.highlight is None
        assert not controller.tooltip.visible
        assert calls[-1] == ("", "")

    def test_tree_edge_uses_child_colour_and_label(
        self, viewer: GraphViewer, controller: HoverController, calls
    ) -> None:
        highlight = controller.update(viewer.scene, ON_TREE_EDGE, ON_TREE_EDGE)
        assert highlight is not None
        assert highlight.kind == "tree"
        assert highlight.id == "h->a"
        assert highlight.color == "var(--lvl2)"
        assert controller.tooltip.text == "A"
        assert calls == []

    def test_leaving_tree_edge_does_not_touch_details(
        self, viewer: GraphViewer, controller: HoverController, calls
    ) -> None:
        controller.update(viewer.scene, ON_TREE_EDGE, ON_TREE_EDGE)
        controller.exit()
        assert calls == []

    def test_switch_from_backlink_to_tree_edge(
        self, viewer: GraphViewer, controller: HoverController, calls
    ) -> None:
        controller.update(viewer.scene, ON_BACKLINK, ON_BACKLINK)
        controller.update(viewer.scene, ON_TREE_EDGE, ON_TREE_EDGE)
        assert calls == [("Link", "A to B"), ("", "")]
        assert controller.highlight.kind == "tree"

    def test_nodes_occlude_edges(self, viewer: GraphViewer, controller: HoverController) -> None:
        assert controller.update(viewer.scene, ON_NODE_A, ON_NODE_A) is None
        assert not controller.tooltip.visible


class TestViewerHover:
    """Hover through the viewer, in screen coordinates."""

    def test_backlink_panel_follows_hover(self, viewer: GraphViewer) -> None:
        tooltip = viewer.on_hover(ON_BACKLINK)
        assert tooltip.visible
        assert viewer.backlink_panel.title == "Link"
        assert viewer.backlink_panel.note == "A to B"
        assert viewer.backlink_panel.title_dim is False

        viewer.on_hover(EMPTY)
        assert viewer.backlink_panel.title == "—"
        assert viewer.backlink_panel.title_dim is True
        assert not viewer.tooltip.visible

    def test_hover_respects_transform(self, viewer: GraphViewer) -> None:
        viewer.transform.translate_to(100.0, 0.0)
        screen = (ON_BACKLINK[0] + 100.0, ON_BACKLINK[1])
        tooltip = viewer.on_hover(screen)
        assert tooltip.text == "Link — A to B"
        assert tooltip.x == screen[0] + 12.0

    def test_hover_exit(self, viewer: GraphViewer) -> None:
        viewer.on_hover(ON_BACKLINK)
        viewer.on_hover_exit()
        assert viewer.hover.highlight is None
        assert viewer.backlink_panel.note_dim is True

    def test_collapse_clears_hover(self, viewer: GraphViewer) -> None:
        viewer.on_hover(ON_BACKLINK)
        viewer.toggle_collapse("h")
        assert viewer.hover.highlight is None
        assert viewer.scene.backlinks == []
