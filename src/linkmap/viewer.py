"""Graph viewer - the single owned context for one document and one viewport.

All state (graph store, viewport transform, gesture tracking, hover) lives on
a GraphViewer instance and is mutated only through its methods, which are
meant to be called from one event loop. Document retrieval is the only
suspension point; loads are serialized so at most one is in flight and the
last requested load is the last applied.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from linkmap.backlinks.hover import HoverController, Tooltip
from linkmap.backlinks.router import BacklinkRouter, Point
from linkmap.config import settings
from linkmap.errors import LoadError
from linkmap.gestures import (
    ContactCancel,
    ContactDown,
    ContactMove,
    ContactUp,
    GestureStateMachine,
    WheelEvent,
)
from linkmap.graph import GraphStore, normalize_document
from linkmap.ingestion import DocumentLoader
from linkmap.layout import LayoutEngine, LayoutResult
from linkmap.presentation import BacklinkPanel, NodeDetails, Scene, build_scene
from linkmap.viewport import ViewportTransform

logger = logging.getLogger(__name__)

ErrorSink = Callable[[str], None]


class GraphViewer:
    """Read-only tree + backlink viewer core."""

    def __init__(
        self,
        loader: DocumentLoader | None = None,
        layout_engine: LayoutEngine | None = None,
        router: BacklinkRouter | None = None,
        width: float | None = None,
        height: float | None = None,
        on_error: ErrorSink | None = None,
    ) -> None:
        self.loader = loader or DocumentLoader()
        self.layout_engine = layout_engine or LayoutEngine()
        self.router = router or BacklinkRouter()
        self.on_error = on_error

        self.store = GraphStore.empty()
        self.transform = ViewportTransform.from_settings(width, height)
        self.gestures = GestureStateMachine(self.transform)
        self.hover = HoverController(details_sink=self._set_backlink_panel)
        self.backlink_panel = BacklinkPanel()

        self.last_layout = LayoutResult()
        self.scene = Scene(transform=self.transform.to_svg())
        self._load_lock = asyncio.Lock()

    # =========================================================================
    # Loading
    # =========================================================================

    def load_graph(self, store: GraphStore) -> Scene:
        """Replace the graph atomically, reset the transform, lay out."""
        self.store = store
        self.transform.reset()
        self.hover.exit()
        logger.info(
            f"Loaded graph: {len(store.nodes)} nodes, {len(store.backlinks)} backlinks, "
            f"root={store.root_id!r} hub={store.hub_id!r}"
        )
        return self.layout()

    def load_document(self, data: Any) -> Scene:
        """Normalize a parsed document and load it.

        Raises:
            LoadError: if the document has no resolvable rootId
        """
        return self.load_graph(normalize_document(data))

    async def load(self, location: str | None = None) -> bool:
        """Retrieve, normalize and load a document.

        On failure the current graph is kept, the error is reported once to
        `on_error`, and False is returned.
        """
        async with self._load_lock:
            wanted = location or settings.data_location
            logger.info(f"Loading document from {wanted}")
            try:
                store = await self.loader.load(wanted)
            except LoadError as e:
                logger.error(f"Load failed for {wanted}: {e}")
                if self.on_error:
                    self.on_error(f"Could not load data.\nReason: {e}")
                return False
            self.load_graph(store)
            return True

    @property
    def is_loading(self) -> bool:
        return self._load_lock.locked()

    # =========================================================================
    # Layout
    # =========================================================================

    def layout(self) -> Scene:
        """Full layout pass; returns the drawable scene."""
        self.last_layout = self.layout_engine.layout(self.store, self.transform.height)
        self.scene = build_scene(self.store, self.transform, self.router)
        if self.hover.highlight is not None:
            self.hover.exit()
        return self.scene

    def fit(self) -> Scene:
        return self.layout()

    def resize(self, width: float, height: float) -> Scene:
        self.transform.resize(width, height)
        return self.layout()

    # =========================================================================
    # Collapse + selection
    # =========================================================================

    def toggle_collapse(self, node_id: str) -> Scene:
        if self.store.toggle_collapse(node_id):
            return self.layout()
        return self.scene

    def expand_all(self) -> Scene:
        self.store.expand_all()
        return self.layout()

    def collapse_all(self) -> Scene:
        self.store.collapse_all()
        return self.layout()

    def is_all_collapsed(self) -> bool:
        return self.store.is_all_collapsed()

    def toggle_all(self) -> Scene:
        """Global expand/collapse button."""
        if self.is_all_collapsed():
            return self.expand_all()
        return self.collapse_all()

    @property
    def global_toggle_label(self) -> str:
        return "Expand All" if self.is_all_collapsed() else "Collapse All"

    def select(self, node_id: str) -> bool:
        return self.store.select(node_id)

    def click_node(self, node_id: str) -> Scene:
        """Node click: select it and toggle it when it has children."""
        if not self.store.select(node_id):
            return self.scene
        self.store.toggle_collapse(node_id)
        return self.layout()

    @property
    def details(self) -> NodeDetails:
        return NodeDetails.for_node(self.store.selected)

    # =========================================================================
    # Zoom + pan
    # =========================================================================

    def zoom_at(self, point: Point, factor: float) -> None:
        self.transform.zoom_at(point, factor)
        self._sync_transform()

    def zoom_by(self, factor: float) -> None:
        self.transform.zoom_by(factor)
        self._sync_transform()

    def zoom_in(self) -> None:
        self.zoom_by(settings.zoom_button_factor)

    def zoom_out(self) -> None:
        self.zoom_by(1 / settings.zoom_button_factor)

    def reset_zoom(self) -> None:
        self.transform.reset()
        self._sync_transform()

    # =========================================================================
    # Input intake
    # =========================================================================

    def on_contact_down(self, event: ContactDown) -> None:
        self.gestures.on_contact_down(event)
        self._sync_transform()

    def on_contact_move(self, event: ContactMove) -> None:
        self.gestures.on_contact_move(event)
        self._sync_transform()

    def on_contact_up(self, event: ContactUp) -> None:
        self.gestures.on_contact_up(event)

    def on_contact_cancel(self, event: ContactCancel) -> None:
        self.gestures.on_contact_cancel(event)

    def on_wheel(self, event: WheelEvent) -> None:
        self.gestures.on_wheel(event)
        self._sync_transform()

    def on_hover(self, screen_point: Point) -> Tooltip:
        """Pointer moved over the canvas (screen coordinates)."""
        world_point = self.transform.screen_to_world(screen_point)
        self.hover.update(self.scene, world_point, screen_point)
        return self.hover.tooltip

    def on_hover_exit(self) -> None:
        self.hover.exit()

    @property
    def tooltip(self) -> Tooltip:
        return self.hover.tooltip

    # =========================================================================
    # Internals
    # =========================================================================

    def _sync_transform(self) -> None:
        self.scene.transform = self.transform.to_svg()

    def _set_backlink_panel(self, title: str, note: str) -> None:
        self.backlink_panel = BacklinkPanel.from_text(title, note)
