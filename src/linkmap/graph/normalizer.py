"""Document normalizer.

Turns a raw viewer document (parsed JSON) into a consistent GraphStore:
- applies field defaults
- recomputes parent references from the children lists
- drops dangling references, cycles and malformed backlinks
- rejects documents without a resolvable rootId
"""

from __future__ import annotations

import logging
import math
import secrets
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from linkmap.config import settings
from linkmap.errors import LoadError
from linkmap.graph.store import GraphStore
from linkmap.models import Backlink, Node

logger = logging.getLogger(__name__)

# Accepted names for the backlink collection, first present wins
BACKLINK_KEYS = ("backlinks", "backLinks", "relations", "edges")

NODE_TYPES = {"root", "hub", "child"}
NODE_SHAPES = {"circle", "rect", "triangle"}
BACKLINK_STYLES = {"solid", "dotted", "dashed"}


# ============================================================================
# Document schema
# ============================================================================


def _number_or_none(value: Any) -> float | None:
    # bool is an int subclass but never a size
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


class NodeRecord(BaseModel):
    """One node as it appears in a document."""

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    label: Any = None
    content: Any = None
    type: Any = None
    parentId: Any = None
    children: Any = None
    collapsed: Any = False
    shape: Any = None
    w: Any = None
    h: Any = None
    fill: Any = None
    stroke: Any = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str | None:
        if value is None or value == "":
            return None
        return str(value)

    def to_node(self) -> Node:
        children = self.children if isinstance(self.children, list) else []
        return Node(
            id=self.id or "",
            label=str(self.label) if self.label is not None else "node",
            content=str(self.content) if self.content is not None else "",
            type=self.type if self.type in NODE_TYPES else "child",
            parent_id=None,
            children=[str(cid) for cid in children if cid is not None],
            collapsed=bool(self.collapsed),
            shape=self.shape if self.shape in NODE_SHAPES else "circle",
            w=_number_or_none(self.w),
            h=_number_or_none(self.h),
            fill=str(self.fill) if self.fill else None,
            stroke=str(self.stroke) if self.stroke else settings.node_stroke,
        )


class BacklinkRecord(BaseModel):
    """One backlink as it appears in a document (from/to or source/target)."""

    model_config = ConfigDict(extra="allow")

    id: Any = None
    from_: Any = None
    to: Any = None
    source: Any = None
    target: Any = None
    style: Any = None
    color: Any = None
    bend: Any = None
    pad: Any = None
    title: Any = None
    note: Any = None

    @classmethod
    def parse(cls, raw: dict) -> BacklinkRecord:
        data = dict(raw)
        if "from" in data:
            data["from_"] = data.pop("from")
        return cls.model_validate(data)

    @property
    def endpoints(self) -> tuple[str | None, str | None]:
        source = self.from_ if self.from_ is not None else self.source
        target = self.to if self.to is not None else self.target
        return (
            str(source) if source not in (None, "") else None,
            str(target) if target not in (None, "") else None,
        )


class GraphDocument(BaseModel):
    """Top-level viewer document."""

    model_config = ConfigDict(extra="allow")

    rootId: str | None = None
    hubId: str | None = None
    selectedId: str | None = None
    nodes: list | dict = []

    @field_validator("rootId", "hubId", "selectedId", mode="before")
    @classmethod
    def _coerce_ref(cls, value: Any) -> str | None:
        if value is None or value == "":
            return None
        return str(value)

    @field_validator("nodes", mode="before")
    @classmethod
    def _coerce_nodes(cls, value: Any) -> list | dict:
        if isinstance(value, (list, dict)):
            return value
        return []

    def raw_backlinks(self) -> list:
        extra = self.model_extra or {}
        for key in BACKLINK_KEYS:
            value = extra.get(key)
            if isinstance(value, list):
                return value
            if value:
                return []
        return []


# ============================================================================
# Normalization
# ============================================================================


def generate_backlink_id() -> str:
    """Generate a short random backlink id."""
    return f"bl-{secrets.token_hex(4)[:7]}"


def normalize_nodes(raw_nodes: list | dict) -> dict[str, Node]:
    """Build the node arena, dropping records without an id."""
    if isinstance(raw_nodes, dict):
        items = list(raw_nodes.values())
    else:
        items = raw_nodes

    nodes: dict[str, Node] = {}
    for raw in items:
        if not isinstance(raw, dict):
            continue
        try:
            record = NodeRecord.model_validate(raw)
        except ValidationError as e:
            logger.debug(f"Dropping malformed node record: {e}")
            continue
        if not record.id:
            continue
        nodes[record.id] = record.to_node()
    return nodes


def repair_hierarchy(nodes: dict[str, Node], root_id: str) -> int:
    """Recompute parent references from children lists.

    Each child belongs to the first parent that claims it, walking depth-first
    from the root and then over unreachable nodes in document order. Dangling
    ids, edges to the root, repeated claims and cycle-closing edges are
    dropped. Returns the number of dropped child entries.
    """
    for node in nodes.values():
        node.parent_id = None

    claimed: set[str] = {root_id}
    dropped = 0

    def claim_children(start_id: str) -> None:
        nonlocal dropped
        stack = [start_id]
        while stack:
            node = nodes[stack.pop()]
            kept: list[str] = []
            for cid in node.children:
                if cid not in nodes or cid in claimed:
                    logger.debug(f"Dropping child edge {node.id!r} -> {cid!r}")
                    dropped += 1
                    continue
                claimed.add(cid)
                nodes[cid].parent_id = node.id
                kept.append(cid)
            node.children = kept
            stack.extend(reversed(kept))

    claim_children(root_id)
    for node_id in nodes:
        if node_id not in claimed:
            claimed.add(node_id)
            claim_children(node_id)
    return dropped


def normalize_backlink(raw: Any, nodes: dict[str, Node]) -> Backlink | None:
    """Normalize one backlink, or None when it must be dropped."""
    if not isinstance(raw, dict):
        return None
    try:
        record = BacklinkRecord.parse(raw)
    except ValidationError:
        return None

    source, target = record.endpoints
    if not source or not target or source == target:
        return None
    if source not in nodes or target not in nodes:
        return None

    bend = _number_or_none(record.bend)
    pad = _number_or_none(record.pad)
    return Backlink(
        id=str(record.id) if record.id else generate_backlink_id(),
        source=source,
        target=target,
        style=record.style if record.style in BACKLINK_STYLES else settings.backlink_style,
        color=str(record.color) if record.color else settings.backlink_color,
        bend=bend if bend is not None else settings.backlink_bend,
        pad=pad if pad is not None else settings.backlink_pad,
        title=record.title if isinstance(record.title, str) else "",
        note=record.note if isinstance(record.note, str) else "",
    )


def normalize_document(data: Any) -> GraphStore:
    """Normalize a parsed document into a new GraphStore.

    Raises:
        LoadError: if the document is not an object or lacks a resolvable rootId
    """
    if not isinstance(data, dict):
        raise LoadError("Document must be a JSON object.")
    try:
        document = GraphDocument.model_validate(data)
    except ValidationError as e:
        raise LoadError(f"Malformed document: {e}") from e

    nodes = normalize_nodes(document.nodes)
    if not document.rootId or document.rootId not in nodes:
        raise LoadError("JSON missing a valid rootId present in nodes.")

    dropped = repair_hierarchy(nodes, document.rootId)

    raw_backlinks = document.raw_backlinks()
    backlinks = [
        b for b in (normalize_backlink(raw, nodes) for raw in raw_backlinks) if b is not None
    ]

    hub_id = document.hubId if document.hubId in nodes else None
    selected_id = document.selectedId if document.selectedId in nodes else document.rootId

    logger.info(
        f"Normalized document: {len(nodes)} nodes, {len(backlinks)} backlinks "
        f"({dropped} child edges, {len(raw_backlinks) - len(backlinks)} backlinks dropped)"
    )

    return GraphStore(
        nodes=nodes,
        root_id=document.rootId,
        hub_id=hub_id,
        selected_id=selected_id,
        backlinks=backlinks,
    )
