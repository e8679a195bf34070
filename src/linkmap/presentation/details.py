"""Details panel view models."""

from dataclasses import dataclass

from linkmap.models import Node

NO_SELECTION = "–"
EMPTY_VALUE = "—"

PANEL_TITLES = {
    "root": "Structure Details",
    "hub": "Hub Node",
    "child": "Child Node",
}


@dataclass(frozen=True)
class NodeDetails:
    """Selected-node panel."""

    title: str
    name: str
    type: str
    children: str
    state: str
    content: str

    @classmethod
    def empty(cls) -> "NodeDetails":
        return cls(
            title="Node Details",
            name=NO_SELECTION,
            type=NO_SELECTION,
            children=NO_SELECTION,
            state=NO_SELECTION,
            content=NO_SELECTION,
        )

    @classmethod
    def for_node(cls, node: Node | None) -> "NodeDetails":
        if node is None:
            return cls.empty()
        return cls(
            title=PANEL_TITLES.get(node.type, "Child Node"),
            name=node.label or EMPTY_VALUE,
            type=f"{node.type} (depth {node.depth})",
            children=str(len(node.children)),
            state=node.state_label,
            content=node.content or EMPTY_VALUE,
        )


@dataclass(frozen=True)
class BacklinkPanel:
    """Hovered-backlink panel; blank fields render dimmed."""

    title: str = EMPTY_VALUE
    note: str = EMPTY_VALUE
    title_dim: bool = True
    note_dim: bool = True

    @classmethod
    def from_text(cls, title: str, note: str) -> "BacklinkPanel":
        title = (title or "").strip()
        note = (note or "").strip()
        return cls(
            title=title or EMPTY_VALUE,
            note=note or EMPTY_VALUE,
            title_dim=not title,
            note_dim=not note,
        )
