"""Typed pointer/contact events fed to the gesture state machine."""

from dataclasses import dataclass
from enum import Enum


class PointerKind(str, Enum):
    """Input device that produced a contact."""

    MOUSE = "mouse"
    TOUCH = "touch"
    PEN = "pen"


class HitTarget(str, Enum):
    """What the contact landed on."""

    BACKGROUND = "background"  # Empty canvas
    NODE = "node"
    OTHER = "other"  # Edges, labels and other drawn shapes


@dataclass(frozen=True)
class ContactDown:
    contact_id: int
    x: float
    y: float
    kind: PointerKind = PointerKind.MOUSE
    target: HitTarget = HitTarget.BACKGROUND
    button: int = 0  # 0 = primary

    @property
    def point(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class ContactMove:
    contact_id: int
    x: float
    y: float

    @property
    def point(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class ContactUp:
    contact_id: int


@dataclass(frozen=True)
class ContactCancel:
    contact_id: int


@dataclass(frozen=True)
class WheelEvent:
    x: float
    y: float
    delta_y: float  # Negative scrolls up (zoom in)

    @property
    def point(self) -> tuple[float, float]:
        return (self.x, self.y)


ContactEvent = ContactDown | ContactMove | ContactUp | ContactCancel
