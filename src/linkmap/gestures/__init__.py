"""Pointer and touch gesture handling."""

from linkmap.gestures.events import (
    ContactCancel,
    ContactDown,
    ContactEvent,
    ContactMove,
    ContactUp,
    HitTarget,
    PointerKind,
    WheelEvent,
)
from linkmap.gestures.machine import GestureState, GestureStateMachine

__all__ = [
    "GestureState",
    "GestureStateMachine",
    "ContactDown",
    "ContactMove",
    "ContactUp",
    "ContactCancel",
    "ContactEvent",
    "WheelEvent",
    "PointerKind",
    "HitTarget",
]
