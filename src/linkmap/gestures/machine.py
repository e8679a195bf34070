"""Gesture state machine: pan vs pinch-zoom from raw contacts.

States:
    IDLE      no gesture in progress (contacts may still be tracked)
    PANNING   one contact drags the view from a fixed starting translate
    PINCHING  two touch contacts zoom around their midpoint

Node clicks never reach this machine: the presentation layer claims them
first. Mouse and pen contacts start a pan only on the empty background with
the primary button; touch contacts are accepted on any target.
"""

import logging
import math
from enum import Enum

from linkmap.config import settings
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
from linkmap.viewport.transform import Point, ViewportTransform, clamp

logger = logging.getLogger(__name__)


class GestureState(str, Enum):
    IDLE = "idle"
    PANNING = "panning"
    PINCHING = "pinching"


# (from, to) pairs the machine may take
TRANSITIONS: frozenset[tuple[GestureState, GestureState]] = frozenset({
    (GestureState.IDLE, GestureState.PANNING),
    (GestureState.IDLE, GestureState.PINCHING),  # second touch after a pinch ended with one finger down
    (GestureState.PANNING, GestureState.PINCHING),
    (GestureState.PANNING, GestureState.IDLE),
    (GestureState.PINCHING, GestureState.IDLE),
})


def distance(a: Point, b: Point) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def midpoint(a: Point, b: Point) -> Point:
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)


class GestureStateMachine:
    """Drives a ViewportTransform from contact events."""

    def __init__(
        self,
        transform: ViewportTransform,
        pinch_min: float | None = None,
        pinch_max: float | None = None,
        wheel_factor: float | None = None,
    ) -> None:
        self.transform = transform
        self.pinch_min = pinch_min if pinch_min is not None else settings.pinch_factor_min
        self.pinch_max = pinch_max if pinch_max is not None else settings.pinch_factor_max
        self.wheel_factor = wheel_factor if wheel_factor is not None else settings.zoom_wheel_factor

        self.state = GestureState.IDLE
        self.contacts: dict[int, Point] = {}  # insertion order = arrival order

        self._pan_contact: int | None = None
        self._pan_origin: Point = (0.0, 0.0)
        self._pan_start_translate: Point = (0.0, 0.0)
        self._last_distance = 1.0

        self._handlers = {
            ContactDown: self.on_contact_down,
            ContactMove: self.on_contact_move,
            ContactUp: self.on_contact_up,
            ContactCancel: self.on_contact_cancel,
        }

    @property
    def is_panning(self) -> bool:
        return self.state == GestureState.PANNING

    @property
    def is_pinching(self) -> bool:
        return self.state == GestureState.PINCHING

    def handle(self, event: ContactEvent) -> GestureState:
        """Dispatch any contact event."""
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"Unsupported gesture event: {event!r}")
        return handler(event)

    def reset(self) -> None:
        self.contacts.clear()
        self._pan_contact = None
        self.state = GestureState.IDLE

    # =========================================================================
    # Event handlers
    # =========================================================================

    def on_contact_down(self, event: ContactDown) -> GestureState:
        if event.kind != PointerKind.TOUCH:
            if event.target != HitTarget.BACKGROUND or event.button != 0:
                return self.state
            self.contacts[event.contact_id] = event.point
            if self.state == GestureState.IDLE:
                self._start_pan(event.contact_id)
            return self.state

        self.contacts[event.contact_id] = event.point
        count = len(self.contacts)
        if count == 1:
            self._start_pan(event.contact_id)
        elif count == 2:
            self._start_pinch()
        # Third and further contacts are tracked but not interpreted
        return self.state

    def on_contact_move(self, event: ContactMove) -> GestureState:
        if event.contact_id not in self.contacts:
            return self.state
        self.contacts[event.contact_id] = event.point

        if self.state == GestureState.PINCHING:
            pair = self._pinch_pair()
            if event.contact_id in pair:
                self._update_pinch()
            return self.state

        if self.state == GestureState.PANNING and event.contact_id == self._pan_contact:
            dx = event.x - self._pan_origin[0]
            dy = event.y - self._pan_origin[1]
            start_tx, start_ty = self._pan_start_translate
            self.transform.translate_to(start_tx + dx, start_ty + dy)
        return self.state

    def on_contact_up(self, event: ContactUp) -> GestureState:
        return self._end_contact(event.contact_id)

    def on_contact_cancel(self, event: ContactCancel) -> GestureState:
        return self._end_contact(event.contact_id)

    def on_wheel(self, event: WheelEvent) -> None:
        factor = self.wheel_factor if event.delta_y < 0 else 1 / self.wheel_factor
        self.transform.zoom_at(event.point, factor)

    # =========================================================================
    # Internals
    # =========================================================================

    def _transition(self, new_state: GestureState) -> None:
        if new_state == self.state:
            return
        if (self.state, new_state) not in TRANSITIONS:
            raise RuntimeError(f"Illegal gesture transition {self.state.value} -> {new_state.value}")
        logger.debug(f"Gesture {self.state.value} -> {new_state.value} ({len(self.contacts)} contacts)")
        self.state = new_state

    def _start_pan(self, contact_id: int) -> None:
        self._pan_contact = contact_id
        self._pan_origin = self.contacts[contact_id]
        self._pan_start_translate = self.transform.translate
        self._transition(GestureState.PANNING)

    def _start_pinch(self) -> None:
        first, second = self._pinch_points()
        self._last_distance = distance(first, second) or 1.0
        self._pan_contact = None
        self._transition(GestureState.PINCHING)

    def _update_pinch(self) -> None:
        first, second = self._pinch_points()
        dist = distance(first, second) or 1.0
        factor = clamp(dist / self._last_distance, self.pinch_min, self.pinch_max)
        self._last_distance = dist
        self.transform.zoom_at(midpoint(first, second), factor)

    def _pinch_pair(self) -> tuple[int, ...]:
        return tuple(self.contacts)[:2]

    def _pinch_points(self) -> tuple[Point, Point]:
        first, second = self._pinch_pair()
        return self.contacts[first], self.contacts[second]

    def _end_contact(self, contact_id: int) -> GestureState:
        self.contacts.pop(contact_id, None)
        count = len(self.contacts)

        if count == 0:
            self._pan_contact = None
            self._transition(GestureState.IDLE)
        elif self.state == GestureState.PINCHING:
            if count < 2:
                # The remaining finger does not resume panning on its own
                self._transition(GestureState.IDLE)
            else:
                first, second = self._pinch_points()
                self._last_distance = distance(first, second) or 1.0
        elif self.state == GestureState.PANNING and contact_id == self._pan_contact:
            self._pan_contact = None
            self._transition(GestureState.IDLE)
        return self.state
