"""Pointer gesture state machine and one-shot wheel/keyboard mapping.

The resolver turns a stream of normalized pointer events into camera deltas. It
never touches the camera itself: every call returns a GestureDelta (orbit, pan
and zoom amounts), a Tap (a recenter request) or None, and the input manager
applies the result to the controller.

States:
    IDLE -> ROTATE_ARMED -> ROTATING             one pointer
    IDLE -> PAN_ZOOM_ARMED -> PANNING | ZOOMING  two pointers

A press only becomes a drag after moving beyond the dead zone; the first move
past it reports the whole displacement from the press, so nothing is lost. A
second pointer joining a one-pointer session upgrades it to pan/zoom. A
two-pointer session that shrinks to one pointer ignores the remaining pointer
until it is released, so the camera never jumps between gestures.
Pointers that move in the same instant are fed as one batch through pointers(),
so a two-finger move yields one delta instead of two half-steps that would
briefly read as a pinch.

When the last pointer is released, a genuine session that barely moved and was
short lived produces a Tap instead of nothing.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import arcade

from orbitview.conf import settings
from orbitview.types import ChangeSource, GestureKind, GestureState, PointerPhase

if TYPE_CHECKING:
    from collections.abc import Iterable

    from orbitview.systems.input.events import KeyEvent, PointerEvent, WheelEvent

logger = logging.getLogger(__name__)

# Pinch distances below this are treated as coincident fingers
MIN_PINCH_DISTANCE = 1e-6

Point = tuple[float, float]


@dataclass(frozen=True)
class GestureOptions:
    """Tunables for gesture classification and input mapping.

    Attributes:
        orbit_sensitivity: One viewport height of drag turns this many full turns.
        enable_pan: Whether two-finger drags, shift+arrows and taps may move the target.
        drag_dead_zone: Pixels a pointer travels before a press becomes a drag.
        tap_distance: Maximum travel in pixels for a release to be a tap.
        tap_time: Maximum session duration in seconds for a release to be a tap.
        wheel_zoom_sensitivity: Natural-log radius change per wheel unit.
        keyboard_orbit_step: Radians per arrow key press.
        keyboard_zoom_factor: Radius scale per page key press.
        keyboard_pan_pixels: Drag distance equivalent of a shift+arrow press.
    """

    orbit_sensitivity: float = 1.0
    enable_pan: bool = True
    drag_dead_zone: float = 2.0
    tap_distance: float = 2.0
    tap_time: float = 0.3
    wheel_zoom_sensitivity: float = 0.001
    keyboard_orbit_step: float = math.pi / 8
    keyboard_zoom_factor: float = 1.25
    keyboard_pan_pixels: float = 10.0

    @classmethod
    def from_settings(cls) -> GestureOptions:
        """Build options from the active settings module."""
        return cls(
            orbit_sensitivity=settings.ORBIT_SENSITIVITY,
            enable_pan=settings.ENABLE_PAN,
            drag_dead_zone=settings.DRAG_DEAD_ZONE,
            tap_distance=settings.TAP_DISTANCE,
            tap_time=settings.TAP_TIME,
            wheel_zoom_sensitivity=settings.WHEEL_ZOOM_SENSITIVITY,
            keyboard_orbit_step=settings.KEYBOARD_ORBIT_STEP,
            keyboard_zoom_factor=settings.KEYBOARD_ZOOM_FACTOR,
            keyboard_pan_pixels=settings.KEYBOARD_PAN_PIXELS,
        )


@dataclass(frozen=True)
class GestureDelta:
    """Camera adjustment produced by one input event.

    Attributes:
        kind: Dominant component (ROTATE, PAN or ZOOM).
        source: USER_INTERACTION for genuine input, AUTOMATIC for playback.
        delta_theta: Radians to add to the goal azimuth.
        delta_phi: Radians to add to the goal polar angle.
        radius_scale: Factor for the goal radius; below 1 zooms in.
        pan_x: Horizontal drag in pixels, positive to the right.
        pan_y: Vertical drag in pixels, positive downward.
    """

    kind: GestureKind
    source: ChangeSource
    delta_theta: float = 0.0
    delta_phi: float = 0.0
    radius_scale: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0


@dataclass(frozen=True)
class Tap:
    """A short, still press; the input manager recenters on it.

    Attributes:
        x: Horizontal pixel position, from the left edge.
        y: Vertical pixel position, from the top edge.
    """

    x: float
    y: float


@dataclass
class GestureSession:
    """Record of one pointer interaction, from first press to last release."""

    source: ChangeSource
    pointer_count: int
    starts: dict[int, Point]
    last: dict[int, Point]
    elapsed: float = 0.0
    travel: float = 0.0
    kind: GestureKind = GestureKind.NONE
    tap_point: Point = field(default=(0.0, 0.0))
    start_midpoint: Point = field(default=(0.0, 0.0))
    start_distance: float = 0.0


class GestureResolver:
    """Classifies pointer streams into orbit, pan and zoom deltas.

    Attributes:
        options: Classification thresholds and input mapping.
        viewport_width: Width of the interactive surface in pixels.
        viewport_height: Height of the interactive surface in pixels.
        state: Current state of the pointer state machine.
        session: The active gesture session, or None when idle.
    """

    def __init__(
        self,
        options: GestureOptions | None = None,
        viewport_width: float | None = None,
        viewport_height: float | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            options: Tunables. Built from settings when omitted.
            viewport_width: Surface width in pixels; defaults to VIEWPORT_WIDTH.
            viewport_height: Surface height in pixels; defaults to VIEWPORT_HEIGHT.
        """
        self.options = options or GestureOptions.from_settings()
        self.viewport_width = float(viewport_width if viewport_width is not None else settings.VIEWPORT_WIDTH)
        self.viewport_height = float(viewport_height if viewport_height is not None else settings.VIEWPORT_HEIGHT)
        self.state = GestureState.IDLE
        self.session: GestureSession | None = None
        self._pointers: dict[int, Point] = {}

    @property
    def pointer_count(self) -> int:
        """Number of pointers currently pressed."""
        return len(self._pointers)

    def set_viewport(self, width: float, height: float) -> None:
        """Update the surface size used to scale pixel deltas."""
        self.viewport_width = float(width)
        self.viewport_height = float(height)

    def pointer(
        self,
        event: PointerEvent,
        source: ChangeSource = ChangeSource.USER_INTERACTION,
    ) -> GestureDelta | Tap | None:
        """Feed one pointer event through the state machine.

        Args:
            event: Normalized pointer event in pixels, top-left origin.
            source: Attribution for any delta this session produces.

        Returns:
            The delta or tap produced by the event, or None.
        """
        point = (event.x, event.y)
        if event.phase is PointerPhase.DOWN:
            self._press(event.pointer_id, point, source)
            return None
        if event.phase is PointerPhase.MOVE:
            return self._move({event.pointer_id: point})
        return self._release(event.pointer_id, point)

    def pointers(
        self,
        events: Iterable[PointerEvent],
        source: ChangeSource = ChangeSource.USER_INTERACTION,
    ) -> list[GestureDelta | Tap]:
        """Feed pointer events that happened at the same instant.

        Consecutive moves in the batch are applied together, so two fingers
        moving in one frame yield a single delta. Splitting such a move in two
        would briefly change the finger distance and read as a pinch.

        Args:
            events: Pointer events in the order they occurred.
            source: Attribution for any delta this batch produces.

        Returns:
            The deltas and taps produced, in order.
        """
        outputs: list[GestureDelta | Tap] = []
        moves: dict[int, Point] = {}
        for event in events:
            if event.phase is PointerPhase.MOVE:
                moves[event.pointer_id] = (event.x, event.y)
                continue
            if moves:
                outputs.append(self._move(moves))
                moves = {}
            outputs.append(self.pointer(event, source))
        if moves:
            outputs.append(self._move(moves))
        return [output for output in outputs if output is not None]

    def wheel(self, event: WheelEvent, source: ChangeSource = ChangeSource.USER_INTERACTION) -> GestureDelta:
        """Map a wheel event to a one-shot zoom; positive delta_y zooms out."""
        scale = math.exp(event.delta_y * self.options.wheel_zoom_sensitivity)
        return GestureDelta(GestureKind.ZOOM, source, radius_scale=scale)

    def key(self, event: KeyEvent, source: ChangeSource = ChangeSource.USER_INTERACTION) -> GestureDelta | None:
        """Map a key press to a fixed-increment adjustment.

        Arrows orbit (up raises the camera), page up/down zoom in/out, and
        shift+arrows pan when panning is enabled.

        Returns:
            The delta for a recognized key, or None.
        """
        options = self.options
        arrows = {
            arcade.key.LEFT: (-1.0, 0.0),
            arcade.key.RIGHT: (1.0, 0.0),
            arcade.key.UP: (0.0, -1.0),
            arcade.key.DOWN: (0.0, 1.0),
        }

        if event.symbol in arrows:
            horizontal, vertical = arrows[event.symbol]
            if event.modifiers & arcade.key.MOD_SHIFT:
                if not options.enable_pan:
                    return None
                return GestureDelta(
                    GestureKind.PAN,
                    source,
                    pan_x=horizontal * options.keyboard_pan_pixels,
                    pan_y=vertical * options.keyboard_pan_pixels,
                )
            return GestureDelta(
                GestureKind.ROTATE,
                source,
                delta_theta=horizontal * options.keyboard_orbit_step,
                delta_phi=vertical * options.keyboard_orbit_step,
            )

        if event.symbol == arcade.key.PAGEUP:
            return GestureDelta(GestureKind.ZOOM, source, radius_scale=1.0 / options.keyboard_zoom_factor)
        if event.symbol == arcade.key.PAGEDOWN:
            return GestureDelta(GestureKind.ZOOM, source, radius_scale=options.keyboard_zoom_factor)
        return None

    def advance(self, delta_time: float) -> None:
        """Advance the session clock used for tap detection."""
        if self.session is not None:
            self.session.elapsed += delta_time

    def cancel(self) -> None:
        """Drop the active session and every pressed pointer without emitting a tap."""
        if self.session is not None:
            logger.debug("Gesture session cancelled in state %s", self.state.name)
        self.session = None
        self._pointers.clear()
        self.state = GestureState.IDLE

    def _press(self, pointer_id: int, point: Point, source: ChangeSource) -> None:
        if pointer_id in self._pointers or len(self._pointers) >= 2:
            return
        self._pointers[pointer_id] = point

        if self.session is None:
            self.session = GestureSession(
                source=source,
                pointer_count=1,
                starts={pointer_id: point},
                last={pointer_id: point},
                tap_point=point,
            )
            self._set_state(GestureState.ROTATE_ARMED)
            return

        # Second pointer: upgrade to pan/zoom, or re-seat a shrunken two-pointer session
        session = self.session
        if session.pointer_count == 1:
            self.session = GestureSession(
                source=session.source,
                pointer_count=2,
                starts=dict(self._pointers),
                last=dict(self._pointers),
                elapsed=session.elapsed,
                travel=session.travel,
                tap_point=_midpoint(*self._pointers.values()),
            )
            self._set_state(GestureState.PAN_ZOOM_ARMED)
        else:
            session.last = dict(self._pointers)
        self.session.start_midpoint = _midpoint(*self._pointers.values())
        self.session.start_distance = _distance(*self._pointers.values())

    def _move(self, points: dict[int, Point]) -> GestureDelta | None:
        session = self.session
        if session is None:
            return None
        points = {pointer_id: point for pointer_id, point in points.items() if pointer_id in self._pointers}
        if not points:
            return None
        for pointer_id, point in points.items():
            self._pointers[pointer_id] = point
            start = session.starts.get(pointer_id, point)
            session.travel = max(session.travel, _distance(start, point))

        if session.pointer_count == 1:
            # A one-pointer session only ever holds the pointer that started it
            pointer_id, point = next(iter(points.items()))
            return self._rotate(session, pointer_id, point)
        if len(self._pointers) < 2:
            return None
        return self._pan_zoom(session)

    def _rotate(self, session: GestureSession, pointer_id: int, point: Point) -> GestureDelta | None:
        if self.state is GestureState.ROTATE_ARMED:
            if session.travel <= self.options.drag_dead_zone:
                return None
            session.kind = GestureKind.ROTATE
            self._set_state(GestureState.ROTATING)

        last = session.last[pointer_id]
        session.last[pointer_id] = point
        turns_per_pixel = 2.0 * math.pi * self.options.orbit_sensitivity / self.viewport_height
        return GestureDelta(
            GestureKind.ROTATE,
            session.source,
            delta_theta=-(point[0] - last[0]) * turns_per_pixel,
            delta_phi=-(point[1] - last[1]) * turns_per_pixel,
        )

    def _pan_zoom(self, session: GestureSession) -> GestureDelta | None:
        if self.state is GestureState.PAN_ZOOM_ARMED and session.travel <= self.options.drag_dead_zone:
            return None

        old_a, old_b = session.last.values()
        new_a, new_b = (self._pointers[pointer_id] for pointer_id in session.last)
        old_mid = _midpoint(old_a, old_b)
        new_mid = _midpoint(new_a, new_b)
        pan_x = new_mid[0] - old_mid[0]
        pan_y = new_mid[1] - old_mid[1]
        old_distance = _distance(old_a, old_b)
        new_distance = _distance(new_a, new_b)
        if old_distance < MIN_PINCH_DISTANCE or new_distance < MIN_PINCH_DISTANCE:
            scale = 1.0
        else:
            scale = old_distance / new_distance

        # The tag follows whichever component dominates the motion since the press
        total_pan = _distance(session.start_midpoint, new_mid)
        total_zoom = abs(new_distance - session.start_distance)
        if total_pan >= total_zoom:
            session.kind = GestureKind.PAN
            self._set_state(GestureState.PANNING)
        else:
            session.kind = GestureKind.ZOOM
            self._set_state(GestureState.ZOOMING)

        session.last = {pointer_id: self._pointers[pointer_id] for pointer_id in session.last}
        if not self.options.enable_pan:
            pan_x = pan_y = 0.0
        return GestureDelta(session.kind, session.source, radius_scale=scale, pan_x=pan_x, pan_y=pan_y)

    def _release(self, pointer_id: int, point: Point) -> Tap | None:
        session = self.session
        if session is None or pointer_id not in self._pointers:
            return None
        start = session.starts.get(pointer_id, point)
        session.travel = max(session.travel, _distance(start, point))
        del self._pointers[pointer_id]
        if self._pointers:
            return None

        self.session = None
        self._set_state(GestureState.IDLE)
        if (
            session.source is ChangeSource.USER_INTERACTION
            and self.options.enable_pan
            and session.travel < self.options.tap_distance
            and session.elapsed < self.options.tap_time
        ):
            logger.debug("Tap at (%.1f, %.1f)", session.tap_point[0], session.tap_point[1])
            return Tap(session.tap_point[0], session.tap_point[1])
        return None

    def _set_state(self, state: GestureState) -> None:
        if state is not self.state:
            logger.debug("Gesture state %s -> %s", self.state.name, state.name)
            self.state = state


def _midpoint(a: Point, b: Point) -> Point:
    return ((a[0] + b[0]) / 2.0, (a[1] + b[1]) / 2.0)


def _distance(a: Point, b: Point) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])
