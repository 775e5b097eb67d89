"""Arcade view hosting a ModelViewer.

This module provides the ModelViewerView class, which adapts arcade's window
callbacks to the viewer's normalized input and drives its frame loop. It is the
reference host for the camera core and doubles as a demo: it draws the model's
bounding sphere as three wireframe great circles seen through the current
camera, the interaction prompt and the orientation status line.

Input mapping:
- Left drag: one-finger orbit
- Right drag: two-finger pan (two virtual pointers moving together)
- Scroll wheel: zoom
- Arrows, shift+arrows, page up/down: keyboard orbit, pan and zoom
- Left click without moving: tap to recenter on the sphere surface

Arcade reports mouse positions with the origin at the bottom-left; the viewer
expects the top-left, so every position is flipped through to_pointer_event().
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import arcade
from pyglet.math import Vec3

from orbitview.conf import settings
from orbitview.systems.announcer.events import StatusTextEvent
from orbitview.systems.camera.raycast import SurfaceHit
from orbitview.systems.input.events import KeyEvent, PointerEvent, WheelEvent
from orbitview.systems.prompt.events import PromptVisibilityChangedEvent
from orbitview.types import PointerPhase
from orbitview.viewer import ModelViewer

if TYPE_CHECKING:
    from orbitview.systems.camera.constraints import SceneFraming
    from orbitview.systems.camera.spherical import SphericalState

logger = logging.getLogger(__name__)

# Host wheel units per arcade scroll step
WHEEL_UNITS_PER_STEP = 100.0

# Half the spacing of the two virtual fingers used for right-drag panning
PAN_FINGER_OFFSET = 20.0

MOUSE_POINTER_ID = 0

# Segments per wireframe circle
CIRCLE_SEGMENTS = 64

# Planes of the three wireframe great circles, as pairs of in-plane axes
GREAT_CIRCLE_AXES = (
    (Vec3(1.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0)),
    (Vec3(0.0, 1.0, 0.0), Vec3(0.0, 0.0, 1.0)),
    (Vec3(0.0, 0.0, 1.0), Vec3(1.0, 0.0, 0.0)),
)

PROMPT_TEXT = "Drag to rotate, scroll to zoom"


def to_pointer_event(pointer_id: int, x: float, y: float, phase: PointerPhase, window_height: float) -> PointerEvent:
    """Convert an arcade mouse position (bottom-left origin) to a pointer event."""
    return PointerEvent(pointer_id, x, window_height - y, phase)


def to_wheel_event(scroll_y: float) -> WheelEvent:
    """Convert an arcade scroll amount to a wheel event; scrolling up zooms in."""
    return WheelEvent(-scroll_y * WHEEL_UNITS_PER_STEP)


def project_point(state: SphericalState, point: Vec3, width: float, height: float) -> tuple[float, float] | None:
    """Project a world point to arcade window coordinates through a camera pose.

    Returns:
        (x, y) with a bottom-left origin, or None for points behind the camera.
    """
    position = state.position
    right, up = state.basis()
    forward = _unit(state.target - position)
    relative = point - position

    depth = _dot(relative, forward)
    if depth <= 1e-6:
        return None
    focal = (height / 2.0) / math.tan(math.radians(state.field_of_view) / 2.0)
    return (
        width / 2.0 + focal * _dot(relative, right) / depth,
        height / 2.0 + focal * _dot(relative, up) / depth,
    )


class BoundingSphereRayCaster:
    """Ray caster that treats the model as its bounding sphere.

    Renderers with real geometry provide their own; this one lets the demo
    recenter on the sphere surface.
    """

    def __init__(self, viewer: ModelViewer, framing: SceneFraming) -> None:
        """Initialize with the viewer whose camera casts the rays and the sphere to hit."""
        self.viewer = viewer
        self.framing = framing

    def position_and_normal_from_point(self, x: float, y: float) -> SurfaceHit | None:
        """Intersect the ray through normalized device coordinates with the sphere."""
        state = self.viewer.camera.current
        origin = state.position
        right, up = state.basis()
        forward = _unit(state.target - origin)
        half_height = math.tan(math.radians(state.field_of_view) / 2.0)
        half_width = half_height * self.viewer.aspect
        direction = _unit(forward + right * (x * half_width) + up * (y * half_height))

        offset = origin - self.framing.center
        b = _dot(offset, direction)
        c = _dot(offset, offset) - self.framing.bounding_radius**2
        discriminant = b * b - c
        if discriminant < 0.0:
            return None
        distance = -b - math.sqrt(discriminant)
        if distance < 0.0:
            return None

        position = origin + direction * distance
        normal = _unit(position - self.framing.center)
        return SurfaceHit(position, normal)


class ModelViewerView(arcade.View):
    """Arcade view that forwards window input to a ModelViewer and draws its state.

    Attributes:
        viewer: The hosted viewer.
        bounding_radius: Radius of the demo model.
        status_text: Last orientation announcement.
        prompt_visible: Whether the interaction prompt is showing.
    """

    def __init__(self, viewer: ModelViewer | None = None, bounding_radius: float = 1.0) -> None:
        """Initialize the view.

        Args:
            viewer: Viewer to host; one sized to the window is created when omitted.
            bounding_radius: Radius of the demo model framed on show.
        """
        super().__init__()
        self.viewer = viewer or ModelViewer(viewport_width=self.window.width, viewport_height=self.window.height)
        self.bounding_radius = bounding_radius
        self.status_text = ""
        self.prompt_visible = False
        self._loaded = False
        self._pan_dragging = False
        self._status_label: arcade.Text | None = None
        self._prompt_label: arcade.Text | None = None

        self.viewer.event_bus.subscribe(StatusTextEvent, self._on_status_text)
        self.viewer.event_bus.subscribe(PromptVisibilityChangedEvent, self._on_prompt_visibility)

    def on_show_view(self) -> None:
        """Size the viewer to the window and frame the model on first show."""
        self.window.background_color = settings.BACKGROUND_COLOR
        self.viewer.resize(self.window.width, self.window.height)
        if not self._loaded:
            framing = self.viewer.load(self.bounding_radius)
            self.viewer.set_ray_caster(BoundingSphereRayCaster(self.viewer, framing))
            self._loaded = True

    def on_update(self, delta_time: float) -> None:
        """Advance the viewer by one frame."""
        self.viewer.tick(delta_time)

    def on_draw(self) -> None:
        """Draw the bounding sphere wireframe, the prompt and the status line."""
        self.clear()
        state = self.viewer.camera.current
        center = self.viewer.camera.framing.center
        radius = self.viewer.camera.framing.bounding_radius
        for axes in GREAT_CIRCLE_AXES:
            points = []
            for index in range(CIRCLE_SEGMENTS + 1):
                angle = 2.0 * math.pi * index / CIRCLE_SEGMENTS
                world = center + axes[0] * (radius * math.cos(angle)) + axes[1] * (radius * math.sin(angle))
                projected = project_point(state, world, self.window.width, self.window.height)
                if projected is not None:
                    points.append(projected)
            if len(points) > 1:
                arcade.draw_line_strip(points, arcade.color.LIGHT_GRAY, 1)

        if self.status_text:
            if self._status_label is None:
                self._status_label = arcade.Text(self.status_text, 10, 10, arcade.color.WHITE, font_size=12)
            self._status_label.text = self.status_text
            self._status_label.draw()

        if self.prompt_visible:
            if self._prompt_label is None:
                self._prompt_label = arcade.Text(
                    PROMPT_TEXT,
                    self.window.width / 2,
                    self.window.height / 2,
                    arcade.color.WHITE,
                    font_size=16,
                    anchor_x="center",
                    anchor_y="center",
                )
            self._prompt_label.x = self.window.width / 2
            self._prompt_label.y = self.window.height / 2
            self._prompt_label.draw()

    def on_resize(self, width: int, height: int) -> None:
        """Follow window resizes."""
        super().on_resize(width, height)
        if width > 0 and height > 0:
            self.viewer.resize(width, height)

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int) -> None:
        """Start an orbit (left button) or a two-finger pan (right button)."""
        self._send_mouse(x, y, button, PointerPhase.DOWN)

    def on_mouse_drag(self, x: int, y: int, dx: int, dy: int, buttons: int, modifiers: int) -> None:
        """Move the active pointers."""
        self._send_mouse(x, y, buttons, PointerPhase.MOVE)

    def on_mouse_release(self, x: int, y: int, button: int, modifiers: int) -> None:
        """Release the active pointers."""
        self._send_mouse(x, y, button, PointerPhase.UP)

    def on_mouse_scroll(self, x: int, y: int, scroll_x: float, scroll_y: float) -> None:
        """Zoom with the scroll wheel."""
        self.viewer.wheel(to_wheel_event(scroll_y))

    def on_key_press(self, symbol: int, modifiers: int) -> bool:
        """Forward keyboard orbit, pan and zoom."""
        return self.viewer.key(KeyEvent(symbol, modifiers))

    def on_hide_view(self) -> None:
        """Detach the viewer when the view goes away."""
        self.viewer.event_bus.unregister_all(self)
        self.viewer.detach()

    def _send_mouse(self, x: float, y: float, buttons: int, phase: PointerPhase) -> None:
        height = self.window.height
        if phase is PointerPhase.DOWN:
            self._pan_dragging = bool(buttons & arcade.MOUSE_BUTTON_RIGHT)

        if self._pan_dragging:
            self.viewer.pointers(
                [
                    to_pointer_event(MOUSE_POINTER_ID, x - PAN_FINGER_OFFSET, y, phase, height),
                    to_pointer_event(MOUSE_POINTER_ID + 1, x + PAN_FINGER_OFFSET, y, phase, height),
                ]
            )
        elif buttons & arcade.MOUSE_BUTTON_LEFT:
            self.viewer.pointer(to_pointer_event(MOUSE_POINTER_ID, x, y, phase, height))

    def _on_status_text(self, event: StatusTextEvent) -> None:
        self.status_text = event.text

    def _on_prompt_visibility(self, event: PromptVisibilityChangedEvent) -> None:
        self.prompt_visible = event.visible


def _dot(a: Vec3, b: Vec3) -> float:
    return a.x * b.x + a.y * b.y + a.z * b.z


def _unit(vector: Vec3) -> Vec3:
    length = math.sqrt(_dot(vector, vector))
    if length == 0.0:
        return vector
    return vector * (1.0 / length)
