"""Facade assembling the camera core into one object a host can drive.

The ModelViewer wires the event bus, the viewer context and the systems in
their frame order (input, camera, announcer, prompt). Hosts feed it
normalized input events, call tick() once per frame and render from
``viewer.camera.current`` or from CameraChangeEvent.

Example usage:
    viewer = ModelViewer(ray_caster=renderer, status_sink=live_region.set_text)
    viewer.event_bus.subscribe(CameraChangeEvent, renderer.on_camera_change)
    viewer.load(bounding_radius=model.radius, center=model.center)

    # Each frame
    viewer.tick(delta_time)

    # Input from the host window
    viewer.pointer(PointerEvent(0, x, y, PointerPhase.DOWN))

    # When the host lets go of the viewer
    viewer.detach()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from orbitview.conf import settings
from orbitview.events import EventBus, ViewerLoadedEvent
from orbitview.systems.announcer.manager import OrientationAnnouncer
from orbitview.systems.camera.constraints import SceneFraming
from orbitview.systems.camera.manager import CameraController
from orbitview.systems.input.manager import InputManager
from orbitview.systems.loader import SystemLoader
from orbitview.systems.prompt.manager import InteractionPromptStateMachine
from orbitview.systems.viewer_context import ViewerContext

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from pyglet.math import Vec3

    from orbitview.systems.camera.constraints import ConstraintSet
    from orbitview.systems.camera.options import ControllerOptions
    from orbitview.systems.camera.raycast import RayCaster
    from orbitview.systems.gesture.resolver import GestureOptions
    from orbitview.systems.gesture.synthetic import SyntheticInteraction
    from orbitview.systems.input.events import KeyEvent, PointerEvent, WheelEvent
    from orbitview.systems.prompt.manager import PromptOptions

logger = logging.getLogger(__name__)


class ModelViewer:
    """One interactive viewer: camera, input, prompt and announcer on a shared bus.

    Attributes:
        event_bus: Bus every system publishes on; hosts subscribe here.
        context: Registry through which the systems find each other.
        camera: The camera controller.
        input_manager: Input routing and synthetic playback.
        announcer: Orientation status text.
        prompt: Interaction prompt state machine.
        system_loader: Drives the systems in frame order.
        viewport_width: Surface width in pixels.
        viewport_height: Surface height in pixels.
        detached: True once detach() has run; ticks and input are then ignored.
    """

    def __init__(
        self,
        *,
        ray_caster: RayCaster | None = None,
        constraints: ConstraintSet | None = None,
        controller_options: ControllerOptions | None = None,
        gesture_options: GestureOptions | None = None,
        prompt_options: PromptOptions | None = None,
        status_sink: Callable[[str], None] | None = None,
        viewport_width: float | None = None,
        viewport_height: float | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        """Assemble the systems and set them up.

        Args:
            ray_caster: Renderer surface query for tap-to-recenter.
            constraints: Initial camera constraints.
            controller_options: Camera defaults; built from settings when omitted.
            gesture_options: Gesture tunables; built from settings when omitted.
            prompt_options: Prompt mode and threshold; built from settings when omitted.
            status_sink: Receives every new orientation announcement.
            viewport_width: Surface width in pixels; defaults to VIEWPORT_WIDTH.
            viewport_height: Surface height in pixels; defaults to VIEWPORT_HEIGHT.
            event_bus: Bus to publish on; a new one is created when omitted.

        Raises:
            ValueError: If the viewport size is not positive.
        """
        width = float(viewport_width if viewport_width is not None else settings.VIEWPORT_WIDTH)
        height = float(viewport_height if viewport_height is not None else settings.VIEWPORT_HEIGHT)
        _check_viewport(width, height)
        self.viewport_width = width
        self.viewport_height = height

        self.event_bus = event_bus or EventBus()
        self.context = ViewerContext(self.event_bus, ray_caster)

        self.input_manager = InputManager(gesture_options, width, height)
        self.camera = CameraController(controller_options, constraints, SceneFraming(aspect=width / height))
        self.announcer = OrientationAnnouncer(status_sink)
        self.prompt = InteractionPromptStateMachine(prompt_options)

        self.system_loader = SystemLoader([self.input_manager, self.camera, self.announcer, self.prompt])
        self.system_loader.setup_all(self.context)
        self.detached = False

    def load(self, bounding_radius: float, center: Vec3 | None = None) -> SceneFraming:
        """Frame a newly loaded model and place the camera.

        Args:
            bounding_radius: Radius of the sphere enclosing the model.
            center: Center of that sphere; the origin when omitted.

        Returns:
            The framing the camera resolved its auto values against.
        """
        if center is None:
            framing = SceneFraming(bounding_radius=bounding_radius, aspect=self.aspect)
        else:
            framing = SceneFraming(bounding_radius=bounding_radius, center=center, aspect=self.aspect)
        self.camera.load_scene(framing)
        self.event_bus.publish(ViewerLoadedEvent(framing))
        return framing

    @property
    def aspect(self) -> float:
        """Viewport width divided by height."""
        return self.viewport_width / self.viewport_height

    def resize(self, width: float, height: float) -> None:
        """Follow a change of the interactive surface size.

        Raises:
            ValueError: If either dimension is not positive.
        """
        _check_viewport(width, height)
        self.viewport_width = float(width)
        self.viewport_height = float(height)
        self.input_manager.set_viewport(self.viewport_width, self.viewport_height)
        self.camera.set_aspect_ratio(self.aspect)

    def tick(self, delta_time: float) -> None:
        """Run one frame: input playback, camera interpolation, announcer, prompt."""
        if self.detached:
            return
        self.system_loader.update_all(delta_time, self.context)

    def pointer(self, event: PointerEvent) -> None:
        """Feed a genuine pointer event."""
        if not self.detached:
            self.input_manager.handle_pointer(event)

    def pointers(self, events: Sequence[PointerEvent]) -> None:
        """Feed genuine pointer events that happened at the same instant."""
        if not self.detached:
            self.input_manager.handle_pointers(events)

    def wheel(self, event: WheelEvent) -> None:
        """Feed a genuine wheel event."""
        if not self.detached:
            self.input_manager.handle_wheel(event)

    def key(self, event: KeyEvent) -> bool:
        """Feed a genuine key press; returns True if a system consumed it."""
        if self.detached:
            return False
        return self.system_loader.on_key_press_all(event.symbol, event.modifiers, self.context)

    def interact(self, interaction: SyntheticInteraction) -> bool:
        """Play a scripted gesture; returns False if it was ignored."""
        if self.detached:
            return False
        return self.input_manager.interact(interaction)

    def reset_interaction_prompt(self) -> None:
        """Re-arm the interaction prompt and restart its idle timer."""
        self.prompt.reset_interaction_prompt()

    def set_interaction_enabled(self, enabled: bool) -> None:
        """Enable or disable user interaction and the prompt that advertises it."""
        self.input_manager.set_interaction_enabled(enabled)
        self.prompt.set_interaction_enabled(enabled)

    def set_ray_caster(self, ray_caster: RayCaster | None) -> None:
        """Replace the surface query used by tap-to-recenter."""
        self.context.update_ray_caster(ray_caster)

    def detach(self) -> None:
        """Stop playback, clean up every system and ignore further frames."""
        if self.detached:
            return
        self.system_loader.cleanup_all()
        self.detached = True
        logger.info("Viewer detached")


def _check_viewport(width: float, height: float) -> None:
    if width <= 0 or height <= 0:
        msg = f"Viewport size must be positive, got {width}x{height}"
        raise ValueError(msg)
