"""Input routing from normalized host events to the camera controller.

This module provides the InputManager class, the only place where input meets
the camera. Genuine pointer, wheel and key events and the synthetic playback
all go through one GestureResolver; whatever it resolves is applied to the
camera goal inside an interaction block, so change events carry the right
source.

Routing rules:
- Any genuine pointer or wheel event, and any recognized key, cancels synthetic
  playback before it is handled (interruption, not blending)
- A synthetic interaction requested while a genuine gesture is in progress is
  ignored
- A tap recenters the camera through the context's ray caster
- Genuine input that changes the camera publishes UserInteractionEvent

The manager is updated first in the frame, so everything queued by input
handlers and by playback reaches the goal before the camera interpolates.

Example usage:
    input_manager = InputManager()
    loader = SystemLoader([input_manager, CameraController()])
    loader.setup_all(context)

    input_manager.handle_pointer(PointerEvent(0, 320, 240, PointerPhase.DOWN))
    input_manager.handle_pointer(PointerEvent(0, 300, 240, PointerPhase.MOVE))
    loader.update_all(1 / 60, context)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

from orbitview.systems.gesture.resolver import GestureResolver, Tap
from orbitview.systems.gesture.synthetic import SyntheticInteractionPlayer
from orbitview.systems.input.base import InputBaseManager
from orbitview.systems.input.events import KeyEvent, SyntheticInteractionFinishedEvent, UserInteractionEvent
from orbitview.types import ChangeSource

if TYPE_CHECKING:
    from collections.abc import Sequence

    from orbitview.systems.gesture.resolver import GestureDelta, GestureOptions
    from orbitview.systems.gesture.synthetic import SyntheticInteraction
    from orbitview.systems.input.events import PointerEvent, WheelEvent
    from orbitview.systems.viewer_context import ViewerContext

logger = logging.getLogger(__name__)


class InputManager(InputBaseManager):
    """Routes input through the gesture resolver to the camera controller.

    Attributes:
        resolver: Gesture state machine shared by genuine and synthetic pointers.
        player: Synthetic interaction playback.
        interaction_enabled: When False, genuine input is dropped.
        context: Viewer context; None until setup().
    """

    name: ClassVar[str] = "input"

    def __init__(
        self,
        options: GestureOptions | None = None,
        viewport_width: float | None = None,
        viewport_height: float | None = None,
    ) -> None:
        """Initialize the input manager.

        Args:
            options: Gesture tunables. Built from settings when omitted.
            viewport_width: Surface width in pixels.
            viewport_height: Surface height in pixels.
        """
        self.resolver = GestureResolver(options, viewport_width, viewport_height)
        self.player = SyntheticInteractionPlayer(self.resolver)
        self.interaction_enabled = True
        self.context: ViewerContext | None = None

    def setup(self, context: ViewerContext) -> None:
        """Keep the context; the camera controller is looked up on each event."""
        self.context = context
        logger.debug("InputManager setup complete")

    def cleanup(self) -> None:
        """Stop playback and drop any gesture in progress."""
        self.player.cancel()
        self.resolver.cancel()
        self.context = None
        logger.debug("InputManager cleanup complete")

    def set_viewport(self, width: float, height: float) -> None:
        """Update the surface size used to scale pixel deltas."""
        self.resolver.set_viewport(width, height)

    def set_interaction_enabled(self, enabled: bool) -> None:
        """Enable or disable genuine input; disabling also stops playback."""
        self.interaction_enabled = enabled
        if not enabled:
            self.player.cancel()
            self.resolver.cancel()
        logger.debug("Interaction %s", "enabled" if enabled else "disabled")

    def handle_pointer(self, event: PointerEvent) -> None:
        """Route a genuine pointer event, cancelling any synthetic playback first."""
        if not self.interaction_enabled:
            return
        self._interrupt_playback()
        self._apply(self.resolver.pointer(event))

    def handle_pointers(self, events: Sequence[PointerEvent]) -> None:
        """Route simultaneous genuine pointer events, such as a two-finger move, as one batch."""
        if not self.interaction_enabled:
            return
        self._interrupt_playback()
        self._apply_all(self.resolver.pointers(events))

    def handle_wheel(self, event: WheelEvent) -> None:
        """Route a genuine wheel event, cancelling any synthetic playback first."""
        if not self.interaction_enabled:
            return
        self._interrupt_playback()
        self._apply(self.resolver.wheel(event))

    def handle_key(self, event: KeyEvent) -> bool:
        """Route a genuine key press.

        Unrecognized keys are left for other handlers and do not cancel playback.

        Returns:
            True if the key was consumed.
        """
        if not self.interaction_enabled:
            return False
        delta = self.resolver.key(event)
        if delta is None:
            return False
        self._interrupt_playback()
        self._apply(delta)
        return True

    def on_key_press(self, symbol: int, modifiers: int, context: ViewerContext) -> bool:
        """Handle arcade key presses forwarded by the system loader."""
        return self.handle_key(KeyEvent(symbol, modifiers))

    def interact(self, interaction: SyntheticInteraction) -> bool:
        """Start a synthetic interaction, replacing any already playing.

        Returns:
            False if a genuine gesture is in progress and the request was ignored.
        """
        session = self.resolver.session
        if session is not None and session.source is ChangeSource.USER_INTERACTION:
            logger.info("Ignoring synthetic interaction while a user gesture is in progress")
            return False
        self._apply_all(self.player.start(interaction))
        return True

    def update(self, delta_time: float, context: ViewerContext) -> None:
        """Advance the gesture clock and synthetic playback by one frame."""
        self.resolver.advance(delta_time)
        interaction = self.player.interaction
        if interaction is None:
            return

        self._apply_all(self.player.step(delta_time))
        if not self.player.is_playing and self.context is not None:
            self.context.event_bus.publish(SyntheticInteractionFinishedEvent(interaction))

    def _interrupt_playback(self) -> None:
        if self.player.is_playing:
            logger.debug("User input interrupted synthetic interaction")
            self.player.cancel()

    def _apply_all(self, outputs: list[GestureDelta | Tap]) -> None:
        for output in outputs:
            self._apply(output)

    def _apply(self, output: GestureDelta | Tap | None) -> None:
        if output is None or self.context is None:
            return
        camera = self.context.camera_controller

        if isinstance(output, Tap):
            # Ray casts take normalized device coordinates with +y up
            x = 2.0 * output.x / self.resolver.viewport_width - 1.0
            y = 1.0 - 2.0 * output.y / self.resolver.viewport_height
            with camera.interaction(ChangeSource.USER_INTERACTION):
                camera.recenter(x, y, self.context.ray_caster)
            self.context.event_bus.publish(UserInteractionEvent("tap"))
            return

        with camera.interaction(output.source):
            if output.delta_theta or output.delta_phi or output.radius_scale != 1.0:
                camera.adjust_orbit(output.delta_theta, output.delta_phi, output.radius_scale)
            if output.pan_x or output.pan_y:
                camera.pan(output.pan_x, output.pan_y, self.resolver.viewport_height)

        if output.source is ChangeSource.USER_INTERACTION:
            self.context.event_bus.publish(UserInteractionEvent(output.kind.name.lower()))
