"""Idle tracking for the "interact with me" prompt.

This module provides the InteractionPromptStateMachine class, which decides when
the host should show a hint that the model can be dragged. The prompt appears
after the viewer has sat untouched for a threshold of seconds after loading,
and disappears for good the first time the user interacts.

States and transitions:
- HIDDEN -> VISIBLE: armed, mode AUTO, interaction enabled, and idle time since
  load (or the last reset) reached the threshold
- VISIBLE -> HIDDEN: user interaction (also disarms), mode NONE, interaction
  disabled, or reset_interaction_prompt()

Only genuine user input counts as interaction; navigation API calls and
synthetic playback move the camera without touching the idle timer.

Example usage:
    prompt = InteractionPromptStateMachine()
    event_bus.subscribe(PromptVisibilityChangedEvent, lambda e: hint.set_visible(e.visible))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from orbitview.conf import settings
from orbitview.events import ViewerLoadedEvent
from orbitview.systems.base import BaseSystem
from orbitview.systems.input.events import UserInteractionEvent
from orbitview.systems.prompt.events import PromptVisibilityChangedEvent
from orbitview.types import PromptMode, PromptState

if TYPE_CHECKING:
    from orbitview.events import EventBus
    from orbitview.systems.viewer_context import ViewerContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PromptOptions:
    """Prompt mode and idle threshold.

    Attributes:
        mode: AUTO shows the prompt after the threshold; NONE never shows it.
        threshold: Idle seconds before the prompt appears.
    """

    mode: PromptMode = PromptMode.AUTO
    threshold: float = 3.0

    @classmethod
    def from_settings(cls) -> PromptOptions:
        """Build options from the active settings module."""
        return cls(mode=PromptMode(settings.INTERACTION_PROMPT), threshold=settings.INTERACTION_PROMPT_THRESHOLD)


class InteractionPromptStateMachine(BaseSystem):
    """Shows the interaction prompt after an idle period and hides it on interaction.

    Attributes:
        options: Mode and threshold.
        state: HIDDEN or VISIBLE.
        armed: Whether the prompt may still appear; cleared by user interaction.
        idle_time: Seconds counted since load or the last reset.
        interaction_enabled: Mirrors the viewer's interaction switch.
    """

    name: ClassVar[str] = "prompt"
    role: ClassVar[str | None] = "prompt"

    def __init__(self, options: PromptOptions | None = None) -> None:
        """Initialize a hidden, armed prompt whose timer waits for a scene load."""
        self.options = options or PromptOptions.from_settings()
        self.state = PromptState.HIDDEN
        self.armed = True
        self.idle_time = 0.0
        self.interaction_enabled = True
        self.event_bus: EventBus | None = None
        self._loaded = False

    @property
    def visible(self) -> bool:
        """True while the prompt is showing."""
        return self.state is PromptState.VISIBLE

    def setup(self, context: ViewerContext) -> None:
        """Subscribe to scene loads and user interaction."""
        self.event_bus = context.event_bus
        self.event_bus.subscribe(ViewerLoadedEvent, self._on_viewer_loaded)
        self.event_bus.subscribe(UserInteractionEvent, self._on_user_interaction)
        logger.debug("InteractionPromptStateMachine setup complete")

    def cleanup(self) -> None:
        """Unsubscribe and stop counting."""
        if self.event_bus is not None:
            self.event_bus.unregister_all(self)
        self.event_bus = None
        self._loaded = False
        logger.debug("InteractionPromptStateMachine cleanup complete")

    def update(self, delta_time: float, context: ViewerContext) -> None:
        """Count idle time and show the prompt once the threshold is reached."""
        if not (self._loaded and self.armed and self.interaction_enabled):
            return
        if self.options.mode is PromptMode.NONE:
            return

        self.idle_time += delta_time
        if self.idle_time >= self.options.threshold:
            self._set_state(PromptState.VISIBLE)

    def reset_interaction_prompt(self) -> None:
        """Re-arm the prompt, restart the idle timer and hide it."""
        self.armed = True
        self.idle_time = 0.0
        self._set_state(PromptState.HIDDEN)

    def set_mode(self, mode: PromptMode) -> None:
        """Change the prompt mode; NONE hides a visible prompt."""
        self.options = PromptOptions(mode=mode, threshold=self.options.threshold)
        if mode is PromptMode.NONE:
            self._set_state(PromptState.HIDDEN)

    def set_interaction_enabled(self, enabled: bool) -> None:
        """Follow the viewer's interaction switch; disabling hides the prompt."""
        self.interaction_enabled = enabled
        if not enabled:
            self._set_state(PromptState.HIDDEN)

    def _on_viewer_loaded(self, event: ViewerLoadedEvent) -> None:
        self._loaded = True
        self.idle_time = 0.0

    def _on_user_interaction(self, event: UserInteractionEvent) -> None:
        if self.armed:
            logger.debug("User interaction (%s) disarmed the interaction prompt", event.kind)
        self.armed = False
        self._set_state(PromptState.HIDDEN)

    def _set_state(self, state: PromptState) -> None:
        if state is self.state:
            return
        self.state = state
        logger.debug("Interaction prompt %s", state.name.lower())
        if self.event_bus is not None:
            self.event_bus.publish(PromptVisibilityChangedEvent(visible=state is PromptState.VISIBLE))
