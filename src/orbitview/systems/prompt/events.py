"""Events for interaction prompt system."""

from __future__ import annotations

from dataclasses import dataclass

from orbitview.events import Event


@dataclass
class PromptVisibilityChangedEvent(Event):
    """Fired when the interaction prompt is shown or hidden.

    Hosts draw (or stop drawing) their "drag to rotate" hint on this event; the
    core never renders the prompt itself.

    Attributes:
        visible: True when the prompt became visible.
    """

    visible: bool
