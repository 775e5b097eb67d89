"""Events for orientation announcer system."""

from __future__ import annotations

from dataclasses import dataclass

from orbitview.events import Event


@dataclass
class StatusTextEvent(Event):
    """Fired when the spoken description of the camera orientation changes.

    Hosts route the text to an accessibility live region or a status bar.

    Attributes:
        text: The full announcement, e.g. "View from stage upper-front".
    """

    text: str
