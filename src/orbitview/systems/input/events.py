"""Events for input system.

PointerEvent, WheelEvent and KeyEvent are the normalized input primitives the
host feeds into the viewer. UserInteractionEvent is published by the input
manager whenever genuine input moves the camera.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from orbitview.events import Event
from orbitview.types import PointerPhase

if TYPE_CHECKING:
    from orbitview.systems.gesture.synthetic import SyntheticInteraction


@dataclass
class PointerEvent(Event):
    """A pointer pressed, moved or released over the interactive surface.

    Attributes:
        pointer_id: Stable identifier of the pointer for the duration of a press.
            Genuine pointers use non-negative ids; synthetic fingers use negative ids.
        x: Horizontal position in pixels from the left edge.
        y: Vertical position in pixels from the top edge.
        phase: DOWN, MOVE or UP.
    """

    pointer_id: int
    x: float
    y: float
    phase: PointerPhase


@dataclass
class WheelEvent(Event):
    """A scroll wheel step; positive delta_y scrolls toward the user and zooms out.

    Attributes:
        delta_y: Vertical scroll amount in host units (roughly pixels).
    """

    delta_y: float


@dataclass
class KeyEvent(Event):
    """A key press on the focused viewer.

    Attributes:
        symbol: Arcade key symbol, e.g. arcade.key.LEFT.
        modifiers: Arcade modifier bit mask, e.g. arcade.key.MOD_SHIFT.
    """

    symbol: int
    modifiers: int = 0


@dataclass
class UserInteractionEvent(Event):
    """Fired when genuine input moved the camera goal or recentered it.

    The interaction prompt hides and disarms itself on this event.

    Attributes:
        kind: Name of the gesture that changed the camera ("rotate", "pan",
            "zoom" or "tap").
    """

    kind: str


@dataclass
class SyntheticInteractionFinishedEvent(Event):
    """Fired when a synthetic interaction plays to its end.

    Not fired for playback that was cancelled or replaced.

    Attributes:
        interaction: The interaction that finished.
    """

    interaction: SyntheticInteraction
