"""Normalized input primitives and the input routing system.

The manager itself lives in orbitview.systems.input.manager; this package
exports the event types so the gesture package can build pointer events
without importing the manager.
"""

from orbitview.systems.input.events import (
    KeyEvent,
    PointerEvent,
    SyntheticInteractionFinishedEvent,
    UserInteractionEvent,
    WheelEvent,
)

__all__ = [
    "KeyEvent",
    "PointerEvent",
    "SyntheticInteractionFinishedEvent",
    "UserInteractionEvent",
    "WheelEvent",
]
