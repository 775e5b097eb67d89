"""Gesture classification and scripted interaction playback.

This package provides:
- GestureResolver: Pointer state machine producing orbit, pan and zoom deltas
- SyntheticInteractionPlayer: Plays keyframed virtual fingers through the resolver
"""

from orbitview.systems.gesture.resolver import (
    GestureDelta,
    GestureOptions,
    GestureResolver,
    GestureSession,
    Tap,
)
from orbitview.systems.gesture.synthetic import (
    Finger,
    Keyframe,
    Path,
    SyntheticInteraction,
    SyntheticInteractionPlayer,
)

__all__ = [
    "Finger",
    "GestureDelta",
    "GestureOptions",
    "GestureResolver",
    "GestureSession",
    "Keyframe",
    "Path",
    "SyntheticInteraction",
    "SyntheticInteractionPlayer",
    "Tap",
]
