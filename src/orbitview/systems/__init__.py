"""Viewer systems for camera control, input, prompt and accessibility."""

from orbitview.systems.announcer import OrientationAnnouncer, StatusTextEvent, describe_orientation
from orbitview.systems.base import BaseSystem
from orbitview.systems.camera import (
    AUTO,
    CameraChangeEvent,
    CameraController,
    ConstraintConflictEvent,
    ConstraintSet,
    ControllerOptions,
    Range,
    SceneFraming,
    SphericalState,
    SurfaceHit,
)
from orbitview.systems.gesture import (
    Finger,
    GestureOptions,
    GestureResolver,
    Keyframe,
    Path,
    SyntheticInteraction,
    SyntheticInteractionPlayer,
)
from orbitview.systems.input import (
    KeyEvent,
    PointerEvent,
    SyntheticInteractionFinishedEvent,
    UserInteractionEvent,
    WheelEvent,
)
from orbitview.systems.input.manager import InputManager
from orbitview.systems.loader import MissingDependencyError, SystemLoader
from orbitview.systems.prompt import InteractionPromptStateMachine, PromptOptions, PromptVisibilityChangedEvent
from orbitview.systems.viewer_context import ViewerContext

__all__ = [
    "AUTO",
    "BaseSystem",
    "CameraChangeEvent",
    "CameraController",
    "ConstraintConflictEvent",
    "ConstraintSet",
    "ControllerOptions",
    "Finger",
    "GestureOptions",
    "GestureResolver",
    "InputManager",
    "InteractionPromptStateMachine",
    "KeyEvent",
    "Keyframe",
    "MissingDependencyError",
    "OrientationAnnouncer",
    "Path",
    "PointerEvent",
    "PromptOptions",
    "PromptVisibilityChangedEvent",
    "Range",
    "SceneFraming",
    "SphericalState",
    "StatusTextEvent",
    "SurfaceHit",
    "SyntheticInteraction",
    "SyntheticInteractionFinishedEvent",
    "SyntheticInteractionPlayer",
    "SystemLoader",
    "UserInteractionEvent",
    "ViewerContext",
    "WheelEvent",
    "describe_orientation",
]
