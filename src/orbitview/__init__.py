"""orbitview - damped orbit, pan and zoom camera control for 3D model viewers.

This package provides the camera core of a model viewer:
- A dual goal/current camera pose with frame-rate independent damping
- Constraints with "auto" bounds framed from the loaded model
- One- and two-finger gesture resolution, wheel and keyboard input
- Scripted synthetic interactions played through the same input path
- An idle interaction prompt and accessible orientation announcements

Quick start:
    from orbitview import ModelViewer, PointerEvent, PointerPhase

    viewer = ModelViewer(viewport_width=800, viewport_height=600)
    viewer.load(bounding_radius=1.5)

    viewer.pointer(PointerEvent(0, 400, 300, PointerPhase.DOWN))
    viewer.pointer(PointerEvent(0, 360, 300, PointerPhase.MOVE))
    viewer.tick(1 / 60)

    print(viewer.camera.current)

Demo window:
    from orbitview import run_viewer

    if __name__ == "__main__":
        run_viewer()
"""

__version__ = "0.1.0"

from orbitview.conf import settings
from orbitview.events import EventBus, ViewerLoadedEvent
from orbitview.helpers import create_viewer, run_viewer, setup_logging
from orbitview.systems import (
    AUTO,
    CameraChangeEvent,
    CameraController,
    ConstraintConflictEvent,
    ConstraintSet,
    Finger,
    KeyEvent,
    Keyframe,
    Path,
    PointerEvent,
    PromptVisibilityChangedEvent,
    Range,
    SceneFraming,
    SphericalState,
    StatusTextEvent,
    SurfaceHit,
    SyntheticInteraction,
    UserInteractionEvent,
    WheelEvent,
)
from orbitview.types import ChangeSource, PointerPhase, PromptMode
from orbitview.viewer import ModelViewer

__all__ = [
    "AUTO",
    "CameraChangeEvent",
    "CameraController",
    "ChangeSource",
    "ConstraintConflictEvent",
    "ConstraintSet",
    "EventBus",
    "Finger",
    "KeyEvent",
    "Keyframe",
    "ModelViewer",
    "Path",
    "PointerEvent",
    "PointerPhase",
    "PromptMode",
    "PromptVisibilityChangedEvent",
    "Range",
    "SceneFraming",
    "SphericalState",
    "StatusTextEvent",
    "SurfaceHit",
    "SyntheticInteraction",
    "UserInteractionEvent",
    "ViewerLoadedEvent",
    "WheelEvent",
    "__version__",
    "create_viewer",
    "run_viewer",
    "settings",
    "setup_logging",
]
