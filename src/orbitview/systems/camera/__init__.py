"""Camera system for damped orbit, pan and zoom around a target.

This package provides:
- CameraController: Owns the goal and current poses and interpolates between them
- SphericalState: Immutable camera pose in spherical coordinates
- ConstraintSet: Declared bounds, resolved against the scene into ResolvedConstraints
- DampedInterpolator: Frame-rate independent exponential approach to a goal

The camera system keeps every goal pose inside its constraints, recomputes
"auto" bounds when the scene or viewport changes, and publishes one change
event per frame while the camera moves.
"""

from orbitview.systems.camera.constraints import (
    AUTO,
    Auto,
    ConfigurationConflict,
    ConstraintSet,
    Range,
    ResolvedConstraints,
    SceneFraming,
    clamp,
)
from orbitview.systems.camera.damper import DampedInterpolator
from orbitview.systems.camera.events import CameraChangeEvent, ConstraintConflictEvent
from orbitview.systems.camera.manager import CameraController
from orbitview.systems.camera.options import ControllerOptions
from orbitview.systems.camera.raycast import RayCaster, SurfaceHit
from orbitview.systems.camera.spherical import SphericalState, shortest_arc, wrap_angle

__all__ = [
    "AUTO",
    "Auto",
    "CameraChangeEvent",
    "CameraController",
    "ConfigurationConflict",
    "ConstraintConflictEvent",
    "ConstraintSet",
    "ControllerOptions",
    "DampedInterpolator",
    "Range",
    "RayCaster",
    "ResolvedConstraints",
    "SceneFraming",
    "SphericalState",
    "SurfaceHit",
    "clamp",
    "shortest_arc",
    "wrap_angle",
]
