"""Events for camera system."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from orbitview.events import Event

if TYPE_CHECKING:
    from orbitview.systems.camera.constraints import ConfigurationConflict
    from orbitview.systems.camera.spherical import SphericalState
    from orbitview.types import ChangeSource


@dataclass
class CameraChangeEvent(Event):
    """Fired when the rendered camera pose moves.

    Published by CameraController.update() at most once per frame, and only when
    the current pose differs from the last published pose by more than the
    change epsilon. Renderers place their camera from ``state``; the orientation
    announcer waits for events with ``settled`` set.

    Attributes:
        source: What caused the movement (user gesture, navigation API call,
            synthetic playback, or NONE for constraint-driven corrections).
        state: Snapshot of the current pose after this frame.
        settled: True when the current pose has reached the goal.
    """

    source: ChangeSource
    state: SphericalState
    settled: bool


@dataclass
class ConstraintConflictEvent(Event):
    """Fired when resolved constraints contained a minimum above its maximum.

    The conflict is already resolved (both bounds collapsed to the minimum); the
    event exists so hosts can surface the misconfiguration.

    Attributes:
        conflicts: Every conflicting bound pair found during resolution.
    """

    conflicts: tuple[ConfigurationConflict, ...]
