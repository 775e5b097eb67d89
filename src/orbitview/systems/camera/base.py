"""Base class for CameraController."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from orbitview.systems.base import BaseSystem

if TYPE_CHECKING:
    from contextlib import AbstractContextManager

    from pyglet.math import Vec3

    from orbitview.systems.camera.constraints import Bound, ConstraintSet, SceneFraming
    from orbitview.systems.camera.raycast import RayCaster
    from orbitview.systems.camera.spherical import SphericalState
    from orbitview.types import ChangeSource


class CameraBaseManager(BaseSystem, ABC):
    """Base class for CameraController."""

    role = "camera_controller"

    @property
    @abstractmethod
    def current(self) -> SphericalState:
        """Pose being rendered."""
        ...

    @property
    @abstractmethod
    def goal(self) -> SphericalState:
        """Pose being approached."""
        ...

    @abstractmethod
    def interaction(self, source: ChangeSource) -> AbstractContextManager[None]:
        """Attribute goal changes made inside the block to source."""
        ...

    @abstractmethod
    def load_scene(self, framing: SceneFraming) -> None:
        """Resolve auto values against a newly loaded scene."""
        ...

    @abstractmethod
    def set_aspect_ratio(self, aspect: float) -> None:
        """Re-resolve auto values for a new viewport shape."""
        ...

    @abstractmethod
    def set_goal_orbit(
        self,
        theta: float | None = None,
        phi: float | None = None,
        radius: Bound | None = None,
    ) -> None:
        """Partially update the goal orbit."""
        ...

    @abstractmethod
    def set_goal_target(self, target: tuple[Bound | None, Bound | None, Bound | None] | Vec3) -> None:
        """Partially update the goal target."""
        ...

    @abstractmethod
    def set_goal_field_of_view(self, field_of_view: Bound) -> None:
        """Update the goal field of view."""
        ...

    @abstractmethod
    def adjust_orbit(self, delta_theta: float, delta_phi: float, delta_radius_scale: float = 1.0) -> None:
        """Relatively adjust the goal orbit."""
        ...

    @abstractmethod
    def pan(self, delta_x: float, delta_y: float, viewport_height: float) -> None:
        """Move the goal target in the camera plane by a pixel drag."""
        ...

    @abstractmethod
    def recenter(self, x: float, y: float, ray_caster: RayCaster | None) -> None:
        """Move the goal target to the surface under a screen point."""
        ...

    @abstractmethod
    def jump_to_goal(self) -> None:
        """Make the current pose equal the goal immediately."""
        ...

    @abstractmethod
    def set_constraints(self, constraints: ConstraintSet) -> None:
        """Replace the constraints and re-clamp both poses."""
        ...
