"""Spherical camera pose and the angle math built around it.

The camera is expressed as spherical coordinates around a target point, using
the y-up convention of most real-time renderers:

- theta: azimuth in radians, measured from +z toward +x (0 looks at the front)
- phi: polar angle in radians from +y (0 looks straight down, pi straight up)
- radius: distance from the target

Example:
    state = SphericalState(theta=0.0, phi=math.pi / 2, radius=4.0)
    state.position        # Vec3(0.0, 0.0, 4.0)
    right, up = state.basis()
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field
from typing import Any

from pyglet.math import Vec3

from orbitview.conf import global_settings

TAU = 2.0 * math.pi

# Polar angles closer than this to a pole are pushed back off it
POLE_EPSILON = 1e-6

# Smallest radius the controller will ever place the camera at
MIN_RADIUS_EPSILON = 1e-6


def wrap_angle(angle: float) -> float:
    """Wrap an angle into the half-open interval (-pi, pi]."""
    wrapped = math.fmod(angle + math.pi, TAU)
    if wrapped <= 0.0:
        wrapped += TAU
    return wrapped - math.pi


def shortest_arc(start: float, end: float) -> float:
    """Signed angle of the shortest rotation from start to end."""
    return wrap_angle(end - start)


def zero_vector() -> Vec3:
    """Return the origin; used as a dataclass default factory."""
    return Vec3(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class SphericalState:
    """Immutable camera pose around a target point.

    Instances are snapshots: the controller builds new ones with replace() and
    hands them to renderers, which never see a half-updated pose.

    Attributes:
        theta: Azimuth in radians.
        phi: Polar angle in radians, strictly inside (0, pi) once clamped.
        radius: Distance from the target, strictly positive once clamped.
        target: Look-at point in world space.
        field_of_view: Vertical field of view in degrees.
    """

    theta: float
    phi: float
    radius: float
    target: Vec3 = field(default_factory=zero_vector)
    field_of_view: float = global_settings.DEFAULT_FOV_DEG

    def replace(self, **changes: Any) -> SphericalState:  # noqa: ANN401
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    @property
    def position(self) -> Vec3:
        """Camera position in world space."""
        sin_phi = math.sin(self.phi)
        return Vec3(
            self.target.x + self.radius * sin_phi * math.sin(self.theta),
            self.target.y + self.radius * math.cos(self.phi),
            self.target.z + self.radius * sin_phi * math.cos(self.theta),
        )

    def basis(self) -> tuple[Vec3, Vec3]:
        """Camera-local right and up axes in world space.

        Returns:
            Tuple (right, up) of unit vectors. Right is horizontal; up is
            perpendicular to both right and the viewing direction.
        """
        sin_theta = math.sin(self.theta)
        cos_theta = math.cos(self.theta)
        cos_phi = math.cos(self.phi)
        right = Vec3(cos_theta, 0.0, -sin_theta)
        up = Vec3(-cos_phi * sin_theta, math.sin(self.phi), -cos_phi * cos_theta)
        return right, up

    def is_close(self, other: SphericalState, epsilon: float) -> bool:
        """Check whether two poses match within epsilon on every channel.

        Theta is compared along the shortest arc, so poses a full turn apart are
        considered equal.
        """
        return (
            abs(shortest_arc(self.theta, other.theta)) <= epsilon
            and abs(self.phi - other.phi) <= epsilon
            and abs(self.radius - other.radius) <= epsilon * max(1.0, abs(other.radius))
            and abs(self.field_of_view - other.field_of_view) <= epsilon
            and abs(self.target.x - other.target.x) <= epsilon
            and abs(self.target.y - other.target.y) <= epsilon
            and abs(self.target.z - other.target.z) <= epsilon
        )

    @classmethod
    def from_position(cls, position: Vec3, target: Vec3, field_of_view: float) -> SphericalState:
        """Build the pose that places the camera at position looking at target."""
        dx = position.x - target.x
        dy = position.y - target.y
        dz = position.z - target.z
        radius = math.sqrt(dx * dx + dy * dy + dz * dz)
        if radius < MIN_RADIUS_EPSILON:
            return cls(0.0, math.pi / 2, MIN_RADIUS_EPSILON, target, field_of_view)

        phi = math.acos(max(-1.0, min(1.0, dy / radius)))
        theta = math.atan2(dx, dz)
        return cls(theta, phi, radius, target, field_of_view)
