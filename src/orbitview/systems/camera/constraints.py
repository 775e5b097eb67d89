"""Camera constraints with "auto" bounds resolved against the framed scene.

A ConstraintSet is what the host declares: literal bounds, or the AUTO sentinel
for bounds that depend on the loaded content. Resolving it against a
SceneFraming yields ResolvedConstraints, which hold plain floats and do the
clamping. Resolution runs when a scene loads, when the aspect ratio changes and
when the constraints themselves are replaced; never per frame.

Auto values:
    - radius: minimum is the bounding-sphere radius, maximum is
      ``max_radius_factor`` times the ideal framing distance
    - field of view: minimum and maximum come from ControllerOptions
    - theta: unbounded; phi: the default polar window
    - decay rate: ControllerOptions.decay_rate

A minimum that resolves above its maximum is a ConfigurationConflict. It is not
fatal: both bounds collapse to the minimum and the conflict is reported on the
resolved object so the controller can log and publish it.

Example:
    constraints = ConstraintSet().with_minimum_orbit(radius=2.0)
    resolved = constraints.resolve(SceneFraming(bounding_radius=1.0), ControllerOptions())
    state = clamp(state, resolved)
"""

from __future__ import annotations

import dataclasses
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from pyglet.math import Vec3

from orbitview.systems.camera.spherical import (
    MIN_RADIUS_EPSILON,
    POLE_EPSILON,
    TAU,
    SphericalState,
    wrap_angle,
    zero_vector,
)

if TYPE_CHECKING:
    from orbitview.systems.camera.options import ControllerOptions

logger = logging.getLogger(__name__)


class Auto(Enum):
    """Sentinel for a value resolved from scene geometry."""

    AUTO = "auto"

    def __repr__(self) -> str:
        """Show the sentinel the way it is written in code."""
        return "AUTO"


AUTO = Auto.AUTO

Bound = float | Auto

AxisBounds = tuple[float | None, float | None, float | None]


@dataclass(frozen=True)
class Range:
    """Inclusive [minimum, maximum] window; either end may be AUTO."""

    minimum: Bound = AUTO
    maximum: Bound = AUTO


@dataclass(frozen=True)
class SceneFraming:
    """What the scene query reports about the loaded content.

    Attributes:
        bounding_radius: Radius of the sphere enclosing the model.
        center: Center of that sphere; the auto target.
        aspect: Viewport width divided by height.
    """

    bounding_radius: float = 1.0
    center: Vec3 = field(default_factory=zero_vector)
    aspect: float = 1.0

    def with_aspect(self, aspect: float) -> SceneFraming:
        """Return a copy framed for a different viewport aspect ratio."""
        return dataclasses.replace(self, aspect=aspect)

    def ideal_distance(self, field_of_view: float) -> float:
        """Distance at which the bounding sphere exactly fits the viewport.

        The vertical field of view applies to the viewport height; on portrait
        viewports the horizontal angle is narrower and limits the fit instead.

        Args:
            field_of_view: Vertical field of view in degrees.
        """
        half_vertical = math.radians(field_of_view) / 2.0
        half_horizontal = math.atan(math.tan(half_vertical) * self.aspect)
        limiting = min(half_vertical, half_horizontal)
        if limiting <= 0.0:
            return MIN_RADIUS_EPSILON
        return max(self.bounding_radius / math.sin(limiting), MIN_RADIUS_EPSILON)


@dataclass(frozen=True)
class ConfigurationConflict:
    """A resolved minimum that exceeded its maximum.

    Attributes:
        axis: Which bound pair conflicted ("theta", "phi", "radius", "field_of_view",
            "target.x", "target.y" or "target.z").
        minimum: The resolved minimum; both bounds now use this value.
        maximum: The resolved maximum that was discarded.
    """

    axis: str
    minimum: float
    maximum: float


@dataclass(frozen=True)
class ConstraintSet:
    """Declared camera bounds, possibly containing AUTO.

    Attributes:
        theta: Azimuth window in radians.
        phi: Polar window in radians.
        radius: Distance window.
        field_of_view: Field of view window in degrees.
        target_minimum: Per-axis lower bounds for the target; None is unbounded.
        target_maximum: Per-axis upper bounds for the target; None is unbounded.
        decay_rate: Damping rate in 1/s, or AUTO for the controller default.
    """

    theta: Range = Range(-math.inf, math.inf)
    phi: Range = Range()
    radius: Range = Range()
    field_of_view: Range = Range()
    target_minimum: AxisBounds = (None, None, None)
    target_maximum: AxisBounds = (None, None, None)
    decay_rate: Bound = AUTO

    def with_minimum_orbit(
        self,
        theta: Bound | None = None,
        phi: Bound | None = None,
        radius: Bound | None = None,
    ) -> ConstraintSet:
        """Return a copy with new lower orbit bounds; None keeps a bound."""
        return dataclasses.replace(
            self,
            theta=_with_end(self.theta, minimum=theta),
            phi=_with_end(self.phi, minimum=phi),
            radius=_with_end(self.radius, minimum=radius),
        )

    def with_maximum_orbit(
        self,
        theta: Bound | None = None,
        phi: Bound | None = None,
        radius: Bound | None = None,
    ) -> ConstraintSet:
        """Return a copy with new upper orbit bounds; None keeps a bound."""
        return dataclasses.replace(
            self,
            theta=_with_end(self.theta, maximum=theta),
            phi=_with_end(self.phi, maximum=phi),
            radius=_with_end(self.radius, maximum=radius),
        )

    def with_field_of_view(self, minimum: Bound | None = None, maximum: Bound | None = None) -> ConstraintSet:
        """Return a copy with new field of view bounds; None keeps a bound."""
        return dataclasses.replace(self, field_of_view=_with_end(self.field_of_view, minimum, maximum))

    def resolve(self, framing: SceneFraming, options: ControllerOptions) -> ResolvedConstraints:
        """Resolve AUTO bounds against the scene and collapse conflicting pairs.

        Args:
            framing: Bounding sphere and aspect ratio of the loaded scene.
            options: Controller defaults for auto angles, fov and decay.

        Returns:
            ResolvedConstraints holding floats only, with any conflicts recorded.
        """
        conflicts: list[ConfigurationConflict] = []
        ideal = framing.ideal_distance(options.default_fov)

        min_theta, max_theta = _ordered(
            "theta",
            _pick(self.theta.minimum, -math.inf),
            _pick(self.theta.maximum, math.inf),
            conflicts,
        )
        min_phi, max_phi = _ordered(
            "phi",
            max(_pick(self.phi.minimum, options.min_phi), POLE_EPSILON),
            min(_pick(self.phi.maximum, options.max_phi), math.pi - POLE_EPSILON),
            conflicts,
        )
        min_radius, max_radius = _ordered(
            "radius",
            max(_pick(self.radius.minimum, framing.bounding_radius), MIN_RADIUS_EPSILON),
            max(_pick(self.radius.maximum, ideal * options.max_radius_factor), MIN_RADIUS_EPSILON),
            conflicts,
        )
        min_fov, max_fov = _ordered(
            "field_of_view",
            _pick(self.field_of_view.minimum, options.min_fov),
            _pick(self.field_of_view.maximum, options.default_fov),
            conflicts,
        )

        target_minimum: list[float | None] = list(self.target_minimum)
        target_maximum: list[float | None] = list(self.target_maximum)
        for index, axis in enumerate("xyz"):
            low, high = target_minimum[index], target_maximum[index]
            if low is not None and high is not None:
                target_minimum[index], target_maximum[index] = _ordered(f"target.{axis}", low, high, conflicts)

        for conflict in conflicts:
            logger.warning(
                "Conflicting %s bounds: minimum %s exceeds maximum %s, collapsing to the minimum",
                conflict.axis,
                conflict.minimum,
                conflict.maximum,
            )

        return ResolvedConstraints(
            min_theta=min_theta,
            max_theta=max_theta,
            min_phi=min_phi,
            max_phi=max_phi,
            min_radius=min_radius,
            max_radius=max_radius,
            min_fov=min_fov,
            max_fov=max_fov,
            target_minimum=(target_minimum[0], target_minimum[1], target_minimum[2]),
            target_maximum=(target_maximum[0], target_maximum[1], target_maximum[2]),
            decay_rate=max(_pick(self.decay_rate, options.decay_rate), 0.0),
            conflicts=tuple(conflicts),
        )


@dataclass(frozen=True)
class ResolvedConstraints:
    """Concrete bounds after auto resolution. Clamping lives here.

    Every clamp is idempotent: clamping an already clamped value returns it
    unchanged.
    """

    min_theta: float
    max_theta: float
    min_phi: float
    max_phi: float
    min_radius: float
    max_radius: float
    min_fov: float
    max_fov: float
    target_minimum: AxisBounds
    target_maximum: AxisBounds
    decay_rate: float
    conflicts: tuple[ConfigurationConflict, ...] = ()

    @property
    def theta_wraps(self) -> bool:
        """True when the azimuth window covers a full turn."""
        return self.max_theta - self.min_theta >= TAU

    def clamp_theta(self, theta: float) -> float:
        """Clamp an azimuth into the theta window.

        Values inside the window are returned untouched, so an unbounded azimuth
        may accumulate full turns. Values outside are first wrapped into the 2 pi
        frame centered on the window (on its finite end when the other end is
        unbounded) and then clamped, which snaps them to the angularly nearest
        bound.
        """
        low, high = self.min_theta, self.max_theta
        if low <= theta <= high:
            return theta

        if math.isfinite(low) and math.isfinite(high):
            reference = (low + high) / 2.0
        elif math.isfinite(low):
            reference = low
        else:
            reference = high
        wrapped = reference + wrap_angle(theta - reference)
        return min(max(wrapped, low), high)

    def clamp_phi(self, phi: float) -> float:
        """Clamp a polar angle into the phi window (which never wraps)."""
        return min(max(phi, self.min_phi), self.max_phi)

    def clamp_radius(self, radius: float) -> float:
        """Clamp a distance into the radius window."""
        return min(max(radius, self.min_radius), self.max_radius)

    def clamp_field_of_view(self, field_of_view: float) -> float:
        """Clamp a field of view in degrees into the fov window."""
        return min(max(field_of_view, self.min_fov), self.max_fov)

    def clamp_target(self, target: Vec3) -> Vec3:
        """Clamp each target axis that has bounds."""
        components = [target.x, target.y, target.z]
        for index in range(3):
            low = self.target_minimum[index]
            high = self.target_maximum[index]
            if low is not None:
                components[index] = max(components[index], low)
            if high is not None:
                components[index] = min(components[index], high)
        return Vec3(components[0], components[1], components[2])

    def clamp(self, state: SphericalState) -> SphericalState:
        """Clamp every channel of a pose independently."""
        return state.replace(
            theta=self.clamp_theta(state.theta),
            phi=self.clamp_phi(state.phi),
            radius=self.clamp_radius(state.radius),
            target=self.clamp_target(state.target),
            field_of_view=self.clamp_field_of_view(state.field_of_view),
        )

    def clip_planes(self, state: SphericalState, framing: SceneFraming) -> tuple[float, float]:
        """Near and far planes that keep the framed content visible.

        The far plane reaches past the bounding sphere from the camera's current
        position and from the farthest allowed orbit.

        Returns:
            Tuple (near, far).
        """
        position = state.position
        dx = position.x - framing.center.x
        dy = position.y - framing.center.y
        dz = position.z - framing.center.z
        distance = math.sqrt(dx * dx + dy * dy + dz * dz)
        reach = max(distance, self.max_radius) if math.isfinite(self.max_radius) else distance
        far = reach + 2.0 * framing.bounding_radius
        near = max(far / 1000.0, MIN_RADIUS_EPSILON)
        return near, far


def clamp(state: SphericalState, constraints: ResolvedConstraints) -> SphericalState:
    """Clamp a pose against resolved constraints."""
    return constraints.clamp(state)


def _pick(value: Bound, auto_value: float) -> float:
    if value is AUTO:
        return auto_value
    return float(value)


def _with_end(window: Range, minimum: Bound | None = None, maximum: Bound | None = None) -> Range:
    return Range(
        window.minimum if minimum is None else minimum,
        window.maximum if maximum is None else maximum,
    )


def _ordered(
    axis: str,
    minimum: float,
    maximum: float,
    conflicts: list[ConfigurationConflict],
) -> tuple[float, float]:
    if minimum > maximum:
        conflicts.append(ConfigurationConflict(axis, minimum, maximum))
        return minimum, minimum
    return minimum, maximum
