"""Camera controller with damped orbit, pan and zoom.

This module provides the orchestrator of the camera core. It owns two poses:

- goal: set instantly by API calls, gestures and keyboard input
- current: advanced toward goal once per frame by exponential damping

Every goal change is clamped against the resolved constraints, so the goal is
always a satisfiable pose; out-of-range input is absorbed, never rejected.

Key Features:
    - Partial goal updates (orbit, target, field of view), each accepting AUTO
    - Relative orbit adjustment and camera-plane panning for gestures
    - Instant jump to goal for initial placement and deterministic tests
    - Auto radius and target recomputed on scene load, resize and fov change
    - Tap-to-recenter through a renderer-provided ray caster
    - One CameraChangeEvent per frame at most, tagged with its source

Change sources:
    Calls made inside ``with controller.interaction(source):`` are attributed to
    that source (USER_INTERACTION for gestures, AUTOMATIC for synthetic
    playback). Other goal setters are NAVIGATION. Corrections caused by
    constraint or framing changes are NONE.

Usage Example:
    controller = CameraController()
    controller.load_scene(SceneFraming(bounding_radius=1.5, aspect=16 / 9))

    controller.set_goal_orbit(theta=math.pi / 4)

    # Each frame
    controller.update(delta_time)
    renderer.place_camera(controller.current)
"""

from __future__ import annotations

import contextlib
import logging
import math
from typing import TYPE_CHECKING, ClassVar

from pyglet.math import Vec3

from orbitview.systems.camera.base import CameraBaseManager
from orbitview.systems.camera.constraints import AUTO, ConstraintSet, SceneFraming
from orbitview.systems.camera.damper import DampedInterpolator
from orbitview.systems.camera.events import CameraChangeEvent, ConstraintConflictEvent
from orbitview.systems.camera.options import ControllerOptions
from orbitview.systems.camera.spherical import SphericalState
from orbitview.types import ChangeSource

if TYPE_CHECKING:
    from collections.abc import Iterator

    from orbitview.events import EventBus
    from orbitview.systems.camera.constraints import Bound, ResolvedConstraints
    from orbitview.systems.camera.raycast import RayCaster
    from orbitview.systems.viewer_context import ViewerContext

logger = logging.getLogger(__name__)


class CameraController(CameraBaseManager):
    """Owns the goal and current camera poses and advances one toward the other.

    No other component mutates the poses; callers receive immutable
    SphericalState snapshots through the ``current`` and ``goal`` properties.

    Attributes:
        options: Defaults that auto values resolve against.
        event_bus: Where change events are published; None until setup().
        interpolator: Stepping rule applied to every channel each frame.
    """

    name: ClassVar[str] = "camera"

    def __init__(
        self,
        options: ControllerOptions | None = None,
        constraints: ConstraintSet | None = None,
        framing: SceneFraming | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        """Initialize the controller at the default pose for the given scene.

        Args:
            options: Per-instance defaults. Built from settings when omitted.
            constraints: Declared bounds. Defaults to all-auto bounds with an
                unbounded azimuth.
            framing: Scene bounding sphere and aspect ratio. A unit sphere at the
                origin is assumed until load_scene() is called.
            event_bus: Bus for change events; usually provided later by setup().
        """
        self.options = options or ControllerOptions.from_settings()
        self.event_bus = event_bus
        self._declared = constraints or ConstraintSet()
        self._framing = framing or SceneFraming()
        self._resolved = self._declared.resolve(self._framing, self.options)
        self.interpolator = DampedInterpolator(
            self._resolved.decay_rate,
            max_time_step=self.options.max_time_step,
            epsilon=self.options.change_epsilon,
        )

        # Which goal channels follow the scene instead of a literal value
        self._radius_auto = True
        self._fov_auto = True
        self._target_auto = [True, True, True]

        initial = SphericalState(
            theta=self.options.default_theta,
            phi=self.options.default_phi,
            radius=self._framing.ideal_distance(self.options.default_fov),
            target=self._framing.center,
            field_of_view=self.options.default_fov,
        )
        self._goal = self._resolved.clamp(initial)
        self._current = self._goal

        self._source = ChangeSource.NONE
        self._interaction_source: ChangeSource | None = None
        self._published: SphericalState | None = None
        self._published_settled = False

    def setup(self, context: ViewerContext) -> None:
        """Attach to the viewer's event bus.

        Args:
            context: Viewer context providing the event bus.
        """
        self.event_bus = context.event_bus
        logger.debug("CameraController setup complete")

    def cleanup(self) -> None:
        """Detach from the event bus and forget what was last published."""
        if self.event_bus is not None:
            self.event_bus.unregister_all(self)
        self.event_bus = None
        self._published = None
        self._published_settled = False
        self._interaction_source = None
        logger.debug("CameraController cleanup complete")

    @property
    def current(self) -> SphericalState:
        """Pose being rendered."""
        return self._current

    @property
    def goal(self) -> SphericalState:
        """Pose being approached."""
        return self._goal

    @property
    def constraints(self) -> ResolvedConstraints:
        """Constraints in effect, with auto bounds resolved."""
        return self._resolved

    @property
    def declared_constraints(self) -> ConstraintSet:
        """Constraints as declared, possibly containing AUTO."""
        return self._declared

    @property
    def framing(self) -> SceneFraming:
        """Scene bounding sphere and aspect ratio auto values resolve against."""
        return self._framing

    @property
    def is_settled(self) -> bool:
        """True when the current pose has reached the goal."""
        return self._current.is_close(self._goal, self.options.change_epsilon)

    @property
    def change_source(self) -> ChangeSource:
        """Source that will be attached to the next change event."""
        return self._source

    @contextlib.contextmanager
    def interaction(self, source: ChangeSource) -> Iterator[None]:
        """Attribute goal changes made inside the block to source.

        Example:
            with controller.interaction(ChangeSource.USER_INTERACTION):
                controller.adjust_orbit(-0.1, 0.0)
        """
        previous = self._interaction_source
        self._interaction_source = source
        try:
            yield
        finally:
            self._interaction_source = previous

    def load_scene(self, framing: SceneFraming) -> None:
        """Resolve auto values against a newly loaded scene and place the camera.

        The camera jumps straight to the resolved goal; the next update()
        publishes the initial pose.

        Args:
            framing: Bounding sphere and aspect ratio of the new scene.
        """
        self._framing = framing
        self._resolve()
        self._goal = self._resolved.clamp(self._auto_refreshed(self._goal))
        self._current = self._goal
        self._source = ChangeSource.NONE
        self._published = None
        self._published_settled = False
        logger.info(
            "Framed scene: bounding radius %.3f, ideal distance %.3f",
            framing.bounding_radius,
            framing.ideal_distance(self._goal.field_of_view),
        )

    def set_aspect_ratio(self, aspect: float) -> None:
        """Re-resolve auto values for a new viewport shape.

        Args:
            aspect: Viewport width divided by height. Non-positive or non-finite
                values are ignored.
        """
        if not math.isfinite(aspect) or aspect <= 0.0:
            logger.warning("Ignoring invalid aspect ratio: %s", aspect)
            return
        if aspect == self._framing.aspect:
            return

        self._framing = self._framing.with_aspect(aspect)
        self._resolve()
        self._goal = self._resolved.clamp(self._auto_refreshed(self._goal))
        self._current = self._resolved.clamp(self._current)
        self._source = self._interaction_source or ChangeSource.NONE
        logger.debug("Aspect ratio changed to %.3f", aspect)

    def set_goal_orbit(
        self,
        theta: float | None = None,
        phi: float | None = None,
        radius: Bound | None = None,
    ) -> None:
        """Partially update the goal orbit.

        Omitted (None) fields keep their goal value. ``radius`` may be AUTO to
        follow the ideal framing distance. The result is clamped.

        Args:
            theta: New azimuth in radians.
            phi: New polar angle in radians.
            radius: New distance, or AUTO.
        """
        goal = self._goal
        if theta is not None and _is_finite("theta", theta):
            goal = goal.replace(theta=theta)
        if phi is not None and _is_finite("phi", phi):
            goal = goal.replace(phi=phi)
        if radius is AUTO:
            self._radius_auto = True
            goal = goal.replace(radius=self._framing.ideal_distance(goal.field_of_view))
        elif radius is not None and _is_finite("radius", radius):
            self._radius_auto = False
            goal = goal.replace(radius=radius)
        self._commit(goal)

    def set_goal_target(self, target: tuple[Bound | None, Bound | None, Bound | None] | Vec3) -> None:
        """Partially update the goal look-at point.

        Args:
            target: Three components. None keeps an axis, AUTO makes it follow
                the bounding-sphere center, a number sets it literally.
        """
        components = [self._goal.target.x, self._goal.target.y, self._goal.target.z]
        center = (self._framing.center.x, self._framing.center.y, self._framing.center.z)
        for index, value in enumerate(target):
            if value is None:
                continue
            if value is AUTO:
                self._target_auto[index] = True
                components[index] = center[index]
            elif _is_finite("target", value):
                self._target_auto[index] = False
                components[index] = float(value)
        self._commit(self._goal.replace(target=Vec3(components[0], components[1], components[2])))

    def set_goal_field_of_view(self, field_of_view: Bound) -> None:
        """Update the goal field of view.

        An auto radius is recomputed for the new angle so the content stays
        framed.

        Args:
            field_of_view: Vertical field of view in degrees, or AUTO.
        """
        if field_of_view is AUTO:
            self._fov_auto = True
            fov = self.options.default_fov
        elif _is_finite("field of view", field_of_view):
            self._fov_auto = False
            fov = float(field_of_view)
        else:
            return

        goal = self._goal.replace(field_of_view=self._resolved.clamp_field_of_view(fov))
        if self._radius_auto:
            goal = goal.replace(radius=self._framing.ideal_distance(goal.field_of_view))
        self._commit(goal)

    def adjust_orbit(self, delta_theta: float, delta_phi: float, delta_radius_scale: float = 1.0) -> None:
        """Relatively adjust the goal orbit.

        Angles are additive; the radius is multiplied by the scale factor, so a
        scale below 1 moves the camera closer.

        Args:
            delta_theta: Radians added to the goal azimuth.
            delta_phi: Radians added to the goal polar angle.
            delta_radius_scale: Factor applied to the goal radius.
        """
        goal = self._goal
        if _is_finite("delta theta", delta_theta) and _is_finite("delta phi", delta_phi):
            goal = goal.replace(theta=goal.theta + delta_theta, phi=goal.phi + delta_phi)
        if delta_radius_scale != 1.0 and _is_finite("radius scale", delta_radius_scale):
            if delta_radius_scale > 0.0:
                self._radius_auto = False
                goal = goal.replace(radius=goal.radius * delta_radius_scale)
            else:
                logger.warning("Ignoring non-positive radius scale: %s", delta_radius_scale)
        self._commit(goal)

    def pan(self, delta_x: float, delta_y: float, viewport_height: float) -> None:
        """Move the goal target in the camera plane by a pixel drag.

        The drag is converted to world units at the goal distance, so the model
        stays under the finger: dragging right moves the target along the
        camera's -X axis and dragging up (negative delta_y) along its -Y axis.

        Args:
            delta_x: Horizontal drag in pixels, positive to the right.
            delta_y: Vertical drag in pixels, positive downward.
            viewport_height: Height of the interactive surface in pixels.
        """
        if viewport_height <= 0.0 or not (_is_finite("pan x", delta_x) and _is_finite("pan y", delta_y)):
            return

        goal = self._goal
        world_per_pixel = 2.0 * goal.radius * math.tan(math.radians(goal.field_of_view) / 2.0) / viewport_height
        right, up = goal.basis()
        move_right = -delta_x * world_per_pixel
        move_up = delta_y * world_per_pixel
        target = Vec3(
            goal.target.x + right.x * move_right + up.x * move_up,
            goal.target.y + right.y * move_right + up.y * move_up,
            goal.target.z + right.z * move_right + up.z * move_up,
        )
        self._target_auto = [False, False, False]
        self._commit(goal.replace(target=target))

    def recenter(self, x: float, y: float, ray_caster: RayCaster | None) -> None:
        """Move the goal target to the surface under a screen point.

        On a hit the camera keeps its position and turns to look at the hit
        point, so theta, phi and radius are recomputed around the new target. On
        a miss (or without a ray caster) the target reverts to auto.

        Args:
            x: Horizontal normalized device coordinate (-1 left, 1 right).
            y: Vertical normalized device coordinate (-1 bottom, 1 top).
            ray_caster: Renderer surface query, or None.
        """
        hit = ray_caster.position_and_normal_from_point(x, y) if ray_caster is not None else None
        if hit is None:
            logger.info("Recenter missed the model at (%.3f, %.3f), reverting target to auto", x, y)
            self.set_goal_target((AUTO, AUTO, AUTO))
            return

        goal = SphericalState.from_position(self._goal.position, hit.position, self._goal.field_of_view)
        self._radius_auto = False
        self._target_auto = [False, False, False]
        logger.info("Recentered on (%.3f, %.3f, %.3f)", hit.position.x, hit.position.y, hit.position.z)
        self._commit(goal)

    def reset_to_auto(self) -> None:
        """Return the goal radius and target to their auto values."""
        self.set_goal_orbit(radius=AUTO)
        self.set_goal_target((AUTO, AUTO, AUTO))

    def set_decay_rate(self, decay_rate: Bound) -> None:
        """Change the damping rate; 0 makes the current pose follow the goal instantly."""
        self.set_constraints(
            ConstraintSet(
                theta=self._declared.theta,
                phi=self._declared.phi,
                radius=self._declared.radius,
                field_of_view=self._declared.field_of_view,
                target_minimum=self._declared.target_minimum,
                target_maximum=self._declared.target_maximum,
                decay_rate=decay_rate,
            )
        )

    def set_constraints(self, constraints: ConstraintSet) -> None:
        """Replace the constraints and immediately re-clamp both poses.

        A goal or current pose outside the new bounds snaps to them without
        animation, so a freshly set bound is reached exactly.

        Args:
            constraints: The new declared constraints.
        """
        self._declared = constraints
        self._resolve()
        goal = self._resolved.clamp(self._auto_refreshed(self._goal))
        current = self._resolved.clamp(self._current)
        if goal != self._goal or current != self._current:
            self._source = self._interaction_source or ChangeSource.NONE
        self._goal = goal
        self._current = current

    def jump_to_goal(self) -> None:
        """Make the current pose equal the goal on every channel at once."""
        self._current = self._goal

    def update(self, delta_time: float, context: ViewerContext | None = None) -> bool:
        """Advance the current pose toward the goal by one frame.

        Publishes a CameraChangeEvent when the current pose moved beyond the change
        epsilon since the last published pose, or when it has just settled.

        Args:
            delta_time: Seconds since the previous frame. A non-finite value is logged and
                treated as 0.
            context: Viewer context (unused; the controller publishes on its own bus).

        Returns:
            True if a change was published this frame.
        """
        if not _is_finite("delta time", delta_time):
            delta_time = 0.0
        current = self._current
        goal = self._goal
        step = self.interpolator

        if self._resolved.theta_wraps:
            theta = step.step_angle(current.theta, goal.theta, delta_time)
        else:
            theta = step.step(current.theta, goal.theta, delta_time)

        self._current = current.replace(
            theta=theta,
            phi=step.step(current.phi, goal.phi, delta_time),
            radius=step.step(current.radius, goal.radius, delta_time, normalization=goal.radius),
            field_of_view=step.step(current.field_of_view, goal.field_of_view, delta_time),
            target=step.step_vector(
                current.target,
                goal.target,
                delta_time,
                normalization=self._framing.bounding_radius,
            ),
        )

        settled = self.is_settled
        moved = self._published is None or not self._current.is_close(self._published, self.options.change_epsilon)
        if not moved and not (settled and not self._published_settled):
            return False

        self._published = self._current
        self._published_settled = settled
        if self.event_bus is not None:
            self.event_bus.publish(CameraChangeEvent(self._source, self._current, settled))
        return True

    def get_clip_planes(self) -> tuple[float, float]:
        """Near and far planes for the current pose."""
        return self._resolved.clip_planes(self._current, self._framing)

    def _commit(self, goal: SphericalState) -> None:
        self._goal = self._resolved.clamp(goal)
        self._source = self._interaction_source or ChangeSource.NAVIGATION

    def _resolve(self) -> None:
        self._resolved = self._declared.resolve(self._framing, self.options)
        self.interpolator.decay_rate = self._resolved.decay_rate
        if self._resolved.conflicts and self.event_bus is not None:
            self.event_bus.publish(ConstraintConflictEvent(self._resolved.conflicts))

    def _auto_refreshed(self, goal: SphericalState) -> SphericalState:
        """Recompute every goal channel that follows the scene."""
        if self._fov_auto:
            goal = goal.replace(field_of_view=self.options.default_fov)
        if self._radius_auto:
            goal = goal.replace(radius=self._framing.ideal_distance(goal.field_of_view))
        center = (self._framing.center.x, self._framing.center.y, self._framing.center.z)
        components = [goal.target.x, goal.target.y, goal.target.z]
        for index in range(3):
            if self._target_auto[index]:
                components[index] = center[index]
        return goal.replace(target=Vec3(components[0], components[1], components[2]))


def _is_finite(name: str, value: float) -> bool:
    if math.isfinite(value):
        return True
    logger.warning("Ignoring non-finite %s: %s", name, value)
    return False
