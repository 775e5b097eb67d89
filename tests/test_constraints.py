"""Unit tests for constraint resolution and clamping."""

import math
import unittest

import pytest
from pyglet.math import Vec3

from orbitview.systems.camera.constraints import (
    AUTO,
    ConstraintSet,
    Range,
    SceneFraming,
    clamp,
)
from orbitview.systems.camera.options import ControllerOptions
from orbitview.systems.camera.spherical import POLE_EPSILON, SphericalState

UNIT_IDEAL_DISTANCE = 1.0 / math.sin(math.radians(15.0))


class TestSceneFraming(unittest.TestCase):
    """Test ideal framing distance."""

    def test_ideal_distance_square_viewport(self) -> None:
        """Test that a square viewport is limited by the vertical field of view."""
        framing = SceneFraming(bounding_radius=1.0, aspect=1.0)

        assert framing.ideal_distance(30.0) == pytest.approx(UNIT_IDEAL_DISTANCE)

    def test_ideal_distance_wide_viewport_matches_square(self) -> None:
        """Test that a landscape viewport is still limited vertically."""
        wide = SceneFraming(bounding_radius=1.0, aspect=2.0)

        assert wide.ideal_distance(30.0) == pytest.approx(UNIT_IDEAL_DISTANCE)

    def test_ideal_distance_portrait_viewport_backs_off(self) -> None:
        """Test that a portrait viewport is limited by the narrower horizontal angle."""
        portrait = SceneFraming(bounding_radius=1.0, aspect=0.5)
        half_horizontal = math.atan(math.tan(math.radians(15.0)) * 0.5)

        assert portrait.ideal_distance(30.0) == pytest.approx(1.0 / math.sin(half_horizontal))
        assert portrait.ideal_distance(30.0) > UNIT_IDEAL_DISTANCE

    def test_ideal_distance_scales_with_radius(self) -> None:
        """Test that the distance is proportional to the bounding radius."""
        framing = SceneFraming(bounding_radius=3.0)

        assert framing.ideal_distance(30.0) == pytest.approx(3.0 * UNIT_IDEAL_DISTANCE)

    def test_with_aspect(self) -> None:
        """Test that with_aspect keeps the sphere and changes the aspect."""
        framing = SceneFraming(bounding_radius=2.0, center=Vec3(1.0, 0.0, 0.0)).with_aspect(1.5)

        assert framing.aspect == 1.5
        assert framing.bounding_radius == 2.0
        assert framing.center.x == 1.0


class TestConstraintResolution(unittest.TestCase):
    """Test resolving AUTO bounds against a scene."""

    def setUp(self) -> None:
        """Set up default options and a unit scene."""
        self.options = ControllerOptions()
        self.framing = SceneFraming(bounding_radius=1.0, aspect=1.0)

    def test_auto_bounds(self) -> None:
        """Test the values every AUTO bound resolves to."""
        resolved = ConstraintSet().resolve(self.framing, self.options)

        assert resolved.min_radius == pytest.approx(1.0)
        assert resolved.max_radius == pytest.approx(2.0 * UNIT_IDEAL_DISTANCE)
        assert resolved.min_fov == 25.0
        assert resolved.max_fov == 30.0
        assert resolved.min_phi == pytest.approx(math.radians(22.5))
        assert resolved.max_phi == pytest.approx(math.radians(157.5))
        assert resolved.min_theta == -math.inf
        assert resolved.max_theta == math.inf
        assert resolved.decay_rate == 20.0
        assert resolved.conflicts == ()

    def test_auto_radius_follows_scene(self) -> None:
        """Test that the auto radius bounds scale with the bounding sphere."""
        resolved = ConstraintSet().resolve(SceneFraming(bounding_radius=2.0), self.options)

        assert resolved.min_radius == pytest.approx(2.0)
        assert resolved.max_radius == pytest.approx(4.0 * UNIT_IDEAL_DISTANCE)

    def test_literal_bounds_are_kept(self) -> None:
        """Test that literal bounds override the auto values."""
        constraints = ConstraintSet(radius=Range(0.5, 3.0), field_of_view=Range(10.0, 45.0), decay_rate=0.0)

        resolved = constraints.resolve(self.framing, self.options)

        assert resolved.min_radius == 0.5
        assert resolved.max_radius == 3.0
        assert resolved.min_fov == 10.0
        assert resolved.max_fov == 45.0
        assert resolved.decay_rate == 0.0

    def test_with_minimum_and_maximum_orbit(self) -> None:
        """Test the partial builders keep the other end of each range."""
        constraints = ConstraintSet().with_minimum_orbit(theta=-1.0, radius=2.0).with_maximum_orbit(theta=1.0)

        assert constraints.theta == Range(-1.0, 1.0)
        assert constraints.radius == Range(2.0, AUTO)
        assert constraints.phi == Range(AUTO, AUTO)

    def test_phi_never_reaches_the_poles(self) -> None:
        """Test that a phi window including the poles is pulled off them."""
        resolved = ConstraintSet(phi=Range(0.0, math.pi)).resolve(self.framing, self.options)

        assert resolved.min_phi == POLE_EPSILON
        assert resolved.max_phi == pytest.approx(math.pi - POLE_EPSILON)

    def test_conflict_collapses_to_minimum(self) -> None:
        """Test that a minimum above its maximum wins and is reported."""
        constraints = ConstraintSet().with_minimum_orbit(radius=10.0).with_maximum_orbit(radius=5.0)

        with self.assertLogs("orbitview.systems.camera.constraints", level="WARNING") as logs:
            resolved = constraints.resolve(self.framing, self.options)

        assert resolved.min_radius == 10.0
        assert resolved.max_radius == 10.0
        assert len(resolved.conflicts) == 1
        assert resolved.conflicts[0].axis == "radius"
        assert resolved.conflicts[0].maximum == 5.0
        assert "radius" in logs.output[0]

    def test_conflict_against_auto_bound(self) -> None:
        """Test that a literal minimum above an auto maximum is a conflict."""
        constraints = ConstraintSet(field_of_view=Range(40.0, AUTO))

        with self.assertLogs("orbitview.systems.camera.constraints", level="WARNING"):
            resolved = constraints.resolve(self.framing, self.options)

        assert resolved.min_fov == 40.0
        assert resolved.max_fov == 40.0

    def test_target_axis_conflict(self) -> None:
        """Test that target bounds are checked per axis."""
        constraints = ConstraintSet(target_minimum=(1.0, None, None), target_maximum=(0.0, None, None))

        with self.assertLogs("orbitview.systems.camera.constraints", level="WARNING"):
            resolved = constraints.resolve(self.framing, self.options)

        assert resolved.target_minimum[0] == 1.0
        assert resolved.target_maximum[0] == 1.0
        assert resolved.conflicts[0].axis == "target.x"


class TestClamp(unittest.TestCase):
    """Test clamping poses against resolved constraints."""

    def setUp(self) -> None:
        """Set up default options and a unit scene."""
        self.options = ControllerOptions()
        self.framing = SceneFraming(bounding_radius=1.0, aspect=1.0)
        self.resolved = ConstraintSet().resolve(self.framing, self.options)

    def test_clamp_radius_phi_and_fov(self) -> None:
        """Test that each channel is clamped independently."""
        state = SphericalState(theta=0.3, phi=0.0, radius=100.0, field_of_view=90.0)

        clamped = clamp(state, self.resolved)

        assert clamped.theta == 0.3
        assert clamped.phi == pytest.approx(math.radians(22.5))
        assert clamped.radius == pytest.approx(2.0 * UNIT_IDEAL_DISTANCE)
        assert clamped.field_of_view == 30.0

    def test_unbounded_theta_keeps_full_turns(self) -> None:
        """Test that an unbounded azimuth is left alone."""
        assert self.resolved.clamp_theta(7.5 * math.pi) == 7.5 * math.pi

    def test_new_minimum_theta_is_reached_exactly(self) -> None:
        """Test that raising the minimum azimuth above the pose snaps to it."""
        resolved = ConstraintSet().with_minimum_orbit(theta=2.0).resolve(self.framing, self.options)

        assert resolved.clamp_theta(0.0) == 2.0

    def test_narrow_window_wraps_before_clamping(self) -> None:
        """Test that a full turn outside a narrow window is wrapped back into it."""
        resolved = ConstraintSet(theta=Range(-0.5, 0.5)).resolve(self.framing, self.options)

        assert resolved.clamp_theta(2 * math.pi + 0.3) == pytest.approx(0.3)
        assert resolved.clamp_theta(3.0) == 0.5
        assert resolved.clamp_theta(-3.0) == -0.5
        assert not resolved.theta_wraps

    def test_full_window_wraps(self) -> None:
        """Test that a window of a full turn is marked as wrapping."""
        resolved = ConstraintSet(theta=Range(-math.pi, math.pi)).resolve(self.framing, self.options)

        assert resolved.theta_wraps

    def test_target_bounds(self) -> None:
        """Test that bounded target axes are clamped and the others left alone."""
        resolved = ConstraintSet(target_minimum=(0.0, None, None), target_maximum=(None, 1.0, None)).resolve(
            self.framing, self.options
        )

        target = resolved.clamp_target(Vec3(-1.0, 5.0, -7.0))

        assert target.x == 0.0
        assert target.y == 1.0
        assert target.z == -7.0

    def test_clamp_is_idempotent(self) -> None:
        """Test that clamping an already clamped pose changes nothing."""
        windows = [
            ConstraintSet(),
            ConstraintSet(theta=Range(-0.5, 0.5)),
            ConstraintSet().with_minimum_orbit(theta=2.0),
            ConstraintSet(theta=Range(1.0, 4.0), radius=Range(2.0, 3.0)),
        ]
        states = [
            SphericalState(theta=theta, phi=phi, radius=radius, field_of_view=fov)
            for theta in (-7.0, -3.0, 0.0, 0.4, 2.5, 9.0)
            for phi in (-1.0, 0.5, 1.5, 4.0)
            for radius, fov in ((0.1, 10.0), (3.0, 27.0), (50.0, 80.0))
        ]
        for constraints in windows:
            resolved = constraints.resolve(self.framing, self.options)
            for state in states:
                once = resolved.clamp(state)
                twice = resolved.clamp(once)
                assert twice.theta == once.theta
                assert twice.phi == once.phi
                assert twice.radius == once.radius
                assert twice.field_of_view == once.field_of_view

    def test_clip_planes(self) -> None:
        """Test that the far plane reaches past the model from the farthest orbit."""
        state = SphericalState(theta=0.0, phi=math.pi / 2, radius=3.0)

        near, far = self.resolved.clip_planes(state, self.framing)

        assert near > 0.0
        assert far >= self.resolved.max_radius + 2.0
        assert near < far
