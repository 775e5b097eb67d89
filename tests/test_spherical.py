"""Unit tests for SphericalState and the angle helpers."""

import math
import unittest

import pytest
from pyglet.math import Vec3

from orbitview.systems.camera.spherical import (
    MIN_RADIUS_EPSILON,
    TAU,
    SphericalState,
    shortest_arc,
    wrap_angle,
)


def _dot(a: Vec3, b: Vec3) -> float:
    return a.x * b.x + a.y * b.y + a.z * b.z


class TestAngleHelpers(unittest.TestCase):
    """Test wrap_angle and shortest_arc."""

    def test_wrap_angle_range(self) -> None:
        """Test that angles wrap into (-pi, pi]."""
        assert wrap_angle(3 * math.pi / 2) == pytest.approx(-math.pi / 2)
        assert wrap_angle(-3 * math.pi / 2) == pytest.approx(math.pi / 2)
        assert wrap_angle(5 * TAU + 0.25) == pytest.approx(0.25)

    def test_wrap_angle_half_turn_is_positive(self) -> None:
        """Test that both half turns map to +pi."""
        assert wrap_angle(math.pi) == pytest.approx(math.pi)
        assert wrap_angle(-math.pi) == pytest.approx(math.pi)

    def test_shortest_arc_crosses_zero(self) -> None:
        """Test that the shortest arc goes through zero rather than around."""
        assert shortest_arc(0.1, TAU - 0.1) == pytest.approx(-0.2)
        assert shortest_arc(TAU - 0.1, 0.1) == pytest.approx(0.2)

    def test_shortest_arc_ignores_full_turns(self) -> None:
        """Test that full turns between the angles are ignored."""
        assert shortest_arc(0.0, 3 * TAU + 0.5) == pytest.approx(0.5)


class TestSphericalState(unittest.TestCase):
    """Test SphericalState geometry."""

    def test_position_front(self) -> None:
        """Test that theta 0 on the horizon places the camera on +z."""
        position = SphericalState(theta=0.0, phi=math.pi / 2, radius=4.0).position

        assert position.x == pytest.approx(0.0, abs=1e-9)
        assert position.y == pytest.approx(0.0, abs=1e-9)
        assert position.z == pytest.approx(4.0)

    def test_position_right_and_offset_target(self) -> None:
        """Test that theta pi/2 places the camera on +x around the target."""
        state = SphericalState(theta=math.pi / 2, phi=math.pi / 2, radius=2.0, target=Vec3(1.0, 2.0, 3.0))
        position = state.position

        assert position.x == pytest.approx(3.0)
        assert position.y == pytest.approx(2.0)
        assert position.z == pytest.approx(3.0, abs=1e-9)

    def test_position_above(self) -> None:
        """Test that a small phi places the camera above the target."""
        position = SphericalState(theta=0.0, phi=0.01, radius=1.0).position

        assert position.y == pytest.approx(math.cos(0.01))

    def test_basis_is_orthonormal_and_faces_target(self) -> None:
        """Test that right and up are unit length, orthogonal and perpendicular to the view."""
        state = SphericalState(theta=0.7, phi=1.1, radius=3.0)
        right, up = state.basis()
        view = state.position - state.target

        assert _dot(right, right) == pytest.approx(1.0)
        assert _dot(up, up) == pytest.approx(1.0)
        assert _dot(right, up) == pytest.approx(0.0, abs=1e-9)
        assert _dot(right, view) == pytest.approx(0.0, abs=1e-9)
        assert _dot(up, view) == pytest.approx(0.0, abs=1e-9)

    def test_basis_up_points_up_on_horizon(self) -> None:
        """Test that the up axis is world up when the camera is level."""
        _, up = SphericalState(theta=0.3, phi=math.pi / 2, radius=1.0).basis()

        assert up.y == pytest.approx(1.0)

    def test_from_position_round_trip(self) -> None:
        """Test that from_position recovers the pose that produced a position."""
        state = SphericalState(theta=0.5, phi=1.0, radius=3.0, target=Vec3(1.0, 2.0, 3.0), field_of_view=28.0)

        rebuilt = SphericalState.from_position(state.position, state.target, 28.0)

        assert rebuilt.theta == pytest.approx(0.5)
        assert rebuilt.phi == pytest.approx(1.0)
        assert rebuilt.radius == pytest.approx(3.0)
        assert rebuilt.field_of_view == 28.0

    def test_from_position_coincident_points(self) -> None:
        """Test that a camera on top of its target gets the minimum radius."""
        rebuilt = SphericalState.from_position(Vec3(1.0, 1.0, 1.0), Vec3(1.0, 1.0, 1.0), 30.0)

        assert rebuilt.radius == MIN_RADIUS_EPSILON

    def test_is_close_treats_full_turns_as_equal(self) -> None:
        """Test that poses a full turn apart compare close."""
        a = SphericalState(theta=0.0, phi=1.0, radius=2.0)
        b = SphericalState(theta=TAU, phi=1.0, radius=2.0)

        assert a.is_close(b, 1e-6)

    def test_is_close_detects_each_channel(self) -> None:
        """Test that a difference in any channel breaks closeness."""
        base = SphericalState(theta=0.0, phi=1.0, radius=2.0)

        assert not base.is_close(base.replace(phi=1.1), 1e-6)
        assert not base.is_close(base.replace(radius=2.5), 1e-6)
        assert not base.is_close(base.replace(field_of_view=25.0), 1e-6)
        assert not base.is_close(base.replace(target=Vec3(0.0, 0.1, 0.0)), 1e-6)

    def test_replace_returns_copy(self) -> None:
        """Test that replace leaves the original untouched."""
        state = SphericalState(theta=0.0, phi=1.0, radius=2.0)

        changed = state.replace(theta=1.0)

        assert state.theta == 0.0
        assert changed.theta == 1.0
