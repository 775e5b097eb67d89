"""Unit tests for DampedInterpolator."""

import math
import unittest

import pytest
from pyglet.math import Vec3

from orbitview.systems.camera.damper import DampedInterpolator
from orbitview.systems.camera.spherical import TAU


class TestDampedInterpolator(unittest.TestCase):
    """Test the exponential decay stepping rule."""

    def setUp(self) -> None:
        """Set up an interpolator at the default rate."""
        self.damper = DampedInterpolator(decay_rate=20.0)

    def test_factor(self) -> None:
        """Test the fraction of the gap closed per step."""
        assert self.damper.factor(0.05) == pytest.approx(1.0 - math.exp(-1.0))
        assert self.damper.factor(0.0) == 0.0

    def test_factor_caps_long_frames(self) -> None:
        """Test that a long pause is treated as the maximum time step."""
        assert self.damper.factor(5.0) == pytest.approx(1.0 - math.exp(-2.0))
        assert self.damper.factor(5.0) == self.damper.factor(0.1)

    def test_negative_delta_does_not_move(self) -> None:
        """Test that a negative delta time is treated as zero."""
        assert self.damper.step(0.0, 1.0, -0.5) == 0.0

    def test_non_finite_delta_does_not_move(self) -> None:
        """Test that a NaN or infinite delta time leaves the value where it is."""
        assert self.damper.factor(math.nan) == 0.0
        assert self.damper.step(0.0, 1.0, math.nan) == 0.0
        assert self.damper.step_angle(0.0, 1.0, math.inf) == 0.0

    def test_zero_decay_jumps(self) -> None:
        """Test that a decay rate of zero returns the goal immediately."""
        damper = DampedInterpolator(decay_rate=0.0)

        assert damper.step(0.0, 5.0, 0.001) == 5.0
        assert damper.step_angle(0.0, 2.0, 0.001) == 2.0

    def test_step_is_monotonic_without_overshoot(self) -> None:
        """Test that the value approaches the goal from one side only."""
        value = 0.0
        previous_gap = 1.0
        for _ in range(200):
            value = self.damper.step(value, 1.0, 1 / 60)
            gap = 1.0 - value
            assert gap >= 0.0
            assert gap <= previous_gap
            previous_gap = gap

        assert value == 1.0

    def test_step_frame_rate_independent(self) -> None:
        """Test that two half steps equal one full step."""
        one = self.damper.step(0.0, 1.0, 0.04)
        two = self.damper.step(self.damper.step(0.0, 1.0, 0.02), 1.0, 0.02)

        assert one == pytest.approx(two)

    def test_step_snaps_within_epsilon(self) -> None:
        """Test that a tiny gap snaps straight to the goal."""
        assert self.damper.step(1.0 - 1e-7, 1.0, 1 / 60) == 1.0

    def test_step_normalization_scales_snap(self) -> None:
        """Test that the snap threshold grows with the normalization."""
        assert self.damper.step(100.0 - 5e-5, 100.0, 1 / 60, normalization=100.0) == 100.0
        assert self.damper.step(100.0 - 5e-5, 100.0, 1 / 60) != 100.0

    def test_step_angle_takes_shortest_arc(self) -> None:
        """Test that an angle near a full turn moves backwards through zero."""
        value = self.damper.step_angle(0.1, TAU - 0.1, 0.05)

        assert value < 0.1
        assert value == pytest.approx(0.1 - 0.2 * (1.0 - math.exp(-1.0)))

    def test_step_angle_snaps_to_goal_value(self) -> None:
        """Test that the angle snaps to the goal itself, not a wrapped copy."""
        assert self.damper.step_angle(-1e-8, TAU, 0.05) == TAU

    def test_step_vector_moves_axes_together(self) -> None:
        """Test that every axis closes the same fraction of its gap."""
        value = self.damper.step_vector(Vec3(0.0, 0.0, 0.0), Vec3(2.0, -4.0, 0.0), 0.05)
        fraction = 1.0 - math.exp(-1.0)

        assert value.x == pytest.approx(2.0 * fraction)
        assert value.y == pytest.approx(-4.0 * fraction)
        assert value.z == 0.0

    def test_step_vector_snaps(self) -> None:
        """Test that a vector within epsilon of the goal snaps to it."""
        goal = Vec3(1.0, 2.0, 3.0)

        assert self.damper.step_vector(Vec3(1.0, 2.0, 3.0 - 1e-8), goal, 0.05) == goal
