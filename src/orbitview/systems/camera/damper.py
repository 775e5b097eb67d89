"""Exponential decay from a current value toward a goal value.

Every frame each channel closes a fixed fraction of the remaining gap:

    current += (goal - current) * (1 - exp(-decay_rate * dt))

The fraction depends only on dt, so the motion looks the same at any frame
rate, never overshoots and never oscillates. dt is capped at max_time_step so a
frame arriving after a long pause (a backgrounded window) does not teleport the
camera. Once the remaining gap is below epsilon the channel snaps to the goal,
which is what lets settling terminate.
"""

from __future__ import annotations

import math

from pyglet.math import Vec3

from orbitview.systems.camera.spherical import shortest_arc


class DampedInterpolator:
    """Stateless stepping rule shared by every camera channel.

    Attributes:
        decay_rate: Decay constant in 1/s. 0 means "jump": step() returns the goal.
        max_time_step: Upper bound on the dt used for one step, in seconds.
        epsilon: Gap below which a channel snaps to its goal.
    """

    def __init__(self, decay_rate: float, max_time_step: float = 0.1, epsilon: float = 1e-6) -> None:
        """Initialize the interpolator.

        Args:
            decay_rate: Decay constant in 1/s; 0 disables damping.
            max_time_step: Largest dt honoured per step, in seconds.
            epsilon: Snap threshold, in the channel's own units.
        """
        self.decay_rate = decay_rate
        self.max_time_step = max_time_step
        self.epsilon = epsilon

    def factor(self, delta_time: float) -> float:
        """Fraction of the remaining gap closed by a step of delta_time seconds."""
        if not math.isfinite(delta_time):
            return 0.0
        if self.decay_rate <= 0.0:
            return 1.0
        dt = min(max(delta_time, 0.0), self.max_time_step)
        return 1.0 - math.exp(-self.decay_rate * dt)

    def step(self, current: float, goal: float, delta_time: float, normalization: float = 1.0) -> float:
        """Advance a scalar channel.

        Args:
            current: Present value.
            goal: Value being approached.
            delta_time: Seconds since the previous step.
            normalization: Scale of the channel; the snap threshold is
                epsilon * normalization, so large distances settle as readily as
                small angles.
        """
        threshold = self.epsilon * max(normalization, 1.0)
        if abs(goal - current) <= threshold:
            return goal
        value = current + (goal - current) * self.factor(delta_time)
        return goal if abs(goal - value) <= threshold else value

    def step_angle(self, current: float, goal: float, delta_time: float) -> float:
        """Advance an angular channel along the shortest arc.

        The result is expressed near current (not wrapped), and snaps to the goal
        value itself once the arc between them is below epsilon.
        """
        arc = shortest_arc(current, goal)
        if abs(arc) <= self.epsilon:
            return goal
        remaining = arc * (1.0 - self.factor(delta_time))
        return goal if abs(remaining) <= self.epsilon else current + arc - remaining

    def step_vector(self, current: Vec3, goal: Vec3, delta_time: float, normalization: float = 1.0) -> Vec3:
        """Advance a vector channel as one unit, so all axes arrive together."""
        threshold = self.epsilon * max(normalization, 1.0)
        dx = goal.x - current.x
        dy = goal.y - current.y
        dz = goal.z - current.z
        if max(abs(dx), abs(dy), abs(dz)) <= threshold:
            return goal
        keep = 1.0 - self.factor(delta_time)
        if max(abs(dx), abs(dy), abs(dz)) * keep <= threshold:
            return goal
        return Vec3(goal.x - dx * keep, goal.y - dy * keep, goal.z - dz * keep)
