"""Per-instance camera defaults.

Default field of view, default decay rate and the other tunables are carried in
an explicit frozen value passed to the controller at construction, instead of
being read from module constants each frame. from_settings() builds one from
the project settings; tests and embedders can override single fields with
dataclasses.replace().
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from orbitview.conf import settings


@dataclass(frozen=True)
class ControllerOptions:
    """Defaults a CameraController resolves auto values against.

    Attributes:
        default_theta: Initial azimuth in radians.
        default_phi: Initial polar angle in radians.
        default_fov: Auto field of view in degrees; also the auto maximum.
        min_fov: Auto minimum field of view in degrees.
        min_phi: Auto lower polar bound in radians.
        max_phi: Auto upper polar bound in radians.
        max_radius_factor: Auto maximum radius as a multiple of the ideal distance.
        decay_rate: Auto decay rate in 1/s. 0 means current always equals goal.
        max_time_step: Longest frame delta in seconds fed to the interpolator.
        change_epsilon: Smallest pose difference that counts as a change.
    """

    default_theta: float = 0.0
    default_phi: float = math.radians(75.0)
    default_fov: float = 30.0
    min_fov: float = 25.0
    min_phi: float = math.radians(22.5)
    max_phi: float = math.radians(157.5)
    max_radius_factor: float = 2.0
    decay_rate: float = 20.0
    max_time_step: float = 0.1
    change_epsilon: float = 1e-6

    @classmethod
    def from_settings(cls) -> ControllerOptions:
        """Build options from the active settings module."""
        return cls(
            default_theta=settings.DEFAULT_THETA,
            default_phi=math.radians(settings.DEFAULT_PHI_DEG),
            default_fov=settings.DEFAULT_FOV_DEG,
            min_fov=settings.DEFAULT_MIN_FOV_DEG,
            min_phi=math.radians(settings.DEFAULT_MIN_PHI_DEG),
            max_phi=math.radians(settings.DEFAULT_MAX_PHI_DEG),
            max_radius_factor=settings.MAX_RADIUS_FACTOR,
            decay_rate=settings.DEFAULT_DECAY_RATE,
            max_time_step=settings.MAX_TIME_STEP,
            change_epsilon=settings.CHANGE_EPSILON,
        )
