"""Surface query the renderer provides for tap-to-recenter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pyglet.math import Vec3


@dataclass(frozen=True)
class SurfaceHit:
    """Point on the model under a screen position.

    Attributes:
        position: Hit point in world space.
        normal: Surface normal at the hit point.
    """

    position: Vec3
    normal: Vec3


class RayCaster(Protocol):
    """Anything that can cast a ray from the camera through a screen point."""

    def position_and_normal_from_point(self, x: float, y: float) -> SurfaceHit | None:
        """Cast through normalized device coordinates (-1..1, +y up).

        Returns:
            The nearest hit, or None when the ray misses the model.
        """
        ...
