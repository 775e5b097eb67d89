"""Human-readable camera orientation for accessibility.

This module provides the OrientationAnnouncer class, which turns the settled
camera pose into a phrase such as "View from stage upper-front" and writes it
to the host's status region. Wording follows stage directions: "stage left" is
the camera's left when facing the model from the front.

Azimuth is split into eight wedges of 45 degrees, each centered on a multiple
of 45 degrees (front is centered on theta = 0, right on theta = pi / 2).
Elevation is split into three bands of 60 degrees centered on the horizon:
above it the camera looks from "upper-", below it from "lower-".

Text is only written when it changes, and only after user or navigation
motion has settled, so screen readers are not flooded while the camera moves.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, ClassVar

from orbitview.conf import settings
from orbitview.systems.announcer.events import StatusTextEvent
from orbitview.systems.base import BaseSystem
from orbitview.systems.camera.events import CameraChangeEvent
from orbitview.systems.camera.spherical import wrap_angle
from orbitview.types import ChangeSource

if TYPE_CHECKING:
    from collections.abc import Callable

    from orbitview.events import EventBus
    from orbitview.systems.viewer_context import ViewerContext

logger = logging.getLogger(__name__)

AZIMUTH_LABELS = (
    "front",
    "front-right",
    "right",
    "back-right",
    "back",
    "back-left",
    "left",
    "front-left",
)

WEDGE = math.pi / 4

ANNOUNCED_SOURCES = (ChangeSource.USER_INTERACTION, ChangeSource.NAVIGATION)


def describe_orientation(theta: float, phi: float, prefix: str | None = None) -> str:
    """Describe where the camera looks from.

    Args:
        theta: Azimuth in radians; any number of full turns.
        phi: Polar angle in radians.
        prefix: Leading words; defaults to STATUS_TEXT_PREFIX.

    Returns:
        e.g. "View from stage left" or "View from stage lower-back-right".

    Example:
        >>> describe_orientation(0.0, math.pi / 2)
        'View from stage front'
    """
    if prefix is None:
        prefix = settings.STATUS_TEXT_PREFIX

    wedge = math.floor((wrap_angle(theta) + WEDGE / 2) / WEDGE) % len(AZIMUTH_LABELS)
    if phi < math.pi / 3:
        elevation = "upper-"
    elif phi > 2 * math.pi / 3:
        elevation = "lower-"
    else:
        elevation = ""
    return f"{prefix} {elevation}{AZIMUTH_LABELS[wedge]}"


class OrientationAnnouncer(BaseSystem):
    """Writes the orientation phrase once per distinct settled view.

    Attributes:
        text: The last phrase written, or "" before the first announcement.
        sink: Optional callable receiving each new phrase, e.g. a live region setter.
        prefix: Leading words of every phrase.
    """

    name: ClassVar[str] = "announcer"
    role: ClassVar[str | None] = "announcer"
    dependencies: ClassVar[list[str]] = ["camera"]

    def __init__(self, sink: Callable[[str], None] | None = None, prefix: str | None = None) -> None:
        """Initialize the announcer.

        Args:
            sink: Receives each new phrase in addition to the StatusTextEvent.
            prefix: Leading words; defaults to STATUS_TEXT_PREFIX.
        """
        self.sink = sink
        self.prefix = prefix if prefix is not None else settings.STATUS_TEXT_PREFIX
        self.text = ""
        self.event_bus: EventBus | None = None

    def setup(self, context: ViewerContext) -> None:
        """Subscribe to camera changes."""
        self.event_bus = context.event_bus
        self.event_bus.subscribe(CameraChangeEvent, self._on_camera_change)

    def cleanup(self) -> None:
        """Unsubscribe from camera changes."""
        if self.event_bus is not None:
            self.event_bus.unregister_all(self)
        self.event_bus = None

    def _on_camera_change(self, event: CameraChangeEvent) -> None:
        if not event.settled or event.source not in ANNOUNCED_SOURCES:
            return

        text = describe_orientation(event.state.theta, event.state.phi, self.prefix)
        if text == self.text:
            return

        self.text = text
        logger.debug("Announcing: %s", text)
        if self.event_bus is not None:
            self.event_bus.publish(StatusTextEvent(text))
        if self.sink is not None:
            self.sink(text)
