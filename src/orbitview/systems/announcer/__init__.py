"""Accessibility announcements of the camera orientation."""

from orbitview.systems.announcer.events import StatusTextEvent
from orbitview.systems.announcer.manager import OrientationAnnouncer, describe_orientation

__all__ = ["OrientationAnnouncer", "StatusTextEvent", "describe_orientation"]
