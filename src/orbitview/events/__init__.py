"""Module for events."""

from orbitview.events.base import Event, EventBus, ViewerLoadedEvent

__all__ = [
    "Event",
    "EventBus",
    "ViewerLoadedEvent",
]
