"""Event system for decoupled viewer event handling.

This module provides a publish/subscribe event system that lets the camera core
report what happened (camera moved, prompt shown, status text changed) without
knowing who listens. Hosts subscribe to the events they render; systems inside
the core subscribe to each other's events instead of holding references.

The event system consists of:
- Event: Base class for all viewer events
- ViewerLoadedEvent: Fired once a scene has been framed
- EventBus: Central hub for subscribing to and publishing events

Example usage:
    # Create an event bus
    event_bus = EventBus()

    # Subscribe to camera changes
    def handle_camera_change(event: CameraChangeEvent):
        renderer.place_camera(event.state)

    event_bus.subscribe(CameraChangeEvent, handle_camera_change)

    # Clean up when done
    event_bus.clear()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from orbitview.systems.camera.constraints import SceneFraming


@dataclass
class Event:
    """Base event class."""


@dataclass
class ViewerLoadedEvent(Event):
    """Fired when a scene has been framed and the camera placed.

    Published by the ModelViewer after the camera controller has resolved its
    auto constraints against the new scene and jumped to the initial pose. The
    interaction prompt starts its idle timer on this event.

    Attributes:
        framing: Bounding sphere and aspect ratio the scene was framed with.
    """

    framing: SceneFraming


class EventBus:
    """Central event bus for publish/subscribe event handling.

    Publishers emit events without knowing who (if anyone) will handle them,
    and subscribers listen for events without knowing who publishes them.

    Thread safety: This implementation is NOT thread-safe. All subscribe, publish,
    and unsubscribe calls happen on the frame thread, which is the only thread the
    camera core runs on.

    Example usage:
        bus = EventBus()

        def on_status(event: StatusTextEvent):
            live_region.text = event.text

        bus.subscribe(StatusTextEvent, on_status)
        bus.publish(StatusTextEvent("View from stage front"))
        bus.unsubscribe(StatusTextEvent, on_status)
    """

    def __init__(self) -> None:
        """Initialize the event bus with no registered listeners."""
        self.listeners: dict[type[Event], list[Callable[[Event], None]]] = {}

    def subscribe(self, event_type: type[Event], handler: Callable[[Event], None]) -> None:
        """Subscribe a handler to an event type.

        Handlers subscribed to the same event type are called in the order they
        were registered. The same handler can be subscribed multiple times and
        will be called once per subscription.

        Args:
            event_type: The type of event to listen for (e.g., CameraChangeEvent).
            handler: Callback that takes the event as its only argument.
        """
        if event_type not in self.listeners:
            self.listeners[event_type] = []
        self.listeners[event_type].append(handler)

    def unsubscribe(self, event_type: type[Event], handler: Callable[[Event], None]) -> None:
        """Unsubscribe a handler from an event type.

        Removes every registration of the handler. Unknown handlers are ignored.

        Args:
            event_type: The type of event to stop listening for.
            handler: The handler function to remove.
        """
        if event_type in self.listeners:
            self.listeners[event_type] = [h for h in self.listeners[event_type] if h != handler]

    def publish(self, event: Event) -> None:
        """Publish an event to all subscribed handlers.

        Handlers are called synchronously in registration order. Events with no
        subscribers are silently dropped. Exceptions raised by a handler propagate
        and prevent later handlers from running.

        Args:
            event: The event instance to publish. Its exact type selects the handlers.
        """
        event_type = type(event)
        if event_type in self.listeners:
            for handler in list(self.listeners[event_type]):
                handler(event)

    def clear(self) -> None:
        """Clear all event listeners for all event types."""
        self.listeners.clear()

    def unregister_all(self, subscriber: object) -> None:
        """Unregister all handlers for a specific subscriber.

        Removes every bound method whose ``__self__`` is the subscriber. Systems
        call this from cleanup() so a detached viewer leaves no dangling callbacks.

        Args:
            subscriber: The instance whose bound-method handlers should be removed.
        """
        for event_type in self.listeners:
            self.listeners[event_type] = [
                h for h in self.listeners[event_type] if not (hasattr(h, "__self__") and h.__self__ is subscriber)
            ]
