"""Helpers shared by the test modules."""

from orbitview.events import EventBus
from orbitview.systems.camera.manager import CameraController
from orbitview.systems.viewer_context import ViewerContext

FRAME = 1 / 60


def settle(controller: CameraController, delta_time: float = FRAME, max_frames: int = 10_000) -> int:
    """Update a controller until it reaches its goal.

    Returns:
        Number of frames it took.

    Raises:
        AssertionError: If the controller does not settle within max_frames.
    """
    for frame in range(max_frames):
        if controller.is_settled:
            return frame
        controller.update(delta_time)
    msg = f"Controller did not settle within {max_frames} frames"
    raise AssertionError(msg)


def make_context(event_bus: EventBus | None = None) -> ViewerContext:
    """Create a context around a real event bus."""
    return ViewerContext(event_bus or EventBus())


class Recorder:
    """Event handler that keeps every event it receives."""

    def __init__(self) -> None:
        """Start with no events."""
        self.events: list = []

    def __call__(self, event: object) -> None:
        """Record an event."""
        self.events.append(event)
