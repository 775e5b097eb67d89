"""Base class for pluggable systems.

This module provides the abstract base class that every viewer system inherits
from. Systems are the building blocks of the camera core, each handling one
aspect of the viewer (camera pose, input routing, interaction prompt,
accessibility status).

Example:
    Creating a custom system::

        from orbitview.systems.base import BaseSystem

        class AutoRotate(BaseSystem):
            name = "auto_rotate"

            def setup(self, context):
                self.speed = 0.3

            def update(self, delta_time, context):
                controller = context.get_system("camera")
                with controller.interaction(ChangeSource.AUTOMATIC):
                    controller.adjust_orbit(self.speed * delta_time, 0.0)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from orbitview.systems.viewer_context import ViewerContext


class BaseSystem(ABC):
    """Base class for all pluggable systems.

    Each system handles a specific aspect of the viewer. Systems are set up,
    updated and cleaned up in a fixed order by the SystemLoader, which is what
    guarantees that input is applied to the goal pose before the camera
    interpolates toward it within a frame.

    Attributes:
        name: Unique identifier for the system. Must be defined as a class variable.
        role: Attribute name under which the ViewerContext exposes the system.
        dependencies: Names of systems that must be set up before this one.
    """

    # System identifier (must be unique across all systems)
    name: ClassVar[str]

    # Attribute name on ViewerContext (e.g. "camera_controller")
    role: ClassVar[str | None] = None

    # Other systems this one depends on (by name)
    # Systems must be listed after their dependencies
    dependencies: ClassVar[list[str]] = []

    @abstractmethod
    def setup(self, context: ViewerContext) -> None:
        """Initialize the system when the viewer is assembled.

        Called after all systems have been registered with the context. Use it to
        subscribe to events and look up the systems this one collaborates with.

        Args:
            context: Viewer context providing the event bus and other systems.
        """

    def update(self, delta_time: float, context: ViewerContext) -> None:  # noqa: B027
        """Called once per frame.

        Args:
            delta_time: Time elapsed since the last frame, in seconds.
            context: Viewer context providing access to other systems.
        """

    def cleanup(self) -> None:  # noqa: B027
        """Called when the viewer is detached.

        Override this method to unsubscribe from events and drop pending timers so
        no callback fires after the host has let go of the viewer.
        """

    def on_key_press(self, symbol: int, modifiers: int, context: ViewerContext) -> bool:
        """Handle key press events.

        Args:
            symbol: Arcade key constant for the pressed key.
            modifiers: Bitfield of modifier keys held.
            context: Viewer context providing access to other systems.

        Returns:
            True if the event was handled and should stop propagating, False otherwise.
        """
        return False
