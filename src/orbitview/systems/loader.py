"""Ordered setup, update and teardown of viewer systems.

The SystemLoader owns the frame order of the camera core. Systems are driven in
the order they were given, so listing the input manager before the camera
controller guarantees that queued input reaches the goal pose before the
controller interpolates the current pose toward it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from orbitview.systems.base import BaseSystem
    from orbitview.systems.viewer_context import ViewerContext

logger = logging.getLogger(__name__)


class MissingDependencyError(Exception):
    """Raised when a system depends on a system that is not loaded before it."""


class SystemLoader:
    """Drives a fixed, ordered list of systems through their lifecycle.

    Attributes:
        systems: Systems in frame order.
    """

    def __init__(self, systems: Iterable[BaseSystem]) -> None:
        """Initialize the loader.

        Args:
            systems: Systems in the order they should be set up and updated.

        Raises:
            MissingDependencyError: If a system names a dependency that is not
                listed before it.
        """
        self.systems: list[BaseSystem] = list(systems)

        seen: set[str] = set()
        for system in self.systems:
            missing = [dep for dep in system.dependencies if dep not in seen]
            if missing:
                msg = f"System '{system.name}' requires {missing} to be loaded before it"
                raise MissingDependencyError(msg)
            seen.add(system.name)

    def setup_all(self, context: ViewerContext) -> None:
        """Register every system with the context, then set each one up."""
        for system in self.systems:
            context.register_system(system.name, system)
        for system in self.systems:
            system.setup(context)
            logger.debug("Set up system '%s'", system.name)

    def update_all(self, delta_time: float, context: ViewerContext) -> None:
        """Update every system for one frame, in order."""
        for system in self.systems:
            system.update(delta_time, context)

    def on_key_press_all(self, symbol: int, modifiers: int, context: ViewerContext) -> bool:
        """Offer a key press to each system until one handles it."""
        return any(system.on_key_press(symbol, modifiers, context) for system in self.systems)

    def cleanup_all(self) -> None:
        """Clean up every system in reverse order."""
        for system in reversed(self.systems):
            system.cleanup()
            logger.debug("Cleaned up system '%s'", system.name)
