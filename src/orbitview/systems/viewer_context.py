"""Viewer context for passing shared state between systems.

This module provides the ViewerContext class, the registry through which the
camera core's systems find each other and the host-provided collaborators.

Key components stored in the context:
- Systems registry: every system accessed via get_system() or its role attribute
- Event bus: the publish/subscribe hub for semantic change events
- Ray caster: the renderer-owned surface query used by tap-to-recenter

Example usage:
    context = ViewerContext(event_bus=event_bus, ray_caster=renderer)

    # Register systems (done by SystemLoader)
    context.register_system("camera", camera_controller)

    # Systems access each other by role
    context.camera_controller.jump_to_goal()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from orbitview.events import EventBus
    from orbitview.systems.announcer.manager import OrientationAnnouncer
    from orbitview.systems.base import BaseSystem
    from orbitview.systems.camera.base import CameraBaseManager
    from orbitview.systems.camera.raycast import RayCaster
    from orbitview.systems.input.base import InputBaseManager
    from orbitview.systems.prompt.manager import InteractionPromptStateMachine


class ViewerContext:
    """Central context object providing access to all viewer systems.

    Systems are registered by name and, when they declare a role, exposed as an
    attribute of that name so collaborators can be reached without casts.
    Individual systems can be swapped for mocks in tests by registering a
    replacement under the same name.

    Attributes:
        event_bus: Publish/subscribe event system for decoupled communication.
        ray_caster: Renderer-owned surface query, or None when the host has none.
    """

    camera_controller: CameraBaseManager
    input_manager: InputBaseManager
    prompt: InteractionPromptStateMachine
    announcer: OrientationAnnouncer

    def __init__(self, event_bus: EventBus, ray_caster: RayCaster | None = None) -> None:
        """Initialize the viewer context.

        Args:
            event_bus: Central event system systems publish to and subscribe on.
            ray_caster: Object answering position_and_normal_from_point(x, y); may be
                None, in which case taps always revert the target to auto.
        """
        self.event_bus = event_bus
        self.ray_caster = ray_caster

        # Registry for all pluggable systems (accessed via get_system)
        self._systems: dict[str, BaseSystem] = {}

    def update_ray_caster(self, ray_caster: RayCaster | None) -> None:
        """Replace the surface query, e.g. when the renderer loads a new scene."""
        self.ray_caster = ray_caster

    def register_system(self, name: str, system: BaseSystem) -> None:
        """Register a system with the context.

        Args:
            name: Unique identifier for the system (e.g., "camera", "input").
            system: The system instance to register.
        """
        self._systems[name] = system

        if system.role:
            setattr(self, system.role, system)

    def get_system(self, name: str) -> BaseSystem | None:
        """Get a registered system by name, or None if not registered."""
        return self._systems.get(name)

    def get_systems(self) -> dict[str, BaseSystem]:
        """Get all registered systems."""
        return self._systems
