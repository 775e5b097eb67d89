"""Base class for InputManager."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from orbitview.systems.base import BaseSystem

if TYPE_CHECKING:
    from collections.abc import Sequence

    from orbitview.systems.gesture.synthetic import SyntheticInteraction
    from orbitview.systems.input.events import KeyEvent, PointerEvent, WheelEvent


class InputBaseManager(BaseSystem, ABC):
    """Base class for InputManager."""

    role = "input_manager"

    @abstractmethod
    def handle_pointer(self, event: PointerEvent) -> None:
        """Route a genuine pointer event to the gesture resolver."""
        ...

    @abstractmethod
    def handle_pointers(self, events: Sequence[PointerEvent]) -> None:
        """Route pointer events that happened at the same instant as one batch."""
        ...

    @abstractmethod
    def handle_wheel(self, event: WheelEvent) -> None:
        """Route a genuine wheel event to the gesture resolver."""
        ...

    @abstractmethod
    def handle_key(self, event: KeyEvent) -> bool:
        """Route a genuine key press; return True if it moved the camera."""
        ...

    @abstractmethod
    def interact(self, interaction: SyntheticInteraction) -> bool:
        """Start scripted playback; return False if the request was ignored."""
        ...

    @abstractmethod
    def set_viewport(self, width: float, height: float) -> None:
        """Update the interactive surface size in pixels."""
        ...
