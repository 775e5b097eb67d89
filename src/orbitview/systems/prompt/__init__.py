"""Interaction prompt shown after the viewer sits idle."""

from orbitview.systems.prompt.events import PromptVisibilityChangedEvent
from orbitview.systems.prompt.manager import InteractionPromptStateMachine, PromptOptions

__all__ = ["InteractionPromptStateMachine", "PromptOptions", "PromptVisibilityChangedEvent"]
