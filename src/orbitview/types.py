"""Custom types and enumerations."""

from enum import Enum, auto


class ChangeSource(Enum):
    """What caused a camera change."""

    NONE = auto()
    USER_INTERACTION = auto()
    AUTOMATIC = auto()
    NAVIGATION = auto()


class GestureKind(Enum):
    """Classification tag carried by a gesture session."""

    NONE = auto()
    ROTATE = auto()
    PAN = auto()
    ZOOM = auto()


class GestureState(Enum):
    """States of the pointer gesture state machine."""

    IDLE = auto()
    ROTATE_ARMED = auto()
    ROTATING = auto()
    PAN_ZOOM_ARMED = auto()
    PANNING = auto()
    ZOOMING = auto()


class PointerPhase(Enum):
    """Phase of a normalized pointer event."""

    DOWN = auto()
    MOVE = auto()
    UP = auto()


class PromptMode(Enum):
    """Interaction prompt modes."""

    AUTO = "auto"
    NONE = "none"


class PromptState(Enum):
    """Visibility states of the interaction prompt."""

    HIDDEN = auto()
    VISIBLE = auto()
