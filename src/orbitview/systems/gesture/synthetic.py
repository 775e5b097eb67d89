"""Scripted one- or two-finger interactions played through the gesture resolver.

A synthetic interaction describes finger tracks in normalized viewport
coordinates (0..1, top-left origin). Each track is a piecewise-linear path of
keyframes whose ``frames`` are relative weights: a path with keyframes of 1 and
3 frames spends a quarter of the duration on the first segment and the rest on
the second, whatever the duration is.

The player presses virtual pointers at the initial positions, moves them every
tick and releases them at the end. Moves go through the same GestureResolver as
genuine pointers, so damping, dead zone and clamping behave identically.

Example:
    # Swing the camera a quarter of the viewport to the left and back
    finger = Finger(
        x=Path(0.5, (Keyframe(1, 0.25), Keyframe(1, 0.5))),
        y=Path(0.5),
    )
    viewer.interact(SyntheticInteraction(duration=1.0, fingers=(finger,)))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from orbitview.systems.input.events import PointerEvent
from orbitview.types import ChangeSource, PointerPhase

if TYPE_CHECKING:
    from orbitview.systems.gesture.resolver import GestureDelta, GestureResolver, Tap

logger = logging.getLogger(__name__)

# Synthetic pointers use ids that genuine input never produces
FIRST_SYNTHETIC_POINTER_ID = -1

MAX_FINGERS = 2


@dataclass(frozen=True)
class Keyframe:
    """One segment end of a path.

    Attributes:
        frames: Relative length of the segment leading to this keyframe.
        value: Normalized coordinate reached at the end of the segment.
    """

    frames: float
    value: float


@dataclass(frozen=True)
class Path:
    """Piecewise-linear track of one coordinate.

    Attributes:
        initial_value: Normalized coordinate at the start of playback.
        keyframes: Segments in playback order. Empty means the coordinate stays put.
    """

    initial_value: float
    keyframes: tuple[Keyframe, ...] = ()

    @property
    def total_frames(self) -> float:
        """Sum of the keyframe weights."""
        return sum(max(keyframe.frames, 0.0) for keyframe in self.keyframes)

    def sample(self, progress: float) -> float:
        """Coordinate at a fraction of the way through the path.

        Args:
            progress: 0 at the start of playback, 1 at the end.
        """
        total = self.total_frames
        if not self.keyframes:
            return self.initial_value
        if total <= 0.0:
            return self.keyframes[-1].value

        remaining = min(max(progress, 0.0), 1.0) * total
        previous = self.initial_value
        for keyframe in self.keyframes:
            frames = max(keyframe.frames, 0.0)
            if remaining <= frames:
                fraction = remaining / frames if frames > 0.0 else 1.0
                return previous + (keyframe.value - previous) * fraction
            remaining -= frames
            previous = keyframe.value
        return previous


@dataclass(frozen=True)
class Finger:
    """A virtual finger: one path per axis."""

    x: Path
    y: Path

    def sample(self, progress: float) -> tuple[float, float]:
        """Normalized (x, y) position at a fraction of the playback."""
        return self.x.sample(progress), self.y.sample(progress)


@dataclass(frozen=True)
class SyntheticInteraction:
    """A scripted gesture.

    Attributes:
        duration: Playback length in seconds.
        fingers: One finger orbits; two fingers pan and pinch.

    Raises:
        ValueError: If the duration is not positive or the finger count is not 1 or 2.
    """

    duration: float
    fingers: tuple[Finger, ...]

    def __post_init__(self) -> None:
        """Validate the duration and finger count."""
        if not self.duration > 0.0:
            msg = f"Synthetic interaction duration must be positive, got {self.duration}"
            raise ValueError(msg)
        if not 1 <= len(self.fingers) <= MAX_FINGERS:
            msg = f"Synthetic interaction needs 1 or 2 fingers, got {len(self.fingers)}"
            raise ValueError(msg)


class SyntheticInteractionPlayer:
    """Drives virtual pointers through a GestureResolver.

    Every method returns the resolver outputs the virtual pointers produced, for
    the caller to apply to the camera.

    Attributes:
        resolver: The resolver genuine pointers also go through.
        interaction: The interaction being played, or None.
        elapsed: Seconds played so far.
    """

    def __init__(self, resolver: GestureResolver) -> None:
        """Initialize an idle player bound to a resolver."""
        self.resolver = resolver
        self.interaction: SyntheticInteraction | None = None
        self.elapsed = 0.0

    @property
    def is_playing(self) -> bool:
        """True while an interaction is in flight."""
        return self.interaction is not None

    def start(self, interaction: SyntheticInteraction) -> list[GestureDelta | Tap]:
        """Begin playback, replacing any interaction already in flight.

        Presses one virtual pointer per finger at its initial position.
        """
        if self.interaction is not None:
            logger.debug("Replacing synthetic interaction in flight")
            self.cancel()

        self.interaction = interaction
        self.elapsed = 0.0
        logger.debug(
            "Starting %d-finger synthetic interaction over %.2fs",
            len(interaction.fingers),
            interaction.duration,
        )
        return self._send(interaction, PointerPhase.DOWN, 0.0)

    def step(self, delta_time: float) -> list[GestureDelta | Tap]:
        """Advance playback and move the virtual pointers.

        Releases the pointers and finishes once the duration has elapsed.

        Returns:
            Deltas produced by the moves; fingers move together, so one per frame.
        """
        if self.interaction is None:
            return []

        self.elapsed += delta_time
        progress = min(self.elapsed / self.interaction.duration, 1.0)
        outputs = self._send(self.interaction, PointerPhase.MOVE, progress)
        if progress >= 1.0:
            outputs.extend(self._send(self.interaction, PointerPhase.UP, 1.0))
            logger.debug("Synthetic interaction finished")
            self.interaction = None
        return outputs

    def cancel(self) -> None:
        """Stop playback immediately, dropping its gesture session without a tap."""
        if self.interaction is None:
            return
        logger.debug("Synthetic interaction cancelled after %.2fs", self.elapsed)
        self.interaction = None
        self.resolver.cancel()

    def _send(
        self,
        interaction: SyntheticInteraction,
        phase: PointerPhase,
        progress: float,
    ) -> list[GestureDelta | Tap]:
        width = self.resolver.viewport_width
        height = self.resolver.viewport_height
        events = []
        for index, finger in enumerate(interaction.fingers):
            x, y = finger.sample(progress)
            events.append(PointerEvent(FIRST_SYNTHETIC_POINTER_ID - index, x * width, y * height, phase))
        # All fingers move in the same instant
        return self.resolver.pointers(events, ChangeSource.AUTOMATIC)
