"""Tests for synthetic interaction paths and playback through the input manager."""

import math
import unittest

import arcade
import pytest

from orbitview.events import EventBus
from orbitview.systems.camera import CameraChangeEvent, CameraController, ControllerOptions
from orbitview.systems.gesture import Finger, GestureOptions, Keyframe, Path, SyntheticInteraction
from orbitview.systems.input.events import (
    KeyEvent,
    PointerEvent,
    SyntheticInteractionFinishedEvent,
    UserInteractionEvent,
)
from orbitview.systems.input.manager import InputManager
from orbitview.systems.loader import SystemLoader
from orbitview.types import ChangeSource, GestureState, PointerPhase
from tests.support import FRAME, Recorder, make_context, settle


def swipe(start: float, end: float, duration: float = 1.0) -> SyntheticInteraction:
    """One finger moving horizontally across the middle of the viewport."""
    finger = Finger(x=Path(start, (Keyframe(1, end),)), y=Path(0.5))
    return SyntheticInteraction(duration, (finger,))


class TestPath(unittest.TestCase):
    """Test keyframe path sampling."""

    def test_frames_are_relative_weights(self) -> None:
        """Test that segment lengths follow the keyframe weights."""
        path = Path(0.0, (Keyframe(1, 1.0), Keyframe(3, 0.0)))

        assert path.total_frames == 4
        assert path.sample(0.0) == 0.0
        assert path.sample(0.125) == pytest.approx(0.5)
        assert path.sample(0.25) == pytest.approx(1.0)
        assert path.sample(0.625) == pytest.approx(0.5)
        assert path.sample(1.0) == pytest.approx(0.0)

    def test_progress_is_clamped(self) -> None:
        """Test that sampling outside 0..1 holds the end values."""
        path = Path(0.2, (Keyframe(2, 0.8),))

        assert path.sample(-1.0) == pytest.approx(0.2)
        assert path.sample(2.0) == pytest.approx(0.8)

    def test_empty_path_stays_put(self) -> None:
        """Test that a path without keyframes keeps its initial value."""
        assert Path(0.4).sample(0.7) == 0.4

    def test_finger_samples_both_axes(self) -> None:
        """Test that a finger samples its x and y paths together."""
        finger = Finger(x=Path(0.0, (Keyframe(1, 1.0),)), y=Path(1.0, (Keyframe(1, 0.0),)))

        x, y = finger.sample(0.25)

        assert x == pytest.approx(0.25)
        assert y == pytest.approx(0.75)


class TestSyntheticInteractionValidation(unittest.TestCase):
    """Test construction checks."""

    def test_duration_must_be_positive(self) -> None:
        """Test that a zero duration is rejected."""
        with pytest.raises(ValueError, match="duration"):
            swipe(0.5, 0.3, duration=0.0)

    def test_finger_count(self) -> None:
        """Test that only one or two fingers are accepted."""
        finger = Finger(x=Path(0.5), y=Path(0.5))

        with pytest.raises(ValueError, match="fingers"):
            SyntheticInteraction(1.0, ())
        with pytest.raises(ValueError, match="fingers"):
            SyntheticInteraction(1.0, (finger, finger, finger))


class TestSyntheticPlayback(unittest.TestCase):
    """Test playback through the same path as genuine input."""

    def setUp(self) -> None:
        """Set up an input manager and camera on a shared bus."""
        self.event_bus = EventBus()
        self.context = make_context(self.event_bus)
        self.input_manager = InputManager(GestureOptions(), 640, 480)
        self.camera = CameraController(ControllerOptions())
        self.loader = SystemLoader([self.input_manager, self.camera])
        self.loader.setup_all(self.context)

        self.finished = Recorder()
        self.interactions = Recorder()
        self.changes = Recorder()
        self.event_bus.subscribe(SyntheticInteractionFinishedEvent, self.finished)
        self.event_bus.subscribe(UserInteractionEvent, self.interactions)
        self.event_bus.subscribe(CameraChangeEvent, self.changes)

    def run_frames(self, frames: int) -> None:
        """Advance the rig by a number of frames."""
        for _ in range(frames):
            self.loader.update_all(FRAME, self.context)

    def test_round_trip_returns_to_start(self) -> None:
        """Test that a finger that comes back to its start leaves the camera where it was."""
        finger = Finger(x=Path(0.5, (Keyframe(1, 0.3), Keyframe(1, 0.5))), y=Path(0.5))
        before = self.camera.current

        assert self.input_manager.interact(SyntheticInteraction(1.0, (finger,)))
        self.run_frames(90)
        settle(self.camera)

        after = self.camera.current
        assert after.theta == pytest.approx(before.theta, abs=0.001)
        assert after.phi == pytest.approx(before.phi, abs=0.001)
        assert after.radius == pytest.approx(before.radius, abs=0.001)

    def test_playback_is_automatic(self) -> None:
        """Test that playback moves the camera as AUTOMATIC without user events."""
        self.input_manager.interact(swipe(0.5, 0.3))
        self.run_frames(90)

        assert self.camera.goal.theta == pytest.approx(2 * math.pi * 0.2 * 640 / 480)
        moving = [event for event in self.changes.events if not event.settled]
        assert moving
        assert all(event.source is ChangeSource.AUTOMATIC for event in moving)
        assert self.interactions.events == []

    def test_two_finger_pan(self) -> None:
        """Test that two fingers moving left pan the target along +x only."""
        left = Finger(x=Path(0.4, (Keyframe(1, 0.3),)), y=Path(0.5))
        right = Finger(x=Path(0.6, (Keyframe(1, 0.5),)), y=Path(0.5))

        self.input_manager.interact(SyntheticInteraction(1.0, (left, right)))
        self.run_frames(90)
        settle(self.camera)

        target = self.camera.current.target
        assert target.x > 0.0
        assert target.y == pytest.approx(0.0, abs=0.001)
        assert target.z == pytest.approx(0.0, abs=0.001)

    def test_parallel_pan_at_max_radius_keeps_radius(self) -> None:
        """Test that fingers moving together at the zoom limit pan without changing the radius."""
        self.camera.set_goal_orbit(radius=1000.0)
        self.camera.jump_to_goal()
        before = self.camera.current.radius
        assert before == self.camera.constraints.max_radius
        left = Finger(x=Path(0.4, (Keyframe(1, 0.7),)), y=Path(0.5))
        right = Finger(x=Path(0.6, (Keyframe(1, 0.9),)), y=Path(0.5))

        self.input_manager.interact(SyntheticInteraction(1.0, (left, right)))
        self.run_frames(90)
        settle(self.camera)

        assert self.camera.current.radius == pytest.approx(before, rel=1e-9)
        assert self.camera.current.target.x < 0.0

    def test_two_finger_round_trip_returns_target(self) -> None:
        """Test that two fingers coming back to where they started leave the target where it was."""
        there_and_back = Path(0.5, (Keyframe(1, 0.6), Keyframe(1, 0.5)))
        left = Finger(x=Path(0.4, (Keyframe(1, 0.3), Keyframe(1, 0.4))), y=there_and_back)
        right = Finger(x=Path(0.6, (Keyframe(1, 0.5), Keyframe(1, 0.6))), y=there_and_back)
        before = self.camera.current

        self.input_manager.interact(SyntheticInteraction(2.0, (left, right)))
        self.run_frames(150)
        settle(self.camera)

        after = self.camera.current
        assert after.target.x == pytest.approx(before.target.x, abs=0.001)
        assert after.target.y == pytest.approx(before.target.y, abs=0.001)
        assert after.target.z == pytest.approx(before.target.z, abs=0.001)
        assert after.radius == pytest.approx(before.radius, abs=0.001)

    def test_finished_event(self) -> None:
        """Test that playing to the end publishes one finished event."""
        interaction = swipe(0.5, 0.3)
        self.input_manager.interact(interaction)

        self.run_frames(30)
        assert self.finished.events == []

        self.run_frames(40)
        assert len(self.finished.events) == 1
        assert self.finished.events[0].interaction is interaction
        assert not self.input_manager.player.is_playing
        assert self.input_manager.resolver.state is GestureState.IDLE

    def test_key_press_interrupts(self) -> None:
        """Test that a recognized key stops playback where it is."""
        self.input_manager.interact(swipe(0.5, 0.2))
        self.run_frames(20)

        assert self.input_manager.handle_key(KeyEvent(arcade.key.PAGEUP))
        self.run_frames(70)

        uninterrupted = 2 * math.pi * 0.3 * 640 / 480
        assert not self.input_manager.player.is_playing
        assert self.camera.goal.theta < uninterrupted - 0.1
        assert self.finished.events == []
        assert self.interactions.events[-1].kind == "zoom"

    def test_unknown_key_does_not_interrupt(self) -> None:
        """Test that keys the viewer ignores leave playback running."""
        self.input_manager.interact(swipe(0.5, 0.2))

        assert not self.input_manager.handle_key(KeyEvent(arcade.key.A))
        assert self.input_manager.player.is_playing

    def test_genuine_pointer_interrupts(self) -> None:
        """Test that touching the surface takes over from playback."""
        self.input_manager.interact(swipe(0.5, 0.2))
        self.run_frames(5)

        self.input_manager.handle_pointer(PointerEvent(0, 100, 100, PointerPhase.DOWN))

        assert not self.input_manager.player.is_playing
        assert self.input_manager.resolver.session.source is ChangeSource.USER_INTERACTION

    def test_ignored_during_genuine_gesture(self) -> None:
        """Test that a scripted gesture cannot take over from the user."""
        self.input_manager.handle_pointer(PointerEvent(0, 100, 100, PointerPhase.DOWN))

        assert not self.input_manager.interact(swipe(0.5, 0.2))
        assert not self.input_manager.player.is_playing

    def test_new_interaction_replaces_running_one(self) -> None:
        """Test that starting playback during playback replaces it."""
        first = swipe(0.5, 0.2)
        second = swipe(0.5, 0.6)
        self.input_manager.interact(first)
        self.run_frames(10)

        assert self.input_manager.interact(second)
        assert self.input_manager.player.interaction is second

        self.run_frames(70)
        assert [event.interaction for event in self.finished.events] == [second]
