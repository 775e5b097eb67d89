"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from orbitview.conf import settings

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def configure_test_settings() -> Generator[None]:
    """Configure settings for each test using the settings system.

    This fixture runs automatically before each test to configure settings
    and resets them after the test completes.

    Yields:
        None
    """
    settings.configure(
        VIEWPORT_WIDTH=640,
        VIEWPORT_HEIGHT=480,
        WINDOW_TITLE="Test",
        DEFAULT_DECAY_RATE=20.0,
        INTERACTION_PROMPT="auto",
        INTERACTION_PROMPT_THRESHOLD=3.0,
        STATUS_TEXT_PREFIX="View from stage",
    )
    yield
    # Reset settings after test
    settings._wrapped = None
