"""Unit tests for the lazy settings loader."""

import os
import types
import unittest
from unittest.mock import patch

import pytest

from orbitview.conf import SETTINGS_MODULE_ENV, global_settings, settings


class TestLazySettings(unittest.TestCase):
    """Test loading user overrides on first access."""

    def setUp(self) -> None:
        """Drop the settings configured for the test run so the next access reloads them."""
        settings._wrapped = None

    def test_user_module_overrides_defaults(self) -> None:
        """Test that upper-case names in the settings module replace the defaults."""
        user_settings = types.ModuleType("viewer_settings")
        user_settings.DEFAULT_FOV_DEG = 45.0
        user_settings.lowercase_ignored = True

        with (
            patch.dict(os.environ, {SETTINGS_MODULE_ENV: "viewer_settings"}),
            patch.dict("sys.modules", {"viewer_settings": user_settings}),
        ):
            assert settings.DEFAULT_FOV_DEG == 45.0

        assert settings.VIEWPORT_WIDTH == global_settings.VIEWPORT_WIDTH
        assert not hasattr(settings, "lowercase_ignored")

    def test_missing_named_module_warns(self) -> None:
        """Test that a settings module named in the environment but absent falls back to defaults."""
        with (
            patch.dict(os.environ, {SETTINGS_MODULE_ENV: "no_such_viewer_settings"}),
            self.assertLogs("orbitview.conf", level="WARNING"),
        ):
            assert settings.DEFAULT_FOV_DEG == global_settings.DEFAULT_FOV_DEG

    def test_broken_user_module_propagates(self) -> None:
        """Test that a settings module failing on its own imports is not silently skipped."""
        with (
            patch.dict(os.environ, {SETTINGS_MODULE_ENV: "broken_viewer_settings"}),
            patch("orbitview.conf.importlib.import_module", side_effect=ModuleNotFoundError("x", name="numpy")),
            pytest.raises(ModuleNotFoundError),
        ):
            _ = settings.DEFAULT_FOV_DEG

    def test_configure_overrides(self) -> None:
        """Test that configure sets values without importing a settings module."""
        settings.configure(DEFAULT_DECAY_RATE=0.0)

        assert settings.DEFAULT_DECAY_RATE == 0.0
        assert settings.is_configured()
