"""Django-like settings system for orbitview.

Usage:
    # In your viewer project's settings.py
    from orbitview.conf import global_settings

    # Override defaults
    DEFAULT_FOV_DEG = 45.0
    INTERACTION_PROMPT_THRESHOLD = 5.0

    # In your code
    from orbitview.conf import settings

    print(settings.DEFAULT_FOV_DEG)  # 45.0
"""

import importlib
import logging
import os
from typing import Any

from orbitview.conf import global_settings

logger = logging.getLogger(__name__)

SETTINGS_MODULE_ENV = "ORBITVIEW_SETTINGS_MODULE"


class LazySettings:
    """Lazy settings proxy that loads user settings on first access.

    Similar to Django's LazySettings, this defers loading until the first
    attribute access. Settings are loaded from:
    1. global_settings (framework defaults)
    2. User's settings module (overrides)

    The settings module location is determined by:
    - ORBITVIEW_SETTINGS_MODULE environment variable, or
    - Convention: "settings" module in current directory
    """

    def __init__(self) -> None:
        """Initialize the lazy settings proxy."""
        self._wrapped: Settings | None = None

    def _setup(self) -> None:
        """Load settings from global_settings and the user's settings module.

        A missing settings module means defaults only. That is logged at debug
        level for the conventional "settings" module and as a warning when
        ORBITVIEW_SETTINGS_MODULE names a module that cannot be found. Import
        errors raised from inside an existing settings module propagate.
        """
        explicit = os.environ.get(SETTINGS_MODULE_ENV)
        settings_module = explicit or "settings"

        self._wrapped = Settings()

        try:
            mod = importlib.import_module(settings_module)
        except ModuleNotFoundError as exc:
            if not _is_missing(settings_module, exc.name):
                raise
            if explicit:
                logger.warning("Settings module '%s' not found, using defaults", settings_module)
            else:
                logger.debug("No '%s' module found, using default settings", settings_module)
            return

        overrides = [setting for setting in dir(mod) if setting.isupper()]
        for setting in overrides:
            setattr(self._wrapped, setting, getattr(mod, setting))
        logger.debug("Loaded %d settings from '%s'", len(overrides), settings_module)

    def __getattr__(self, name: str) -> Any:  # noqa: ANN401
        """Get a setting value, loading settings if not yet loaded."""
        if self._wrapped is None:
            self._setup()
        if self._wrapped is None:
            msg = "Settings could not be loaded"
            raise RuntimeError(msg)
        return getattr(self._wrapped, name)

    def __setattr__(self, name: str, value: Any) -> None:  # noqa: ANN401
        """Set a setting value."""
        if name == "_wrapped":
            self.__dict__["_wrapped"] = value
        else:
            if self._wrapped is None:
                self._setup()
            if self._wrapped is None:
                msg = "Settings could not be loaded"
                raise RuntimeError(msg)
            setattr(self._wrapped, name, value)

    def configure(self, **options: Any) -> None:  # noqa: ANN401
        """Manually configure settings (useful for testing).

        Example:
            settings.configure(
                DEFAULT_DECAY_RATE=0.0,
                INTERACTION_PROMPT_THRESHOLD=0.1,
            )
        """
        if self._wrapped is None:
            self._wrapped = Settings()
        for name, value in options.items():
            setattr(self._wrapped, name, value)

    def is_configured(self) -> bool:
        """Check if settings have been loaded."""
        return self._wrapped is not None


class Settings:
    """Container for all settings with attribute access."""

    def __init__(self) -> None:
        """Initialize settings with defaults from global_settings."""
        for setting in dir(global_settings):
            if setting.isupper():
                setattr(self, setting, getattr(global_settings, setting))


def _is_missing(settings_module: str, missing_name: str | None) -> bool:
    """Check whether a ModuleNotFoundError is about the settings module itself or a parent package."""
    if missing_name is None:
        return False
    return settings_module == missing_name or settings_module.startswith(missing_name + ".")


# Global singleton instance
settings = LazySettings()

__all__ = ["SETTINGS_MODULE_ENV", "LazySettings", "Settings", "global_settings", "settings"]
