"""Helper functions for creating and running an orbitview demo window.

This module provides high-level functions to open an arcade window hosting a
ModelViewerView. Embedders that bring their own renderer only need
setup_logging() and orbitview.viewer.ModelViewer.
"""

import logging

import arcade
from rich.logging import RichHandler

from orbitview.conf import settings
from orbitview.views import ModelViewerView


def setup_logging(log_level: str = "INFO") -> None:
    """Configure logging for the viewer.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).

    Side effects:
        - Configures the root logger with RichHandler
        - Sets the specified log level
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, markup=True)],
    )


def create_viewer(bounding_radius: float = 1.0) -> arcade.Window:
    """Create a window showing a ModelViewerView.

    Uses WINDOW_TITLE, VIEWPORT_WIDTH and VIEWPORT_HEIGHT from your project's
    settings.py (or the module named by ORBITVIEW_SETTINGS_MODULE).

    Args:
        bounding_radius: Radius of the demo model.

    Returns:
        The window, with the viewer view already shown.

    Example:
        >>> window = create_viewer()
        >>> window.current_view.viewer.camera.set_goal_orbit(theta=1.0)
        >>> arcade.run()
    """
    setup_logging()

    window = arcade.Window(
        settings.VIEWPORT_WIDTH,
        settings.VIEWPORT_HEIGHT,
        settings.WINDOW_TITLE,
        resizable=True,
    )
    window.show_view(ModelViewerView(bounding_radius=bounding_radius))
    return window


def run_viewer(bounding_radius: float = 1.0) -> None:
    """Create the demo window and run the arcade event loop until it closes."""
    create_viewer(bounding_radius)
    arcade.run()
