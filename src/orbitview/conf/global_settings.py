"""Default settings for orbitview.

Users can override these in their project's settings.py file.

Example:
    # In your project's settings.py:
    from orbitview.conf import global_settings

    # Override framework defaults
    DEFAULT_FOV_DEG = 45.0
    ENABLE_PAN = False
"""

import math

# Window settings
WINDOW_TITLE = "orbitview"
"""Title of the demo window opened by run_viewer()."""

BACKGROUND_COLOR = (32, 32, 40)
"""Clear color of the demo window, as an RGB tuple."""

# Viewport settings
VIEWPORT_WIDTH = 640
"""Initial width of the interactive surface in pixels."""

VIEWPORT_HEIGHT = 480
"""Initial height of the interactive surface in pixels."""

# Camera orbit defaults
DEFAULT_THETA = 0.0
"""Initial azimuth in radians (0 looks at the front of the model)."""

DEFAULT_PHI_DEG = 75.0
"""Initial polar angle in degrees."""

DEFAULT_MIN_PHI_DEG = 22.5
"""Lower polar bound used when the minimum is auto."""

DEFAULT_MAX_PHI_DEG = 157.5
"""Upper polar bound used when the maximum is auto."""

MAX_RADIUS_FACTOR = 2.0
"""Auto maximum radius as a multiple of the ideal framing distance."""

# Field of view
DEFAULT_FOV_DEG = 30.0
"""Auto field of view and auto maximum field of view, in degrees."""

DEFAULT_MIN_FOV_DEG = 25.0
"""Auto minimum field of view, in degrees."""

# Damping
DEFAULT_DECAY_RATE = 20.0
"""Exponential decay rate (1/s) used to move the current pose toward the goal. 0 jumps."""

MAX_TIME_STEP = 0.1
"""Longest frame delta in seconds fed to the interpolator."""

CHANGE_EPSILON = 1e-6
"""Smallest pose difference reported as a camera change."""

# Gestures
ORBIT_SENSITIVITY = 1.0
"""Multiplier for orbit speed; one viewport height of drag is one full turn."""

ENABLE_PAN = True
"""Whether two-finger drags, shift+arrows and taps may move the target."""

DRAG_DEAD_ZONE = 2.0
"""Pixels a pointer must travel before a press becomes a drag."""

TAP_DISTANCE = 2.0
"""Maximum travel in pixels for a release to count as a tap."""

TAP_TIME = 0.3
"""Maximum session duration in seconds for a release to count as a tap."""

WHEEL_ZOOM_SENSITIVITY = 0.001
"""Natural-log radius change per wheel delta unit."""

KEYBOARD_ORBIT_STEP = math.pi / 8
"""Radians turned per arrow key press."""

KEYBOARD_ZOOM_FACTOR = 1.25
"""Radius scale per page key press."""

KEYBOARD_PAN_PIXELS = 10.0
"""Equivalent drag distance in pixels for a shift+arrow pan."""

# Interaction prompt
INTERACTION_PROMPT = "auto"
"""Prompt mode: "auto" shows after the threshold, "none" never shows."""

INTERACTION_PROMPT_THRESHOLD = 3.0
"""Idle seconds after load before the interaction prompt appears."""

# Accessibility
STATUS_TEXT_PREFIX = "View from stage"
"""Leading words of the orientation announcement."""
