"""
Configuration & Constants
=========================
This module serves as the central registry for global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (frame interval, colours, default
   formulas) from being scattered throughout the code.
2. Defaults: The settings dataclass and the UI widgets read their initial
   values and ranges from here, so both stay in sync.

Nothing here is persisted between sessions.
"""
from __future__ import annotations

# Motion
OSCILLATION_FREQUENCY_HZ: float = 0.5
MS_PER_MINUTE: float = 60000.0

# Frame loop
FRAME_INTERVAL_MS: int = 16

# Drawing
POINT_RADIUS_PX: float = 3.0
EDGE_COLOR: str = "red"
POINT_COLOR: str = "blue"
BACKGROUND_COLOR: str = "white"
DEFAULT_SURFACE_SIZE: tuple[int, int] = (800, 600)

# Projection
DEFAULT_FORMULA_X: str = "x/y"
DEFAULT_FORMULA_Y: str = "z/y"
FORMULA_VARIABLES: tuple[str, ...] = ("x", "y", "z")

# Default cuboid (two opposite corners)
DEFAULT_CORNER_1: tuple[float, float, float] = (-1.0, 2.0, -1.0)
DEFAULT_CORNER_2: tuple[float, float, float] = (1.0, 4.0, 1.0)
DEFAULT_SAMPLES: int = 5

# View
DEFAULT_FOV_DEG: float = 90.0
DEFAULT_FOCAL_LENGTH: float = 1.0

# Slider ranges
RPM_RANGE: tuple[float, float] = (-60.0, 60.0)
DEFAULT_RPM_Y: float = 10.0
DEFAULT_RPM_Z: float = 0.0
OSC_AMP_RANGE: tuple[float, float] = (0.0, 5.0)
OSC_AMP_SLIDER_STEPS: int = 10  # slider ticks per unit of amplitude
