"""
Configuration & Global Constants
================================
This module serves as the central registry for the constants shared by the
model, the controller and the view.

Why is this file needed?
------------------------
1. Single source: the size ladder and the layout constants are read by the
   size table, the store and the control panel alike.
2. Tuning: snap defaults and rendering constants live here instead of being
   scattered as magic numbers.

Exports:
    PHI (float): The golden ratio.
    EXPONENTS (tuple[int, ...]): The ordered size ladder.
    BASE_RADIUS (float): Radius of the phi**0 sphere in world units.
"""
import math

# Golden ratio
PHI: float = (1.0 + math.sqrt(5.0)) / 2.0

# Size ladder, in order. Exponent 0 is intentionally absent.
EXPONENTS: tuple[int, ...] = (1, -1, -2, -3, -4, -5, -6, -7, -8, -9)
BASE_RADIUS: float = 0.6

# Colors: HSL with hue stepping around the wheel, one step per ladder slot
COLOR_SATURATION: float = 1.0
COLOR_LIGHTNESS: float = 0.6

# Size set layout (row along +X, resting on the ground plane)
SIZE_SET_START_X: float = -3.0
SIZE_SET_CLEARANCE: float = 0.12

# Random placement half-extent on X and Z
RANDOM_SPREAD: float = 1.0

# Magnetic snapping defaults
DEFAULT_MAGNET_ENABLED: bool = True
DEFAULT_SNAP_TOLERANCE: float = 0.06
SNAP_TOLERANCE_MAX: float = 0.25
SNAP_TOLERANCE_STEP: float = 0.01

# Geometry
EPS: float = 1e-9

# Rendering
LINK_COLOR: str = "#cfd9ff"
LINK_MAX_RADIUS: float = 0.05
LINK_RADIUS_FRACTION: float = 0.3
GRID_SIZE: float = 100.0
