"""Constants for cable bundling.

This module provides:
- Built-in diameter bands used when no custom range matches
- Trefoil geometry factor
- Phase rotation block size
"""

from __future__ import annotations

import math

# Built-in diameter bands: (inclusive upper bound in mm, label).
# The last band is open ended.
DEFAULT_DIAMETER_BANDS: tuple[tuple[float, str], ...] = (
    (8.0, "0-8"),
    (15.0, "8.1-15"),
    (21.0, "15.1-21"),
    (30.0, "21.1-30"),
    (40.0, "30.1-40"),
    (45.0, "40.1-45"),
    (60.0, "45.1-60"),
)
OPEN_BAND_LABEL = "60+"

# Height of a triangular three-cable stack in cable diameters
TREFOIL_HEIGHT_FACTOR = 1 + math.sqrt(3) / 2

TREFOIL_SIZE = 3

# MV phase rotation reorders members in blocks of six (two circuits)
PHASE_ROTATION_BLOCK = 6
