"""Value objects for the cable tray domain.

This module provides immutable data types used throughout the engine.
All classes are re-exported from sub-modules for convenience.
"""

from __future__ import annotations

# Layout settings
from ._layout import (
    CATEGORY_CAPABILITIES,
    CATEGORY_ORDER,
    DEFAULT_CABLE_SPACING_MM,
    DEFAULT_CATEGORY_SETTINGS,
    MAX_GRID_DIMENSION,
    BundleRange,
    BundleSpacing,
    CableCategory,
    CableLayout,
    CategoryCapabilities,
    CategorySettings,
    FreeSpaceBasis,
)

# Material catalogue
from ._materials import (
    LoadCurve,
    LoadCurvePoint,
    MaterialSupport,
    MaterialTray,
    SupportOverride,
)

__all__ = [
    "BundleRange",
    "BundleSpacing",
    "CATEGORY_CAPABILITIES",
    "CATEGORY_ORDER",
    "CableCategory",
    "CableLayout",
    "CategoryCapabilities",
    "CategorySettings",
    "DEFAULT_CABLE_SPACING_MM",
    "DEFAULT_CATEGORY_SETTINGS",
    "FreeSpaceBasis",
    "LoadCurve",
    "LoadCurvePoint",
    "MAX_GRID_DIMENSION",
    "MaterialSupport",
    "MaterialTray",
    "SupportOverride",
]
