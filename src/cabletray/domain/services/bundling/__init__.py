"""Cable bundling package.

This package groups a tray's cables into bundles:
- Constants for default diameter bands and trefoil geometry
- Data models for bundles, category blocks and the tray layout
- The CableBundlingEngine service

Example:
    >>> from cabletray.domain.services.bundling import CableBundlingEngine
    >>> layout = CableBundlingEngine().bundle(tray_cables)
    >>> layout.occupied_width_mm()
"""

from .constants import (
    DEFAULT_DIAMETER_BANDS,
    OPEN_BAND_LABEL,
    TREFOIL_HEIGHT_FACTOR,
)
from .engine import (
    CableBundlingEngine,
    DiameterClass,
    apply_phase_rotation,
    classify_diameter,
    default_band_label,
)
from .models import Bundle, BundleLayout, CablePlacement, CategoryBlock

__all__ = [
    # Constants
    "DEFAULT_DIAMETER_BANDS",
    "OPEN_BAND_LABEL",
    "TREFOIL_HEIGHT_FACTOR",
    # Data models
    "Bundle",
    "BundleLayout",
    "CablePlacement",
    "CategoryBlock",
    # Service
    "CableBundlingEngine",
    "DiameterClass",
    "apply_phase_rotation",
    "classify_diameter",
    "default_band_label",
]
