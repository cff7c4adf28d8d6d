"""Domain layer - cable tray capacity and load calculations."""

from .entities import Cable, CableType, Project, Tray
from .services import (
    CableBundlingEngine,
    FreeSpaceCalculator,
    LoadAggregator,
    SupportPlan,
    SupportSpacingCalculator,
    TrayLoads,
    compute_support_plan,
    compute_tray_free_space_by_tray_id,
    compute_tray_loads,
)
from .value_objects import (
    BundleRange,
    BundleSpacing,
    CableCategory,
    CableLayout,
    CategorySettings,
    LoadCurve,
    MaterialSupport,
    MaterialTray,
    SupportOverride,
)

__all__ = [
    "BundleRange",
    "BundleSpacing",
    "Cable",
    "CableBundlingEngine",
    "CableCategory",
    "CableLayout",
    "CableType",
    "CategorySettings",
    "FreeSpaceCalculator",
    "LoadAggregator",
    "LoadCurve",
    "MaterialSupport",
    "MaterialTray",
    "Project",
    "SupportOverride",
    "SupportPlan",
    "SupportSpacingCalculator",
    "Tray",
    "TrayLoads",
    "compute_support_plan",
    "compute_tray_free_space_by_tray_id",
    "compute_tray_loads",
]
