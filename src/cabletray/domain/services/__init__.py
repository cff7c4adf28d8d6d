"""Domain services for the cable tray engine.

All services are pure: they take immutable snapshots and return new
result objects without side effects.
"""

from .bundling import BundleLayout, CableBundlingEngine
from .free_space import (
    FreeSpaceCalculator,
    FreeSpaceResult,
    apply_free_space_overrides,
    compute_tray_free_space_by_tray_id,
    compute_tray_free_space_percent,
    round_for_export,
)
from .loads import (
    LoadAggregator,
    LoadCurveEvaluation,
    LoadCurveStatus,
    TrayLoads,
    compute_tray_loads,
    evaluate_load_curve,
    resolve_tray_weight_per_meter,
)
from .routing import (
    filter_cables_by_tray,
    is_grounding_purpose,
    match_cable_category,
    routing_contains_tray,
)
from .supports import (
    DistanceSource,
    SupportPlan,
    SupportSpacingCalculator,
    compute_support_plan,
    resolve_support_distance,
    resolve_support_weight,
)

__all__ = [
    # Routing
    "filter_cables_by_tray",
    "is_grounding_purpose",
    "match_cable_category",
    "routing_contains_tray",
    # Bundling and free space
    "BundleLayout",
    "CableBundlingEngine",
    "FreeSpaceCalculator",
    "FreeSpaceResult",
    "apply_free_space_overrides",
    "compute_tray_free_space_by_tray_id",
    "compute_tray_free_space_percent",
    "round_for_export",
    # Supports
    "DistanceSource",
    "SupportPlan",
    "SupportSpacingCalculator",
    "compute_support_plan",
    "resolve_support_distance",
    "resolve_support_weight",
    # Loads
    "LoadAggregator",
    "LoadCurveEvaluation",
    "LoadCurveStatus",
    "TrayLoads",
    "compute_tray_loads",
    "evaluate_load_curve",
    "resolve_tray_weight_per_meter",
]
