"""Tray load package.

This package combines tray, support and cable weights into load figures
and checks them against manufacturer load curves:
- Data models for loads and load curve evaluations
- The LoadAggregator service
- Load curve interpolation and evaluation
"""

from .aggregator import (
    KN_PER_KG,
    LoadAggregator,
    compute_tray_loads,
    find_material_tray,
    resolve_tray_weight_per_meter,
)
from .load_curve import (
    FLOAT_TOLERANCE,
    evaluate_load_curve,
    load_at_span,
    max_span_for_load,
    safety_factor_multiplier,
)
from .models import LoadCurveEvaluation, LoadCurveStatus, SpanLimit, TrayLoads

__all__ = [
    # Data models
    "LoadCurveEvaluation",
    "LoadCurveStatus",
    "SpanLimit",
    "TrayLoads",
    # Aggregation
    "KN_PER_KG",
    "LoadAggregator",
    "compute_tray_loads",
    "find_material_tray",
    "resolve_tray_weight_per_meter",
    # Load curves
    "FLOAT_TOLERANCE",
    "evaluate_load_curve",
    "load_at_span",
    "max_span_for_load",
    "safety_factor_multiplier",
]
