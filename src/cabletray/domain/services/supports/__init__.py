"""Support spacing package.

This package derives the supports needed along a tray run:
- Data models for resolved inputs and support plans
- Distance and weight resolution with override precedence
- The SupportSpacingCalculator service

Example:
    >>> from cabletray.domain.services.supports import compute_support_plan
    >>> compute_support_plan(10500, 2.0, 1.2).supports_count
    7
"""

from .calculator import (
    LEGACY_SUPPORT_DISTANCES_M,
    SupportSpacingCalculator,
    compute_support_plan,
    resolve_support_distance,
    resolve_support_weight,
)
from .models import DistanceSource, ResolvedSupportInputs, SupportPlan, WeightSource

__all__ = [
    # Data models
    "DistanceSource",
    "ResolvedSupportInputs",
    "SupportPlan",
    "WeightSource",
    # Service
    "LEGACY_SUPPORT_DISTANCES_M",
    "SupportSpacingCalculator",
    "compute_support_plan",
    "resolve_support_distance",
    "resolve_support_weight",
]
