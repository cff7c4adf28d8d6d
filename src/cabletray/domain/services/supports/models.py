"""Data models for support spacing.

This module contains the dataclasses and enums used by the support
spacing calculator:
- DistanceSource / WeightSource: where a resolved input came from
- ResolvedSupportInputs: support distance and piece weight for a tray
- SupportPlan: support count and support weight along a tray
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DistanceSource(str, Enum):
    """Origin of a resolved support distance.

    Attributes:
        OVERRIDE: Per tray-type override in the project.
        PROJECT: Project default support distance.
        LEGACY: Hardcoded distance for a known tray type.
        NONE: No usable distance.
    """

    OVERRIDE = "override"
    PROJECT = "project"
    LEGACY = "legacy"
    NONE = "none"


class WeightSource(str, Enum):
    """Origin of a resolved support piece weight.

    Attributes:
        OVERRIDE_SUPPORT: Catalogue weight of the override's support.
        PROJECT: Project default support weight.
        NONE: No usable weight.
    """

    OVERRIDE_SUPPORT = "override-support"
    PROJECT = "project"
    NONE = "none"


@dataclass(frozen=True)
class ResolvedSupportInputs:
    """Support distance and piece weight resolved for one tray.

    Attributes:
        distance_m: Support distance in meters, None when unresolved.
        distance_source: Where the distance came from.
        weight_per_piece_kg: Weight of one support, None when unresolved.
        weight_source: Where the weight came from.
        support_id: Catalogue support named by the override, if any.
    """

    distance_m: float | None
    distance_source: DistanceSource
    weight_per_piece_kg: float | None
    weight_source: WeightSource
    support_id: str | None = None


@dataclass(frozen=True)
class SupportPlan:
    """Supports along one tray run.

    All figures are None when the inputs are insufficient; that is a
    normal outcome, not an error.

    Attributes:
        length_m: Tray length in meters.
        distance_m: Support distance used.
        supports_count: Number of supports, at least two.
        weight_per_piece_kg: Weight of one support.
        total_weight_kg: Weight of all supports.
        weight_per_meter_kg: Support weight spread over the tray length.
    """

    length_m: float | None = None
    distance_m: float | None = None
    supports_count: int | None = None
    weight_per_piece_kg: float | None = None
    total_weight_kg: float | None = None
    weight_per_meter_kg: float | None = None

    @property
    def is_complete(self) -> bool:
        return self.supports_count is not None
