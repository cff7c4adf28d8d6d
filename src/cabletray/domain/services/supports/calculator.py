"""Support spacing calculation.

This module provides compute_support_plan, which derives the number of
supports and their weight from a tray length and support distance, and
the resolvers that pick the distance and piece weight for a tray.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Mapping

from cabletray.domain.entities import Project, Tray
from cabletray.domain.value_objects import MaterialSupport

from .models import (
    DistanceSource,
    ResolvedSupportInputs,
    SupportPlan,
    WeightSource,
)

logger = logging.getLogger(__name__)

MIN_SUPPORTS = 2

# A leftover span longer than this share of the distance gets its own support
REMAINDER_THRESHOLD = 0.2

# Tray types with a known support distance when nothing else is configured
LEGACY_SUPPORT_DISTANCES_M: Mapping[str, float] = {"kl 100.603 f": 2.0}


def _finite(value: float | None) -> float | None:
    if value is None or not math.isfinite(value):
        return None
    return value


def compute_support_plan(
    length_mm: float | None,
    distance_m: float | None,
    weight_per_piece_kg: float | None = None,
) -> SupportPlan:
    """Compute supports for a tray run.

    Two end supports are always needed, plus one per full distance along
    the run. A leftover span longer than 20% of the distance adds one more.

    Args:
        length_mm: Tray length in mm.
        distance_m: Support distance in meters.
        weight_per_piece_kg: Weight of one support, if known.

    Returns:
        SupportPlan. Count and weights are None when length or distance is
        missing or not positive; weights are None when the piece weight is
        unknown.
    """
    length_mm = _finite(length_mm)
    distance_m = _finite(distance_m)
    weight_per_piece_kg = _finite(weight_per_piece_kg)

    length_m = length_mm / 1000 if length_mm is not None and length_mm > 0 else None
    if distance_m is not None and distance_m <= 0:
        distance_m = None

    if length_m is None or distance_m is None:
        return SupportPlan(
            length_m=length_m,
            distance_m=distance_m,
            weight_per_piece_kg=weight_per_piece_kg,
        )

    base_segments = math.floor(length_m / distance_m)
    supports_count = max(MIN_SUPPORTS, base_segments + 1)
    remainder = length_m - base_segments * distance_m
    if base_segments >= 1 and remainder > distance_m * REMAINDER_THRESHOLD:
        supports_count += 1

    total_weight_kg = (
        supports_count * weight_per_piece_kg if weight_per_piece_kg is not None else None
    )
    weight_per_meter_kg = (
        total_weight_kg / length_m if total_weight_kg is not None else None
    )

    return SupportPlan(
        length_m=length_m,
        distance_m=distance_m,
        supports_count=supports_count,
        weight_per_piece_kg=weight_per_piece_kg,
        total_weight_kg=total_weight_kg,
        weight_per_meter_kg=weight_per_meter_kg,
    )


def resolve_support_distance(
    tray: Tray, project: Project
) -> tuple[float | None, DistanceSource]:
    """Resolve the support distance for a tray.

    Precedence: the tray type's override distance, then the project
    default, then a legacy distance for known tray types. An override that
    is set but not positive does not fall through to the project default;
    it is treated as unusable.

    Returns:
        (distance in meters or None, source).
    """
    override = project.support_override_for(tray.type)
    distance: float | None
    if override is not None and override.distance is not None:
        distance, source = override.distance, DistanceSource.OVERRIDE
    elif project.support_distance_m is not None:
        distance, source = project.support_distance_m, DistanceSource.PROJECT
    else:
        distance, source = None, DistanceSource.NONE

    if (distance is None or distance <= 0) and tray.type:
        legacy = LEGACY_SUPPORT_DISTANCES_M.get(tray.type.strip().lower())
        if legacy is not None:
            distance, source = legacy, DistanceSource.LEGACY

    if distance is not None and distance <= 0:
        distance, source = None, DistanceSource.NONE
    return distance, source


def resolve_support_weight(
    tray: Tray,
    project: Project,
    supports_by_id: Mapping[str, MaterialSupport] | None = None,
) -> tuple[float | None, WeightSource, str | None]:
    """Resolve the weight of one support piece for a tray.

    Precedence: catalogue weight of the support named by the tray type's
    override, then the project default support weight.

    Returns:
        (weight in kg or None, source, override support id or None).
    """
    override = project.support_override_for(tray.type)
    support_id = override.support_id if override is not None else None
    if support_id:
        support = (supports_by_id or {}).get(support_id)
        if support is None:
            logger.debug(f"Support {support_id} for tray type {tray.type} not in catalogue")
        elif support.weight_kg is not None:
            return support.weight_kg, WeightSource.OVERRIDE_SUPPORT, support_id

    if project.support_weight_kg is not None:
        return project.support_weight_kg, WeightSource.PROJECT, support_id
    return None, WeightSource.NONE, support_id


class SupportSpacingCalculator:
    """Service for planning supports along trays.

    Resolves the distance and piece weight for each tray from the
    project's overrides, defaults and the support catalogue, then
    computes the support plan.
    """

    def __init__(
        self,
        project: Project,
        supports: Iterable[MaterialSupport] = (),
    ) -> None:
        """Initialize the calculator.

        Args:
            project: Project holding defaults and per tray-type overrides.
            supports: Support catalogue.
        """
        self.project = project
        self.supports_by_id = {support.id: support for support in supports}

    def resolve(self, tray: Tray) -> ResolvedSupportInputs:
        distance, distance_source = resolve_support_distance(tray, self.project)
        weight, weight_source, support_id = resolve_support_weight(
            tray, self.project, self.supports_by_id
        )
        return ResolvedSupportInputs(
            distance_m=distance,
            distance_source=distance_source,
            weight_per_piece_kg=weight,
            weight_source=weight_source,
            support_id=support_id,
        )

    def plan(
        self, tray: Tray, inputs: ResolvedSupportInputs | None = None
    ) -> SupportPlan:
        """Compute the support plan for one tray.

        Args:
            tray: Tray to plan supports for.
            inputs: Inputs already resolved for this tray. Resolved here
                when None.
        """
        if inputs is None:
            inputs = self.resolve(tray)
        plan = compute_support_plan(
            tray.length_mm, inputs.distance_m, inputs.weight_per_piece_kg
        )
        logger.debug(
            f"Tray {tray.name}: distance {inputs.distance_m} m "
            f"({inputs.distance_source.value}), {plan.supports_count} supports"
        )
        return plan
