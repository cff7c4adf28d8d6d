"""Tray load aggregation.

This module provides LoadAggregator, which combines tray self weight,
support weight and carried cable weight into per meter and total load
figures.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from cabletray.domain.entities import Cable, Tray
from cabletray.domain.services.routing import filter_cables_by_tray, is_grounding_purpose
from cabletray.domain.services.supports import SupportPlan
from cabletray.domain.value_objects import MaterialTray

from .models import TrayLoads

logger = logging.getLogger(__name__)

KN_PER_KG = 9.80665 / 1000


def find_material_tray(
    tray: Tray, material_trays: Iterable[MaterialTray]
) -> MaterialTray | None:
    """Return the catalogue entry matching the tray type, if any."""
    for material in material_trays:
        if material.matches_type(tray.type):
            return material
    return None


def resolve_tray_weight_per_meter(
    tray: Tray, material_trays: Iterable[MaterialTray] = ()
) -> float | None:
    """Tray self weight per meter.

    The tray's own weight override wins; otherwise the catalogue entry for
    its type is used.
    """
    if tray.weight_kg_per_m is not None:
        return tray.weight_kg_per_m
    material = find_material_tray(tray, material_trays)
    if material is not None:
        return material.weight_kg_per_m
    return None


def _times(value: float | None, length_m: float | None) -> float | None:
    if value is None or length_m is None or length_m <= 0:
        return None
    return value * length_m


def _plus(left: float | None, right: float | None) -> float | None:
    if left is None or right is None:
        return None
    return left + right


class LoadAggregator:
    """Service for computing tray loads.

    The tray load needs both the tray weight and the support weight;
    either one missing makes it None. The cable load is a partial sum:
    cables with unknown weight are skipped rather than voiding the figure.
    """

    def __init__(self, material_trays: Sequence[MaterialTray] = ()) -> None:
        """Initialize the aggregator.

        Args:
            material_trays: Tray catalogue used when a tray has no weight.
        """
        self.material_trays = tuple(material_trays)

    def carried_cables(self, tray: Tray, cables: Iterable[Cable]) -> list[Cable]:
        """Cables routed onto the tray, grounding conductors excluded."""
        return [
            cable
            for cable in filter_cables_by_tray(cables, tray.name)
            if not is_grounding_purpose(cable.purpose)
        ]

    def compute(
        self,
        tray: Tray,
        cables: Iterable[Cable],
        support_plan: SupportPlan,
        grounding_weight_kg_per_m: float | None = None,
    ) -> TrayLoads:
        """Compute loads for one tray.

        Args:
            tray: Tray to evaluate.
            cables: All project cables; association by routing is applied here.
            support_plan: Support plan for the tray.
            grounding_weight_kg_per_m: Weight of the opted-in grounding
                cable, None when no grounding cable is added.

        Returns:
            TrayLoads with the figures that could be derived.
        """
        tray_weight = resolve_tray_weight_per_meter(tray, self.material_trays)
        length_m = tray.length_m

        tray_load = _plus(tray_weight, support_plan.weight_per_meter_kg)
        tray_total = _times(tray_load, length_m)

        carried = self.carried_cables(tray, cables)
        weights = [
            cable.known_weight_kg_per_m
            for cable in carried
            if cable.known_weight_kg_per_m is not None
        ]
        grounding_included = grounding_weight_kg_per_m is not None
        if grounding_included:
            weights.append(grounding_weight_kg_per_m)
        cables_load = sum(weights) if weights else None
        cables_total = _times(cables_load, length_m)

        total_load = _plus(tray_load, cables_load)
        total_weight = _plus(tray_total, cables_total)
        total_kn = total_load * KN_PER_KG if total_load is not None else None

        without_weight = len(carried) - (len(weights) - int(grounding_included))
        if without_weight:
            logger.debug(f"Tray {tray.name}: {without_weight} cable(s) without weight")

        return TrayLoads(
            tray_weight_per_meter_kg=tray_weight,
            tray_weight_load_per_meter_kg=tray_load,
            tray_total_own_weight_kg=tray_total,
            cables_weight_load_per_meter_kg=cables_load,
            cables_total_weight_kg=cables_total,
            total_weight_load_per_meter_kg=total_load,
            total_weight_kg=total_weight,
            total_weight_load_per_meter_kn=total_kn,
            cables_counted=len(weights),
            cables_without_weight=without_weight,
            grounding_included=grounding_included,
        )


def compute_tray_loads(
    tray: Tray,
    cables: Iterable[Cable],
    support_plan: SupportPlan,
    *,
    material_trays: Sequence[MaterialTray] = (),
    grounding_weight_kg_per_m: float | None = None,
) -> TrayLoads:
    """Compute loads for one tray with a throwaway LoadAggregator."""
    return LoadAggregator(material_trays).compute(
        tray, cables, support_plan, grounding_weight_kg_per_m
    )
