"""Tray report service.

Resolves the per-tray inputs the calculators need from a project
snapshot (support distance and weight, tray weight, grounding cable,
load curve) and runs free space, support and load calculations for
each tray.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from cabletray.application.config.adapter import ProjectSnapshot
from cabletray.domain.entities import Tray
from cabletray.domain.services.free_space import (
    FreeSpaceCalculator,
    FreeSpaceResult,
    apply_free_space_overrides,
)
from cabletray.domain.services.loads import (
    LoadAggregator,
    LoadCurveEvaluation,
    TrayLoads,
    evaluate_load_curve,
    find_material_tray,
)
from cabletray.domain.services.supports import (
    ResolvedSupportInputs,
    SupportPlan,
    SupportSpacingCalculator,
)
from cabletray.domain.value_objects import LoadCurve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrayLoadResult:
    """Everything calculated for one tray.

    Attributes:
        tray: The tray the results belong to.
        free_space: Free space figures.
        support_inputs: Resolved support distance and piece weight.
        support_plan: Supports along the tray.
        loads: Weight loads.
        load_curve: Load curve check.
    """

    tray: Tray
    free_space: FreeSpaceResult
    support_inputs: ResolvedSupportInputs
    support_plan: SupportPlan
    loads: TrayLoads
    load_curve: LoadCurveEvaluation

    @property
    def tray_id(self) -> str:
        return self.tray.id

    @property
    def free_space_percent(self) -> float | None:
        return self.free_space.percent

    @property
    def supports_count(self) -> int | None:
        return self.support_plan.supports_count


class TrayReportService:
    """Service for calculating per-tray results from a project snapshot.

    The snapshot is treated as one consistent, immutable set of data;
    the service neither re-fetches nor caches anything.
    """

    def __init__(self, snapshot: ProjectSnapshot) -> None:
        """Initialize the service.

        Args:
            snapshot: Project data in domain form.
        """
        self.snapshot = snapshot
        project = snapshot.project
        self._free_space = FreeSpaceCalculator(project.cable_layout)
        self._supports = SupportSpacingCalculator(project, snapshot.material_supports)
        self._loads = LoadAggregator(snapshot.material_trays)

    def grounding_weight(self, tray: Tray) -> float | None:
        """Weight per meter of the grounding cable opted in for a tray."""
        if not tray.include_grounding_cable or tray.grounding_cable_type_id is None:
            return None
        cable_type = self.snapshot.cable_type(tray.grounding_cable_type_id)
        if cable_type is None:
            logger.warning(
                f"Tray {tray.name}: grounding cable type "
                f"{tray.grounding_cable_type_id} not found, weight not counted"
            )
            return None
        return cable_type.weight_kg_per_m

    def load_curve_for(self, tray: Tray) -> LoadCurve | None:
        """Load curve linked to the tray's catalogue entry, if any."""
        material = find_material_tray(tray, self.snapshot.material_trays)
        if material is None or not material.load_curve_id:
            return None
        curve = self.snapshot.load_curves.get(material.load_curve_id)
        if curve is None:
            logger.warning(
                f"Tray {tray.name}: load curve {material.load_curve_id} not found"
            )
        return curve

    def report(self, tray: Tray) -> TrayLoadResult:
        """Calculate all results for one tray."""
        cables = self.snapshot.cables
        free_space = self._free_space.calculate(tray, cables)

        support_inputs = self._supports.resolve(tray)
        if (
            support_inputs.support_id is not None
            and support_inputs.support_id not in self._supports.supports_by_id
        ):
            logger.warning(
                f"Tray {tray.name}: support {support_inputs.support_id} "
                "not in catalogue, using project default weight"
            )
        support_plan = self._supports.plan(tray, support_inputs)

        loads = self._loads.compute(
            tray, cables, support_plan, self.grounding_weight(tray)
        )
        load_curve = evaluate_load_curve(
            self.load_curve_for(tray),
            support_plan.distance_m,
            loads.total_weight_load_per_meter_kn,
            self.snapshot.project.tray_load_safety_factor_percent,
        )
        logger.debug(
            f"Tray {tray.name}: free space {free_space.percent}, "
            f"supports {support_plan.supports_count}, "
            f"load curve {load_curve.status.value}"
        )
        return TrayLoadResult(
            tray=tray,
            free_space=free_space,
            support_inputs=support_inputs,
            support_plan=support_plan,
            loads=loads,
            load_curve=load_curve,
        )

    def report_all(self, trays: Iterable[Tray] | None = None) -> list[TrayLoadResult]:
        """Calculate results for the given trays, or all snapshot trays."""
        selected = self.snapshot.trays if trays is None else tuple(trays)
        return [self.report(tray) for tray in selected]

    def free_space_by_tray_id(
        self, overrides: Mapping[str, Any] | None = None
    ) -> dict[str, float | None]:
        """Free space per tray id with operator overrides applied."""
        computed = {
            tray.id: self._free_space.calculate(tray, self.snapshot.cables).percent
            for tray in self.snapshot.trays
        }
        return apply_free_space_overrides(computed, overrides)
