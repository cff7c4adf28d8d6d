"""Output formatters and exporters for tray results."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Mapping, Sequence

from cabletray.domain.entities import Tray
from cabletray.domain.services.free_space import round_for_export
from cabletray.domain.services.loads import LoadCurveEvaluation, TrayLoads
from cabletray.domain.services.supports import SupportPlan

if TYPE_CHECKING:
    from cabletray.application.services import TrayLoadResult

MISSING = "n/a"


def _fmt(value: float | int | None, unit: str = "", digits: int = 2) -> str:
    if value is None:
        return MISSING
    if isinstance(value, int):
        text = str(value)
    else:
        text = f"{value:.{digits}f}"
    return f"{text} {unit}".rstrip()


class FreeSpaceFormatter:
    """Formats free space per tray as a two-column table."""

    def format(
        self, trays: Sequence[Tray], free_space: Mapping[str, float | None]
    ) -> str:
        """Format free space values.

        Args:
            trays: Trays in display order.
            free_space: Percentages keyed by tray id.

        Returns:
            Table with one row per tray.
        """
        if not trays:
            return "No trays in snapshot."

        name_width = max(len("Tray"), *(len(tray.name) for tray in trays))
        lines = [
            f"{'Tray':<{name_width}}  Free space",
            "-" * (name_width + 12),
        ]
        for tray in trays:
            value = round_for_export(free_space.get(tray.id))
            lines.append(f"{tray.name:<{name_width}}  {_fmt(value, '%')}")
        return "\n".join(lines)


class SupportPlanFormatter:
    """Formats a support plan."""

    def format(self, plan: SupportPlan) -> str:
        if not plan.is_complete:
            return "Supports cannot be calculated: tray length and support distance are required."
        lines = [
            f"Length:            {_fmt(plan.length_m, 'm', 3)}",
            f"Support distance:  {_fmt(plan.distance_m, 'm', 3)}",
            f"Supports:          {plan.supports_count}",
            f"Weight per piece:  {_fmt(plan.weight_per_piece_kg, 'kg')}",
            f"Total weight:      {_fmt(plan.total_weight_kg, 'kg')}",
            f"Weight per meter:  {_fmt(plan.weight_per_meter_kg, 'kg/m', 3)}",
        ]
        return "\n".join(lines)


class TrayReportFormatter:
    """Formats full per-tray reports for display.

    Each tray gets a block with free space, supports, loads and the load
    curve check. Missing figures print as "n/a".
    """

    def __init__(self) -> None:
        self._supports = SupportPlanFormatter()

    def format(self, results: Sequence["TrayLoadResult"]) -> str:
        """Format reports for all given trays."""
        if not results:
            return "No trays in snapshot."
        return "\n\n".join(self.format_tray(result) for result in results)

    def format_tray(self, result: "TrayLoadResult") -> str:
        tray = result.tray
        title = f"TRAY {tray.name}"
        if tray.type:
            title += f" ({tray.type})"
        lines: list[str] = [title, "=" * 50]

        free_space = result.free_space
        lines.append(f"Free space:        {_fmt(round_for_export(free_space.percent), '%')}")
        if free_space.occupied_width_mm is not None:
            lines.append(
                f"Occupied width:    {_fmt(free_space.occupied_width_mm, 'mm', 1)}"
            )
        if free_space.layout is not None and free_space.layout.bundles:
            lines.append(f"Bundles:           {len(free_space.layout.bundles)}")

        lines.append("")
        lines.append("Supports")
        lines.append("-" * 50)
        lines.append(
            f"Distance source:   {result.support_inputs.distance_source.value}"
        )
        lines.append(self._supports.format(result.support_plan))

        lines.append("")
        lines.append("Loads")
        lines.append("-" * 50)
        lines.extend(self._format_loads(result.loads))

        lines.append("")
        lines.append("Load curve")
        lines.append("-" * 50)
        lines.extend(self._format_load_curve(result.load_curve))
        return "\n".join(lines)

    def _format_loads(self, loads: TrayLoads) -> list[str]:
        return [
            f"Tray weight:             {_fmt(loads.tray_weight_per_meter_kg, 'kg/m', 3)}",
            f"Tray + supports:         {_fmt(loads.tray_weight_load_per_meter_kg, 'kg/m', 3)}",
            f"Tray total own weight:   {_fmt(loads.tray_total_own_weight_kg, 'kg')}",
            f"Cables:                  {_fmt(loads.cables_weight_load_per_meter_kg, 'kg/m', 3)}",
            f"Cables total weight:     {_fmt(loads.cables_total_weight_kg, 'kg')}",
            f"Total load:              {_fmt(loads.total_weight_load_per_meter_kg, 'kg/m', 3)}",
            f"Total load:              {_fmt(loads.total_weight_load_per_meter_kn, 'kN/m', 3)}",
            f"Total weight:            {_fmt(loads.total_weight_kg, 'kg')}",
        ]

    def _format_load_curve(self, evaluation: LoadCurveEvaluation) -> list[str]:
        lines = [
            f"Status:            {evaluation.status.value}",
            f"Message:           {evaluation.message}",
        ]
        if evaluation.safety_adjusted_load_kn_per_m is not None:
            lines.append(
                "Adjusted load:     "
                f"{_fmt(evaluation.safety_adjusted_load_kn_per_m, 'kN/m', 3)}"
            )
        if evaluation.limit is not None:
            lines.append(
                f"{evaluation.limit.label + ':':<19}"
                f"{_fmt(evaluation.limit.span_m, 'm', 3)}"
            )
        return lines


class JsonExporter:
    """Exports tray results as JSON."""

    def export_free_space(
        self, trays: Sequence[Tray], free_space: Mapping[str, float | None]
    ) -> str:
        """Export free space per tray, rounded to 2 decimals."""
        data = [
            {
                "tray_id": tray.id,
                "tray_name": tray.name,
                "free_space_percent": round_for_export(free_space.get(tray.id)),
            }
            for tray in trays
        ]
        return json.dumps(data, indent=2)

    def export_support_plan(self, plan: SupportPlan) -> str:
        return json.dumps(self._support_plan(plan), indent=2)

    def export_report(self, results: Sequence["TrayLoadResult"]) -> str:
        """Export full per-tray reports."""
        return json.dumps([self._result(result) for result in results], indent=2)

    def _support_plan(self, plan: SupportPlan) -> dict[str, Any]:
        return {
            "length_m": plan.length_m,
            "distance_m": plan.distance_m,
            "supports_count": plan.supports_count,
            "weight_per_piece_kg": plan.weight_per_piece_kg,
            "total_weight_kg": plan.total_weight_kg,
            "weight_per_meter_kg": plan.weight_per_meter_kg,
        }

    def _result(self, result: "TrayLoadResult") -> dict[str, Any]:
        loads = result.loads
        evaluation = result.load_curve
        return {
            "tray_id": result.tray.id,
            "tray_name": result.tray.name,
            "free_space_percent": round_for_export(result.free_space.percent),
            "occupied_width_mm": result.free_space.occupied_width_mm,
            "supports": {
                **self._support_plan(result.support_plan),
                "distance_source": result.support_inputs.distance_source.value,
                "weight_source": result.support_inputs.weight_source.value,
            },
            "loads": {
                "tray_weight_per_meter_kg": loads.tray_weight_per_meter_kg,
                "tray_weight_load_per_meter_kg": loads.tray_weight_load_per_meter_kg,
                "tray_total_own_weight_kg": loads.tray_total_own_weight_kg,
                "cables_weight_load_per_meter_kg": loads.cables_weight_load_per_meter_kg,
                "cables_total_weight_kg": loads.cables_total_weight_kg,
                "total_weight_load_per_meter_kg": loads.total_weight_load_per_meter_kg,
                "total_weight_kg": loads.total_weight_kg,
                "total_weight_load_per_meter_kn": loads.total_weight_load_per_meter_kn,
            },
            "load_curve": {
                "status": evaluation.status.value,
                "message": evaluation.message,
                "safety_adjusted_load_kn_per_m": evaluation.safety_adjusted_load_kn_per_m,
                "allowable_load_at_span_kn_per_m": (
                    evaluation.allowable_load_at_span_kn_per_m
                ),
                "limit_span_m": (
                    evaluation.limit.span_m if evaluation.limit is not None else None
                ),
            },
        }
