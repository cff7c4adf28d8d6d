"""Cross-reference validation for project snapshots.

The schemas check each record on its own. This validator checks how the
records refer to each other:
- Tray names must be unique, since routings refer to trays by name
- Routing segments should name existing trays
- Trays need a width for free space figures
- Support overrides should reference catalogue supports
- Grounding cable selections should reference grounding cable types
- Categorized cables need a diameter for free space figures
- Tray catalogue entries should reference existing load curves
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from cabletray.application.config.schemas import SnapshotSchema
from cabletray.domain.services.routing import is_grounding_purpose, match_cable_category


class Severity(str, Enum):
    """How much a snapshot issue blocks its use."""

    ERROR = "error"
    """The snapshot cannot be used until fixed."""

    WARNING = "warning"
    """Some figures are unavailable or an entry is ignored."""


@dataclass(frozen=True)
class SnapshotIssue:
    """One problem found in a snapshot.

    Attributes:
        severity: Whether the issue blocks use of the snapshot.
        path: JSON path of the offending field, e.g. "trays[0].widthMm".
        message: What is wrong.
        value: The offending value, shown for errors.
        suggestion: How to fix it, shown for warnings.
    """

    severity: Severity
    path: str
    message: str
    value: Any = None
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Issues found by the cross-reference checks, in discovery order."""

    issues: list[SnapshotIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[SnapshotIssue]:
        return [issue for issue in self.issues if issue.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[SnapshotIssue]:
        return [issue for issue in self.issues if issue.severity is Severity.WARNING]

    @property
    def exit_code(self) -> int:
        """CLI exit code: 1 with errors, 2 with only warnings, else 0."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(self, path: str, message: str, value: Any = None) -> None:
        self.issues.append(SnapshotIssue(Severity.ERROR, path, message, value=value))

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> None:
        self.issues.append(
            SnapshotIssue(Severity.WARNING, path, message, suggestion=suggestion)
        )


class SnapshotValidator:
    """Validator for cross-references inside a snapshot."""

    def validate(self, config: SnapshotSchema) -> ValidationResult:
        """Check a validated snapshot for broken or weak references.

        Args:
            config: A validated SnapshotSchema instance

        Returns:
            ValidationResult containing any errors or warnings
        """
        result = ValidationResult()
        self._validate_tray_names(config, result)
        self._validate_routings(config, result)
        self._validate_trays(config, result)
        self._validate_cables(config, result)
        self._validate_support_overrides(config, result)
        self._validate_load_curve_links(config, result)
        return result

    def _validate_tray_names(
        self, config: SnapshotSchema, result: ValidationResult
    ) -> None:
        seen: dict[str, int] = {}
        for index, tray in enumerate(config.trays):
            key = tray.name.strip().lower()
            if key in seen:
                result.add_error(
                    path=f"trays[{index}].name",
                    message=(
                        f"Tray name '{tray.name}' is already used by "
                        f"trays[{seen[key]}]; routings cannot tell them apart"
                    ),
                    value=tray.name,
                )
            else:
                seen[key] = index

    def _validate_routings(
        self, config: SnapshotSchema, result: ValidationResult
    ) -> None:
        tray_names = {tray.name.strip().lower() for tray in config.trays}
        for index, cable in enumerate(config.cables):
            if not cable.routing:
                continue
            unknown = [
                segment.strip()
                for segment in cable.routing.split("/")
                if segment.strip() and segment.strip().lower() not in tray_names
            ]
            if unknown:
                result.add_warning(
                    path=f"cables[{index}].routing",
                    message=(
                        f"Cable {cable.tag or cable.id} is routed through unknown "
                        f"tray(s): {', '.join(unknown)}"
                    ),
                )

    def _validate_trays(self, config: SnapshotSchema, result: ValidationResult) -> None:
        cable_types = {cable_type.id: cable_type for cable_type in config.cable_types}
        for index, tray in enumerate(config.trays):
            if tray.width_mm is None or tray.width_mm <= 0:
                result.add_warning(
                    path=f"trays[{index}].widthMm",
                    message=f"Tray {tray.name} has no width; free space is unavailable",
                    suggestion="Set the tray width in mm",
                )

            if not tray.include_grounding_cable:
                continue
            if tray.grounding_cable_type_id is None:
                result.add_warning(
                    path=f"trays[{index}].groundingCableTypeId",
                    message=(
                        f"Tray {tray.name} includes a grounding cable but none is "
                        "selected; its weight is not counted"
                    ),
                )
                continue
            cable_type = cable_types.get(tray.grounding_cable_type_id)
            if cable_type is None:
                result.add_warning(
                    path=f"trays[{index}].groundingCableTypeId",
                    message=(
                        f"Grounding cable type {tray.grounding_cable_type_id} "
                        "does not exist"
                    ),
                )
            elif not is_grounding_purpose(cable_type.purpose):
                result.add_warning(
                    path=f"trays[{index}].groundingCableTypeId",
                    message=(
                        f"Cable type {cable_type.name} is not a grounding cable type"
                    ),
                )

    def _validate_cables(self, config: SnapshotSchema, result: ValidationResult) -> None:
        for index, cable in enumerate(config.cables):
            if match_cable_category(cable.purpose) is None:
                continue
            if cable.diameter_mm is None or cable.diameter_mm <= 0:
                result.add_warning(
                    path=f"cables[{index}].diameterMm",
                    message=(
                        f"Cable {cable.tag or cable.id} has no diameter; free space "
                        "of its trays is unavailable"
                    ),
                )

    def _validate_support_overrides(
        self, config: SnapshotSchema, result: ValidationResult
    ) -> None:
        support_ids = {support.id for support in config.material_supports}
        overrides = config.project.support_distance_overrides
        for tray_type, override in overrides.items():
            if override.support_id and override.support_id not in support_ids:
                result.add_warning(
                    path=f"project.supportDistanceOverrides.{tray_type}.supportId",
                    message=(
                        f"Support {override.support_id} for tray type {tray_type} "
                        "is not in the support catalogue"
                    ),
                )
            if override.distance is not None and override.distance <= 0:
                result.add_warning(
                    path=f"project.supportDistanceOverrides.{tray_type}.distance",
                    message=(
                        f"Support distance for tray type {tray_type} is not "
                        "positive; supports cannot be calculated"
                    ),
                )

    def _validate_load_curve_links(
        self, config: SnapshotSchema, result: ValidationResult
    ) -> None:
        curve_ids = {curve.id for curve in config.load_curves}
        for index, material in enumerate(config.material_trays):
            if material.load_curve_id and material.load_curve_id not in curve_ids:
                result.add_warning(
                    path=f"materialTrays[{index}].loadCurveId",
                    message=(
                        f"Load curve {material.load_curve_id} for tray type "
                        f"{material.type} does not exist"
                    ),
                )


def validate_snapshot(config: SnapshotSchema) -> ValidationResult:
    """Run all cross-reference checks on a snapshot."""
    return SnapshotValidator().validate(config)
