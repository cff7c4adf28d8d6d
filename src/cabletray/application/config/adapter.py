"""Snapshot adapter functions.

This module converts validated snapshot schemas into immutable domain
objects. Nothing here validates; the schemas already did.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping

from cabletray.application.config.schemas import (
    BundleRangeSchema,
    CableLayoutSchema,
    CategorySettingsSchema,
    ProjectSchema,
    SnapshotSchema,
)
from cabletray.domain.entities import Cable, CableType, Project, Tray
from cabletray.domain.value_objects import (
    CATEGORY_ORDER,
    DEFAULT_CABLE_SPACING_MM,
    DEFAULT_CATEGORY_SETTINGS,
    BundleRange,
    CableCategory,
    CableLayout,
    CategorySettings,
    FreeSpaceBasis,
    LoadCurve,
    LoadCurvePoint,
    MaterialSupport,
    MaterialTray,
    SupportOverride,
)


@dataclass(frozen=True)
class ProjectSnapshot:
    """One consistent set of project data in domain form.

    Attributes:
        project: Project with trusted settings.
        trays: Trays of the project.
        cables: Cables of the project.
        cable_types: Cable types of the project.
        material_trays: Tray catalogue.
        material_supports: Support catalogue.
        load_curves: Load curves by id.
    """

    project: Project
    trays: tuple[Tray, ...] = ()
    cables: tuple[Cable, ...] = ()
    cable_types: tuple[CableType, ...] = ()
    material_trays: tuple[MaterialTray, ...] = ()
    material_supports: tuple[MaterialSupport, ...] = ()
    load_curves: Mapping[str, LoadCurve] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def tray_named(self, name: str) -> Tray | None:
        """Find a tray by name, trimmed and case-insensitively."""
        wanted = name.strip().lower()
        for tray in self.trays:
            if tray.name.strip().lower() == wanted:
                return tray
        return None

    def cable_type(self, cable_type_id: str | None) -> CableType | None:
        if cable_type_id is None:
            return None
        for cable_type in self.cable_types:
            if cable_type.id == cable_type_id:
                return cable_type
        return None


def config_to_category_settings(
    schema: CategorySettingsSchema | None, category: CableCategory
) -> CategorySettings | None:
    """Merge explicit category settings over the category defaults.

    Returns:
        CategorySettings, or None when nothing was set for the category.
    """
    if schema is None:
        return None
    overrides = schema.model_dump(exclude_none=True)
    if not overrides:
        return None
    return replace(DEFAULT_CATEGORY_SETTINGS[category], **overrides)


def config_to_bundle_ranges(
    ranges: list[BundleRangeSchema], category: CableCategory
) -> tuple[BundleRange, ...]:
    return tuple(
        BundleRange(
            id=item.id or f"{category.value}-{index + 1}",
            min=item.min,
            max=item.max,
            max_rows=item.max_rows,
        )
        for index, item in enumerate(ranges)
    )


def config_to_layout(schema: CableLayoutSchema | None) -> CableLayout:
    """Convert cable layout settings to a trusted CableLayout.

    Missing settings take their defaults.
    """
    if schema is None:
        return CableLayout()

    categories: dict[CableCategory, CategorySettings] = {}
    for category in CATEGORY_ORDER:
        settings = config_to_category_settings(schema.settings_for(category), category)
        if settings is not None:
            categories[category] = settings

    bundle_ranges = {
        category: config_to_bundle_ranges(ranges, category)
        for category, ranges in (schema.custom_bundle_ranges or {}).items()
        if ranges
    }

    return CableLayout(
        cable_spacing=(
            schema.cable_spacing
            if schema.cable_spacing is not None
            else DEFAULT_CABLE_SPACING_MM
        ),
        consider_bundle_spacing_as_free=bool(schema.consider_bundle_spacing_as_free),
        min_free_space_percent=schema.min_free_space_percent,
        max_free_space_percent=schema.max_free_space_percent,
        categories=categories,
        bundle_ranges=bundle_ranges,
        free_space_basis=schema.free_space_basis or FreeSpaceBasis.WIDTH,
        use_default_bands=(
            schema.use_default_bands if schema.use_default_bands is not None else True
        ),
    )


def config_to_project(schema: ProjectSchema) -> Project:
    """Convert project settings to a Project entity."""
    overrides = {
        tray_type: SupportOverride(
            distance=override.distance, support_id=override.support_id
        )
        for tray_type, override in schema.support_distance_overrides.items()
    }
    return Project(
        id=schema.id,
        name=schema.name,
        cable_layout=config_to_layout(schema.cable_layout),
        support_distance_m=schema.support_distance,
        support_weight_kg=schema.support_weight,
        tray_load_safety_factor_percent=schema.tray_load_safety_factor,
        support_overrides=overrides,
    )


def snapshot_to_domain(snapshot: SnapshotSchema) -> ProjectSnapshot:
    """Convert a validated snapshot into domain objects.

    Example:
        >>> snapshot = load_snapshot(Path("project.json"))
        >>> data = snapshot_to_domain(snapshot)
        >>> data.project.cable_layout.cable_spacing
        1.0
    """
    project = config_to_project(snapshot.project)
    trays = tuple(
        Tray(
            id=tray.id,
            name=tray.name,
            project_id=tray.project_id,
            type=tray.type,
            purpose=tray.purpose,
            width_mm=tray.width_mm,
            height_mm=tray.height_mm,
            length_mm=tray.length_mm,
            weight_kg_per_m=tray.weight_kg_per_m,
            include_grounding_cable=tray.include_grounding_cable,
            grounding_cable_type_id=tray.grounding_cable_type_id,
        )
        for tray in snapshot.trays
    )
    cables = tuple(
        Cable(
            id=cable.id,
            project_id=cable.project_id,
            tag=cable.tag,
            purpose=cable.purpose,
            diameter_mm=cable.diameter_mm,
            weight_kg_per_m=cable.weight_kg_per_m,
            routing=cable.routing,
        )
        for cable in snapshot.cables
    )
    cable_types = tuple(
        CableType(
            id=cable_type.id,
            name=cable_type.name,
            purpose=cable_type.purpose,
            diameter_mm=cable_type.diameter_mm,
            weight_kg_per_m=cable_type.weight_kg_per_m,
        )
        for cable_type in snapshot.cable_types
    )
    material_trays = tuple(
        MaterialTray(
            id=material.id,
            type=material.type,
            width_mm=material.width_mm,
            height_mm=material.height_mm,
            rung_height_mm=material.rung_height_mm,
            weight_kg_per_m=material.weight_kg_per_m,
            load_curve_id=material.load_curve_id,
            manufacturer=material.manufacturer,
        )
        for material in snapshot.material_trays
    )
    material_supports = tuple(
        MaterialSupport(
            id=support.id,
            type=support.type,
            weight_kg=support.weight_kg,
            width_mm=support.width_mm,
            height_mm=support.height_mm,
            length_mm=support.length_mm,
        )
        for support in snapshot.material_supports
    )
    load_curves = {
        curve.id: LoadCurve(
            id=curve.id,
            name=curve.name,
            points=tuple(
                LoadCurvePoint(span_m=point.span_m, load_kn_per_m=point.load_kn_per_m)
                for point in curve.points
            ),
        )
        for curve in snapshot.load_curves
    }
    return ProjectSnapshot(
        project=project,
        trays=trays,
        cables=cables,
        cable_types=cable_types,
        material_trays=material_trays,
        material_supports=material_supports,
        load_curves=MappingProxyType(load_curves),
    )
