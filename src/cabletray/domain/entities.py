"""Domain entities: projects, trays, cables and cable types.

Entities are immutable snapshots. Callers fetch a consistent set
(project, trays, cables, catalogue) and hand it to the calculators;
nothing here is mutated or re-fetched.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .value_objects import CableLayout, SupportOverride


def _positive_or_none(value: float | None) -> float | None:
    if value is None or math.isnan(value) or value <= 0:
        return None
    return value


@dataclass(frozen=True)
class Tray:
    """A physical cable tray run.

    Attributes:
        id: Stable identifier.
        project_id: Owning project.
        name: Tray name, referenced by cable routings.
        type: Tray type designation (catalogue key).
        purpose: Free-form purpose text.
        width_mm: Inner width in mm.
        height_mm: Side height in mm.
        length_mm: Run length in mm.
        weight_kg_per_m: Explicit self-weight override.
        include_grounding_cable: Add the selected grounding cable to loads.
        grounding_cable_type_id: Cable type used as grounding conductor.
    """

    id: str
    name: str
    project_id: str | None = None
    type: str | None = None
    purpose: str | None = None
    width_mm: float | None = None
    height_mm: float | None = None
    length_mm: float | None = None
    weight_kg_per_m: float | None = None
    include_grounding_cable: bool = False
    grounding_cable_type_id: str | None = None

    @property
    def usable_width_mm(self) -> float | None:
        return _positive_or_none(self.width_mm)

    @property
    def usable_height_mm(self) -> float | None:
        return _positive_or_none(self.height_mm)

    @property
    def length_m(self) -> float | None:
        """Length in meters, or None when unknown or not positive."""
        length = _positive_or_none(self.length_mm)
        return length / 1000 if length is not None else None


@dataclass(frozen=True)
class Cable:
    """A cable with its routing through named trays.

    Attributes:
        id: Stable identifier.
        project_id: Owning project.
        tag: Cable tag.
        purpose: Category tag, e.g. "power" or "grounding".
        diameter_mm: Outer diameter in mm.
        weight_kg_per_m: Weight per meter.
        routing: Slash-delimited list of tray names.
    """

    id: str
    project_id: str | None = None
    tag: str | None = None
    purpose: str | None = None
    diameter_mm: float | None = None
    weight_kg_per_m: float | None = None
    routing: str | None = None

    @property
    def usable_diameter_mm(self) -> float | None:
        return _positive_or_none(self.diameter_mm)

    @property
    def known_weight_kg_per_m(self) -> float | None:
        if self.weight_kg_per_m is None or math.isnan(self.weight_kg_per_m):
            return None
        return self.weight_kg_per_m


@dataclass(frozen=True)
class CableType:
    """Project cable type, used to pick a grounding conductor."""

    id: str
    name: str
    purpose: str | None = None
    diameter_mm: float | None = None
    weight_kg_per_m: float | None = None


@dataclass(frozen=True)
class Project:
    """Project-level settings consumed by the engine.

    Attributes:
        id: Stable identifier.
        name: Project name.
        cable_layout: Trusted layout settings.
        support_distance_m: Default support distance.
        support_weight_kg: Default weight of one support.
        tray_load_safety_factor_percent: Safety margin for load curve checks.
        support_overrides: Overrides keyed by tray type.
    """

    id: str
    name: str = ""
    cable_layout: CableLayout = field(default_factory=CableLayout)
    support_distance_m: float | None = None
    support_weight_kg: float | None = None
    tray_load_safety_factor_percent: float | None = None
    support_overrides: Mapping[str, SupportOverride] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "support_overrides", MappingProxyType(dict(self.support_overrides))
        )

    def support_override_for(self, tray_type: str | None) -> SupportOverride | None:
        """Return the override registered for a tray type, if any."""
        if not tray_type:
            return None
        override = self.support_overrides.get(tray_type)
        if override is not None:
            return override
        wanted = tray_type.strip().lower()
        for key, value in self.support_overrides.items():
            if key.strip().lower() == wanted:
                return value
        return None
