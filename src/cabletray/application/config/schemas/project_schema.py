"""Project, tray, cable and cable type schemas."""

from pydantic import Field

from cabletray.application.config.schemas.base import SnapshotModel
from cabletray.application.config.schemas.layout_schema import CableLayoutSchema


class SupportOverrideSchema(SnapshotModel):
    """Support override for one tray type.

    Attributes:
        distance: Support distance in meters.
        support_id: Catalogue support to use.
    """

    distance: float | None = Field(
        default=None, description="Support distance in meters"
    )
    support_id: str | None = Field(
        default=None, description="Catalogue id of the support to use"
    )


class ProjectSchema(SnapshotModel):
    """Project settings.

    Attributes:
        id: Project identifier.
        name: Project name.
        cable_layout: Cable layout settings; defaults when omitted.
        support_distance: Default support distance in meters.
        support_weight: Default weight of one support in kg.
        tray_load_safety_factor: Safety margin for load curve checks, in percent.
        support_distance_overrides: Overrides keyed by tray type.
    """

    id: str
    name: str = ""
    cable_layout: CableLayoutSchema | None = None
    support_distance: float | None = None
    support_weight: float | None = Field(default=None, ge=0.0)
    tray_load_safety_factor: float | None = None
    support_distance_overrides: dict[str, SupportOverrideSchema] = Field(
        default_factory=dict
    )


class TraySchema(SnapshotModel):
    """Tray record.

    Dimensions may be missing or zero; calculators then report None
    rather than failing.
    """

    id: str
    name: str = Field(..., min_length=1)
    project_id: str | None = None
    type: str | None = None
    purpose: str | None = None
    width_mm: float | None = None
    height_mm: float | None = None
    length_mm: float | None = None
    weight_kg_per_m: float | None = Field(default=None, ge=0.0)
    include_grounding_cable: bool = False
    grounding_cable_type_id: str | None = None


class CableSchema(SnapshotModel):
    """Cable record with its routing through named trays."""

    id: str
    project_id: str | None = None
    tag: str | None = None
    purpose: str | None = None
    diameter_mm: float | None = None
    weight_kg_per_m: float | None = None
    routing: str | None = None


class CableTypeSchema(SnapshotModel):
    """Project cable type."""

    id: str
    name: str
    purpose: str | None = None
    diameter_mm: float | None = None
    weight_kg_per_m: float | None = None
