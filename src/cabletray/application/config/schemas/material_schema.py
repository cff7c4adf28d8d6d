"""Material catalogue schemas: trays, supports and load curves."""

from pydantic import Field

from cabletray.application.config.schemas.base import SnapshotModel


class MaterialTraySchema(SnapshotModel):
    """Tray catalogue entry, matched to trays by type."""

    id: str
    type: str = Field(..., min_length=1)
    manufacturer: str | None = None
    width_mm: float | None = None
    height_mm: float | None = None
    rung_height_mm: float | None = None
    weight_kg_per_m: float | None = Field(default=None, ge=0.0)
    load_curve_id: str | None = None


class MaterialSupportSchema(SnapshotModel):
    """Support bracket catalogue entry."""

    id: str
    type: str = Field(..., min_length=1)
    weight_kg: float | None = Field(default=None, ge=0.0)
    width_mm: float | None = None
    height_mm: float | None = None
    length_mm: float | None = None


class LoadCurvePointSchema(SnapshotModel):
    """One (span, allowable load) point of a load curve.

    Attributes:
        span_m: Support span in meters.
        load_kn_per_m: Allowable distributed load in kN/m.
    """

    span_m: float = Field(..., ge=0.0)
    load_kn_per_m: float = Field(..., ge=0.0)


class LoadCurveSchema(SnapshotModel):
    """Manufacturer load curve."""

    id: str
    name: str = ""
    points: list[LoadCurvePointSchema] = Field(default_factory=list)
