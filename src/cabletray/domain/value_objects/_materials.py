"""Material catalogue value objects (trays, supports, load curves)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SupportOverride:
    """Per tray-type support override.

    Either field may be unset; unset fields fall back to project defaults.

    Attributes:
        distance: Support distance in meters.
        support_id: Catalogue id of the support to use.
    """

    distance: float | None = None
    support_id: str | None = None


@dataclass(frozen=True)
class MaterialTray:
    """Tray catalogue entry, keyed by type.

    Attributes:
        id: Catalogue id.
        type: Tray type designation, matched case-insensitively.
        width_mm: Nominal width in mm.
        height_mm: Nominal side height in mm.
        rung_height_mm: Rung height for ladder trays in mm.
        weight_kg_per_m: Self weight per meter.
        load_curve_id: Linked load curve, if any.
        manufacturer: Manufacturer name.
    """

    id: str
    type: str
    width_mm: float | None = None
    height_mm: float | None = None
    rung_height_mm: float | None = None
    weight_kg_per_m: float | None = None
    load_curve_id: str | None = None
    manufacturer: str | None = None

    def matches_type(self, tray_type: str | None) -> bool:
        if not tray_type:
            return False
        return self.type.strip().lower() == tray_type.strip().lower()


@dataclass(frozen=True)
class MaterialSupport:
    """Support bracket catalogue entry.

    Attributes:
        id: Catalogue id.
        type: Support type designation.
        weight_kg: Weight of one support piece.
        width_mm: Width in mm.
        height_mm: Height in mm.
        length_mm: Length in mm.
    """

    id: str
    type: str
    weight_kg: float | None = None
    width_mm: float | None = None
    height_mm: float | None = None
    length_mm: float | None = None


@dataclass(frozen=True)
class LoadCurvePoint:
    """One point of a manufacturer load curve.

    Attributes:
        span_m: Support span in meters.
        load_kn_per_m: Allowable distributed load at that span.
    """

    span_m: float
    load_kn_per_m: float


@dataclass(frozen=True)
class LoadCurve:
    """Allowable load versus support span for a tray type."""

    id: str
    name: str
    points: tuple[LoadCurvePoint, ...] = ()

    @property
    def sorted_points(self) -> tuple[LoadCurvePoint, ...]:
        return tuple(sorted(self.points, key=lambda point: point.span_m))
