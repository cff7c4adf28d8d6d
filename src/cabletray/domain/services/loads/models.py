"""Data models for tray loads and load curve checks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class TrayLoads:
    """Weight loads carried by one tray.

    A None figure means the inputs it depends on are missing.

    Attributes:
        tray_weight_per_meter_kg: Tray self weight per meter.
        tray_weight_load_per_meter_kg: Tray plus support weight per meter.
        tray_total_own_weight_kg: Tray plus supports over the full length.
        cables_weight_load_per_meter_kg: Carried cable weight per meter.
        cables_total_weight_kg: Carried cable weight over the full length.
        total_weight_load_per_meter_kg: Tray load plus cable load per meter.
        total_weight_kg: Everything over the full length.
        total_weight_load_per_meter_kn: Total per meter load in kN/m.
        cables_counted: Cables that contributed a weight.
        cables_without_weight: Cables on the tray without a known weight.
        grounding_included: Whether a grounding cable weight was added.
    """

    tray_weight_per_meter_kg: float | None = None
    tray_weight_load_per_meter_kg: float | None = None
    tray_total_own_weight_kg: float | None = None
    cables_weight_load_per_meter_kg: float | None = None
    cables_total_weight_kg: float | None = None
    total_weight_load_per_meter_kg: float | None = None
    total_weight_kg: float | None = None
    total_weight_load_per_meter_kn: float | None = None
    cables_counted: int = 0
    cables_without_weight: int = 0
    grounding_included: bool = False


class LoadCurveStatus(str, Enum):
    """Outcome of checking a tray's load against its load curve.

    Attributes:
        NO_CURVE: The tray type has no linked load curve.
        NO_POINTS: The linked curve has no data points.
        AWAITING_DATA: Safety factor, load or span is missing.
        OK: The support span is within the curve limits.
        LOAD_TOO_HIGH: The load exceeds the curve's maximum.
        TOO_SHORT: The span is below the curve's minimum span.
        TOO_LONG: The span exceeds the allowable span for the load.
    """

    NO_CURVE = "no-curve"
    NO_POINTS = "no-points"
    AWAITING_DATA = "awaiting-data"
    OK = "ok"
    LOAD_TOO_HIGH = "load-too-high"
    TOO_SHORT = "too-short"
    TOO_LONG = "too-long"


@dataclass(frozen=True)
class SpanLimit:
    """A highlighted limit on the load curve.

    Attributes:
        span_m: Span of the limit in meters.
        load_kn_per_m: Load at that span.
        kind: "min" or "max".
    """

    span_m: float
    load_kn_per_m: float
    kind: str = "max"

    @property
    def label(self) -> str:
        return "Min allowable span" if self.kind == "min" else "Max allowable span"


@dataclass(frozen=True)
class LoadCurveEvaluation:
    """Result of a load curve check.

    Attributes:
        status: Outcome of the check.
        message: Human readable explanation.
        span_m: Support span checked, if known.
        safety_adjusted_load_kn_per_m: Load including the safety factor.
        min_span_m: Smallest span on the curve.
        max_span_m: Largest span on the curve.
        allowable_load_at_span_kn_per_m: Interpolated curve load at span_m.
        limit: Limit relevant to the status.
    """

    status: LoadCurveStatus
    message: str
    span_m: float | None = None
    safety_adjusted_load_kn_per_m: float | None = None
    min_span_m: float | None = None
    max_span_m: float | None = None
    allowable_load_at_span_kn_per_m: float | None = None
    limit: SpanLimit | None = None

    @property
    def passed(self) -> bool:
        return self.status is LoadCurveStatus.OK
