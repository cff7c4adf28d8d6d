"""Tray free space calculation.

This module provides FreeSpaceCalculator, which turns a tray's bundle
layout into a clamped free space percentage, plus helpers used at export
time to merge operator overrides into the computed values.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

from cabletray.domain.entities import Cable, Tray
from cabletray.domain.value_objects import CableLayout, FreeSpaceBasis

from .bundling import BundleLayout, CableBundlingEngine
from .routing import filter_cables_by_tray, is_grounding_purpose

logger = logging.getLogger(__name__)

# Trays of this purpose carry MV cables in a dedicated layout; no figure applies
MV_TYPE_A_PURPOSE = "type a (pink color) for mv cables"


@dataclass(frozen=True)
class FreeSpaceResult:
    """Free space figures for one tray.

    Attributes:
        tray_id: Tray the figures belong to.
        percent: Clamped free space percentage, None when unavailable.
        occupied_width_mm: Occupied floor width, None when unavailable.
        layout: Bundle layout the figures were derived from.
    """

    tray_id: str
    percent: float | None
    occupied_width_mm: float | None
    layout: BundleLayout | None = None

    @property
    def available(self) -> bool:
        return self.percent is not None


def clamp_percent(value: float, bounds: tuple[float, float]) -> float:
    low, high = bounds
    return min(max(value, low), high)


class FreeSpaceCalculator:
    """Service for calculating free space on trays.

    For each tray the cables routed onto it (grounding excluded) are
    bundled, and the occupied floor width, or cross-section when the
    layout asks for the area basis and the tray has a height, is compared
    with what the tray offers. Bundle gaps count as occupied unless
    consider_bundle_spacing_as_free is set.

    The percentage is clamped into [min, max] free space when both are
    configured, otherwise into [0, 100]. Missing data never raises; the
    result is None instead.
    """

    def __init__(self, layout: CableLayout | None = None) -> None:
        self.layout = layout if layout is not None else CableLayout()
        self._engine = CableBundlingEngine(self.layout)

    def tray_cables(self, tray: Tray, cables: Iterable[Cable]) -> list[Cable]:
        """Cables routed onto the tray, grounding conductors excluded."""
        return [
            cable
            for cable in filter_cables_by_tray(cables, tray.name)
            if not is_grounding_purpose(cable.purpose)
        ]

    def calculate(self, tray: Tray, cables: Iterable[Cable]) -> FreeSpaceResult:
        """Calculate free space for one tray.

        Args:
            tray: Tray to evaluate.
            cables: All project cables; association by routing is applied here.

        Returns:
            FreeSpaceResult, with percent None when the tray has no usable
            width, its purpose excludes a figure, or a categorized cable
            lacks a diameter.
        """
        if tray.purpose and tray.purpose.strip().lower() == MV_TYPE_A_PURPOSE:
            return FreeSpaceResult(tray.id, None, None)

        layout = self._engine.bundle(self.tray_cables(tray, cables))
        if not layout.is_complete:
            logger.debug(
                f"Tray {tray.name}: {len(layout.missing_diameter)} cable(s) "
                "without diameter, free space unavailable"
            )
            return FreeSpaceResult(tray.id, None, None, layout)

        include_gaps = not self.layout.consider_bundle_spacing_as_free
        occupied_width = layout.occupied_width_mm(include_gaps)

        width = tray.usable_width_mm
        if width is None:
            return FreeSpaceResult(tray.id, None, occupied_width, layout)

        if layout.is_empty:
            raw_percent = 100.0
        elif (
            self.layout.free_space_basis is FreeSpaceBasis.AREA
            and tray.usable_height_mm is not None
        ):
            available = width * tray.usable_height_mm
            occupied = layout.occupied_area_mm2(include_gaps)
            raw_percent = 100 * (1 - occupied / available)
        else:
            raw_percent = 100 * (1 - occupied_width / width)

        percent = clamp_percent(raw_percent, self.layout.free_space_bounds)
        logger.debug(
            f"Tray {tray.name}: occupied {occupied_width:.1f} of {width:.1f} mm, "
            f"free {raw_percent:.2f}% -> {percent:.2f}%"
        )
        return FreeSpaceResult(tray.id, percent, occupied_width, layout)


def compute_tray_free_space_percent(
    tray: Tray,
    cables: Iterable[Cable],
    layout: CableLayout | None = None,
) -> float | None:
    """Free space percentage for one tray, or None when unavailable."""
    return FreeSpaceCalculator(layout).calculate(tray, cables).percent


def compute_tray_free_space_by_tray_id(
    trays: Sequence[Tray],
    cables: Sequence[Cable],
    layout: CableLayout | None = None,
) -> dict[str, float | None]:
    """Free space percentage per tray id.

    Args:
        trays: Trays to evaluate.
        cables: All project cables.
        layout: Trusted layout settings; defaults when None.

    Returns:
        Mapping of tray id to percentage (None when unavailable).
    """
    calculator = FreeSpaceCalculator(layout)
    return {tray.id: calculator.calculate(tray, cables).percent for tray in trays}


def _coerce_override(value: Any) -> tuple[bool, float | None]:
    """Return (accepted, value) for one operator-supplied override."""
    if value is None:
        return True, None
    if isinstance(value, bool):
        return False, None
    if isinstance(value, (int, float)):
        number = float(value)
        return (True, number) if math.isfinite(number) else (False, None)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            # A blank cell reads as zero
            return True, 0.0
        try:
            number = float(text)
        except ValueError:
            return False, None
        return (True, number) if math.isfinite(number) else (False, None)
    return False, None


def apply_free_space_overrides(
    computed: Mapping[str, float | None],
    provided: Mapping[str, Any] | None,
) -> dict[str, float | None]:
    """Merge operator overrides over computed free space values.

    Overrides may be None (blank the cell), finite numbers or numeric
    strings, where a blank string reads as 0; anything else is ignored. The computed mapping is not
    modified.
    """
    merged = dict(computed)
    if not provided:
        return merged
    for tray_id, value in provided.items():
        accepted, number = _coerce_override(value)
        if accepted:
            merged[str(tray_id)] = number
        else:
            logger.debug(f"Ignoring free space override for {tray_id}: {value!r}")
    return merged


def round_for_export(value: float | None) -> float | None:
    """Round a percentage to two decimals for spreadsheet cells.

    Halves round up, towards positive infinity, not to even.
    """
    if value is None or not math.isfinite(value):
        return None
    return math.floor(value * 100 + 0.5) / 100
