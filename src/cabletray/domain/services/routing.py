"""Cable-to-tray association and purpose classification."""

from __future__ import annotations

from typing import Iterable

from cabletray.domain.entities import Cable
from cabletray.domain.value_objects import CableCategory

GROUNDING_PURPOSE = "grounding"


def routing_contains_tray(routing: str | None, tray_name: str) -> bool:
    """Check whether a routing string passes through a tray.

    The routing is split on "/" and each segment is compared to the tray
    name, trimmed and case-insensitively. Partial matches do not count:
    "A/Tray-1/B" contains "tray-1" but not "Tray-10" or "Tray".
    """
    if not routing:
        return False
    target = tray_name.strip().lower()
    if not target:
        return False
    return any(segment.strip().lower() == target for segment in routing.split("/"))


def filter_cables_by_tray(cables: Iterable[Cable], tray_name: str) -> list[Cable]:
    """Return the cables routed onto the named tray, in input order."""
    return [cable for cable in cables if routing_contains_tray(cable.routing, tray_name)]


def is_grounding_purpose(purpose: str | None) -> bool:
    return purpose is not None and purpose.strip().lower() == GROUNDING_PURPOSE


def match_cable_category(purpose: str | None) -> CableCategory | None:
    """Classify a purpose tag into a layout category.

    Exact category tags match, and so do the descriptive tags used in
    cable lists ("MV cable", "Medium voltage", "VFD supply",
    "Power 400V", "Control 24V DC"). Returns None for anything else,
    including grounding.
    """
    if not purpose:
        return None
    normalized = purpose.strip().lower()
    if not normalized:
        return None

    if normalized.startswith("mv") or "medium voltage" in normalized:
        return CableCategory.MV
    if "vfd" in normalized:
        return CableCategory.VFD
    if normalized.startswith("power") or " power" in normalized:
        return CableCategory.POWER
    if "control" in normalized:
        return CableCategory.CONTROL
    return None
