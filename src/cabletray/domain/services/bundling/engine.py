"""Cable bundling service.

This module provides CableBundlingEngine, which partitions the cables
of one tray into bundles per category and derives each bundle's
footprint on the tray floor.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from cabletray.domain.entities import Cable
from cabletray.domain.services.routing import match_cable_category
from cabletray.domain.value_objects import (
    CATEGORY_CAPABILITIES,
    CATEGORY_ORDER,
    BundleRange,
    CableCategory,
    CableLayout,
    CategorySettings,
)

from .constants import (
    DEFAULT_DIAMETER_BANDS,
    OPEN_BAND_LABEL,
    PHASE_ROTATION_BLOCK,
    TREFOIL_HEIGHT_FACTOR,
    TREFOIL_SIZE,
)
from .models import Bundle, BundleLayout, CablePlacement, CategoryBlock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiameterClass:
    """Diameter class a cable falls into.

    Attributes:
        label: Class label, None for cables that form singleton bundles.
        bundle_range: Custom range that matched, if any.
    """

    label: str | None
    bundle_range: BundleRange | None = None


def default_band_label(diameter: float) -> str:
    """Return the built-in band label for a diameter in mm."""
    for upper, label in DEFAULT_DIAMETER_BANDS:
        if diameter <= upper:
            return label
    return OPEN_BAND_LABEL


def classify_diameter(
    diameter: float,
    ranges: Sequence[BundleRange],
    use_default_bands: bool = True,
) -> DiameterClass:
    """Classify a diameter into the first matching custom range or a band.

    Ranges are validated disjoint beforehand, so at most one matches.
    """
    for bundle_range in ranges:
        if bundle_range.contains(diameter):
            return DiameterClass(bundle_range.label, bundle_range)
    if use_default_bands:
        return DiameterClass(default_band_label(diameter))
    return DiameterClass(None)


def apply_phase_rotation(members: Sequence[Cable]) -> list[Cable]:
    """Reorder members for MV phase rotation.

    Works in blocks of six: the first three are rotated left by one
    (L1 L2 L3 -> L2 L3 L1) and the second three are reversed.
    """
    rotated: list[Cable] = []
    half = PHASE_ROTATION_BLOCK // 2
    for start in range(0, len(members), PHASE_ROTATION_BLOCK):
        block = list(members[start : start + PHASE_ROTATION_BLOCK])
        first_half = block[1:half] + block[:1]
        second_half = list(reversed(block[half:]))
        rotated.extend(first_half + second_half)
    return rotated


def _diameter(cable: Cable) -> float:
    # Only called for cables that passed the usable-diameter filter
    return cable.usable_diameter_mm or 0.0


class CableBundlingEngine:
    """Service for grouping a tray's cables into bundles.

    Cables are classified by category (purpose tag) and diameter class.
    Each class is split into trefoil groups of three when the category
    supports and enables trefoil, otherwise into bundles that hold at
    most max_rows x max_columns cables. Bundles are placed left to right
    in descending diameter order; categories follow in the fixed order
    mv, power, vfd, control.

    The engine is stateless apart from its settings and never mutates
    its inputs.
    """

    def __init__(self, layout: CableLayout | None = None) -> None:
        """Initialize the engine.

        Args:
            layout: Trusted layout settings. Defaults apply when None.
        """
        self.layout = layout if layout is not None else CableLayout()

    def bundle(self, cables: Iterable[Cable]) -> BundleLayout:
        """Bundle one tray's cables.

        Args:
            cables: Cables already associated with the tray.

        Returns:
            BundleLayout with category blocks, plus the cables that could
            not be bundled (unclassified purpose, missing diameter).
        """
        by_category: dict[CableCategory, list[Cable]] = {
            category: [] for category in CATEGORY_ORDER
        }
        unclassified: list[Cable] = []
        missing_diameter: list[Cable] = []

        for cable in cables:
            category = match_cable_category(cable.purpose)
            if category is None:
                unclassified.append(cable)
                continue
            if cable.usable_diameter_mm is None:
                missing_diameter.append(cable)
                continue
            by_category[category].append(cable)

        blocks: list[CategoryBlock] = []
        for category in CATEGORY_ORDER:
            members = by_category[category]
            if not members:
                continue
            blocks.append(self._build_block(category, members))

        logger.debug(
            f"Bundled {sum(len(b.bundles) for b in blocks)} bundles in "
            f"{len(blocks)} categories; {len(unclassified)} unclassified, "
            f"{len(missing_diameter)} without diameter"
        )

        return BundleLayout(
            blocks=tuple(blocks),
            unclassified=tuple(unclassified),
            missing_diameter=tuple(missing_diameter),
        )

    def _build_block(
        self, category: CableCategory, cables: list[Cable]
    ) -> CategoryBlock:
        settings = self.layout.settings_for(category)
        capabilities = CATEGORY_CAPABILITIES[category]
        ranges = self.layout.ranges_for(category)

        # Group by class, preserving first-seen order for stable output.
        # A custom range and a built-in band may share a label.
        classes: dict[
            tuple[str | None, str | None], tuple[DiameterClass, list[Cable]]
        ] = {}
        singletons: list[tuple[DiameterClass, list[Cable]]] = []
        for cable in cables:
            diameter_class = classify_diameter(
                _diameter(cable), ranges, self.layout.use_default_bands
            )
            if diameter_class.label is None:
                singletons.append((diameter_class, [cable]))
                continue
            range_id = (
                diameter_class.bundle_range.id
                if diameter_class.bundle_range is not None
                else None
            )
            key = (range_id, diameter_class.label)
            classes.setdefault(key, (diameter_class, []))[1].append(cable)

        groups = list(classes.values()) + singletons
        groups.sort(key=lambda group: -max(_diameter(c) for c in group[1]))

        trefoil = settings.trefoil and capabilities.trefoil
        trefoil_spacing = (
            settings.trefoil_spacing_between_bundles and capabilities.trefoil_spacing
        )
        phase_rotation = settings.apply_phase_rotation and capabilities.phase_rotation

        bundles: list[Bundle] = []
        gaps: list[float] = []
        previous_gap = 0.0
        for diameter_class, members in groups:
            ordered = sorted(members, key=lambda c: -_diameter(c))
            if phase_rotation:
                ordered = apply_phase_rotation(ordered)
            class_bundles = self._split_class(
                category, diameter_class, ordered, settings, trefoil
            )
            class_gap = settings.bundle_spacing.gap_for(
                max(_diameter(c) for c in ordered)
            )
            for index, bundle in enumerate(class_bundles):
                if bundles:
                    previous = bundles[-1]
                    same_class_trefoils = (
                        index > 0 and previous.trefoil and bundle.trefoil
                    )
                    if same_class_trefoils and not trefoil_spacing:
                        gaps.append(self.layout.cable_spacing)
                    else:
                        gaps.append(previous_gap)
                bundles.append(bundle)
                previous_gap = class_gap

        return CategoryBlock(category=category, bundles=tuple(bundles), gaps_mm=tuple(gaps))

    def _split_class(
        self,
        category: CableCategory,
        diameter_class: DiameterClass,
        members: list[Cable],
        settings: CategorySettings,
        trefoil: bool,
    ) -> list[Bundle]:
        label = diameter_class.label
        if trefoil and len(members) >= TREFOIL_SIZE:
            result: list[Bundle] = []
            full = len(members) - len(members) % TREFOIL_SIZE
            for start in range(0, full, TREFOIL_SIZE):
                result.append(
                    self._trefoil_bundle(
                        category, label, members[start : start + TREFOIL_SIZE]
                    )
                )
            if full < len(members):
                result.append(
                    self._flat_bundle(
                        category, label, members[full:], settings.max_columns
                    )
                )
            return result

        max_rows = settings.max_rows
        if diameter_class.bundle_range is not None and (
            diameter_class.bundle_range.max_rows is not None
        ):
            max_rows = diameter_class.bundle_range.max_rows
        capacity = max(1, max_rows * settings.max_columns)

        return [
            self._flat_bundle(
                category, label, members[start : start + capacity], settings.max_columns
            )
            for start in range(0, len(members), capacity)
        ]

    def _flat_bundle(
        self,
        category: CableCategory,
        label: str | None,
        members: list[Cable],
        max_columns: int,
    ) -> Bundle:
        placements = tuple(
            CablePlacement(
                cable_id=cable.id,
                diameter_mm=_diameter(cable),
                row=index // max_columns,
                column=index % max_columns,
            )
            for index, cable in enumerate(members)
        )
        bottom_row = members[: min(len(members), max_columns)]
        max_diameter = max(_diameter(c) for c in members)
        return Bundle(
            category=category,
            diameter_class=label,
            members=tuple(members),
            placements=placements,
            floor_width_mm=sum(_diameter(c) for c in bottom_row),
            height_mm=max_diameter,
            internal_spacing_mm=(len(members) - 1) * self.layout.cable_spacing,
        )

    def _trefoil_bundle(
        self, category: CableCategory, label: str | None, members: list[Cable]
    ) -> Bundle:
        # Two cables on the floor, the third resting on top between them
        first, second, top = members
        placements = (
            CablePlacement(first.id, _diameter(first), row=0, column=0),
            CablePlacement(second.id, _diameter(second), row=0, column=1),
            CablePlacement(top.id, _diameter(top), row=1, column=0),
        )
        max_diameter = max(_diameter(c) for c in members)
        return Bundle(
            category=category,
            diameter_class=label,
            members=tuple(members),
            placements=placements,
            floor_width_mm=_diameter(first) + _diameter(second),
            height_mm=max_diameter * TREFOIL_HEIGHT_FACTOR,
            trefoil=True,
        )
