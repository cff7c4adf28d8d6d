"""Bundling data models.

This module provides the derived (never persisted) results of bundling:
- CablePlacement: a member's slot inside its bundle grid
- Bundle: cables of one diameter class placed as one unit
- CategoryBlock: the bundles of one category with the gaps between them
- BundleLayout: all category blocks for one tray
"""

from __future__ import annotations

from dataclasses import dataclass

from cabletray.domain.entities import Cable
from cabletray.domain.value_objects import CableCategory


@dataclass(frozen=True)
class CablePlacement:
    """Grid slot of one cable inside a bundle.

    Row 0 is the row resting on the tray floor; columns run left to right.
    """

    cable_id: str
    diameter_mm: float
    row: int
    column: int


@dataclass(frozen=True)
class Bundle:
    """Group of same-class cables placed and spaced as one unit.

    Attributes:
        category: Layout category of every member.
        diameter_class: Class label ("8.1-15", custom "10-20") or None for
            singleton bundles formed without a diameter class.
        members: Member cables in placement order.
        placements: Grid slot per member.
        floor_width_mm: Width the bundle takes on the tray floor.
        height_mm: Footprint height: the largest member diameter, or the
            trefoil stack height.
        internal_spacing_mm: Cable spacing inside the bundle.
        trefoil: Whether the bundle is a trefoil.
    """

    category: CableCategory
    diameter_class: str | None
    members: tuple[Cable, ...]
    placements: tuple[CablePlacement, ...]
    floor_width_mm: float
    height_mm: float
    internal_spacing_mm: float = 0.0
    trefoil: bool = False

    def __post_init__(self) -> None:
        if not self.members:
            raise ValueError("Bundle must have at least one member")
        if len(self.placements) != len(self.members):
            raise ValueError("Every bundle member needs a placement")

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def max_diameter_mm(self) -> float:
        return max(placement.diameter_mm for placement in self.placements)

    @property
    def width_mm(self) -> float:
        """Footprint width including internal spacing."""
        return self.floor_width_mm + self.internal_spacing_mm

    @property
    def footprint_area_mm2(self) -> float:
        return self.width_mm * self.height_mm


@dataclass(frozen=True)
class CategoryBlock:
    """Bundles of one category, left to right, with the gaps between them.

    gaps_mm has one entry fewer than bundles: no gap follows the last one.
    """

    category: CableCategory
    bundles: tuple[Bundle, ...]
    gaps_mm: tuple[float, ...]

    def __post_init__(self) -> None:
        expected = max(0, len(self.bundles) - 1)
        if len(self.gaps_mm) != expected:
            raise ValueError(
                f"Category block needs {expected} gaps, got {len(self.gaps_mm)}"
            )

    @property
    def floor_width_mm(self) -> float:
        return sum(bundle.floor_width_mm for bundle in self.bundles)

    @property
    def internal_spacing_mm(self) -> float:
        return sum(bundle.internal_spacing_mm for bundle in self.bundles)

    @property
    def gap_total_mm(self) -> float:
        return sum(self.gaps_mm)

    @property
    def height_mm(self) -> float:
        return max((bundle.height_mm for bundle in self.bundles), default=0.0)

    def width_mm(self, include_gaps: bool = True) -> float:
        width = self.floor_width_mm + self.internal_spacing_mm
        if include_gaps:
            width += self.gap_total_mm
        return width

    def bundle_offsets_mm(self) -> tuple[float, ...]:
        """Left edge of every bundle measured from the block's left edge."""
        offsets: list[float] = []
        cursor = 0.0
        for index, bundle in enumerate(self.bundles):
            offsets.append(cursor)
            cursor += bundle.width_mm
            if index < len(self.gaps_mm):
                cursor += self.gaps_mm[index]
        return tuple(offsets)


@dataclass(frozen=True)
class BundleLayout:
    """Bundling result for one tray.

    Attributes:
        blocks: Category blocks in fixed order mv, power, vfd, control.
            Categories without cables have no block.
        unclassified: Cables whose purpose matches no category.
        missing_diameter: Categorized cables without a usable diameter.
    """

    blocks: tuple[CategoryBlock, ...] = ()
    unclassified: tuple[Cable, ...] = ()
    missing_diameter: tuple[Cable, ...] = ()

    @property
    def bundles(self) -> tuple[Bundle, ...]:
        return tuple(bundle for block in self.blocks for bundle in block.bundles)

    @property
    def is_empty(self) -> bool:
        return not self.blocks

    @property
    def is_complete(self) -> bool:
        """True when every categorized cable had a usable diameter."""
        return not self.missing_diameter

    @property
    def gap_total_mm(self) -> float:
        return sum(block.gap_total_mm for block in self.blocks)

    @property
    def max_height_mm(self) -> float:
        return max((block.height_mm for block in self.blocks), default=0.0)

    def occupied_width_mm(self, include_gaps: bool = True) -> float:
        """Floor width taken by all categories placed side by side."""
        return sum(block.width_mm(include_gaps) for block in self.blocks)

    def occupied_area_mm2(self, include_gaps: bool = True) -> float:
        """Cross-section taken by bundle footprints, plus gaps at full height."""
        area = sum(bundle.footprint_area_mm2 for bundle in self.bundles)
        if include_gaps:
            area += self.gap_total_mm * self.max_height_mm
        return area

    def block_for(self, category: CableCategory) -> CategoryBlock | None:
        for block in self.blocks:
            if block.category is category:
                return block
        return None
