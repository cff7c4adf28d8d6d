"""Cable layout value objects.

Categories, bundle spacing policies, per-category settings and custom
bundle diameter ranges. These are the trusted settings types the
calculators consume; untrusted input is converted into them by the
configuration layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

MAX_GRID_DIMENSION = 1000


class CableCategory(str, Enum):
    """Cable category used for layout rules.

    Attributes:
        MV: Medium voltage cables.
        POWER: Low voltage power cables.
        VFD: Variable frequency drive cables.
        CONTROL: Control and signal cables.
    """

    MV = "mv"
    POWER = "power"
    VFD = "vfd"
    CONTROL = "control"


# Fixed placement order across a tray
CATEGORY_ORDER: tuple[CableCategory, ...] = (
    CableCategory.MV,
    CableCategory.POWER,
    CableCategory.VFD,
    CableCategory.CONTROL,
)


class BundleSpacing(str, Enum):
    """Gap left between neighbouring bundles of one category.

    Attributes:
        NONE: Bundles touch.
        ONE_D: One diameter of the largest cable in the class.
        TWO_D: Two diameters of the largest cable in the class.
    """

    NONE = "0"
    ONE_D = "1D"
    TWO_D = "2D"

    def gap_for(self, max_diameter: float) -> float:
        """Return the gap in mm for a class whose largest cable is max_diameter."""
        if self is BundleSpacing.ONE_D:
            return max_diameter
        if self is BundleSpacing.TWO_D:
            return max_diameter * 2
        return 0.0


class FreeSpaceBasis(str, Enum):
    """How occupied space is measured against the tray.

    Attributes:
        WIDTH: Occupied floor width against tray width.
        AREA: Occupied cross-section against tray width x height.
    """

    WIDTH = "width"
    AREA = "area"


@dataclass(frozen=True)
class CategoryCapabilities:
    """Layout features a category supports.

    Attributes:
        label: Display label.
        trefoil: Trefoil bundling is available.
        trefoil_spacing: Trefoil spacing between bundles is available.
        phase_rotation: Phase rotation ordering is available.
    """

    label: str
    trefoil: bool
    trefoil_spacing: bool
    phase_rotation: bool


CATEGORY_CAPABILITIES: Mapping[CableCategory, CategoryCapabilities] = MappingProxyType(
    {
        CableCategory.MV: CategoryCapabilities("MV cables", True, True, True),
        CableCategory.POWER: CategoryCapabilities("Power cables", True, True, False),
        CableCategory.VFD: CategoryCapabilities("VFD cables", True, True, False),
        CableCategory.CONTROL: CategoryCapabilities(
            "Control cables", False, False, False
        ),
    }
)


def _check_grid_dimension(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be a whole number")
    if not 1 <= value <= MAX_GRID_DIMENSION:
        raise ValueError(f"{name} must be between 1 and {MAX_GRID_DIMENSION}")


@dataclass(frozen=True)
class CategorySettings:
    """Resolved layout settings for one cable category.

    Attributes:
        max_rows: Maximum cable rows in one bundle.
        max_columns: Maximum cable columns in one bundle.
        bundle_spacing: Gap policy between bundles.
        trefoil: Group cables in threes.
        trefoil_spacing_between_bundles: Use the bundle gap between trefoils.
        apply_phase_rotation: Reorder MV members for phase rotation.
    """

    max_rows: int
    max_columns: int
    bundle_spacing: BundleSpacing = BundleSpacing.TWO_D
    trefoil: bool = False
    trefoil_spacing_between_bundles: bool = False
    apply_phase_rotation: bool = False

    def __post_init__(self) -> None:
        _check_grid_dimension("max_rows", self.max_rows)
        _check_grid_dimension("max_columns", self.max_columns)

    @property
    def capacity(self) -> int:
        """Cables that fit in one bundle grid."""
        return self.max_rows * self.max_columns


DEFAULT_CATEGORY_SETTINGS: Mapping[CableCategory, CategorySettings] = MappingProxyType(
    {
        CableCategory.MV: CategorySettings(
            max_rows=2,
            max_columns=2,
            trefoil=True,
            apply_phase_rotation=True,
        ),
        CableCategory.POWER: CategorySettings(max_rows=3, max_columns=20, trefoil=True),
        CableCategory.VFD: CategorySettings(max_rows=3, max_columns=20, trefoil=True),
        CableCategory.CONTROL: CategorySettings(
            max_rows=7, max_columns=20, trefoil=True
        ),
    }
)


@dataclass(frozen=True)
class BundleRange:
    """Custom diameter range that forms its own bundle class.

    Attributes:
        id: Stable identifier.
        min: Lower diameter bound in mm (inclusive).
        max: Upper diameter bound in mm (inclusive).
        max_rows: Optional row cap replacing the category's max_rows.
    """

    id: str
    min: float
    max: float
    max_rows: int | None = None

    def __post_init__(self) -> None:
        if self.min < 0 or self.max < 0:
            raise ValueError("Bundle range values must be positive numbers")
        if self.min >= self.max:
            raise ValueError("Bundle range min must be less than max")
        if self.max_rows is not None:
            _check_grid_dimension("max_rows", self.max_rows)

    @property
    def label(self) -> str:
        """Class label, e.g. "8-15"."""
        return f"{self.min:g}-{self.max:g}"

    def contains(self, diameter: float) -> bool:
        return self.min <= diameter <= self.max


DEFAULT_CABLE_SPACING_MM = 1.0


@dataclass(frozen=True)
class CableLayout:
    """Project-wide cable layout settings.

    Categories without explicit settings use DEFAULT_CATEGORY_SETTINGS.

    Attributes:
        cable_spacing: Gap between cables inside a bundle in mm.
        consider_bundle_spacing_as_free: Count bundle gaps as free space.
        min_free_space_percent: Lower clamp for reported free space.
        max_free_space_percent: Upper clamp for reported free space.
        categories: Explicit per-category settings.
        bundle_ranges: Custom diameter ranges per category, sorted by min.
        free_space_basis: Width or cross-section area comparison.
        use_default_bands: Fall back to built-in diameter bands.
    """

    cable_spacing: float = DEFAULT_CABLE_SPACING_MM
    consider_bundle_spacing_as_free: bool = False
    min_free_space_percent: int | None = None
    max_free_space_percent: int | None = None
    categories: Mapping[CableCategory, CategorySettings] = field(
        default_factory=dict
    )
    bundle_ranges: Mapping[CableCategory, tuple[BundleRange, ...]] = field(
        default_factory=dict
    )
    free_space_basis: FreeSpaceBasis = FreeSpaceBasis.WIDTH
    use_default_bands: bool = True

    def __post_init__(self) -> None:
        if self.cable_spacing < 0:
            raise ValueError("Cable spacing must be non-negative")
        for name in ("min_free_space_percent", "max_free_space_percent"):
            value = getattr(self, name)
            if value is not None and not 1 <= value <= 100:
                raise ValueError(f"{name} must be between 1 and 100")
        if (
            self.min_free_space_percent is not None
            and self.max_free_space_percent is not None
            and self.min_free_space_percent > self.max_free_space_percent
        ):
            raise ValueError("min_free_space_percent cannot exceed max_free_space_percent")
        # Freeze caller-supplied dicts
        object.__setattr__(self, "categories", MappingProxyType(dict(self.categories)))
        object.__setattr__(
            self,
            "bundle_ranges",
            MappingProxyType(
                {
                    category: tuple(sorted(ranges, key=lambda r: r.min))
                    for category, ranges in self.bundle_ranges.items()
                }
            ),
        )

    def settings_for(self, category: CableCategory) -> CategorySettings:
        """Return explicit settings for a category, or its defaults."""
        return self.categories.get(category, DEFAULT_CATEGORY_SETTINGS[category])

    def ranges_for(self, category: CableCategory) -> tuple[BundleRange, ...]:
        return self.bundle_ranges.get(category, ())

    @property
    def free_space_bounds(self) -> tuple[float, float]:
        """Clamp interval for free space percentages."""
        if (
            self.min_free_space_percent is not None
            and self.max_free_space_percent is not None
        ):
            return (
                float(self.min_free_space_percent),
                float(self.max_free_space_percent),
            )
        return (0.0, 100.0)
