"""Cable layout configuration schemas.

This module contains the cable layout models: per-category settings,
custom bundle diameter ranges and the project-wide CableLayoutSchema.
"""

from typing import Any

from pydantic import Field, ValidationInfo, field_validator, model_validator

from cabletray.application.config.normalize import (
    coerce_bundle_spacing,
    normalize_percent,
    validate_bundle_ranges,
)
from cabletray.application.config.schemas.base import (
    BundleSpacingConfig,
    CableCategoryConfig,
    FreeSpaceBasisConfig,
    SnapshotModel,
)
from cabletray.domain.value_objects import MAX_GRID_DIMENSION


class CategorySettingsSchema(SnapshotModel):
    """Layout settings for one cable category.

    Unset fields fall back to the category defaults.

    Attributes:
        max_rows: Maximum cable rows in one bundle (1-1000).
        max_columns: Maximum cable columns in one bundle (1-1000).
        bundle_spacing: Gap between bundles: "0", "1D" or "2D".
        trefoil: Group cables in threes.
        trefoil_spacing_between_bundles: Use the bundle gap between trefoils.
        apply_phase_rotation: Reorder members for phase rotation (mv only).
    """

    max_rows: int | None = Field(
        default=None,
        ge=1,
        le=MAX_GRID_DIMENSION,
        description="Maximum cable rows in one bundle",
    )
    max_columns: int | None = Field(
        default=None,
        ge=1,
        le=MAX_GRID_DIMENSION,
        description="Maximum cable columns in one bundle",
    )
    bundle_spacing: BundleSpacingConfig | None = Field(
        default=None,
        description="Gap between bundles of one category",
    )
    trefoil: bool | None = None
    trefoil_spacing_between_bundles: bool | None = None
    apply_phase_rotation: bool | None = None

    @field_validator("bundle_spacing", mode="before")
    @classmethod
    def coerce_spacing(cls, v: Any) -> Any:
        """Accept 0, "1d" and similar spellings."""
        if v is None:
            return v
        return coerce_bundle_spacing(v)


class BundleRangeSchema(SnapshotModel):
    """Custom diameter range forming its own bundle class.

    Attributes:
        id: Stable identifier; generated when omitted.
        min: Lower diameter bound in mm (inclusive).
        max: Upper diameter bound in mm (inclusive).
        max_rows: Optional row cap replacing the category's max_rows.
    """

    id: str | None = None
    min: float
    max: float
    max_rows: int | None = Field(default=None, ge=1, le=MAX_GRID_DIMENSION)

    def as_range_dict(self) -> dict[str, Any]:
        return {"min": self.min, "max": self.max, "maxRows": self.max_rows}

    @model_validator(mode="after")
    def validate_bounds(self) -> "BundleRangeSchema":
        """Reject negative bounds and min >= max."""
        message = validate_bundle_ranges([self.as_range_dict()])
        if message is not None:
            raise ValueError(message)
        return self


class CableLayoutSchema(SnapshotModel):
    """Project-wide cable layout settings.

    Free space percentages are rounded and clamped into [1, 100] and the
    cable spacing is rounded to 3 decimals, so stored values that went
    through the settings normalizer load unchanged.

    Attributes:
        cable_spacing: Gap between cables inside a bundle in mm.
        consider_bundle_spacing_as_free: Count bundle gaps as free space.
        min_free_space_percent: Lower clamp for reported free space.
        max_free_space_percent: Upper clamp for reported free space.
        free_space_basis: "width" (default) or "area".
        use_default_bands: Fall back to built-in diameter bands.
        mv: MV cable settings.
        power: Power cable settings.
        vfd: VFD cable settings.
        control: Control cable settings.
        custom_bundle_ranges: Custom diameter ranges per category.
    """

    cable_spacing: float | None = Field(
        default=None,
        ge=0.0,
        description="Gap between cables inside a bundle in mm",
    )
    consider_bundle_spacing_as_free: bool | None = None
    min_free_space_percent: int | None = Field(default=None, ge=1, le=100)
    max_free_space_percent: int | None = Field(default=None, ge=1, le=100)
    free_space_basis: FreeSpaceBasisConfig | None = None
    use_default_bands: bool | None = None
    mv: CategorySettingsSchema | None = None
    power: CategorySettingsSchema | None = None
    vfd: CategorySettingsSchema | None = None
    control: CategorySettingsSchema | None = None
    custom_bundle_ranges: dict[CableCategoryConfig, list[BundleRangeSchema]] | None = (
        None
    )

    @field_validator("cable_spacing")
    @classmethod
    def round_spacing(cls, v: float | None) -> float | None:
        return round(v, 3) if v is not None else None

    @field_validator("min_free_space_percent", "max_free_space_percent", mode="before")
    @classmethod
    def clamp_percent(cls, v: Any, info: ValidationInfo) -> Any:
        """Round to an integer and clamp into [1, 100]."""
        if v is None:
            return v
        return normalize_percent(v, info.field_name)

    @model_validator(mode="after")
    def validate_layout(self) -> "CableLayoutSchema":
        """Check the free space interval and custom ranges per category."""
        if (
            self.min_free_space_percent is not None
            and self.max_free_space_percent is not None
            and self.min_free_space_percent > self.max_free_space_percent
        ):
            raise ValueError(
                f"minFreeSpacePercent ({self.min_free_space_percent}) cannot be "
                f"greater than maxFreeSpacePercent ({self.max_free_space_percent})"
            )
        for category, ranges in (self.custom_bundle_ranges or {}).items():
            message = validate_bundle_ranges([r.as_range_dict() for r in ranges])
            if message is not None:
                raise ValueError(f"customBundleRanges.{category.value}: {message}")
        return self

    def settings_for(self, category: CableCategoryConfig) -> CategorySettingsSchema | None:
        return getattr(self, category.value)
