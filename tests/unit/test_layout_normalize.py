"""Unit tests for cable layout settings normalization.

These tests verify:
- Grid dimensions, spacing and percentages are coerced and bounded
- Bundle range violations produce the expected messages
- Category flags a category cannot use are dropped
- Normalization is idempotent
"""

from typing import Any

import pytest

from cabletray.application.config import (
    LayoutConfigError,
    normalize_cable_layout,
    normalize_category_settings,
    validate_bundle_ranges,
)
from cabletray.application.config.normalize import (
    coerce_bundle_spacing,
    coerce_grid_dimension,
    normalize_percent,
)
from cabletray.domain.value_objects import BundleSpacing, CableCategory


class TestCoercion:
    """Tests for single-value coercion helpers."""

    @pytest.mark.parametrize("value", [1, 20, 1000, "7", 3.0])
    def test_grid_dimension_accepted(self, value: Any) -> None:
        assert coerce_grid_dimension(value, "maxRows") == int(float(value))

    def test_grid_dimension_fraction(self) -> None:
        with pytest.raises(LayoutConfigError, match="maxRows must be a whole number"):
            coerce_grid_dimension(2.5, "maxRows")

    @pytest.mark.parametrize("value", [0, 1001, -3])
    def test_grid_dimension_out_of_bounds(self, value: int) -> None:
        with pytest.raises(LayoutConfigError, match="between 1 and 1000"):
            coerce_grid_dimension(value, "maxColumns")

    @pytest.mark.parametrize("value", [True, "many", None])
    def test_grid_dimension_not_a_number(self, value: Any) -> None:
        with pytest.raises(LayoutConfigError, match="must be a number"):
            coerce_grid_dimension(value, "maxRows")

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, BundleSpacing.NONE),
            ("0", BundleSpacing.NONE),
            ("1d", BundleSpacing.ONE_D),
            (" 2D ", BundleSpacing.TWO_D),
        ],
    )
    def test_bundle_spacing(self, value: Any, expected: BundleSpacing) -> None:
        assert coerce_bundle_spacing(value) is expected

    @pytest.mark.parametrize("value", ["3D", 1, False, None])
    def test_bundle_spacing_rejected(self, value: Any) -> None:
        with pytest.raises(LayoutConfigError, match="bundleSpacing"):
            coerce_bundle_spacing(value)

    @pytest.mark.parametrize(
        ("value", "expected"), [(0, 1), (12.4, 12), (12.6, 13), (150, 100), ("40", 40)]
    )
    def test_percent_rounded_and_clamped(self, value: Any, expected: int) -> None:
        assert normalize_percent(value, "minFreeSpacePercent") == expected


class TestValidateBundleRanges:
    """Tests for validate_bundle_ranges."""

    def test_valid_ranges(self) -> None:
        ranges = [{"min": 15.1, "max": 30}, {"min": 0, "max": 15, "maxRows": 2}]
        assert validate_bundle_ranges(ranges) is None

    def test_empty(self) -> None:
        assert validate_bundle_ranges([]) is None

    def test_negative(self) -> None:
        message = validate_bundle_ranges([{"min": -1, "max": 5}])
        assert message == "Bundle range values must be positive numbers."

    def test_min_not_below_max(self) -> None:
        message = validate_bundle_ranges([{"min": 10, "max": 5}])
        assert message == (
            "Invalid range: min (10) must be less than max (5). "
            "Use 10.1 as minimum for the next range."
        )

    def test_touching_ranges(self) -> None:
        message = validate_bundle_ranges([{"min": 8, "max": 15}, {"min": 0, "max": 8}])
        assert message == (
            "Ranges overlap or touch: [0-8] and [8-15]. "
            "Next range should start at 8.1 or higher."
        )

    def test_fractional_max_rows(self) -> None:
        message = validate_bundle_ranges([{"min": 0, "max": 8, "maxRows": 1.5}])
        assert message == "Invalid max rows for range 0-8: enter a whole number."

    def test_max_rows_out_of_bounds(self) -> None:
        message = validate_bundle_ranges([{"min": 0, "max": 8, "maxRows": 0}])
        assert message == (
            "Invalid max rows for range 0-8: value must be between 1 and 1000."
        )

    def test_numeric_strings_accepted(self) -> None:
        ranges = [{"min": "0", "max": "8", "maxRows": "3"}]
        assert validate_bundle_ranges(ranges) is None

    @pytest.mark.parametrize(
        ("ranges", "expected"),
        [
            ([{"max": 8}], "Each bundle range needs both a min and a max value."),
            (
                [{"min": "abc", "max": 8}],
                "Bundle range values must be positive numbers.",
            ),
            (
                [{"min": 0, "max": 8, "maxRows": "two"}],
                "Invalid max rows for range 0-8: enter a whole number.",
            ),
            ([5], "Each bundle range must be an object with min and max."),
        ],
    )
    def test_unreadable_input_reported(
        self, ranges: list[Any], expected: str
    ) -> None:
        assert validate_bundle_ranges(ranges) == expected


class TestNormalizeCategorySettings:
    """Tests for normalize_category_settings."""

    def test_empty_means_defaults(self) -> None:
        assert normalize_category_settings({}) is None
        assert normalize_category_settings(None) is None
        assert normalize_category_settings("power") is None

    def test_accepts_snake_case(self) -> None:
        result = normalize_category_settings(
            {"max_rows": "3", "max_columns": 10, "bundle_spacing": "1d"}
        )
        assert result == {"maxRows": 3, "maxColumns": 10, "bundleSpacing": "1D"}

    def test_trefoil_spacing_dropped_without_trefoil(self) -> None:
        result = normalize_category_settings(
            {"trefoil": False, "trefoilSpacingBetweenBundles": True},
            CableCategory.POWER,
        )
        assert result == {"trefoil": False}

    def test_phase_rotation_only_for_mv(self) -> None:
        raw = {"applyPhaseRotation": True}
        assert normalize_category_settings(raw, CableCategory.POWER) is None
        assert normalize_category_settings(raw, CableCategory.MV) == {
            "applyPhaseRotation": True
        }

    def test_flag_must_be_boolean(self) -> None:
        with pytest.raises(LayoutConfigError, match="trefoil must be true or false"):
            normalize_category_settings({"trefoil": "yes"})


class TestNormalizeCableLayout:
    """Tests for normalize_cable_layout."""

    def test_nothing_recognized(self) -> None:
        assert normalize_cable_layout({"unrelated": 1}) is None
        assert normalize_cable_layout([]) is None

    def test_canonical_output(self) -> None:
        raw = {
            "cable_spacing": 1.23456,
            "considerBundleSpacingAsFree": True,
            "minFreeSpacePercent": 10.4,
            "max_free_space_percent": 120,
            "freeSpaceBasis": "AREA",
            "power": {"maxRows": 2, "maxColumns": 20},
            "customBundleRanges": {
                "power": [{"min": 15.1, "max": 30}, {"min": 0, "max": 15, "maxRows": 2}]
            },
        }

        result = normalize_cable_layout(raw)

        assert result == {
            "cableSpacing": 1.235,
            "considerBundleSpacingAsFree": True,
            "minFreeSpacePercent": 10,
            "maxFreeSpacePercent": 100,
            "freeSpaceBasis": "area",
            "power": {"maxRows": 2, "maxColumns": 20},
            "customBundleRanges": {
                "power": [
                    {"id": "power-2", "min": 0.0, "max": 15.0, "maxRows": 2},
                    {"id": "power-1", "min": 15.1, "max": 30.0},
                ]
            },
        }

    def test_idempotent(self) -> None:
        raw = {
            "cableSpacing": "2",
            "mv": {"maxRows": 2, "trefoil": True, "applyPhaseRotation": True},
            "control": {"trefoil": True, "bundleSpacing": 0},
            "customBundleRanges": {"vfd": [{"id": "v", "min": 5, "max": 9}]},
        }

        once = normalize_cable_layout(raw)
        assert normalize_cable_layout(once) == once

    def test_min_above_max(self) -> None:
        with pytest.raises(LayoutConfigError, match="cannot be greater"):
            normalize_cable_layout(
                {"minFreeSpacePercent": 80, "maxFreeSpacePercent": 20}
            )

    def test_negative_spacing(self) -> None:
        with pytest.raises(LayoutConfigError, match="cableSpacing"):
            normalize_cable_layout({"cableSpacing": -1})

    def test_category_error_names_category(self) -> None:
        with pytest.raises(LayoutConfigError, match=r"^power\.maxRows"):
            normalize_cable_layout({"power": {"maxRows": 0}})

    def test_range_error_names_category(self) -> None:
        with pytest.raises(
            LayoutConfigError, match=r"^customBundleRanges\.vfd: Ranges overlap"
        ):
            normalize_cable_layout(
                {
                    "customBundleRanges": {
                        "vfd": [{"min": 0, "max": 10}, {"min": 5, "max": 20}]
                    }
                }
            )

    def test_unknown_basis(self) -> None:
        with pytest.raises(LayoutConfigError, match="freeSpaceBasis"):
            normalize_cable_layout({"freeSpaceBasis": "volume"})
