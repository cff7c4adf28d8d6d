"""Normalization of raw cable layout settings.

These functions sit at the settings-write boundary. They take untrusted,
JSON-shaped input (camelCase or snake_case keys), coerce and validate it,
and return a canonical camelCase dict, or None when nothing recognizable
was supplied. Hard violations raise LayoutConfigError with a message
naming the offending field or range.

Normalization is idempotent: feeding the output back in returns an
equal dict.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Sequence

from cabletray.domain.value_objects import (
    CATEGORY_CAPABILITIES,
    CATEGORY_ORDER,
    MAX_GRID_DIMENSION,
    BundleSpacing,
    CableCategory,
    FreeSpaceBasis,
)

CABLE_SPACING_DECIMALS = 3
MIN_PERCENT = 1
MAX_PERCENT = 100


class LayoutConfigError(ValueError):
    """Raised when cable layout settings cannot be accepted."""


def _pick(raw: Mapping[str, Any], camel: str, snake: str) -> Any:
    if camel in raw:
        return raw[camel]
    return raw.get(snake)


def _format_number(value: float) -> str:
    """Format a number the way it was typed: 8 not 8.0, 8.1 not 8.1000001."""
    if float(value).is_integer():
        return str(int(value))
    return repr(round(float(value), 10))


def _to_number(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise LayoutConfigError(f"{field} must be a number")
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise LayoutConfigError(f"{field} must be a number") from None
    else:
        raise LayoutConfigError(f"{field} must be a number")
    if not math.isfinite(number):
        raise LayoutConfigError(f"{field} must be a finite number")
    return number


def _to_bool(value: Any, field: str) -> bool:
    if not isinstance(value, bool):
        raise LayoutConfigError(f"{field} must be true or false")
    return value


def coerce_grid_dimension(value: Any, field: str) -> int:
    """Coerce a maxRows/maxColumns value to an int in [1, 1000]."""
    number = _to_number(value, field)
    if not number.is_integer():
        raise LayoutConfigError(f"{field} must be a whole number")
    if not 1 <= number <= MAX_GRID_DIMENSION:
        raise LayoutConfigError(
            f"{field} must be between 1 and {MAX_GRID_DIMENSION}"
        )
    return int(number)


def coerce_bundle_spacing(value: Any) -> BundleSpacing:
    """Coerce 0, "0", "1d", "1D", "2D" and friends to a BundleSpacing."""
    if isinstance(value, BundleSpacing):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0:
        return BundleSpacing.NONE
    if isinstance(value, str):
        text = value.strip().upper()
        for option in BundleSpacing:
            if option.value == text:
                return option
    raise LayoutConfigError("bundleSpacing must be one of 0, 1D, 2D")


def normalize_percent(value: Any, field: str) -> int:
    """Round a percentage to an integer and clamp it into [1, 100]."""
    number = _to_number(value, field)
    return min(max(int(round(number)), MIN_PERCENT), MAX_PERCENT)


def normalize_cable_spacing(value: Any) -> float:
    number = _to_number(value, "cableSpacing")
    if number < 0:
        raise LayoutConfigError("cableSpacing must be zero or greater")
    return round(number, CABLE_SPACING_DECIMALS)


def _read_range(item: Any) -> tuple[float, float, float | None] | str:
    """Read one raw range as numbers, or return why it cannot be read."""
    if not isinstance(item, Mapping):
        return "Each bundle range must be an object with min and max."
    low, high = item.get("min"), item.get("max")
    if low is None or high is None:
        return "Each bundle range needs both a min and a max value."
    try:
        low = _to_number(low, "min")
        high = _to_number(high, "max")
    except LayoutConfigError:
        return "Bundle range values must be positive numbers."
    max_rows = _pick(item, "maxRows", "max_rows")
    if max_rows is None:
        return low, high, None
    label = f"{_format_number(low)}-{_format_number(high)}"
    try:
        rows = _to_number(max_rows, "maxRows")
    except LayoutConfigError:
        return f"Invalid max rows for range {label}: enter a whole number."
    return low, high, rows


def validate_bundle_ranges(ranges: Sequence[Mapping[str, Any]]) -> str | None:
    """Check custom bundle ranges for one category.

    Each range needs non-negative bounds with min < max and an optional
    whole-number maxRows in [1, 1000]. Sorted by min, consecutive ranges
    must leave a gap: current max must be below next min. Numeric strings
    are accepted; anything unreadable is reported, never raised.

    Args:
        ranges: Ranges with "min", "max" and optional "maxRows" keys.

    Returns:
        The first violation message, or None when all ranges are valid.
    """
    if not ranges:
        return None

    bounds: list[tuple[float, float]] = []
    for item in ranges:
        parsed = _read_range(item)
        if isinstance(parsed, str):
            return parsed
        low, high, max_rows = parsed
        if low < 0 or high < 0:
            return "Bundle range values must be positive numbers."
        if low >= high:
            return (
                f"Invalid range: min ({_format_number(low)}) must be less than "
                f"max ({_format_number(high)}). Use {_format_number(low + 0.1)} "
                "as minimum for the next range."
            )
        if max_rows is not None:
            label = f"{_format_number(low)}-{_format_number(high)}"
            if not max_rows.is_integer():
                return f"Invalid max rows for range {label}: enter a whole number."
            if not 1 <= max_rows <= MAX_GRID_DIMENSION:
                return (
                    f"Invalid max rows for range {label}: value must be between "
                    f"1 and {MAX_GRID_DIMENSION}."
                )
        bounds.append((low, high))

    bounds.sort()
    for (low, high), (next_low, next_high) in zip(bounds, bounds[1:]):
        if high >= next_low:
            return (
                "Ranges overlap or touch: "
                f"[{_format_number(low)}-{_format_number(high)}] "
                f"and [{_format_number(next_low)}-{_format_number(next_high)}]. "
                f"Next range should start at {_format_number(high + 0.1)} or higher."
            )
    return None


def normalize_category_settings(
    raw: Any, category: CableCategory | None = None
) -> dict[str, Any] | None:
    """Normalize per-category settings.

    Args:
        raw: Untrusted settings mapping.
        category: Category the settings belong to. When given, flags for
            features the category does not support are dropped.

    Returns:
        Canonical settings dict, or None when every field is absent, which
        means "use the defaults".

    Raises:
        LayoutConfigError: If a field has an unusable value.
    """
    if not isinstance(raw, Mapping):
        return None

    result: dict[str, Any] = {}
    for camel, snake in (("maxRows", "max_rows"), ("maxColumns", "max_columns")):
        value = _pick(raw, camel, snake)
        if value is not None:
            result[camel] = coerce_grid_dimension(value, camel)

    spacing = _pick(raw, "bundleSpacing", "bundle_spacing")
    if spacing is not None:
        result["bundleSpacing"] = coerce_bundle_spacing(spacing).value

    trefoil = raw.get("trefoil")
    if trefoil is not None:
        result["trefoil"] = _to_bool(trefoil, "trefoil")

    capabilities = CATEGORY_CAPABILITIES[category] if category is not None else None

    trefoil_spacing = _pick(
        raw, "trefoilSpacingBetweenBundles", "trefoil_spacing_between_bundles"
    )
    if trefoil_spacing is not None and result.get("trefoil") is not False:
        if capabilities is None or capabilities.trefoil_spacing:
            result["trefoilSpacingBetweenBundles"] = _to_bool(
                trefoil_spacing, "trefoilSpacingBetweenBundles"
            )

    phase_rotation = _pick(raw, "applyPhaseRotation", "apply_phase_rotation")
    if phase_rotation is not None and (
        capabilities is None or capabilities.phase_rotation
    ):
        result["applyPhaseRotation"] = _to_bool(phase_rotation, "applyPhaseRotation")

    return result or None


def _normalize_ranges(category: CableCategory, raw: Any) -> list[dict[str, Any]]:
    if not isinstance(raw, Sequence) or isinstance(raw, (str, bytes)):
        raise LayoutConfigError(f"customBundleRanges.{category.value} must be a list")

    ranges: list[dict[str, Any]] = []
    for index, item in enumerate(raw):
        if not isinstance(item, Mapping):
            raise LayoutConfigError(
                f"customBundleRanges.{category.value}[{index}] must be an object"
            )
        entry: dict[str, Any] = {
            "id": str(item.get("id") or f"{category.value}-{index + 1}"),
            "min": _to_number(item.get("min"), "min"),
            "max": _to_number(item.get("max"), "max"),
        }
        max_rows = _pick(item, "maxRows", "max_rows")
        if isinstance(max_rows, bool):
            entry["maxRows"] = max_rows
        elif max_rows is not None:
            entry["maxRows"] = _to_number(max_rows, "maxRows")
        ranges.append(entry)

    message = validate_bundle_ranges(ranges)
    if message is not None:
        raise LayoutConfigError(f"customBundleRanges.{category.value}: {message}")

    for entry in ranges:
        if "maxRows" in entry:
            entry["maxRows"] = int(entry["maxRows"])
    return sorted(ranges, key=lambda entry: entry["min"])


def normalize_cable_layout(raw: Any) -> dict[str, Any] | None:
    """Normalize project-wide cable layout settings.

    cableSpacing is rounded to 3 decimals, free space percentages are
    rounded to integers and clamped to [1, 100], per-category settings go
    through normalize_category_settings and custom ranges through
    validate_bundle_ranges (emitted sorted by min).

    Args:
        raw: Untrusted layout mapping.

    Returns:
        Canonical layout dict, or None when nothing recognized was present.

    Raises:
        LayoutConfigError: If a field has an unusable value, ranges are
            invalid, or the minimum free space exceeds the maximum.
    """
    if not isinstance(raw, Mapping):
        return None

    result: dict[str, Any] = {}

    spacing = _pick(raw, "cableSpacing", "cable_spacing")
    if spacing is not None:
        result["cableSpacing"] = normalize_cable_spacing(spacing)

    as_free = _pick(raw, "considerBundleSpacingAsFree", "consider_bundle_spacing_as_free")
    if as_free is not None:
        result["considerBundleSpacingAsFree"] = _to_bool(
            as_free, "considerBundleSpacingAsFree"
        )

    for camel, snake in (
        ("minFreeSpacePercent", "min_free_space_percent"),
        ("maxFreeSpacePercent", "max_free_space_percent"),
    ):
        value = _pick(raw, camel, snake)
        if value is not None:
            result[camel] = normalize_percent(value, camel)

    low = result.get("minFreeSpacePercent")
    high = result.get("maxFreeSpacePercent")
    if low is not None and high is not None and low > high:
        raise LayoutConfigError(
            "minFreeSpacePercent cannot be greater than maxFreeSpacePercent"
        )

    basis = _pick(raw, "freeSpaceBasis", "free_space_basis")
    if basis is not None:
        try:
            result["freeSpaceBasis"] = FreeSpaceBasis(str(basis).strip().lower()).value
        except ValueError:
            raise LayoutConfigError("freeSpaceBasis must be 'width' or 'area'") from None

    default_bands = _pick(raw, "useDefaultBands", "use_default_bands")
    if default_bands is not None:
        result["useDefaultBands"] = _to_bool(default_bands, "useDefaultBands")

    for category in CATEGORY_ORDER:
        try:
            settings = normalize_category_settings(raw.get(category.value), category)
        except LayoutConfigError as error:
            raise LayoutConfigError(f"{category.value}.{error}") from error
        if settings is not None:
            result[category.value] = settings

    raw_ranges = _pick(raw, "customBundleRanges", "custom_bundle_ranges")
    if isinstance(raw_ranges, Mapping):
        normalized_ranges: dict[str, list[dict[str, Any]]] = {}
        for category in CATEGORY_ORDER:
            category_ranges = raw_ranges.get(category.value)
            if category_ranges is None:
                continue
            ranges = _normalize_ranges(category, category_ranges)
            if ranges:
                normalized_ranges[category.value] = ranges
        if normalized_ranges:
            result["customBundleRanges"] = normalized_ranges

    return result or None
