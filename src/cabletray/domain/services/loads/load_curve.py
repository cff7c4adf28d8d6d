"""Load curve evaluation.

Checks a tray's safety-adjusted load at its support span against the
manufacturer load curve linked to the tray type.
"""

from __future__ import annotations

from cabletray.domain.value_objects import LoadCurve, LoadCurvePoint

from .models import LoadCurveEvaluation, LoadCurveStatus, SpanLimit

FLOAT_TOLERANCE = 1e-6

MESSAGES: dict[LoadCurveStatus, str] = {
    LoadCurveStatus.NO_CURVE: "The selected tray type is not linked to a load curve.",
    LoadCurveStatus.NO_POINTS: "The assigned load curve has no data points.",
    LoadCurveStatus.OK: "Support spacing is within the load curve limits.",
    LoadCurveStatus.LOAD_TOO_HIGH: (
        "Calculated load exceeds the maximum load defined by the curve."
    ),
    LoadCurveStatus.TOO_SHORT: (
        "Support spacing is below the minimum span covered by the curve."
    ),
    LoadCurveStatus.TOO_LONG: (
        "Support spacing exceeds the allowable span for the calculated load."
    ),
}
MISSING_SAFETY_FACTOR_MESSAGE = (
    "Set a safety factor in Project details to evaluate the load curve."
)
NEGATIVE_SAFETY_FACTOR_MESSAGE = "The project safety factor cannot be negative."
MISSING_DATA_MESSAGE = "Provide tray weight and support spacing data to plot the point."


def safety_factor_multiplier(safety_factor_percent: float | None) -> float | None:
    """Return 1 + percent / 100, or None when the factor is unset or negative."""
    if safety_factor_percent is None or safety_factor_percent < 0:
        return None
    return 1 + safety_factor_percent / 100


def load_at_span(points: tuple[LoadCurvePoint, ...], span_m: float) -> float:
    """Allowable load at a span, interpolated linearly between points.

    Spans outside the curve take the load of the nearest end point.
    """
    first = points[0]
    if span_m <= first.span_m + FLOAT_TOLERANCE:
        return first.load_kn_per_m
    for previous, current in zip(points, points[1:]):
        if span_m <= current.span_m + FLOAT_TOLERANCE:
            span_delta = current.span_m - previous.span_m
            if abs(span_delta) <= FLOAT_TOLERANCE:
                return current.load_kn_per_m
            ratio = (span_m - previous.span_m) / span_delta
            return previous.load_kn_per_m + ratio * (
                current.load_kn_per_m - previous.load_kn_per_m
            )
    return points[-1].load_kn_per_m


def max_span_for_load(
    points: tuple[LoadCurvePoint, ...], load_kn_per_m: float
) -> SpanLimit:
    """Longest span at which the curve still allows a load.

    Walks the segments from the shortest span and returns the first
    crossing of the target load. A load above the curve maximum maps to
    the shortest span.
    """
    max_load = max(point.load_kn_per_m for point in points)
    if load_kn_per_m > max_load + FLOAT_TOLERANCE:
        return SpanLimit(points[0].span_m, points[0].load_kn_per_m)

    for previous, current in zip(points, points[1:]):
        low, high = sorted((previous.load_kn_per_m, current.load_kn_per_m))
        if not low <= load_kn_per_m <= high:
            continue
        load_delta = current.load_kn_per_m - previous.load_kn_per_m
        if abs(load_delta) <= FLOAT_TOLERANCE:
            return SpanLimit(current.span_m, current.load_kn_per_m)
        ratio = (load_kn_per_m - previous.load_kn_per_m) / load_delta
        span = previous.span_m + ratio * (current.span_m - previous.span_m)
        return SpanLimit(span, load_kn_per_m)

    return SpanLimit(points[-1].span_m, points[-1].load_kn_per_m)


def evaluate_load_curve(
    curve: LoadCurve | None,
    span_m: float | None,
    load_kn_per_m: float | None,
    safety_factor_percent: float | None,
) -> LoadCurveEvaluation:
    """Check a tray's load at its support span against a load curve.

    Args:
        curve: Load curve linked to the tray type, if any.
        span_m: Support distance in meters.
        load_kn_per_m: Total distributed load before the safety factor.
        safety_factor_percent: Project safety margin in percent.

    Returns:
        LoadCurveEvaluation. Checks run in order: load above the curve
        maximum, span below the curve minimum, span beyond the allowable
        span for the load.
    """
    if curve is None:
        return LoadCurveEvaluation(
            LoadCurveStatus.NO_CURVE, MESSAGES[LoadCurveStatus.NO_CURVE]
        )

    points = curve.sorted_points
    if not points:
        return LoadCurveEvaluation(
            LoadCurveStatus.NO_POINTS, MESSAGES[LoadCurveStatus.NO_POINTS]
        )

    min_span, max_span = points[0].span_m, points[-1].span_m

    multiplier = safety_factor_multiplier(safety_factor_percent)
    if multiplier is None:
        message = (
            NEGATIVE_SAFETY_FACTOR_MESSAGE
            if safety_factor_percent is not None
            else MISSING_SAFETY_FACTOR_MESSAGE
        )
        return LoadCurveEvaluation(
            LoadCurveStatus.AWAITING_DATA,
            message,
            min_span_m=min_span,
            max_span_m=max_span,
        )

    if span_m is None or load_kn_per_m is None:
        return LoadCurveEvaluation(
            LoadCurveStatus.AWAITING_DATA,
            MISSING_DATA_MESSAGE,
            span_m=span_m,
            min_span_m=min_span,
            max_span_m=max_span,
        )

    adjusted_load = load_kn_per_m * multiplier
    max_load = max(point.load_kn_per_m for point in points)
    limit = max_span_for_load(points, adjusted_load)

    status = LoadCurveStatus.OK
    if adjusted_load > max_load + FLOAT_TOLERANCE:
        status = LoadCurveStatus.LOAD_TOO_HIGH
        limit = SpanLimit(min_span, points[0].load_kn_per_m)
    elif span_m < min_span - FLOAT_TOLERANCE:
        status = LoadCurveStatus.TOO_SHORT
        limit = SpanLimit(min_span, points[0].load_kn_per_m, kind="min")
    elif span_m > limit.span_m + FLOAT_TOLERANCE:
        status = LoadCurveStatus.TOO_LONG

    return LoadCurveEvaluation(
        status=status,
        message=MESSAGES[status],
        span_m=span_m,
        safety_adjusted_load_kn_per_m=adjusted_load,
        min_span_m=min_span,
        max_span_m=max_span,
        allowable_load_at_span_kn_per_m=load_at_span(points, span_m),
        limit=limit,
    )
