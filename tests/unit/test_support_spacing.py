"""Unit tests for support spacing calculation and input resolution."""

import pytest

from cabletray.domain.entities import Project, Tray
from cabletray.domain.services.supports import (
    DistanceSource,
    SupportSpacingCalculator,
    WeightSource,
    compute_support_plan,
    resolve_support_distance,
    resolve_support_weight,
)
from cabletray.domain.value_objects import MaterialSupport, SupportOverride


class TestComputeSupportPlan:
    """Tests for compute_support_plan."""

    @pytest.mark.parametrize(
        ("length_mm", "distance_m", "expected"),
        [
            (10000, 2.0, 6),  # exact multiple
            (10500, 2.0, 7),  # remainder 0.5 m > 20% of 2 m
            (10300, 2.0, 6),  # remainder 0.3 m <= 20% of 2 m
            (1000, 2.0, 2),  # shorter than one distance
            (2000, 2.0, 2),
            (2500, 2.0, 3),
        ],
    )
    def test_supports_count(
        self, length_mm: float, distance_m: float, expected: int
    ) -> None:
        assert compute_support_plan(length_mm, distance_m).supports_count == expected

    def test_weights(self) -> None:
        plan = compute_support_plan(10000, 2.0, 1.5)

        assert plan.length_m == 10.0
        assert plan.total_weight_kg == 9.0
        assert plan.weight_per_meter_kg == pytest.approx(0.9)

    def test_weights_unknown_without_piece_weight(self) -> None:
        plan = compute_support_plan(10000, 2.0)

        assert plan.supports_count == 6
        assert plan.total_weight_kg is None
        assert plan.weight_per_meter_kg is None

    @pytest.mark.parametrize(
        ("length_mm", "distance_m"),
        [
            (None, 2.0),
            (0, 2.0),
            (-100, 2.0),
            (10000, None),
            (10000, 0.0),
            (10000, -2.0),
            (float("nan"), 2.0),
            (10000, float("inf")),
        ],
    )
    def test_insufficient_inputs(
        self, length_mm: float | None, distance_m: float | None
    ) -> None:
        plan = compute_support_plan(length_mm, distance_m, 1.0)

        assert not plan.is_complete
        assert plan.supports_count is None
        assert plan.total_weight_kg is None


class TestResolveDistance:
    """Tests for support distance precedence."""

    def test_override_wins(self) -> None:
        project = Project(
            id="p",
            support_distance_m=2.0,
            support_overrides={"KL 300": SupportOverride(distance=1.5)},
        )
        tray = Tray(id="t", name="T", type="KL 300")

        assert resolve_support_distance(tray, project) == (1.5, DistanceSource.OVERRIDE)

    def test_project_default(self) -> None:
        project = Project(id="p", support_distance_m=2.0)
        tray = Tray(id="t", name="T", type="KL 300")

        assert resolve_support_distance(tray, project) == (2.0, DistanceSource.PROJECT)

    def test_override_without_distance_falls_through(self) -> None:
        project = Project(
            id="p",
            support_distance_m=2.5,
            support_overrides={"KL 300": SupportOverride(support_id="s1")},
        )
        tray = Tray(id="t", name="T", type="KL 300")

        assert resolve_support_distance(tray, project) == (2.5, DistanceSource.PROJECT)

    def test_non_positive_override_is_unusable(self) -> None:
        project = Project(
            id="p",
            support_distance_m=2.0,
            support_overrides={"KL 300": SupportOverride(distance=0.0)},
        )
        tray = Tray(id="t", name="T", type="KL 300")

        assert resolve_support_distance(tray, project) == (None, DistanceSource.NONE)

    def test_legacy_tray_type(self) -> None:
        project = Project(id="p")
        tray = Tray(id="t", name="T", type="KL 100.603 F")

        assert resolve_support_distance(tray, project) == (2.0, DistanceSource.LEGACY)

    def test_nothing_configured(self) -> None:
        project = Project(id="p")
        tray = Tray(id="t", name="T", type="KL 300")

        assert resolve_support_distance(tray, project) == (None, DistanceSource.NONE)


class TestResolveWeight:
    """Tests for support piece weight precedence."""

    def test_catalogue_support_wins(self) -> None:
        project = Project(
            id="p",
            support_weight_kg=1.0,
            support_overrides={"KL 300": SupportOverride(support_id="s1")},
        )
        supports = {"s1": MaterialSupport(id="s1", type="Bracket", weight_kg=2.5)}
        tray = Tray(id="t", name="T", type="KL 300")

        assert resolve_support_weight(tray, project, supports) == (
            2.5,
            WeightSource.OVERRIDE_SUPPORT,
            "s1",
        )

    def test_unknown_support_uses_project_weight(self) -> None:
        project = Project(
            id="p",
            support_weight_kg=1.0,
            support_overrides={"KL 300": SupportOverride(support_id="missing")},
        )
        tray = Tray(id="t", name="T", type="KL 300")

        weight, source, support_id = resolve_support_weight(tray, project, {})

        assert (weight, source) == (1.0, WeightSource.PROJECT)
        assert support_id == "missing"

    def test_no_weight(self) -> None:
        tray = Tray(id="t", name="T")
        assert resolve_support_weight(tray, Project(id="p")) == (
            None,
            WeightSource.NONE,
            None,
        )


class TestSupportSpacingCalculator:
    """Tests for SupportSpacingCalculator."""

    def test_plan_uses_resolved_inputs(
        self,
        ladder_tray: Tray,
        project: Project,
        material_supports: list[MaterialSupport],
    ) -> None:
        calculator = SupportSpacingCalculator(project, material_supports)

        inputs = calculator.resolve(ladder_tray)
        plan = calculator.plan(ladder_tray)

        assert inputs.distance_m == 1.5
        assert inputs.weight_per_piece_kg == 1.5
        assert inputs.support_id == "s1"
        # 6 m at 1.5 m: 4 segments, 5 supports
        assert plan.supports_count == 5
        assert plan.total_weight_kg == 7.5
        assert plan.weight_per_meter_kg == pytest.approx(1.25)

    def test_plan_without_length(self, project: Project) -> None:
        tray = Tray(id="t", name="T", type="KL 300")
        plan = SupportSpacingCalculator(project).plan(tray)

        assert plan.distance_m == 1.5
        assert plan.supports_count is None

    def test_plan_with_given_inputs(
        self,
        ladder_tray: Tray,
        project: Project,
        material_supports: list[MaterialSupport],
    ) -> None:
        calculator = SupportSpacingCalculator(project, material_supports)
        inputs = calculator.resolve(ladder_tray)

        assert calculator.plan(ladder_tray, inputs) == calculator.plan(ladder_tray)

    def test_repeated_calls_are_identical(
        self,
        ladder_tray: Tray,
        project: Project,
        material_supports: list[MaterialSupport],
    ) -> None:
        calculator = SupportSpacingCalculator(project, material_supports)

        assert calculator.resolve(ladder_tray) == calculator.resolve(ladder_tray)
        assert compute_support_plan(10500, 2.0, 1.2) == compute_support_plan(
            10500, 2.0, 1.2
        )
