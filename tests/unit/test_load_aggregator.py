"""Unit tests for tray load aggregation."""

import pytest

from cabletray.domain.entities import Cable, Tray
from cabletray.domain.services.loads import (
    KN_PER_KG,
    LoadAggregator,
    compute_tray_loads,
    resolve_tray_weight_per_meter,
)
from cabletray.domain.services.supports import SupportPlan, compute_support_plan
from cabletray.domain.value_objects import MaterialTray


@pytest.fixture
def support_plan() -> SupportPlan:
    """5 supports of 1.5 kg along 6 m: 1.25 kg/m."""
    return compute_support_plan(6000, 1.5, 1.5)


class TestTrayWeight:
    """Tests for tray self weight resolution."""

    def test_catalogue_weight(
        self, ladder_tray: Tray, material_trays: list[MaterialTray]
    ) -> None:
        assert resolve_tray_weight_per_meter(ladder_tray, material_trays) == 4.2

    def test_tray_override_wins(self, material_trays: list[MaterialTray]) -> None:
        tray = Tray(id="t", name="T", type="KL 300", weight_kg_per_m=3.0)
        assert resolve_tray_weight_per_meter(tray, material_trays) == 3.0

    def test_unknown_type(self, material_trays: list[MaterialTray]) -> None:
        tray = Tray(id="t", name="T", type="KL 999")
        assert resolve_tray_weight_per_meter(tray, material_trays) is None


class TestLoadAggregator:
    """Tests for LoadAggregator."""

    def test_full_figures(
        self,
        ladder_tray: Tray,
        power_cables: list[Cable],
        material_trays: list[MaterialTray],
        support_plan: SupportPlan,
    ) -> None:
        loads = LoadAggregator(material_trays).compute(
            ladder_tray, power_cables, support_plan
        )

        assert loads.tray_weight_per_meter_kg == 4.2
        assert loads.tray_weight_load_per_meter_kg == pytest.approx(5.45)
        assert loads.tray_total_own_weight_kg == pytest.approx(32.7)
        assert loads.cables_weight_load_per_meter_kg == pytest.approx(4.5)
        assert loads.cables_total_weight_kg == pytest.approx(27.0)
        assert loads.total_weight_load_per_meter_kg == pytest.approx(9.95)
        assert loads.total_weight_kg == pytest.approx(59.7)
        assert loads.total_weight_load_per_meter_kn == pytest.approx(9.95 * KN_PER_KG)
        assert loads.cables_counted == 3
        assert not loads.grounding_included

    def test_grounding_cable_added(
        self,
        ladder_tray: Tray,
        power_cables: list[Cable],
        material_trays: list[MaterialTray],
        support_plan: SupportPlan,
    ) -> None:
        loads = compute_tray_loads(
            ladder_tray,
            power_cables,
            support_plan,
            material_trays=material_trays,
            grounding_weight_kg_per_m=0.95,
        )

        assert loads.cables_weight_load_per_meter_kg == pytest.approx(5.45)
        assert loads.grounding_included
        assert loads.cables_counted == 4

    def test_routed_grounding_cables_not_counted(
        self, ladder_tray: Tray, support_plan: SupportPlan
    ) -> None:
        cables = [
            Cable(id="g", purpose="grounding", weight_kg_per_m=0.95, routing="Tray-1")
        ]
        loads = compute_tray_loads(ladder_tray, cables, support_plan)

        assert loads.cables_weight_load_per_meter_kg is None
        assert loads.cables_counted == 0

    def test_cables_without_weight_skipped(
        self, ladder_tray: Tray, support_plan: SupportPlan
    ) -> None:
        cables = [
            Cable(id="a", purpose="power", weight_kg_per_m=2.0, routing="Tray-1"),
            Cable(id="b", purpose="power", routing="Tray-1"),
        ]
        loads = compute_tray_loads(ladder_tray, cables, support_plan)

        assert loads.cables_weight_load_per_meter_kg == 2.0
        assert loads.cables_without_weight == 1

    def test_missing_tray_weight_voids_tray_load(
        self, ladder_tray: Tray, power_cables: list[Cable], support_plan: SupportPlan
    ) -> None:
        loads = compute_tray_loads(ladder_tray, power_cables, support_plan)

        assert loads.tray_weight_load_per_meter_kg is None
        assert loads.total_weight_load_per_meter_kg is None
        assert loads.total_weight_load_per_meter_kn is None
        # Cable figures survive on their own
        assert loads.cables_weight_load_per_meter_kg == pytest.approx(4.5)

    def test_missing_support_weight_voids_tray_load(
        self,
        ladder_tray: Tray,
        power_cables: list[Cable],
        material_trays: list[MaterialTray],
    ) -> None:
        plan = compute_support_plan(6000, 1.5)
        loads = compute_tray_loads(
            ladder_tray, power_cables, plan, material_trays=material_trays
        )

        assert loads.tray_weight_per_meter_kg == 4.2
        assert loads.tray_weight_load_per_meter_kg is None
        assert loads.total_weight_kg is None

    def test_missing_length_voids_totals(
        self, power_cables: list[Cable], material_trays: list[MaterialTray]
    ) -> None:
        tray = Tray(id="t1", name="Tray-1", type="KL 300")
        plan = compute_support_plan(None, 1.5, 1.5)
        loads = compute_tray_loads(
            tray, power_cables, plan, material_trays=material_trays
        )

        assert loads.tray_total_own_weight_kg is None
        assert loads.cables_total_weight_kg is None
        assert loads.cables_weight_load_per_meter_kg == pytest.approx(4.5)


class TestRepeatability:
    """Tests for repeatable load figures."""

    def test_repeated_calls_are_identical(
        self,
        ladder_tray: Tray,
        power_cables: list[Cable],
        material_trays: list[MaterialTray],
        support_plan: SupportPlan,
    ) -> None:
        aggregator = LoadAggregator(material_trays)

        first = aggregator.compute(ladder_tray, power_cables, support_plan, 0.95)
        second = aggregator.compute(ladder_tray, power_cables, support_plan, 0.95)

        assert first == second

    def test_cable_order_does_not_change_totals(
        self,
        ladder_tray: Tray,
        material_trays: list[MaterialTray],
        support_plan: SupportPlan,
    ) -> None:
        cables = [
            Cable(id=f"c{weight}", weight_kg_per_m=weight, routing="Tray-1")
            for weight in (0.4, 1.7, 2.25, 0.8)
        ]
        aggregator = LoadAggregator(material_trays)

        forward = aggregator.compute(ladder_tray, cables, support_plan)
        backward = aggregator.compute(ladder_tray, cables[::-1], support_plan)

        assert backward.cables_weight_load_per_meter_kg == pytest.approx(
            forward.cables_weight_load_per_meter_kg
        )
        assert backward.total_weight_kg == pytest.approx(forward.total_weight_kg)
