"""Pytest configuration and shared fixtures for cable tray tests."""

from __future__ import annotations

import logging
from typing import Any, Iterator

import pytest

from cabletray.domain.entities import Cable, CableType, Project, Tray
from cabletray.domain.value_objects import (
    LoadCurve,
    LoadCurvePoint,
    MaterialSupport,
    MaterialTray,
    SupportOverride,
)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Undo setup_logging() calls made by CLI tests.

    CliRunner swaps sys.stderr per invocation; a handler left bound to a
    closed stream would break later tests.
    """
    logger = logging.getLogger("cabletray")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def ladder_tray() -> Tray:
    """A 300 mm wide, 6 m long ladder tray."""
    return Tray(
        id="t1",
        name="Tray-1",
        type="KL 300",
        width_mm=300.0,
        height_mm=60.0,
        length_mm=6000.0,
    )


@pytest.fixture
def power_cables() -> list[Cable]:
    """Three power cables routed through Tray-1."""
    return [
        Cable(
            id=f"c{index}",
            tag=f"P-{index}",
            purpose="power",
            diameter_mm=20.0,
            weight_kg_per_m=1.5,
            routing="A/Tray-1/B",
        )
        for index in range(1, 4)
    ]


@pytest.fixture
def grounding_type() -> CableType:
    return CableType(
        id="ct-ground",
        name="H07V-K 1x95",
        purpose="grounding",
        diameter_mm=16.0,
        weight_kg_per_m=0.95,
    )


@pytest.fixture
def material_trays() -> list[MaterialTray]:
    return [
        MaterialTray(
            id="mt1",
            type="KL 300",
            width_mm=300.0,
            height_mm=60.0,
            weight_kg_per_m=4.2,
            load_curve_id="lc1",
        )
    ]


@pytest.fixture
def material_supports() -> list[MaterialSupport]:
    return [MaterialSupport(id="s1", type="Bracket 300", weight_kg=1.5)]


@pytest.fixture
def load_curve() -> LoadCurve:
    """Allowable load falling from 3.0 kN/m at 1 m to 1.0 kN/m at 3 m."""
    return LoadCurve(
        id="lc1",
        name="KL 300",
        points=(
            LoadCurvePoint(span_m=3.0, load_kn_per_m=1.0),
            LoadCurvePoint(span_m=1.0, load_kn_per_m=3.0),
            LoadCurvePoint(span_m=2.0, load_kn_per_m=2.0),
        ),
    )


@pytest.fixture
def project() -> Project:
    return Project(
        id="p1",
        name="Plant",
        support_distance_m=2.0,
        support_weight_kg=1.0,
        tray_load_safety_factor_percent=20.0,
        support_overrides={"KL 300": SupportOverride(distance=1.5, support_id="s1")},
    )


# =============================================================================
# Snapshot data
# =============================================================================


@pytest.fixture
def snapshot_data() -> dict[str, Any]:
    """A small but complete snapshot in camelCase, as the REST layer sends it."""
    return {
        "schemaVersion": "1.0",
        "project": {
            "id": "p1",
            "name": "Plant",
            "cableLayout": {
                "cableSpacing": 1,
                "power": {"maxRows": 2, "maxColumns": 10, "trefoil": False},
            },
            "supportDistance": 2.0,
            "supportWeight": 1.0,
            "trayLoadSafetyFactor": 20,
            "supportDistanceOverrides": {
                "KL 300": {"distance": 1.5, "supportId": "s1"}
            },
        },
        "trays": [
            {
                "id": "t1",
                "name": "Tray-1",
                "type": "KL 300",
                "widthMm": 300,
                "heightMm": 60,
                "lengthMm": 6000,
                "includeGroundingCable": True,
                "groundingCableTypeId": "ct-ground",
            },
            {"id": "t2", "name": "Tray-2", "type": "KL 200", "lengthMm": 4000},
        ],
        "cables": [
            {
                "id": "c1",
                "tag": "P-1",
                "purpose": "power",
                "diameterMm": 20,
                "weightKgPerM": 1.5,
                "routing": "A/Tray-1/B",
            },
            {
                "id": "c2",
                "tag": "P-2",
                "purpose": "power",
                "diameterMm": 20,
                "weightKgPerM": 1.5,
                "routing": "Tray-1",
            },
            {
                "id": "c3",
                "tag": "G-1",
                "purpose": "grounding",
                "diameterMm": 16,
                "weightKgPerM": 0.95,
                "routing": "Tray-1/Tray-2",
            },
        ],
        "cableTypes": [
            {
                "id": "ct-ground",
                "name": "H07V-K 1x95",
                "purpose": "grounding",
                "weightKgPerM": 0.95,
            }
        ],
        "materialTrays": [
            {"id": "mt1", "type": "KL 300", "weightKgPerM": 4.2, "loadCurveId": "lc1"}
        ],
        "materialSupports": [{"id": "s1", "type": "Bracket 300", "weightKg": 1.5}],
        "loadCurves": [
            {
                "id": "lc1",
                "name": "KL 300",
                "points": [
                    {"spanM": 1.0, "loadKnPerM": 3.0},
                    {"spanM": 2.0, "loadKnPerM": 2.0},
                    {"spanM": 3.0, "loadKnPerM": 1.0},
                ],
            }
        ],
    }
