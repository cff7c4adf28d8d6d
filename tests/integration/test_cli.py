"""Integration tests for the cabletray CLI.

These tests run the Typer app end-to-end against snapshot files written
to a temporary directory, including:
- validate exit codes for clean, warning and broken snapshots
- free-space tables, JSON output and operator overrides
- report output for all trays or one tray
- the standalone supports calculation
"""

import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from cabletray.cli.main import app


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def snapshot_file(tmp_path: Path, snapshot_data: dict[str, Any]) -> Path:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot_data))
    return path


def write_json(tmp_path: Path, name: str, data: Any) -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(data))
    return path


class TestValidateCommand:
    """Tests for the validate command."""

    def test_clean_snapshot(self, runner: CliRunner, tmp_path: Path) -> None:
        path = write_json(
            tmp_path,
            "clean.json",
            {
                "schemaVersion": "1.0",
                "project": {"id": "p1"},
                "trays": [{"id": "t1", "name": "Tray-1", "widthMm": 300}],
            },
        )

        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 0
        assert "Validating" in result.output
        assert "Validation passed. Snapshot is valid." in result.output

    def test_snapshot_with_warnings(self, runner: CliRunner, snapshot_file: Path) -> None:
        """Unknown routing segments and a tray without width are warnings."""
        result = runner.invoke(app, ["validate", str(snapshot_file)])

        assert result.exit_code == 2
        assert "Warnings:" in result.output
        assert "cables[0].routing" in result.output
        assert "Suggestion:" in result.output
        assert "Validation passed with 2 warning(s)" in result.output

    def test_duplicate_tray_names(self, runner: CliRunner, tmp_path: Path) -> None:
        path = write_json(
            tmp_path,
            "duplicates.json",
            {
                "schemaVersion": "1.0",
                "project": {"id": "p1"},
                "trays": [
                    {"id": "t1", "name": "Tray-1", "widthMm": 300},
                    {"id": "t2", "name": "TRAY-1", "widthMm": 300},
                ],
            },
        )

        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "trays[1].name" in result.output
        assert "Validation failed" in result.output

    def test_file_not_found(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["validate", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_invalid_json(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Invalid JSON syntax" in result.output
        assert "Validation failed." in result.output

    def test_invalid_layout_settings(self, runner: CliRunner, tmp_path: Path) -> None:
        path = write_json(
            tmp_path,
            "layout.json",
            {
                "schemaVersion": "1.0",
                "project": {
                    "id": "p1",
                    "cableLayout": {
                        "customBundleRanges": {
                            "power": [{"min": 0, "max": 8}, {"min": 8, "max": 15}]
                        }
                    },
                },
            },
        )

        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "project.cableLayout" in result.output
        assert "Ranges overlap or touch" in result.output

    def test_unsupported_schema_version(self, runner: CliRunner, tmp_path: Path) -> None:
        path = write_json(
            tmp_path, "version.json", {"schemaVersion": "2.0", "project": {"id": "p1"}}
        )

        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Unsupported schema version" in result.output


class TestFreeSpaceCommand:
    """Tests for the free-space command."""

    def test_table(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["free-space", str(snapshot_file)])

        assert result.exit_code == 0
        assert "Tray-1" in result.output
        assert "86.33 %" in result.output
        assert "n/a" in result.output

    def test_json(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["free-space", str(snapshot_file), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [row["free_space_percent"] for row in data] == [86.33, None]

    def test_overrides(
        self, runner: CliRunner, snapshot_file: Path, tmp_path: Path
    ) -> None:
        overrides = write_json(tmp_path, "overrides.json", {"t1": None, "t2": "42.5"})

        result = runner.invoke(
            app,
            ["free-space", str(snapshot_file), "--overrides", str(overrides), "--json"],
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [row["free_space_percent"] for row in data] == [None, 42.5]

    def test_overrides_not_an_object(
        self, runner: CliRunner, snapshot_file: Path, tmp_path: Path
    ) -> None:
        overrides = write_json(tmp_path, "overrides.json", [1, 2])

        result = runner.invoke(
            app, ["free-space", str(snapshot_file), "--overrides", str(overrides)]
        )

        assert result.exit_code == 1
        assert "must contain a JSON object" in result.output

    def test_missing_snapshot(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["free-space", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "File not found" in result.output


class TestReportCommand:
    """Tests for the report command."""

    def test_text_report(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["report", str(snapshot_file)])

        assert result.exit_code == 0
        assert "TRAY Tray-1 (KL 300)" in result.output
        assert "TRAY Tray-2 (KL 200)" in result.output
        assert "Load curve" in result.output

    def test_single_tray_json(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(
            app, ["report", str(snapshot_file), "--tray", "tray-2", "--format", "json"]
        )

        assert result.exit_code == 0
        (tray,) = json.loads(result.stdout)
        assert tray["tray_id"] == "t2"
        assert tray["supports"]["supports_count"] == 3
        assert tray["supports"]["distance_source"] == "project"
        assert tray["load_curve"]["status"] == "no-curve"

    def test_unknown_tray(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["report", str(snapshot_file), "--tray", "Tray-9"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_verbose_logs_debug(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["--verbose", "report", str(snapshot_file)])

        assert result.exit_code == 0
        assert "DEBUG" in result.output


class TestSupportsCommand:
    """Tests for the supports command."""

    def test_text(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app,
            ["supports", "--length-mm", "10500", "--distance-m", "2", "--weight-kg", "1.2"],
        )

        assert result.exit_code == 0
        assert "Supports:          7" in result.output
        assert "8.40 kg" in result.output

    def test_json(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["supports", "--length-mm", "10000", "--distance-m", "2", "--json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["supports_count"] == 6
        assert data["weight_per_meter_kg"] is None

    def test_incomplete_inputs(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["supports", "--length-mm", "10000", "--distance-m", "0"]
        )

        assert result.exit_code == 1
        assert "Supports cannot be calculated" in result.output
