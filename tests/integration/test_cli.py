"""Integration tests for the cabinet-designer CLI.

These tests verify the commands work end-to-end, including:
- validate accepts good scripts and rejects bad ones
- build replays scripts in every output format
- build signals rejected steps through its exit code
- parts lists the panels of an empty carcass
"""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cabinet_designer.cli.main import app

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures" / "configs"


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_script(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "valid_layout.json")])

        assert result.exit_code == 0
        assert "Steps: 4" in result.output
        assert "Validation passed" in result.output

    def test_minimal_script(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "valid_minimal.json")])
        assert result.exit_code == 0

    def test_file_not_found(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "nonexistent.json")])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_invalid_json_syntax(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "invalid_json.json")])

        assert result.exit_code == 1
        assert "Invalid JSON syntax" in result.output
        assert "Validation failed" in result.output

    def test_unknown_field_rejected(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "unknown_field.json")])

        assert result.exit_code == 1
        assert "cabinet.colour" in result.output

    def test_invalid_step_rejected(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "invalid_step.json")])

        assert result.exit_code == 1
        assert "steps[0]" in result.output


class TestBuildCommand:
    """Tests for the build command."""

    def test_text_report(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["build", str(FIXTURES_PATH / "valid_layout.json")])

        assert result.exit_code == 0
        assert "STEPS" in result.output
        assert "4 applied, 0 rejected" in result.output
        assert "CABINET LAYOUT DIAGRAM" in result.output
        assert "SECTIONS" in result.output
        assert "PARTS LIST" in result.output

    def test_json_report(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["build", str(FIXTURES_PATH / "valid_layout.json"), "--format", "json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data["dividers"]) == 4
        assert len(data["rods"]) == 1
        assert data["rods"][0]["section_id"] == 4
        assert all(step["success"] for step in data["steps"])

    @pytest.mark.parametrize(
        "output_format, marker",
        [
            ("diagram", "CABINET LAYOUT DIAGRAM"),
            ("sections", "SECTIONS"),
            ("parts", "PARTS LIST"),
        ],
    )
    def test_single_reports(self, runner: CliRunner, output_format: str, marker: str) -> None:
        result = runner.invoke(
            app, ["build", str(FIXTURES_PATH / "valid_layout.json"), "-f", output_format]
        )

        assert result.exit_code == 0
        assert result.output.startswith(marker)

    def test_rejected_step_exit_code(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["build", str(FIXTURES_PATH / "failing_step.json")])

        assert result.exit_code == 2
        assert "Step 2 (add_divider) rejected" in result.output

    def test_output_file(self, runner: CliRunner, tmp_path: Path) -> None:
        output_path = tmp_path / "report.json"
        result = runner.invoke(
            app,
            [
                "build",
                str(FIXTURES_PATH / "valid_layout.json"),
                "--format",
                "json",
                "--output",
                str(output_path),
            ],
        )

        assert result.exit_code == 0
        assert "Report written to" in result.output
        data = json.loads(output_path.read_text(encoding="utf-8"))
        assert data["cabinet"]["width"] == 800

    def test_unknown_format(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["build", str(FIXTURES_PATH / "valid_layout.json"), "--format", "stl"]
        )

        assert result.exit_code == 1
        assert "Unknown format" in result.output

    def test_invalid_script(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["build", str(FIXTURES_PATH / "unknown_field.json")])
        assert result.exit_code == 1

    def test_verbose_flag(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["build", str(FIXTURES_PATH / "valid_layout.json"), "--verbose"]
        )
        assert result.exit_code == 0


class TestPartsCommand:
    """Tests for the parts command."""

    def test_default_carcass(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["parts"])

        assert result.exit_code == 0
        assert "PARTS LIST" in result.output
        assert "Left side" in result.output
        assert "5 parts" in result.output

    def test_custom_dimensions(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["parts", "--width", "1200", "--height", "2400", "--depth", "600", "--base", "80"]
        )

        assert result.exit_code == 0
        assert "1168.0" in result.output

    def test_invalid_dimensions(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["parts", "--width", "50"])

        assert result.exit_code == 1
        assert "Width must be between" in result.output
