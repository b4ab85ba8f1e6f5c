"""Integration tests for the waveplan command line."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from waveplan import __version__
from waveplan.cli.main import app

runner = CliRunner()

CYCLIC_PLAN = """
### TASK-001: A
**Dependencies**: TASK-002
### TASK-002: B
**Dependencies**: TASK-001
"""


@pytest.fixture
def cyclic_plan_file(tmp_path: Path) -> Path:
    """Write a plan containing a cycle."""
    path = tmp_path / "CYCLE.md"
    path.write_text(CYCLIC_PLAN)
    return path


@pytest.mark.integration
class TestCli:
    """Tests for CLI commands."""

    def test_version(self) -> None:
        """Test --version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_plan(self, plan_file: Path) -> None:
        """Test printing the execution plan."""
        result = runner.invoke(app, ["plan", str(plan_file)])

        assert result.exit_code == 0
        assert "Total Tasks: 4" in result.output
        assert "Wave 3 (1 task in parallel):" in result.output

    def test_plan_with_cycle_exits_nonzero(self, cyclic_plan_file: Path) -> None:
        """Test a cyclic plan prints the errors and fails."""
        result = runner.invoke(app, ["plan", str(cyclic_plan_file)])

        assert result.exit_code == 1
        assert "Cannot build execution plan:" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a plan path that does not exist."""
        result = runner.invoke(app, ["plan", str(tmp_path / "missing.md")])

        assert result.exit_code != 0

    @pytest.mark.parametrize("command", ["plan", "validate", "waves", "next"])
    def test_undecodable_file(self, tmp_path: Path, command: str) -> None:
        """Test a plan that is not valid UTF-8 fails with a readable error."""
        path = tmp_path / "BROKEN.md"
        path.write_bytes(b"\xff\xfe### TASK-001: A\n\x80\x81")

        result = runner.invoke(app, [command, str(path)])

        assert result.exit_code == 1
        assert "Cannot read" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_plan_without_tasks(self, tmp_path: Path) -> None:
        """Test a document with no task headings."""
        path = tmp_path / "NOTES.md"
        path.write_text("# Notes\n\nNothing scheduled yet.\n")

        result = runner.invoke(app, ["waves", str(path), "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["waves"] == []
        assert payload["parallelization_score"] == 0

    def test_validate_ok(self, plan_file: Path) -> None:
        """Test a valid plan."""
        result = runner.invoke(app, ["validate", str(plan_file)])

        assert result.exit_code == 0
        assert "Dependencies valid" in result.output

    def test_validate_json_invalid(self, cyclic_plan_file: Path) -> None:
        """Test JSON validation output for a cycle."""
        result = runner.invoke(app, ["validate", str(cyclic_plan_file), "--json"])

        assert result.exit_code == 1
        payload = json.loads(result.stdout)
        assert payload["tasks"] == 2
        assert payload["valid"] is False
        assert payload["errors"] == [
            "Circular dependency detected: TASK-001 -> TASK-002 -> TASK-001"
        ]

    def test_waves_json(self, plan_file: Path) -> None:
        """Test wave output as JSON."""
        result = runner.invoke(app, ["waves", str(plan_file), "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["waves"] == [["TASK-001"], ["TASK-002", "TASK-003"], ["TASK-004"]]
        assert payload["parallelization_score"] == 33
        assert payload["time_savings"]["sequential"] == 300
        assert payload["time_savings"]["parallel"] == 240
        assert payload["critical_path"]["task_ids"] == ["TASK-001", "TASK-003", "TASK-004"]

    def test_waves_table(self, plan_file: Path) -> None:
        """Test the wave table output."""
        result = runner.invoke(app, ["waves", str(plan_file)])

        assert result.exit_code == 0
        assert "Execution Waves" in result.output
        assert "TASK-004" in result.output

    def test_waves_with_cycle(self, cyclic_plan_file: Path) -> None:
        """Test waves fails on a cyclic plan."""
        result = runner.invoke(app, ["waves", str(cyclic_plan_file)])

        assert result.exit_code == 1
        assert "Circular dependency detected" in result.output

    def test_next(self, plan_file: Path) -> None:
        """Test the ready set with repeated and comma-separated ids."""
        result = runner.invoke(
            app, ["next", str(plan_file), "-c", "TASK-001", "--completed", "TASK-002,TASK-003",
                  "--json"]
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout) == ["TASK-004"]

    def test_next_first_wave(self, plan_file: Path) -> None:
        """Test the ready set with nothing complete."""
        result = runner.invoke(app, ["next", str(plan_file)])

        assert result.exit_code == 0
        assert "TASK-001: Database Schema" in result.output

    def test_grammar_from_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, clean_settings
    ) -> None:
        """Test grammar overrides are applied through settings."""
        monkeypatch.setenv("WAVEPLAN_TASK_ID_PATTERN", r"STEP-\d+")
        monkeypatch.setenv("WAVEPLAN_DEPENDENCIES_LABEL", "Requires")
        path = tmp_path / "PLAN.md"
        path.write_text("## STEP-1: Prepare\n## STEP-2: Ship\nRequires: STEP-1\n")

        result = runner.invoke(app, ["waves", str(path), "--json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["waves"] == [["STEP-1"], ["STEP-2"]]
