"""Tests for the dayflow-onboard CLI."""

import json
import os
import subprocess
import sys

import pytest


def run_cli(*args, state_path=None, tmp_path=None, input_text=None):
    """Run the CLI module in a subprocess with an isolated state/config location."""
    env = dict(os.environ)
    env.pop("DAYFLOW_DEBUG", None)
    env.pop("DAYFLOW_FAST_PATH_PROVIDER", None)
    if tmp_path is not None:
        env["DAYFLOW_ONBOARDING_CONFIG"] = str(tmp_path / "absent.yaml")
    if state_path is not None:
        env["DAYFLOW_ONBOARDING_STATE"] = str(state_path)
    return subprocess.run(
        [sys.executable, "-m", "dayflow_onboarding.cli", *args],
        capture_output=True,
        text=True,
        env=env,
        input=input_text,
    )


class TestCLI:
    """Test CLI entry points and basic functionality."""

    def test_version(self):
        """Test --version flag."""
        result = run_cli("--version")
        assert result.returncode == 0
        assert "dayflow-onboarding" in result.stdout.lower() or "version" in result.stdout.lower()

    def test_help(self):
        """Test --help flag."""
        result = run_cli("--help")
        assert result.returncode == 0
        assert "Dayflow" in result.stdout
        for command in ("run", "status", "reset", "steps"):
            assert command in result.stdout

    def test_help_lists_environment(self):
        from dayflow_onboarding.wizard.logging_config import ENV_VARS

        result = run_cli("--help")
        assert result.returncode == 0
        assert "Environment:" in result.stdout
        for name in ENV_VARS:
            assert name in result.stdout

    def test_run_help(self):
        result = run_cli("run", "--help")
        assert result.returncode == 0
        assert "--state" in result.stdout
        assert "--config" in result.stdout

    def test_steps(self):
        result = run_cli("steps")
        assert result.returncode == 0
        assert "welcome" in result.stdout
        assert "screen_recording" in result.stdout


class TestStatusCommand:
    """Test the status command."""

    def test_fresh_status(self, tmp_path):
        result = run_cli("status", "--json", state_path=tmp_path / "state.json", tmp_path=tmp_path)

        assert result.returncode == 0
        data = json.loads(result.stdout)
        assert data["step"] == "welcome"
        assert data["completed"] is False
        assert data["started"] is False

    def test_status_migrates_legacy_state(self, tmp_path):
        state_path = tmp_path / "state.json"
        state_path.write_text(json.dumps({"step_id": 2, "schema_version": 0}))

        result = run_cli("status", "--json", state_path=state_path, tmp_path=tmp_path)

        assert result.returncode == 0
        data = json.loads(result.stdout)
        assert data["step_id"] == 5
        assert data["step"] == "screen_recording"
        assert data["schema_version"] == 1
        stored = json.loads(state_path.read_text())
        assert stored["step_id"] == 5
        assert stored["schema_version"] == 1

    def test_status_text(self, tmp_path):
        result = run_cli("status", state_path=tmp_path / "state.json", tmp_path=tmp_path)
        assert result.returncode == 0
        assert "Onboarding Status" in result.stdout
        assert "Current step" in result.stdout
        assert "not set" in result.stdout

    def test_bad_config_exit_code(self, tmp_path):
        config_path = tmp_path / "bad.yaml"
        config_path.write_text("default_provider: nobody\n")

        result = run_cli(
            "status", "--config", str(config_path),
            state_path=tmp_path / "state.json", tmp_path=tmp_path
        )

        assert result.returncode == 10
        assert "nobody" in result.stdout


class TestResetCommand:
    """Test the reset command."""

    def test_reset_removes_state(self, tmp_path):
        state_path = tmp_path / "state.json"
        state_path.write_text(json.dumps({"step_id": 4, "schema_version": 1}))

        result = run_cli("reset", "--yes", state_path=state_path, tmp_path=tmp_path)

        assert result.returncode == 0
        assert not state_path.exists()

    def test_reset_without_state(self, tmp_path):
        result = run_cli("reset", "--yes", state_path=tmp_path / "state.json", tmp_path=tmp_path)
        assert result.returncode == 0
        assert "No onboarding progress" in result.stdout

    def test_reset_cancelled(self, tmp_path):
        state_path = tmp_path / "state.json"
        state_path.write_text("{}")

        result = run_cli("reset", state_path=state_path, tmp_path=tmp_path, input_text="n\n")

        assert result.returncode == 0
        assert state_path.exists()


class TestRunCommand:
    """Test the interactive run command with piped input."""

    @pytest.mark.slow
    def test_quit_on_first_step_saves_progress(self, tmp_path):
        state_path = tmp_path / "state.json"

        result = run_cli("run", state_path=state_path, tmp_path=tmp_path, input_text="Next\nQuit\n")

        assert result.returncode == 1
        stored = json.loads(state_path.read_text())
        assert stored["step_id"] == 1
        assert stored["started"] is True
