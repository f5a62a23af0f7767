# Tests for agentsync.utils.process
# Subprocess execution and launch failures

import subprocess
from unittest.mock import patch

import pytest

from agentsync.utils.process import CommandLaunchError, CommandResult, run_command


class TestCommandResult:
    """Tests for CommandResult."""

    def test_ok(self):
        assert CommandResult(0, "", "").ok is True
        assert CommandResult(128, "", "").ok is False

    def test_combined_contains_both_streams(self):
        result = CommandResult(1, "out", "err")
        assert "out" in result.combined
        assert "err" in result.combined


class TestRunCommand:
    """Tests for run_command."""

    @patch("agentsync.utils.process.subprocess.run")
    def test_captures_output(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=["git", "status"], returncode=0, stdout="clean", stderr=""
        )
        result = run_command("git", ["status"])
        assert result == CommandResult(exit_code=0, stdout="clean", stderr="")

        cmd = mock_run.call_args[0][0]
        assert cmd == ["git", "status"]
        assert mock_run.call_args[1]["env"] is None

    @patch("agentsync.utils.process.subprocess.run")
    def test_non_zero_exit_is_a_result(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=["git", "bad"], returncode=1, stdout="", stderr="boom"
        )
        result = run_command("git", ["bad"])
        assert result.exit_code == 1
        assert result.stderr == "boom"

    @patch("agentsync.utils.process.subprocess.run")
    def test_extra_env_overlays_environment(self, mock_run, monkeypatch):
        monkeypatch.setenv("AGENTSYNC_TEST_VAR", "kept")
        mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr="")

        run_command("git", ["status"], extra_env={"GIT_TERMINAL_PROMPT": "0"})

        env = mock_run.call_args[1]["env"]
        assert env["GIT_TERMINAL_PROMPT"] == "0"
        assert env["AGENTSYNC_TEST_VAR"] == "kept"

    @patch("agentsync.utils.process.subprocess.run")
    def test_none_output_becomes_empty_string(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0, stdout=None, stderr=None)
        result = run_command("true")
        assert result.stdout == ""
        assert result.stderr == ""

    def test_missing_binary_raises_launch_error(self):
        with pytest.raises(CommandLaunchError) as exc_info:
            run_command("agentsync-definitely-not-a-binary", ["--version"])
        assert "agentsync-definitely-not-a-binary --version" in exc_info.value.command_line
        assert exc_info.value.kind == "command_launch"

    @patch("agentsync.utils.process.subprocess.run", side_effect=PermissionError(13, "Permission denied"))
    def test_permission_error_raises_launch_error(self, mock_run):
        with pytest.raises(CommandLaunchError) as exc_info:
            run_command("/etc/passwd")
        assert exc_info.value.reason == "Permission denied"
