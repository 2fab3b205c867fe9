"""Tests for process handoff."""

from __future__ import annotations

import subprocess
from unittest.mock import patch

import pytest

from rx_launcher.errors import ExecutionFailed
from rx_launcher.handoff import replace_process


class TestReplaceProcess:
    def test_posix_execs_with_program_name_as_argv0(self) -> None:
        with patch("rx_launcher.handoff.is_windows", return_value=False), patch(
            "rx_launcher.handoff.os.execv", side_effect=SystemExit(0)
        ) as mock_exec:
            with pytest.raises(SystemExit):
                replace_process("/usr/bin/npm", ["npm", "run", "start"])

        mock_exec.assert_called_once_with("/usr/bin/npm", ["npm", "run", "start"])

    def test_exec_error_becomes_execution_failed(self) -> None:
        with patch("rx_launcher.handoff.is_windows", return_value=False), patch(
            "rx_launcher.handoff.os.execv", side_effect=PermissionError("denied")
        ):
            with pytest.raises(ExecutionFailed, match="failed to launch npm"):
                replace_process("/usr/bin/npm", ["npm", "run", "start"])

    def test_windows_spawns_and_exits_with_child_status(self) -> None:
        done = subprocess.CompletedProcess(args=[], returncode=3)
        with patch("rx_launcher.handoff.is_windows", return_value=True), patch(
            "rx_launcher.handoff.subprocess.run", return_value=done
        ) as mock_run, patch("rx_launcher.handoff.os.execv") as mock_exec:
            with pytest.raises(SystemExit) as excinfo:
                replace_process("C:/node/npm.cmd", ["npm", "run", "start"])

        assert excinfo.value.code == 3
        assert mock_run.call_args.args[0] == ["C:/node/npm.cmd", "run", "start"]
        mock_exec.assert_not_called()

    def test_windows_launch_error_becomes_execution_failed(self) -> None:
        with patch("rx_launcher.handoff.is_windows", return_value=True), patch(
            "rx_launcher.handoff.subprocess.run", side_effect=FileNotFoundError("gone")
        ):
            with pytest.raises(ExecutionFailed):
                replace_process("C:/tools/make.exe", ["make", "build"])
