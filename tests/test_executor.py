"""Tests for detached command execution."""

from __future__ import annotations

import subprocess
from unittest.mock import patch

from sensorwatch.executor import CommandExecutor


class TestCommandExecutor:
    def test_spawns_through_shell(self):
        with patch("sensorwatch.executor.subprocess.Popen") as popen:
            assert CommandExecutor().spawn("echo hi > /dev/null") is True
        args, kwargs = popen.call_args
        assert args[0] == ["/bin/sh", "-c", "echo hi > /dev/null"]
        assert kwargs["start_new_session"] is True
        assert kwargs["stdout"] is subprocess.DEVNULL

    def test_does_not_wait(self):
        with patch("sensorwatch.executor.subprocess.Popen") as popen:
            CommandExecutor().spawn("sleep 10")
        popen.return_value.wait.assert_not_called()
        popen.return_value.communicate.assert_not_called()

    def test_spawn_failure_logged(self, caplog):
        with patch(
            "sensorwatch.executor.subprocess.Popen", side_effect=OSError("no shell")
        ):
            assert CommandExecutor().spawn("echo hi") is False
        assert "could not spawn" in caplog.text

    def test_custom_shell(self):
        with patch("sensorwatch.executor.subprocess.Popen") as popen:
            CommandExecutor(shell="/bin/bash").spawn("true")
        assert popen.call_args[0][0][0] == "/bin/bash"
