"""Tests for CommandRunner."""

import subprocess
import sys
from types import SimpleNamespace

import pytest

from syspulse.errors import CommandError
from syspulse.runner import CommandRunner


def test_returns_stdout():
    runner = CommandRunner()
    assert runner.run([sys.executable, "-c", "print('hello')"]).strip() == "hello"


def test_non_zero_exit():
    runner = CommandRunner()
    with pytest.raises(CommandError) as excinfo:
        runner.run([sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"])
    assert excinfo.value.returncode == 3
    assert "boom" in excinfo.value.stderr


def test_missing_executable():
    with pytest.raises(CommandError) as excinfo:
        CommandRunner().run(["syspulse-no-such-command-xyz"])
    assert excinfo.value.returncode is None


def test_timeout():
    runner = CommandRunner(timeout=0.2)
    assert runner.timeout == 0.2
    with pytest.raises(CommandError, match="timed out"):
        runner.run([sys.executable, "-c", "import time; time.sleep(5)"])


def test_no_timeout_by_default(monkeypatch):
    seen = {}

    def fake_run(args, **kwargs):
        seen.update(kwargs)
        return SimpleNamespace(returncode=0, stdout="ok", stderr="")

    monkeypatch.setattr(subprocess, "run", fake_run)
    assert CommandRunner().run(("df", "-kP", "/")) == "ok"
    assert seen["timeout"] is None
    assert seen["capture_output"] is True
    assert seen["text"] is True


def test_error_message_names_command():
    error = CommandError(["wmic", "cpu"], returncode=1, stderr="Invalid class\r\n")
    assert "wmic cpu" in str(error)
    assert "Invalid class" in str(error)
    assert error.command == ["wmic", "cpu"]
