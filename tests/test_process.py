# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""Tests for running external programs."""

import shutil
import subprocess  # nosec B404
from typing import Any

import pytest

from javatoolinstaller.errors import ProcessExecutionError
from javatoolinstaller.process import CommandResult, ProcessRunner


def test_privileged_command_on_windows() -> None:
    """Test that privileged tools are invoked directly on Windows."""
    runner = ProcessRunner(platform_name="win32")
    assert runner.privileged_command("installer", ["-package", "jdk.pkg"]) == ["installer", "-package", "jdk.pkg"]


def test_privileged_command_on_darwin(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that privileged tools are resolved on the search path and run through the wrapper."""
    monkeypatch.setattr(shutil, "which", lambda tool: f"/usr/bin/{tool}")
    runner = ProcessRunner(platform_name="darwin")
    assert runner.privileged_command("hdiutil", ["attach", "jdk.dmg"]) == [
        "sudo",
        "/usr/bin/hdiutil",
        "attach",
        "jdk.dmg",
    ]


def test_privileged_command_missing_tool(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that a tool missing from the search path is reported."""
    monkeypatch.setattr(shutil, "which", lambda _: None)
    runner = ProcessRunner(platform_name="darwin")
    with pytest.raises(ProcessExecutionError, match="Unable to locate executable file"):
        runner.privileged_command("hdiutil", ["attach", "jdk.dmg"])


def test_run(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that the exit status and decoded output are returned."""
    calls: list[dict[str, Any]] = []

    def fake_run(args: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
        calls.append({"args": args, **kwargs})
        return subprocess.CompletedProcess(args=args, returncode=1, stdout=b"out\n", stderr=b"err\n")

    monkeypatch.setattr(subprocess, "run", fake_run)
    result = ProcessRunner(platform_name="linux", timeout=5).run(["7z", "x"], cwd="/tmp")

    assert result == CommandResult(args=["7z", "x"], returncode=1, stdout="out\n", stderr="err\n")
    assert not result.succeeded
    assert calls[0]["check"] is False
    assert calls[0]["timeout"] == 5
    assert calls[0]["cwd"] == "/tmp"
    assert calls[0]["env"]["LC_ALL"] == "C"


@pytest.mark.parametrize(
    ("error"),
    [
        pytest.param(FileNotFoundError("no such file"), id="missing program"),
        pytest.param(subprocess.TimeoutExpired(cmd="7z", timeout=5), id="timeout"),
    ],
)
def test_run_errors(monkeypatch: pytest.MonkeyPatch, error: Exception) -> None:
    """Test that launch failures and timeouts are reported as process errors."""

    def fake_run(*_args: Any, **_kwargs: Any) -> subprocess.CompletedProcess:
        raise error

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(ProcessExecutionError):
        ProcessRunner(platform_name="linux", timeout=5).run(["7z", "x"])


def test_privileged_commands_have_no_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that only unprivileged commands are bounded by the configured timeout."""
    timeouts: list[float | None] = []

    def fake_run(args: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
        timeouts.append(kwargs["timeout"])
        return subprocess.CompletedProcess(args=args, returncode=0, stdout=b"", stderr=b"")

    monkeypatch.setattr(subprocess, "run", fake_run)
    monkeypatch.setattr(shutil, "which", lambda tool: f"/usr/sbin/{tool}")
    runner = ProcessRunner(platform_name="darwin", timeout=5)

    runner.run(["7z", "x"])
    runner.run_privileged("installer", ["-package", "jdk.pkg", "-target", "/"])
    runner.run_privileged("hdiutil", ["attach", "jdk.dmg"])

    assert timeouts == [5, None, None]
