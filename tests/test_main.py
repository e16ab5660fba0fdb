# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""Simple tests for the main method."""

import argparse
import io
import logging
import os
from collections.abc import Iterator
from importlib import metadata as importlib_metadata
from pathlib import Path

import pytest

from javatoolinstaller import __main__ as cli
from javatoolinstaller.pipeline_commands import PipelinePublisher


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Restore the root logger handlers replaced by ``main``."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers = handlers
    root_logger.setLevel(level)
    logging.getLogger("javatoolinstaller").handlers = []


@pytest.mark.parametrize(
    ("flag"),
    [
        "--version",
        "-V",
    ],
)
def test_version(capsys: pytest.CaptureFixture, flag: str) -> None:
    """Test the ``--version/-V`` flag.

    Stdout format should be correct and exit code should be 0.
    """
    with pytest.raises(SystemExit) as exc_info:
        cli.main([flag])
    out, err = capsys.readouterr()

    assert out == f"javatoolinstaller {importlib_metadata.version('javatoolinstaller')}\n"
    assert err == ""
    assert exc_info.value.code == 0


def test_no_action() -> None:
    """Test that running without an action prints the usage and fails."""
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code == cli.EX_USAGE


def test_install_missing_input(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    """Test that a missing required input fails the task."""
    monkeypatch.delenv("INPUT_VERSIONSPEC", raising=False)

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["install", "--source", "PreInstalled", "--architecture", "x64", "--destination", "/tmp"])

    assert exc_info.value.code == cli.EX_USAGE
    assert "##vso[task.complete result=Failed;]Input required: versionSpec" in capsys.readouterr().out


def test_dump_defaults(tmp_path: Path) -> None:
    """Test dumping the packaged defaults."""
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["-o", str(tmp_path), "dump-defaults"])

    assert exc_info.value.code == cli.EX_OK
    assert tmp_path.joinpath("defaults.ini").is_file()


def _install_args(source: str, destination: Path) -> argparse.Namespace:
    return argparse.Namespace(
        version_spec="11",
        architecture="x64",
        source=source,
        destination=str(destination),
        clean_destination=False,
        jdk_file=None,
        azure_endpoint=None,
        azure_account=None,
        azure_container=None,
        azure_file=None,
    )


@pytest.mark.parametrize(
    ("env", "expected_code", "expected_result"),
    [
        pytest.param({"JAVA_HOME_11_X64": "/opt/jdk-11"}, cli.EX_OK, "result=Succeeded", id="registered"),
        pytest.param({}, cli.EX_SOFTWARE, "result=Failed", id="not registered"),
    ],
)
def test_install_preinstalled(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    env: dict[str, str],
    expected_code: int,
    expected_result: str,
) -> None:
    """Test the exit code and task result of installing a pre-installed JDK."""
    monkeypatch.setattr(cli, "install_signal_handlers", lambda _token: None)
    monkeypatch.delenv("AGENT_TOOLSDIRECTORY", raising=False)
    monkeypatch.delenv("JAVA_HOME_11_x64", raising=False)
    monkeypatch.delenv("JAVA_HOME_11_X64", raising=False)
    for name, value in env.items():
        monkeypatch.setenv(name, value)
    stream = io.StringIO()

    code = cli.install(_install_args("PreInstalled", tmp_path), PipelinePublisher(stream, {}))

    assert code == expected_code
    assert stream.getvalue().splitlines()[-1].startswith(f"##vso[task.complete {expected_result};]")
    if expected_code == cli.EX_OK:
        assert f"##vso[task.prependpath]{os.path.join('/opt/jdk-11', 'bin')}" in stream.getvalue()
