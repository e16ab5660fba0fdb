# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""Tests for the macOS package installer."""

import pytest

from javatoolinstaller.errors import ProcessExecutionError
from javatoolinstaller.installers.package import MacOSPackageInstaller
from tests.fake_runner import RecordingRunner


def test_install() -> None:
    """Test the command installing a package onto the root volume."""
    runner = RecordingRunner()
    result = MacOSPackageInstaller(runner).install("/Volumes/JDK 11/JDK 11.pkg")

    assert result.succeeded
    assert runner.commands == [["installer", "-package", "/Volumes/JDK 11/JDK 11.pkg", "-target", "/"]]


def test_install_non_zero_exit() -> None:
    """Test that a non-zero exit status is returned, not raised."""
    result = MacOSPackageInstaller(RecordingRunner(returncode=1), target="/Volumes/Other").install("jdk.pkg")
    assert result.returncode == 1
    assert result.args[-1] == "/Volumes/Other"


def test_install_launch_failure() -> None:
    """Test that an installer that cannot be launched is an error."""
    with pytest.raises(ProcessExecutionError):
        MacOSPackageInstaller(RecordingRunner(fail_to_launch=True)).install("jdk.pkg")
