# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""Tests for selecting the installation steps of a platform."""

import pytest

from javatoolinstaller.archive import ArchiveKind
from javatoolinstaller.installers.disk_image import HdiutilMounter
from javatoolinstaller.installers.package import MacOSPackageInstaller
from javatoolinstaller.installers.strategy import Capability, select_platform_support
from tests.fake_runner import RecordingRunner


def test_darwin_support() -> None:
    """Test that macOS can install every archive kind."""
    support = select_platform_support("darwin", RecordingRunner())

    assert isinstance(support.mounter, HdiutilMounter)
    assert isinstance(support.package_installer, MacOSPackageInstaller)
    assert support.capabilities == set(Capability)
    assert all(support.supports(kind) for kind in ArchiveKind)


@pytest.mark.parametrize(("platform_name"), ["linux", "win32"])
def test_other_platform_support(platform_name: str) -> None:
    """Test that other platforms can only extract archives."""
    support = select_platform_support(platform_name, RecordingRunner())

    assert support.mounter is None
    assert support.package_installer is None
    assert support.capabilities == {Capability.EXTRACT_ARCHIVE}
    assert support.supports(ArchiveKind.ZIP)
    assert support.supports(ArchiveKind.TAR_GZ)
    assert not support.supports(ArchiveKind.DISK_IMAGE)
    assert not support.supports(ArchiveKind.PACKAGE)
