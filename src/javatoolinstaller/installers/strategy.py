# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module selects the installation steps available on the current platform.

The platform is inspected once, at startup, and the result is a ``PlatformSupport``
tagged with its capabilities. The installation orchestrator only asks which
capabilities are present and never checks the platform itself.
"""

import logging
import sys
from dataclasses import dataclass
from enum import Enum

from javatoolinstaller.archive import ArchiveKind
from javatoolinstaller.extractor import ArchiveExtractor, JavaFilesExtractor
from javatoolinstaller.installers.disk_image import DiskImageMounter, HdiutilMounter
from javatoolinstaller.installers.package import MacOSPackageInstaller, PackageInstaller
from javatoolinstaller.process import ProcessRunner

logger: logging.Logger = logging.getLogger(__name__)


class Capability(Enum):
    """The installation steps a platform can perform."""

    EXTRACT_ARCHIVE = "extract-archive"
    MOUNT_DISK_IMAGE = "mount-disk-image"
    INSTALL_PACKAGE = "install-package"


# The capabilities each archive kind needs.
_REQUIRED_CAPABILITIES: dict[ArchiveKind, frozenset[Capability]] = {
    ArchiveKind.TAR: frozenset({Capability.EXTRACT_ARCHIVE}),
    ArchiveKind.TAR_GZ: frozenset({Capability.EXTRACT_ARCHIVE}),
    ArchiveKind.ZIP: frozenset({Capability.EXTRACT_ARCHIVE}),
    ArchiveKind.SEVEN_ZIP: frozenset({Capability.EXTRACT_ARCHIVE}),
    ArchiveKind.DISK_IMAGE: frozenset({Capability.MOUNT_DISK_IMAGE, Capability.INSTALL_PACKAGE}),
    ArchiveKind.PACKAGE: frozenset({Capability.INSTALL_PACKAGE}),
}


@dataclass(frozen=True)
class PlatformSupport:
    """The installation steps of one platform."""

    #: The platform identifier, as reported by ``sys.platform``.
    name: str

    #: The extractor for tar, tar.gz, zip and 7z archives.
    extractor: ArchiveExtractor

    #: The disk image mounter, if the platform has one.
    mounter: DiskImageMounter | None = None

    #: The package installer, if the platform has one.
    package_installer: PackageInstaller | None = None

    @property
    def capabilities(self) -> frozenset[Capability]:
        """Return the capabilities of this platform."""
        caps = {Capability.EXTRACT_ARCHIVE}
        if self.mounter is not None:
            caps.add(Capability.MOUNT_DISK_IMAGE)
        if self.package_installer is not None:
            caps.add(Capability.INSTALL_PACKAGE)
        return frozenset(caps)

    def supports(self, kind: ArchiveKind) -> bool:
        """Return True if archives of ``kind`` can be installed on this platform."""
        return _REQUIRED_CAPABILITIES[kind] <= self.capabilities


def select_platform_support(platform_name: str | None = None, runner: ProcessRunner | None = None) -> PlatformSupport:
    """Return the installation steps of the given platform.

    Parameters
    ----------
    platform_name : str | None
        The platform identifier as reported by ``sys.platform``. The current platform if None.
    runner : ProcessRunner | None
        The runner for external programs. A new one is created if None.

    Returns
    -------
    PlatformSupport
        The platform's installation steps.
    """
    platform_name = platform_name or sys.platform
    runner = runner or ProcessRunner(platform_name=platform_name)
    extractor = JavaFilesExtractor(runner)

    if platform_name == "darwin":
        support = PlatformSupport(
            name=platform_name,
            extractor=extractor,
            mounter=HdiutilMounter(runner),
            package_installer=MacOSPackageInstaller(runner),
        )
    else:
        support = PlatformSupport(name=platform_name, extractor=extractor)

    logger.debug(
        "Platform %s supports: %s",
        platform_name,
        ", ".join(sorted(cap.value for cap in support.capabilities)),
    )
    return support
