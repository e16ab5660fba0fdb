# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module installs a JDK archive and reports the resulting JDK home.

Archives are classified by their suffix. Disk images are attached, the single package
on the new volume is installed, and the volume is detached again. Packages are installed
directly. Every other archive kind is handed to the generic archive extractor.

The macOS tools do not report where they installed the JDK, so the new JDK is detected
by comparing the JDK root before and after the package installer runs. Exactly one new
entry is required; more than one is never resolved by picking one of them.

The volumes root and the JDK root are shared by every process on the machine. The
installation assumes exclusive use of the agent machine and does not lock them.
"""

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from javatoolinstaller.archive import ArchiveKind, classify_archive, get_supported_extensions
from javatoolinstaller.cancellation import CancellationToken
from javatoolinstaller.config.defaults import defaults
from javatoolinstaller.environment_variables import get_variable
from javatoolinstaller.errors import (
    ClassificationError,
    InstallDetectionError,
    JavaToolInstallerError,
    MountStructureError,
    PackageLookupError,
)
from javatoolinstaller.installers.strategy import PlatformSupport
from javatoolinstaller.snapshot import begin_privileged_action, resolve

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstallerPaths:
    """The file system locations and suffixes the orchestrator works with."""

    #: The directory under which attached disk images appear.
    volumes_root: str = "/Volumes"

    #: The directory the package installer places JDKs in.
    jdk_root: str = "/Library/Java/JavaVirtualMachines"

    #: The relative path from an installed JDK bundle to its JDK home.
    jdk_home_subfolder: str = "Contents/Home"

    #: The ordered list of recognized archive suffixes.
    supported_extensions: tuple[str, ...] = tuple(kind.value for kind in ArchiveKind)

    @classmethod
    def from_defaults(cls) -> "InstallerPaths":
        """Create the paths from ``defaults.ini``."""
        return cls(
            volumes_root=defaults.get("darwin", "volumes_root", fallback=cls.volumes_root),
            jdk_root=defaults.get("darwin", "jdk_root", fallback=cls.jdk_root),
            jdk_home_subfolder=defaults.get("darwin", "jdk_home_subfolder", fallback=cls.jdk_home_subfolder),
            supported_extensions=tuple(get_supported_extensions()),
        )


@dataclass(frozen=True)
class InstallRequest:
    """An archive to install."""

    #: The path to the archive.
    source_file: str

    #: The kind of the archive.
    kind: ArchiveKind

    #: The directory archives are extracted in.
    destination: str

    #: The requested version. Only used in messages.
    version_spec: str = ""

    #: The name of the variable registering a pre-installed JDK of the requested version.
    extended_java_home: str = ""

    #: Return the pre-installed JDK home registered under a variable name. The orchestrator's
    #: lookup is used if None.
    preinstalled_lookup: Callable[[str], str | None] | None = None


class OutcomeKind(Enum):
    """How the JDK home of a successful installation was obtained."""

    #: The package installer created a new JDK.
    INSTALLED = "installed"

    #: The package installer made no change and a pre-installed JDK was reused.
    RECOVERED = "recovered"

    #: The archive was extracted.
    EXTRACTED = "extracted"


@dataclass(frozen=True)
class InstallOutcome:
    """The JDK home resolved by an installation."""

    java_home: str
    kind: OutcomeKind


class InstallState(Enum):
    """The states of one installation."""

    IDLE = "idle"
    CLASSIFIED = "classified"
    MOUNT_PENDING = "mount-pending"
    INSTALL_PENDING = "install-pending"
    DIFFING = "diffing"
    RESOLVED = "resolved"
    FAILED = "failed"


def find_package(volume_path: str, package_suffix: str = ArchiveKind.PACKAGE.value) -> str:
    """Return the path to the only package file at the top of ``volume_path``.

    Raises
    ------
    PackageLookupError
        If the volume contains no package file or more than one.
    """
    packages = sorted(entry for entry in os.listdir(volume_path) if entry.endswith(package_suffix))
    if not packages:
        raise PackageLookupError(f"No {package_suffix} file found in {volume_path}.")
    if len(packages) > 1:
        raise PackageLookupError(f"Multiple {package_suffix} files found in {volume_path}: {', '.join(packages)}.")
    return os.path.join(volume_path, packages[0])


@dataclass
class InstallOrchestrator:
    """Install JDK archives with the installation steps of one platform.

    The orchestrator does not own anything it installs or mounts. It only observes the
    file system and returns a path. Its state is scoped to a single ``install`` call.
    """

    #: The installation steps available on this platform.
    platform: PlatformSupport

    #: The locations and suffixes to work with.
    paths: InstallerPaths = field(default_factory=InstallerPaths.from_defaults)

    #: Return the pre-installed JDK home registered under a variable name, or None.
    preinstalled_lookup: Callable[[str], str | None] = get_variable

    #: Checked before every privileged step.
    cancellation: CancellationToken = field(default_factory=CancellationToken)

    #: The state of the current or last installation.
    state: InstallState = InstallState.IDLE

    def _transition(self, state: InstallState) -> None:
        logger.debug("Installation state: %s -> %s", self.state.value, state.value)
        self.state = state

    def classify(self, source_file: str) -> ArchiveKind:
        """Classify ``source_file`` and check that this platform can install it.

        Raises
        ------
        ClassificationError
            If the suffix is not supported or the platform lacks the steps the archive needs.
        """
        kind = classify_archive(source_file, self.paths.supported_extensions)
        if not self.platform.supports(kind):
            raise ClassificationError(
                f"{kind.value} archives cannot be installed on the {self.platform.name} platform."
            )
        return kind

    def install(
        self,
        source_file: str,
        destination: str,
        version_spec: str = "",
        extended_java_home: str = "",
        preinstalled_lookup: Callable[[str], str | None] | None = None,
    ) -> InstallOutcome:
        """Install the archive at ``source_file`` and return the resulting JDK home.

        Parameters
        ----------
        source_file : str
            The path to the archive.
        destination : str
            The directory archives are extracted in.
        version_spec : str
            The requested version. Only used in messages.
        extended_java_home : str
            The name of the variable registering a pre-installed JDK of the requested version.
            It is looked up when the package installer makes no change.
        preinstalled_lookup : Callable[[str], str | None] | None
            Look up ``extended_java_home`` in the environment of this installation.
            The orchestrator's ``preinstalled_lookup`` is used if None.

        Returns
        -------
        InstallOutcome
            The resolved JDK home.

        Raises
        ------
        JavaToolInstallerError
            If the installation fails. No further step runs after the first error.
        """
        self.state = InstallState.IDLE
        try:
            kind = self.classify(source_file)
            self._transition(InstallState.CLASSIFIED)
            request = InstallRequest(
                source_file=source_file,
                kind=kind,
                destination=destination,
                version_spec=version_spec,
                extended_java_home=extended_java_home,
                preinstalled_lookup=preinstalled_lookup,
            )
            outcome = self._dispatch(request)
        except (JavaToolInstallerError, OSError):
            self._transition(InstallState.FAILED)
            raise

        self._transition(InstallState.RESOLVED)
        logger.debug("Resolved JDK home %s (%s).", outcome.java_home, outcome.kind.value)
        return outcome

    def _dispatch(self, request: InstallRequest) -> InstallOutcome:
        match request.kind:
            case ArchiveKind.DISK_IMAGE:
                return self._install_disk_image(request)
            case ArchiveKind.PACKAGE:
                return self._install_package(request.source_file, request)
            case _:
                self.cancellation.raise_if_cancelled("extracting the archive")
                java_home = self.platform.extractor.extract(request.source_file, request.kind, request.destination)
                return InstallOutcome(java_home=java_home, kind=OutcomeKind.EXTRACTED)

    def _install_disk_image(self, request: InstallRequest) -> InstallOutcome:
        # Guaranteed by PlatformSupport.supports.
        assert self.platform.mounter is not None

        self.cancellation.raise_if_cancelled("attaching the disk image")
        self._transition(InstallState.MOUNT_PENDING)
        pending = begin_privileged_action(self.paths.volumes_root)
        self.platform.mounter.attach(request.source_file)
        new_volumes = resolve(pending)

        if len(new_volumes) != 1:
            # Nothing is installed from an ambiguous mount, but every new volume is released.
            for volume in sorted(new_volumes):
                volume_path = os.path.join(self.paths.volumes_root, volume)
                if not self.platform.mounter.detach(volume_path):
                    logger.warning("The disk image is still attached at %s.", volume_path)
            raise MountStructureError(
                f"Unsupported disk image structure: attaching {request.source_file} added "
                f"{len(new_volumes)} volumes to {self.paths.volumes_root}, expected exactly one."
            )

        volume_path = os.path.join(self.paths.volumes_root, next(iter(new_volumes)))
        try:
            package_path = find_package(volume_path)
            return self._install_package(package_path, request)
        finally:
            if not self.platform.mounter.detach(volume_path):
                logger.warning("The disk image is still attached at %s.", volume_path)

    def _install_package(self, package_path: str, request: InstallRequest) -> InstallOutcome:
        # Guaranteed by PlatformSupport.supports.
        assert self.platform.package_installer is not None

        self.cancellation.raise_if_cancelled("installing the package")
        self._transition(InstallState.INSTALL_PENDING)
        pending = begin_privileged_action(self.paths.jdk_root)
        result = self.platform.package_installer.install(package_path)

        self._transition(InstallState.DIFFING)
        new_jdks = resolve(pending)
        return self._resolve_installed_jdk(new_jdks, request, installer_succeeded=result.succeeded)

    def _resolve_installed_jdk(
        self,
        new_jdks: frozenset[str],
        request: InstallRequest,
        installer_succeeded: bool,
    ) -> InstallOutcome:
        if len(new_jdks) == 1:
            if not installer_succeeded:
                # The exit status is ignored when a JDK appears. A failed install that leaves a
                # stray entry behind would be mistaken for a success here.
                logger.warning("The package installer reported a failure, but a new JDK was found.")
            jdk_name = next(iter(new_jdks))
            java_home = os.path.join(self.paths.jdk_root, jdk_name, self.paths.jdk_home_subfolder)
            return InstallOutcome(java_home=java_home, kind=OutcomeKind.INSTALLED)

        if len(new_jdks) > 1:
            raise InstallDetectionError(
                f"Ambiguous install result: {len(new_jdks)} new entries in {self.paths.jdk_root}: "
                f"{', '.join(sorted(new_jdks))}."
            )

        lookup = request.preinstalled_lookup or self.preinstalled_lookup
        preinstalled = lookup(request.extended_java_home) if request.extended_java_home else None
        if preinstalled:
            logger.info(
                "No new JDK was installed. Using the JDK %s already registered in %s.",
                preinstalled,
                request.extended_java_home,
            )
            return InstallOutcome(java_home=preinstalled, kind=OutcomeKind.RECOVERED)

        raise InstallDetectionError(f"The JDK {request.version_spec} did not install into {self.paths.jdk_root}.")
