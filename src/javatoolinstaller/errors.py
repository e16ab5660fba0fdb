# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module contains error classes for the Java tool installer."""


class JavaToolInstallerError(Exception):
    """The base class for Java tool installer errors."""


class ConfigurationError(JavaToolInstallerError):
    """Happens when there is an error in the configuration (.ini) file or the task inputs."""


class ClassificationError(JavaToolInstallerError):
    """Happens when an archive does not end with a supported file extension."""


class MountStructureError(JavaToolInstallerError):
    """Happens when attaching a disk image does not produce exactly one new volume."""


class PackageLookupError(JavaToolInstallerError):
    """Happens when a mounted volume contains zero or several package files."""


class InstallDetectionError(JavaToolInstallerError):
    """Happens when the installed JDK cannot be determined from the JDK root.

    Reasons can include:
        * the package installer produced no new entry and no pre-installed JDK is registered
        * the package installer produced more than one new entry
    """


class PreinstalledMissingError(JavaToolInstallerError):
    """Happens when a pre-installed JDK is requested but its variable is not set."""


class ProcessExecutionError(JavaToolInstallerError):
    """Happens when an external program cannot be launched or exits with an error."""


class ExtractionError(JavaToolInstallerError):
    """Happens when an archive cannot be extracted or has no recognizable JDK home."""


class ArtifactDownloadError(JavaToolInstallerError):
    """Happens when a JDK archive cannot be fetched from remote storage."""


class InstallCancelledError(JavaToolInstallerError):
    """Happens when the installation is cancelled between two steps."""
