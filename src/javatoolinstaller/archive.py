# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module classifies JDK archives by their file extension."""

import logging
import ntpath
from collections.abc import Sequence
from enum import Enum

from javatoolinstaller.config.defaults import defaults
from javatoolinstaller.errors import ClassificationError

logger: logging.Logger = logging.getLogger(__name__)


class ArchiveKind(str, Enum):
    """The recognized kinds of JDK archives, valued by their file suffix."""

    TAR = ".tar"
    TAR_GZ = ".tar.gz"
    ZIP = ".zip"
    SEVEN_ZIP = ".7z"
    DISK_IMAGE = ".dmg"
    PACKAGE = ".pkg"

    @property
    def is_macos_package(self) -> bool:
        """Return True if the archive is installed with the macOS package installer."""
        return self in (ArchiveKind.DISK_IMAGE, ArchiveKind.PACKAGE)


def get_supported_extensions() -> list[str]:
    """Return the ordered list of supported suffixes from ``defaults.ini``.

    Suffixes that do not name a recognized archive kind are ignored.
    """
    configured = defaults.get_list(
        "archive",
        "supported_extensions",
        fallback=[kind.value for kind in ArchiveKind],
    )
    known = {kind.value for kind in ArchiveKind}
    supported = []
    for ext in configured:
        if ext in known:
            supported.append(ext)
        else:
            logger.debug("Ignoring unknown archive extension %s in the configuration.", ext)
    return supported


def classify_archive(file_name: str, supported_extensions: Sequence[str] | None = None) -> ArchiveKind:
    """Return the kind of the archive named ``file_name``.

    The suffixes are tested in order and the first one ``file_name`` ends with wins.
    The test is a plain, case-sensitive suffix match.

    Parameters
    ----------
    file_name : str
        The archive file name or path.
    supported_extensions : Sequence[str] | None
        The ordered suffixes to test. The configured suffixes are used if None.

    Returns
    -------
    ArchiveKind
        The kind of the archive.

    Raises
    ------
    ClassificationError
        If ``file_name`` does not end with any supported suffix.

    Examples
    --------
    >>> classify_archive("jdk-11.tar.gz")
    <ArchiveKind.TAR_GZ: '.tar.gz'>
    >>> classify_archive("jdk-11.exe")
    Traceback (most recent call last):
    ...
    javatoolinstaller.errors.ClassificationError: Unsupported file extension: jdk-11.exe
    """
    if supported_extensions is None:
        supported_extensions = get_supported_extensions()

    for ext in supported_extensions:
        if file_name.endswith(ext):
            return ArchiveKind(ext)

    raise ClassificationError(f"Unsupported file extension: {file_name}")


def strip_archive_suffix(file_name: str, kind: ArchiveKind) -> str:
    """Return the base name of ``file_name`` without its archive suffix.

    Both ``/`` and ``\\`` are treated as path separators.

    >>> strip_archive_suffix("/tmp/jdk-11.tar.gz", ArchiveKind.TAR_GZ)
    'jdk-11'
    """
    base_name = ntpath.basename(file_name.replace("/", "\\"))
    return base_name[: -len(kind.value)] if base_name.endswith(kind.value) else base_name
