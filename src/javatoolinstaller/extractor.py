# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module extracts JDK archives and locates the JDK home inside them."""

import logging
import os
import shutil
import stat
import tarfile
import tempfile
import zipfile
import zlib
from abc import ABC, abstractmethod

from javatoolinstaller.archive import ArchiveKind, strip_archive_suffix
from javatoolinstaller.config.defaults import defaults
from javatoolinstaller.errors import ExtractionError
from javatoolinstaller.process import ProcessRunner

logger: logging.Logger = logging.getLogger(__name__)

# The number of nested single directories searched for a JDK home.
_MAX_SEARCH_DEPTH = 3


class ArchiveExtractor(ABC):
    """This abstract class is used to implement archive extractors."""

    @abstractmethod
    def extract(self, archive_path: str, kind: ArchiveKind, destination: str) -> str:
        """Extract ``archive_path`` under ``destination`` and return the JDK home.

        Raises
        ------
        ExtractionError
            If the archive cannot be extracted or contains no JDK home.
        """


def _is_within_directory(directory: str, target: str) -> bool:
    abs_directory = os.path.abspath(directory)
    abs_target = os.path.abspath(target)
    return os.path.commonpath([abs_directory, abs_target]) == abs_directory


def find_java_home(root: str, bin_folder: str | None = None, home_subfolder: str | None = None) -> str:
    """Return the JDK home directory inside an extracted archive.

    A directory is a JDK home if it contains the binary folder. Archives commonly wrap the
    JDK in a single top-level directory, and macOS tarballs nest the home in ``Contents/Home``,
    so single sub-directories are followed a few levels down.

    Parameters
    ----------
    root : str
        The directory the archive was extracted to.
    bin_folder : str | None
        The name of the binary folder. Read from ``defaults.ini`` if None.
    home_subfolder : str | None
        The relative path of a macOS bundle's home. Read from ``defaults.ini`` if None.

    Returns
    -------
    str
        The path to the JDK home.

    Raises
    ------
    ExtractionError
        If no JDK home can be found.
    """
    bin_folder = bin_folder or defaults.get("extractor", "bin_folder", fallback="bin")
    home_subfolder = home_subfolder or defaults.get("darwin", "jdk_home_subfolder", fallback="Contents/Home")

    candidate = root
    for _ in range(_MAX_SEARCH_DEPTH):
        if os.path.isdir(os.path.join(candidate, bin_folder)):
            return candidate
        bundle_home = os.path.join(candidate, home_subfolder)
        if os.path.isdir(os.path.join(bundle_home, bin_folder)):
            return bundle_home

        sub_dirs = [entry for entry in os.listdir(candidate) if os.path.isdir(os.path.join(candidate, entry))]
        if len(sub_dirs) != 1:
            break
        candidate = os.path.join(candidate, sub_dirs[0])

    raise ExtractionError(f"Unable to find a JDK home with a {bin_folder} folder in {root}.")


class JavaFilesExtractor(ArchiveExtractor):
    """Extract tar, tar.gz, zip and 7z JDK archives."""

    def __init__(self, runner: ProcessRunner, seven_zip: str | None = None) -> None:
        self.runner = runner
        self.seven_zip = seven_zip or defaults.get("extractor", "seven_zip", fallback="7z")

    def extract(self, archive_path: str, kind: ArchiveKind, destination: str) -> str:
        if not os.path.isfile(archive_path):
            raise ExtractionError(f"The JDK archive {archive_path} does not exist.")

        target = os.path.join(destination, strip_archive_suffix(archive_path, kind))
        if os.path.isdir(target) and os.listdir(target):
            logger.info("The archive %s is already extracted to %s.", archive_path, target)
        else:
            logger.info("Extracting %s to %s.", archive_path, target)
            self._extract_atomically(archive_path, kind, destination, target)

        java_home = find_java_home(target)
        logger.debug("Found JDK home %s.", java_home)
        return java_home

    def _extract_atomically(self, archive_path: str, kind: ArchiveKind, destination: str, target: str) -> None:
        # Extract next to the target and move the tree into place only once it is complete.
        os.makedirs(destination, exist_ok=True)
        staging = tempfile.mkdtemp(prefix=f".{os.path.basename(target)}.", dir=destination)
        try:
            match kind:
                case ArchiveKind.TAR | ArchiveKind.TAR_GZ:
                    self._extract_tar(archive_path, staging)
                case ArchiveKind.ZIP:
                    self._extract_zip(archive_path, staging)
                case ArchiveKind.SEVEN_ZIP:
                    self._extract_seven_zip(archive_path, staging)
                case _:
                    raise ExtractionError(f"Archives of kind {kind.value} cannot be extracted.")

            # mkdtemp creates the directory readable by the owner only.
            os.chmod(staging, 0o755)
            if os.path.isdir(target):
                os.rmdir(target)
            os.replace(staging, target)
        finally:
            if os.path.isdir(staging):
                shutil.rmtree(staging, ignore_errors=True)

    @staticmethod
    def _extract_tar(archive_path: str, target: str) -> None:
        try:
            with tarfile.open(archive_path, mode="r:*") as tar_file:
                tar_file.extractall(target, filter="data")
        except (tarfile.TarError, EOFError, zlib.error, OSError) as error:
            raise ExtractionError(f"Failed to extract {archive_path}: {error}") from error

    @staticmethod
    def _extract_zip(archive_path: str, target: str) -> None:
        try:
            with zipfile.ZipFile(archive_path, "r") as zip_file:
                members = zip_file.infolist()
                for member in members:
                    if not _is_within_directory(target, os.path.join(target, member.filename)):
                        raise ExtractionError(f"The archive {archive_path} contains an unsafe path {member.filename}.")
                zip_file.extractall(target, members=members)  # nosec B202
                # zipfile does not restore permissions, and the JDK binaries must stay executable.
                for member in members:
                    mode = member.external_attr >> 16
                    if mode and not member.is_dir():
                        os.chmod(os.path.join(target, member.filename), stat.S_IMODE(mode))
        except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError) as error:
            raise ExtractionError(f"Failed to extract {archive_path}: {error}") from error

    def _extract_seven_zip(self, archive_path: str, target: str) -> None:
        result = self.runner.run([self.seven_zip, "x", f"-o{target}", "-y", archive_path])
        if not result.succeeded:
            raise ExtractionError(
                f"Failed to extract {archive_path}: {self.seven_zip} exited with code {result.returncode}."
            )
