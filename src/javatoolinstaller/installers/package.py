# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module runs the macOS package installer."""

import logging
from abc import ABC, abstractmethod

from javatoolinstaller.config.defaults import defaults
from javatoolinstaller.process import CommandResult, ProcessRunner

logger: logging.Logger = logging.getLogger(__name__)


class PackageInstaller(ABC):
    """This abstract class is used to implement package installers."""

    @abstractmethod
    def install(self, package_path: str) -> CommandResult:
        """Install the package at ``package_path``.

        The exit status of the installer does not decide whether the installation succeeded:
        that is judged from the JDK root afterwards.

        Returns
        -------
        CommandResult
            The outcome of the installer program.

        Raises
        ------
        ProcessExecutionError
            If the installer program cannot be launched at all.
        """


class MacOSPackageInstaller(PackageInstaller):
    """Install ``.pkg`` files with the macOS ``installer`` program."""

    def __init__(self, runner: ProcessRunner, tool: str | None = None, target: str | None = None) -> None:
        self.runner = runner
        self.tool = tool or defaults.get("darwin", "installer", fallback="installer")
        self.target = target or defaults.get("darwin", "package_target", fallback="/")

    def install(self, package_path: str) -> CommandResult:
        logger.info("Installing JDK from %s.", package_path)
        result = self.runner.run_privileged(self.tool, ["-package", package_path, "-target", self.target])
        if not result.succeeded:
            # Some installer versions exit non-zero after a successful install.
            logger.warning(
                "The package installer exited with code %s for %s: %s",
                result.returncode,
                package_path,
                result.stderr.strip(),
            )
        return result
