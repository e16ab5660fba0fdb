# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module attaches and detaches disk images."""

import logging
from abc import ABC, abstractmethod

from javatoolinstaller.config.defaults import defaults
from javatoolinstaller.errors import ProcessExecutionError
from javatoolinstaller.process import ProcessRunner

logger: logging.Logger = logging.getLogger(__name__)


class DiskImageMounter(ABC):
    """This abstract class is used to implement disk image mounters."""

    @abstractmethod
    def attach(self, image_path: str) -> None:
        """Attach the disk image at ``image_path`` as a new volume.

        Raises
        ------
        ProcessExecutionError
            If the disk image cannot be attached.
        """

    @abstractmethod
    def detach(self, volume_path: str) -> bool:
        """Detach the volume mounted at ``volume_path``.

        Detaching is best-effort: failures are reported through the return value, never raised.

        Returns
        -------
        bool
            True if the volume was detached.
        """


class HdiutilMounter(DiskImageMounter):
    """Attach and detach disk images with the macOS ``hdiutil`` tool."""

    def __init__(self, runner: ProcessRunner, tool: str | None = None) -> None:
        self.runner = runner
        self.tool = tool or defaults.get("darwin", "hdiutil", fallback="hdiutil")

    def attach(self, image_path: str) -> None:
        logger.info("Attaching a disk image %s.", image_path)
        result = self.runner.run_privileged(self.tool, ["attach", image_path])
        if not result.succeeded:
            raise ProcessExecutionError(
                f"Failed to attach the disk image {image_path}: {self.tool} exited with code {result.returncode}."
            )

    def detach(self, volume_path: str) -> bool:
        logger.info("Detaching a disk image %s.", volume_path)
        try:
            result = self.runner.run_privileged(self.tool, ["detach", volume_path])
        except ProcessExecutionError as error:
            logger.warning("Failed to detach the disk image at %s: %s", volume_path, error)
            return False

        if not result.succeeded:
            logger.warning(
                "Failed to detach the disk image at %s: %s exited with code %s.",
                volume_path,
                self.tool,
                result.returncode,
            )
            return False
        return True
