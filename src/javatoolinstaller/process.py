# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module runs external programs, optionally with elevated privileges."""

import logging
import shutil
import subprocess  # nosec B404
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from javatoolinstaller.config.defaults import defaults
from javatoolinstaller.environment_variables import get_patched_env
from javatoolinstaller.errors import ProcessExecutionError

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """The outcome of an external program that ran to completion."""

    #: The full command line that was executed.
    args: list[str]

    #: The exit status of the program.
    returncode: int

    #: The decoded standard output.
    stdout: str = ""

    #: The decoded standard error.
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        """Return True if the program exited with status 0."""
        return self.returncode == 0


class ProcessRunner:
    """Run external programs and report their exit status.

    On Windows the current user is expected to be privileged already, so privileged tools
    are invoked directly. On every other platform the tool's absolute location is resolved
    on the search path and the tool is run through the privilege wrapper (``sudo``).
    """

    def __init__(
        self,
        platform_name: str | None = None,
        privilege_wrapper: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize instance.

        Parameters
        ----------
        platform_name : str | None
            The platform identifier as reported by ``sys.platform``. The current platform if None.
        privilege_wrapper : str | None
            The privilege-escalation program. Read from ``defaults.ini`` if None.
        timeout : float | None
            The timeout in seconds for each unprivileged command. Read from ``defaults.ini`` if None.
        """
        self.platform_name = platform_name or sys.platform
        self.privilege_wrapper = privilege_wrapper or defaults.get("privilege", "wrapper", fallback="sudo")
        self.timeout = timeout or defaults.getfloat("process", "timeout", fallback=900)

    def which(self, tool: str) -> str:
        """Return the absolute path of ``tool`` on the search path.

        Raises
        ------
        ProcessExecutionError
            If ``tool`` cannot be found.
        """
        tool_path = shutil.which(tool)
        if not tool_path:
            raise ProcessExecutionError(f"Unable to locate executable file: {tool}.")
        return tool_path

    def privileged_command(self, tool: str, args: Sequence[str]) -> list[str]:
        """Return the command line running ``tool`` with elevated privileges."""
        if self.platform_name == "win32":
            return [tool, *args]
        return [self.privilege_wrapper, self.which(tool), *args]

    def run(self, cmd: Sequence[str], cwd: str | None = None) -> CommandResult:
        """Run ``cmd`` and wait for it to exit within the configured timeout.

        A non-zero exit status is not an error here; callers decide what it means.

        Parameters
        ----------
        cmd : Sequence[str]
            The program and its arguments.
        cwd : str | None
            The working directory of the program.

        Returns
        -------
        CommandResult
            The exit status and output of the program.

        Raises
        ------
        ProcessExecutionError
            If the program cannot be launched or does not exit in time.
        """
        return self._run(cmd, cwd=cwd, timeout=self.timeout)

    def run_privileged(self, tool: str, args: Sequence[str]) -> CommandResult:
        """Run ``tool`` with elevated privileges and wait for it to exit.

        Privileged steps mount volumes and install packages, so they are never killed
        part-way through: no timeout applies.

        Raises
        ------
        ProcessExecutionError
            If the program cannot be launched.
        """
        return self._run(self.privileged_command(tool, args), cwd=None, timeout=None)

    def _run(self, cmd: Sequence[str], cwd: str | None, timeout: float | None) -> CommandResult:
        args = list(cmd)
        logger.debug("Running %s", " ".join(args))
        try:
            result = subprocess.run(  # nosec B603
                args,
                capture_output=True,
                cwd=cwd,
                # The exit status is checked by the callers.
                check=False,
                timeout=timeout,
                env=get_patched_env({"LC_ALL": "C"}),
            )
        except subprocess.TimeoutExpired as error:
            raise ProcessExecutionError(f"{args[0]} did not exit within {timeout} seconds.") from error
        except OSError as error:
            raise ProcessExecutionError(f"Unable to run {args[0]}: {error}") from error

        stdout = result.stdout.decode("utf-8", errors="replace")
        stderr = result.stderr.decode("utf-8", errors="replace")
        for line in stdout.splitlines():
            logger.debug("[%s] %s", args[0], line)
        if result.returncode != 0:
            logger.debug("%s exited with code %s: %s", args[0], result.returncode, stderr.strip())

        return CommandResult(args=args, returncode=result.returncode, stdout=stdout, stderr=stderr)
