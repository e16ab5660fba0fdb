# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""A process runner that records commands instead of running them."""

from collections.abc import Sequence

from javatoolinstaller.errors import ProcessExecutionError
from javatoolinstaller.process import CommandResult, ProcessRunner


class RecordingRunner(ProcessRunner):
    """Record commands and answer them with a fixed exit status."""

    def __init__(self, returncode: int = 0, fail_to_launch: bool = False) -> None:
        super().__init__(platform_name="win32", timeout=5)
        self.returncode = returncode
        self.fail_to_launch = fail_to_launch
        self.commands: list[list[str]] = []
        self.timeouts: list[float | None] = []

    def _run(self, cmd: Sequence[str], cwd: str | None, timeout: float | None) -> CommandResult:
        self.commands.append(list(cmd))
        self.timeouts.append(timeout)
        if self.fail_to_launch:
            raise ProcessExecutionError(f"Unable to run {cmd[0]}.")
        return CommandResult(args=list(cmd), returncode=self.returncode, stderr="error")
