# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module publishes results to the build agent through logging commands.

The agent reads ``##vso[<area>.<action> <properties>]<message>`` lines from the task's
standard output. Variables set this way become available to the subsequent steps.
"""

import logging
import os
import sys
from collections.abc import Mapping, MutableMapping
from enum import Enum
from typing import TextIO

logger: logging.Logger = logging.getLogger(__name__)


class TaskResult(str, Enum):
    """The result of a task as understood by the agent."""

    SUCCEEDED = "Succeeded"
    FAILED = "Failed"


def escape_data(value: str) -> str:
    """Escape the message part of a logging command.

    >>> escape_data("100%\\ndone")
    '100%AZP25%0Adone'
    """
    return value.replace("%", "%AZP25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    """Escape a property value of a logging command.

    >>> escape_property("a;b]c")
    'a%3Bb%5Dc'
    """
    return escape_data(value).replace("]", "%5D").replace(";", "%3B")


def format_command(command: str, properties: Mapping[str, str] | None = None, message: str = "") -> str:
    """Return the logging command line for ``command``.

    >>> format_command("task.setvariable", {"variable": "JAVA_HOME"}, "/opt/jdk")
    '##vso[task.setvariable variable=JAVA_HOME;]/opt/jdk'
    >>> format_command("task.prependpath", message="/opt/jdk/bin")
    '##vso[task.prependpath]/opt/jdk/bin'
    """
    line = f"##vso[{command}"
    if properties:
        line += " " + "".join(f"{key}={escape_property(value)};" for key, value in properties.items())
    return f"{line}]{escape_data(message)}"


class PipelinePublisher:
    """Publish variables, search path entries and the task result.

    Every change is also applied to ``env`` so that it is visible to the current process.
    """

    def __init__(self, stream: TextIO | None = None, env: MutableMapping[str, str] | None = None) -> None:
        self.stream = stream or sys.stdout
        self.env = os.environ if env is None else env

    def _emit(self, line: str) -> None:
        self.stream.write(line + os.linesep)
        self.stream.flush()

    def set_variable(self, name: str, value: str) -> None:
        """Set the pipeline variable ``name`` to ``value``."""
        self._emit(format_command("task.setvariable", {"variable": name, "issecret": "false"}, value))
        self.env[name] = value

    def prepend_path(self, path: str) -> None:
        """Prepend ``path`` to the executable search path of the subsequent steps."""
        self._emit(format_command("task.prependpath", message=path))
        current = self.env.get("PATH", "")
        self.env["PATH"] = path + os.pathsep + current if current else path

    def set_result(self, result: TaskResult, message: str) -> None:
        """Report the single pass or fail result of the task."""
        self._emit(format_command("task.complete", {"result": result.value}, message))
