# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""Tests for publishing results to the build agent."""

import io
import os

import pytest

from javatoolinstaller.pipeline_commands import PipelinePublisher, TaskResult, escape_data, escape_property


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("C:\\jdk", "C:\\jdk"),
        ("50%", "50%AZP25"),
        ("line\r\nbreak", "line%0D%0Abreak"),
    ],
)
def test_escape_data(value: str, expected: str) -> None:
    """Test escaping command messages."""
    assert escape_data(value) == expected


def test_escape_property() -> None:
    """Test that property values also escape the property delimiters."""
    assert escape_property("a]b;c%") == "a%5Db%3Bc%AZP25"


def test_publisher() -> None:
    """Test the commands emitted for a resolved JDK."""
    stream = io.StringIO()
    env = {"PATH": "/usr/bin"}
    publisher = PipelinePublisher(stream, env)

    publisher.set_variable("JAVA_HOME", "/opt/jdk-11")
    publisher.prepend_path("/opt/jdk-11/bin")
    publisher.set_result(TaskResult.SUCCEEDED, "The JDK is installed.")

    assert stream.getvalue().splitlines() == [
        "##vso[task.setvariable variable=JAVA_HOME;issecret=false;]/opt/jdk-11",
        "##vso[task.prependpath]/opt/jdk-11/bin",
        "##vso[task.complete result=Succeeded;]The JDK is installed.",
    ]
    assert env == {"PATH": "/opt/jdk-11/bin" + os.pathsep + "/usr/bin", "JAVA_HOME": "/opt/jdk-11"}


def test_publisher_empty_path() -> None:
    """Test prepending to an empty search path."""
    env: dict[str, str] = {}
    PipelinePublisher(io.StringIO(), env).prepend_path("/opt/jdk-11/bin")
    assert env == {"PATH": "/opt/jdk-11/bin"}
