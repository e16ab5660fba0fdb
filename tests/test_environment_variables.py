# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""Tests for helper functions related to environment variables."""

import pytest

from javatoolinstaller.environment_variables import get_patched_env, get_variable


@pytest.mark.parametrize(
    ("before", "patch", "after"),
    [
        pytest.param(
            {"PATH": "/usr/local/bin"},
            {},
            {"PATH": "/usr/local/bin"},
            id="patch is empty",
        ),
        pytest.param(
            {"PATH": "/usr/local/bin"},
            {"LC_ALL": "C"},
            {
                "PATH": "/usr/local/bin",
                "LC_ALL": "C",
            },
            id="patch adding a variable",
        ),
        pytest.param(
            {"LC_ALL": "en_US.UTF-8"},
            {"LC_ALL": "C"},
            {"LC_ALL": "C"},
            id="patch overriding a variable",
        ),
        pytest.param(
            {"LC_ALL": "C"},
            {"LC_ALL": None},
            {},
            id="patch removing a variable",
        ),
    ],
)
def test_patched_env(
    before: dict[str, str],
    patch: dict[str, str | None],
    after: dict[str, str],
) -> None:
    """Tests for the ``get_patched_env`` helper function."""
    env = dict(before)

    assert get_patched_env(patch, env) == after
    assert env == before


@pytest.mark.parametrize(
    ("name", "env", "expected"),
    [
        pytest.param("JAVA_HOME_11_X64", {"JAVA_HOME_11_X64": "/jdk"}, "/jdk", id="exact name"),
        pytest.param("JAVA_HOME_11_x64", {"JAVA_HOME_11_X64": "/jdk"}, "/jdk", id="upper-cased by the agent"),
        pytest.param("java.home", {"JAVA_HOME": "/jdk"}, "/jdk", id="dots replaced by the agent"),
        pytest.param("JAVA_HOME_11_X64", {}, None, id="unset"),
    ],
)
def test_get_variable(name: str, env: dict[str, str], expected: str | None) -> None:
    """Test looking up pipeline variables in the environment."""
    assert get_variable(name, env) == expected
