# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""Helper functions related to environment variables."""

import os
from collections.abc import Mapping


def get_patched_env(
    patch: Mapping[str, str | None],
    _env: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Return a copy of ``os.environ`` updated according to ``patch``.

    This function does not modify ``os.environ``.

    Parameters
    ----------
    patch : Mapping[str, str | None]
        A mapping in which each key is an environment variable and each value is the
        value to set. If a value is ``None``, the environment variable is "unset".
    _env : Mapping[str, str] | None
        The environment being updated. ``os.environ`` by default.

    Returns
    -------
    dict[str, str]
        The dictionary containing the patched environment variables.
    """
    env = os.environ if _env is None else _env

    copied_env = dict(env)

    for var, value in patch.items():
        if value is None:
            copied_env.pop(var, None)
        else:
            copied_env[var] = value

    return copied_env


def get_variable(name: str, _env: Mapping[str, str] | None = None) -> str | None:
    """Return the value of a pipeline variable, or None if it is not set.

    The build agent exposes pipeline variables to tasks as environment variables whose
    names are upper-cased with ``.`` and spaces replaced by ``_``. Both the raw and the
    normalized names are looked up.

    Parameters
    ----------
    name : str
        The variable name, e.g. ``JAVA_HOME_11_X64``.
    _env : Mapping[str, str] | None
        The environment to read from. ``os.environ`` by default.

    Returns
    -------
    str | None
        The variable value, or None if it is unset.
    """
    env = os.environ if _env is None else _env
    normalized = name.replace(".", "_").replace(" ", "_").upper()
    for candidate in (name, normalized):
        if candidate in env:
            return env[candidate]
    return None
