# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module looks up JDKs in the build agent's tool cache.

The cache is laid out as ``<tools directory>/<tool>/<version>/<arch>``. A version only
counts as cached when the ``<arch>.complete`` marker next to its directory exists.
"""

import logging
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from packaging.version import InvalidVersion, Version

from javatoolinstaller.config.defaults import defaults

logger: logging.Logger = logging.getLogger(__name__)

#: The environment variable pointing to the agent's tool cache.
TOOLS_DIRECTORY_VARIABLE = "AGENT_TOOLSDIRECTORY"


@dataclass(frozen=True)
class CachedTool:
    """A tool version found in the cache."""

    version: str
    path: str


def get_cache_root(env: Mapping[str, str] | None = None) -> str | None:
    """Return the agent's tool cache directory, or None if it is not configured."""
    env = os.environ if env is None else env
    return env.get(TOOLS_DIRECTORY_VARIABLE) or None


def find_local_tool_versions(cache_root: str, tool_name: str, arch: str) -> list[str]:
    """Return the complete versions of ``tool_name`` cached for ``arch``."""
    tool_dir = os.path.join(cache_root, tool_name)
    if not os.path.isdir(tool_dir):
        return []

    versions = []
    for version in os.listdir(tool_dir):
        version_dir = os.path.join(tool_dir, version)
        if os.path.isdir(os.path.join(version_dir, arch)) and os.path.isfile(
            os.path.join(version_dir, f"{arch}.complete")
        ):
            versions.append(version)
    return versions


def _matches(version: Version, spec: Version, explicit: bool) -> bool:
    if explicit:
        return version == spec
    return version.release[: len(spec.release)] == spec.release


def evaluate_versions(versions: Iterable[str], version_spec: str) -> str | None:
    """Return the highest version satisfying ``version_spec``.

    A spec naming fewer than three components matches every version starting with them,
    so ``11`` matches ``11.0.2``. A spec with three or more components must match exactly.

    >>> evaluate_versions(["11.0.2", "11.0.10", "17.0.1"], "11")
    '11.0.10'
    >>> evaluate_versions(["11.0.2"], "8") is None
    True
    """
    try:
        spec = Version(version_spec)
    except InvalidVersion:
        logger.debug("The version spec %s is not a valid version. Skipping the tool cache.", version_spec)
        return None
    explicit = len(spec.release) >= 3

    matches = []
    for raw in versions:
        try:
            version = Version(raw)
        except InvalidVersion:
            logger.debug("Ignoring cached tool version %s.", raw)
            continue
        if _matches(version, spec, explicit):
            matches.append((version, raw))

    if not matches:
        return None
    return max(matches)[1]


def find_cached_jdk(
    version_spec: str,
    arch: str,
    env: Mapping[str, str] | None = None,
) -> CachedTool | None:
    """Return the cached JDK satisfying ``version_spec`` for ``arch``, or None.

    Parameters
    ----------
    version_spec : str
        The requested version.
    arch : str
        The requested architecture.
    env : Mapping[str, str] | None
        The environment holding ``AGENT_TOOLSDIRECTORY``. ``os.environ`` by default.

    Returns
    -------
    CachedTool | None
        The cached JDK, or None if the cache has no match or is not configured.
    """
    cache_root = get_cache_root(env)
    if not cache_root:
        logger.debug("%s is not set. Skipping the tool cache.", TOOLS_DIRECTORY_VARIABLE)
        return None

    tool_name = defaults.get("tool_cache", "tool_name", fallback="Java")
    arch = arch.lower()
    version = evaluate_versions(find_local_tool_versions(cache_root, tool_name, arch), version_spec)
    if version is None:
        return None
    return CachedTool(version=version, path=os.path.join(cache_root, tool_name, version, arch))
