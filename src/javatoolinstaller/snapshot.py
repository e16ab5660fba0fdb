# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module detects the entries an external action adds to a directory.

None of the platform installer tools report what they installed, so the effect of a
privileged action is inferred by listing a well-known directory before and after it runs.
Entries are identified by name only; contents and timestamps are never inspected.
"""

import logging
import os
from dataclasses import dataclass

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectorySnapshot:
    """The immutable set of entry names of one directory at one instant."""

    #: The directory the snapshot was taken of.
    path: str

    #: The names of the immediate entries of the directory.
    entries: frozenset[str]


def take_snapshot(path: str) -> DirectorySnapshot:
    """List the immediate entries of ``path``.

    Parameters
    ----------
    path : str
        The directory to list.

    Returns
    -------
    DirectorySnapshot
        The snapshot of the directory.

    Raises
    ------
    OSError
        If the directory does not exist or cannot be read.
    """
    snapshot = DirectorySnapshot(path=path, entries=frozenset(os.listdir(path)))
    logger.debug("Snapshot of %s has %d entries.", path, len(snapshot.entries))
    return snapshot


def diff(before: DirectorySnapshot, after: DirectorySnapshot) -> frozenset[str]:
    """Return the entries present in ``after`` but absent from ``before``.

    Parameters
    ----------
    before : DirectorySnapshot
        The snapshot taken before the action.
    after : DirectorySnapshot
        The snapshot taken after the action.

    Returns
    -------
    frozenset[str]
        The names of the new entries.

    Raises
    ------
    ValueError
        If the snapshots were taken of different directories.
    """
    if os.path.normpath(before.path) != os.path.normpath(after.path):
        raise ValueError(f"Cannot compare snapshots of {before.path} and {after.path}.")
    return after.entries - before.entries


@dataclass(frozen=True)
class PendingChange:
    """The first half of a privileged action observed through a directory.

    A ``PendingChange`` holds the snapshot taken before the action so that it can only
    be compared with a later snapshot of the same directory.
    """

    before: DirectorySnapshot

    @property
    def root(self) -> str:
        """Return the observed directory."""
        return self.before.path


def begin_privileged_action(root: str) -> PendingChange:
    """Snapshot ``root`` before running an action whose effect is to be observed."""
    return PendingChange(before=take_snapshot(root))


def resolve(token: PendingChange) -> frozenset[str]:
    """Snapshot the directory of ``token`` again and return the entries that appeared since."""
    new_entries = diff(token.before, take_snapshot(token.root))
    logger.debug("New entries in %s: %s", token.root, sorted(new_entries))
    return new_entries
