# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""Fixtures for tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from javatoolinstaller.config.defaults import defaults, load_defaults

# We need to pass fixture names as arguments to maintain an order.
# pylint: disable=redefined-outer-name


@pytest.fixture()
def test_dir() -> Path:
    """Set the root test_dir path.

    Returns
    -------
    Path
        The root path to the test directory.
    """
    return Path(__file__).parent


@pytest.fixture(autouse=True)
def setup_test() -> Iterator[None]:
    """Load the packaged ``defaults.ini`` before each test and clear it afterwards."""
    load_defaults("")
    yield
    defaults.clear()


@pytest.fixture()
def darwin_roots(tmp_path: Path) -> tuple[Path, Path]:
    """Create fake volumes and JDK roots.

    Returns
    -------
    tuple[Path, Path]
        The volumes root and the JDK root.
    """
    volumes_root = tmp_path.joinpath("Volumes")
    jdk_root = tmp_path.joinpath("JavaVirtualMachines")
    volumes_root.mkdir()
    jdk_root.mkdir()
    return volumes_root, jdk_root
