# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module resolves the inputs of the Java tool installer task.

Inputs are taken from the command line first and fall back to the variables the
build agent exposes for task inputs (``INPUT_<NAME>``, upper-cased).
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from javatoolinstaller.config.defaults import defaults
from javatoolinstaller.errors import ConfigurationError

logger: logging.Logger = logging.getLogger(__name__)


class JdkSource(str, Enum):
    """The locations a JDK can be obtained from."""

    PRE_INSTALLED = "PreInstalled"
    AZURE_STORAGE = "AzureStorage"
    LOCAL_DIRECTORY = "LocalDirectory"


@dataclass(frozen=True)
class AzureStorageDescriptor:
    """The blob storage location of a JDK archive."""

    #: The resource manager endpoint of the storage account.
    endpoint: str

    #: The storage account name.
    account: str

    #: The blob container name.
    container: str

    #: The path of the archive inside the container, used as a blob name pattern.
    blob_pattern: str

    #: An optional shared access signature appended to every request.
    sas_token: str = field(default="", repr=False)


@dataclass(frozen=True)
class TaskInputs:
    """The value object handed to the installer by the input resolution layer."""

    #: The requested JDK version, e.g. ``11``.
    version_spec: str

    #: The requested architecture, e.g. ``x64``.
    architecture: str

    #: Where the JDK is obtained from.
    source: JdkSource

    #: The directory archives are downloaded to and extracted in.
    destination: str

    #: Whether the destination directory is emptied before anything else happens.
    clean_destination: bool = False

    #: The blob storage descriptor, only set for ``JdkSource.AZURE_STORAGE``.
    azure: AzureStorageDescriptor | None = None

    #: The local archive path, only set for ``JdkSource.LOCAL_DIRECTORY``.
    jdk_file: str | None = None

    @property
    def extended_java_home(self) -> str:
        """Return the name of the variable parameterized by version and architecture."""
        prefix = defaults.get("publish", "extended_prefix", fallback="JAVA_HOME")
        return f"{prefix}_{self.version_spec}_{self.architecture}"


def _input_variable_name(name: str) -> str:
    return "INPUT_" + name.replace(" ", "_").upper()


def get_input(
    name: str,
    overrides: Mapping[str, str | None],
    env: Mapping[str, str],
    required: bool = False,
) -> str:
    """Return the value of a task input.

    Parameters
    ----------
    name : str
        The input name as declared by the task, e.g. ``versionSpec``.
    overrides : Mapping[str, str | None]
        Values given on the command line. ``None`` and empty values are ignored.
    env : Mapping[str, str]
        The environment holding the agent's ``INPUT_<NAME>`` variables.
    required : bool
        If True, a missing value is an error.

    Returns
    -------
    str
        The stripped input value, or an empty string if it is not set and not required.

    Raises
    ------
    ConfigurationError
        If the input is required but not set.
    """
    value = overrides.get(name) or env.get(_input_variable_name(name), "")
    value = value.strip()
    if required and not value:
        raise ConfigurationError(f"Input required: {name}")
    return value


def resolve_task_inputs(
    overrides: Mapping[str, str | None],
    env: Mapping[str, str] | None = None,
) -> TaskInputs:
    """Build the task inputs from command-line overrides and the agent environment.

    Parameters
    ----------
    overrides : Mapping[str, str | None]
        The command-line values keyed by task input name.
    env : Mapping[str, str] | None
        The environment to read ``INPUT_<NAME>`` variables from. ``os.environ`` by default.

    Returns
    -------
    TaskInputs
        The resolved inputs.

    Raises
    ------
    ConfigurationError
        If a required input is missing or the source option is unknown.
    """
    env = os.environ if env is None else env

    source_option = get_input("jdkSourceOption", overrides, env, required=True)
    try:
        source = JdkSource(source_option)
    except ValueError as error:
        supported = ", ".join(src.value for src in JdkSource)
        raise ConfigurationError(
            f"Unsupported JDK source option {source_option}. Supported options: {supported}."
        ) from error

    azure = None
    jdk_file = None
    match source:
        case JdkSource.AZURE_STORAGE:
            azure = AzureStorageDescriptor(
                endpoint=get_input("azureResourceManagerEndpoint", overrides, env, required=True),
                account=get_input("azureStorageAccountName", overrides, env, required=True),
                container=get_input("azureContainerName", overrides, env, required=True),
                blob_pattern=get_input("azureCommonVirtualFile", overrides, env, required=True),
                sas_token=get_input("azureSasToken", overrides, env),
            )
        case JdkSource.LOCAL_DIRECTORY:
            jdk_file = get_input("jdkFile", overrides, env, required=True)

    inputs = TaskInputs(
        version_spec=get_input("versionSpec", overrides, env, required=True),
        architecture=get_input("jdkArchitectureOption", overrides, env, required=True),
        source=source,
        destination=get_input("jdkDestinationDirectory", overrides, env, required=True),
        clean_destination=get_input("cleanDestinationDirectory", overrides, env).upper() == "TRUE",
        azure=azure,
        jdk_file=jdk_file,
    )
    logger.debug("Resolved task inputs: %s", inputs)
    return inputs
