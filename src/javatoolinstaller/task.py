# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module acquires a JDK from the requested source and publishes its location."""

import functools
import logging
import os
import shutil
import time
from collections.abc import Callable, Mapping

from javatoolinstaller.azure_blob import AzureStorageArtifactDownloader, build_file_path
from javatoolinstaller.config.defaults import defaults
from javatoolinstaller.config.task_inputs import AzureStorageDescriptor, JdkSource, TaskInputs
from javatoolinstaller.environment_variables import get_variable
from javatoolinstaller.errors import ConfigurationError, PreinstalledMissingError
from javatoolinstaller.orchestrator import InstallOrchestrator
from javatoolinstaller.pipeline_commands import PipelinePublisher
from javatoolinstaller.tool_cache import find_cached_jdk

logger: logging.Logger = logging.getLogger(__name__)


def clean_destination(destination: str) -> None:
    """Delete the contents of ``destination`` but leave the directory in place."""
    if not os.path.isdir(destination):
        return

    logger.info("Cleaning destination directory %s.", destination)
    for item in os.listdir(destination):
        item_path = os.path.join(destination, item)
        if os.path.isdir(item_path) and not os.path.islink(item_path):
            shutil.rmtree(item_path)
        else:
            os.remove(item_path)


def _download_from_azure(
    inputs: TaskInputs,
    orchestrator: InstallOrchestrator,
    downloader_factory: Callable[[AzureStorageDescriptor], AzureStorageArtifactDownloader],
) -> str:
    if inputs.azure is None:
        raise ConfigurationError("The blob storage location of the JDK is not set.")

    logger.info("Retrieving the JDK from Azure blob storage.")
    file_name_and_path = inputs.azure.blob_pattern
    # Fail on an archive this platform cannot install before anything is downloaded.
    orchestrator.classify(file_name_and_path)
    orchestrator.cancellation.raise_if_cancelled("downloading the JDK")

    downloader = downloader_factory(inputs.azure)
    downloader.download_artifacts(inputs.destination, "*" + file_name_and_path)

    settle_delay = defaults.getfloat("remote", "settle_delay", fallback=0)
    if settle_delay > 0:
        time.sleep(settle_delay)

    return build_file_path(inputs.destination, file_name_and_path)


def get_java(
    inputs: TaskInputs,
    orchestrator: InstallOrchestrator,
    publisher: PipelinePublisher,
    env: Mapping[str, str] | None = None,
    downloader_factory: Callable[[AzureStorageDescriptor], AzureStorageArtifactDownloader] = (
        AzureStorageArtifactDownloader
    ),
) -> str:
    """Acquire the JDK described by ``inputs`` and publish its home.

    The tool cache is looked up first. Otherwise the JDK comes from the source in ``inputs``.
    Variables are only published once the JDK home is fully resolved.

    Parameters
    ----------
    inputs : TaskInputs
        The task inputs.
    orchestrator : InstallOrchestrator
        The orchestrator installing archives.
    publisher : PipelinePublisher
        The publisher of the resulting variables.
    env : Mapping[str, str] | None
        The environment holding the agent variables. ``os.environ`` by default.
    downloader_factory : Callable[[AzureStorageDescriptor], AzureStorageArtifactDownloader]
        Create the downloader for blob storage sources.

    Returns
    -------
    str
        The JDK home.

    Raises
    ------
    JavaToolInstallerError
        If the JDK cannot be acquired.
    """
    env = os.environ if env is None else env
    extended_java_home = inputs.extended_java_home

    logger.debug("Trying to get the tool from the local cache first.")
    cached = find_cached_jdk(inputs.version_spec, inputs.architecture, env)

    if inputs.clean_destination:
        clean_destination(inputs.destination)

    if cached is not None:
        logger.info("Resolved the JDK %s from the tool cache.", cached.version)
        jdk_directory = cached.path
    elif inputs.source is JdkSource.PRE_INSTALLED:
        preinstalled = get_variable(extended_java_home, env)
        if not preinstalled:
            raise PreinstalledMissingError(
                f"Java {inputs.version_spec} is not preinstalled on this agent: {extended_java_home} is not set."
            )
        logger.info("Use preinstalled JDK from %s.", preinstalled)
        jdk_directory = preinstalled
    else:
        if inputs.source is JdkSource.AZURE_STORAGE:
            source_file = _download_from_azure(inputs, orchestrator, downloader_factory)
        else:
            if not inputs.jdk_file:
                raise ConfigurationError("The path to the JDK archive is not set.")
            logger.info("Retrieving the JDK from local path %s.", inputs.jdk_file)
            source_file = inputs.jdk_file

        outcome = orchestrator.install(
            source_file,
            inputs.destination,
            version_spec=inputs.version_spec,
            extended_java_home=extended_java_home,
            preinstalled_lookup=functools.partial(get_variable, _env=env),
        )
        jdk_directory = outcome.java_home

    java_home_variable = defaults.get("publish", "java_home_variable", fallback="JAVA_HOME")
    bin_folder = defaults.get("extractor", "bin_folder", fallback="bin")
    logger.info("Setting %s to %s.", java_home_variable, jdk_directory)
    logger.info("Setting %s to %s.", extended_java_home, jdk_directory)
    publisher.set_variable(java_home_variable, jdk_directory)
    publisher.set_variable(extended_java_home, jdk_directory)
    publisher.prepend_path(os.path.join(jdk_directory, bin_folder))
    return jdk_directory
