# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This is the main entrypoint to run the Java tool installer."""

import argparse
import logging
import os
import sys
from importlib import metadata as importlib_metadata

from javatoolinstaller.cancellation import CancellationToken, install_signal_handlers
from javatoolinstaller.config.defaults import create_defaults, load_defaults
from javatoolinstaller.config.task_inputs import JdkSource, resolve_task_inputs
from javatoolinstaller.errors import ConfigurationError, InstallCancelledError, JavaToolInstallerError
from javatoolinstaller.installers.strategy import select_platform_support
from javatoolinstaller.orchestrator import InstallerPaths, InstallOrchestrator
from javatoolinstaller.pipeline_commands import PipelinePublisher, TaskResult
from javatoolinstaller.process import ProcessRunner
from javatoolinstaller.task import get_java

logger: logging.Logger = logging.getLogger(__name__)

# The os.EX_* constants are only defined on Unix.
EX_OK = getattr(os, "EX_OK", 0)
EX_USAGE = getattr(os, "EX_USAGE", 64)
EX_SOFTWARE = getattr(os, "EX_SOFTWARE", 70)
EX_TEMPFAIL = getattr(os, "EX_TEMPFAIL", 75)


def install(install_args: argparse.Namespace, publisher: PipelinePublisher | None = None) -> int:
    """Acquire the requested JDK and report the task result.

    Returns
    -------
    int
        Returns EX_OK if successful or the corresponding error code on failure.
    """
    publisher = publisher or PipelinePublisher()
    overrides = {
        "versionSpec": install_args.version_spec,
        "jdkArchitectureOption": install_args.architecture,
        "jdkSourceOption": install_args.source,
        "jdkDestinationDirectory": install_args.destination,
        "cleanDestinationDirectory": "true" if install_args.clean_destination else None,
        "azureResourceManagerEndpoint": install_args.azure_endpoint,
        "azureStorageAccountName": install_args.azure_account,
        "azureContainerName": install_args.azure_container,
        "azureCommonVirtualFile": install_args.azure_file,
        "jdkFile": install_args.jdk_file,
    }
    try:
        inputs = resolve_task_inputs(overrides)
    except ConfigurationError as error:
        logger.error(error)
        publisher.set_result(TaskResult.FAILED, str(error))
        return EX_USAGE

    token = CancellationToken()
    install_signal_handlers(token)
    runner = ProcessRunner()
    orchestrator = InstallOrchestrator(
        platform=select_platform_support(runner.platform_name, runner),
        paths=InstallerPaths.from_defaults(),
        cancellation=token,
    )

    try:
        get_java(inputs, orchestrator, publisher)
    except InstallCancelledError as error:
        logger.error(error)
        publisher.set_result(TaskResult.FAILED, str(error))
        return EX_TEMPFAIL
    except ConfigurationError as error:
        logger.error(error)
        publisher.set_result(TaskResult.FAILED, str(error))
        return EX_USAGE
    except (JavaToolInstallerError, OSError) as error:
        logger.error(error)
        publisher.set_result(TaskResult.FAILED, str(error))
        return EX_SOFTWARE

    publisher.set_result(TaskResult.SUCCEEDED, "The JDK is installed.")
    return EX_OK


def perform_action(action_args: argparse.Namespace) -> None:
    """Perform the indicated action of the Java tool installer."""
    match action_args.action:
        case "dump-defaults":
            # Create the defaults.ini file in the output dir and exit.
            output_dir = action_args.output_dir or os.getcwd()
            if not create_defaults(output_dir, os.getcwd()):
                sys.exit(EX_SOFTWARE)
            sys.exit(EX_OK)

        case "install":
            sys.exit(install(action_args))

        case _:
            logger.error("The Java tool installer does not support command option %s.", action_args.action)
            sys.exit(EX_USAGE)


def main(argv: list[str] | None = None) -> None:
    """Execute the Java tool installer as a standalone command-line tool.

    Parameters
    ----------
    argv: list[str] | None
        Command-line arguments.
        If ``argv`` is ``None``, argparse automatically looks at ``sys.argv``.
        Hence, we set ``argv = None`` by default.
    """
    main_parser = argparse.ArgumentParser(prog="javatoolinstaller")

    main_parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {importlib_metadata.version('javatoolinstaller')}",
        help="Show the version number and exit",
    )

    main_parser.add_argument(
        "-v",
        "--verbose",
        help="Run with more debug logs",
        action="store_true",
    )

    main_parser.add_argument(
        "-o",
        "--output-dir",
        default="",
        help="The directory to store debug.log and dumped defaults in",
    )

    main_parser.add_argument(
        "-dp",
        "--defaults-path",
        default="",
        help="The path to the defaults configuration file.",
    )

    # Add sub parsers for each action.
    sub_parser = main_parser.add_subparsers(dest="action", help="Run javatoolinstaller <action> --help for help")

    install_parser = sub_parser.add_parser(
        name="install",
        description=(
            "Acquire a JDK and publish it as JAVA_HOME. Inputs not given here are read from the "
            + "INPUT_<NAME> variables of the build agent."
        ),
    )

    install_parser.add_argument("--version-spec", help="The JDK version to acquire, e.g. 11.")
    install_parser.add_argument("--architecture", help="The JDK architecture, e.g. x64.")
    install_parser.add_argument(
        "--source",
        choices=[source.value for source in JdkSource],
        help="Where the JDK is obtained from.",
    )
    install_parser.add_argument(
        "--destination",
        help="The directory archives are downloaded to and extracted in.",
    )
    install_parser.add_argument(
        "--clean-destination",
        action="store_true",
        help="Delete the contents of the destination directory first.",
    )
    install_parser.add_argument("--jdk-file", help="The path to a local JDK archive.")
    install_parser.add_argument("--azure-endpoint", help="The blob service endpoint of the storage account.")
    install_parser.add_argument("--azure-account", help="The storage account name.")
    install_parser.add_argument("--azure-container", help="The blob container name.")
    install_parser.add_argument(
        "--azure-file",
        help=(
            "The path of the JDK archive inside the container. "
            + "The shared access signature is read from the INPUT_AZURESASTOKEN variable."
        ),
    )

    # Dump the default values.
    sub_parser.add_parser(name="dump-defaults", description="Dumps the defaults.ini file to the output directory.")

    args = main_parser.parse_args(argv)

    if not args.action:
        main_parser.print_help()
        sys.exit(EX_USAGE)

    if args.verbose:
        log_level = logging.DEBUG
        log_format = "%(asctime)s [%(name)s:%(funcName)s:%(lineno)d] [%(levelname)s] %(message)s"
    else:
        log_level = logging.INFO
        log_format = "%(asctime)s [%(levelname)s] %(message)s"

    st_handler = logging.StreamHandler(sys.stdout)
    logging.basicConfig(format=log_format, handlers=[st_handler], force=True, level=log_level)

    if args.output_dir:
        if os.path.isfile(args.output_dir):
            logger.error("The output path %s is a file. Exiting ...", args.output_dir)
            sys.exit(EX_USAGE)
        os.makedirs(args.output_dir, exist_ok=True)

        # Keep the full log in debug.log and print only our own logs.
        debug_log_path = os.path.join(args.output_dir, "debug.log")
        log_file_handler = logging.FileHandler(debug_log_path, "w")
        log_file_handler.setFormatter(logging.Formatter(log_format))
        logging.getLogger().removeHandler(st_handler)
        logging.getLogger().addHandler(log_file_handler)
        logging.getLogger("javatoolinstaller").addHandler(st_handler)
        logger.info("The logs will be stored in %s", debug_log_path)

    if not load_defaults(args.defaults_path):
        logger.error("Exiting because the defaults configuration could not be loaded.")
        sys.exit(EX_USAGE)

    perform_action(args)


if __name__ == "__main__":
    main()
