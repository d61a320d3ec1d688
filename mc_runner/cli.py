"""mc-runner command line entry point.

Usage:
    mc-runner                      # 1GiB..16GiB heap, current directory
    mc-runner --min 2GiB --max 8GiB
    mc-runner --dir /srv/minecraft --web
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ByteSize, TypeAdapter, ValidationError

from mc_runner import jar_selector, java_locator, launcher
from mc_runner.keep_awake import prevent_sleep
from mc_runner.log_setup import configure_logging
from mc_runner.models import (
    JavaNotFoundError,
    LauncherError,
    NoJarFoundError,
    SelectionKind,
    WorkingDirectoryError,
)

logger = logging.getLogger(__name__)

_BYTE_SIZE = TypeAdapter(ByteSize)


def parse_size(value: str) -> ByteSize:
    """argparse type for human sizes such as 512MiB or 4GB."""
    try:
        return _BYTE_SIZE.validate_python(value)
    except ValidationError:
        raise argparse.ArgumentTypeError(f"invalid size: {value!r}")


def build_parser() -> argparse.ArgumentParser:
    from config import settings

    parser = argparse.ArgumentParser(prog="mc-runner", description="Launch a Java game server jar")
    parser.add_argument("--min", type=parse_size, default=settings.min_heap, help="Minimum heap size (default: %(default)s bytes)")
    parser.add_argument("--max", type=parse_size, default=settings.max_heap, help="Maximum heap size (default: %(default)s bytes)")
    parser.add_argument("--dir", type=Path, default=None, help="Directory holding the server jars (default: current directory)")
    parser.add_argument("--web", action="store_true", default=settings.webserver_enabled, help="Serve the auxiliary HTTP endpoint")
    parser.add_argument("--no-helper", action="store_true", help=f"Do not run {settings.helper_jar} first")
    return parser


def select_jar(directory: Path) -> Path:
    """Apply the selection policy to `directory`, asking the user when needed."""
    from config import settings

    outcome = jar_selector.scan(
        directory,
        preference_file=settings.preference_file,
        default_name=settings.default_jar_name,
    )

    if outcome.kind == SelectionKind.NONE:
        raise NoJarFoundError(f"No server jars found laying around in the current directory (\"{directory}\").")

    if outcome.kind == SelectionKind.SERVER_JAR:
        return outcome.jar

    if outcome.kind == SelectionKind.ONE_UNKNOWN_JAR:
        logger.info(f"Trying to launch the server using \"{outcome.jar}\".")
        return outcome.jar

    if outcome.kind == SelectionKind.PREFERRED:
        logger.info(f"Using previously chosen jar: \"{outcome.jar}\".")
        return outcome.jar

    chosen = jar_selector.choose(outcome.jars, default_name=settings.default_jar_name)
    try:
        jar_selector.save_preference(chosen, directory / settings.preference_file)
    except OSError as e:
        logger.warning(f"Failed to store chosen jar preference: {e}.")
    logger.info(f"Using \"{chosen}\" to launch the server.")
    return chosen


def run(args: argparse.Namespace) -> int:
    from config import settings

    directory = (args.dir or Path.cwd()).resolve()
    if not directory.is_dir():
        raise WorkingDirectoryError(f"Server directory \"{directory}\" does not exist or is not a directory.")

    logger.info(f"Min JVM size: {launcher.to_mebibytes(args.min)}M")
    logger.info(f"Max JVM size: {launcher.to_mebibytes(args.max)}M")

    java = java_locator.locate(java_path=settings.java_path)
    if java is None:
        raise JavaNotFoundError("Java not found")
    logger.info(f"Java path: {java}")

    if not args.no_helper:
        launcher.launch_helper(java, directory, settings.helper_jar, settings.helper_args)

    with prevent_sleep():
        jar = select_jar(directory)
        process = launcher.spawn_server(java, jar, args.min, args.max)

        if args.web:
            from mc_runner.webserver import start_web_server

            start_web_server(settings.webserver_host, settings.webserver_port, server_process=process)

        launcher.wait_for_server(process)

    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)

    if args.min > args.max:
        logger.error(f"Minimum heap ({args.min.human_readable()}) is larger than maximum heap ({args.max.human_readable()})")
        return 2

    try:
        return run(args)
    except LauncherError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted.")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
