"""Process launching: helper jar, server command assembly, spawn and wait."""

from __future__ import annotations

import logging
import math
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ByteSize

from mc_runner.models import LaunchError

logger = logging.getLogger(__name__)

HELPER_JAR = "AutoIpMinecraft.jar"
HELPER_ARGS = ("server.properties",)

# G1 tuning for a game server with a large heap. Not configurable.
JVM_TUNING_FLAGS = (
    "-Dsun.rmi.dgc.server.gcInterval=2147483646",
    "-XX:+UseG1GC",
    "-XX:+ParallelRefProcEnabled",
    "-XX:MaxGCPauseMillis=50",
    "-XX:+UnlockExperimentalVMOptions",
    "-XX:G1NewSizePercent=30",
    "-XX:G1HeapRegionSize=32M",
    "-XX:G1ReservePercent=20",
    "-XX:G1HeapWastePercent=5",
    "-XX:G1MixedGCCountTarget=4",
    "-XX:InitiatingHeapOccupancyPercent=15",
    "-XX:G1MixedGCLiveThresholdPercent=90",
    "-XX:G1RSetUpdatingPauseTimePercent=5",
    "-server",
)


def to_mebibytes(size: ByteSize | int) -> int:
    """Whole mebibytes in `size`, rounded down."""
    return math.floor(ByteSize(size).to("MiB"))


def heap_flag(option: str, size: ByteSize | int) -> str:
    return f"{option}{to_mebibytes(size)}M"


def build_server_command(
    java: Path,
    jar_name: str,
    min_heap: ByteSize | int,
    max_heap: ByteSize | int,
) -> list[str]:
    """Assemble the argv for the server process."""
    return [
        str(java),
        heap_flag("-Xmx", max_heap),
        heap_flag("-Xms", min_heap),
        *JVM_TUNING_FLAGS,
        "-jar",
        jar_name,
        "nogui",
    ]


def launch_helper(
    java: Path,
    directory: Path,
    helper_jar: str = HELPER_JAR,
    helper_args: Sequence[str] = HELPER_ARGS,
) -> Optional[int]:
    """Run the helper jar once and wait for it. Failures are logged, never raised."""
    try:
        result = subprocess.run(
            [str(java), "-jar", helper_jar, *helper_args],
            cwd=str(directory),
        )
    except OSError as e:
        logger.error(f"Failed to open {helper_jar}: {e}")
        return None

    if result.returncode != 0:
        logger.warning(f"launch_helper | {helper_jar} exited with status {result.returncode}")
    return result.returncode


def spawn_server(
    java: Path,
    jar: Path,
    min_heap: ByteSize | int,
    max_heap: ByteSize | int,
) -> subprocess.Popen:
    """Start the server jar from inside its own directory.

    Raises:
        LaunchError: If the process could not be started.
    """
    jar_name = jar.name
    directory = jar.parent
    logger.info(f"Stripped the jar path to a file name: \"{jar_name}\"")

    command = build_server_command(java, jar_name, min_heap, max_heap)
    logger.debug(f"spawn_server | cwd={directory} | argv={command}")
    try:
        return subprocess.Popen(command, cwd=str(directory))
    except OSError as e:
        raise LaunchError(f"Failed to start {jar_name} with {java}: {e}") from e


def wait_for_server(process: subprocess.Popen) -> Optional[int]:
    """Block until the server exits and log how it ended."""
    try:
        status = process.wait()
    except OSError as e:
        logger.error(f"Minecraft exited with error: {e}")
        return None
    logger.info(f"Minecraft exited with status: {status}")
    return status
