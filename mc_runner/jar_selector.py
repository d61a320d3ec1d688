"""mc-runner Jar Selector — scan, decision policy, interactive menu and remembered choice."""

from __future__ import annotations

import logging
import re
import sys
from pathlib import Path
from typing import Optional, TextIO

import yaml
from pydantic import ValidationError

from mc_runner.models import (
    InvalidChoiceError,
    JarPreference,
    MenuEntry,
    PreferenceError,
    SelectionAbortedError,
    SelectionOutcome,
)

logger = logging.getLogger(__name__)

DEFAULT_JAR_NAME = "server.jar"
DEFAULT_PREFERENCE_FILE = "mc_runner_preference.yaml"

# Optional leading blanks, the digits, then nothing but the line terminator.
_NUMBER_RE = re.compile(r"[ \t]*([0-9]+)\s*")


# ── Scanning ───────────────────────────────────────────────────────────

def find_jars(directory: Path) -> list[Path]:
    """List regular files directly in `directory` with a `.jar` suffix, sorted by name."""
    jars = [path for path in directory.iterdir() if path.is_file() and path.suffix == ".jar"]
    return sorted(jars, key=lambda path: path.name)


def scan(
    directory: Path,
    preference_file: str = DEFAULT_PREFERENCE_FILE,
    default_name: str = DEFAULT_JAR_NAME,
) -> SelectionOutcome:
    """Scan `directory` and decide which jar to launch.

    A remembered preference is only trusted when it names one of the jars
    found by this scan. Problems reading the preference never fail the scan.
    """
    jars = find_jars(directory)
    logger.debug(f"scan | directory={directory} | jars={[jar.name for jar in jars]}")

    if not jars:
        return SelectionOutcome.none()

    preference = _try_load_preference(directory / preference_file)
    if preference is not None:
        for jar in jars:
            if jar.name == preference.preferred_jar:
                return SelectionOutcome.preferred(jar, jars)
        logger.debug(f"scan | stale preference ignored | preferred_jar={preference.preferred_jar}")

    if len(jars) == 1:
        return SelectionOutcome.single(jars[0], default_name=default_name)
    return SelectionOutcome.multiple(jars)


# ── Preference Record ──────────────────────────────────────────────────

def load_preference(path: Path) -> JarPreference:
    """Load the preference record.

    Raises:
        FileNotFoundError: If no preference was saved yet.
        PreferenceError: If the file is unreadable or malformed.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise
    except (OSError, yaml.YAMLError) as e:
        raise PreferenceError(f"Could not read {path}: {e}") from e

    if not isinstance(data, dict):
        raise PreferenceError(f"Expected a mapping in {path}, got {type(data).__name__}")
    try:
        return JarPreference(**data)
    except ValidationError as e:
        raise PreferenceError(f"Invalid preference in {path}: {e}") from e


def save_preference(jar: Path, path: Path) -> JarPreference:
    """Overwrite the preference record with `jar`'s file name."""
    preference = JarPreference(preferred_jar=jar.name)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(preference.model_dump(), sort_keys=False), encoding="utf-8")
    logger.info(f"save_preference | preferred_jar={preference.preferred_jar} | path={path}")
    return preference


def _try_load_preference(path: Path) -> Optional[JarPreference]:
    try:
        return load_preference(path)
    except FileNotFoundError:
        return None
    except PreferenceError as e:
        logger.warning(f"Ignoring jar preference: {e}")
        return None


# ── Menu ───────────────────────────────────────────────────────────────

def find_default_index(jars: list[Path], default_name: str = DEFAULT_JAR_NAME) -> Optional[int]:
    """Return the index of the default slot jar, if present."""
    for idx, jar in enumerate(jars):
        if jar.name == default_name:
            return idx
    return None


def build_menu(jars: list[Path], default_index: Optional[int] = None) -> list[MenuEntry]:
    """Number the jars for display: the default first, the rest in original order."""
    entries: list[MenuEntry] = []
    if default_index is not None:
        entries.append(MenuEntry(number=1, path=jars[default_index], is_default=True))
    for idx, jar in enumerate(jars):
        if idx == default_index:
            continue
        entries.append(MenuEntry(number=len(entries) + 1, path=jar))
    return entries


def resolve_choice(jars: list[Path], position: int, default_index: Optional[int] = None) -> Path:
    """Map a 0-based menu position back to the jar at its original index.

    Position 0 is also the sentinel for "empty input, use the default".
    Positions up to the default's original index are shifted down by one,
    since the default was pulled to the front of the menu.
    """
    if position < 0 or position >= len(jars):
        raise IndexError(f"menu position {position} out of range for {len(jars)} jars")
    if default_index is None:
        return jars[position]
    if position == 0:
        return jars[default_index]
    if position <= default_index:
        return jars[position - 1]
    return jars[position]


def parse_number_in_range(text: str, low: int, high: int) -> int:
    """Parse menu input as an unsigned number within [low, high]."""
    match = _NUMBER_RE.fullmatch(text)
    if match is None:
        raise InvalidChoiceError(f"Provided input is not a valid number: {text.strip()!r}")
    number = int(match.group(1))
    if not low <= number <= high:
        raise InvalidChoiceError(f"Provided input is not within the required range [{low}, {high}]")
    return number


def choose(
    jars: list[Path],
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    default_name: str = DEFAULT_JAR_NAME,
) -> Path:
    """Ask the user which jar to use; loops until the input is valid.

    Empty input selects the default slot, but only when one exists.

    Raises:
        SelectionAbortedError: If stdin reaches EOF before a valid choice.
    """
    if stdin is None:
        stdin = sys.stdin
    if stdout is None:
        stdout = sys.stdout

    default_index = find_default_index(jars, default_name)

    print("Multiple jars found:", file=stdout)
    for entry in build_menu(jars, default_index):
        print(entry.label(), file=stdout)

    while True:
        print(f"Choose which one to use [<1,{len(jars)}>]: ", end="", file=stdout, flush=True)
        line = stdin.readline()
        if not line:
            raise SelectionAbortedError("Input closed before a jar was chosen")

        if not line.strip():
            if default_index is not None:
                position = 0
                break
            print("There is no default jar, please enter a number.", file=stdout)
            continue

        try:
            position = parse_number_in_range(line, 1, len(jars)) - 1
        except InvalidChoiceError as e:
            logger.debug(f"choose | rejected input={line!r}")
            print(e, file=stdout)
            continue
        break

    return resolve_choice(jars, position, default_index)
