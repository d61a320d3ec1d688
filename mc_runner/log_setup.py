"""Logging initialization driven by a filter string such as "mc_runner=debug,warning"."""

from __future__ import annotations

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

_LEVEL_ALIASES = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "off": logging.CRITICAL + 10,
}


def parse_directives(directives: str) -> tuple[Optional[int], dict[str, int], list[str]]:
    """Split a filter string into (root level, per-logger levels, rejected entries).

    Entries are comma separated. `name=level` targets one logger, a bare level
    targets the root logger. When several bare levels are given, the most
    verbose one wins.
    """
    root_level: Optional[int] = None
    targets: dict[str, int] = {}
    rejected: list[str] = []

    for raw in directives.split(","):
        entry = raw.strip()
        if not entry:
            continue
        name, sep, level_name = entry.partition("=")
        if not sep:
            level_name, name = name, ""
        level = _LEVEL_ALIASES.get(level_name.strip().lower())
        if level is None:
            rejected.append(entry)
            continue
        name = name.strip()
        if name:
            targets[name] = level
        else:
            root_level = level if root_level is None else min(root_level, level)

    return root_level, targets, rejected


def configure_logging(directives: Optional[str] = None, stream=None) -> None:
    """Configure root logging to stderr from a filter string.

    Args:
        directives: Filter string. Falls back to `settings.log` when None.
        stream: Output stream, stderr by default.
    """
    if directives is None:
        from config import settings

        directives = settings.log

    root_level, targets, rejected = parse_directives(directives)

    logging.basicConfig(
        level=root_level if root_level is not None else logging.WARNING,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=stream or sys.stderr,
        force=True,
    )
    for name, level in targets.items():
        logging.getLogger(name).setLevel(level)

    for entry in rejected:
        logging.getLogger(__name__).warning(f"configure_logging | ignoring unknown filter '{entry}'")
