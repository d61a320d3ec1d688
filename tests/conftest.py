"""mc-runner test configuration and fixtures."""

import logging
import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def make_jars(tmp_path):
    """Create empty jar files in tmp_path and return their paths."""
    def _make(*names):
        paths = []
        for name in names:
            path = tmp_path / name
            path.write_bytes(b"PK\x03\x04")
            paths.append(path)
        return paths
    return _make


@pytest.fixture
def jar_list():
    """Jar paths with the default slot in the middle."""
    return [Path(name) for name in ("s1.jar", "s2.jar", "server.jar", "s3.jar", "s4.jar")]


@pytest.fixture
def restore_logging():
    """Undo configure_logging side effects on the root and mc_runner loggers."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    touched = ["mc_runner"]
    saved_levels = {name: logging.getLogger(name).level for name in touched}
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
    for name, level in saved_levels.items():
        logging.getLogger(name).setLevel(level)
