"""Keep the machine awake while the server runs (Windows only)."""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager

logger = logging.getLogger(__name__)

ES_CONTINUOUS = 0x80000000
ES_SYSTEM_REQUIRED = 0x00000001


def _set_execution_state(flags: int) -> bool:
    import ctypes

    try:
        previous = ctypes.windll.kernel32.SetThreadExecutionState(flags)
    except (AttributeError, OSError) as e:
        logger.warning(f"SetThreadExecutionState failed: {e}")
        return False
    if not previous:
        logger.warning(f"SetThreadExecutionState rejected flags={flags:#x}")
        return False
    return True


@contextmanager
def prevent_sleep(enabled: bool = True):
    """Block system sleep for the duration of the `with` block.

    The state is tied to the calling thread, so enter and leave on the same one.
    """
    active = False
    if enabled and sys.platform == "win32":
        active = _set_execution_state(ES_CONTINUOUS | ES_SYSTEM_REQUIRED)
        if active:
            logger.debug("prevent_sleep | system sleep disabled")
    else:
        logger.debug(f"prevent_sleep | not supported on {sys.platform}")

    try:
        yield active
    finally:
        if active:
            _set_execution_state(ES_CONTINUOUS)
            logger.debug("prevent_sleep | system sleep restored")
