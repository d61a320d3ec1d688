"""Java runtime discovery.

Candidates are tried in order and the first one that answers `-version` with
exit status 0 wins. The candidate list comes from a per-platform strategy
chosen once at import time:

  POSIX    – `java` from PATH, then /usr/bin/java
  Windows  – `java.exe` from PATH, then the JRE bundled with the Minecraft
             Launcher under Program Files (x86)
"""

from __future__ import annotations

import logging
import subprocess
import sys
import uuid
from pathlib import Path
from typing import Callable, Iterable, Optional

logger = logging.getLogger(__name__)

JAVA = "java.exe" if sys.platform == "win32" else "java"

# {7C5A40EF-A0FB-4BFC-874A-C0F2E0B9FA8E}
FOLDERID_PROGRAM_FILES_X86 = uuid.UUID("7c5a40ef-a0fb-4bfc-874a-c0f2e0b9fa8e")
PROGRAM_FILES_X86_FALLBACK = r"C:\Program Files (x86)"
BUNDLED_JRE_PARTS = ("Minecraft Launcher", "runtime", "jre-x64", "bin")

CandidateStrategy = Callable[[], list[Path]]


def probe_java(candidate: Path) -> bool:
    """Return True if `candidate -version` runs and exits successfully."""
    try:
        result = subprocess.run(
            [str(candidate), "-version"],
            capture_output=True,
            text=True,
        )
    except OSError as e:
        logger.debug(f"probe_java | candidate={candidate} | spawn failed: {e}")
        return False

    if result.returncode != 0:
        logger.debug(f"probe_java | candidate={candidate} | exit={result.returncode}")
        logger.debug(result.stdout)
        logger.debug(result.stderr)
        return False
    return True


def posix_candidates() -> list[Path]:
    return [Path(JAVA), Path("/usr/bin") / JAVA]


def get_known_folder(folder_id: uuid.UUID) -> Optional[str]:
    """Resolve a Windows known folder via SHGetKnownFolderPath. None on failure."""
    import ctypes
    from ctypes import wintypes

    class _GUID(ctypes.Structure):
        _fields_ = [
            ("Data1", wintypes.DWORD),
            ("Data2", wintypes.WORD),
            ("Data3", wintypes.WORD),
            ("Data4", ctypes.c_ubyte * 8),
        ]

    guid = _GUID.from_buffer_copy(folder_id.bytes_le)
    path_ptr = ctypes.c_wchar_p()
    try:
        result = ctypes.windll.shell32.SHGetKnownFolderPath(
            ctypes.byref(guid), 0, None, ctypes.byref(path_ptr)
        )
        if result != 0:
            logger.debug(f"get_known_folder | folder_id={folder_id} | HRESULT={result:#x}")
            return None
        return path_ptr.value
    except (AttributeError, OSError) as e:
        logger.debug(f"get_known_folder | folder_id={folder_id} | lookup failed: {e}")
        return None
    finally:
        if path_ptr:
            ctypes.windll.ole32.CoTaskMemFree(path_ptr)


def windows_candidates(known_folder: Callable[[uuid.UUID], Optional[str]] = get_known_folder) -> list[Path]:
    program_files_x86 = known_folder(FOLDERID_PROGRAM_FILES_X86) or PROGRAM_FILES_X86_FALLBACK
    return [Path(JAVA), Path(program_files_x86, *BUNDLED_JRE_PARTS, JAVA)]


def default_strategy() -> CandidateStrategy:
    """Pick the candidate strategy for the running platform."""
    if sys.platform == "win32":
        return windows_candidates
    return posix_candidates


PLATFORM_CANDIDATES: CandidateStrategy = default_strategy()


def locate(
    candidates: Optional[Iterable[Path]] = None,
    probe: Callable[[Path], bool] = probe_java,
    java_path: Optional[Path] = None,
) -> Optional[Path]:
    """Return the first working Java runtime, or None when every candidate fails.

    Args:
        candidates: Paths to try. Defaults to the platform strategy.
        probe: Validation hook, `probe_java` by default.
        java_path: Explicitly configured runtime, tried before the candidates.
    """
    if candidates is None:
        candidates = PLATFORM_CANDIDATES()

    ordered = [java_path] if java_path is not None else []
    ordered.extend(candidates)

    for candidate in ordered:
        if probe(candidate):
            logger.debug(f"locate | found={candidate}")
            return candidate
        logger.debug(f"locate | rejected={candidate}")
    return None
