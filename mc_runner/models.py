"""mc-runner Pydantic v2 data models."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator


# ── Custom Exceptions ──────────────────────────────────────────────

class LauncherError(Exception):
    """Base class for failures that abort the launcher."""
    pass


class JavaNotFoundError(LauncherError):
    """Raised when no Java runtime candidate answers `-version`."""
    pass


class NoJarFoundError(LauncherError):
    """Raised when the working directory holds no jar to launch."""
    pass


class WorkingDirectoryError(LauncherError):
    """Raised when the server directory does not exist or is not a directory."""
    pass


class LaunchError(LauncherError):
    """Raised when the server process cannot be spawned at all."""
    pass


class SelectionAbortedError(LauncherError):
    """Raised when stdin closes before a jar was chosen."""
    pass


class InvalidChoiceError(ValueError):
    """Raised for menu input that is not a number in the allowed range."""
    pass


class PreferenceError(Exception):
    """Raised when the preference file exists but cannot be used."""
    pass


# ── Enums ──────────────────────────────────────────────────────────────

class SelectionKind(str, Enum):
    NONE = "none"
    SERVER_JAR = "server_jar"
    ONE_UNKNOWN_JAR = "one_unknown_jar"
    MULTIPLE_JARS = "multiple_jars"
    PREFERRED = "preferred"


# ── Jar Selection Models ───────────────────────────────────────────────

class SelectionOutcome(BaseModel):
    """Result of scanning a directory for jars. Acted on, never persisted."""
    kind: SelectionKind
    jar: Optional[Path] = None  # set for SERVER_JAR, ONE_UNKNOWN_JAR, PREFERRED
    jars: list[Path] = Field(default_factory=list)  # full scan for MULTIPLE_JARS, PREFERRED

    @classmethod
    def none(cls) -> "SelectionOutcome":
        return cls(kind=SelectionKind.NONE)

    @classmethod
    def single(cls, jar: Path, default_name: str = "server.jar") -> "SelectionOutcome":
        kind = SelectionKind.SERVER_JAR if jar.name == default_name else SelectionKind.ONE_UNKNOWN_JAR
        return cls(kind=kind, jar=jar, jars=[jar])

    @classmethod
    def multiple(cls, jars: list[Path]) -> "SelectionOutcome":
        return cls(kind=SelectionKind.MULTIPLE_JARS, jars=list(jars))

    @classmethod
    def preferred(cls, jar: Path, jars: list[Path]) -> "SelectionOutcome":
        return cls(kind=SelectionKind.PREFERRED, jar=jar, jars=list(jars))


class MenuEntry(BaseModel):
    """One numbered line of the interactive jar menu."""
    number: int  # 1-based label shown to the user
    path: Path
    is_default: bool = False

    def label(self) -> str:
        suffix = " (default)" if self.is_default else ""
        return f"{self.number}. {self.path.name}{suffix}"


class JarPreference(BaseModel):
    """Remembered jar choice, matched against scans by file name only."""
    preferred_jar: str

    @field_validator("preferred_jar")
    @classmethod
    def _file_name_only(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("preferred_jar must not be empty")
        return Path(value).name
