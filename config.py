"""mc-runner configuration, read from MC_RUNNER_* environment variables and .env."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import ByteSize, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RunnerSettings(BaseSettings):
    """Launcher settings. CLI flags override these per run.

    Heap bounds are checked by the CLI once overrides are applied.
    """

    model_config = SettingsConfigDict(
        env_prefix="MC_RUNNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Identity ---
    app_name: str = "mc-runner"
    app_version: str = "0.1.0"

    # --- JVM heap ---
    min_heap: ByteSize = Field(default="1GiB", validate_default=True)
    max_heap: ByteSize = Field(default="16GiB", validate_default=True)

    # --- Logging ---
    # Comma separated filters: "target=level,level"; a bare level applies to root
    log: str = "mc_runner=info,warning"

    # --- Java ---
    java_path: Optional[Path] = None

    # --- Jars ---
    default_jar_name: str = "server.jar"
    preference_file: str = "mc_runner_preference.yaml"
    helper_jar: str = "AutoIpMinecraft.jar"
    helper_args: list[str] = Field(default_factory=lambda: ["server.properties"])

    # --- Auxiliary web server ---
    webserver_enabled: bool = False
    webserver_host: str = "localhost"
    webserver_port: int = 8080


# Singleton
settings = RunnerSettings()
