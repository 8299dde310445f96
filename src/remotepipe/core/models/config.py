"""Configuration Pydantic models: RemoteConfig, HelperConfig, SystemConfig."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class HelperConfig(BaseModel):
    """Location and process handling of the ``iremotepipe`` helper."""

    model_config = ConfigDict(extra="forbid")

    path: str | None = Field(
        default=None,
        description="Path of the helper executable; resolved from env / defaults when unset",
    )
    terminate_timeout_seconds: float = Field(
        default=2.0,
        gt=0,
        description="Grace period after SIGTERM before the helper is killed",
    )
    log_stderr: bool = Field(default=True, description="Forward the helper's stderr to the log")


class SystemConfig(BaseModel):
    """Non-helper runtime settings."""

    model_config = ConfigDict(extra="forbid")

    log_level: str = Field(default="INFO", description="Root log level")
    log_dir: str = Field(default="logs", description="Directory for rotating log files")


class RemoteConfig(BaseModel):
    """Top-level configuration loaded from ``remote_config.json``."""

    model_config = ConfigDict(extra="forbid")

    helper: HelperConfig = Field(default_factory=HelperConfig)
    system: SystemConfig = Field(default_factory=SystemConfig)
