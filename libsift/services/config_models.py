"""
Pydantic models for libsift configuration.

Uses pydantic-settings for environment variable validation and type coercion.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# =============================================================================
# Environment Settings (from .env file)
# =============================================================================


class ClusteringSettings(BaseSettings):
    """Library identification settings."""

    model_config = SettingsConfigDict(env_prefix="CLUSTER_", env_file=".env", extra="ignore")

    score_workers: int = Field(default=1, ge=1)
    cluster_workers: int = Field(default=1, ge=1)
    tie_break: Literal["input_order", "artifact_id"] = "input_order"


class ResolutionSettings(BaseSettings):
    """FQN resolution settings."""

    model_config = SettingsConfigDict(env_prefix="RESOLUTION_", env_file=".env", extra="ignore")

    # None: start one past the largest known entity id
    unknown_id_start: int | None = Field(default=None, ge=0)


class AppSettings(BaseSettings):
    """Application-level settings."""

    model_config = SettingsConfigDict(env_prefix="APP_", env_file=".env", extra="ignore")

    log_level: str = "INFO"
    log_dir: str = "workspace/logs"
    run_log: bool = True

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"log_level must be one of {sorted(valid)}")
        return v.upper()


class LibsiftSettings(BaseSettings):
    """
    Master settings class that aggregates all settings.

    Usage:
        settings = LibsiftSettings()
        print(settings.clustering.tie_break)
        print(settings.app.log_dir)
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def clustering(self) -> ClusteringSettings:
        return ClusteringSettings()

    @property
    def resolution(self) -> ResolutionSettings:
        return ResolutionSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()

    def to_dict(self) -> dict[str, dict[str, object]]:
        return {
            "clustering": self.clustering.model_dump(),
            "resolution": self.resolution.model_dump(),
            "app": self.app.model_dump(),
        }
