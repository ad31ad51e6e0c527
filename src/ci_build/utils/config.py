"""
Runtime settings for the dispatcher.

Settings come from ``CI_BUILD_*`` environment variables only; there is no
settings file. Every field has a default so an empty environment is valid.
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ci_build.utils.telemetry import DEFAULT_MAX_LOG_MB

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CIBuildSettings(BaseSettings):
    """Environment-driven settings for ci-build."""

    model_config = SettingsConfigDict(
        env_prefix="CI_BUILD_",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
    )

    log_level: str = Field(default="WARNING")

    # Report unknown subcommands as an error instead of a silent no-op
    strict: bool = Field(default=False)

    # JSONL telemetry is written only when a directory is configured
    telemetry_dir: Optional[Path] = Field(default=None)

    # Telemetry file size in MB before it is rotated
    telemetry_max_mb: int = Field(default=DEFAULT_MAX_LOG_MB, gt=0)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept level names in any case."""
        level = str(v).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"Invalid log level '{v}' (expected one of: {', '.join(LOG_LEVELS)})"
            )
        return level

    @field_validator("telemetry_dir", mode="before")
    @classmethod
    def empty_dir_is_unset(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def telemetry_enabled(self) -> bool:
        return self.telemetry_dir is not None


def get_settings() -> CIBuildSettings:
    """Load settings from the current environment."""
    settings = CIBuildSettings()
    logger.debug(
        "Loaded settings: log_level=%s strict=%s telemetry=%s",
        settings.log_level,
        settings.strict,
        settings.telemetry_dir if settings.telemetry_enabled else "disabled",
    )
    return settings
