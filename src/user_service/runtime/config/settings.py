"""Process-level settings read from environment variables and .env files.

These are the few primitive values needed before config.yaml can be loaded:
which environment we run in and where the YAML file lives.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentVariables(BaseSettings):
    """Simple primitive values loaded from environment variables and .env files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    environment: Literal["development", "production", "test"] = Field(
        default="development", validation_alias="APP_ENVIRONMENT"
    )
    config_file: str = Field(default="config.yaml", validation_alias="APP_CONFIG_FILE")

    @property
    def override_prefix(self) -> str:
        """Prefix of variables that override their unprefixed counterparts."""
        return f"{self.environment.upper()}_"
