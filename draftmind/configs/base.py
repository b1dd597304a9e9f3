"""
Base configuration settings.

Shared .env loading and process-wide switches inherited by every
settings module.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Settings base reading the environment and an optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development", description="Deployment name, used in logs only")
    debug: bool = Field(default=False, description="Echo SQL statements regardless of DATABASE_ECHO_SQL")
    log_level: str = Field(default="INFO", description="Root log level name")
