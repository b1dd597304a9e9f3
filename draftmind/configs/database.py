"""
Database configuration settings.

Manages the SQLite file backing the embedding store.

Dependencies: pydantic, pydantic_settings
System role: Embedding store connection configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from draftmind.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """SQLite database configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DATABASE_",
        case_sensitive=False,
        extra="ignore",
    )

    path: str = Field(default="data.db", description="SQLite database file path")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")
    migration_retries: int = Field(
        default=3,
        ge=1,
        description="Attempts made at the legacy schema upgrade before startup fails",
    )
    migration_backoff_seconds: float = Field(
        default=0.5,
        ge=0.0,
        description="Delay between schema upgrade attempts",
    )

    @property
    def database_url(self) -> str:
        """
        Construct SQLite connection URL.

        Returns:
            str: SQLAlchemy async-compatible database URL
        """
        if self.path == ":memory:":
            return "sqlite+aiosqlite:///:memory:"
        return f"sqlite+aiosqlite:///{self.path}"
