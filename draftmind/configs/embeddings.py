"""
Embedding provider configuration settings.

Credentials and endpoint settings for the OpenRouter embeddings API.

Dependencies: pydantic, pydantic_settings
System role: Embedding provider configuration
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class EmbeddingSettings(BaseSettings):
    """Embedding provider configuration."""

    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("EMBEDDINGS_API_KEY", "OPENROUTER_API_KEY"),
        description="OpenRouter API key",
    )
    base_url: str = Field(
        default="https://openrouter.ai/api/v1",
        description="Base URL of the OpenAI-compatible embeddings API",
    )
    default_model: str = Field(
        default="qwen/qwen3-embedding-8b",
        description="Embedding model used when a request names none",
    )
    app_url: str = Field(
        default="http://localhost:3000",
        validation_alias=AliasChoices("EMBEDDINGS_APP_URL", "NEXT_PUBLIC_APP_URL"),
        description="Sent as HTTP-Referer for OpenRouter attribution",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout for embedding calls",
    )
    embed_concurrency: int = Field(
        default=1,
        ge=1,
        le=16,
        description="Provider calls in flight during a batch (1 = sequential)",
    )

    class Config:
        """Pydantic config for environment variable loading."""

        env_prefix = "EMBEDDINGS_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"
        populate_by_name = True
