"""
Embedding API response schemas.

The provider response is validated against these models immediately
after the HTTP call so nothing downstream handles untyped payloads.

Dependencies: pydantic
System role: Type definitions for embedding API responses
"""

from pydantic import BaseModel, Field


class EmbeddingDatum(BaseModel):
    """One embedding in an OpenAI-compatible response."""

    embedding: list[float] = Field(min_length=1, description="Embedding vector")
    index: int = Field(default=0, description="Position of the input this vector belongs to")


class EmbeddingResponse(BaseModel):
    """OpenAI-compatible /embeddings response body."""

    data: list[EmbeddingDatum] = Field(min_length=1)
    model: str | None = None


class ProviderErrorBody(BaseModel):
    """Error object some providers return, with or without an HTTP error status."""

    message: str = "Failed to get embedding"
    code: int | str | None = None
