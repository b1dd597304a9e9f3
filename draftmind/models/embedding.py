"""
Embedding administration schemas.

Request/response schemas for model registration, coverage status and
batch embedding.

Dependencies: pydantic
System role: Embedding admin API contracts
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Coverage(BaseModel):
    """Live coverage of the current chunking under one model."""

    total: int = Field(ge=0, description="Chunks in the current document")
    embedded: int = Field(ge=0, description="Current chunks with a stored vector")
    percentage: int = Field(ge=0, le=100, description="Rounded embedded/total percentage")


class EmbedResult(BaseModel):
    """Outcome of an incremental embedding batch."""

    model_config = ConfigDict(protected_namespaces=())

    model_id: str
    embedded_now: int = Field(ge=0, description="Vectors inserted by this call")
    skipped_existing: int = Field(ge=0, description="Chunks already stored, provider not called")
    failed: int = Field(ge=0, description="Chunks whose provider call failed")
    total_current_chunks: int = Field(ge=0, description="Chunks in the current document")


class EmbeddingStatus(BaseModel):
    """Coverage status reported to the editor UI."""

    model_config = ConfigDict(protected_namespaces=())

    model_id: str
    total_chunks: int
    embedded_chunks: int
    percentage: int
    needs_update: bool


class EmbeddingState(BaseModel):
    """Write-through coverage cache row. Diagnostic only."""

    model_config = ConfigDict(protected_namespaces=())

    model_id: str
    last_content_hash: str | None = None
    total_chunks: int = 0
    embedded_chunks: int = 0
    updated_at: datetime | None = None


class RegisterModelRequest(BaseModel):
    """Request schema for registering an embedding model."""

    model_config = ConfigDict(protected_namespaces=())

    model_id: str = Field(..., min_length=1, max_length=255, description="Embedding model ID")


class ModelListResponse(BaseModel):
    """Response schema listing registered embedding models."""

    model_config = ConfigDict(protected_namespaces=())

    default_model_id: str
    models: list[str]


class DeleteEmbeddingsResponse(BaseModel):
    """Response schema for deleting a model's embeddings."""

    model_config = ConfigDict(protected_namespaces=())

    model_id: str
    deleted: int
