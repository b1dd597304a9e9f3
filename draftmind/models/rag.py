"""
Retrieval schemas.

Request/response schemas for context retrieval.

Dependencies: pydantic
System role: RAG API contracts
"""

from pydantic import BaseModel, ConfigDict, Field

from draftmind.boundary.vdb.vector_schemas import ScoredChunk


class RetrievalRequest(BaseModel):
    """Request schema for retrieving prompt context."""

    model_config = ConfigDict(protected_namespaces=())

    query: str = Field(..., max_length=20000, description="Free-text query")
    model_id: str | None = Field(
        default=None,
        max_length=255,
        description="Embedding model namespace (default model if omitted)",
    )
    top_k: int | None = Field(default=None, ge=1, le=50, description="Results kept before thresholding")
    threshold: float | None = Field(
        default=None,
        ge=-1.0,
        le=1.0,
        description="Results at or below this similarity are dropped",
    )


class RetrievalResult(BaseModel):
    """Ranked retrieval result and its concatenated context block."""

    model_config = ConfigDict(protected_namespaces=())

    model_id: str
    context: str = ""
    chunks: list[ScoredChunk] = Field(default_factory=list)
