"""
Vector store schemas.

Pydantic models for stored vectors and scored retrieval results.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from pydantic import BaseModel, Field


class StoredVector(BaseModel):
    """One persisted embedding record as loaded for scoring."""

    chunk_hash: str = Field(description="Content hash of the chunk")
    chunk_text: str = Field(description="Chunk text at the time it was embedded")
    vector: list[float] = Field(description="Embedding vector")


class ScoredChunk(BaseModel):
    """Single result from similarity search."""

    text: str = Field(description="Chunk text content")
    score: float = Field(description="Cosine similarity to the query")
    chunk_hash: str | None = Field(default=None, description="Content hash of the chunk")
