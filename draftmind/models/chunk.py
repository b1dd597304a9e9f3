"""
Chunk domain model.

Represents a span of document text and its content hash.

Dependencies: pydantic
System role: Document chunk data structure
"""

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """Document chunk model. Identity is the content hash, not the position."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="Chunk text content")
    hash: str = Field(description="SHA-256 hex digest of the chunk text")
