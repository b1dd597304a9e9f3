"""
Retrieval and chunking configuration settings.

Dependencies: pydantic, pydantic_settings
System role: RAG retrieval and chunking configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class RetrievalSettings(BaseSettings):
    """Chunking and similarity search configuration."""

    top_k: int = Field(default=3, ge=1, le=50, description="Number of top results to retrieve")
    similarity_threshold: float = Field(
        default=0.3,
        ge=-1.0,
        le=1.0,
        description="Results at or below this cosine similarity are dropped",
    )

    chunk_size: int = Field(default=500, ge=1, description="Soft chunk size in characters")
    overlap_ratio: float = Field(
        default=0.2,
        ge=0.0,
        lt=1.0,
        description="Share of the previous chunk's words carried into the next chunk",
    )
    min_chunk_length: int = Field(
        default=20,
        ge=0,
        description="Chunks this short or shorter are discarded",
    )

    class Config:
        """Pydantic config."""

        env_prefix = "RAG_"
        case_sensitive = False
        extra = "ignore"
