"""
Vector storage.

Exports:
  - EmbeddingStore: content-addressable, per-model embedding storage
  - StoredVector, ScoredChunk: vector schemas
"""

from draftmind.boundary.vdb.vector_schemas import ScoredChunk, StoredVector
from draftmind.boundary.vdb.embedding_store import EmbeddingStore

__all__ = ["EmbeddingStore", "ScoredChunk", "StoredVector"]
