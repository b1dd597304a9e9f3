"""
Database models package.

Exports:
  - RegisteredModel: embedding model registry
  - EmbeddingRecordModel: per-model chunk vectors
  - EmbeddingStateModel: coverage cache rows
  - DocumentModel: editor documents (read by the document source)

Dependencies: sqlalchemy, draftmind.boundary.db.base
System role: Database model definitions for domain entities
"""

from draftmind.boundary.db.models.document_model import DocumentModel
from draftmind.boundary.db.models.embedding_model import (
    EmbeddingRecordModel,
    EmbeddingStateModel,
    RegisteredModel,
)

__all__ = [
    "DocumentModel",
    "EmbeddingRecordModel",
    "EmbeddingStateModel",
    "RegisteredModel",
]
