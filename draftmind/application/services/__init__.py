"""
Application services.

Exports:
  - DocumentSource: current document text
  - EmbeddingService: registration, coverage status, embedding, deletion
  - RetrievalService: query -> ranked context
"""

from draftmind.application.services.document_source import DocumentSource
from draftmind.application.services.embedding_service import EmbeddingService
from draftmind.application.services.retrieval_service import RetrievalService

__all__ = ["DocumentSource", "EmbeddingService", "RetrievalService"]
