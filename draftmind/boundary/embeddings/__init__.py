"""
Embedding provider port and adapters.

Exports:
  - EmbeddingProvider: text -> vector capability boundary
  - OpenRouterEmbeddingProvider, OpenRouterEmbeddings: OpenRouter adapter

Dependencies: langchain_core, httpx
System role: External embedding API boundary
"""

from draftmind.boundary.embeddings.provider import EmbeddingProvider, OpenRouterEmbeddingProvider
from draftmind.boundary.embeddings.openrouter_embeddings import OpenRouterEmbeddings

__all__ = ["EmbeddingProvider", "OpenRouterEmbeddingProvider", "OpenRouterEmbeddings"]
