"""
Draftmind retrieval engine.

Chunks living documents, stores per-model embedding vectors and serves
similarity context to the writing assistant's generation endpoints.
"""

__version__ = "0.1.0"
