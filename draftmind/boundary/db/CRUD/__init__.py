"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from draftmind.boundary.db.CRUD import embedding_crud

    hashes = await embedding_crud.get_hashes(db, "qwen/qwen3-embedding-8b")
"""

from draftmind.boundary.db.CRUD.base_crud import BaseCRUD
from draftmind.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from draftmind.boundary.db.CRUD.embedding_crud import (
    EmbeddingCRUD,
    EmbeddingStateCRUD,
    RegisteredModelCRUD,
    embedding_crud,
    embedding_state_crud,
    registered_model_crud,
)

__all__ = [
    "BaseCRUD",
    "DocumentCRUD",
    "document_crud",
    "EmbeddingCRUD",
    "embedding_crud",
    "EmbeddingStateCRUD",
    "embedding_state_crud",
    "RegisteredModelCRUD",
    "registered_model_crud",
]
