"""
Database boundary layer: ORM models, CRUD operations, connection management
and schema migration.

Exports:
  - Base, CreatedAtMixin: Model building blocks
  - create_store_engine(), create_session_factory(): Async connection management
  - RegisteredModel, EmbeddingRecordModel, EmbeddingStateModel, DocumentModel
  - upgrade_legacy_schema(), MigrationReport: Schema initialization and upgrade
  - CRUD singletons for each model

Dependencies: sqlalchemy, aiosqlite
System role: SQLite persistence for embeddings, the model registry and the
coverage cache.
"""

from draftmind.boundary.db.base import Base, CreatedAtMixin
from draftmind.boundary.db.connection import create_session_factory, create_store_engine
from draftmind.boundary.db.models import (
    DocumentModel,
    EmbeddingRecordModel,
    EmbeddingStateModel,
    RegisteredModel,
)
from draftmind.boundary.db.migrations import MigrationReport, upgrade_legacy_schema
from draftmind.boundary.db.CRUD import (
    document_crud,
    embedding_crud,
    embedding_state_crud,
    registered_model_crud,
)

__all__ = [
    # Base classes
    "Base",
    "CreatedAtMixin",
    # Connection
    "create_store_engine",
    "create_session_factory",
    # Models
    "DocumentModel",
    "EmbeddingRecordModel",
    "EmbeddingStateModel",
    "RegisteredModel",
    # Migration
    "MigrationReport",
    "upgrade_legacy_schema",
    # CRUD singletons
    "document_crud",
    "embedding_crud",
    "embedding_state_crud",
    "registered_model_crud",
]
