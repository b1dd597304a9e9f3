"""
Embedding ORM models.

Model registry, per-model chunk vectors and the coverage cache.

Dependencies: sqlalchemy, draftmind.boundary.db.base
System role: Embedding persistence
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, LargeBinary, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from draftmind.boundary.db.base import Base, CreatedAtMixin

EMBEDDINGS_TABLE = "embeddings"
EMBEDDING_STATE_TABLE = "embedding_state"
EMBEDDING_MODELS_TABLE = "embedding_models"
MODEL_ID_COLUMN = "embedding_model_id"


class RegisteredModel(Base, CreatedAtMixin):
    """
    Embedding model registry row.

    Created the first time a model is used. Never deleted; deleting a
    model's embeddings leaves it selectable.

    Attributes:
        model_id: Case-sensitive provider model string
        created_at: Registration timestamp
    """

    __tablename__ = EMBEDDING_MODELS_TABLE

    model_id: Mapped[str] = mapped_column(String(255), primary_key=True)


class EmbeddingRecordModel(Base, CreatedAtMixin):
    """
    Stored vector for one chunk under one model.

    (embedding_model_id, chunk_hash) is unique; rows are never updated.

    Attributes:
        id: Autoincrement surrogate key
        embedding_model_id: Model namespace
        chunk_text: Text embedded (may drift from the live document)
        chunk_hash: SHA-256 of chunk_text
        embedding: Packed little-endian float32 vector
    """

    __tablename__ = EMBEDDINGS_TABLE
    __table_args__ = (
        UniqueConstraint(MODEL_ID_COLUMN, "chunk_hash", name="uq_embeddings_model_chunk"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    embedding_model_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    chunk_text: Mapped[str] = mapped_column(Text, nullable=False)
    chunk_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    embedding: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)


class EmbeddingStateModel(Base):
    """
    Coverage cache row per model.

    Written after every status read or embed batch; never read back as
    the authoritative coverage number.
    """

    __tablename__ = EMBEDDING_STATE_TABLE

    embedding_model_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    last_content_hash: Mapped[str | None] = mapped_column(String(64), nullable=True)
    total_chunks: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    embedded_chunks: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
