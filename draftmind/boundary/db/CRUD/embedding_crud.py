"""
Embedding CRUD operations.

Registry, vector and coverage-cache queries for the embedding store.
Inserts use INSERT OR IGNORE so that (model, chunk hash) writes are
idempotent.

Dependencies: sqlalchemy, draftmind.boundary.db.models
System role: Embedding persistence operations
"""

from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession

from draftmind.boundary.db.CRUD.base_crud import BaseCRUD
from draftmind.boundary.db.models.embedding_model import (
    EmbeddingRecordModel,
    EmbeddingStateModel,
    RegisteredModel,
)


class RegisteredModelCRUD(BaseCRUD[RegisteredModel]):
    """CRUD operations for the embedding model registry."""

    def __init__(self) -> None:
        """Initialize RegisteredModelCRUD with RegisteredModel."""
        super().__init__(RegisteredModel)

    async def register(self, session: AsyncSession, model_id: str) -> bool:
        """
        Register a model if it is not already known.

        Args:
            session: Async database session
            model_id: Embedding model ID

        Returns:
            True if the model was newly registered
        """
        stmt = (
            insert(RegisteredModel)
            .values(model_id=model_id, created_at=datetime.now(timezone.utc))
            .on_conflict_do_nothing(index_elements=["model_id"])
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def list_ids(self, session: AsyncSession) -> list[str]:
        """
        List registered model IDs in sorted order.

        Args:
            session: Async database session

        Returns:
            list[str]: Model IDs
        """
        result = await session.execute(
            select(RegisteredModel.model_id).order_by(RegisteredModel.model_id)
        )
        return list(result.scalars().all())


class EmbeddingCRUD(BaseCRUD[EmbeddingRecordModel]):
    """CRUD operations for stored chunk vectors."""

    def __init__(self) -> None:
        """Initialize EmbeddingCRUD with EmbeddingRecordModel."""
        super().__init__(EmbeddingRecordModel)

    async def get_hashes(self, session: AsyncSession, model_id: str) -> set[str]:
        """
        Chunk hashes already stored under a model.

        Args:
            session: Async database session
            model_id: Embedding model ID

        Returns:
            set[str]: Stored chunk hashes
        """
        result = await session.execute(
            select(EmbeddingRecordModel.chunk_hash).where(
                EmbeddingRecordModel.embedding_model_id == model_id
            )
        )
        return set(result.scalars().all())

    async def insert_if_absent(
        self,
        session: AsyncSession,
        model_id: str,
        chunk_hash: str,
        chunk_text: str,
        embedding: bytes,
    ) -> bool:
        """
        Insert a vector unless (model_id, chunk_hash) is already stored.

        Args:
            session: Async database session
            model_id: Embedding model ID
            chunk_hash: Content hash of the chunk
            chunk_text: Chunk text
            embedding: Packed float32 vector

        Returns:
            True if a row was inserted
        """
        stmt = (
            insert(EmbeddingRecordModel)
            .values(
                embedding_model_id=model_id,
                chunk_hash=chunk_hash,
                chunk_text=chunk_text,
                embedding=embedding,
                created_at=datetime.now(timezone.utc),
            )
            .on_conflict_do_nothing(index_elements=["embedding_model_id", "chunk_hash"])
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def get_for_model(self, session: AsyncSession, model_id: str) -> Sequence[Row]:
        """
        Load every stored vector for a model, oldest first.

        Args:
            session: Async database session
            model_id: Embedding model ID

        Returns:
            Rows of (chunk_hash, chunk_text, embedding)
        """
        result = await session.execute(
            select(
                EmbeddingRecordModel.chunk_hash,
                EmbeddingRecordModel.chunk_text,
                EmbeddingRecordModel.embedding,
            )
            .where(EmbeddingRecordModel.embedding_model_id == model_id)
            .order_by(EmbeddingRecordModel.id)
        )
        return result.all()

    async def count_for_model(self, session: AsyncSession, model_id: str) -> int:
        """Number of vectors stored under a model."""
        result = await session.execute(
            select(func.count()).select_from(EmbeddingRecordModel).where(
                EmbeddingRecordModel.embedding_model_id == model_id
            )
        )
        return int(result.scalar_one())

    async def delete_for_model(self, session: AsyncSession, model_id: str) -> int:
        """
        Delete every vector stored under a model.

        Args:
            session: Async database session
            model_id: Embedding model ID

        Returns:
            Number of rows deleted
        """
        result = await session.execute(
            delete(EmbeddingRecordModel).where(
                EmbeddingRecordModel.embedding_model_id == model_id
            )
        )
        return result.rowcount


class EmbeddingStateCRUD(BaseCRUD[EmbeddingStateModel]):
    """CRUD operations for the coverage cache."""

    def __init__(self) -> None:
        """Initialize EmbeddingStateCRUD with EmbeddingStateModel."""
        super().__init__(EmbeddingStateModel)

    async def upsert(
        self,
        session: AsyncSession,
        model_id: str,
        last_content_hash: str | None,
        total_chunks: int,
        embedded_chunks: int,
    ) -> None:
        """
        Write the latest coverage numbers for a model.

        Args:
            session: Async database session
            model_id: Embedding model ID
            last_content_hash: Hash of the document text the numbers refer to
            total_chunks: Chunks in that text
            embedded_chunks: Chunks with a stored vector
        """
        values = {
            "last_content_hash": last_content_hash,
            "total_chunks": total_chunks,
            "embedded_chunks": embedded_chunks,
            "updated_at": datetime.now(timezone.utc),
        }
        stmt = (
            insert(EmbeddingStateModel)
            .values(embedding_model_id=model_id, **values)
            .on_conflict_do_update(index_elements=["embedding_model_id"], set_=values)
        )
        await session.execute(stmt)


registered_model_crud = RegisteredModelCRUD()
embedding_crud = EmbeddingCRUD()
embedding_state_crud = EmbeddingStateCRUD()
