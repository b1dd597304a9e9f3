"""
Content-addressable embedding store.

Durable per-model vector storage backed by SQLite. Chunks are identified
by content hash, so re-embedding a document only calls the provider for
chunks that are new under the requested model.

Dependencies: sqlalchemy, aiosqlite, numpy, draftmind.boundary.db
System role: Vector persistence for the retrieval engine
"""

import asyncio
import logging
import math
from collections.abc import Awaitable, Callable, Sequence

import numpy as np
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from draftmind.boundary.db.connection import create_session_factory, create_store_engine
from draftmind.boundary.db.CRUD import (
    embedding_crud,
    embedding_state_crud,
    registered_model_crud,
)
from draftmind.boundary.db.migrations import MigrationReport, upgrade_legacy_schema
from draftmind.boundary.vdb.vector_schemas import StoredVector
from draftmind.core.exceptions import ProviderError, StoreError, StoreMigrationError
from draftmind.models.chunk import Chunk
from draftmind.models.embedding import Coverage, EmbedResult, EmbeddingState
from draftmind.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

EmbedFn = Callable[[str], Awaitable[Sequence[float]]]

# Vectors are persisted as packed little-endian float32
VECTOR_DTYPE = np.dtype("<f4")


def pack_vector(vector: Sequence[float]) -> bytes:
    """Serialize a vector to the stored BLOB format."""
    return np.asarray(vector, dtype=VECTOR_DTYPE).tobytes()


def unpack_vector(blob: bytes) -> list[float]:
    """Deserialize a stored BLOB to a list of floats."""
    return np.frombuffer(blob, dtype=VECTOR_DTYPE).astype(float).tolist()


def coverage_percentage(embedded: int, total: int) -> int:
    """Whole-number percentage, rounding halves up; 0 for an empty document."""
    if total <= 0:
        return 0
    return math.floor(embedded / total * 100 + 0.5)


class EmbeddingStore:
    """
    Per-model embedding storage with explicit lifecycle.

    Call ``open()`` before use and ``close()`` when done, or use the store
    as an async context manager. Opening creates missing tables, upgrades
    legacy single-model data and registers the default model.
    """

    def __init__(
        self,
        database_url: str,
        default_model_id: str,
        echo: bool = False,
        embed_concurrency: int = 1,
        migration_retries: int = 3,
        migration_backoff_seconds: float = 0.5,
    ) -> None:
        """
        Initialize store configuration. No I/O happens until open().

        Args:
            database_url: sqlite+aiosqlite URL
            default_model_id: Model always present in the registry
            echo: Echo SQL statements to logs
            embed_concurrency: Provider calls in flight during embed_new
            migration_retries: Attempts at the schema upgrade before open() fails
            migration_backoff_seconds: Base delay between upgrade attempts
        """
        if embed_concurrency < 1:
            raise ValueError("embed_concurrency must be at least 1")
        if migration_retries < 1:
            raise ValueError("migration_retries must be at least 1")

        self.database_url = database_url
        self.default_model_id = default_model_id
        self._echo = echo
        self._embed_concurrency = embed_concurrency
        self._migration_retries = migration_retries
        self._migration_backoff = migration_backoff_seconds

        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker | None = None
        self._write_lock = asyncio.Lock()
        self.migration_report: MigrationReport | None = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    async def open(self) -> "EmbeddingStore":
        """
        Open the database and bring its schema up to date.

        Returns:
            EmbeddingStore: self, for chaining

        Raises:
            StoreMigrationError: If the schema upgrade keeps failing
        """
        if self._engine is not None:
            return self

        engine = create_store_engine(self.database_url, echo=self._echo)
        try:
            self.migration_report = await self._migrate(engine)
        except Exception:
            await engine.dispose()
            raise

        self._engine = engine
        self._session_factory = create_session_factory(engine)
        logger.info(
            "Embedding store opened",
            extra={
                "database_url": self.database_url,
                "default_model_id": self.default_model_id,
                "migrated_tables": self.migration_report.migrated_tables,
            },
        )
        return self

    async def close(self) -> None:
        """Dispose the engine. Safe to call more than once."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Embedding store closed", extra={"database_url": self.database_url})

    async def __aenter__(self) -> "EmbeddingStore":
        return await self.open()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _migrate(self, engine: AsyncEngine) -> MigrationReport:
        """Run the schema upgrade, retrying before giving up."""
        for attempt in range(1, self._migration_retries + 1):
            try:
                async with engine.begin() as conn:
                    return await conn.run_sync(upgrade_legacy_schema, self.default_model_id)
            except StoreMigrationError as e:
                logger.warning(
                    "Schema upgrade attempt failed",
                    extra={
                        "attempt": attempt,
                        "max_attempts": self._migration_retries,
                        "error": str(e),
                    },
                )
                if attempt == self._migration_retries:
                    logger.error(
                        "Schema upgrade failed, refusing to open store",
                        extra={"database_url": self.database_url},
                    )
                    raise
                await asyncio.sleep(self._migration_backoff * attempt)

        raise StoreMigrationError("Schema upgrade did not run")

    def session(self) -> AsyncSession:
        """New AsyncSession bound to the store engine."""
        if self._session_factory is None:
            raise StoreError("Embedding store is not open", operation="session")
        return self._session_factory()

    async def ping(self) -> bool:
        """Check the database answers a trivial query."""
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
            return True
        except (SQLAlchemyError, StoreError) as e:
            logger.warning("Embedding store ping failed", extra={"error": str(e)})
            return False

    async def register(self, model_id: str) -> bool:
        """
        Ensure a model namespace exists.

        Args:
            model_id: Embedding model ID

        Returns:
            True if the model was newly registered
        """
        async with self.session() as session:
            async with session.begin():
                created = await registered_model_crud.register(session, model_id)
        if created:
            logger.info("Embedding model registered", extra={"model_id": model_id})
        return created

    async def is_registered(self, model_id: str) -> bool:
        """Whether a model namespace exists."""
        async with self.session() as session:
            return await registered_model_crud.exists(session, model_id)

    async def list_models(self) -> list[str]:
        """
        Registered model IDs, sorted. Always includes the default model.

        Returns:
            list[str]: Model IDs
        """
        async with self.session() as session:
            models = await registered_model_crud.list_ids(session)
        if self.default_model_id not in models:
            models = sorted([*models, self.default_model_id])
        return models

    async def stored_hashes(self, model_id: str) -> set[str]:
        """Chunk hashes stored under a model."""
        async with self.session() as session:
            return await embedding_crud.get_hashes(session, model_id)

    async def count_vectors(self, model_id: str) -> int:
        """Number of vectors stored under a model."""
        async with self.session() as session:
            return await embedding_crud.count_for_model(session, model_id)

    async def embed_new(
        self,
        model_id: str,
        chunks: Sequence[Chunk],
        embed_fn: EmbedFn,
    ) -> EmbedResult:
        """
        Embed and store the chunks not yet stored under a model.

        Chunks whose hash is already stored are skipped without calling
        embed_fn. A chunk whose embed_fn call raises, or whose vector
        cannot be stored, is logged and counted as failed; the rest of the
        batch continues. Each insert
        is committed on its own, so an abandoned batch leaves only
        complete rows behind.

        Args:
            model_id: Embedding model ID
            chunks: Current chunking of the document
            embed_fn: Async text -> vector callable for this model

        Returns:
            EmbedResult: Counts of inserted, skipped and failed chunks
        """
        await self.register(model_id)
        existing = await self.stored_hashes(model_id)

        pending: list[Chunk] = []
        seen: set[str] = set()
        for chunk in chunks:
            if chunk.hash in existing or chunk.hash in seen:
                continue
            seen.add(chunk.hash)
            pending.append(chunk)

        skipped = len({chunk.hash for chunk in chunks}) - len(pending)
        if not pending:
            logger.info(
                "All chunks already embedded",
                extra={"model_id": model_id, "total_chunks": len(chunks)},
            )
            return EmbedResult(
                model_id=model_id,
                embedded_now=0,
                skipped_existing=skipped,
                failed=0,
                total_current_chunks=len(chunks),
            )

        semaphore = asyncio.Semaphore(self._embed_concurrency)

        async def embed_one(chunk: Chunk) -> bool | None:
            async with semaphore:
                try:
                    vector = await embed_fn(chunk.text)
                except Exception as e:
                    log_exception_with_context(
                        logger,
                        "Failed to embed chunk, skipping",
                        e,
                        level=logging.WARNING if isinstance(e, ProviderError) else logging.ERROR,
                        model_id=model_id,
                        chunk_hash=chunk.hash,
                        chunk_text=chunk.text,
                    )
                    return None
            try:
                async with self._write_lock:
                    return await self._insert(model_id, chunk, vector)
            except Exception as e:
                log_exception_with_context(
                    logger,
                    "Failed to store chunk vector, skipping",
                    e,
                    model_id=model_id,
                    chunk_hash=chunk.hash,
                    vector=vector,
                )
                return None

        outcomes = await asyncio.gather(*(embed_one(chunk) for chunk in pending))

        embedded_now = sum(1 for outcome in outcomes if outcome is True)
        raced = sum(1 for outcome in outcomes if outcome is False)
        failed = sum(1 for outcome in outcomes if outcome is None)

        logger.info(
            "Embedded new chunks",
            extra={
                "model_id": model_id,
                "embedded_now": embedded_now,
                "failed": failed,
                "total_chunks": len(chunks),
            },
        )
        return EmbedResult(
            model_id=model_id,
            embedded_now=embedded_now,
            skipped_existing=skipped + raced,
            failed=failed,
            total_current_chunks=len(chunks),
        )

    async def _insert(self, model_id: str, chunk: Chunk, vector: Sequence[float]) -> bool:
        """Insert one vector in its own transaction. False if it already existed."""
        async with self.session() as session:
            async with session.begin():
                return await embedding_crud.insert_if_absent(
                    session,
                    model_id=model_id,
                    chunk_hash=chunk.hash,
                    chunk_text=chunk.text,
                    embedding=pack_vector(vector),
                )

    async def coverage(self, model_id: str, chunks: Sequence[Chunk]) -> Coverage:
        """
        Live coverage of the given chunking under a model.

        Args:
            model_id: Embedding model ID
            chunks: Current chunking of the document

        Returns:
            Coverage: total, embedded and rounded percentage
        """
        stored = await self.stored_hashes(model_id)
        total = len(chunks)
        embedded = sum(1 for chunk in chunks if chunk.hash in stored)
        return Coverage(
            total=total,
            embedded=embedded,
            percentage=coverage_percentage(embedded, total),
        )

    async def delete_model_embeddings(self, model_id: str) -> int:
        """
        Delete every vector stored under a model and zero its coverage row.

        The model stays registered.

        Args:
            model_id: Embedding model ID

        Returns:
            int: Number of vectors deleted
        """
        async with self._write_lock:
            async with self.session() as session:
                async with session.begin():
                    deleted = await embedding_crud.delete_for_model(session, model_id)
                    await embedding_state_crud.upsert(
                        session,
                        model_id=model_id,
                        last_content_hash=None,
                        total_chunks=0,
                        embedded_chunks=0,
                    )

        logger.info(
            "Deleted model embeddings",
            extra={"model_id": model_id, "deleted": deleted},
        )
        return deleted

    async def load_vectors(self, model_id: str) -> list[StoredVector]:
        """
        Load every stored vector for a model.

        Args:
            model_id: Embedding model ID

        Returns:
            list[StoredVector]: Vectors in insertion order
        """
        async with self.session() as session:
            rows = await embedding_crud.get_for_model(session, model_id)
        return [
            StoredVector(
                chunk_hash=row.chunk_hash,
                chunk_text=row.chunk_text,
                vector=unpack_vector(row.embedding),
            )
            for row in rows
        ]

    async def write_state(
        self,
        model_id: str,
        content_hash: str | None,
        coverage: Coverage,
    ) -> None:
        """
        Record the latest coverage numbers in the diagnostic cache.

        Args:
            model_id: Embedding model ID
            content_hash: Hash of the document text the numbers refer to
            coverage: Freshly computed coverage
        """
        async with self._write_lock:
            async with self.session() as session:
                async with session.begin():
                    await embedding_state_crud.upsert(
                        session,
                        model_id=model_id,
                        last_content_hash=content_hash,
                        total_chunks=coverage.total,
                        embedded_chunks=coverage.embedded,
                    )

    async def get_state(self, model_id: str) -> EmbeddingState | None:
        """
        Read the cached coverage row for a model.

        Diagnostic only; coverage() is the authoritative number.
        """
        async with self.session() as session:
            row = await embedding_state_crud.get_by_id(session, model_id)
        if row is None:
            return None
        return EmbeddingState(
            model_id=row.embedding_model_id,
            last_content_hash=row.last_content_hash,
            total_chunks=row.total_chunks,
            embedded_chunks=row.embedded_chunks,
            updated_at=row.updated_at,
        )
