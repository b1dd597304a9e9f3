"""
Test suite for the legacy schema upgrade.

Builds databases in the single-model layout (embeddings keyed by chunk
hash alone, one coverage row with id = 1) and checks that opening the
store moves every row under the default model.

System role: Verification of schema initialization and upgrade
"""

from pathlib import Path

import pytest
from sqlalchemy import create_engine, inspect, text

from draftmind.boundary.vdb.embedding_store import EmbeddingStore, pack_vector
from draftmind.core.chunker import hash_text
from draftmind.core.exceptions import StoreMigrationError

DEFAULT_MODEL = "qwen/qwen3-embedding-8b"

LEGACY_EMBEDDINGS_DDL = """
CREATE TABLE {name} (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    chunk_text TEXT NOT NULL,
    chunk_hash TEXT NOT NULL UNIQUE,
    embedding BLOB NOT NULL,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
)
"""

LEGACY_STATE_DDL = """
CREATE TABLE {name} (
    id INTEGER PRIMARY KEY CHECK (id = 1),
    last_content_hash TEXT,
    total_chunks INTEGER DEFAULT 0,
    embedded_chunks INTEGER DEFAULT 0,
    updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
)
"""

LEGACY_TEXTS = [
    "Paris is the capital of France.",
    "The Eiffel Tower is in Paris.",
    "Cooking pasta requires boiling water.",
]


def _sync_url(db_path: Path) -> str:
    return f"sqlite:///{db_path}"


def _create_legacy_db(
    db_path: Path,
    embeddings_table: str = "embeddings",
    state_table: str = "embedding_state",
) -> None:
    """Write a database in the single-model layout."""
    engine = create_engine(_sync_url(db_path))
    with engine.begin() as conn:
        conn.execute(text(LEGACY_EMBEDDINGS_DDL.format(name=embeddings_table)))
        conn.execute(text(LEGACY_STATE_DDL.format(name=state_table)))
        for chunk in LEGACY_TEXTS:
            conn.execute(
                text(
                    f"INSERT INTO {embeddings_table} (chunk_text, chunk_hash, embedding) "
                    "VALUES (:chunk_text, :chunk_hash, :embedding)"
                ),
                {
                    "chunk_text": chunk,
                    "chunk_hash": hash_text(chunk),
                    "embedding": pack_vector([1.0, 0.0, 0.5]),
                },
            )
        conn.execute(
            text(
                f"INSERT INTO {state_table} (id, last_content_hash, total_chunks, embedded_chunks) "
                "VALUES (1, 'legacy-hash', 3, 3)"
            )
        )
    engine.dispose()


def _table_names(db_path: Path) -> set[str]:
    engine = create_engine(_sync_url(db_path))
    try:
        with engine.connect() as conn:
            return set(inspect(conn).get_table_names())
    finally:
        engine.dispose()


class TestLegacyUpgrade:
    """Test suite for upgrading single-model databases."""

    @pytest.mark.asyncio
    async def test_rows_should_move_to_default_model(self, db_path, database_url) -> None:
        _create_legacy_db(db_path)

        async with EmbeddingStore(database_url, DEFAULT_MODEL) as store:
            assert await store.stored_hashes(DEFAULT_MODEL) == {hash_text(t) for t in LEGACY_TEXTS}
            vectors = await store.load_vectors(DEFAULT_MODEL)
            report = store.migration_report

        assert [v.chunk_text for v in vectors] == LEGACY_TEXTS
        assert vectors[0].vector == [1.0, 0.0, 0.5]
        assert report.changed
        assert report.copied_rows["embeddings"] == 3

    @pytest.mark.asyncio
    async def test_coverage_row_should_move_to_default_model(self, db_path, database_url) -> None:
        _create_legacy_db(db_path)

        async with EmbeddingStore(database_url, DEFAULT_MODEL) as store:
            state = await store.get_state(DEFAULT_MODEL)

        assert state is not None
        assert state.last_content_hash == "legacy-hash"
        assert (state.total_chunks, state.embedded_chunks) == (3, 3)

    @pytest.mark.asyncio
    async def test_legacy_tables_should_be_dropped(self, db_path, database_url) -> None:
        _create_legacy_db(db_path)

        async with EmbeddingStore(database_url, DEFAULT_MODEL):
            pass

        tables = _table_names(db_path)
        assert "embeddings_legacy" not in tables
        assert "embedding_state_legacy" not in tables
        assert {"embeddings", "embedding_state", "embedding_models"} <= tables

    @pytest.mark.asyncio
    async def test_upgrade_should_run_once(self, db_path, database_url) -> None:
        _create_legacy_db(db_path)

        async with EmbeddingStore(database_url, DEFAULT_MODEL):
            pass
        async with EmbeddingStore(database_url, DEFAULT_MODEL) as reopened:
            assert not reopened.migration_report.changed
            assert await reopened.count_vectors(DEFAULT_MODEL) == 3

    @pytest.mark.asyncio
    async def test_interrupted_upgrade_should_be_finished(self, db_path, database_url) -> None:
        _create_legacy_db(
            db_path,
            embeddings_table="embeddings_legacy",
            state_table="embedding_state_legacy",
        )

        async with EmbeddingStore(database_url, DEFAULT_MODEL) as store:
            assert await store.count_vectors(DEFAULT_MODEL) == 3

        assert "embeddings_legacy" not in _table_names(db_path)

    @pytest.mark.asyncio
    async def test_fresh_database_should_report_no_change(self, database_url) -> None:
        async with EmbeddingStore(database_url, DEFAULT_MODEL) as store:
            assert not store.migration_report.changed
            assert store.migration_report.registered_models == [DEFAULT_MODEL]

    @pytest.mark.asyncio
    async def test_models_with_coverage_rows_should_be_registered(self, database_url) -> None:
        async with EmbeddingStore(database_url, DEFAULT_MODEL) as store:
            coverage = await store.coverage("orphan-model", [])
            await store.write_state("orphan-model", None, coverage)

        async with EmbeddingStore(database_url, DEFAULT_MODEL) as reopened:
            assert "orphan-model" in await reopened.list_models()


class TestUpgradeFailure:
    """Test suite for retry and failure of the schema upgrade."""

    @pytest.mark.asyncio
    async def test_failing_upgrade_should_retry_then_raise(self, database_url, monkeypatch) -> None:
        attempts = []

        def broken_upgrade(conn, default_model_id):
            attempts.append(default_model_id)
            raise StoreMigrationError("disk I/O error", table="embeddings")

        monkeypatch.setattr(
            "draftmind.boundary.vdb.embedding_store.upgrade_legacy_schema",
            broken_upgrade,
        )
        store = EmbeddingStore(
            database_url,
            DEFAULT_MODEL,
            migration_retries=2,
            migration_backoff_seconds=0,
        )

        with pytest.raises(StoreMigrationError):
            await store.open()

        assert attempts == [DEFAULT_MODEL, DEFAULT_MODEL]
        assert not store.is_open

    @pytest.mark.asyncio
    async def test_transient_failure_should_recover(self, database_url, monkeypatch) -> None:
        from draftmind.boundary.db.migrations import upgrade_legacy_schema

        attempts = []

        def flaky_upgrade(conn, default_model_id):
            attempts.append(default_model_id)
            if len(attempts) == 1:
                raise StoreMigrationError("database is locked")
            return upgrade_legacy_schema(conn, default_model_id)

        monkeypatch.setattr(
            "draftmind.boundary.vdb.embedding_store.upgrade_legacy_schema",
            flaky_upgrade,
        )

        async with EmbeddingStore(
            database_url,
            DEFAULT_MODEL,
            migration_retries=3,
            migration_backoff_seconds=0,
        ) as store:
            assert store.is_open
            assert len(attempts) == 2
