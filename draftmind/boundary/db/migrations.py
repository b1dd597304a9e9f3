"""
Embedding store schema migration.

Brings a database written by the single-model schema up to the
per-model schema. The single-model schema keyed embeddings by chunk hash
alone and kept one coverage row with id = 1; neither table had an
embedding_model_id column.

The upgrade renames each legacy table, recreates it with the namespaced
schema, copies every row forward under the default model ID and drops
the legacy copy. A *_legacy table left behind by an interrupted run is
picked up and finished on the next run. Safe to run on every startup.

Dependencies: sqlalchemy
System role: Schema initialization and upgrade for the embedding store
"""

import logging
from dataclasses import dataclass, field

from sqlalchemy import Connection, inspect, text
from sqlalchemy.exc import SQLAlchemyError

from draftmind.boundary.db.base import Base
from draftmind.boundary.db.models.embedding_model import (
    EMBEDDING_STATE_TABLE,
    EMBEDDINGS_TABLE,
    MODEL_ID_COLUMN,
)
from draftmind.core.exceptions import StoreMigrationError

# Import all models to register them with Base.metadata
from draftmind.boundary.db.models import (  # noqa: F401
    DocumentModel,
    EmbeddingRecordModel,
    EmbeddingStateModel,
    RegisteredModel,
)

logger = logging.getLogger(__name__)

LEGACY_SUFFIX = "_legacy"


@dataclass
class MigrationReport:
    """What a schema upgrade run changed."""

    migrated_tables: list[str] = field(default_factory=list)
    copied_rows: dict[str, int] = field(default_factory=dict)
    registered_models: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.migrated_tables)


def _column_names(conn: Connection, table: str) -> set[str]:
    return {column["name"] for column in inspect(conn).get_columns(table)}


def _table_names(conn: Connection) -> set[str]:
    return set(inspect(conn).get_table_names())


def _needs_upgrade(conn: Connection, table: str) -> bool:
    return table in _table_names(conn) and MODEL_ID_COLUMN not in _column_names(conn, table)


def _copy_embeddings(conn: Connection, legacy: str, default_model_id: str) -> int:
    columns = _column_names(conn, legacy)
    created_at = "created_at" if "created_at" in columns else "CURRENT_TIMESTAMP"
    result = conn.execute(
        text(
            f"INSERT OR IGNORE INTO {EMBEDDINGS_TABLE} "
            f"({MODEL_ID_COLUMN}, chunk_text, chunk_hash, embedding, created_at) "
            f"SELECT :model_id, chunk_text, chunk_hash, embedding, "
            f"COALESCE({created_at}, CURRENT_TIMESTAMP) FROM {legacy}"
        ),
        {"model_id": default_model_id},
    )
    return result.rowcount


def _copy_state(conn: Connection, legacy: str, default_model_id: str) -> int:
    # The single-model schema only ever wrote the id = 1 row
    columns = _column_names(conn, legacy)
    where = "WHERE id = 1" if "id" in columns else "LIMIT 1"
    result = conn.execute(
        text(
            f"INSERT OR IGNORE INTO {EMBEDDING_STATE_TABLE} "
            f"({MODEL_ID_COLUMN}, last_content_hash, total_chunks, embedded_chunks, updated_at) "
            f"SELECT :model_id, last_content_hash, total_chunks, embedded_chunks, updated_at "
            f"FROM {legacy} {where}"
        ),
        {"model_id": default_model_id},
    )
    return result.rowcount


_COPIERS = {
    EMBEDDINGS_TABLE: _copy_embeddings,
    EMBEDDING_STATE_TABLE: _copy_state,
}


def upgrade_legacy_schema(conn: Connection, default_model_id: str) -> MigrationReport:
    """
    Create missing tables and upgrade legacy single-model tables.

    Runs inside the caller's transaction. Intended for
    ``AsyncConnection.run_sync``.

    Args:
        conn: Sync connection with an open transaction
        default_model_id: Model ID legacy rows are assigned to

    Returns:
        MigrationReport: Tables upgraded, rows copied and models registered

    Raises:
        StoreMigrationError: If any DDL or copy statement fails
    """
    report = MigrationReport()
    current_table = None

    try:
        for table in _COPIERS:
            current_table = table
            if _needs_upgrade(conn, table):
                logger.info(
                    "Renaming legacy table",
                    extra={"table": table, "legacy_table": table + LEGACY_SUFFIX},
                )
                conn.execute(text(f"ALTER TABLE {table} RENAME TO {table}{LEGACY_SUFFIX}"))

        current_table = None
        Base.metadata.create_all(conn)

        tables = _table_names(conn)
        for table, copier in _COPIERS.items():
            legacy = table + LEGACY_SUFFIX
            if legacy not in tables:
                continue
            current_table = table
            copied = copier(conn, legacy, default_model_id)
            conn.execute(text(f"DROP TABLE {legacy}"))
            report.migrated_tables.append(table)
            report.copied_rows[table] = copied
            logger.info(
                "Legacy table migrated",
                extra={"table": table, "copied_rows": copied, "model_id": default_model_id},
            )

        current_table = None
        report.registered_models = _register_known_models(conn, default_model_id)
    except SQLAlchemyError as e:
        raise StoreMigrationError(
            f"Embedding store schema upgrade failed: {e}",
            table=current_table,
        ) from e

    return report


def _register_known_models(conn: Connection, default_model_id: str) -> list[str]:
    """Register the default model and any model that has coverage rows."""
    conn.execute(
        text("INSERT OR IGNORE INTO embedding_models (model_id) VALUES (:model_id)"),
        {"model_id": default_model_id},
    )
    conn.execute(
        text(
            f"INSERT OR IGNORE INTO embedding_models (model_id) "
            f"SELECT {MODEL_ID_COLUMN} FROM {EMBEDDING_STATE_TABLE} "
            f"WHERE {MODEL_ID_COLUMN} IS NOT NULL AND {MODEL_ID_COLUMN} != ''"
        )
    )
    result = conn.execute(text("SELECT model_id FROM embedding_models ORDER BY model_id"))
    return [row[0] for row in result]
