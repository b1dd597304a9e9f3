"""
Shared test fixtures and configuration for entire test suite.

Provides: Temp-file embedding store, keyword-vector fake provider,
seeded documents
Dependencies: pytest, pytest-asyncio, langchain_core, sqlalchemy
System role: Test infrastructure and fixture management
"""

import itertools
import json
import re
from pathlib import Path

import pytest
from langchain_core.embeddings import Embeddings
from sqlalchemy.dialects.sqlite import insert

from draftmind.boundary.db.models import DocumentModel
from draftmind.boundary.embeddings.provider import EmbeddingProvider
from draftmind.boundary.vdb.embedding_store import EmbeddingStore
from draftmind.core.exceptions import ConfigurationError, ProviderError

DEFAULT_MODEL = "qwen/qwen3-embedding-8b"

VOCABULARY = [
    "paris",
    "france",
    "capital",
    "eiffel",
    "tower",
    "cooking",
    "pasta",
    "sauce",
    "recipe",
    "water",
]


class KeywordEmbeddings(Embeddings):
    """Deterministic bag-of-keywords embeddings that count provider calls."""

    def __init__(self, model: str, fail_on: set[str] | None = None) -> None:
        self.model = model
        self.fail_on = fail_on or set()
        self.calls: list[str] = []

    def _vector(self, text: str) -> list[float]:
        tokens = re.findall(r"[a-z]+", text.lower())
        if self.fail_on.intersection(tokens):
            raise ProviderError("Failed to get embedding", model_id=self.model, status_code=500)
        return [float(tokens.count(word)) for word in VOCABULARY]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self.embed_query(text) for text in texts]

    def embed_query(self, text: str) -> list[float]:
        self.calls.append(text)
        return self._vector(text)

    async def aembed_query(self, text: str) -> list[float]:
        return self.embed_query(text)


class FakeEmbeddingProvider(EmbeddingProvider):
    """In-process provider handing out one KeywordEmbeddings per model."""

    def __init__(self, configured: bool = True, fail_on: set[str] | None = None) -> None:
        self.configured = configured
        self.fail_on = fail_on or set()
        self.clients: dict[str, KeywordEmbeddings] = {}

    def ensure_configured(self) -> None:
        if not self.configured:
            raise ConfigurationError("OPENROUTER_API_KEY not set", setting="OPENROUTER_API_KEY")

    def embeddings_for(self, model_id: str) -> KeywordEmbeddings:
        self.ensure_configured()
        if model_id not in self.clients:
            self.clients[model_id] = KeywordEmbeddings(model_id, fail_on=self.fail_on)
        return self.clients[model_id]

    def call_count(self, model_id: str | None = None) -> int:
        if model_id is not None:
            client = self.clients.get(model_id)
            return len(client.calls) if client else 0
        return sum(len(client.calls) for client in self.clients.values())


def editor_document(*paragraphs: str) -> str:
    """Serialize paragraphs the way the editor stores them."""
    return json.dumps(
        {
            "type": "doc",
            "content": [
                {"type": "paragraph", "content": [{"type": "text", "text": paragraph}]}
                for paragraph in paragraphs
            ],
        }
    )


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path of a fresh SQLite database file."""
    return tmp_path / "data.db"


@pytest.fixture
def database_url(db_path: Path) -> str:
    """Async SQLAlchemy URL for the temp database."""
    return f"sqlite+aiosqlite:///{db_path}"


@pytest.fixture
async def store(database_url: str):
    """
    Open embedding store on a temp database file.

    Yields:
        EmbeddingStore: Open store, closed on teardown
    """
    embedding_store = EmbeddingStore(
        database_url=database_url,
        default_model_id=DEFAULT_MODEL,
        migration_backoff_seconds=0,
    )
    await embedding_store.open()
    yield embedding_store
    await embedding_store.close()


@pytest.fixture
def save_document(store: EmbeddingStore):
    """
    Write editor documents straight into the store's database.

    The editor owns document writes; tests seed rows the way it does.
    Each call gets a later updated_at than the previous one.
    """
    ticks = itertools.count(1)

    async def _save(document_id: str, content: str) -> None:
        updated_at = f"2026-01-01T00:00:{next(ticks):02d}+00:00"
        values = {"content": content, "updated_at": updated_at}
        async with store.session() as session:
            async with session.begin():
                await session.execute(
                    insert(DocumentModel)
                    .values(id=document_id, **values)
                    .on_conflict_do_update(index_elements=["id"], set_=values)
                )

    return _save


@pytest.fixture
def provider() -> FakeEmbeddingProvider:
    """Configured keyword-vector provider."""
    return FakeEmbeddingProvider()


@pytest.fixture
def failing_provider() -> FakeEmbeddingProvider:
    """Provider that fails for any text containing the word 'boom'."""
    return FakeEmbeddingProvider(fail_on={"boom"})


@pytest.fixture
def unconfigured_provider() -> FakeEmbeddingProvider:
    """Provider with no credential."""
    return FakeEmbeddingProvider(configured=False)


@pytest.fixture
def make_document():
    """Factory serializing paragraphs into editor JSON."""
    return editor_document


@pytest.fixture
def paris_text() -> str:
    """Three-sentence document that chunks to a single chunk."""
    return (
        "Paris is the capital of France. "
        "The Eiffel Tower is in Paris. "
        "Cooking pasta requires boiling water."
    )
