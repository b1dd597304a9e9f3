"""
End-to-end tests for the assembled application.

Runs the real app factory and lifespan against a temp SQLite file with
the keyword-vector provider standing in for OpenRouter.

System role: Verification of app assembly, lifespan and middleware
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text

from draftmind.api.deps.dependencies import ServiceContainer
from draftmind.api.main import create_app
from draftmind.configs import Settings
from draftmind.configs.database import DatabaseSettings
from draftmind.configs.embeddings import EmbeddingSettings

DEFAULT_MODEL = "qwen/qwen3-embedding-8b"


def _seed_document(db_path: Path, content: str) -> None:
    """Write the editor's working document before the app starts."""
    engine = create_engine(f"sqlite:///{db_path}")
    with engine.begin() as conn:
        conn.execute(
            text("CREATE TABLE documents (id VARCHAR(255) PRIMARY KEY, content TEXT, updated_at TEXT)")
        )
        conn.execute(
            text("INSERT INTO documents (id, content, updated_at) VALUES (:id, :content, :updated_at)"),
            {"id": "infinite-doc-v1", "content": content, "updated_at": "2026-01-01T00:00:00+00:00"},
        )
    engine.dispose()


@pytest.fixture
def settings(db_path: Path) -> Settings:
    """Settings pointing at the temp database."""
    return Settings(
        database=DatabaseSettings(path=str(db_path)),
        embeddings=EmbeddingSettings(api_key="sk-test", default_model=DEFAULT_MODEL),
    )


@pytest.fixture
def client(settings, provider, db_path, make_document):
    """TestClient running the full app lifespan."""
    _seed_document(
        db_path,
        make_document("Paris is the capital of France.", "The Eiffel Tower is in Paris."),
    )
    container = ServiceContainer(settings, provider=provider)
    with TestClient(create_app(settings=settings, container=container)) as test_client:
        yield test_client


class TestApplication:
    """Test suite for the assembled app."""

    def test_health_should_be_ok(self, client: TestClient) -> None:
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_store_health_should_be_ok(self, client: TestClient) -> None:
        assert client.get("/api/v1/health/store").status_code == 200

    def test_correlation_id_should_be_echoed(self, client: TestClient) -> None:
        response = client.get("/api/v1/health", headers={"X-Correlation-ID": "req-123"})

        assert response.headers["X-Correlation-ID"] == "req-123"

    def test_correlation_id_should_be_generated(self, client: TestClient) -> None:
        assert client.get("/api/v1/health").headers.get("X-Correlation-ID")

    def test_embed_then_retrieve(self, client: TestClient) -> None:
        before = client.get("/api/v1/embeddings/status").json()
        assert before["needs_update"] is True

        embedded = client.post("/api/v1/embeddings").json()
        assert embedded["embedded_now"] == embedded["total_current_chunks"] == 1

        after = client.get("/api/v1/embeddings/status").json()
        assert after["percentage"] == 100
        assert after["needs_update"] is False

        result = client.post("/api/v1/rag", json={"query": "Eiffel Tower in Paris"}).json()
        assert result["model_id"] == DEFAULT_MODEL
        assert "Eiffel Tower" in result["context"]

    def test_models_should_list_default(self, client: TestClient) -> None:
        body = client.get("/api/v1/embeddings/models").json()

        assert body["default_model_id"] == DEFAULT_MODEL
        assert body["models"] == [DEFAULT_MODEL]

    def test_delete_then_status_should_drop_coverage(self, client: TestClient) -> None:
        client.post("/api/v1/embeddings", params={"model_id": "m1"})

        deleted = client.delete("/api/v1/embeddings", params={"model_id": "m1"}).json()
        status = client.get("/api/v1/embeddings/status", params={"model_id": "m1"}).json()

        assert deleted["deleted"] == 1
        assert status["embedded_chunks"] == 0

    def test_delete_without_model_should_return_400(self, client: TestClient) -> None:
        assert client.delete("/api/v1/embeddings").status_code == 400
