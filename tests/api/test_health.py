"""
Test suite for health endpoints with a mocked store.

System role: Verification of health check HTTP API
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from draftmind.api.deps import get_store
from draftmind.api.routers.health import router


@pytest.fixture
def mock_store() -> MagicMock:
    """Mocked EmbeddingStore."""
    store = MagicMock()
    store.ping = AsyncMock(return_value=True)
    return store


@pytest.fixture
def client(mock_store: MagicMock) -> TestClient:
    """TestClient for an app with the health router."""
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_store] = lambda: mock_store
    return TestClient(app)


class TestHealthEndpoints:
    """Test suite for health checks."""

    def test_liveness_should_not_touch_store(self, client, mock_store) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        mock_store.ping.assert_not_awaited()

    def test_store_check_should_report_healthy(self, client) -> None:
        response = client.get("/health/store")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "message": "Embedding store accessible"}

    def test_store_check_should_report_503_when_unreachable(self, client, mock_store) -> None:
        mock_store.ping.return_value = False

        response = client.get("/health/store")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
