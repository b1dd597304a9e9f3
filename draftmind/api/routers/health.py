"""
Health check API endpoints.

Routes: GET /health, GET /health/store

Dependencies: draftmind.boundary
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from draftmind.api.deps.dependencies import get_store
from draftmind.boundary.vdb.embedding_store import EmbeddingStore


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/store", response_model=HealthResponse)
async def health_check_store(store: EmbeddingStore = Depends(get_store)):
    """Embedding store health check."""
    if await store.ping():
        return HealthResponse(status="healthy", message="Embedding store accessible")
    return JSONResponse(
        status_code=503,
        content=HealthResponse(status="unhealthy", message="Embedding store unavailable").model_dump(),
    )
