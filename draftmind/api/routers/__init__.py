"""API routers."""

from .embeddings import router as embeddings_router
from .health import router as health_router
from .rag import router as rag_router

__all__ = [
    "embeddings_router",
    "health_router",
    "rag_router",
]
