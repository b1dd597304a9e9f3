"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, draftmind.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

from contextlib import asynccontextmanager
import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from draftmind.api.deps.dependencies import ServiceContainer
from draftmind.configs import Settings, get_settings
from draftmind.observability.logger import configure_logging
from draftmind.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)
from .routers import embeddings_router, health_router, rag_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Opens the embedding store (running any schema upgrade) on startup
    and closes it on shutdown. A failed upgrade aborts startup.
    """
    container: ServiceContainer = app.state.container

    logger.info("Opening embedding store...")
    await container.startup()
    logger.info(
        "Embedding store ready",
        extra={"default_model_id": container.store.default_model_id},
    )

    yield

    await container.shutdown()
    logger.info("Embedding store closed")


def create_app(
    settings: Settings | None = None,
    container: ServiceContainer | None = None,
) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        settings: Settings override (defaults to environment settings)
        container: Prebuilt service container (tests)

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Draftmind Retrieval API",
        description="Document embedding, coverage and context retrieval for the writing assistant",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.container = container or ServiceContainer(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(embeddings_router, prefix="/api/v1")
    app.include_router(rag_router, prefix="/api/v1")

    return app


if __name__ == "__main__":
    uvicorn.run(
        "draftmind.api.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
    )
