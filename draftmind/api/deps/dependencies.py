"""
Dependency injection container.

Factory functions for FastAPI dependencies. The container owns the one
EmbeddingStore per process; the app lifespan opens and closes it.

Dependencies: draftmind.configs, draftmind.application, draftmind.boundary
System role: DI container for service injection
"""

from fastapi import Depends, Request

from draftmind.application.services import (
    DocumentSource,
    EmbeddingService,
    RetrievalService,
)
from draftmind.boundary.embeddings.provider import (
    EmbeddingProvider,
    OpenRouterEmbeddingProvider,
)
from draftmind.boundary.vdb.embedding_store import EmbeddingStore
from draftmind.configs import Settings


class ServiceContainer:
    """Container for process-wide service instances."""

    def __init__(
        self,
        settings: Settings,
        store: EmbeddingStore | None = None,
        provider: EmbeddingProvider | None = None,
    ) -> None:
        """
        Build the container from settings.

        Args:
            settings: Application settings
            store: Store override (tests); built from settings when omitted
            provider: Provider override (tests); OpenRouter when omitted
        """
        self.settings = settings
        self.store = store or EmbeddingStore(
            database_url=settings.database.database_url,
            default_model_id=settings.embeddings.default_model,
            echo=settings.database.echo_sql or settings.debug,
            embed_concurrency=settings.embeddings.embed_concurrency,
            migration_retries=settings.database.migration_retries,
            migration_backoff_seconds=settings.database.migration_backoff_seconds,
        )
        self.provider = provider or OpenRouterEmbeddingProvider(settings.embeddings)
        self.documents = DocumentSource(self.store)
        self.embedding_service = EmbeddingService(
            store=self.store,
            provider=self.provider,
            documents=self.documents,
            settings=settings.retrieval,
        )
        self.retrieval_service = RetrievalService(
            store=self.store,
            provider=self.provider,
            settings=settings.retrieval,
        )

    async def startup(self) -> None:
        """Open the store (runs the schema upgrade)."""
        await self.store.open()

    async def shutdown(self) -> None:
        """Close the store."""
        await self.store.close()


def get_container(request: Request) -> ServiceContainer:
    """Get the container attached to the running app."""
    return request.app.state.container


def get_store(container: ServiceContainer = Depends(get_container)) -> EmbeddingStore:
    """Get the process-wide embedding store."""
    return container.store


def get_embedding_service(
    container: ServiceContainer = Depends(get_container),
) -> EmbeddingService:
    """
    Get embedding service instance.

    Args:
        container: Service container (injected via Depends)

    Returns:
        EmbeddingService: Embedding service instance
    """
    return container.embedding_service


def get_retrieval_service(
    container: ServiceContainer = Depends(get_container),
) -> RetrievalService:
    """
    Get retrieval service instance.

    Args:
        container: Service container (injected via Depends)

    Returns:
        RetrievalService: Retrieval service instance
    """
    return container.retrieval_service
