"""Dependency injection for API routes."""

from draftmind.api.deps.dependencies import (
    ServiceContainer,
    get_container,
    get_embedding_service,
    get_retrieval_service,
    get_store,
)

__all__ = [
    "ServiceContainer",
    "get_container",
    "get_embedding_service",
    "get_retrieval_service",
    "get_store",
]
