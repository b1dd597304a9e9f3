"""
Retrieval service orchestrator.

Embeds the query, scans the model's stored vectors and returns the
ranked, thresholded context block.

Dependencies: draftmind.core.retriever, draftmind.boundary
System role: Retrieval orchestration
"""

import logging

from draftmind.boundary.embeddings.provider import EmbeddingProvider
from draftmind.boundary.vdb.embedding_store import EmbeddingStore
from draftmind.configs.retrieval import RetrievalSettings
from draftmind.core.exceptions import (
    ConfigurationError,
    ProviderError,
    ValidationError,
)
from draftmind.core.retriever import Retriever, build_context
from draftmind.models.rag import RetrievalResult
from draftmind.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class RetrievalService:
    """Retrieval service orchestrator."""

    def __init__(
        self,
        store: EmbeddingStore,
        provider: EmbeddingProvider,
        settings: RetrievalSettings | None = None,
    ) -> None:
        """
        Initialize retrieval service.

        Args:
            store: Open embedding store
            provider: Embedding provider port
            settings: Ranking defaults (top_k, threshold)
        """
        self.store = store
        self.provider = provider
        settings = settings or RetrievalSettings()
        self.retriever = Retriever(top_k=settings.top_k, threshold=settings.similarity_threshold)

    async def retrieve(
        self,
        query: str,
        model_id: str | None = None,
        top_k: int | None = None,
        threshold: float | None = None,
    ) -> RetrievalResult:
        """
        Retrieve context for a query.

        Provider and store failures degrade to an empty result. A missing
        credential is a configuration problem and is raised.

        Args:
            query: Free-text query
            model_id: Embedding model namespace (default model if omitted)
            top_k: Override for the number of results kept
            threshold: Override for the relevance threshold

        Returns:
            RetrievalResult: Ranked chunks and their context block

        Raises:
            ValidationError: If the query is blank
            ConfigurationError: If the provider credential is missing
        """
        if not query or not query.strip():
            raise ValidationError("Query required", field="query")

        model_id = (model_id or "").strip() or self.store.default_model_id
        self.provider.ensure_configured()

        try:
            query_vector = await self.provider.embed(query, model_id)
        except Exception as e:
            log_exception_with_context(
                logger,
                "Query embedding failed, returning empty context",
                e,
                level=logging.WARNING if isinstance(e, ProviderError) else logging.ERROR,
                model_id=model_id,
                query=query,
            )
            return RetrievalResult(model_id=model_id)

        try:
            stored = await self.store.load_vectors(model_id)
            chunks = self.retriever.rank(query_vector, stored, top_k=top_k, threshold=threshold)
        except Exception as e:
            log_exception_with_context(
                logger,
                "Ranking stored vectors failed, returning empty context",
                e,
                model_id=model_id,
            )
            return RetrievalResult(model_id=model_id)

        logger.info(
            "Context retrieved",
            extra={
                "model_id": model_id,
                "candidates": len(stored),
                "returned": len(chunks),
            },
        )
        return RetrievalResult(model_id=model_id, context=build_context(chunks), chunks=chunks)

    async def get_context(self, query: str, model_id: str | None = None) -> str:
        """
        Context block for a generation prompt.

        Never raises: consumers fold the result into their own prompt and
        must not be blocked by retrieval problems.

        Args:
            query: Text to find context for
            model_id: Embedding model namespace (default model if omitted)

        Returns:
            str: Context block, "" when nothing relevant is available
        """
        try:
            result = await self.retrieve(query, model_id)
        except (ValidationError, ConfigurationError) as e:
            logger.info("Context unavailable", extra={"error": str(e)})
            return ""
        except Exception as e:
            log_exception_with_context(logger, "Context retrieval failed", e, model_id=model_id)
            return ""
        return result.context
