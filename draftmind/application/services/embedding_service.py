"""
Embedding service orchestrator.

Coordinates model registration, coverage reporting, incremental
embedding and deletion for the current document.

Dependencies: draftmind.boundary, draftmind.core
System role: Embedding admin and coverage reporting use cases
"""

import logging

from draftmind.application.services.document_source import DocumentSource
from draftmind.boundary.embeddings.provider import EmbeddingProvider
from draftmind.boundary.vdb.embedding_store import EmbeddingStore
from draftmind.configs.retrieval import RetrievalSettings
from draftmind.core.chunker import chunk_text, hash_text
from draftmind.core.exceptions import ValidationError
from draftmind.models.chunk import Chunk
from draftmind.models.embedding import Coverage, EmbedResult, EmbeddingStatus

logger = logging.getLogger(__name__)


class EmbeddingService:
    """Embedding service orchestrator."""

    def __init__(
        self,
        store: EmbeddingStore,
        provider: EmbeddingProvider,
        documents: DocumentSource,
        settings: RetrievalSettings | None = None,
    ) -> None:
        """
        Initialize embedding service.

        Args:
            store: Open embedding store
            provider: Embedding provider port
            documents: Document source
            settings: Chunking settings (defaults when omitted)
        """
        self.store = store
        self.provider = provider
        self.documents = documents
        self.settings = settings or RetrievalSettings()

    def resolve_model_id(self, model_id: str | None) -> str:
        """Blank or missing model IDs mean the default model."""
        if model_id is None or not model_id.strip():
            return self.store.default_model_id
        return model_id.strip()

    def chunk(self, text: str) -> list[Chunk]:
        """Chunk text with the configured parameters."""
        return chunk_text(
            text,
            chunk_size=self.settings.chunk_size,
            overlap_ratio=self.settings.overlap_ratio,
            min_chunk_length=self.settings.min_chunk_length,
        )

    async def register_model(self, model_id: str) -> bool:
        """
        Register an embedding model.

        Args:
            model_id: Embedding model ID

        Returns:
            bool: True if newly registered

        Raises:
            ValidationError: If model_id is blank
        """
        if not model_id or not model_id.strip():
            raise ValidationError("Model ID is required", field="model_id")
        return await self.store.register(model_id.strip())

    async def list_models(self) -> list[str]:
        """All registered model IDs, default model included."""
        return await self.store.list_models()

    async def get_status(
        self,
        model_id: str | None = None,
        document_id: str | None = None,
    ) -> EmbeddingStatus:
        """
        Live coverage of the current document under a model.

        Registers the model, recomputes coverage from the document and the
        store, and writes the result through to the coverage cache.

        Args:
            model_id: Embedding model ID (default model if omitted)
            document_id: Document ID (fallback document if omitted)

        Returns:
            EmbeddingStatus: Coverage numbers and whether re-embedding is needed
        """
        model_id = self.resolve_model_id(model_id)
        await self.store.register(model_id)

        text = await self.documents.get_plain_text(document_id)
        chunks = self.chunk(text)
        coverage = await self.store.coverage(model_id, chunks)
        await self.store.write_state(model_id, hash_text(text), coverage)

        logger.info(
            "Embedding status computed",
            extra={
                "model_id": model_id,
                "total_chunks": coverage.total,
                "embedded_chunks": coverage.embedded,
            },
        )
        return self._status(model_id, coverage)

    async def embed_document(
        self,
        model_id: str | None = None,
        document_id: str | None = None,
    ) -> EmbedResult:
        """
        Embed the current document's chunks not yet stored under a model.

        Args:
            model_id: Embedding model ID (default model if omitted)
            document_id: Document ID (fallback document if omitted)

        Returns:
            EmbedResult: Batch counts

        Raises:
            ConfigurationError: If the provider credential is missing; raised
                before the document is read
        """
        self.provider.ensure_configured()
        model_id = self.resolve_model_id(model_id)

        text = await self.documents.get_plain_text(document_id)
        chunks = self.chunk(text)

        embeddings = self.provider.embeddings_for(model_id)
        result = await self.store.embed_new(model_id, chunks, embeddings.aembed_query)

        coverage = await self.store.coverage(model_id, chunks)
        await self.store.write_state(model_id, hash_text(text), coverage)
        return result

    async def delete_embeddings(self, model_id: str) -> int:
        """
        Delete a model's embeddings and reset its coverage.

        An unknown model has nothing to delete and is not registered.

        Args:
            model_id: Embedding model ID

        Returns:
            int: Number of vectors deleted

        Raises:
            ValidationError: If model_id is blank
        """
        if not model_id or not model_id.strip():
            raise ValidationError("Model ID is required", field="model_id")
        model_id = model_id.strip()

        if not await self.store.is_registered(model_id):
            logger.info("Delete requested for unknown model", extra={"model_id": model_id})
            return 0
        return await self.store.delete_model_embeddings(model_id)

    @staticmethod
    def _status(model_id: str, coverage: Coverage) -> EmbeddingStatus:
        return EmbeddingStatus(
            model_id=model_id,
            total_chunks=coverage.total,
            embedded_chunks=coverage.embedded,
            percentage=coverage.percentage,
            needs_update=coverage.total > 0 and coverage.embedded < coverage.total,
        )
