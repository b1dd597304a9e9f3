"""
Embedding provider port.

Abstracts "text -> vector for model X" so the store and retrieval
service never see provider-specific errors or payloads.

Dependencies: langchain_core, draftmind.configs
System role: Embedding capability boundary
"""

from abc import ABC, abstractmethod

import httpx
from langchain_core.embeddings import Embeddings

from draftmind.boundary.embeddings.openrouter_embeddings import OpenRouterEmbeddings
from draftmind.configs.embeddings import EmbeddingSettings
from draftmind.core.exceptions import ConfigurationError


class EmbeddingProvider(ABC):
    """Capability to embed text under a named model."""

    @abstractmethod
    def ensure_configured(self) -> None:
        """
        Check credentials before any chunking or network work.

        Raises:
            ConfigurationError: When the provider cannot be used
        """

    @abstractmethod
    def embeddings_for(self, model_id: str) -> Embeddings:
        """
        LangChain Embeddings bound to a model.

        Raises:
            ConfigurationError: When the provider cannot be used
        """

    async def embed(self, text: str, model_id: str) -> list[float]:
        """
        Embed one text.

        Raises:
            ConfigurationError: Missing credential
            ProviderError: The provider call failed
        """
        return await self.embeddings_for(model_id).aembed_query(text)


class OpenRouterEmbeddingProvider(EmbeddingProvider):
    """Embedding provider backed by the OpenRouter embeddings API."""

    def __init__(
        self,
        settings: EmbeddingSettings,
        transport: httpx.BaseTransport | httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize provider from settings.

        Args:
            settings: Embedding provider settings
            transport: Optional httpx transport passed to every client
        """
        self._settings = settings
        self._transport = transport
        self._clients: dict[str, OpenRouterEmbeddings] = {}

    def ensure_configured(self) -> None:
        if not self._settings.api_key:
            raise ConfigurationError("OPENROUTER_API_KEY not set", setting="OPENROUTER_API_KEY")

    def embeddings_for(self, model_id: str) -> OpenRouterEmbeddings:
        self.ensure_configured()
        client = self._clients.get(model_id)
        if client is None:
            client = OpenRouterEmbeddings(
                model=model_id,
                api_key=self._settings.api_key,
                base_url=self._settings.base_url,
                app_url=self._settings.app_url,
                timeout=self._settings.timeout_seconds,
                transport=self._transport,
            )
            self._clients[model_id] = client
        return client
