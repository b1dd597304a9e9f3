"""
OpenRouter embeddings client.

LangChain Embeddings implementation over OpenRouter's OpenAI-compatible
/embeddings endpoint. Every failure mode (HTTP status, transport error,
timeout, malformed body) surfaces as ProviderError.

Dependencies: langchain_core, httpx, pydantic
System role: Embedding generation adapter
"""

import logging
from typing import Any

import httpx
from langchain_core.embeddings import Embeddings
from pydantic import ValidationError as PydanticValidationError

from draftmind.boundary.embeddings.schemas import EmbeddingResponse, ProviderErrorBody
from draftmind.core.exceptions import ConfigurationError, ProviderError

logger = logging.getLogger(__name__)


class OpenRouterEmbeddings(Embeddings):
    """Embeddings bound to a single OpenRouter model."""

    def __init__(
        self,
        model: str,
        api_key: str,
        base_url: str = "https://openrouter.ai/api/v1",
        app_url: str = "http://localhost:3000",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize embeddings client.

        Args:
            model: OpenRouter model ID, e.g. qwen/qwen3-embedding-8b
            api_key: OpenRouter API key
            base_url: API base URL
            app_url: Sent as HTTP-Referer
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)

        Raises:
            ConfigurationError: When api_key is empty
        """
        if not api_key:
            raise ConfigurationError("OPENROUTER_API_KEY not set", setting="OPENROUTER_API_KEY")
        self.model = model
        self._api_key = api_key
        self._url = base_url.rstrip("/") + "/embeddings"
        self._app_url = app_url
        self._timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self._app_url,
        }

    def _payload(self, texts: str | list[str]) -> dict[str, Any]:
        return {"model": self.model, "input": texts}

    def _client_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"timeout": self._timeout}
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return kwargs

    def _parse(self, response: httpx.Response, expected: int) -> list[list[float]]:
        """
        Validate a provider response and extract vectors in input order.

        Raises:
            ProviderError: On error status, error body or malformed payload
        """
        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_error or (isinstance(body, dict) and body.get("error") is not None):
            message = "Failed to get embedding"
            if isinstance(body, dict) and isinstance(body.get("error"), dict):
                try:
                    message = ProviderErrorBody.model_validate(body["error"]).message
                except PydanticValidationError:
                    pass
            raise ProviderError(
                message,
                model_id=self.model,
                status_code=response.status_code,
            )

        if body is None:
            raise ProviderError(
                "Embedding response was not valid JSON",
                model_id=self.model,
                status_code=response.status_code,
            )

        try:
            parsed = EmbeddingResponse.model_validate(body)
        except PydanticValidationError as e:
            raise ProviderError(
                "Malformed embedding response",
                model_id=self.model,
                status_code=response.status_code,
                details={"errors": e.error_count()},
            ) from e

        if len(parsed.data) != expected:
            raise ProviderError(
                f"Expected {expected} embeddings, received {len(parsed.data)}",
                model_id=self.model,
                status_code=response.status_code,
            )

        return [datum.embedding for datum in sorted(parsed.data, key=lambda d: d.index)]

    def _transport_error(self, exc: httpx.HTTPError) -> ProviderError:
        if isinstance(exc, httpx.TimeoutException):
            message = f"Embedding request timed out after {self._timeout}s"
        else:
            message = f"Embedding request failed: {type(exc).__name__}"
        logger.warning(
            "Embedding request error",
            extra={"model_id": self.model, "error_type": type(exc).__name__},
        )
        return ProviderError(message, model_id=self.model)

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """
        Embed several texts in one request.

        Args:
            texts: Texts to embed

        Returns:
            list[list[float]]: One vector per input, in order
        """
        if not texts:
            return []
        try:
            with httpx.Client(**self._client_kwargs()) as client:
                response = client.post(self._url, headers=self._headers(), json=self._payload(texts))
        except httpx.HTTPError as e:
            raise self._transport_error(e) from e
        return self._parse(response, expected=len(texts))

    def embed_query(self, text: str) -> list[float]:
        """
        Embed a single text.

        Args:
            text: Text to embed

        Returns:
            list[float]: Embedding vector
        """
        try:
            with httpx.Client(**self._client_kwargs()) as client:
                response = client.post(self._url, headers=self._headers(), json=self._payload(text))
        except httpx.HTTPError as e:
            raise self._transport_error(e) from e
        return self._parse(response, expected=1)[0]

    async def aembed_documents(self, texts: list[str]) -> list[list[float]]:
        """Async variant of embed_documents."""
        if not texts:
            return []
        try:
            async with httpx.AsyncClient(**self._client_kwargs()) as client:
                response = await client.post(
                    self._url, headers=self._headers(), json=self._payload(texts)
                )
        except httpx.HTTPError as e:
            raise self._transport_error(e) from e
        return self._parse(response, expected=len(texts))

    async def aembed_query(self, text: str) -> list[float]:
        """Async variant of embed_query."""
        try:
            async with httpx.AsyncClient(**self._client_kwargs()) as client:
                response = await client.post(
                    self._url, headers=self._headers(), json=self._payload(text)
                )
        except httpx.HTTPError as e:
            raise self._transport_error(e) from e
        return self._parse(response, expected=1)[0]
