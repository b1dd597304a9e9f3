"""
Embedding administration endpoints.

Routes:
- GET /embeddings/models - List registered models
- POST /embeddings/models - Register a model
- GET /embeddings/status - Coverage of the current document under a model
- POST /embeddings - Embed the current document's new chunks
- DELETE /embeddings - Delete a model's embeddings

Dependencies: draftmind.application.services, draftmind.models
System role: Embedding admin HTTP API
"""

import logging

from fastapi import APIRouter, Depends, status

from draftmind.api.deps.dependencies import get_embedding_service
from draftmind.application.services import EmbeddingService
from draftmind.models.embedding import (
    DeleteEmbeddingsResponse,
    EmbeddingStatus,
    EmbedResult,
    ModelListResponse,
    RegisterModelRequest,
)

from .router_utils import handle_errors

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/embeddings", tags=["embeddings"])


async def _model_list(service: EmbeddingService) -> ModelListResponse:
    return ModelListResponse(
        default_model_id=service.store.default_model_id,
        models=await service.list_models(),
    )


@router.get("/models", response_model=ModelListResponse)
@handle_errors
async def list_models(
    service: EmbeddingService = Depends(get_embedding_service),
) -> ModelListResponse:
    """List registered embedding models, default model included."""
    return await _model_list(service)


@router.post("/models", response_model=ModelListResponse, status_code=status.HTTP_201_CREATED)
@handle_errors
async def register_model(
    request: RegisterModelRequest,
    service: EmbeddingService = Depends(get_embedding_service),
) -> ModelListResponse:
    """
    Register an embedding model. Idempotent.

    Args:
        request: RegisterModelRequest with model_id
        service: Injected EmbeddingService

    Returns:
        ModelListResponse: Registry after registration

    Raises:
        HTTPException(400): Blank model ID
    """
    created = await service.register_model(request.model_id)
    logger.info(
        "Register model request handled",
        extra={"model_id": request.model_id, "newly_registered": created},
    )
    return await _model_list(service)


@router.get("/status", response_model=EmbeddingStatus)
@handle_errors
async def get_status(
    model_id: str | None = None,
    document_id: str | None = None,
    service: EmbeddingService = Depends(get_embedding_service),
) -> EmbeddingStatus:
    """
    Coverage of the current document under a model.

    Args:
        model_id: Embedding model ID (default model if omitted)
        document_id: Document ID (working document if omitted)
        service: Injected EmbeddingService

    Returns:
        EmbeddingStatus: total/embedded chunk counts, percentage, needs_update
    """
    return await service.get_status(model_id=model_id, document_id=document_id)


@router.post("", response_model=EmbedResult)
@handle_errors
async def embed_new_chunks(
    model_id: str | None = None,
    document_id: str | None = None,
    service: EmbeddingService = Depends(get_embedding_service),
) -> EmbedResult:
    """
    Embed chunks of the current document not yet stored under a model.

    Args:
        model_id: Embedding model ID (default model if omitted)
        document_id: Document ID (working document if omitted)
        service: Injected EmbeddingService

    Returns:
        EmbedResult: Inserted, skipped and failed chunk counts

    Raises:
        HTTPException(500): Provider credential missing
    """
    logger.info(
        "Embedding document",
        extra={"model_id": model_id, "document_id": document_id},
    )
    return await service.embed_document(model_id=model_id, document_id=document_id)


@router.delete("", response_model=DeleteEmbeddingsResponse)
@handle_errors
async def delete_embeddings(
    model_id: str | None = None,
    service: EmbeddingService = Depends(get_embedding_service),
) -> DeleteEmbeddingsResponse:
    """
    Delete every embedding stored under a model. The model stays registered.

    Args:
        model_id: Embedding model ID (required)
        service: Injected EmbeddingService

    Returns:
        DeleteEmbeddingsResponse: Number of vectors deleted

    Raises:
        HTTPException(400): Missing model ID
    """
    deleted = await service.delete_embeddings(model_id or "")
    return DeleteEmbeddingsResponse(model_id=(model_id or "").strip(), deleted=deleted)
