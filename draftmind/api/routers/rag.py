"""
Context retrieval endpoint.

Routes: POST /rag

Dependencies: draftmind.application.services, draftmind.models
System role: RAG retrieval HTTP API
"""

from fastapi import APIRouter, Depends

from draftmind.api.deps.dependencies import get_retrieval_service
from draftmind.application.services import RetrievalService
from draftmind.models.rag import RetrievalRequest, RetrievalResult

from .router_utils import handle_errors

router = APIRouter(prefix="/rag", tags=["rag"])


@router.post("", response_model=RetrievalResult)
@handle_errors
async def retrieve_context(
    request: RetrievalRequest,
    service: RetrievalService = Depends(get_retrieval_service),
) -> RetrievalResult:
    """
    Retrieve prompt context for a query.

    Args:
        request: RetrievalRequest with query and optional model/top_k/threshold
        service: Injected RetrievalService

    Returns:
        RetrievalResult: Context block and ranked chunks (empty on provider failure)

    Raises:
        HTTPException(400): Blank query
        HTTPException(500): Provider credential missing
    """
    return await service.retrieve(
        request.query,
        model_id=request.model_id,
        top_k=request.top_k,
        threshold=request.threshold,
    )
