from typing import Annotated

from fastapi import APIRouter, Depends

from src.application.search.search import SearchService
from src.domains.search.schemas import SearchRequest, SearchResponse
from src.infra.lifecycle.dependencies import get_search_service

router = APIRouter(prefix="/search", tags=["search"])


@router.post("", response_model=SearchResponse)
async def search(
    request: SearchRequest,
    search_service: Annotated[SearchService, Depends(get_search_service)],
):
    """
    Answer a query with a direct answer and related follow-up questions.

    Errors are mapped to ``{"message": ...}`` bodies by the app exception handlers.
    """
    return await search_service.search(request.query)
