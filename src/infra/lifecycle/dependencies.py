from fastapi import Depends
from fastapi import Request
import httpx

from src.application.search.search import SearchService
from src.core.config.settings import Settings, get_settings
from src.services.llm import LLMService, OpenRouterLLMService


async def get_http_client(request: Request) -> httpx.AsyncClient:
    """
    Get the shared upstream HTTP client from app state.
    Use this in routes instead of creating a client per request.
    """
    return request.app.state.http_client


def get_llm_service(
    http_client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> LLMService:
    """LLM service bound to the shared HTTP client."""
    return OpenRouterLLMService(http_client, settings)


def get_search_service(
    llm_service: LLMService = Depends(get_llm_service),
    settings: Settings = Depends(get_settings),
) -> SearchService:
    """Search service with all dependencies injected."""
    return SearchService(llm_service, settings)
