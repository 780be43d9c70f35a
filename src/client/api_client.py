"""
HTTP client for the search proxy.

Counterpart of ``POST /api/search``: any non-2xx answer or transport failure
becomes a SearchRequestFailed carrying a message fit to show the user.
"""

import logging

import httpx

from src.domains.search.schemas import SearchRequest, SearchResponse

logger = logging.getLogger(__name__)


class SearchRequestFailed(Exception):
    def __init__(self, message: str, *, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.status = status


class SearchClient:
    """
    Async wrapper around the proxy's search endpoint.

    Usage:
        async with SearchClient("http://localhost:8000") as client:
            response = await client.search("What is RAG?")
    """

    SEARCH_PATH = "/api/search"

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        timeout: float = 120.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url, timeout=timeout
        )

    async def search(self, query: str) -> SearchResponse:
        payload = SearchRequest(query=query).model_dump()

        try:
            response = await self._client.post(self.SEARCH_PATH, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Search request failed: {e!r}")
            raise SearchRequestFailed(str(e) or type(e).__name__) from e

        if not response.is_success:
            raise SearchRequestFailed(
                _error_message(response), status=response.status_code
            )

        try:
            return SearchResponse.model_validate(response.json())
        except ValueError as e:
            logger.error(f"Unexpected search response body: {response.text!r}")
            raise SearchRequestFailed(
                "Unexpected response from the search server", status=response.status_code
            ) from e

    async def aclose(self):
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return f"{response.status_code}: {response.text or response.reason_phrase}"
