"""
Chat-completion client for the upstream LLM (OpenRouter, routing to DeepSeek).

One call per search: no retry, no streaming. Failures surface as UpstreamError.
"""

import logging
from abc import ABC, abstractmethod

import httpx

from src.core.config.settings import Settings
from src.domains.search.errors import (
    EmptyUpstreamResponse,
    MissingAPIKey,
    UpstreamError,
)

logger = logging.getLogger(__name__)


class LLMService(ABC):
    """Abstract interface for text completion services."""

    @abstractmethod
    async def complete(self, prompt: str) -> str:
        pass


class OpenRouterLLMService(LLMService):
    """
    Sends a single-turn chat completion to an OpenAI-compatible endpoint.

    The HTTP client is injected so the connection pool is shared across
    requests and tests can plug in ``httpx.MockTransport``.
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings):
        self.http_client = http_client
        self.settings = settings

    def _headers(self) -> dict[str, str]:
        api_key = self.settings.LLM_API_KEY
        if not api_key:
            raise MissingAPIKey()
        return {
            "Authorization": f"Bearer {api_key}",
            "HTTP-Referer": self.settings.LLM_HTTP_REFERER,
            "X-Title": self.settings.LLM_APP_TITLE,
            "Content-Type": "application/json",
        }

    def _payload(self, prompt: str) -> dict:
        return {
            "model": self.settings.LLM_MODEL,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.settings.LLM_TEMPERATURE,
            "max_tokens": self.settings.LLM_MAX_TOKENS,
        }

    async def complete(self, prompt: str) -> str:
        url = f"{self.settings.LLM_BASE_URL.rstrip('/')}/chat/completions"
        headers = self._headers()

        try:
            response = await self.http_client.post(
                url,
                headers=headers,
                json=self._payload(prompt),
                timeout=self.settings.DEFAULT_TIMEOUT,
            )
        except httpx.HTTPError as e:
            logger.error(f"OpenRouter API request failed: {e!r}")
            raise UpstreamError(f"OpenRouter API request failed: {e}") from e

        if not response.is_success:
            logger.error(f"OpenRouter API error: {response.text}")
            raise UpstreamError(
                f"OpenRouter API error: {response.status_code} {response.reason_phrase}",
                status=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"OpenRouter API returned a non-JSON body: {response.text!r}")
            raise UpstreamError(
                "OpenRouter API returned an invalid response body",
                status=response.status_code,
            ) from e

        return extract_completion_text(data)


def extract_completion_text(data: object) -> str:
    """Return ``choices[0].message.content`` or raise EmptyUpstreamResponse."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        content = None

    if not isinstance(content, str) or not content.strip():
        raise EmptyUpstreamResponse()
    return content
