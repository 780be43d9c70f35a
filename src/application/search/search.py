import logging

from src.core.config.settings import Settings
from src.domains.search.errors import InvalidQuery, MissingAPIKey
from src.domains.search.normalizer import normalize_completion
from src.domains.search.prompts import build_search_prompt
from src.domains.search.schemas import SearchResponse
from src.services.llm import LLMService

logger = logging.getLogger(__name__)


class SearchService:
    def __init__(self, llm_service: LLMService, settings: Settings):
        self.llm_service = llm_service
        self.settings = settings

    async def search(self, query: str) -> SearchResponse:
        # 1. Validate input
        if not isinstance(query, str) or not query.strip():
            raise InvalidQuery()

        # 2. Credentials are checked per request, before any upstream call
        if not self.settings.LLM_API_KEY:
            logger.error("Search rejected: no DEEPSEEK_API_KEY or API_KEY configured")
            raise MissingAPIKey()

        # 3. Prompt
        prompt = build_search_prompt(query)

        # 4. Single upstream call
        completion = await self.llm_service.complete(prompt)

        # 5. Repair, validate, clean up
        return normalize_completion(completion)
