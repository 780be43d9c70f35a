"""SearchService tests: validation and credential checks happen before upstream."""

import pytest
from unittest.mock import AsyncMock

from src.application.search.search import SearchService
from src.domains.search.errors import InvalidQuery, MissingAPIKey, UpstreamError
from src.domains.search.normalizer import FALLBACK_PEOPLE_ALSO_ASK


@pytest.mark.asyncio
async def test_search_returns_normalized_response(mock_llm, settings):
    service = SearchService(mock_llm, settings)

    response = await service.search("What is the capital of France?")

    assert response.direct_answer == "Paris is the capital of France."
    assert len(response.people_also_ask) == 5
    mock_llm.complete.assert_awaited_once()


@pytest.mark.asyncio
async def test_prompt_carries_query_and_schema(mock_llm, settings):
    service = SearchService(mock_llm, settings)

    await service.search("  Why is the sky blue?  ")

    prompt = mock_llm.complete.await_args.args[0]
    assert "Question: Why is the sky blue?" in prompt
    assert '"direct_answer"' in prompt
    assert '"people_also_ask"' in prompt


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["", "   ", "\n\t"])
async def test_blank_query_never_reaches_upstream(mock_llm, settings, query):
    service = SearchService(mock_llm, settings)

    with pytest.raises(InvalidQuery):
        await service.search(query)

    mock_llm.complete.assert_not_awaited()


@pytest.mark.asyncio
async def test_missing_credential_never_reaches_upstream(mock_llm, settings_without_key):
    service = SearchService(mock_llm, settings_without_key)

    with pytest.raises(MissingAPIKey) as exc_info:
        await service.search("anything")

    assert "DEEPSEEK_API_KEY" in str(exc_info.value)
    mock_llm.complete.assert_not_awaited()


@pytest.mark.asyncio
async def test_upstream_errors_propagate(settings):
    llm = AsyncMock()
    llm.complete = AsyncMock(side_effect=UpstreamError("OpenRouter API error: 502", status=502))
    service = SearchService(llm, settings)

    with pytest.raises(UpstreamError):
        await service.search("anything")

    assert llm.complete.await_count == 1


@pytest.mark.asyncio
async def test_prose_completion_is_absorbed(settings):
    llm = AsyncMock()
    llm.complete = AsyncMock(return_value="I think the answer is probably forty-two.")
    service = SearchService(llm, settings)

    response = await service.search("meaning of life")

    assert response.direct_answer == "I think the answer is probably forty-two."
    assert [(i.question, i.answer) for i in response.people_also_ask] == list(
        FALLBACK_PEOPLE_ALSO_ASK
    )
