import httpx
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock

from src.core.config.settings import get_settings
from src.domains.search.errors import EmptyUpstreamResponse, UpstreamError
from src.domains.search.normalizer import FALLBACK_PEOPLE_ALSO_ASK
from src.infra.lifecycle.dependencies import get_http_client, get_llm_service
from src.main import app


def test_search_success(api_client, mock_llm):
    response = api_client.post("/api/search", json={"query": "Capital of France?"})

    assert response.status_code == 200
    data = response.json()
    assert data["direct_answer"] == "Paris is the capital of France."
    assert len(data["people_also_ask"]) == 5
    assert data["people_also_ask"][0] == {"question": "Question 1?", "answer": "Answer 1."}
    mock_llm.complete.assert_awaited_once()


def test_search_repairs_fenced_json(api_client, mock_llm):
    mock_llm.complete.return_value = (
        '```json\n{"direct_answer":"X","people_also_ask":[{"question":"Q","answer":"A"},]}\n```'
    )

    response = api_client.post("/api/search", json={"query": "anything"})

    assert response.status_code == 200
    assert response.json() == {
        "direct_answer": "X",
        "people_also_ask": [{"question": "Q", "answer": "A"}],
    }


def test_search_prose_uses_filler(api_client, mock_llm):
    mock_llm.complete.return_value = "The model ignored the format and just answered."

    response = api_client.post("/api/search", json={"query": "anything"})

    assert response.status_code == 200
    data = response.json()
    assert data["direct_answer"] == "The model ignored the format and just answered."
    assert [(i["question"], i["answer"]) for i in data["people_also_ask"]] == list(
        FALLBACK_PEOPLE_ALSO_ASK
    )


def test_empty_query_is_a_client_error(api_client, mock_llm):
    response = api_client.post("/api/search", json={"query": ""})

    assert response.status_code == 400
    assert response.json() == {"message": "Query cannot be empty"}
    mock_llm.complete.assert_not_awaited()


def test_missing_query_field_is_a_client_error(api_client, mock_llm):
    response = api_client.post("/api/search", json={})

    assert response.status_code == 400
    assert "message" in response.json()
    mock_llm.complete.assert_not_awaited()


def test_missing_credential(
    api_client, mock_llm, settings_without_key, override_dependencies
):
    override_dependencies(get_settings, settings_without_key)

    response = api_client.post("/api/search", json={"query": "anything"})

    assert response.status_code == 500
    assert "DEEPSEEK_API_KEY" in response.json()["message"]
    mock_llm.complete.assert_not_awaited()


def test_upstream_error(api_client, mock_llm):
    mock_llm.complete.side_effect = UpstreamError(
        "OpenRouter API error: 502 Bad Gateway", status=502
    )

    response = api_client.post("/api/search", json={"query": "anything"})

    assert response.status_code == 500
    assert response.json() == {"message": "OpenRouter API error: 502 Bad Gateway"}


def test_upstream_empty_response(api_client, mock_llm):
    mock_llm.complete.side_effect = EmptyUpstreamResponse()

    response = api_client.post("/api/search", json={"query": "anything"})

    assert response.status_code == 500
    assert response.json() == {"message": "No content received from OpenRouter API"}


def test_unexpected_error_does_not_leak_details(settings, override_dependencies):
    llm = AsyncMock()
    llm.complete = AsyncMock(side_effect=RuntimeError("secret internals"))
    override_dependencies(get_settings, settings)
    override_dependencies(get_llm_service, llm)

    client = TestClient(app, raise_server_exceptions=False)
    response = client.post("/api/search", json={"query": "anything"})

    assert response.status_code == 500
    body = response.json()
    assert "secret internals" not in body["message"]
    assert "error_id" in body


def test_search_through_real_llm_client(settings, override_dependencies):
    """Full path: route -> service -> OpenRouter client -> mocked transport."""
    upstream_calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        upstream_calls.append(request)
        content = 'Sure! {"direct_answer": "json Forty-two.", "people_also_ask": []}'
        return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})

    mock_http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    override_dependencies(get_settings, settings)
    override_dependencies(get_http_client, mock_http)

    response = TestClient(app).post("/api/search", json={"query": "answer?"})

    assert response.status_code == 200
    assert response.json() == {"direct_answer": "Forty-two.", "people_also_ask": []}
    assert len(upstream_calls) == 1
