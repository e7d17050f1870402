"""Gemini provider tests over a mocked HTTP transport."""

import json

import httpx
import pytest

from crew_api.exceptions import AIProviderError
from crew_api.models.domain.planning import Task
from crew_api.providers.gemini import GeminiProvider
from crew_api.services.planning_service import ASSIGNMENT_SCHEMA, TaskAssignmentAdvisor
from tests.fakes import make_employee


@pytest.fixture
def gemini_reply(monkeypatch):
    """Route every httpx client to a transport answering with the given body."""
    replies = {}
    real_client = httpx.AsyncClient

    def handler(request: httpx.Request) -> httpx.Response:
        replies["request"] = request
        return httpx.Response(replies.get("status", 200), json=replies["body"])

    def client(*args, **kwargs):
        return real_client(transport=httpx.MockTransport(handler))

    monkeypatch.setattr(httpx, "AsyncClient", client)
    return replies


class TestGenerateJson:
    async def test_joins_text_parts(self, gemini_reply) -> None:
        gemini_reply["body"] = {"candidates": [{"content": {"parts": [{"text": '{"assign'}, {"text": 'ments": []}'}]}}]}
        provider = GeminiProvider("key", "gemini-test")

        text = await provider.generate_json("prompt", ASSIGNMENT_SCHEMA)

        assert json.loads(text) == {"assignments": []}
        request = gemini_reply["request"]
        assert request.url.path.endswith("/models/gemini-test:generateContent")
        assert request.headers["x-goog-api-key"] == "key"
        assert json.loads(request.content)["generationConfig"]["responseMimeType"] == "application/json"

    @pytest.mark.parametrize(
        "body",
        [
            {"candidates": [{"content": {"parts": None}}]},
            {"candidates": [{"content": {"parts": ["not a dict"]}}]},
            {"candidates": [{"content": None}]},
            {"candidates": []},
            {"promptFeedback": {"blockReason": "SAFETY"}},
            ["unexpected"],
        ],
    )
    async def test_malformed_candidates_raise_provider_error(self, gemini_reply, body) -> None:
        gemini_reply["body"] = body
        with pytest.raises(AIProviderError):
            await GeminiProvider("key", "gemini-test").generate_json("prompt", ASSIGNMENT_SCHEMA)

    async def test_http_error_raises_provider_error(self, gemini_reply) -> None:
        gemini_reply["status"] = 503
        gemini_reply["body"] = {"error": "unavailable"}
        with pytest.raises(AIProviderError):
            await GeminiProvider("key", "gemini-test").generate_json("prompt", ASSIGNMENT_SCHEMA)


class TestAdvisorOverGemini:
    async def test_null_parts_yield_no_suggestion(self, gemini_reply) -> None:
        gemini_reply["body"] = {"candidates": [{"content": {"parts": None}}]}
        advisor = TaskAssignmentAdvisor(GeminiProvider("key", "gemini-test"))

        assignments = await advisor.suggest([make_employee("EMP-1")], [Task(id="T-1", title="Inventaire")], [])

        assert assignments == []
