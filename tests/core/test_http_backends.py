from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from projecteval.backends import GeminiBackend, OpenAIBackend
from projecteval.errors import (
    ConfigurationError,
    ProviderBadRequestError,
    ProviderHttpError,
    ProviderRateLimitError,
    ProviderUnauthorizedError,
    ResponseParseError,
)
from projecteval.schemas import EvaluationRequest

REQUEST = EvaluationRequest.model_validate(
    {
        "projectData": {"title": "T", "description": "D", "budget": 1, "timeline": "1y", "tags": []},
        "evaluationCriteria": [{"id": "c1", "name": "C1", "description": "", "maxScore": 10, "weight": 100}],
    }
)


class RecordingTransport(httpx.MockTransport):
    def __init__(self, status: int = 200, body: object | None = None, *, raw: str | None = None) -> None:
        self.requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if raw is not None:
                return httpx.Response(status, text=raw)
            return httpx.Response(status, json=body if body is not None else {})

        super().__init__(handler)


def openai_body(text: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


def gemini_body(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def test_openai_posts_chat_completion_and_returns_text() -> None:
    transport = RecordingTransport(body=openai_body('{"scores": {}}'))
    backend = OpenAIBackend(api_key="sk-test", transport=transport)

    result = asyncio.run(backend.evaluate("PROMPT", REQUEST))

    assert result.text == '{"scores": {}}'
    sent = transport.requests[0]
    assert sent.method == "POST"
    assert sent.url.host == "api.openai.com"
    assert sent.url.path == "/v1/chat/completions"
    assert "key" not in sent.url.params
    assert sent.headers["Authorization"] == "Bearer sk-test"
    body = json.loads(sent.content)
    assert body["model"] == "gpt-4o-mini"
    assert body["temperature"] == 0.3
    assert body["max_tokens"] == 2048
    assert body["messages"][0]["role"] == "system"
    assert body["messages"][1] == {"role": "user", "content": "PROMPT"}


def test_gemini_posts_generate_content_with_query_key() -> None:
    transport = RecordingTransport(body=gemini_body("answer"))
    backend = GeminiBackend(api_key="g-key", model="gemini-1.5-pro", transport=transport)

    result = asyncio.run(backend.evaluate("PROMPT", REQUEST))

    assert result.text == "answer"
    sent = transport.requests[0]
    assert sent.url.path == "/v1beta/models/gemini-1.5-pro:generateContent"
    assert sent.url.params["key"] == "g-key"
    assert "Authorization" not in sent.headers
    body = json.loads(sent.content)
    assert body["contents"] == [{"parts": [{"text": "PROMPT"}]}]
    assert body["generationConfig"] == {"temperature": 0.3, "topK": 40, "topP": 0.95, "maxOutputTokens": 2048}


@pytest.mark.parametrize("backend_cls", [OpenAIBackend, GeminiBackend])
def test_missing_key_fails_before_network(backend_cls: type) -> None:
    transport = RecordingTransport(body={})
    backend = backend_cls(api_key="", transport=transport)

    with pytest.raises(ConfigurationError):
        asyncio.run(backend.evaluate("PROMPT", REQUEST))

    assert transport.requests == []


@pytest.mark.parametrize(
    ("status", "error_cls", "kind"),
    [
        (401, ProviderUnauthorizedError, "unauthorized"),
        (429, ProviderRateLimitError, "rate_limited"),
        (400, ProviderBadRequestError, "bad_request"),
        (500, ProviderHttpError, "generic"),
        (503, ProviderHttpError, "generic"),
    ],
)
def test_http_status_mapping(status: int, error_cls: type, kind: str) -> None:
    backend = OpenAIBackend(api_key="sk", transport=RecordingTransport(status, {"error": {"message": "x"}}))

    with pytest.raises(error_cls) as excinfo:
        asyncio.run(backend.evaluate("PROMPT", REQUEST))

    assert type(excinfo.value) is error_cls
    assert excinfo.value.kind == kind
    assert excinfo.value.status_code == status
    assert excinfo.value.provider == "openai"
    assert excinfo.value.stage == "scoring"


def test_unauthorized_and_rate_limit_are_distinguishable() -> None:
    unauthorized = GeminiBackend(api_key="k", transport=RecordingTransport(401, {}))
    limited = GeminiBackend(api_key="k", transport=RecordingTransport(429, {}))

    with pytest.raises(ProviderHttpError) as first:
        asyncio.run(unauthorized.evaluate("P", REQUEST))
    with pytest.raises(ProviderHttpError) as second:
        asyncio.run(limited.evaluate("P", REQUEST))

    assert not isinstance(first.value, ProviderRateLimitError)
    assert not isinstance(second.value, ProviderUnauthorizedError)
    assert first.value.kind != second.value.kind


def test_bad_request_message_names_model() -> None:
    backend = OpenAIBackend(api_key="sk", model="gpt-imaginary", transport=RecordingTransport(400, {}))

    with pytest.raises(ProviderBadRequestError) as excinfo:
        asyncio.run(backend.evaluate("PROMPT", REQUEST))

    assert "gpt-imaginary" in str(excinfo.value)
    assert excinfo.value.model == "gpt-imaginary"


def test_network_error_is_wrapped_as_generic_provider_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    backend = OpenAIBackend(api_key="sk", transport=httpx.MockTransport(handler))

    with pytest.raises(ProviderHttpError) as excinfo:
        asyncio.run(backend.evaluate("PROMPT", REQUEST))

    assert excinfo.value.kind == "generic"
    assert excinfo.value.status_code is None
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_non_json_body_is_a_parse_error() -> None:
    backend = OpenAIBackend(api_key="sk", transport=RecordingTransport(200, raw="<html>oops</html>"))

    with pytest.raises(ResponseParseError) as excinfo:
        asyncio.run(backend.evaluate("PROMPT", REQUEST))

    assert excinfo.value.raw_text == "<html>oops</html>"
    assert excinfo.value.stage == "scoring"


@pytest.mark.parametrize("body", [{"choices": []}, {"unexpected": True}, {"choices": [{"message": {"content": None}}]}])
def test_missing_completion_is_a_parse_error(body: dict) -> None:
    backend = OpenAIBackend(api_key="sk", transport=RecordingTransport(200, body))

    with pytest.raises(ResponseParseError) as excinfo:
        asyncio.run(backend.evaluate("PROMPT", REQUEST))

    assert excinfo.value.stage == "scoring"
