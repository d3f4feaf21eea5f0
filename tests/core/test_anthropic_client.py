import json

import httpx
import pytest

from core import metrics
from core.config.schemas.llm import LLMConfig
from core.errors import CompletionFailed
from core.llm import AnthropicClient, extract_text
from core.sessions import ASSISTANT, USER, Turn


def _turns():
    return [
        Turn(USER, "Is democracy fragile?", 1.0),
        Turn(ASSISTANT, "Interesting. Why do you think so?", 2.0),
        Turn(USER, "Because institutions erode.", 3.0),
    ]


def _client(handler, api_key="sk-test"):
    return AnthropicClient(
        api_key=api_key,
        model="test-model",
        max_tokens=50,
        base_url="https://llm.example",
        transport=httpx.MockTransport(handler),
    )


def test_complete_sends_full_history_and_extracts_text():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200, json={"content": [{"type": "text", "text": "Push further."}]}
        )

    out = _client(handler).complete("SYS", _turns())
    assert out == "Push further."
    assert seen["url"] == "https://llm.example/v1/messages"
    assert seen["headers"]["x-api-key"] == "sk-test"
    assert seen["headers"]["anthropic-version"] == "2023-06-01"
    body = seen["body"]
    assert body["system"] == "SYS"
    assert body["model"] == "test-model"
    assert body["max_tokens"] == 50
    assert [m["role"] for m in body["messages"]] == [USER, ASSISTANT, USER]
    assert metrics.counter("completion_requests_total", {"status": "ok"}) == 1


def test_provider_error_message_is_kept():
    def handler(request):
        return httpx.Response(
            529, json={"error": {"type": "overloaded", "message": "Overloaded"}}
        )

    with pytest.raises(CompletionFailed) as ei:
        _client(handler).complete("SYS", _turns())
    assert ei.value.message == "Overloaded"
    assert metrics.counter("completion_requests_total", {"status": "error"}) == 1


def test_status_without_body_detail():
    def handler(request):
        return httpx.Response(500, text="nope")

    with pytest.raises(CompletionFailed, match="API request failed: 500"):
        _client(handler).complete("SYS", _turns())


def test_transport_failure_collapses_to_completion_failed():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(CompletionFailed, match="transport error"):
        _client(handler).complete("SYS", _turns())


def test_malformed_body():
    def handler(request):
        return httpx.Response(200, json={"content": []})

    with pytest.raises(CompletionFailed, match="malformed"):
        _client(handler).complete("SYS", _turns())


def test_missing_api_key_fails_without_calling_out():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"content": [{"text": "x"}]})

    with pytest.raises(CompletionFailed, match="API key"):
        _client(handler, api_key=None).complete("SYS", _turns())
    assert calls == []


def test_from_config_reads_key_from_env(monkeypatch):
    monkeypatch.setenv("MY_KEY", "sk-env")
    cfg = LLMConfig(api_key_env="MY_KEY", model="m", base_url="https://x/")

    def handler(request):
        assert request.headers["x-api-key"] == "sk-env"
        return httpx.Response(200, json={"content": [{"text": "ok"}]})

    client = AnthropicClient.from_config(cfg, transport=httpx.MockTransport(handler))
    assert client.info().model == "m"
    assert client.complete("S", _turns()) == "ok"
    client.close()


def test_extract_text_rejects_non_string():
    with pytest.raises(CompletionFailed):
        extract_text({"content": [{"text": None}]})
    assert extract_text({"content": [{"text": "hi"}]}) == "hi"
