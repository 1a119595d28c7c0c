"""Adapter tests against ``httpx.MockTransport``.

For each provider: the request body and auth placement, the verbatim error
body on a non-success status, and the placeholder reply when a successful
response lacks the text field.
"""

from __future__ import annotations

import httpx
import pytest

from llmhub.anthropic.client import AnthropicAdapter
from llmhub.base.errors import ErrorCode, ProviderError
from llmhub.base.interfaces import LLMAdapter
from llmhub.base.models import GenerationParams, Message
from llmhub.base.normalize import normalize
from llmhub.cohere.client import CohereAdapter
from llmhub.deepseek.client import DeepSeekAdapter
from llmhub.google.client import GoogleAdapter
from llmhub.mistral.client import MistralAdapter
from llmhub.openai.client import OpenAIAdapter

HISTORY = [Message("user", "Hello"), Message("assistant", "Hi!"), Message("user", "How are you?")]
PARAMS = GenerationParams(system_prompt="Be nice")

OPENAI_OK = {"choices": [{"index": 0, "message": {"role": "assistant", "content": "fine"}}]}


def _send(adapter, model: str = "m"):
    chat = normalize(HISTORY, PARAMS.system_prompt, adapter.shape)
    return adapter.generate(chat, model, "sk-test", PARAMS)  # pragma: allowlist secret - dummy test value


@pytest.mark.parametrize(
    "cls, url",
    [
        (OpenAIAdapter, "https://api.openai.com/v1/chat/completions"),
        (DeepSeekAdapter, "https://api.deepseek.com/v1/chat/completions"),
        (MistralAdapter, "https://api.mistral.ai/v1/chat/completions"),
    ],
)
def test_openai_style_request(cls, url, recorder):
    rec = recorder(200, OPENAI_OK)
    adapter = cls(client=rec.client())
    assert isinstance(adapter, LLMAdapter)  # nosec B101
    assert _send(adapter, "gpt-4o-mini") == "fine"  # nosec B101

    req = rec.last
    assert str(req.url) == url  # nosec B101
    assert req.headers["Authorization"] == "Bearer sk-test"  # nosec B101
    body = rec.last_json()
    assert body["model"] == "gpt-4o-mini"  # nosec B101
    assert body["messages"][0] == {"role": "system", "content": "Be nice"}  # nosec B101
    assert [m["role"] for m in body["messages"]] == ["system", "user", "assistant", "user"]  # nosec B101
    assert body["max_tokens"] == 2048 and body["temperature"] == 0.7 and body["top_p"] == 1.0  # nosec B101
    assert body["frequency_penalty"] == 0.0 and body["presence_penalty"] == 0.0  # nosec B101


def test_base_url_env_override(recorder, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("DEEPSEEK_BASE_URL", "http://gateway.local/ds/")
    rec = recorder(200, OPENAI_OK)
    _send(DeepSeekAdapter(client=rec.client()))
    assert str(rec.last.url) == "http://gateway.local/ds/chat/completions"  # nosec B101


def test_platform_base_url_applies_to_openai_only(recorder, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("PLATFORM_OPENAI_BASE_URL", "http://proxy.local/v1")
    rec = recorder(200, OPENAI_OK)
    _send(OpenAIAdapter(client=rec.client()))
    assert str(rec.last.url) == "http://proxy.local/v1/chat/completions"  # nosec B101


def test_anthropic_request_and_headers(recorder):
    rec = recorder(200, {"id": "msg_1", "content": [{"type": "text", "text": "bonjour"}]})
    assert _send(AnthropicAdapter(client=rec.client()), "claude-3-haiku") == "bonjour"  # nosec B101

    req = rec.last
    assert str(req.url) == "https://api.anthropic.com/v1/messages"  # nosec B101
    assert req.headers["x-api-key"] == "sk-test"  # nosec B101
    assert req.headers["anthropic-version"] == "2023-06-01"  # nosec B101
    assert "authorization" not in req.headers  # nosec B101
    body = rec.last_json()
    assert body["system"] == "Be nice"  # nosec B101
    assert [m["role"] for m in body["messages"]] == ["user", "assistant", "user"]  # nosec B101
    assert "frequency_penalty" not in body  # nosec B101


def test_anthropic_omits_system_field_when_unset(recorder):
    rec = recorder(200, {"content": [{"type": "text", "text": "ok"}]})
    adapter = AnthropicAdapter(client=rec.client())
    adapter.generate(normalize(HISTORY, None, adapter.shape), "claude", "k", GenerationParams())
    assert "system" not in rec.last_json()  # nosec B101


def test_google_request_key_in_query(recorder):
    payload = {"candidates": [{"content": {"role": "model", "parts": [{"text": "hola"}]}, "finishReason": "STOP"}]}
    rec = recorder(200, payload)
    assert _send(GoogleAdapter(client=rec.client()), "gemini-1.5-flash") == "hola"  # nosec B101

    req = rec.last
    assert req.url.path == "/v1beta/models/gemini-1.5-flash:generateContent"  # nosec B101
    assert req.url.params["key"] == "sk-test"  # nosec B101
    assert "authorization" not in req.headers  # nosec B101
    body = rec.last_json()
    assert body["contents"][0] == {"role": "user", "parts": [{"text": "System: Be nice"}]}  # nosec B101
    assert [c["role"] for c in body["contents"]] == ["user", "user", "model", "user"]  # nosec B101
    assert body["generationConfig"] == {"maxOutputTokens": 2048, "temperature": 0.7, "topP": 1.0}  # nosec B101


def test_cohere_request_splits_history(recorder):
    rec = recorder(200, {"text": "good", "generation_id": "g1"})
    assert _send(CohereAdapter(client=rec.client()), "command-r") == "good"  # nosec B101

    req = rec.last
    assert str(req.url) == "https://api.cohere.ai/v1/chat"  # nosec B101
    assert req.headers["Authorization"] == "Bearer sk-test"  # nosec B101
    body = rec.last_json()
    assert body["message"] == "Be nice\n\nHow are you?"  # nosec B101
    assert body["chat_history"] == [  # nosec B101
        {"role": "USER", "message": "Hello"},
        {"role": "CHATBOT", "message": "Hi!"},
    ]
    assert body["p"] == 1.0 and body["max_tokens"] == 2048  # nosec B101


@pytest.mark.parametrize(
    "cls, display",
    [
        (OpenAIAdapter, "OpenAI"),
        (AnthropicAdapter, "Anthropic"),
        (GoogleAdapter, "Google"),
        (DeepSeekAdapter, "DeepSeek"),
        (MistralAdapter, "Mistral"),
        (CohereAdapter, "Cohere"),
    ],
)
def test_error_status_carries_raw_body(cls, display, recorder):
    raw = '{"error": {"message": "Incorrect API key provided", "code": "invalid_api_key"}}'
    rec = recorder(401, raw)
    with pytest.raises(ProviderError) as ei:
        _send(cls(client=rec.client()))
    err = ei.value
    assert err.message == f"{display} API error: {raw}"  # nosec B101
    assert err.raw_body == raw  # nosec B101
    assert err.status_code == 401  # nosec B101
    assert err.code is ErrorCode.AUTH  # nosec B101
    assert len(rec.requests) == 1  # nosec B101


def test_server_error_is_not_retried(recorder):
    rec = recorder(503, "upstream overloaded")
    with pytest.raises(ProviderError) as ei:
        _send(MistralAdapter(client=rec.client()))
    assert ei.value.code is ErrorCode.UNAVAILABLE  # nosec B101
    assert len(rec.requests) == 1  # nosec B101


@pytest.mark.parametrize(
    "cls, payload",
    [
        (OpenAIAdapter, {"choices": []}),
        (OpenAIAdapter, {"choices": [{"message": {"role": "assistant", "content": None}}]}),
        (AnthropicAdapter, {"content": []}),
        (GoogleAdapter, {"candidates": [{"finishReason": "SAFETY"}]}),
        (CohereAdapter, {"generation_id": "g1"}),
        (DeepSeekAdapter, "not json at all"),
        (MistralAdapter, {"choices": "wrong type"}),
    ],
)
def test_missing_text_yields_placeholder(cls, payload, recorder):
    rec = recorder(200, payload)
    assert _send(cls(client=rec.client())) == "No response generated"  # nosec B101


def test_transport_failure_is_classified():
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    adapter = OpenAIAdapter(client=httpx.Client(transport=httpx.MockTransport(boom)))
    with pytest.raises(ProviderError) as ei:
        _send(adapter)
    assert ei.value.code is ErrorCode.UNAVAILABLE  # nosec B101
    assert ei.value.message.startswith("OpenAI API request failed:")  # nosec B101
    assert ei.value.status_code is None  # nosec B101
