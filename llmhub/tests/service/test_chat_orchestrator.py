"""Tests for ChatOrchestrator.send_message.

Every send appends exactly two messages: the user turn and one assistant turn
that is either the reply or an ``Error:`` record of the failure.
"""

from __future__ import annotations

import pytest

from llmhub.anthropic.client import AnthropicAdapter
from llmhub.base.errors import (
    ConversationNotFoundError,
    ErrorCode,
    MissingCredentialError,
    ProviderError,
    UnsupportedProviderError,
)
from llmhub.base.factory import ProviderRegistry
from llmhub.openai.client import OpenAIAdapter
from llmhub.persistence.interfaces.repos import ModelSettings
from llmhub.service.chat_service import ChatOrchestrator, error_turn_content

OPENAI_OK = {"choices": [{"message": {"role": "assistant", "content": "Hi there"}}]}


def _conversation(uow, user_id: str = "u1", provider: str = "openai", model: str = "gpt-4o-mini") -> int:
    with uow:
        return uow.conversations.create(user_id, "Chat", provider, model).id


def _registry(**adapters) -> ProviderRegistry:
    registry = ProviderRegistry()
    for name, adapter in adapters.items():
        registry.register_instance(name, adapter)
    return registry


def test_success_appends_user_and_tagged_assistant(uow, recorder, ticking_clock, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")  # pragma: allowlist secret - dummy test value
    rec = recorder(200, OPENAI_OK)
    cid = _conversation(uow)
    orch = ChatOrchestrator(uow, _registry(openai=OpenAIAdapter(client=rec.client())), clock=ticking_clock)

    reply = orch.send_message("u1", cid, "Hello", "openai", "gpt-4o-mini")

    assert reply == "Hi there"  # nosec B101
    msgs = uow.messages.list("u1", cid)
    assert [(m.role, m.content) for m in msgs] == [("user", "Hello"), ("assistant", "Hi there")]  # nosec B101
    assert (msgs[1].provider, msgs[1].model) == ("openai", "gpt-4o-mini")  # nosec B101
    assert rec.last_json()["messages"] == [{"role": "user", "content": "Hello"}]  # nosec B101
    assert uow.conversations.get("u1", cid).updated_at == msgs[1].timestamp  # nosec B101


def test_history_includes_previous_turns_and_stored_settings(uow, recorder, ticking_clock, monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "ak-env")  # pragma: allowlist secret - dummy test value
    rec = recorder(200, {"content": [{"type": "text", "text": "again"}]})
    cid = _conversation(uow, provider="anthropic", model="claude-3-haiku")
    with uow:
        uow.model_settings.save(
            ModelSettings("u1", "anthropic", "claude-3-haiku", 0.1, 256, 0.5, 0.0, 0.0, "Answer in French")
        )
    orch = ChatOrchestrator(uow, _registry(anthropic=AnthropicAdapter(client=rec.client())), clock=ticking_clock)

    orch.send_message("u1", cid, "one", "anthropic", "claude-3-haiku")
    orch.send_message("u1", cid, "two", "anthropic", "claude-3-haiku")

    body = rec.last_json()
    assert body["system"] == "Answer in French"  # nosec B101
    assert body["max_tokens"] == 256 and body["temperature"] == 0.1  # nosec B101
    assert [m["content"] for m in body["messages"]] == ["one", "again", "two"]  # nosec B101
    assert len(uow.messages.list("u1", cid)) == 4  # nosec B101


def test_missing_key_end_to_end(uow, ticking_clock):
    cid = _conversation(uow)
    orch = ChatOrchestrator(uow, clock=ticking_clock)

    with pytest.raises(MissingCredentialError):
        orch.send_message("u1", cid, "Hello", "openai", "gpt-4o-mini")

    msgs = uow.messages.list("u1", cid)
    assert [(m.role, m.content) for m in msgs] == [  # nosec B101
        ("user", "Hello"),
        ("assistant", "Error: OpenAI API key not configured. Please add your API key in settings."),
    ]
    assert (msgs[1].provider, msgs[1].model) == ("openai", "gpt-4o-mini")  # nosec B101


def test_provider_error_is_recorded_with_raw_body(uow, recorder, ticking_clock, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")  # pragma: allowlist secret - dummy test value
    raw = '{"error": {"message": "Rate limit reached"}}'
    rec = recorder(429, raw)
    cid = _conversation(uow)
    orch = ChatOrchestrator(uow, _registry(openai=OpenAIAdapter(client=rec.client())), clock=ticking_clock)

    with pytest.raises(ProviderError) as ei:
        orch.send_message("u1", cid, "Hello", "openai", "gpt-4o-mini")

    assert ei.value.raw_body == raw  # nosec B101
    last = uow.messages.list("u1", cid)[-1]
    assert last.content == f"Error: OpenAI API error: {raw}"  # nosec B101
    assert len(rec.requests) == 1  # nosec B101


def test_unsupported_provider_checked_before_credentials(uow, ticking_clock):
    cid = _conversation(uow)
    orch = ChatOrchestrator(uow, _registry(), clock=ticking_clock)

    with pytest.raises(UnsupportedProviderError):
        orch.send_message("u1", cid, "Hello", "grok", "grok-2")

    msgs = uow.messages.list("u1", cid)
    assert len(msgs) == 2  # nosec B101
    assert msgs[1].content == "Error: Provider grok not supported"  # nosec B101


def test_unexpected_adapter_exception_is_recorded_and_reraised(uow, ticking_clock, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")  # pragma: allowlist secret - dummy test value

    class Broken(OpenAIAdapter):
        def generate(self, chat, model, api_key, params):
            raise RuntimeError("adapter bug")

    cid = _conversation(uow)
    orch = ChatOrchestrator(uow, _registry(openai=Broken()), clock=ticking_clock)
    with pytest.raises(RuntimeError):
        orch.send_message("u1", cid, "Hello", "openai", "gpt-4o-mini")
    assert uow.messages.list("u1", cid)[-1].content == "Error: adapter bug"  # nosec B101


def test_foreign_conversation_records_nothing(uow, ticking_clock):
    cid = _conversation(uow, user_id="alice")
    orch = ChatOrchestrator(uow, _registry(), clock=ticking_clock)

    with pytest.raises(ConversationNotFoundError):
        orch.send_message("mallory", cid, "Hello", "openai", "gpt-4o-mini")
    assert uow.messages.list("alice", cid) == []  # nosec B101


def test_error_turn_content_uses_plain_message():
    err = UnsupportedProviderError.for_provider("x")
    assert error_turn_content(err) == "Error: Provider x not supported"  # nosec B101
    assert error_turn_content(ValueError("bad")) == "Error: bad"  # nosec B101


def test_provider_error_survives_conversation_deleted_mid_send(uow, ticking_clock, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")  # pragma: allowlist secret - dummy test value
    cid = _conversation(uow)

    class DeletesThenFails(OpenAIAdapter):
        def generate(self, chat, model, api_key, params):
            with uow:
                uow.conversations.delete("u1", cid)
            raise ProviderError(code=ErrorCode.SERVER_ERROR, message="OpenAI API error: boom", provider="openai")

    orch = ChatOrchestrator(uow, _registry(openai=DeletesThenFails()), clock=ticking_clock)
    with pytest.raises(ProviderError) as ei:
        orch.send_message("u1", cid, "Hello", "openai", "gpt-4o-mini")

    assert ei.value.message == "OpenAI API error: boom"  # nosec B101
    with pytest.raises(ConversationNotFoundError):
        uow.conversations.get("u1", cid)


def test_caller_token_count_is_stored_on_user_turn(uow, recorder, ticking_clock, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")  # pragma: allowlist secret - dummy test value
    rec = recorder(200, OPENAI_OK)
    cid = _conversation(uow)
    orch = ChatOrchestrator(uow, _registry(openai=OpenAIAdapter(client=rec.client())), clock=ticking_clock)

    orch.send_message("u1", cid, "Hello", "openai", "gpt-4o-mini", token_count=12)

    assert [m.token_count for m in uow.messages.list("u1", cid)] == [12, None]  # nosec B101
