"""Unit tests for error classification and error message formats."""

from __future__ import annotations

import httpx
import pytest

from llmhub.base.errors import (
    ConversationNotFoundError,
    ErrorCode,
    MissingCredentialError,
    ProviderError,
    classify_exception,
    classify_status,
)


@pytest.mark.parametrize(
    "status, code",
    [
        (400, ErrorCode.VALIDATION),
        (401, ErrorCode.AUTH),
        (403, ErrorCode.AUTH),
        (404, ErrorCode.NOT_FOUND),
        (429, ErrorCode.RATE_LIMIT),
        (500, ErrorCode.SERVER_ERROR),
        (503, ErrorCode.UNAVAILABLE),
        (599, ErrorCode.SERVER_ERROR),
        (418, ErrorCode.UNKNOWN),
        (None, ErrorCode.UNKNOWN),
    ],
)
def test_classify_status(status, code):
    assert classify_status(status) is code  # nosec B101


def test_classify_exception_precedence():
    req = httpx.Request("POST", "https://example.invalid")
    pe = ProviderError(code=ErrorCode.RATE_LIMIT, message="slow down", provider="openai")
    assert classify_exception(pe) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_exception(httpx.ReadTimeout("t", request=req)) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(httpx.ConnectError("c", request=req)) is ErrorCode.UNAVAILABLE  # nosec B101
    assert classify_exception(httpx.RemoteProtocolError("p", request=req)) is ErrorCode.TRANSIENT  # nosec B101
    assert classify_exception(RuntimeError("x")) is ErrorCode.UNKNOWN  # nosec B101


def test_openai_missing_key_message_points_to_settings():
    err = MissingCredentialError.for_provider("openai", "OpenAI", "OPENAI_API_KEY")
    assert err.message == "OpenAI API key not configured. Please add your API key in settings."  # nosec B101
    assert isinstance(err, ProviderError)  # nosec B101
    assert "openai" in str(err) and "auth" in str(err)  # nosec B101


def test_conversation_not_found_is_lookup_error():
    err = ConversationNotFoundError(7)
    assert isinstance(err, LookupError)  # nosec B101
    assert str(err) == "Conversation not found" and err.conversation_id == 7  # nosec B101


def test_provider_errors_are_hashable():
    err = ProviderError(code=ErrorCode.UNKNOWN, message="m", provider="p")
    assert {err}  # nosec B101
