"""Unit tests for the message normalizer across all four shapes."""

from __future__ import annotations

from llmhub.base.models import Message
from llmhub.base.normalize import MessageShape, effective_system_prompt, normalize

HISTORY = [
    Message("system", "S"),
    Message("user", "A"),
    Message("assistant", "B"),
]


def test_separate_shape_lifts_inline_system_prompt():
    chat = normalize(HISTORY, "", MessageShape.SEPARATE_SYSTEM)
    assert chat.system == "S"  # nosec B101
    assert [m.role for m in chat.messages] == ["user", "assistant"]  # nosec B101


def test_configured_prompt_wins_over_inline_system():
    chat = normalize(HISTORY, "configured", MessageShape.SEPARATE_SYSTEM)
    assert chat.system == "configured"  # nosec B101
    assert all(m.role != "system" for m in chat.messages)  # nosec B101


def test_separate_shape_without_any_prompt():
    chat = normalize(HISTORY[1:], None, MessageShape.SEPARATE_SYSTEM)
    assert chat.system is None  # nosec B101
    assert len(chat.messages) == 2  # nosec B101


def test_native_shape_passes_history_through_when_unconfigured():
    chat = normalize(HISTORY, "", MessageShape.NATIVE_SYSTEM)
    assert chat.messages == HISTORY  # nosec B101
    assert chat.messages is not HISTORY  # nosec B101


def test_native_shape_prepends_configured_prompt_once():
    chat = normalize(HISTORY, "be brief", MessageShape.NATIVE_SYSTEM)
    assert chat.messages[0] == Message("system", "be brief")  # nosec B101
    assert [m.role for m in chat.messages] == ["system", "user", "assistant"]  # nosec B101


def test_google_shape_maps_roles_and_injects_system_turn():
    chat = normalize(HISTORY, "", MessageShape.GOOGLE)
    assert chat.messages == [  # nosec B101
        Message("user", "System: S"),
        Message("user", "A"),
        Message("model", "B"),
    ]


def test_google_shape_without_prompt_has_no_marker_turn():
    chat = normalize(HISTORY[1:], None, MessageShape.GOOGLE)
    assert [m.role for m in chat.messages] == ["user", "model"]  # nosec B101


def test_cohere_shape_splits_last_turn_into_prompt():
    history = HISTORY + [Message("user", "C")]
    chat = normalize(history, "", MessageShape.COHERE)
    assert chat.prompt == "S\n\nC"  # nosec B101
    assert chat.messages == [Message("USER", "A"), Message("CHATBOT", "B")]  # nosec B101


def test_cohere_shape_single_turn_without_prompt():
    chat = normalize([Message("user", "hi")], None, MessageShape.COHERE)
    assert chat.prompt == "hi"  # nosec B101
    assert chat.messages == []  # nosec B101


def test_normalize_does_not_mutate_input():
    history = list(HISTORY)
    normalize(history, "x", MessageShape.GOOGLE)
    assert history == HISTORY  # nosec B101


def test_effective_prompt_skips_empty_inline_system():
    history = [Message("system", ""), Message("system", "second")]
    assert effective_system_prompt(history, None) == "second"  # nosec B101
    assert effective_system_prompt([], None) is None  # nosec B101
