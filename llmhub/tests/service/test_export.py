"""Tests for conversation export rendering."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from llmhub.persistence.interfaces.repos import ChatMessage, Conversation
from llmhub.service.export import export_conversation, safe_filename

CREATED = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)
EXPORTED = datetime(2024, 3, 2, 10, 0, tzinfo=timezone.utc)

CONV = Conversation(
    id=1,
    user_id="u1",
    title="Trip plan: Rome!",
    provider="openai",
    model="gpt-4o-mini",
    created_at=CREATED,
    updated_at=CREATED,
)
MESSAGES = [
    ChatMessage(1, 1, "user", "Where to eat?", datetime(2024, 3, 1, 9, 31, 5, tzinfo=timezone.utc)),
    ChatMessage(2, 1, "assistant", "Try Trastevere.", datetime(2024, 3, 1, 9, 31, 9, tzinfo=timezone.utc), "openai", "gpt-4o-mini"),
]


def test_json_export_round_trips_fields():
    result = export_conversation(CONV, MESSAGES, "json", exported_at=EXPORTED)
    data = json.loads(result.content)
    assert result.media_type == "application/json" and result.extension == "json"  # nosec B101
    assert data["conversation"]["title"] == "Trip plan: Rome!"  # nosec B101
    assert data["conversation"]["created_at"] == CREATED.isoformat()  # nosec B101
    assert [m["role"] for m in data["messages"]] == ["user", "assistant"]  # nosec B101
    assert data["messages"][1]["model"] == "gpt-4o-mini"  # nosec B101
    assert data["exported_at"] == EXPORTED.isoformat()  # nosec B101


def test_markdown_export_with_metadata():
    result = export_conversation(CONV, MESSAGES, "markdown", exported_at=EXPORTED)
    lines = result.content.splitlines()
    assert lines[0] == "# Trip plan: Rome!"  # nosec B101
    assert "**Model:** openai - gpt-4o-mini" in lines  # nosec B101
    assert "**Created:** 2024-03-01 09:30:00 UTC" in lines  # nosec B101
    assert "---" in lines  # nosec B101
    assert "**You** _(09:31:05)_:" in lines  # nosec B101
    assert "**Assistant** _(09:31:09)_:" in lines  # nosec B101
    assert result.media_type == "text/markdown" and result.filename == "Trip_plan__Rome_.md"  # nosec B101


def test_text_export_without_metadata():
    result = export_conversation(CONV, MESSAGES, "TEXT", include_metadata=False)
    lines = result.content.splitlines()
    assert lines[:2] == ["Trip plan: Rome!", "=" * len("Trip plan: Rome!")]  # nosec B101
    assert not any(line.startswith("Model:") for line in lines)  # nosec B101
    assert lines.index("You:") < lines.index("Assistant:")  # nosec B101
    assert result.extension == "txt" and result.media_type == "text/plain"  # nosec B101


def test_unknown_format_rejected():
    with pytest.raises(ValueError):
        export_conversation(CONV, MESSAGES, "pdf")


def test_safe_filename_fallback():
    assert safe_filename("", "md") == "conversation.md"  # nosec B101
