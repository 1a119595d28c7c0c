"""Shared helper functions for SQLite repository adapters.

Timestamp codec, the ownership check used by every conversation-scoped
query, and row-to-DTO converters.
"""

from __future__ import annotations

import json
import sqlite3
from contextlib import suppress
from datetime import datetime, timezone
from typing import Any

from ...base.errors import ConversationNotFoundError
from ..interfaces.repos import (
    ChatMessage,
    Conversation,
    ModelConfig,
    ModelSettings,
    Pricing,
    UserSettings,
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _to_iso(dt: datetime) -> str:
    """Serialize ``dt`` as a UTC ISO 8601 string with microseconds.

    Naive values are assumed to be UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="microseconds")


def _parse_ts(raw: Any) -> datetime:
    """Parse a stored timestamp into an aware UTC ``datetime``.

    Malformed input yields the epoch rather than an exception.
    """
    if isinstance(raw, datetime):
        return raw if raw.tzinfo else raw.replace(tzinfo=timezone.utc)
    if isinstance(raw, str):
        with suppress(ValueError):
            dt = datetime.fromisoformat(raw)
            return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)
    return datetime.fromtimestamp(0, tz=timezone.utc)


def require_owned_conversation(conn: sqlite3.Connection, user_id: str, conversation_id: int) -> sqlite3.Row:
    """Return the conversation row owned by ``user_id``.

    Raises
    ------
    ConversationNotFoundError
        When the row is missing or belongs to a different user.
    """
    row = conn.execute(
        "SELECT id, user_id, title, provider, model, created_at, updated_at FROM conversations WHERE id = ?",
        (conversation_id,),
    ).fetchone()
    if row is None or row["user_id"] != user_id:
        raise ConversationNotFoundError(conversation_id)
    return row


def _conversation_from_row(r: Any) -> Conversation:
    return Conversation(
        id=int(r["id"]),
        user_id=r["user_id"],
        title=r["title"],
        provider=r["provider"],
        model=r["model"],
        created_at=_parse_ts(r["created_at"]),
        updated_at=_parse_ts(r["updated_at"]),
    )


def _message_from_row(r: Any) -> ChatMessage:
    return ChatMessage(
        id=int(r["id"]),
        conversation_id=int(r["conversation_id"]),
        role=r["role"],
        content=r["content"],
        timestamp=_parse_ts(r["timestamp"]),
        provider=r["provider"],
        model=r["model"],
        token_count=int(r["token_count"]) if r["token_count"] is not None else None,
    )


def _user_settings_from_row(r: Any) -> UserSettings:
    keys = json.loads(r["api_keys_json"]) if r["api_keys_json"] else {}
    return UserSettings(
        user_id=r["user_id"],
        api_keys={str(k): str(v) for k, v in keys.items()} if isinstance(keys, dict) else {},
        created_at=_parse_ts(r["created_at"]),
        updated_at=_parse_ts(r["updated_at"]),
    )


def _model_settings_from_row(r: Any) -> ModelSettings:
    return ModelSettings(
        user_id=r["user_id"],
        provider=r["provider"],
        model=r["model"],
        temperature=float(r["temperature"]),
        max_tokens=int(r["max_tokens"]),
        top_p=float(r["top_p"]),
        frequency_penalty=float(r["frequency_penalty"]),
        presence_penalty=float(r["presence_penalty"]),
        system_prompt=r["system_prompt"] or "",
    )


def _model_config_from_row(r: Any) -> ModelConfig:
    pricing = None
    if r["pricing_json"]:
        raw = json.loads(r["pricing_json"])
        pricing = Pricing(
            input_tokens=float(raw["input_tokens"]),
            output_tokens=float(raw["output_tokens"]),
            currency=raw.get("currency", "USD"),
        )
    return ModelConfig(
        provider=r["provider"],
        name=r["name"],
        display_name=r["display_name"],
        description=r["description"],
        max_tokens=int(r["max_tokens"]),
        supports_streaming=bool(r["supports_streaming"]),
        is_enabled=bool(r["is_enabled"]),
        api_key_required=bool(r["api_key_required"]),
        category=r["category"],
        pricing=pricing,
    )
