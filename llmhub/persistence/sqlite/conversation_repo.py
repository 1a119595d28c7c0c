"""SQLite-backed implementation of ``IConversationRepo``.

Every read and write starts with the ownership check from ``helpers``; no
query ever filters another user's rows out silently. Writes defer commit to
the Unit of Work.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import List

from ...config.defaults import CONVERSATION_LIST_LIMIT
from ..interfaces.repos import Conversation, IConversationRepo
from .helpers import _conversation_from_row, _to_iso, require_owned_conversation, utcnow


class ConversationRepoSqlite(IConversationRepo):
    """Conversation storage scoped by owning user."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def create(self, user_id: str, title: str, provider: str, model: str) -> Conversation:
        now = _to_iso(utcnow())
        cur = self.conn.execute(
            """
            INSERT INTO conversations(user_id, title, provider, model, created_at, updated_at)
            VALUES(?, ?, ?, ?, ?, ?)
            """,
            (user_id, title, provider.lower().strip(), model, now, now),
        )
        return self.get(user_id, int(cur.lastrowid))

    def get(self, user_id: str, conversation_id: int) -> Conversation:
        return _conversation_from_row(require_owned_conversation(self.conn, user_id, conversation_id))

    def list_for_user(self, user_id: str, limit: int = CONVERSATION_LIST_LIMIT) -> List[Conversation]:
        """Return up to ``limit`` conversations, most recently updated first."""
        cur = self.conn.execute(
            """
            SELECT id, user_id, title, provider, model, created_at, updated_at
            FROM conversations WHERE user_id = ?
            ORDER BY updated_at DESC, id DESC LIMIT ?
            """,
            (user_id, limit),
        )
        return [_conversation_from_row(r) for r in cur.fetchall()]

    def rename(self, user_id: str, conversation_id: int, title: str) -> Conversation:
        require_owned_conversation(self.conn, user_id, conversation_id)
        self.conn.execute(
            "UPDATE conversations SET title = ?, updated_at = ? WHERE id = ?",
            (title, _to_iso(utcnow()), conversation_id),
        )
        return self.get(user_id, conversation_id)

    def touch(self, user_id: str, conversation_id: int, timestamp: datetime) -> None:
        require_owned_conversation(self.conn, user_id, conversation_id)
        self.conn.execute(
            "UPDATE conversations SET updated_at = ? WHERE id = ?",
            (_to_iso(timestamp), conversation_id),
        )

    def delete(self, user_id: str, conversation_id: int) -> int:
        """Delete all messages, then the conversation row (no commit)."""
        require_owned_conversation(self.conn, user_id, conversation_id)
        cur = self.conn.execute("DELETE FROM messages WHERE conversation_id = ?", (conversation_id,))
        removed = cur.rowcount
        self.conn.execute("DELETE FROM conversations WHERE id = ?", (conversation_id,))
        return int(removed)
