"""SQLite-backed implementation of ``IMessageRepo``.

Messages are append-only. Inserting one bumps the owning conversation's
``updated_at`` to the message timestamp in the same transaction.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import List, Optional

from ...base.models import STORED_ROLES
from ..interfaces.repos import ChatMessage, IMessageRepo
from .conversation_repo import ConversationRepoSqlite
from .helpers import _message_from_row, _to_iso, require_owned_conversation


class MessageRepoSqlite(IMessageRepo):
    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn
        self._conversations = ConversationRepoSqlite(conn)

    def insert(
        self,
        user_id: str,
        conversation_id: int,
        role: str,
        content: str,
        timestamp: datetime,
        *,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        token_count: Optional[int] = None,
    ) -> int:
        """Append a message and return its primary key.

        Raises
        ------
        ConversationNotFoundError
            When ``user_id`` does not own the conversation.
        ValueError
            For a role outside ``user``/``assistant``/``system``.
        """
        if role not in STORED_ROLES:
            raise ValueError(f"invalid message role: {role!r}")
        require_owned_conversation(self.conn, user_id, conversation_id)
        ts = _to_iso(timestamp)
        cur = self.conn.execute(
            """
            INSERT INTO messages(conversation_id, role, content, timestamp, provider, model, token_count)
            VALUES(?, ?, ?, ?, ?, ?, ?)
            """,
            (conversation_id, role, content, ts, provider, model, token_count),
        )
        self._conversations.touch(user_id, conversation_id, timestamp)
        return int(cur.lastrowid)

    def list(self, user_id: str, conversation_id: int) -> List[ChatMessage]:
        require_owned_conversation(self.conn, user_id, conversation_id)
        cur = self.conn.execute(
            """
            SELECT id, conversation_id, role, content, timestamp, provider, model, token_count
            FROM messages WHERE conversation_id = ?
            ORDER BY timestamp ASC, id ASC
            """,
            (conversation_id,),
        )
        return [_message_from_row(r) for r in cur.fetchall()]
