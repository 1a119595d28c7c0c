"""SQLite Unit of Work over the conversation store repositories.

All repositories share one connection and never commit themselves. Leaving a
``with`` block commits; leaving it through an exception rolls back. The same
instance can be entered again afterwards and each block is its own
transaction.
"""

from __future__ import annotations

import sqlite3

from ..interfaces.repos import IUnitOfWork
from .catalog_repo import ModelCatalogRepoSqlite
from .conversation_repo import ConversationRepoSqlite
from .message_repo import MessageRepoSqlite
from .model_settings_repo import ModelSettingsRepoSqlite
from .user_settings_repo import UserSettingsRepoSqlite


class UnitOfWorkSqlite(IUnitOfWork):
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self.conversations = ConversationRepoSqlite(conn)
        self.messages = MessageRepoSqlite(conn)
        self.user_settings = UserSettingsRepoSqlite(conn)
        self.model_settings = ModelSettingsRepoSqlite(conn)
        self.catalog = ModelCatalogRepoSqlite(conn)

    def __enter__(self) -> "UnitOfWorkSqlite":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    def commit(self) -> None:
        self._conn.commit()

    def rollback(self) -> None:
        self._conn.rollback()

    def close(self) -> None:
        self._conn.close()
