"""Connection and schema helpers for the SQLite conversation store.

Every connection gets the same pragmas: WAL journaling, the configured
synchronous level, a ``busy_timeout`` so concurrent requests (one connection
each) wait for the write lock instead of failing, and enforced foreign keys.

Timestamps are ISO 8601 UTC strings with fixed microsecond precision, so
sorting them as text sorts them in time.
"""

from __future__ import annotations

import os
import sqlite3
from pathlib import Path
from typing import Optional

from ...config.defaults import (
    SQLITE_BUSY_TIMEOUT_MS,
    SQLITE_JOURNAL_MODE,
    SQLITE_SYNCHRONOUS,
)

DEFAULT_DB_PATH = Path(__file__).resolve().parent.parent.parent / "data" / "llmhub.db"


_PRAGMAS = (
    ("journal_mode", SQLITE_JOURNAL_MODE),
    ("synchronous", SQLITE_SYNCHRONOUS),
    ("busy_timeout", SQLITE_BUSY_TIMEOUT_MS),
    ("foreign_keys", "ON"),
)


def get_db_path(db_path: Optional[str] = None) -> Path:
    """Resolve the database file: argument, else ``LLMHUB_DB_PATH``, else the package data dir."""
    chosen = db_path or os.getenv("LLMHUB_DB_PATH")
    if not chosen:
        return DEFAULT_DB_PATH
    return Path(chosen).expanduser()


def create_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """Open the database with ``sqlite3.Row`` rows and the store pragmas applied.

    The connection may be handed between FastAPI worker threads within one
    request, hence ``check_same_thread=False``.
    """
    path = get_db_path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    for pragma, value in _PRAGMAS:
        conn.execute(f"PRAGMA {pragma}={value};")
    return conn


def init_schema(conn: sqlite3.Connection) -> None:
    """Create required tables and indexes if they do not exist, then commit.

    Schema overview
    ---------------
    - ``conversations``: user-owned threads
    - ``messages``: immutable turns, ordered by ``(timestamp, id)``
    - ``user_settings``: one row per user with API keys as JSON
    - ``model_settings``: generation settings per (user, provider, model)
    - ``model_configs``: static model catalog
    """
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS conversations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id TEXT NOT NULL,
            title TEXT NOT NULL,
            provider TEXT NOT NULL,
            model TEXT NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );
        CREATE INDEX IF NOT EXISTS idx_conversations_user_updated
            ON conversations(user_id, updated_at);

        CREATE TABLE IF NOT EXISTS messages (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            conversation_id INTEGER NOT NULL REFERENCES conversations(id),
            role TEXT NOT NULL CHECK (role IN ('user', 'assistant', 'system')),
            content TEXT NOT NULL,
            timestamp TEXT NOT NULL,
            provider TEXT,
            model TEXT,
            token_count INTEGER
        );
        CREATE INDEX IF NOT EXISTS idx_messages_conversation_ts
            ON messages(conversation_id, timestamp, id);

        CREATE TABLE IF NOT EXISTS user_settings (
            user_id TEXT PRIMARY KEY,
            api_keys_json TEXT NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS model_settings (
            user_id TEXT NOT NULL,
            provider TEXT NOT NULL,
            model TEXT NOT NULL,
            temperature REAL NOT NULL,
            max_tokens INTEGER NOT NULL,
            top_p REAL NOT NULL,
            frequency_penalty REAL NOT NULL,
            presence_penalty REAL NOT NULL,
            system_prompt TEXT NOT NULL DEFAULT '',
            updated_at TEXT NOT NULL,
            PRIMARY KEY (user_id, provider, model)
        );

        CREATE TABLE IF NOT EXISTS model_configs (
            provider TEXT NOT NULL,
            name TEXT NOT NULL,
            display_name TEXT NOT NULL,
            description TEXT NOT NULL,
            max_tokens INTEGER NOT NULL,
            supports_streaming INTEGER NOT NULL,
            is_enabled INTEGER NOT NULL,
            api_key_required INTEGER NOT NULL,
            category TEXT NOT NULL,
            pricing_json TEXT,
            PRIMARY KEY (provider, name)
        );
        CREATE INDEX IF NOT EXISTS idx_model_configs_enabled
            ON model_configs(is_enabled);
        CREATE INDEX IF NOT EXISTS idx_model_configs_category
            ON model_configs(category);
        """
    )
    conn.commit()

