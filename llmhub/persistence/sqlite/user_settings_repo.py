"""SQLite-backed implementation of ``IUserSettingsRepo``.

The key record is replaced as a whole on every save. Empty strings are
dropped on write so "no key" has a single representation.
"""

from __future__ import annotations

import json
import sqlite3
from typing import Dict, Optional

from ..interfaces.repos import IUserSettingsRepo, UserSettings
from .helpers import _to_iso, _user_settings_from_row, utcnow


class UserSettingsRepoSqlite(IUserSettingsRepo):
    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def get(self, user_id: str) -> Optional[UserSettings]:
        row = self.conn.execute(
            "SELECT user_id, api_keys_json, created_at, updated_at FROM user_settings WHERE user_id = ?",
            (user_id,),
        ).fetchone()
        return _user_settings_from_row(row) if row else None

    def get_api_key(self, user_id: str, provider: str) -> Optional[str]:
        settings = self.get(user_id)
        if settings is None:
            return None
        return settings.api_keys.get(provider.lower().strip()) or None

    def save_api_keys(self, user_id: str, api_keys: Dict[str, str]) -> UserSettings:
        """Upsert the user's whole key record (no implicit commit)."""
        cleaned = {
            str(p).lower().strip(): str(k).strip()
            for p, k in (api_keys or {}).items()
            if k is not None and str(k).strip()
        }
        now = _to_iso(utcnow())
        self.conn.execute(
            """
            INSERT INTO user_settings(user_id, api_keys_json, created_at, updated_at)
            VALUES(?, ?, ?, ?)
            ON CONFLICT(user_id) DO UPDATE SET
                api_keys_json = excluded.api_keys_json,
                updated_at = excluded.updated_at
            """,
            (user_id, json.dumps(cleaned, ensure_ascii=False, sort_keys=True), now, now),
        )
        saved = self.get(user_id)
        assert saved is not None  # nosec B101 - row was just upserted
        return saved
