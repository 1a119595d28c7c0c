"""SQLite-backed implementation of ``IModelSettingsRepo``."""

from __future__ import annotations

import sqlite3
from typing import Optional

from ..interfaces.repos import IModelSettingsRepo, ModelSettings
from .helpers import _model_settings_from_row, _to_iso, utcnow


class ModelSettingsRepoSqlite(IModelSettingsRepo):
    """Whole-record upsert per (user, provider, model).

    Saving one model's settings never touches another model's row.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def get(self, user_id: str, provider: str, model: str) -> Optional[ModelSettings]:
        row = self.conn.execute(
            """
            SELECT user_id, provider, model, temperature, max_tokens, top_p,
                   frequency_penalty, presence_penalty, system_prompt
            FROM model_settings WHERE user_id = ? AND provider = ? AND model = ?
            """,
            (user_id, provider.lower().strip(), model),
        ).fetchone()
        return _model_settings_from_row(row) if row else None

    def save(self, settings: ModelSettings) -> ModelSettings:
        provider = settings.provider.lower().strip()
        self.conn.execute(
            """
            INSERT INTO model_settings(
                user_id, provider, model, temperature, max_tokens, top_p,
                frequency_penalty, presence_penalty, system_prompt, updated_at
            ) VALUES(?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(user_id, provider, model) DO UPDATE SET
                temperature = excluded.temperature,
                max_tokens = excluded.max_tokens,
                top_p = excluded.top_p,
                frequency_penalty = excluded.frequency_penalty,
                presence_penalty = excluded.presence_penalty,
                system_prompt = excluded.system_prompt,
                updated_at = excluded.updated_at
            """,
            (
                settings.user_id,
                provider,
                settings.model,
                float(settings.temperature),
                int(settings.max_tokens),
                float(settings.top_p),
                float(settings.frequency_penalty),
                float(settings.presence_penalty),
                settings.system_prompt or "",
                _to_iso(utcnow()),
            ),
        )
        saved = self.get(settings.user_id, provider, settings.model)
        assert saved is not None  # nosec B101 - row was just upserted
        return saved
