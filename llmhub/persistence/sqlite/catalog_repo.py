"""SQLite-backed implementation of ``IModelCatalogRepo``.

The catalog is seeded once, when empty, and afterwards only the enabled flag
changes.
"""

from __future__ import annotations

import json
import sqlite3
from typing import List, Sequence

from ..interfaces.repos import IModelCatalogRepo, ModelConfig
from .helpers import _model_config_from_row

_COLUMNS = (
    "provider, name, display_name, description, max_tokens, supports_streaming, "
    "is_enabled, api_key_required, category, pricing_json"
)


class ModelCatalogRepoSqlite(IModelCatalogRepo):
    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def count(self) -> int:
        return int(self.conn.execute("SELECT COUNT(*) FROM model_configs").fetchone()[0])

    def seed_if_empty(self, configs: Sequence[ModelConfig]) -> int:
        """Insert ``configs`` when the table is empty; return rows inserted."""
        if self.count() > 0:
            return 0
        for c in configs:
            pricing = None
            if c.pricing is not None:
                pricing = json.dumps(
                    {
                        "input_tokens": c.pricing.input_tokens,
                        "output_tokens": c.pricing.output_tokens,
                        "currency": c.pricing.currency,
                    }
                )
            self.conn.execute(
                f"INSERT INTO model_configs({_COLUMNS}) VALUES(?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    c.provider.lower().strip(),
                    c.name,
                    c.display_name,
                    c.description,
                    int(c.max_tokens),
                    int(c.supports_streaming),
                    int(c.is_enabled),
                    int(c.api_key_required),
                    c.category,
                    pricing,
                ),
            )
        return len(configs)

    def _select(self, where: str = "", args: tuple = ()) -> List[ModelConfig]:
        sql = f"SELECT {_COLUMNS} FROM model_configs {where} ORDER BY provider, name"
        return [_model_config_from_row(r) for r in self.conn.execute(sql, args).fetchall()]

    def list_all(self) -> List[ModelConfig]:
        return self._select()

    def list_enabled(self) -> List[ModelConfig]:
        return self._select("WHERE is_enabled = 1")

    def list_by_provider(self, provider: str) -> List[ModelConfig]:
        return self._select("WHERE provider = ?", (provider.lower().strip(),))

    def list_by_category(self, category: str) -> List[ModelConfig]:
        return self._select("WHERE category = ?", (category,))

    def set_enabled(self, provider: str, name: str, enabled: bool) -> bool:
        cur = self.conn.execute(
            "UPDATE model_configs SET is_enabled = ? WHERE provider = ? AND name = ?",
            (int(bool(enabled)), provider.lower().strip(), name),
        )
        return cur.rowcount > 0
