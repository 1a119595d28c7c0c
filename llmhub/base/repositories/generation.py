"""
Generation parameter resolution.

Looks up the settings row saved for (user, provider, model). Rows are written
as a whole, so there is no per-field fallback: either the stored row is used
as-is, or, when the row is absent, every default applies.
"""

from __future__ import annotations

from ...persistence.interfaces.repos import IModelSettingsRepo
from ..models import GenerationParams


class GenerationSettingsResolver:
    def __init__(self, settings: IModelSettingsRepo) -> None:
        self._settings = settings

    def resolve(self, user_id: str, provider: str, model: str) -> GenerationParams:
        row = self._settings.get(user_id, provider.lower().strip(), model)
        if row is None:
            return GenerationParams()
        return GenerationParams(
            temperature=float(row.temperature),
            max_tokens=int(row.max_tokens),
            top_p=float(row.top_p),
            frequency_penalty=float(row.frequency_penalty),
            presence_penalty=float(row.presence_penalty),
            system_prompt=row.system_prompt or "",
        )


__all__ = ["GenerationSettingsResolver"]
