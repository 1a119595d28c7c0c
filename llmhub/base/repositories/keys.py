"""
Keys Repository

Purpose
- Resolve the API key used for one send, per user and per provider.
- Fail fast with :class:`MissingCredentialError` before any network call.

Priority (first usable value wins)
1) Platform key: a managed key from ``PLATFORM_<PROVIDER>_API_KEY``. Only
   OpenAI has one.
2) The user's stored key from their settings record.
3) The process environment (``OPENAI_API_KEY`` and friends, alias-aware).

Empty strings and placeholder values are skipped at every level.

Usage
- repo = KeysRepository(uow.user_settings)
- key = repo.resolve("user-1", "anthropic")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ...config import get_display_name
from ...config.env import (
    get_env_var_name,
    resolve_platform_key,
    resolve_provider_key,
    usable,
)
from ...persistence.interfaces.repos import IUserSettingsRepo
from ..errors import MissingCredentialError


@dataclass
class KeyResolution:
    provider: str
    api_key: Optional[str]
    source: str  # "platform", "user", "env", "none"
    extra: Dict[str, Any] = field(default_factory=dict)


class KeysRepository:
    """Read-only credential resolver.

    Parameters
    ----------
    user_settings:
        Repository holding per-user keys. ``None`` skips the user level,
        which is handy for process-wide tooling.
    """

    def __init__(self, user_settings: Optional[IUserSettingsRepo] = None) -> None:
        self._user_settings = user_settings

    def get_resolution(self, user_id: Optional[str], provider: str) -> KeyResolution:
        p = (provider or "").lower().strip()

        val, used = resolve_platform_key(p)
        if val:
            return KeyResolution(provider=p, api_key=val, source="platform", extra={"env_var": used})

        if self._user_settings is not None and user_id:
            stored = self._user_settings.get_api_key(user_id, p)
            if usable(stored):
                return KeyResolution(provider=p, api_key=stored.strip(), source="user")

        val, used = resolve_provider_key(p)
        if val:
            return KeyResolution(provider=p, api_key=val, source="env", extra={"env_var": used})

        return KeyResolution(provider=p, api_key=None, source="none", extra={"env_var": get_env_var_name(p)})

    def resolve(self, user_id: Optional[str], provider: str, *, model: Optional[str] = None) -> str:
        """Return the key to use or raise :class:`MissingCredentialError`.

        The error message names the remediation: settings for OpenAI, the
        expected environment variable for every other provider.
        """
        res = self.get_resolution(user_id, provider)
        if res.api_key:
            return res.api_key
        raise MissingCredentialError.for_provider(
            res.provider,
            get_display_name(res.provider),
            res.extra.get("env_var"),
            model=model,
        )
