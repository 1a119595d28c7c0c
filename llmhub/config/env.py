"""llmhub.config.env
=================

Environment variable mapping and helpers for provider credentials.

Purpose
-------
- Single source of truth mapping provider identifiers to the environment
  variables that may hold their API keys (canonical name plus aliases).
- A separate mapping for the platform-level key, a managed credential that
  takes precedence over any user or process key. Only OpenAI has one.

Failure Modes
-------------
Helpers never raise on unknown providers or unset variables; they return
``None`` and let the credential resolver decide how to fail.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Canonical provider -> env var mapping
ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "google": "GOOGLE_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
    "mistral": "MISTRAL_API_KEY",
    "cohere": "COHERE_API_KEY",
}


# Provider -> ordered tuple of acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "google": ("GOOGLE_API_KEY", "GEMINI_API_KEY"),
}


# Provider -> env var holding the managed platform key
PLATFORM_ENV_MAP: Dict[str, str] = {
    "openai": "PLATFORM_OPENAI_API_KEY",
}

# Base URL that accompanies the managed OpenAI key (proxy or gateway).
PLATFORM_OPENAI_BASE_URL_ENV = "PLATFORM_OPENAI_BASE_URL"


_PLACEHOLDER_MARKERS = ("placeholder", "changeme", "your-api-key", "your_api_key")


def is_placeholder(val: Optional[str]) -> bool:
    """Return True for template values such as ``"your-api-key-here"``.

    Matching is case-insensitive and ignores surrounding whitespace.
    """
    if val is None:
        return False
    lowered = str(val).strip().lower()
    return any(marker in lowered for marker in _PLACEHOLDER_MARKERS)


def usable(val: Optional[str]) -> bool:
    """Return True when ``val`` is a non-empty, non-placeholder credential."""
    return bool(val and str(val).strip()) and not is_placeholder(val)


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the canonical key variable for ``provider`` (case-insensitive), if known."""
    if not provider:
        return None
    return ENV_MAP.get(provider.lower())


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield the variable names checked for ``provider``, canonical name first."""
    key = (provider or "").lower()
    seen = set()
    for name in (ENV_MAP.get(key), *ENV_ALIASES.get(key, ())):
        if name and name not in seen:
            seen.add(name)
            yield name


def _first_usable(names: Iterable[str]) -> Tuple[Optional[str], Optional[str]]:
    for name in names:
        value = os.environ.get(name)
        if usable(value):
            return value.strip(), name
    return None, None


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_var)`` for the first usable key variable, or ``(None, None)``."""
    return _first_usable(get_env_var_candidates(provider))


def resolve_platform_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Return the managed platform key for ``provider`` as ``(value, env_var)``."""
    name = PLATFORM_ENV_MAP.get((provider or "").lower())
    return _first_usable([name] if name else [])


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "PLATFORM_ENV_MAP",
    "PLATFORM_OPENAI_BASE_URL_ENV",
    "is_placeholder",
    "usable",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_provider_key",
    "resolve_platform_key",
]
