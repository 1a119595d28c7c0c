"""Unified configuration layer for llmhub.

Goals
-----
* Centralize endpoint defaults per provider.
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (YAML or JSON) pointed to by
       ``LLMHUB_CONFIG_FILE``
    3. Environment variables (``<PROVIDER>_BASE_URL``)
    4. In-code overrides passed to the helper
* Provide a single call site: ``get_provider_config(provider)``.

API keys are deliberately not part of this merge. Credentials are resolved
per user by :class:`llmhub.base.repositories.keys.KeysRepository`.

External Config File
--------------------
YAML is a superset of JSON, so a single ``yaml.safe_load`` handles both::

    openai:
      base_url: https://gateway.internal/v1
    anthropic:
      api_version: "2023-06-01"
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .defaults import (
    ANTHROPIC_API_VERSION,
    ANTHROPIC_DEFAULT_BASE_URL,
    COHERE_DEFAULT_BASE_URL,
    DEEPSEEK_DEFAULT_BASE_URL,
    GOOGLE_DEFAULT_BASE_URL,
    MISTRAL_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_BASE_URL,
)
from .env import PLATFORM_OPENAI_BASE_URL_ENV, is_placeholder


DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"base_url": OPENAI_DEFAULT_BASE_URL, "display_name": "OpenAI"},
    "anthropic": {
        "base_url": ANTHROPIC_DEFAULT_BASE_URL,
        "api_version": ANTHROPIC_API_VERSION,
        "display_name": "Anthropic",
    },
    "google": {"base_url": GOOGLE_DEFAULT_BASE_URL, "display_name": "Google"},
    "deepseek": {"base_url": DEEPSEEK_DEFAULT_BASE_URL, "display_name": "DeepSeek"},
    "mistral": {"base_url": MISTRAL_DEFAULT_BASE_URL, "display_name": "Mistral"},
    "cohere": {"base_url": COHERE_DEFAULT_BASE_URL, "display_name": "Cohere"},
}


ENV_FIELD_MAP = {
    "base_url": "BASE_URL",
}


_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _parse_dotenv_line(line: str) -> Optional[Tuple[str, str]]:
    text = line.strip()
    if not text or text.startswith("#"):
        return None
    key, sep, value = text.partition("=")
    key = key.strip()
    if not sep or not key:
        return None
    return key, value.strip().strip("\"'")


def _load_dotenv_once() -> None:
    """Populate ``os.environ`` from a ``.env`` file, once per process.

    The file is ``LLMHUB_DOTENV_FILE`` (default ``.env``). A variable that is
    already set wins unless its current value is a placeholder.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    _DOTENV_LOADED = True
    dotenv = Path(os.getenv("LLMHUB_DOTENV_FILE", ".env"))
    if not dotenv.is_file():
        return
    for raw in dotenv.read_text(encoding="utf-8").splitlines():
        pair = _parse_dotenv_line(raw)
        if pair is None:
            continue
        key, value = pair
        current = os.environ.get(key)
        if current is None or is_placeholder(current):
            os.environ[key] = value


def _load_external_config() -> Dict[str, Any]:
    """Return the parsed ``LLMHUB_CONFIG_FILE`` mapping, cached after first read.

    A missing file, a parse error or a non-mapping document all yield ``{}``.
    """
    global _FILE_CACHE
    if _FILE_CACHE is None:
        source = os.getenv("LLMHUB_CONFIG_FILE")
        loaded: Any = {}
        if source and Path(source).is_file():
            try:
                loaded = yaml.safe_load(Path(source).read_text(encoding="utf-8"))
            except yaml.YAMLError:
                loaded = {}
        _FILE_CACHE = loaded if isinstance(loaded, dict) else {}
    return _FILE_CACHE


def reset_config_cache() -> None:
    """Forget the cached external config file so the next lookup re-reads it."""
    global _FILE_CACHE
    _FILE_CACHE = None


def _env_overrides(provider: str) -> Dict[str, Any]:
    found = {
        field: os.environ[f"{provider.upper()}_{suffix}"]
        for field, suffix in ENV_FIELD_MAP.items()
        if os.environ.get(f"{provider.upper()}_{suffix}")
    }
    # The managed OpenAI key is served through its own gateway.
    if provider == "openai" and os.environ.get(PLATFORM_OPENAI_BASE_URL_ENV):
        found["base_url"] = os.environ[PLATFORM_OPENAI_BASE_URL_ENV]
    return found


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Layers are applied in order, each replacing keys of the previous one:
    built-in defaults, the external config file, environment variables and
    finally non-``None`` entries of ``overrides``.
    """
    _load_dotenv_once()
    name = (provider or "").lower().strip()
    from_file = _load_external_config().get(name)
    layers = (
        DEFAULTS.get(name, {}),
        from_file if isinstance(from_file, dict) else {},
        _env_overrides(name),
        {k: v for k, v in (overrides or {}).items() if v is not None},
    )
    merged: Dict[str, Any] = {}
    for layer in layers:
        merged.update(layer)
    return merged


def get_display_name(provider: str) -> str:
    """Return the human-facing provider name used in error messages."""
    return get_provider_config(provider).get("display_name") or provider


__all__ = [
    "get_provider_config",
    "get_display_name",
    "reset_config_cache",
    "DEFAULTS",
]
