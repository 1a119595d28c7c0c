from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional

from fastapi import Header, HTTPException
from pydantic import BaseModel, Field

from llmhub.base.factory import ProviderRegistry, default_registry
from llmhub.config import get_display_name
from llmhub.config.defaults import (
    DEFAULT_FREQUENCY_PENALTY,
    DEFAULT_MAX_TOKENS,
    DEFAULT_PRESENCE_PENALTY,
    DEFAULT_SYSTEM_PROMPT,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_P,
    LLMHUB_USER_HEADER,
)
from llmhub.config.env import ENV_ALIASES, ENV_MAP, PLATFORM_ENV_MAP
from llmhub.persistence.interfaces.repos import (
    ChatMessage,
    Conversation,
    IUnitOfWork,
    ModelConfig,
    ModelSettings,
)
from llmhub.persistence.sqlite import get_uow


class ConversationCreateBody(BaseModel):
    """Request body for starting a conversation."""

    title: str = Field(default="New Conversation", min_length=1)
    provider: str
    model: str


class ConversationRenameBody(BaseModel):
    title: str = Field(min_length=1)


class SendMessageBody(BaseModel):
    """One user turn plus the provider/model that should answer it.

    ``provider`` and ``model`` may differ from the ones the conversation was
    started with; the assistant turn is tagged with what was requested here.
    """

    content: str = Field(min_length=1)
    provider: str
    model: str
    token_count: Optional[int] = Field(default=None, ge=0)


class KeysBody(BaseModel):
    """Whole replacement of the caller's stored API keys.

    Keys are accepted by provider name (``"anthropic"``) or by environment
    variable name (``"ANTHROPIC_API_KEY"``).
    """

    api_keys: Dict[str, str]


class ModelSettingsBody(BaseModel):
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)
    top_p: float = Field(default=DEFAULT_TOP_P, ge=0.0, le=1.0)
    frequency_penalty: float = Field(default=DEFAULT_FREQUENCY_PENALTY, ge=-2.0, le=2.0)
    presence_penalty: float = Field(default=DEFAULT_PRESENCE_PENALTY, ge=-2.0, le=2.0)
    system_prompt: str = DEFAULT_SYSTEM_PROMPT


class EnabledBody(BaseModel):
    enabled: bool


_registry: Optional[ProviderRegistry] = None


def get_uow_dep() -> Iterator[IUnitOfWork]:
    """FastAPI dependency yielding a request-scoped UnitOfWork.

    The connection is closed once the response has been produced.
    """
    uow = get_uow()
    try:
        yield uow
    finally:
        uow.close()


def get_registry_dep() -> ProviderRegistry:
    """FastAPI dependency returning the process-wide provider registry."""
    global _registry
    if _registry is None:
        _registry = default_registry()
    return _registry


def require_user(x_user_id: Optional[str] = Header(default=None, alias=LLMHUB_USER_HEADER)) -> str:
    """Return the acting user's id or reject the request with 401."""
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(status_code=401, detail=f"missing {LLMHUB_USER_HEADER} header")
    return user_id


def _build_env_to_provider_map() -> Dict[str, str]:
    """Map canonical and alias env var names, and provider names, to providers."""
    env_to_provider: Dict[str, str] = {v: k for k, v in ENV_MAP.items()}
    for prov, names in ENV_ALIASES.items():
        for n in names:
            env_to_provider.setdefault(n, prov)
    for prov in ENV_MAP:
        env_to_provider.setdefault(prov, prov)
    return env_to_provider


def _acceptable_key(candidate: str) -> bool:
    """Reject empty, non-ASCII, fully masked and placeholder values."""
    if not candidate or not candidate.isascii():
        return False
    if set(candidate) == {"*"}:
        return False
    return "placeholder" not in candidate.lower()


def _filter_keys(raw: Dict[str, str]) -> Dict[str, str]:
    env_to_provider = _build_env_to_provider_map()
    to_save: Dict[str, str] = {}
    for name, key in (raw or {}).items():
        provider = env_to_provider.get(name) or env_to_provider.get(name.lower().strip())
        if not (provider and isinstance(key, str)):
            continue
        candidate = key.strip()
        if _acceptable_key(candidate):
            to_save[provider] = candidate
    return to_save


def conversation_dict(c: Conversation) -> Dict[str, Any]:
    return {
        "id": c.id,
        "title": c.title,
        "provider": c.provider,
        "model": c.model,
        "created_at": c.created_at.isoformat(),
        "updated_at": c.updated_at.isoformat(),
    }


def message_dict(m: ChatMessage) -> Dict[str, Any]:
    return {
        "id": m.id,
        "conversation_id": m.conversation_id,
        "role": m.role,
        "content": m.content,
        "timestamp": m.timestamp.isoformat(),
        "provider": m.provider,
        "model": m.model,
        "token_count": m.token_count,
    }


def model_dict(m: ModelConfig) -> Dict[str, Any]:
    return {
        "provider": m.provider,
        "name": m.name,
        "display_name": m.display_name,
        "description": m.description,
        "max_tokens": m.max_tokens,
        "supports_streaming": m.supports_streaming,
        "is_enabled": m.is_enabled,
        "api_key_required": m.api_key_required,
        "category": m.category,
        "pricing": (
            None
            if m.pricing is None
            else {
                "input_tokens": m.pricing.input_tokens,
                "output_tokens": m.pricing.output_tokens,
                "currency": m.pricing.currency,
            }
        ),
    }


def model_settings_dict(s: ModelSettings) -> Dict[str, Any]:
    return {
        "provider": s.provider,
        "model": s.model,
        "temperature": s.temperature,
        "max_tokens": s.max_tokens,
        "top_p": s.top_p,
        "frequency_penalty": s.frequency_penalty,
        "presence_penalty": s.presence_penalty,
        "system_prompt": s.system_prompt,
    }


def _build_providers_response(registry: ProviderRegistry) -> Dict[str, Any]:
    """Return registered providers with display names and the env var each reads."""
    providers: List[Dict[str, Any]] = [
        {
            "id": name,
            "display_name": get_display_name(name),
            "env_var": ENV_MAP.get(name),
            "platform_key": name in PLATFORM_ENV_MAP,
        }
        for name in registry.supported()
    ]
    return {"ok": True, "providers": providers}


def _build_models_response(
    uow: IUnitOfWork,
    enabled_only: bool,
    provider: Optional[str],
    category: Optional[str] = None,
) -> Dict[str, Any]:
    """Pick the narrowest catalog query, then apply the remaining filters."""
    if provider:
        models = uow.catalog.list_by_provider(provider.lower().strip())
    elif category:
        models = uow.catalog.list_by_category(category)
    elif enabled_only:
        models = uow.catalog.list_enabled()
    else:
        models = uow.catalog.list_all()
    if provider and category:
        models = [m for m in models if m.category == category]
    if enabled_only:
        models = [m for m in models if m.is_enabled]
    return {"ok": True, "models": [model_dict(m) for m in models]}


def _build_settings_response(uow: IUnitOfWork, user_id: str) -> Dict[str, Any]:
    """Report which providers have a stored key without exposing any value."""
    record = uow.user_settings.get(user_id)
    stored = record.api_keys if record else {}
    return {
        "ok": True,
        "keys": {provider: bool(stored.get(provider)) for provider in ENV_MAP},
    }


__all__ = [
    "ConversationCreateBody",
    "ConversationRenameBody",
    "SendMessageBody",
    "KeysBody",
    "ModelSettingsBody",
    "EnabledBody",
    "get_uow_dep",
    "get_registry_dep",
    "require_user",
    "conversation_dict",
    "message_dict",
    "model_dict",
    "model_settings_dict",
    "_filter_keys",
    "_build_providers_response",
    "_build_models_response",
    "_build_settings_response",
]
