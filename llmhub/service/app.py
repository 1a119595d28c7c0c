from __future__ import annotations

import os
import sqlite3
from typing import Any, Dict, Optional

import yaml
from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from llmhub import __version__
from llmhub.base.errors import (
    ConversationNotFoundError,
    MissingCredentialError,
    ProviderError,
    UnsupportedProviderError,
)
from llmhub.base.factory import ProviderRegistry
from llmhub.base.logging import get_logger, log_event
from llmhub.config.defaults import CONVERSATION_LIST_LIMIT, LLMHUB_SERVICE_CORS_DEFAULT_ORIGINS
from llmhub.persistence.interfaces.repos import IUnitOfWork, ModelSettings
from llmhub.persistence.sqlite import get_uow

from .app_parts.app_core import (
    ConversationCreateBody,
    ConversationRenameBody,
    EnabledBody,
    KeysBody,
    ModelSettingsBody,
    SendMessageBody,
    _build_models_response,
    _build_providers_response,
    _build_settings_response,
    _filter_keys,
    conversation_dict,
    get_registry_dep,
    get_uow_dep,
    message_dict,
    model_settings_dict,
    require_user,
)
from .chat_service import ChatOrchestrator
from .export import EXPORT_FORMATS, export_conversation
from .model_catalog_loader import load_model_catalog

_logger = get_logger("llmhub.service.app")

app = FastAPI(title="LLM Hub Service", version=__version__)


@app.on_event("startup")
def _seed_model_catalog() -> None:
    """Seed the model catalog from the bundled YAML when the table is empty.

    A broken catalog file or database is logged and the service still starts;
    ``/api/models`` then answers with an empty list.
    """
    uow = get_uow()
    try:
        load_model_catalog(uow)
    except (OSError, ValueError, yaml.YAMLError, sqlite3.Error) as e:
        log_event(_logger, "catalog.seed_failed", error=str(e), error_type=type(e).__name__)
    finally:
        uow.close()


# ---------------------------------------------------------------------------
# CORS configuration
# ---------------------------------------------------------------------------

cors_origins_env = os.getenv("LLMHUB_SERVICE_CORS_ORIGINS", LLMHUB_SERVICE_CORS_DEFAULT_ORIGINS)
allow_origins = [o.strip() for o in cors_origins_env.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------


@app.exception_handler(ConversationNotFoundError)
def _on_not_found(request: Request, exc: ConversationNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"ok": False, "error": str(exc)})


def _provider_error_response(status_code: int, exc: ProviderError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "ok": False,
            "error": exc.message,
            "code": exc.code.value,
            "provider": exc.provider,
            "model": exc.model,
        },
    )


@app.exception_handler(UnsupportedProviderError)
def _on_unsupported(request: Request, exc: UnsupportedProviderError) -> JSONResponse:
    return _provider_error_response(400, exc)


@app.exception_handler(MissingCredentialError)
def _on_missing_credential(request: Request, exc: MissingCredentialError) -> JSONResponse:
    return _provider_error_response(400, exc)


@app.exception_handler(ProviderError)
def _on_provider_error(request: Request, exc: ProviderError) -> JSONResponse:
    return _provider_error_response(502, exc)


# ---------------------------------------------------------------------------
# Health, providers and models endpoints
# ---------------------------------------------------------------------------


@app.get("/api/health")
def health() -> Dict[str, Any]:
    """Report that the service is up."""
    return {"ok": True, "version": __version__}


@app.get("/api/providers")
def get_providers(registry: ProviderRegistry = Depends(get_registry_dep)) -> Dict[str, Any]:
    """List the providers a message can be sent to."""
    return _build_providers_response(registry)


@app.get("/api/models")
def get_models(
    enabled_only: bool = False,
    provider: Optional[str] = None,
    category: Optional[str] = None,
    uow: IUnitOfWork = Depends(get_uow_dep),
) -> Dict[str, Any]:
    """List catalog models, filtered by enabled flag, provider or category."""
    return _build_models_response(uow, enabled_only, provider, category)


@app.put("/api/models/{provider}/{name}/enabled")
def put_model_enabled(
    provider: str,
    name: str,
    body: EnabledBody,
    user_id: str = Depends(require_user),
    uow: IUnitOfWork = Depends(get_uow_dep),
) -> Dict[str, Any]:
    """Toggle a catalog model; any signed-in user may do this."""
    with uow:
        found = uow.catalog.set_enabled(provider.lower().strip(), name, body.enabled)
    if not found:
        raise HTTPException(status_code=404, detail=f"model {provider}/{name} not found")
    return {"ok": True, "provider": provider.lower().strip(), "name": name, "enabled": body.enabled}


# ---------------------------------------------------------------------------
# Conversation endpoints
# ---------------------------------------------------------------------------


@app.post("/api/conversations", status_code=201)
def post_conversation(
    body: ConversationCreateBody,
    user_id: str = Depends(require_user),
    uow: IUnitOfWork = Depends(get_uow_dep),
) -> Dict[str, Any]:
    with uow:
        conv = uow.conversations.create(user_id, body.title, body.provider.lower().strip(), body.model)
    return {"ok": True, "conversation": conversation_dict(conv)}


@app.get("/api/conversations")
def list_conversations(
    limit: int = CONVERSATION_LIST_LIMIT,
    user_id: str = Depends(require_user),
    uow: IUnitOfWork = Depends(get_uow_dep),
) -> Dict[str, Any]:
    """List the caller's conversations, most recently updated first."""
    convs = uow.conversations.list_for_user(user_id, limit=max(1, min(limit, CONVERSATION_LIST_LIMIT)))
    return {"ok": True, "conversations": [conversation_dict(c) for c in convs]}


@app.get("/api/conversations/{conversation_id}")
def get_conversation(
    conversation_id: int,
    user_id: str = Depends(require_user),
    uow: IUnitOfWork = Depends(get_uow_dep),
) -> Dict[str, Any]:
    return {"ok": True, "conversation": conversation_dict(uow.conversations.get(user_id, conversation_id))}


@app.patch("/api/conversations/{conversation_id}")
def rename_conversation(
    conversation_id: int,
    body: ConversationRenameBody,
    user_id: str = Depends(require_user),
    uow: IUnitOfWork = Depends(get_uow_dep),
) -> Dict[str, Any]:
    with uow:
        conv = uow.conversations.rename(user_id, conversation_id, body.title)
    return {"ok": True, "conversation": conversation_dict(conv)}


@app.delete("/api/conversations/{conversation_id}")
def delete_conversation(
    conversation_id: int,
    user_id: str = Depends(require_user),
    uow: IUnitOfWork = Depends(get_uow_dep),
) -> Dict[str, Any]:
    """Delete a conversation together with all of its messages."""
    with uow:
        removed = uow.conversations.delete(user_id, conversation_id)
    return {"ok": True, "deleted": conversation_id, "messages_deleted": removed}


# ---------------------------------------------------------------------------
# Message endpoints
# ---------------------------------------------------------------------------


@app.get("/api/conversations/{conversation_id}/messages")
def list_messages(
    conversation_id: int,
    user_id: str = Depends(require_user),
    uow: IUnitOfWork = Depends(get_uow_dep),
) -> Dict[str, Any]:
    return {"ok": True, "messages": [message_dict(m) for m in uow.messages.list(user_id, conversation_id)]}


@app.post("/api/conversations/{conversation_id}/messages")
def post_message(
    conversation_id: int,
    body: SendMessageBody,
    user_id: str = Depends(require_user),
    uow: IUnitOfWork = Depends(get_uow_dep),
    registry: ProviderRegistry = Depends(get_registry_dep),
) -> Dict[str, Any]:
    """Send one user turn and return the assistant reply.

    Failed sends still leave both turns in the transcript; the error is then
    reported through the mapped status code.
    """
    reply = ChatOrchestrator(uow, registry).send_message(
        user_id, conversation_id, body.content, body.provider, body.model, token_count=body.token_count
    )
    return {"ok": True, "reply": reply}


@app.get("/api/conversations/{conversation_id}/export")
def export(
    conversation_id: int,
    fmt: str = Query(default="markdown", alias="format"),
    include_metadata: bool = True,
    user_id: str = Depends(require_user),
    uow: IUnitOfWork = Depends(get_uow_dep),
) -> Response:
    """Download the conversation as JSON, Markdown or plain text."""
    if fmt.lower() not in EXPORT_FORMATS:
        raise HTTPException(status_code=400, detail=f"format must be one of {', '.join(EXPORT_FORMATS)}")
    conv = uow.conversations.get(user_id, conversation_id)
    messages = uow.messages.list(user_id, conversation_id)
    result = export_conversation(conv, messages, fmt, include_metadata=include_metadata)
    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )


# ---------------------------------------------------------------------------
# Settings endpoints
# ---------------------------------------------------------------------------


@app.get("/api/settings")
def get_settings(user_id: str = Depends(require_user), uow: IUnitOfWork = Depends(get_uow_dep)) -> Dict[str, Any]:
    """Report which providers the caller has stored a key for."""
    return _build_settings_response(uow, user_id)


@app.put("/api/settings/keys")
def put_keys(
    body: KeysBody,
    user_id: str = Depends(require_user),
    uow: IUnitOfWork = Depends(get_uow_dep),
) -> Dict[str, Any]:
    """Replace the caller's stored keys; masked or placeholder values are dropped."""
    to_save = _filter_keys(body.api_keys)
    with uow:
        uow.user_settings.save_api_keys(user_id, to_save)
    return {"ok": True, "stored": sorted(to_save)}


@app.get("/api/settings/models/{provider}/{model}")
def get_model_settings(
    provider: str,
    model: str,
    user_id: str = Depends(require_user),
    uow: IUnitOfWork = Depends(get_uow_dep),
) -> Dict[str, Any]:
    """Return the saved settings, or the defaults when none were saved."""
    provider = provider.lower().strip()
    row = uow.model_settings.get(user_id, provider, model)
    if row is None:
        return {"ok": True, "saved": False, "settings": {"provider": provider, "model": model, **ModelSettingsBody().model_dump()}}
    return {"ok": True, "saved": True, "settings": model_settings_dict(row)}


@app.put("/api/settings/models/{provider}/{model}")
def put_model_settings(
    provider: str,
    model: str,
    body: ModelSettingsBody,
    user_id: str = Depends(require_user),
    uow: IUnitOfWork = Depends(get_uow_dep),
) -> Dict[str, Any]:
    with uow:
        saved = uow.model_settings.save(
            ModelSettings(user_id=user_id, provider=provider.lower().strip(), model=model, **body.model_dump())
        )
    return {"ok": True, "saved": True, "settings": model_settings_dict(saved)}


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


def get_app() -> FastAPI:
    """Return the configured FastAPI application."""
    return app
