"""Chat turn orchestration.

``ChatOrchestrator.send_message`` runs one chat turn against the store and a
provider adapter:

1. append the user turn and commit it, so it survives a failed generation;
2. reload the ordered history, the new turn included;
3. look up the adapter, then the API key, then the generation parameters;
4. normalize the history for the adapter's shape and make the single call;
5. append exactly one assistant turn: the reply on success, or
   ``"Error: <message>"`` on failure, tagged with the requested provider and
   model.

Failures are recorded and then re-raised unchanged. A missing or foreign
conversation is the exception to recording: it propagates before anything is
written. There is no retry and no lock; concurrent sends on one conversation
interleave by timestamp.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, List, Optional

from ..base.errors import ConversationNotFoundError, ProviderError
from ..base.factory import ProviderRegistry, default_registry
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import Message
from ..base.normalize import normalize
from ..base.repositories import GenerationSettingsResolver, KeysRepository
from ..config.defaults import ERROR_TURN_PREFIX
from ..persistence.interfaces.repos import ChatMessage, IUnitOfWork
from ..persistence.sqlite.helpers import utcnow

_logger = get_logger("llmhub.service.chat")


def error_turn_content(exc: BaseException) -> str:
    """Return the transcript text recording ``exc``."""
    message = exc.message if isinstance(exc, ProviderError) else str(exc)
    return f"{ERROR_TURN_PREFIX}{message}"


def _history(messages: List[ChatMessage]) -> List[Message]:
    return [Message(m.role, m.content) for m in messages]


class ChatOrchestrator:
    """Sequence persistence and provider dispatch for one chat turn.

    Parameters
    ----------
    uow:
        Unit of Work over the conversation store. Entered once per write phase.
    registry:
        Provider registry; the built-in adapters when omitted.
    keys:
        Credential resolver; built over ``uow.user_settings`` when omitted.
    settings:
        Generation parameter resolver; built over ``uow.model_settings`` when
        omitted.
    clock:
        Source of UTC timestamps for new turns.
    """

    def __init__(
        self,
        uow: IUnitOfWork,
        registry: Optional[ProviderRegistry] = None,
        *,
        keys: Optional[KeysRepository] = None,
        settings: Optional[GenerationSettingsResolver] = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._uow = uow
        self._registry = registry or default_registry()
        self._keys = keys or KeysRepository(uow.user_settings)
        self._settings = settings or GenerationSettingsResolver(uow.model_settings)
        self._clock = clock

    def send_message(
        self,
        user_id: str,
        conversation_id: int,
        text: str,
        provider: str,
        model: str,
        *,
        token_count: Optional[int] = None,
    ) -> str:
        """Send ``text`` on behalf of ``user_id`` and return the reply.

        ``token_count`` is an optional count supplied by the caller and is
        stored on the user turn as given.

        Raises
        ------
        ConversationNotFoundError
            The conversation is missing or owned by someone else. Nothing is
            recorded.
        UnsupportedProviderError, MissingCredentialError, ProviderError
            After the error turn has been persisted.
        """
        provider = (provider or "").lower().strip()
        ctx = LogContext(provider=provider, model=model, user_id=user_id, conversation_id=conversation_id)
        normalized_log_event(_logger, "send.start", ctx, phase="start")

        with self._uow as uow:
            message_id = uow.messages.insert(
                user_id, conversation_id, "user", text, self._clock(), token_count=token_count
            )
        normalized_log_event(_logger, "send.user_turn", ctx, phase="persist", message_id=message_id)

        try:
            reply = self._generate(user_id, conversation_id, provider, model, ctx)
        except ConversationNotFoundError:
            raise
        except Exception as exc:
            try:
                self._record(user_id, conversation_id, error_turn_content(exc), provider, model)
            except ConversationNotFoundError:
                # Deleted mid-send; the provider failure is still what gets raised.
                normalized_log_event(_logger, "send.error_turn_dropped", ctx, phase="persist", emitted=False)
            code = exc.code.value if isinstance(exc, ProviderError) else "unknown"
            normalized_log_event(
                _logger,
                "send.failure",
                ctx,
                phase="finalize",
                emitted=False,
                error_code=code,
                error_type=type(exc).__name__,
            )
            raise

        self._record(user_id, conversation_id, reply, provider, model)
        normalized_log_event(_logger, "send.success", ctx, phase="finalize", emitted=True, reply_chars=len(reply))
        return reply

    def _generate(self, user_id: str, conversation_id: int, provider: str, model: str, ctx: LogContext) -> str:
        history = _history(self._uow.messages.list(user_id, conversation_id))
        adapter = self._registry.get(provider, model=model)
        api_key = self._keys.resolve(user_id, provider, model=model)
        params = self._settings.resolve(user_id, provider, model)
        chat = normalize(history, params.system_prompt, adapter.shape)
        normalized_log_event(
            _logger,
            "send.dispatch",
            ctx,
            phase="dispatch",
            attempt=1,
            shape=adapter.shape.value,
            history=len(history),
        )
        return adapter.generate(chat, model, api_key, params)

    def _record(self, user_id: str, conversation_id: int, content: str, provider: str, model: str) -> None:
        with self._uow as uow:
            uow.messages.insert(
                user_id,
                conversation_id,
                "assistant",
                content,
                self._clock(),
                provider=provider,
                model=model,
            )


__all__ = ["ChatOrchestrator", "error_turn_content"]
