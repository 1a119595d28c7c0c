"""Message normalization: stored history to provider-shaped messages.

Each adapter declares one :class:`MessageShape`; :func:`normalize` projects
the stored conversation into that shape. The projection is pure: it builds
new :class:`Message` instances and never touches the records it was given.

System prompt rule
------------------
The *effective* system prompt is the configured one when it is non-empty,
otherwise the content of the first inline ``system`` message in the history.
Inline ``system`` messages are removed from the projected list in every shape
that carries the effective prompt separately. The native-system shape is the
one exception when nothing is configured: history passes through untouched,
inline system messages included, because the provider accepts them as-is.
"""
from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Optional, Sequence

from ..config.defaults import COHERE_SYSTEM_SEPARATOR, GOOGLE_SYSTEM_MARKER
from .models import Message, NormalizedChat


class MessageShape(str, Enum):
    """Wire conventions for carrying roles and the system prompt."""

    # Inline ``system`` role supported (OpenAI, DeepSeek, Mistral).
    NATIVE_SYSTEM = "native_system"
    # System prompt in a separate top-level field (Anthropic).
    SEPARATE_SYSTEM = "separate_system"
    # ``user``/``model`` roles, no system concept (Google).
    GOOGLE = "google"
    # Flattened prompt plus ``USER``/``CHATBOT`` history (Cohere).
    COHERE = "cohere"


def effective_system_prompt(history: Iterable[Message], system_prompt: Optional[str]) -> Optional[str]:
    """Return the system text that should reach the provider, or ``None``."""
    if system_prompt:
        return system_prompt
    for m in history:
        if m.role == "system" and m.content:
            return m.content
    return None


def _without_system(history: Iterable[Message]) -> List[Message]:
    return [m for m in history if m.role != "system"]


def _native(history: Sequence[Message], system_prompt: Optional[str]) -> NormalizedChat:
    if not system_prompt:
        return NormalizedChat(messages=[Message(m.role, m.content) for m in history])
    messages = [Message("system", system_prompt)]
    messages.extend(Message(m.role, m.content) for m in _without_system(history))
    return NormalizedChat(messages=messages)


def _separate(history: Sequence[Message], system_prompt: Optional[str]) -> NormalizedChat:
    return NormalizedChat(
        messages=[Message(m.role, m.content) for m in _without_system(history)],
        system=effective_system_prompt(history, system_prompt),
    )


def _google(history: Sequence[Message], system_prompt: Optional[str]) -> NormalizedChat:
    system = effective_system_prompt(history, system_prompt)
    messages: List[Message] = []
    if system:
        messages.append(Message("user", f"{GOOGLE_SYSTEM_MARKER}{system}"))
    for m in _without_system(history):
        messages.append(Message("model" if m.role == "assistant" else "user", m.content))
    return NormalizedChat(messages=messages)


def _cohere(history: Sequence[Message], system_prompt: Optional[str]) -> NormalizedChat:
    system = effective_system_prompt(history, system_prompt)
    turns = _without_system(history)
    prompt = turns[-1].content if turns else ""
    if system:
        prompt = f"{system}{COHERE_SYSTEM_SEPARATOR}{prompt}"
    chat_history = [
        Message("CHATBOT" if m.role == "assistant" else "USER", m.content) for m in turns[:-1]
    ]
    return NormalizedChat(messages=chat_history, prompt=prompt)


_PROJECTIONS = {
    MessageShape.NATIVE_SYSTEM: _native,
    MessageShape.SEPARATE_SYSTEM: _separate,
    MessageShape.GOOGLE: _google,
    MessageShape.COHERE: _cohere,
}


def normalize(
    history: Sequence[Message],
    system_prompt: Optional[str],
    shape: MessageShape,
) -> NormalizedChat:
    """Project ``history`` into ``shape``.

    Parameters
    ----------
    history:
        Stored messages in conversation order.
    system_prompt:
        Configured system prompt; empty string and ``None`` both mean unset.
    shape:
        Target convention declared by the adapter.

    Returns
    -------
    NormalizedChat
        Fresh messages plus the separate ``system`` or ``prompt`` field when
        the shape uses one.
    """
    return _PROJECTIONS[MessageShape(shape)](list(history), system_prompt or None)


__all__ = ["MessageShape", "normalize", "effective_system_prompt"]
