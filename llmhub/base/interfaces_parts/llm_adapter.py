"""LLMAdapter Protocol (single-class module).

Defines the one capability every provider adapter implements.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import GenerationParams, NormalizedChat
from ..normalize import MessageShape


@runtime_checkable
class LLMAdapter(Protocol):
    """Minimal interface for provider adapters.

    Implementations translate a normalized chat into their provider's wire
    request, perform exactly one call, and return plain reply text.
    """

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g. ``"openai"``."""
        ...

    @property
    def display_name(self) -> str:
        """Human-facing name used in error messages, e.g. ``"OpenAI"``."""
        ...

    @property
    def shape(self) -> MessageShape:
        """Message convention the adapter expects from the normalizer."""
        ...

    def generate(
        self,
        chat: NormalizedChat,
        model: str,
        api_key: str,
        params: GenerationParams,
    ) -> str:
        """Return the reply text.

        Raises :class:`~llmhub.base.errors.ProviderError` when the provider
        answers with a non-success status or the transport fails. A success
        response without text yields a placeholder reply instead of an error.
        """
        ...
