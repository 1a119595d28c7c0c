"""Cohere adapter.

Purpose:
    Cohere's v1 chat takes the newest user turn as a single ``message`` and
    everything before it as ``chat_history`` with ``USER``/``CHATBOT`` roles.
    The normalizer already split the conversation that way and folded the
    system prompt into the outgoing message.

Parameters:
    ``max_tokens``, ``temperature`` and ``p``. Cohere has no frequency or
    presence penalty on this endpoint.
"""

from __future__ import annotations

from typing import Optional

from ..base.adapter_base import BaseHTTPAdapter
from ..base.models import GenerationParams, NormalizedChat
from ..base.normalize import MessageShape
from .wire import ChatHistoryEntry, CohereChatRequest, CohereChatResponse


class CohereAdapter(BaseHTTPAdapter):
    provider_name = "cohere"
    shape = MessageShape.COHERE
    response_model = CohereChatResponse

    def endpoint(self, model: str) -> str:
        return f"{self._base_url}/chat"

    def build_request(self, chat: NormalizedChat, model: str, params: GenerationParams) -> CohereChatRequest:
        return CohereChatRequest(
            model=model,
            message=chat.prompt or "",
            chat_history=[ChatHistoryEntry(role=m.role, message=m.content) for m in chat.messages],
            max_tokens=params.max_tokens,
            temperature=params.temperature,
            p=params.top_p,
        )

    def extract_text(self, response: CohereChatResponse) -> Optional[str]:
        return response.text


__all__ = ["CohereAdapter"]
