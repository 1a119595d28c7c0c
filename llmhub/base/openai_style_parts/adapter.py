"""
Base adapter for providers exposing an OpenAI-compatible chat endpoint.
"""
from __future__ import annotations

from typing import Optional

from ..adapter_base import BaseHTTPAdapter
from ..models import GenerationParams, NormalizedChat
from ..normalize import MessageShape
from .wire import ChatCompletionMessage, ChatCompletionRequest, ChatCompletionResponse


class OpenAIStyleAdapter(BaseHTTPAdapter):
    """Bearer-authenticated ``POST {base_url}/chat/completions``.

    Sends the full sampling parameter set including both penalties and reads
    ``choices[0].message.content``.
    """

    shape = MessageShape.NATIVE_SYSTEM
    response_model = ChatCompletionResponse

    def endpoint(self, model: str) -> str:
        return f"{self._base_url}/chat/completions"

    def build_request(self, chat: NormalizedChat, model: str, params: GenerationParams) -> ChatCompletionRequest:
        return ChatCompletionRequest(
            model=model,
            messages=[ChatCompletionMessage(role=m.role, content=m.content) for m in chat.messages],
            max_tokens=params.max_tokens,
            temperature=params.temperature,
            top_p=params.top_p,
            frequency_penalty=params.frequency_penalty,
            presence_penalty=params.presence_penalty,
        )

    def extract_text(self, response: ChatCompletionResponse) -> Optional[str]:
        return response.first_text()


__all__ = ["OpenAIStyleAdapter"]
