"""Anthropic adapter.

Purpose:
    Messages API call with the system prompt carried in the top-level
    ``system`` field; inline system turns never reach the message list.

Auth:
    ``x-api-key`` header plus the ``anthropic-version`` header taken from
    configuration (default ``2023-06-01``).

Parameters:
    ``max_tokens``, ``temperature`` and ``top_p``. The Messages API has no
    frequency or presence penalty, so those are not sent.
"""

from __future__ import annotations

from typing import Dict, Optional

from ..base.adapter_base import BaseHTTPAdapter
from ..base.models import GenerationParams, NormalizedChat
from ..base.normalize import MessageShape
from ..config.defaults import ANTHROPIC_API_VERSION
from .wire import AnthropicMessage, MessagesRequest, MessagesResponse


class AnthropicAdapter(BaseHTTPAdapter):
    provider_name = "anthropic"
    shape = MessageShape.SEPARATE_SYSTEM
    response_model = MessagesResponse

    def endpoint(self, model: str) -> str:
        return f"{self._base_url}/messages"

    def headers(self, api_key: str) -> Dict[str, str]:
        return {
            "x-api-key": api_key,
            "anthropic-version": str(self._config.get("api_version") or ANTHROPIC_API_VERSION),
            "Content-Type": "application/json",
        }

    def build_request(self, chat: NormalizedChat, model: str, params: GenerationParams) -> MessagesRequest:
        return MessagesRequest(
            model=model,
            max_tokens=params.max_tokens,
            messages=[AnthropicMessage(role=m.role, content=m.content) for m in chat.messages],
            temperature=params.temperature,
            top_p=params.top_p,
            system=chat.system or None,
        )

    def extract_text(self, response: MessagesResponse) -> Optional[str]:
        return response.first_text()


__all__ = ["AnthropicAdapter"]
