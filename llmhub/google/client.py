"""Google (Gemini) adapter.

Purpose:
    ``POST {base_url}/models/{model}:generateContent`` with the key in the
    ``key`` query parameter. Roles are ``user`` and ``model``; the system
    prompt arrives from the normalizer as a leading ``user`` turn.

Parameters:
    ``generationConfig`` carries ``maxOutputTokens``, ``temperature`` and
    ``topP``; penalties are not sent.
"""

from __future__ import annotations

from typing import Dict, Optional

from ..base.adapter_base import BaseHTTPAdapter
from ..base.models import GenerationParams, NormalizedChat
from ..base.normalize import MessageShape
from .wire import Content, GenerateContentRequest, GenerateContentResponse, GenerationConfig, Part


class GoogleAdapter(BaseHTTPAdapter):
    provider_name = "google"
    shape = MessageShape.GOOGLE
    response_model = GenerateContentResponse

    def endpoint(self, model: str) -> str:
        return f"{self._base_url}/models/{model}:generateContent"

    def headers(self, api_key: str) -> Dict[str, str]:
        return {"Content-Type": "application/json"}

    def query_params(self, api_key: str) -> Dict[str, str]:
        return {"key": api_key}

    def build_request(self, chat: NormalizedChat, model: str, params: GenerationParams) -> GenerateContentRequest:
        return GenerateContentRequest(
            contents=[Content(role=m.role, parts=[Part(text=m.content)]) for m in chat.messages],
            generation_config=GenerationConfig(
                max_output_tokens=params.max_tokens,
                temperature=params.temperature,
                top_p=params.top_p,
            ),
        )

    def extract_text(self, response: GenerateContentResponse) -> Optional[str]:
        return response.first_text()


__all__ = ["GoogleAdapter"]
