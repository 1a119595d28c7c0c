"""OpenAI adapter.

Purpose:
    Chat completions against ``{base_url}/chat/completions``. The base URL
    defaults to the public API and follows ``PLATFORM_OPENAI_BASE_URL`` when
    a managed gateway is configured alongside the platform key.

External dependencies:
    ``httpx`` via the pooled client; no SDK, so the error body reaches the
    transcript exactly as the API sent it.
"""

from __future__ import annotations

from ..base.openai_style import OpenAIStyleAdapter


class OpenAIAdapter(OpenAIStyleAdapter):
    provider_name = "openai"


__all__ = ["OpenAIAdapter"]
