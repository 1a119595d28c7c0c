"""DeepSeek adapter (OpenAI-compatible API at ``api.deepseek.com/v1``)."""

from __future__ import annotations

from ..base.openai_style import OpenAIStyleAdapter


class DeepSeekAdapter(OpenAIStyleAdapter):
    provider_name = "deepseek"


__all__ = ["DeepSeekAdapter"]
