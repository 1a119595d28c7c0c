"""Mistral adapter.

Mistral's ``/v1/chat/completions`` accepts the OpenAI request shape,
including the frequency and presence penalties.
"""

from __future__ import annotations

from ..base.openai_style import OpenAIStyleAdapter


class MistralAdapter(OpenAIStyleAdapter):
    provider_name = "mistral"


__all__ = ["MistralAdapter"]
