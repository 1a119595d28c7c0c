"""Stable import path for the OpenAI-compatible adapter base."""

from .openai_style_parts import (
    ChatCompletionMessage,
    ChatCompletionRequest,
    ChatCompletionResponse,
    OpenAIStyleAdapter,
)

__all__ = [
    "OpenAIStyleAdapter",
    "ChatCompletionMessage",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
]
