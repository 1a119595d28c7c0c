"""OpenAI-compatible adapter base and wire records."""

from .adapter import OpenAIStyleAdapter
from .wire import ChatCompletionMessage, ChatCompletionRequest, ChatCompletionResponse

__all__ = [
    "OpenAIStyleAdapter",
    "ChatCompletionMessage",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
]
