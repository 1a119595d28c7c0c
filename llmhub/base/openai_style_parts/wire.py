"""
Wire records for the OpenAI chat completions format.

Shared by every provider that speaks it (OpenAI, DeepSeek, Mistral).
Response records are permissive: every field is optional so that a missing
path degrades to "no text" instead of a validation failure, while a field of
the wrong type is still rejected.
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatCompletionMessage(BaseModel):
    role: str
    content: str


class ChatCompletionRequest(BaseModel):
    """Request body for ``POST /chat/completions``."""

    model: str
    messages: List[ChatCompletionMessage]
    max_tokens: int
    temperature: float
    top_p: float
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None


class _ChoiceMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    role: Optional[str] = None
    content: Optional[str] = None


class _Choice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    index: Optional[int] = None
    message: Optional[_ChoiceMessage] = None
    finish_reason: Optional[str] = None


class ChatCompletionResponse(BaseModel):
    """Subset of the completion envelope the adapters read."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    model: Optional[str] = None
    choices: List[_Choice] = Field(default_factory=list)

    def first_text(self) -> Optional[str]:
        if not self.choices or self.choices[0].message is None:
            return None
        return self.choices[0].message.content


__all__ = ["ChatCompletionMessage", "ChatCompletionRequest", "ChatCompletionResponse"]
