"""Wire records for the Anthropic Messages API (``POST /v1/messages``)."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AnthropicMessage(BaseModel):
    role: str
    content: str


class MessagesRequest(BaseModel):
    """Request body. ``system`` is omitted from the JSON when unset."""

    model: str
    max_tokens: int
    messages: List[AnthropicMessage]
    temperature: float
    top_p: float
    system: Optional[str] = None


class _ContentBlock(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: Optional[str] = None
    text: Optional[str] = None


class MessagesResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    model: Optional[str] = None
    stop_reason: Optional[str] = None
    content: List[_ContentBlock] = Field(default_factory=list)

    def first_text(self) -> Optional[str]:
        return self.content[0].text if self.content else None


__all__ = ["AnthropicMessage", "MessagesRequest", "MessagesResponse"]
