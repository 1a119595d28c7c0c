"""Wire records for the Cohere v1 chat endpoint (``POST /v1/chat``)."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class ChatHistoryEntry(BaseModel):
    role: str
    message: str


class CohereChatRequest(BaseModel):
    """``p`` is Cohere's name for nucleus sampling (top-p)."""

    model: str
    message: str
    chat_history: List[ChatHistoryEntry]
    max_tokens: int
    temperature: float
    p: float


class CohereChatResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: Optional[str] = None
    generation_id: Optional[str] = None
    finish_reason: Optional[str] = None


__all__ = ["ChatHistoryEntry", "CohereChatRequest", "CohereChatResponse"]
