"""
Provider-shaped projection of a conversation history.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .message import Message


@dataclass(frozen=True)
class NormalizedChat:
    """Output of the message normalizer.

    Attributes:
        messages: Ordered messages with roles in the target provider's
            vocabulary. For the Cohere shape this is the chat history only.
        system: Separate system text for shapes that carry it outside the
            message list (Anthropic). ``None`` when absent.
        prompt: Outgoing prompt text for shapes that split the last turn off
            the history (Cohere). ``None`` for every other shape.
    """

    messages: List[Message] = field(default_factory=list)
    system: Optional[str] = None
    prompt: Optional[str] = None


__all__ = ["NormalizedChat"]
