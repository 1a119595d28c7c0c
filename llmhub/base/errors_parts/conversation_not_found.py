"""Ownership failure signal raised by conversation store checks."""
from __future__ import annotations

from typing import Optional


class ConversationNotFoundError(LookupError):
    """The conversation does not exist or belongs to another user.

    Both cases deliberately share one signal so a caller cannot probe for the
    existence of conversations it does not own.
    """

    def __init__(self, conversation_id: Optional[int] = None) -> None:
        super().__init__("Conversation not found")
        self.conversation_id = conversation_id


__all__ = ["ConversationNotFoundError"]
