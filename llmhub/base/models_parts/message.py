"""
Message DTO used across adapters.

Defines the provider-neutral `Message` dataclass and the `Role` literal for
roles as they are stored. After normalization the ``role`` may hold a
provider vocabulary value (``"model"``, ``"CHATBOT"``), hence the plain
``str`` annotation on the field.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

# Message roles as persisted in conversation history.
Role = Literal["system", "user", "assistant"]

STORED_ROLES = ("system", "user", "assistant")


@dataclass(frozen=True)
class Message:
    """A role and its text content.

    Attributes:
        role: Author role. One of :data:`STORED_ROLES` before normalization,
            possibly a provider-specific name afterwards.
        content: Plain text content.
    """

    role: str
    content: str


__all__ = ["Message", "Role", "STORED_ROLES"]
