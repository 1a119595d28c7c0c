"""Repository & Unit of Work protocol definitions for the conversation store.

The orchestrator and the HTTP layer depend only on these abstractions;
concrete implementations live under ``persistence/sqlite/``.

Design Principles:
- No concrete behavior; pure structural typing via ``Protocol``.
- Dataclasses represent DTOs crossing repository boundaries.
- Every conversation-scoped operation takes the acting ``user_id`` explicitly.
  Implementations verify ownership before returning or mutating anything and
  raise :class:`~llmhub.base.errors.ConversationNotFoundError` on a miss or a
  foreign owner. They never filter silently.
- Transaction control belongs to ``IUnitOfWork``; repositories never commit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Protocol, Sequence

# ---------- Data Transfer Objects ----------


@dataclass
class Conversation:
    """A titled, user-owned thread of messages.

    Attributes
    ----------
    id: Primary key.
    user_id: Owning user.
    title: Display title.
    provider: Provider the conversation was started with (advisory).
    model: Model the conversation was started with (advisory).
    created_at: UTC creation time.
    updated_at: UTC time of the last appended message or rename.
    """

    id: int
    user_id: str
    title: str
    provider: str
    model: str
    created_at: datetime
    updated_at: datetime


@dataclass
class ChatMessage:
    """One immutable turn of a conversation.

    ``provider`` and ``model`` are set on assistant turns and record what
    actually produced the reply (or the failure).
    """

    id: int
    conversation_id: int
    role: str
    content: str
    timestamp: datetime
    provider: Optional[str] = None
    model: Optional[str] = None
    token_count: Optional[int] = None


@dataclass
class Pricing:
    """Per-token pricing attached to a catalog entry."""

    input_tokens: float
    output_tokens: float
    currency: str = "USD"


@dataclass
class ModelConfig:
    """Catalog entry describing one provider model."""

    provider: str
    name: str
    display_name: str
    description: str
    max_tokens: int
    supports_streaming: bool
    is_enabled: bool
    api_key_required: bool
    category: str
    pricing: Optional[Pricing] = None


@dataclass
class UserSettings:
    """Per-user settings: one optional API key per provider."""

    user_id: str
    api_keys: Dict[str, str] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class ModelSettings:
    """Generation settings saved for a (user, provider, model) triple."""

    user_id: str
    provider: str
    model: str
    temperature: float
    max_tokens: int
    top_p: float
    frequency_penalty: float
    presence_penalty: float
    system_prompt: str = ""


# ---------- Repository Protocols ----------


class IConversationRepo(Protocol):
    """Conversation storage with ownership checks."""

    def create(self, user_id: str, title: str, provider: str, model: str) -> Conversation:
        """Insert a conversation owned by ``user_id`` and return it."""
        ...

    def get(self, user_id: str, conversation_id: int) -> Conversation:
        """Return the conversation if ``user_id`` owns it.

        Raises
        ------
        ConversationNotFoundError
            When the row is missing or owned by someone else.
        """
        ...

    def list_for_user(self, user_id: str, limit: int = 50) -> List[Conversation]:
        """Return the user's conversations, most recently updated first."""
        ...

    def rename(self, user_id: str, conversation_id: int, title: str) -> Conversation:
        """Change the title and bump ``updated_at``."""
        ...

    def touch(self, user_id: str, conversation_id: int, timestamp: datetime) -> None:
        """Set ``updated_at`` to ``timestamp``."""
        ...

    def delete(self, user_id: str, conversation_id: int) -> int:
        """Delete the conversation and all of its messages.

        Returns
        -------
        int
            Number of messages removed along with the conversation.
        """
        ...


class IMessageRepo(Protocol):
    """Append-only message storage scoped to owned conversations."""

    def insert(
        self,
        user_id: str,
        conversation_id: int,
        role: str,
        content: str,
        timestamp: datetime,
        *,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        token_count: Optional[int] = None,
    ) -> int:
        """Append a message, bump the conversation's ``updated_at``, return the id."""
        ...

    def list(self, user_id: str, conversation_id: int) -> List[ChatMessage]:
        """Return messages in ascending ``(timestamp, id)`` order."""
        ...


class IUserSettingsRepo(Protocol):
    """Per-user API key record."""

    def get(self, user_id: str) -> Optional[UserSettings]:
        ...

    def get_api_key(self, user_id: str, provider: str) -> Optional[str]:
        """Return the stored key for ``provider`` or ``None`` when absent or empty."""
        ...

    def save_api_keys(self, user_id: str, api_keys: Dict[str, str]) -> UserSettings:
        """Replace the whole key record for ``user_id``."""
        ...


class IModelSettingsRepo(Protocol):
    """Generation settings keyed by (user, provider, model)."""

    def get(self, user_id: str, provider: str, model: str) -> Optional[ModelSettings]:
        ...

    def save(self, settings: ModelSettings) -> ModelSettings:
        """Upsert the whole record for the settings' triple."""
        ...


class IModelCatalogRepo(Protocol):
    """Static catalog of provider models."""

    def count(self) -> int:
        """Return the number of catalog rows."""
        ...

    def seed_if_empty(self, configs: Sequence[ModelConfig]) -> int:
        """Insert ``configs`` only when the catalog has no rows; return rows inserted."""
        ...

    def list_all(self) -> List[ModelConfig]:
        ...

    def list_enabled(self) -> List[ModelConfig]:
        ...

    def list_by_provider(self, provider: str) -> List[ModelConfig]:
        ...

    def list_by_category(self, category: str) -> List[ModelConfig]:
        ...

    def set_enabled(self, provider: str, name: str, enabled: bool) -> bool:
        """Toggle a model; return ``False`` when no such model exists."""
        ...


class IUnitOfWork(Protocol):
    """Transactional boundary aggregating repository instances.

    Writes made through the repositories are committed on clean exit of the
    context and rolled back when the block raises.
    """

    conversations: IConversationRepo
    messages: IMessageRepo
    user_settings: IUserSettingsRepo
    model_settings: IModelSettingsRepo
    catalog: IModelCatalogRepo

    def __enter__(self) -> "IUnitOfWork":  # pragma: no cover
        ...

    def __exit__(self, exc_type, exc, tb) -> None:  # pragma: no cover
        ...

    def commit(self) -> None:
        """Persist all pending changes atomically."""
        ...

    def rollback(self) -> None:
        """Undo all uncommitted changes. Idempotent."""
        ...

    def close(self) -> None:
        """Release the underlying connection."""
        ...
