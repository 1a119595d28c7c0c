"""Persistence interfaces package.

Defines repository protocols and shared DTOs for conversations, messages,
settings and the model catalog, plus a Unit of Work abstraction. Concrete
implementations live under persistence adapters such as SQLite.
"""

from .repos import (  # noqa: F401
    ChatMessage,
    Conversation,
    IConversationRepo,
    IMessageRepo,
    IModelCatalogRepo,
    IModelSettingsRepo,
    IUnitOfWork,
    IUserSettingsRepo,
    ModelConfig,
    ModelSettings,
    Pricing,
    UserSettings,
)
