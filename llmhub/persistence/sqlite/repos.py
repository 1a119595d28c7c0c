"""Public re-exports for SQLite repository adapters and the Unit of Work."""

from .catalog_repo import ModelCatalogRepoSqlite
from .conversation_repo import ConversationRepoSqlite
from .message_repo import MessageRepoSqlite
from .model_settings_repo import ModelSettingsRepoSqlite
from .user_settings_repo import UserSettingsRepoSqlite
from .unit_of_work import UnitOfWorkSqlite

__all__ = [
    "ConversationRepoSqlite",
    "MessageRepoSqlite",
    "UserSettingsRepoSqlite",
    "ModelSettingsRepoSqlite",
    "ModelCatalogRepoSqlite",
    "UnitOfWorkSqlite",
]
