"""
Core base package.

Exports the provider-agnostic contracts, DTOs, error taxonomy, credential and
parameter resolvers, the message normalizer and the provider registry.
"""

from .errors import (
    ConversationNotFoundError,
    ErrorCode,
    MissingCredentialError,
    ProviderError,
    UnsupportedProviderError,
)
from .factory import ProviderRegistry, default_registry
from .interfaces import LLMAdapter
from .models import GenerationParams, Message, NormalizedChat
from .normalize import MessageShape, normalize
from .repositories import GenerationSettingsResolver, KeyResolution, KeysRepository
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    "ConversationNotFoundError",
    "ErrorCode",
    "MissingCredentialError",
    "ProviderError",
    "UnsupportedProviderError",
    "ProviderRegistry",
    "default_registry",
    "LLMAdapter",
    "GenerationParams",
    "Message",
    "NormalizedChat",
    "MessageShape",
    "normalize",
    "GenerationSettingsResolver",
    "KeyResolution",
    "KeysRepository",
    "TimeoutConfig",
    "get_timeout_config",
]
