"""llmhub package

Multi-provider chat core: one conversation store, one orchestrator, and a
registry of provider adapters (OpenAI, Anthropic, Google, DeepSeek, Mistral,
Cohere) that each make a single HTTP call per reply.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`,
      :class:`MissingCredentialError`, :class:`UnsupportedProviderError`,
      :class:`ConversationNotFoundError`
    - Registry: :class:`ProviderRegistry`, :func:`default_registry`
    - Normalization: :class:`MessageShape`, :func:`normalize`

The orchestrator lives in :mod:`llmhub.service.chat_service` and the HTTP app
in :mod:`llmhub.service.app`.
"""

__version__ = "0.1.0"

from .base.errors import (  # noqa: E402
    ConversationNotFoundError,
    ErrorCode,
    MissingCredentialError,
    ProviderError,
    UnsupportedProviderError,
)
from .base.factory import ProviderRegistry, default_registry  # noqa: E402
from .base.normalize import MessageShape, normalize  # noqa: E402

__all__ = [
    "__version__",
    "ConversationNotFoundError",
    "ErrorCode",
    "MissingCredentialError",
    "ProviderError",
    "UnsupportedProviderError",
    "ProviderRegistry",
    "default_registry",
    "MessageShape",
    "normalize",
]
