"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `llmhub.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .missing_credential import MissingCredentialError
from .unsupported_provider import UnsupportedProviderError
from .conversation_not_found import ConversationNotFoundError
from .classification import classify_exception, classify_status

__all__ = [
    "ErrorCode",
    "ProviderError",
    "MissingCredentialError",
    "UnsupportedProviderError",
    "ConversationNotFoundError",
    "classify_exception",
    "classify_status",
]
