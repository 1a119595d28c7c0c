"""Unified error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``llmhub.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.missing_credential import MissingCredentialError
from .errors_parts.unsupported_provider import UnsupportedProviderError
from .errors_parts.conversation_not_found import ConversationNotFoundError
from .errors_parts.classification import classify_exception, classify_status

__all__ = [
    "ErrorCode",
    "ProviderError",
    "MissingCredentialError",
    "UnsupportedProviderError",
    "ConversationNotFoundError",
    "classify_exception",
    "classify_status",
]
