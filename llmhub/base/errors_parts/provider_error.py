"""
Structured provider error exception type.

Every failure that is recorded into a conversation transcript is a
`ProviderError`: the human-readable ``message`` becomes the body of the
assistant error turn, while the remaining fields feed structured logging.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass(eq=False)
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable message, recorded verbatim in the transcript.
        provider: Provider key where the error originated (e.g. ``"openai"``).
        model: Optional model name associated with the failure.
        status_code: HTTP status returned by the provider, when there was one.
        raw_body: Response body exactly as received, for diagnostics.
        raw: Optional original exception (transport failures).
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    status_code: Optional[int] = None
    raw_body: Optional[str] = None
    raw: Optional[Exception] = None

    def __str__(self) -> str:
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


__all__ = ["ProviderError"]
