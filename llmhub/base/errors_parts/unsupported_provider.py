"""Unsupported provider error raised by the provider registry."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass(eq=False)
class UnsupportedProviderError(ProviderError):
    """The provider name is not registered with any adapter."""

    @classmethod
    def for_provider(cls, provider: str, *, model: Optional[str] = None) -> "UnsupportedProviderError":
        return cls(
            code=ErrorCode.UNSUPPORTED,
            message=f"Provider {provider} not supported",
            provider=provider,
            model=model,
        )


__all__ = ["UnsupportedProviderError"]
