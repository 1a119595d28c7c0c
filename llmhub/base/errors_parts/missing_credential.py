"""Missing credential error raised by the key resolver before any network I/O."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass(eq=False)
class MissingCredentialError(ProviderError):
    """No usable API key was found for a provider.

    ``env_var`` names the environment variable an operator could set instead of
    storing a key in the user's settings. OpenAI carries no hint because its
    remediation is to add a key in settings.
    """

    env_var: Optional[str] = None

    @classmethod
    def for_provider(
        cls,
        provider: str,
        display_name: str,
        env_var: Optional[str],
        *,
        model: Optional[str] = None,
    ) -> "MissingCredentialError":
        if provider == "openai" or not env_var:
            message = f"{display_name} API key not configured. Please add your API key in settings."
        else:
            message = (
                f"{display_name} API key not configured. Please add {env_var} "
                "to your environment variables or configure it in settings."
            )
        return cls(
            code=ErrorCode.AUTH,
            message=message,
            provider=provider,
            model=model,
            env_var=env_var,
        )


__all__ = ["MissingCredentialError"]
