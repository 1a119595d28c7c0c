"""
Sampling parameters resolved for one (user, provider, model) triple.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict

from ...config.defaults import (
    DEFAULT_FREQUENCY_PENALTY,
    DEFAULT_MAX_TOKENS,
    DEFAULT_PRESENCE_PENALTY,
    DEFAULT_SYSTEM_PROMPT,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_P,
)


@dataclass(frozen=True)
class GenerationParams:
    """Generation parameters handed to an adapter.

    Defaults equal the values applied when a user never saved settings for
    the model. ``system_prompt`` is an empty string when none is configured.
    """

    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    top_p: float = DEFAULT_TOP_P
    frequency_penalty: float = DEFAULT_FREQUENCY_PENALTY
    presence_penalty: float = DEFAULT_PRESENCE_PENALTY
    system_prompt: str = DEFAULT_SYSTEM_PROMPT

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["GenerationParams"]
