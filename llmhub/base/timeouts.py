"""Timeout configuration for outbound provider calls.

No deadline is imposed by default: a provider call runs until the provider
answers or the transport fails. ``LLMHUB_HTTP_TIMEOUT_SECONDS`` sets one bound
that applies to every phase of the request (connect, read, write, pool).

The value is read once and cached. Tests that change the environment call
:func:`reset_timeout_config`.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

TIMEOUT_ENV = "LLMHUB_HTTP_TIMEOUT_SECONDS"


@dataclass(frozen=True)
class TimeoutConfig:
    http_timeout_seconds: Optional[float] = None


_CACHED: TimeoutConfig | None = None


def _positive_seconds(raw: Optional[str]) -> Optional[float]:
    """Return ``raw`` as a positive float; anything else means unbounded."""
    try:
        seconds = float(raw) if raw else 0.0
    except ValueError:
        return None
    return seconds if seconds > 0 else None


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED  # noqa: PLW0603 - module cache
    if _CACHED is None:
        _CACHED = TimeoutConfig(http_timeout_seconds=_positive_seconds(os.getenv(TIMEOUT_ENV)))
    return _CACHED


def reset_timeout_config() -> None:
    global _CACHED  # noqa: PLW0603
    _CACHED = None


__all__ = ["TimeoutConfig", "get_timeout_config", "reset_timeout_config"]
