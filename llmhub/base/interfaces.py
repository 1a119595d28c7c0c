"""
Provider-agnostic interfaces for the core layer.

Re-exports Protocols split into single-class modules under
``llmhub.base.interfaces_parts``.
"""

from __future__ import annotations

from .interfaces_parts import LLMAdapter

__all__ = ["LLMAdapter"]
