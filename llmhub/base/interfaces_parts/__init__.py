"""Single-class Protocol modules for the core layer."""

from .llm_adapter import LLMAdapter

__all__ = ["LLMAdapter"]
