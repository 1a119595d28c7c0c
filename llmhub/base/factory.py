"""Provider registry.

Purpose
-------
Map canonical provider names to adapter factories so the orchestrator can
dispatch without knowing any provider. Adding a provider means one more
``register`` call; the orchestrator never changes.

Built-in adapters are registered by import path and imported lazily with
``importlib`` on first use, keeping module import free of side effects.
Instances are cached per registry, so every send through one registry reuses
the same adapter (and its pooled HTTP client).

Failure semantics
-----------------
``get`` raises :class:`UnsupportedProviderError` for unknown names. Import or
construction failures of a registered adapter are programming errors and
propagate unchanged.
"""

from __future__ import annotations

import threading
from importlib import import_module
from typing import Callable, Dict, Optional, Tuple

from .errors import UnsupportedProviderError
from .interfaces import LLMAdapter

AdapterFactory = Callable[[], LLMAdapter]

# Canonical provider name -> (module path, class name)
BUILTIN_ADAPTERS: Dict[str, Tuple[str, str]] = {
    "openai": ("llmhub.openai.client", "OpenAIAdapter"),
    "anthropic": ("llmhub.anthropic.client", "AnthropicAdapter"),
    "google": ("llmhub.google.client", "GoogleAdapter"),
    "deepseek": ("llmhub.deepseek.client", "DeepSeekAdapter"),
    "mistral": ("llmhub.mistral.client", "MistralAdapter"),
    "cohere": ("llmhub.cohere.client", "CohereAdapter"),
}


def _lazy(module_path: str, class_name: str) -> AdapterFactory:
    def _factory() -> LLMAdapter:
        return getattr(import_module(module_path), class_name)()

    return _factory


class ProviderRegistry:
    """Registry of adapter factories keyed by canonical provider name."""

    def __init__(self) -> None:
        self._factories: Dict[str, AdapterFactory] = {}
        self._instances: Dict[str, LLMAdapter] = {}
        self._lock = threading.RLock()

    @staticmethod
    def _key(provider: Optional[str]) -> str:
        return (provider or "").lower().strip()

    def register(self, provider: str, factory: AdapterFactory) -> None:
        """Register (or replace) the factory for ``provider``."""
        name = self._key(provider)
        if not name:
            raise ValueError("provider name must be non-empty")
        with self._lock:
            self._factories[name] = factory
            self._instances.pop(name, None)

    def register_instance(self, provider: str, adapter: LLMAdapter) -> None:
        """Register an already constructed adapter."""
        self.register(provider, lambda: adapter)

    def get(self, provider: str, *, model: Optional[str] = None) -> LLMAdapter:
        """Return the adapter for ``provider``.

        Raises
        ------
        UnsupportedProviderError
            If no factory is registered under the name.
        """
        name = self._key(provider)
        adapter = self._instances.get(name)
        if adapter is not None:
            return adapter
        with self._lock:
            factory = self._factories.get(name)
            if factory is None:
                raise UnsupportedProviderError.for_provider(provider, model=model)
            adapter = self._instances.get(name)
            if adapter is None:
                adapter = factory()
                self._instances[name] = adapter
            return adapter

    def supported(self) -> Tuple[str, ...]:
        """Return registered provider names in registration order."""
        return tuple(self._factories.keys())

    def __contains__(self, provider: object) -> bool:
        return isinstance(provider, str) and self._key(provider) in self._factories


def default_registry() -> ProviderRegistry:
    """Return a registry populated with the six built-in adapters."""
    registry = ProviderRegistry()
    for name, (module_path, class_name) in BUILTIN_ADAPTERS.items():
        registry.register(name, _lazy(module_path, class_name))
    return registry


__all__ = ["ProviderRegistry", "AdapterFactory", "BUILTIN_ADAPTERS", "default_registry"]
