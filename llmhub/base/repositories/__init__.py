"""
Repositories package for the core layer.

Exports:
- KeysRepository / KeyResolution: per-user API key resolution
- GenerationSettingsResolver: per-model sampling parameters with defaults
"""

from .keys import KeyResolution, KeysRepository
from .generation import GenerationSettingsResolver

__all__ = [
    "KeysRepository",
    "KeyResolution",
    "GenerationSettingsResolver",
]
