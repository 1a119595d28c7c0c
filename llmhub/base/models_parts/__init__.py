"""Single-class modules for the provider-neutral DTOs."""

from .message import Message, Role, STORED_ROLES
from .generation_params import GenerationParams
from .normalized_chat import NormalizedChat

__all__ = ["Message", "Role", "STORED_ROLES", "GenerationParams", "NormalizedChat"]
