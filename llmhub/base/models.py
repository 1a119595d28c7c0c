"""Provider-neutral DTOs re-exported from ``models_parts``."""

from .models_parts import GenerationParams, Message, NormalizedChat, Role, STORED_ROLES

__all__ = ["GenerationParams", "Message", "NormalizedChat", "Role", "STORED_ROLES"]
