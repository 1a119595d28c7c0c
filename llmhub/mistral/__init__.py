from .client import MistralAdapter

__all__ = ["MistralAdapter"]
