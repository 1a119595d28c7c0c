from .client import GoogleAdapter

__all__ = ["GoogleAdapter"]
