from .client import CohereAdapter

__all__ = ["CohereAdapter"]
