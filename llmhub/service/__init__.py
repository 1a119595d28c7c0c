"""HTTP service layer: chat orchestration, export, catalog seeding and the FastAPI app.

The FastAPI application lives in :mod:`llmhub.service.app` and is not imported
here, so the orchestrator can be used without the web stack loaded.
"""

from .chat_service import ChatOrchestrator, error_turn_content
from .export import EXPORT_FORMATS, ExportResult, export_conversation
from .model_catalog_loader import load_model_catalog, read_catalog

__all__ = [
    "ChatOrchestrator",
    "error_turn_content",
    "EXPORT_FORMATS",
    "ExportResult",
    "export_conversation",
    "load_model_catalog",
    "read_catalog",
]
