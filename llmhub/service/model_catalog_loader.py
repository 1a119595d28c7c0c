"""Model catalog loader for seeding the SQLite catalog from YAML.

Reads ``llmhub/catalog/models.yaml`` (or an explicit path) and inserts the
entries through ``IModelCatalogRepo.seed_if_empty``, so a catalog that already
has rows is never touched. Enabled flags changed through the API therefore
survive restarts.

YAML Schema
-----------

.. code-block:: yaml

    models:
      - provider: openai
        name: gpt-4o-mini
        display_name: GPT-4o Mini
        description: Optimized model for quick responses
        max_tokens: 8192
        supports_streaming: true
        is_enabled: true
        api_key_required: false
        category: chat
        pricing: {input_tokens: 0.15, output_tokens: 0.60, currency: USD}

``provider`` and ``name`` are required; every other key has a default.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..base.logging import get_logger, log_event
from ..persistence.interfaces.repos import IUnitOfWork, ModelConfig, Pricing

_logger = get_logger("llmhub.service.catalog")


def default_catalog_path() -> Path:
    return Path(__file__).resolve().parent.parent / "catalog" / "models.yaml"


def _model_from_entry(entry: Dict[str, Any]) -> ModelConfig:
    pricing_raw = entry.get("pricing")
    pricing = None
    if isinstance(pricing_raw, dict):
        pricing = Pricing(
            input_tokens=float(pricing_raw.get("input_tokens", 0.0)),
            output_tokens=float(pricing_raw.get("output_tokens", 0.0)),
            currency=str(pricing_raw.get("currency", "USD")),
        )
    name = str(entry["name"])
    return ModelConfig(
        provider=str(entry["provider"]).lower().strip(),
        name=name,
        display_name=str(entry.get("display_name") or name),
        description=str(entry.get("description") or ""),
        max_tokens=int(entry.get("max_tokens", 4096)),
        supports_streaming=bool(entry.get("supports_streaming", True)),
        is_enabled=bool(entry.get("is_enabled", False)),
        api_key_required=bool(entry.get("api_key_required", True)),
        category=str(entry.get("category") or "chat"),
        pricing=pricing,
    )


def read_catalog(path: Optional[Path] = None) -> List[ModelConfig]:
    """Parse the catalog file into ``ModelConfig`` entries.

    Raises
    ------
    ValueError
        If the document has no ``models`` list or an entry lacks
        ``provider``/``name``.
    """
    catalog_path = Path(path) if path else default_catalog_path()
    data = yaml.safe_load(catalog_path.read_text(encoding="utf-8")) or {}
    entries = data.get("models") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise ValueError(f"catalog {catalog_path} has no 'models' list")
    models: List[ModelConfig] = []
    for entry in entries:
        if not isinstance(entry, dict) or "provider" not in entry or "name" not in entry:
            raise ValueError(f"catalog {catalog_path} has an entry without provider/name: {entry!r}")
        models.append(_model_from_entry(entry))
    return models


def load_model_catalog(uow: IUnitOfWork, path: Optional[Path] = None) -> int:
    """Seed the catalog when empty; return the number of rows inserted."""
    with uow:
        if uow.catalog.count() > 0:
            return 0
        inserted = uow.catalog.seed_if_empty(read_catalog(path))
    log_event(_logger, "catalog.seeded", inserted=inserted)
    return inserted


__all__ = ["default_catalog_path", "read_catalog", "load_model_catalog"]
