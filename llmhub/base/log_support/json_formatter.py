"""JSON lines formatter for the ``llmhub`` logger.

A message that is itself a JSON object (what ``log_event`` produces) is merged
into the top level of the line instead of being nested as a string. Extra
attributes passed through ``logger.log(..., extra=...)`` are kept as well.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

# Attributes every LogRecord carries; anything else on the record is an extra.
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


def _message_fields(text: str) -> Dict[str, Any]:
    try:
        decoded = json.loads(text)
    except ValueError:
        return {"msg": text}
    return decoded if isinstance(decoded, dict) else {"msg": text}


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        line: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
        }
        line.update(_message_fields(record.getMessage()))
        extras = {
            k: v
            for k, v in vars(record).items()
            if not k.startswith("_") and k not in _STANDARD_ATTRS and k not in line
        }
        line.update(extras)
        if record.exc_info:
            line["exc"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


__all__ = ["JsonFormatter", "ISO"]
