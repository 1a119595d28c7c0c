"""Conversation export formatting.

Renders an already-loaded conversation and its messages as JSON, Markdown or
plain text. Pure formatting: no store access, no I/O.

Formats
-------
- ``json``: ``{"conversation": ..., "messages": [...], "exported_at": ...}``
  with ISO timestamps.
- ``markdown``: ``# Title``, an optional metadata block, then one
  ``**You**:`` / ``**Assistant**:`` paragraph per message.
- ``text``: title underlined with ``=``, optional metadata, then
  ``You:`` / ``Assistant:`` paragraphs.
"""

from __future__ import annotations

import json
import re
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

from ..persistence.interfaces.repos import ChatMessage, Conversation

EXPORT_FORMATS = ("json", "markdown", "text")

_MEDIA_TYPES = {"json": "application/json", "markdown": "text/markdown", "text": "text/plain"}
_EXTENSIONS = {"json": "json", "markdown": "md", "text": "txt"}


@dataclass(frozen=True)
class ExportResult:
    content: str
    media_type: str
    extension: str
    filename: str


def _jsonable(obj: Dict[str, Any]) -> Dict[str, Any]:
    return {k: (v.isoformat() if isinstance(v, datetime) else v) for k, v in obj.items()}


def _speaker(role: str, markdown: bool) -> str:
    label = "You" if role == "user" else "Assistant"
    return f"**{label}**" if markdown else label


def _fmt_dt(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def _fmt_time(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).strftime("%H:%M:%S")


def safe_filename(title: str, extension: str) -> str:
    """Replace anything but ASCII letters and digits with ``_``."""
    stem = re.sub(r"[^a-zA-Z0-9]", "_", title) or "conversation"
    return f"{stem}.{extension}"


def export_conversation(
    conversation: Conversation,
    messages: Sequence[ChatMessage],
    fmt: str = "markdown",
    *,
    include_metadata: bool = True,
    exported_at: Optional[datetime] = None,
) -> ExportResult:
    """Render ``conversation`` in ``fmt``.

    Raises
    ------
    ValueError
        For a format outside :data:`EXPORT_FORMATS`.
    """
    fmt = (fmt or "").lower().strip()
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"unsupported export format: {fmt!r}")
    exported_at = exported_at or datetime.now(timezone.utc)

    if fmt == "json":
        content = json.dumps(
            {
                "conversation": _jsonable(asdict(conversation)),
                "messages": [_jsonable(asdict(m)) for m in messages],
                "exported_at": exported_at.isoformat(),
            },
            indent=2,
            ensure_ascii=False,
        )
    else:
        markdown = fmt == "markdown"
        lines = [f"# {conversation.title}" if markdown else f"{conversation.title}\n{'=' * len(conversation.title)}", ""]
        if include_metadata:
            bold = "**" if markdown else ""
            lines.append(f"{bold}Model:{bold} {conversation.provider} - {conversation.model}")
            lines.append(f"{bold}Created:{bold} {_fmt_dt(conversation.created_at)}")
            lines.append(f"{bold}Exported:{bold} {_fmt_dt(exported_at)}")
            lines.append("")
            if markdown:
                lines.extend(["---", ""])
        for m in messages:
            when = ""
            if include_metadata:
                when = f" _({_fmt_time(m.timestamp)})_" if markdown else f" ({_fmt_time(m.timestamp)})"
            lines.append(f"{_speaker(m.role, markdown)}{when}:")
            lines.append(m.content)
            lines.append("")
        content = "\n".join(lines)

    return ExportResult(
        content=content,
        media_type=_MEDIA_TYPES[fmt],
        extension=_EXTENSIONS[fmt],
        filename=safe_filename(conversation.title, _EXTENSIONS[fmt]),
    )


__all__ = ["EXPORT_FORMATS", "ExportResult", "export_conversation", "safe_filename"]
