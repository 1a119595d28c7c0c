"""Structured logging utilities for llmhub.

All loggers hang off a single ``llmhub`` base logger that writes one JSON
object per line to stderr. The level comes from ``LLMHUB_LOG_LEVEL``.

``normalized_log_event`` wraps ``log_event`` and guarantees the canonical keys
``structured``, ``phase``, ``attempt``, ``emitted`` and ``tokens`` on every
event (``error_code`` only when set), so send and adapter events can be
filtered uniformly regardless of which provider produced them.

Credentials must never be passed as event fields.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Mapping, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "llmhub"
LOG_LEVEL_ENV = "LLMHUB_LOG_LEVEL"

_READY_FLAG = "_llmhub_ready"
_STDERR_FLAG = "_llmhub_stderr"
_FILE_FLAG = "_llmhub_file"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Map a level name to its numeric value; unknown or empty gives ``default``."""
    if not value:
        return default
    return _LEVELS.get(value.strip().upper(), default)


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _stderr_handler(json_mode: bool, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_formatter(json_mode))
    setattr(handler, _STDERR_FLAG, True)
    return handler


def _stream_is_dead(handler: logging.Handler) -> bool:
    stream = getattr(handler, "stream", None)
    return stream is None or bool(getattr(stream, "closed", False))


def _base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Return the shared ``llmhub`` logger, setting it up on first use.

    On later calls the level is re-read from the environment and a stderr
    handler whose stream has been closed (pytest capture does this between
    tests) is replaced.
    """
    base = logging.getLogger(BASE_LOGGER_NAME)
    wanted = _parse_level(os.getenv(LOG_LEVEL_ENV), default=level)

    if not getattr(base, _READY_FLAG, False):
        base.handlers[:] = [_stderr_handler(json_mode, wanted)]
        base.propagate = False
        base.setLevel(wanted)
        setattr(base, _READY_FLAG, True)
        return base

    base.setLevel(wanted)
    for handler in [h for h in base.handlers if getattr(h, _STDERR_FLAG, False)]:
        if _stream_is_dead(handler):
            base.removeHandler(handler)
            base.addHandler(_stderr_handler(json_mode, wanted))
        else:
            handler.setLevel(wanted)
    return base


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return a logger under the ``llmhub`` hierarchy.

    Child loggers carry no handlers of their own and propagate to the base
    logger, so configuration changes apply everywhere at once.
    """
    base = _base_logger(json_mode, level)
    if name == BASE_LOGGER_NAME:
        return base
    child = logging.getLogger(name)
    child.setLevel(logging.NOTSET)
    child.propagate = True
    return child


def _drop_file_handlers(logger: logging.Logger, keep: Optional[str]) -> Optional[logging.Handler]:
    """Detach file handlers added by :func:`configure_logger` except ``keep``.

    Returns the kept handler, if one matched.
    """
    kept = None
    for handler in [h for h in logger.handlers if getattr(h, _FILE_FLAG, False)]:
        if keep is not None and getattr(handler, "baseFilename", None) == keep:
            kept = handler
            continue
        logger.removeHandler(handler)
        with contextlib.suppress(OSError):
            handler.close()
    return kept


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared logger at runtime.

    Parameters
    ----------
    level:
        Numeric level or level name. ``None`` keeps the current level.
    file_path:
        Attach a rotating file handler writing here (10 MB x 5). ``None``
        removes a file handler attached by an earlier call.
    json_mode:
        JSON lines (default) or plain text for the file handler.
    """
    logger = get_logger(BASE_LOGGER_NAME, json_mode=json_mode)
    if isinstance(level, str):
        logger.setLevel(_parse_level(level, default=logger.level))
    elif level is not None:
        logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(logger.level)

    target = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    existing = _drop_file_handlers(logger, target)
    if existing is not None:
        existing.setFormatter(_formatter(json_mode))
        return logger
    if target is None:
        return logger

    os.makedirs(os.path.dirname(target), exist_ok=True)
    file_handler = RotatingFileHandler(target, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    file_handler.setLevel(logger.level)
    file_handler.setFormatter(_formatter(json_mode))
    setattr(file_handler, _FILE_FLAG, True)
    logger.addHandler(file_handler)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit one structured event as a JSON message.

    Fields whose value is ``None`` are dropped unless ``keep_none`` is set.
    """
    payload: Dict[str, Any] = {"event": event}
    if ctx is not None:
        payload.update(ctx.to_dict())
    payload.update(fields if keep_none else {k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = (
    "structured",
    "phase",
    "attempt",
    "error_code",
    "emitted",
    "tokens",
)


def _tokens_field(tokens: Any) -> Any:
    if tokens is None:
        return None
    if isinstance(tokens, Mapping):
        return dict(tokens)
    return {"value": repr(tokens)}


def normalized_log_event(  # noqa: PLR0913
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | None = None,
    tokens: Any = None,
    structured: bool = True,
    **extra_fields: Any,
) -> None:
    """Emit an event carrying every canonical key.

    ``error_code`` appears only when set, and then the event is logged at
    WARNING. Extra fields never replace a canonical key that has a value.
    """
    fields: Dict[str, Any] = {
        "structured": structured,
        "phase": phase,
        "attempt": attempt,
        "emitted": emitted,
        "tokens": _tokens_field(tokens),
    }
    if error_code is not None:
        fields["error_code"] = error_code
    for key, value in extra_fields.items():
        if value is not None and fields.get(key) is None:
            fields[key] = value
    level = logging.INFO if error_code is None else logging.WARNING
    log_event(logger, event, ctx, level=level, keep_none=True, **fields)


__all__ = [
    "BASE_LOGGER_NAME",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
