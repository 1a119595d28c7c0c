"""Pooled ``httpx.Client`` instances for the provider adapters.

One client is kept per (base URL, purpose) pair so consecutive turns against
the same provider reuse connections. The timeout is taken from
:func:`get_timeout_config` when a client is first built; by default there is
none. Every pooled client is closed at interpreter exit.
"""

from __future__ import annotations

import atexit
import contextlib
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_PoolKey = Tuple[Optional[str], str]

_POOL: Dict[_PoolKey, httpx.Client] = {}
_POOL_LOCK = threading.RLock()


def _build_client(base_url: Optional[str]) -> httpx.Client:
    kwargs = {"timeout": httpx.Timeout(get_timeout_config().http_timeout_seconds)}
    if base_url:
        kwargs["base_url"] = base_url
    return httpx.Client(**kwargs)


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    """Return the pooled client for ``base_url`` and ``purpose``.

    ``purpose`` separates pools that share a host, e.g. ``"openai.chat"``.
    Creation is serialized so concurrent callers end up with the same client.
    """
    key: _PoolKey = (base_url, purpose)
    with _POOL_LOCK:
        if key not in _POOL:
            _POOL[key] = _build_client(base_url)
        return _POOL[key]


def close_all_clients() -> None:
    """Close every pooled client and empty the pool."""
    with _POOL_LOCK:
        clients = list(_POOL.values())
        _POOL.clear()
    for client in clients:
        with contextlib.suppress(RuntimeError):
            client.close()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
