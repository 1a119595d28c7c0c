"""Pytest configuration for the llmhub test suite.

Every test runs with provider credentials, base URL overrides and config file
pointers removed from the environment, and with ``LLMHUB_DB_PATH`` pointing
into the test's temporary directory. Nothing reaches a real provider: adapters
are constructed with an ``httpx.Client`` backed by ``httpx.MockTransport``.
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Iterator, List

import httpx
import pytest

from llmhub import config as llmhub_config
from llmhub.base import timeouts
from llmhub.config.env import ENV_ALIASES, ENV_MAP, PLATFORM_ENV_MAP, PLATFORM_OPENAI_BASE_URL_ENV
from llmhub.persistence.sqlite import get_uow
from llmhub.persistence.sqlite.unit_of_work import UnitOfWorkSqlite

_SCRUBBED = (
    set(ENV_MAP.values())
    | {n for names in ENV_ALIASES.values() for n in names}
    | set(PLATFORM_ENV_MAP.values())
    | {PLATFORM_OPENAI_BASE_URL_ENV, "LLMHUB_CONFIG_FILE", "LLMHUB_HTTP_TIMEOUT_SECONDS", "LLMHUB_LOG_LEVEL"}
    | {f"{p.upper()}_BASE_URL" for p in ENV_MAP}
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Strip credentials and overrides; point the store at a temp database."""
    for name in _SCRUBBED:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LLMHUB_DB_PATH", str(tmp_path / "llmhub-test.db"))
    monkeypatch.setattr(llmhub_config, "_DOTENV_LOADED", True)
    llmhub_config.reset_config_cache()
    timeouts.reset_timeout_config()
    yield
    llmhub_config.reset_config_cache()
    timeouts.reset_timeout_config()


@pytest.fixture()
def uow(tmp_path) -> Iterator[UnitOfWorkSqlite]:
    """Yield a Unit of Work over a fresh SQLite file."""
    u = get_uow(str(tmp_path / "store.db"))
    yield u
    u.close()


class RecordingTransport:
    """Callable handler for ``httpx.MockTransport`` that records requests.

    ``status`` and ``payload`` describe the canned response; ``payload`` may be
    a dict (sent as JSON) or a string (sent verbatim).
    """

    def __init__(self, status: int = 200, payload: Any = None) -> None:
        self.status = status
        self.payload = payload if payload is not None else {}
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.payload, str):
            return httpx.Response(self.status, text=self.payload)
        return httpx.Response(self.status, json=self.payload)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.last.content)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


@pytest.fixture()
def recorder() -> Callable[..., RecordingTransport]:
    """Factory fixture: ``recorder(status, payload)`` returns a transport."""
    return RecordingTransport


@pytest.fixture()
def ticking_clock() -> Callable[[], datetime]:
    """Clock that advances one second per call from a fixed UTC start."""
    state = {"now": datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)}

    def _now() -> datetime:
        state["now"] += timedelta(seconds=1)
        return state["now"]

    return _now
