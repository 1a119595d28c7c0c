"""Tests for the uvicorn development server entry point."""

from __future__ import annotations

from llmhub.config.defaults import LLMHUB_SERVICE_DEFAULT_HOST, LLMHUB_SERVICE_DEFAULT_PORT
from llmhub.service import dev_server


def _capture_run(monkeypatch):
    calls = []
    monkeypatch.setattr(dev_server.uvicorn, "run", lambda app, **kw: calls.append((app, kw)))
    return calls


def test_main_uses_defaults(monkeypatch):
    for name in ("LLMHUB_SERVICE_HOST", "LLMHUB_SERVICE_PORT", "LLMHUB_SERVICE_RELOAD"):
        monkeypatch.delenv(name, raising=False)
    calls = _capture_run(monkeypatch)
    dev_server.main()
    app, kw = calls[0]
    assert app == "llmhub.service.app:app"  # nosec B101
    assert kw == {  # nosec B101
        "host": LLMHUB_SERVICE_DEFAULT_HOST,
        "port": LLMHUB_SERVICE_DEFAULT_PORT,
        "reload": True,
    }


def test_main_reads_environment(monkeypatch):
    monkeypatch.setenv("LLMHUB_SERVICE_HOST", "0.0.0.0")  # nosec B104 - test value
    monkeypatch.setenv("LLMHUB_SERVICE_PORT", "9000")
    monkeypatch.setenv("LLMHUB_SERVICE_RELOAD", "false")
    calls = _capture_run(monkeypatch)
    dev_server.main()
    assert calls[0][1] == {"host": "0.0.0.0", "port": 9000, "reload": False}  # nosec B101 B104


def test_bad_port_falls_back():
    assert dev_server._parse_port("abc", 8091) == 8091  # nosec B101
    assert dev_server._parse_port(None, 1) == 1  # nosec B101
